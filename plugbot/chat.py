"""Small talk: answering the bot's name, pokes, and a pretend group air conditioner."""

from __future__ import annotations

import random
import threading
import time
from collections.abc import Callable, Hashable

DEFAULT_TEMPERATURE = 26


class RateLimiter:
    """Per-key token bucket holding `burst` tokens refilled over `interval` seconds."""

    def __init__(
        self,
        interval: float,
        burst: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if interval <= 0 or burst <= 0:
            raise ValueError("interval and burst must be positive")
        self._interval = interval
        self._burst = burst
        self._clock = clock
        self._buckets: dict[Hashable, tuple[float, float]] = {}
        self._lock = threading.Lock()

    def acquire(self, key: Hashable, n: int = 1) -> bool:
        """Take n tokens for key if available; return whether they were taken."""
        now = self._clock()
        with self._lock:
            bucket = self._buckets.get(key)
            if bucket is None:
                tokens = float(self._burst)
            else:
                tokens, last = bucket
                tokens = min(self._burst, tokens + (now - last) * self._burst / self._interval)
            granted = tokens >= n
            if granted:
                tokens -= n
            self._buckets[key] = (tokens, now)
            return granted


def call_reply(nickname: str, rng: random.Random | None = None) -> str:
    """What the bot says when someone calls its name."""
    rng = rng or random.Random()
    return rng.choice(
        [
            nickname + "在此，有何贵干~",
            "(っ●ω●)っ在~",
            "这里是" + nickname + "(っ●ω●)っ",
            nickname + "不在呢~",
        ]
    )


def poke_reply(limiter: RateLimiter, user_id: int, nickname: str) -> str | None:
    """The answer to a poke, or None when the user pokes too often."""
    if limiter.acquire(user_id, 3):
        return "请不要戳" + nickname + " >_<"
    if limiter.acquire(user_id, 1):
        return "喂(#`O′) 戳" + nickname + "干嘛！"
    return None


class AirConditioner:
    """A per-group switch and temperature."""

    def __init__(self) -> None:
        self._temperature: dict[int, int] = {}
        self._on: dict[int, bool] = {}

    def turn_on(self, group_id: int) -> str:
        self._on[group_id] = True
        return "❄️哔~"

    def turn_off(self, group_id: int) -> str:
        self._on[group_id] = False
        self._temperature.pop(group_id, None)
        return "💤哔~"

    def set_temperature(self, group_id: int, temperature: int | str) -> str:
        """Set the temperature if the unit is on; report the state either way."""
        self._temperature.setdefault(group_id, DEFAULT_TEMPERATURE)
        if self._on.get(group_id, False):
            try:
                self._temperature[group_id] = int(temperature)
            except ValueError:
                self._temperature[group_id] = 0
        return self._report(group_id)

    def status(self, group_id: int) -> str:
        self._temperature.setdefault(group_id, DEFAULT_TEMPERATURE)
        return self._report(group_id)

    def _report(self, group_id: int) -> str:
        head = "❄️风速中" if self._on.get(group_id, False) else "💤"
        return f"{head}\n群温度 {self._temperature[group_id]}℃"