import random

import pytest

from plugbot import chat


class Clock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_limiter_consumes_and_refuses():
    clock = Clock()
    limiter = chat.RateLimiter(300, 8, clock=clock)
    assert limiter.acquire(1, 3) is True
    assert limiter.acquire(1, 3) is True
    assert limiter.acquire(1, 3) is False
    assert limiter.acquire(1, 1) is True


def test_limiter_keys_are_independent():
    limiter = chat.RateLimiter(300, 8, clock=Clock())
    assert limiter.acquire("a", 8) is True
    assert limiter.acquire("a", 1) is False
    assert limiter.acquire("b", 8) is True


def test_limiter_refills_over_interval():
    clock = Clock()
    limiter = chat.RateLimiter(300, 8, clock=clock)
    assert limiter.acquire(1, 8) is True
    assert limiter.acquire(1, 1) is False
    clock.now += 300
    assert limiter.acquire(1, 8) is True


def test_limiter_rejects_bad_settings():
    with pytest.raises(ValueError):
        chat.RateLimiter(0, 8)


def test_poke_sequence():
    limiter = chat.RateLimiter(300, 8, clock=Clock())
    replies = [chat.poke_reply(limiter, 7, "Bot") for _ in range(5)]
    assert replies[0] == replies[1] == "请不要戳Bot >_<"
    assert replies[2] == replies[3] == "喂(#`O′) 戳Bot干嘛！"
    assert replies[4] is None


def test_call_reply_mentions_name_or_is_generic():
    for seed in range(10):
        reply = chat.call_reply("Bot", random.Random(seed))
        assert "Bot" in reply or reply == "(っ●ω●)っ在~"


def test_air_conditioner_default_off():
    ac = chat.AirConditioner()
    assert ac.status(1) == "💤\n群温度 26℃"


def test_air_conditioner_off_ignores_temperature():
    ac = chat.AirConditioner()
    assert ac.set_temperature(1, 18) == ac.status(1)
    assert ac.status(1).startswith("💤")


def test_air_conditioner_on_sets_temperature():
    ac = chat.AirConditioner()
    assert ac.turn_on(1) == "❄️哔~"
    reply = ac.set_temperature(1, 20)
    assert reply.startswith("❄️风速中")
    assert "20℃" in reply
    assert ac.status(1) == reply


def test_air_conditioner_off_resets_temperature():
    ac = chat.AirConditioner()
    ac.turn_on(1)
    ac.set_temperature(1, 20)
    assert ac.turn_off(1) == "💤哔~"
    assert ac.status(1).endswith(f"{chat.DEFAULT_TEMPERATURE}℃")