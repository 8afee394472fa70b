"""Random pictures with a rating comment, and recall of the last direct picture."""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote_plus

LOLIPXY = "https://sayuri.fumiama.top/dice?class=0&loli=true&r18=true"
APIHEAD = "https://sayuri.fumiama.top/img?path="
DEFAULT_API = "&loli=true&r18=true"
INVALID_URL = "URL非法!"
HINT_PREFIX = "\n给你点提示哦："
_HINT_BYTES = 5 * 3
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


@dataclass(frozen=True)
class Segment:
    """One part of a message: text, image URL, or a quote of the asking message."""

    kind: str
    data: str = ""


@dataclass(frozen=True)
class Message:
    """A message to send; private ones go to the asking user alone."""

    segments: tuple[Segment, ...]
    private: bool = False


class AcgImage:
    """The picture source and the last direct picture sent in each group."""

    def __init__(self, datapath: str | Path | None = None) -> None:
        self.datapath = Path(datapath) if datapath is not None else Path.cwd() / "data" / "acgimage"
        self.cache_uri = "file:///" + str(self.datapath) + "/cache"
        self.api = DEFAULT_API
        self._messages: dict[int, int] = {}
        self._lock = threading.Lock()

    def set_api(self, url: str) -> None:
        if not url.startswith("http"):
            raise ValueError(INVALID_URL)
        self.api = url

    def direct_url(self) -> str | None:
        """URL for an unchecked random picture, or None without a source."""
        if not self.api:
            return None
        return LOLIPXY if self.api.startswith("&") else self.api

    def remember(self, group_id: int, message_id: int) -> None:
        with self._lock:
            self._messages[group_id] = message_id

    def recall(self, group_id: int) -> int | None:
        """The id of the last direct picture of the group, forgotten once returned."""
        with self._lock:
            return self._messages.pop(group_id, None)


def hint_url(dhash: str) -> str | None:
    """Picture URL for a hint hash of exactly 15 bytes, else None."""
    if len(dhash.encode("utf-8")) != _HINT_BYTES:
        return None
    return APIHEAD + dhash


def classify_reply(
    class_: int,
    comment: str,
    dhash: str,
    noimg: bool,
    last_visit: int,
    cache_uri: str,
) -> list[Message]:
    """The messages answering a rated picture."""
    image = Segment("image", cache_uri + str(last_visit))
    if class_ > 5:
        if dhash and not noimg:
            if _BAD_ESCAPE.search(dhash):
                return []
            hint = unquote_plus(dhash)
            return [
                Message((Segment("text", comment + HINT_PREFIX + hint),)),
                Message((image,), private=True),
            ]
        return [Message((Segment("text", comment),))]
    if not noimg:
        return [Message((image, Segment("text", comment)))]
    return [Message((Segment("reply"), Segment("text", comment)))]