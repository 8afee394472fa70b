"""Short fan essays: a stored collection and a duplicate check against an online index."""

from __future__ import annotations

import hashlib
import logging
import math
import os
import random
import threading
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

import requests

logger = logging.getLogger(__name__)

DATA_PATH = "data/Diana"
PB_FILE = DATA_PATH + "/text.pb"
CHECK_URL = "https://asoulcnki.asia/v1/api/check"
API_ERROR = "api返回错误"
NOT_FOUND = "枝网没搜到，查重率为0%，我的评价是：一眼真"
REQUEST_TIMEOUT = 30
_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
_EXCERPT_BYTES = 102


def _varint(value: int) -> bytes:
    out = bytearray()
    while True:
        low = value & 0x7F
        value >>= 7
        if value:
            out.append(low | 0x80)
        else:
            out.append(low)
            return bytes(out)


def _read_varint(data: bytes, pos: int) -> tuple[int, int]:
    result = shift = 0
    while True:
        if pos >= len(data):
            raise ValueError("truncated varint")
        byte = data[pos]
        pos += 1
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return result, pos
        shift += 7


def _marshal(texts: Iterable[str]) -> bytes:
    """Encode as a protobuf message with the texts in repeated field 1."""
    out = bytearray()
    for text in texts:
        raw = text.encode("utf-8")
        out += b"\x0a" + _varint(len(raw)) + raw
    return bytes(out)


def _unmarshal(data: bytes) -> list[str]:
    texts = []
    pos = 0
    while pos < len(data):
        key, pos = _read_varint(data, pos)
        field, wire = key >> 3, key & 7
        if wire == 0:
            _, pos = _read_varint(data, pos)
        elif wire == 1:
            pos += 8
        elif wire == 2:
            length, pos = _read_varint(data, pos)
            chunk = data[pos:pos + length]
            if len(chunk) < length:
                raise ValueError("truncated field")
            pos += length
            if field == 1:
                texts.append(chunk.decode("utf-8"))
        elif wire == 5:
            pos += 4
        else:
            raise ValueError(f"unsupported wire type {wire}")
        if pos > len(data):
            raise ValueError("truncated field")
    return texts


def _digest(text: str) -> bytes:
    return hashlib.md5(text.encode("utf-8")).digest()


class Composition:
    """The stored essays. The first one is the outburst, the rest are regular."""

    def __init__(
        self,
        path: str | os.PathLike[str] = PB_FILE,
        url: str | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.path = Path(path)
        self.url = url
        self.timeout = timeout
        self.texts: list[str] = []
        self._digests: set[bytes] = set()
        self._lock = threading.Lock()

    def _replace(self, texts: list[str]) -> None:
        self.texts = texts
        self._digests = {_digest(text) for text in texts}

    def load(self) -> int:
        """Read the stored essays, downloading them first if there is no file."""
        if self.path.exists():
            data = self.path.read_bytes()
        else:
            data = b""
            if self.url:
                response = requests.get(self.url, timeout=self.timeout)
                response.raise_for_status()
                data = response.content
                logger.info("[Diana] downloaded %d bytes of essays", len(data))
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_bytes(data)
        if data:
            self._replace(_unmarshal(data))
        logger.info("[Diana] loaded %d essays", len(self.texts))
        return len(self.texts)

    def add(self, text: str) -> bool:
        """Store a new essay; return False for an empty or already known one."""
        digest = _digest(text)
        with self._lock:
            if not text or digest in self._digests:
                return False
            self.texts.append(text)
            self._digests.add(digest)
            self._save()
        return True

    def _save(self) -> None:
        if not self.path.parent.is_dir():
            raise FileNotFoundError(f"datapath is not exist: {self.path.parent}")
        self.path.write_bytes(_marshal(self.texts))

    def outburst(self) -> str:
        if not self.texts:
            raise IndexError("no essays loaded")
        return self.texts[0]

    def random(self, rng: random.Random | None = None) -> str:
        """A random essay other than the outburst."""
        if len(self.texts) < 2:
            raise IndexError("no regular essays loaded")
        rng = rng or random.Random()
        return self.texts[rng.randrange(1, len(self.texts))]


def convert(txt_path: str | os.PathLike[str], out_path: str | os.PathLike[str]) -> int:
    """Store every line of a text file as an essay; return the number of lines."""
    with open(txt_path, encoding="utf-8") as src:
        lines = [line.rstrip("\r\n") for line in src]
    Path(out_path).write_bytes(_marshal(lines))
    return len(lines)


def full_match(texts: Iterable[str], *args: str) -> bool:
    """Whether a text segment, with spaces and line breaks removed, equals one of args."""
    for text in texts:
        squeezed = text.replace(" ", "").replace("\r", "").replace("\n", "")
        if squeezed in args:
            return True
    return False


def query_duplicates(text: str) -> dict:
    """Ask the online index for essays similar to the text."""
    response = requests.post(CHECK_URL, json={"text": text}, timeout=REQUEST_TIMEOUT)
    response.raise_for_status()
    return response.json()


def _number(value: object) -> object:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def format_report(result: dict | None, now: datetime) -> str:
    """The reply text for a duplicate check result."""
    if not result or result.get("code") != 0:
        return API_ERROR
    data = result.get("data") or {}
    related = data.get("related") or []
    if not related:
        return NOT_FOUND
    first = related[0]
    detail = first[1]
    excerpt = detail["content"].encode("utf-8")[:_EXCERPT_BYTES].decode("utf-8", errors="ignore")
    posted = datetime.fromtimestamp(int(detail["ctime"]))
    lines = [
        "枝网文本复制检测报告(简洁)",
        "查重时间: " + now.strftime(_TIME_FORMAT),
        f"总文字复制比: {math.floor(data.get('rate', 0) * 100)}%",
        "相似小作文:",
        excerpt + ".....",
        f"获赞数{_number(detail.get('like_num'))}",
        str(first[2]),
        f"作者: {detail.get('m_name')}",
        "发表时间: " + posted.strftime(_TIME_FORMAT),
        "查重结果仅作参考，请注意辨别是否为原创",
        "数据来源: https://asoulcnki.asia/",
    ]
    return "\n".join(lines)