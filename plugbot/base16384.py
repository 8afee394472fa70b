"""Base16384 codec: every 7 bytes become 4 characters from U+4E00..U+8DFF.

When the input length is not a multiple of 7, the last block is padded with
zero bits and a marker character U+3D01..U+3D06 records how many bytes the
last block holds.
"""

from __future__ import annotations

from collections.abc import Iterator

_BASE = 0x4E00
_MARKER = 0x3D00
_MASK = 0x3FFF
_BLOCK = 7
_SHIFTS = (42, 28, 14, 0)
# number of characters needed for a trailing block of n bytes
_TAIL_CHARS = {1: 1, 2: 2, 3: 2, 4: 3, 5: 3, 6: 4}


def _blocks(data: bytes) -> Iterator[bytes]:
    for start in range(0, len(data), _BLOCK):
        yield data[start:start + _BLOCK]


def encode(data: bytes) -> str:
    """Encode bytes to a base16384 string."""
    data = bytes(data)
    out: list[str] = []
    for block in _blocks(data):
        value = int.from_bytes(block.ljust(_BLOCK, b"\0"), "big")
        count = 4 if len(block) == _BLOCK else _TAIL_CHARS[len(block)]
        out.extend(chr(_BASE + ((value >> shift) & _MASK)) for shift in _SHIFTS[:count])
    remainder = len(data) % _BLOCK
    if remainder:
        out.append(chr(_MARKER + remainder))
    return "".join(out)


def _values(text: str) -> list[int]:
    values = []
    for char in text:
        value = ord(char) - _BASE
        if not 0 <= value <= _MASK:
            raise ValueError(f"character {char!r} is not base16384")
        values.append(value)
    return values


def _decode_group(values: list[int], length: int) -> bytes:
    padded = values + [0] * (4 - len(values))
    value = sum(v << shift for v, shift in zip(padded, _SHIFTS))
    return value.to_bytes(_BLOCK, "big")[:length]


def decode(text: str) -> bytes:
    """Decode a base16384 string back to bytes.

    Raises ValueError on characters outside the alphabet or a truncated input.
    """
    offset = 0
    if text and ord(text[-1]) >> 8 == _MARKER >> 8:
        offset = ord(text[-1]) & 0xFF
        if offset not in _TAIL_CHARS:
            raise ValueError(f"invalid length marker {text[-1]!r}")
        text = text[:-1]
    values = _values(text)
    tail: list[int] = []
    if offset:
        tail_len = _TAIL_CHARS[offset]
        if len(values) < tail_len:
            raise ValueError("truncated base16384 input")
        values, tail = values[:-tail_len], values[-tail_len:]
    if len(values) % 4:
        raise ValueError("truncated base16384 input")
    out = bytearray()
    for start in range(0, len(values), 4):
        out += _decode_group(values[start:start + 4], _BLOCK)
    if offset:
        out += _decode_group(tail, offset)
    return bytes(out)


def encode_string(s: str) -> str:
    """Encode the UTF-8 bytes of a string."""
    return encode(s.encode("utf-8"))


def decode_string(text: str) -> str:
    """Decode a base16384 string whose payload is UTF-8 text."""
    return decode(text).decode("utf-8", errors="replace")