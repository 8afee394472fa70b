"""Detection of services that several bots in one group both answer.

One bot posts a probe carrying a time token; every bot that sees a fresh
probe replies with the list of services it has enabled, and the prober
disables those of its own services that appear in the list.
"""

from __future__ import annotations

import re
import time

from plugbot import base16384
from plugbot.control import ControlRegistry

PROBE_PREFIX = "●cd"
REPORT_PREFIX = "●cd●"
TOKEN_LIFETIME = 10

_SEPARATOR = b"\xfe\xff"
_REPORT_RE = re.compile("^●cd●([\u4e00-\u8e00]*[\u3d01-\u3d06]?)")


def _now(now: int | None) -> int:
    return int(time.time()) if now is None else int(now)


def gen_token(now: int | None = None) -> str:
    """Encode the low 7 bytes of the unix time as a 4-character token."""
    stamp = _now(now).to_bytes(8, "big", signed=False)
    return base16384.encode(stamp[1:])


def is_valid_token(token: str, now: int | None = None) -> bool:
    """Whether the token was made less than TOKEN_LIFETIME seconds ago."""
    try:
        raw = base16384.decode(token)
    except ValueError:
        return False
    if len(raw) != 7:
        return False
    stamp = int.from_bytes(b"\0" + raw, "big")
    return _now(now) - stamp < TOKEN_LIFETIME


def enabled_report(registry: ControlRegistry, group_id: int) -> str | None:
    """The reply listing services enabled in the group, or None if there are none."""
    names = [name for name, control in registry.items() if control.is_enabled_in(group_id)]
    if not names:
        return None
    payload = _SEPARATOR.join(name.encode("utf-8") for name in names)
    return REPORT_PREFIX + base16384.encode(payload)


def apply_report(registry: ControlRegistry, report: str, group_id: int) -> list[str]:
    """Disable the group's enabled services named in a report; return their names."""
    match = _REPORT_RE.match(report)
    if match is None:
        raise ValueError("not a conflict report")
    disabled = []
    for raw in base16384.decode(match.group(1)).split(_SEPARATOR):
        name = raw.decode("utf-8", errors="replace")
        control = registry.lookup(name)
        if control is not None and control.is_enabled_in(group_id):
            control.disable(group_id)
            disabled.append(name)
    return disabled