"""Load of the machine the bot runs on."""

from __future__ import annotations

import math

import psutil


def _round(value: float) -> float:
    """Round half away from zero."""
    return float(math.copysign(math.floor(abs(value) + 0.5), value))


def _show(value: float) -> str:
    return f"{value:g}"


def cpu_percent() -> float:
    """CPU use over one second, in whole percent."""
    return _round(psutil.cpu_percent(interval=1.0, percpu=False))


def mem_percent() -> float:
    """Share of memory in use, in whole percent."""
    return _round(psutil.virtual_memory().percent)


def disk_percent() -> float:
    """Share of the first partition in use, in whole percent."""
    partitions = psutil.disk_partitions(all=True)
    if not partitions:
        raise RuntimeError("no disk partitions")
    return _round(psutil.disk_usage(partitions[0].mountpoint).percent)


def status_report() -> str:
    """The three-line status reply."""
    return (
        f"* CPU占用率: {_show(cpu_percent())}%\n"
        f"* RAM占用率: {_show(mem_percent())}%\n"
        f"* 硬盘活动率: {_show(disk_percent())}%"
    )