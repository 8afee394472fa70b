"""Help for the indecisive: pick one of options separated by "还是"."""

from __future__ import annotations

import random

SEPARATOR = "还是"


def choose(args: str, nickname: str, rng: random.Random | None = None) -> str:
    """List the options and announce a randomly chosen one."""
    rng = rng or random.Random()
    options = args.split(SEPARATOR)
    numbered = "\n".join(f"{i}, {option}" for i, option in enumerate(options, start=1))
    result = rng.choice(options)
    return f"> {nickname}\n你的选项有:\n{numbered}\n你最终会选: {result}"