"""Random pictures of generated anime characters."""

from __future__ import annotations

import random

URL_PATTERN = "https://www.thiswaifudoesnotexist.net/example-{}.jpg"
COUNT = 100000


def waifu_url(rng: random.Random | None = None) -> str:
    """URL of one of the COUNT example pictures, numbered from 1."""
    rng = rng or random.Random()
    return URL_PATTERN.format(rng.randrange(COUNT) + 1)