"""Search for GitHub repositories and describe the best match."""

from __future__ import annotations

from typing import Any

import requests

SEARCH_API = "https://api.github.com/search/repositories"
CARD_IMAGE_BASE = "https://opengraph.githubassets.com/0/"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/88.0.4324.182 Safari/537.36"
)
NOT_FOUND = "没有找到这样的仓库"
REQUEST_TIMEOUT = 30


def not_null(text: str, default: str) -> str:
    """The text, or the default when the text is empty."""
    return text if text else default


def search_repository(query: str) -> dict[str, Any]:
    """The first repository found for the query.

    Raises RuntimeError on a non-200 answer and LookupError when nothing is found.
    """
    response = requests.get(
        SEARCH_API,
        params={"q": query},
        headers={"User-Agent": USER_AGENT},
        timeout=REQUEST_TIMEOUT,
    )
    if response.status_code != 200:
        raise RuntimeError(f"code {response.status_code}")
    info = response.json()
    if not info.get("total_count") or not info.get("items"):
        raise LookupError(NOT_FOUND)
    return info["items"][0]


def _text(value: object) -> str:
    return value if isinstance(value, str) else ""


def _int(value: object) -> int:
    if isinstance(value, bool) or value is None:
        return 0
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0


def format_repository(repo: dict[str, Any]) -> str:
    """The text description of a repository from the search API."""
    license_info = repo.get("license") or {}
    counts = "/".join(
        str(_int(repo.get(key))) for key in ("watchers", "forks", "open_issues")
    )
    lines = [
        _text(repo.get("full_name")),
        "Description: " + _text(repo.get("description")),
        "Star/Fork/Issue: " + counts,
        "Language: " + not_null(_text(repo.get("language")), "None"),
        "License: " + not_null(_text(license_info.get("key")).upper(), "None"),
        "Last pushed: " + _text(repo.get("pushed_at")),
        "Jump: " + _text(repo.get("html_url")),
    ]
    return "\n".join(lines) + "\n"


def card_image_url(full_name: str) -> str:
    """URL of the preview card picture of a repository."""
    return CARD_IMAGE_BASE + full_name