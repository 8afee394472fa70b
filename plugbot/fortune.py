"""Daily fortune slips drawn on a background picture.

The background set of each group is kept in a small JSON config. The text of
the slip is laid out in vertical columns of at most nine characters, read
from right to left.
"""

from __future__ import annotations

import base64
import io
import json
import os
import random
import shutil
import threading
import zipfile
from datetime import date as Date
from pathlib import Path
from typing import NamedTuple

from PIL import Image, ImageDraw, ImageFont

BASE = "data/fortune/"
TABLE = (
    "车万", "DC4", "爱因斯坦", "星空列车", "樱云之恋", "富婆妹", "李清歌",
    "公主连结", "原神", "明日方舟", "碧蓝航线", "碧蓝幻想", "战双", "阴阳师",
)
INDEX = {name: i for i, name in enumerate(TABLE)}
DEFAULT_KIND = TABLE[0]
COLUMN_HEIGHT = 9
JPEG_QUALITY = 70


class FortuneConfig:
    """Background set chosen per group; private chats use the negated user id."""

    def __init__(self, path: str | os.PathLike[str] = BASE + "cfg.json") -> None:
        self.path = Path(path)
        self.kinds: dict[int, int] = {}
        self._lock = threading.Lock()

    def load(self) -> None:
        """Read the config; a missing or empty file means no choices yet."""
        if not self.path.exists():
            self.kinds = {}
            return
        data = self.path.read_text(encoding="utf-8")
        if data.strip():
            self.kinds = {int(gid): int(kind) for gid, kind in json.loads(data).items()}
        else:
            self.kinds = {}

    def save(self) -> None:
        if not self.path.parent.is_dir():
            raise FileNotFoundError(f"base dir is not exist: {self.path.parent}")
        payload = json.dumps({str(gid): kind for gid, kind in self.kinds.items()})
        with self._lock:
            self.path.write_text(payload, encoding="utf-8")

    def set_kind(self, gid: int, name: str) -> None:
        """Choose the background set of a group and store the config."""
        index = INDEX.get(name)
        if index is None:
            raise ValueError(f"unknown background set: {name}")
        self.kinds[gid] = index
        self.save()

    def kind_for(self, gid: int) -> str:
        index = self.kinds.get(gid)
        return DEFAULT_KIND if index is None else TABLE[index]


class Glyph(NamedTuple):
    char: str
    x: float
    y: float


def offset(total: int, now: int, distance: float) -> float:
    """Offset of slot `now` (from 1) among `total` slots centred on zero."""
    if total % 2 == 0:
        return (now - total // 2 - 1) * distance
    return (now - total // 2 - 1.5) * distance


def rows_num(total: int, div: int) -> int:
    """Number of groups of `div` needed to hold `total` items."""
    rows, rest = divmod(total, div)
    return rows + 1 if rest else rows


def layout_text(text: str, char_width: float, char_height: float) -> list[Glyph]:
    """Baseline positions of the characters of a slip, column by column."""
    chars = list(text)
    count = len(chars)
    columns = rows_num(count, COLUMN_HEIGHT)
    glyphs = []
    if columns == 2:
        div = rows_num(count, 2)
        for i, char in enumerate(chars):
            column = rows_num(i + 1, div)
            column_len = min(count - (column - 1) * div, div)
            row = i % div + 1
            if column == 2:
                # the second column is aligned to the bottom
                row += COLUMN_HEIGHT - column_len
            x = -offset(columns, column, char_width) + 115
            y = offset(COLUMN_HEIGHT, row, char_height) + 320.0
            glyphs.append(Glyph(char, x, y))
        return glyphs
    for i, char in enumerate(chars):
        column = rows_num(i + 1, COLUMN_HEIGHT)
        column_len = min(count - (column - 1) * COLUMN_HEIGHT, COLUMN_HEIGHT)
        row = i % COLUMN_HEIGHT + 1
        x = -offset(columns, column, char_width) + 115
        y = offset(column_len, row, char_height) + 320.0
        glyphs.append(Glyph(char, x, y))
    return glyphs


def daily_seed(user_id: int, date: Date) -> int:
    """A seed that stays the same for one user during one day."""
    return user_id + int(date.strftime("%Y%m%d"))


def rand_image(path: str | os.PathLike[str], seed: int) -> str:
    """Pick a file of the directory, the same one for the same seed."""
    names = sorted(os.listdir(path))
    if not names:
        raise ValueError(f"no pictures in {path}")
    return str(Path(path) / random.Random(seed).choice(names))


def rand_text(path: str | os.PathLike[str], seed: int) -> tuple[str, str]:
    """Pick the (title, content) of a slip from a JSON list of slips."""
    slips = json.loads(Path(path).read_text(encoding="utf-8"))
    if not slips:
        raise ValueError(f"no slips in {path}")
    slip = random.Random(seed).choice(slips)
    return slip.get("title", ""), slip.get("content", "")


def unpack(archive: str | os.PathLike[str], dest: str | os.PathLike[str]) -> list[Path]:
    """Extract the files of a zip archive into dest; return their paths."""
    root = Path(dest)
    root.mkdir(parents=True, exist_ok=True)
    resolved_root = root.resolve()
    written = []
    with zipfile.ZipFile(archive) as zf:
        for info in zf.infolist():
            if info.is_dir():
                continue
            target = root / info.filename
            if resolved_root not in target.resolve().parents:
                raise ValueError(f"unsafe path in archive: {info.filename}")
            target.parent.mkdir(parents=True, exist_ok=True)
            with zf.open(info) as src, open(target, "wb") as dst:
                shutil.copyfileobj(src, dst)
            written.append(target)
    return written


def _load_font(font_path: str | os.PathLike[str] | None, size: int):
    if font_path is None:
        return ImageFont.load_default()
    return ImageFont.truetype(str(font_path), size)


def _measure(font, text: str) -> tuple[float, float]:
    width = font.getlength(text)
    if hasattr(font, "getmetrics"):
        ascent, descent = font.getmetrics()
        return width, ascent + descent
    left, top, right, bottom = font.getbbox(text)
    return width, bottom - top


def _ascent(font) -> float:
    if hasattr(font, "getmetrics"):
        return font.getmetrics()[0]
    return font.getbbox("A")[3]


def _draw_at(pen: ImageDraw.ImageDraw, font, text: str, x: float, baseline: float, fill) -> None:
    pen.text((x, baseline - _ascent(font)), text, font=font, fill=fill)


def draw(
    background: str | os.PathLike[str],
    title: str,
    text: str,
    font_path: str | os.PathLike[str] | None = None,
) -> bytes:
    """Draw the slip and return the picture as base64-encoded JPEG bytes."""
    with Image.open(background) as back:
        back_rgb = back.convert("RGB")
    canvas = Image.new("RGB", (back_rgb.height, back_rgb.width))
    canvas.paste(back_rgb, (0, 0))
    pen = ImageDraw.Draw(canvas)

    title_font = _load_font(font_path, 45)
    title_width, _ = _measure(title_font, title)
    _draw_at(pen, title_font, title, 140 - title_width / 2, 112, (255, 255, 255))

    body_font = _load_font(font_path, 23)
    try:
        width, height = _measure(body_font, "测")
    except UnicodeError:
        width, height = _measure(body_font, "M")
    for glyph in layout_text(text, width + 10, height + 10):
        _draw_at(pen, body_font, glyph.char, glyph.x, glyph.y, (0, 0, 0))

    buffer = io.BytesIO()
    canvas.save(buffer, "JPEG", quality=JPEG_QUALITY)
    return base64.b64encode(buffer.getvalue())