import base64
import io
import json
import zipfile
from datetime import date

import pytest
from PIL import Image

from plugbot.fortune import (
    DEFAULT_KIND,
    TABLE,
    FortuneConfig,
    daily_seed,
    draw,
    layout_text,
    offset,
    rand_image,
    rand_text,
    rows_num,
    unpack,
)


@pytest.mark.parametrize("div", [2, 5, 9])
@pytest.mark.parametrize("k", [1, 2, 3, 4])
def test_rows_num_rounds_up(div, k):
    assert rows_num(k * div, div) == k
    assert rows_num(k * div + 1, div) == k + 1


@pytest.mark.parametrize("total", [1, 2, 3, 4, 9])
def test_offset_steps_by_distance(total):
    for now in range(1, total):
        step = offset(total, now + 1, 2.5) - offset(total, now, 2.5)
        assert step == pytest.approx(2.5)


def test_offset_scales_with_distance():
    assert offset(5, 2, 4.0) == pytest.approx(2 * offset(5, 2, 2.0))


def test_layout_single_column():
    glyphs = layout_text("一二三四五", 30.0, 40.0)
    assert "".join(g.char for g in glyphs) == "一二三四五"
    assert len({g.x for g in glyphs}) == 1
    ys = [g.y for g in glyphs]
    assert all(b - a == pytest.approx(40.0) for a, b in zip(ys, ys[1:]))


def test_layout_two_columns_bottom_aligned():
    short = layout_text("字" * 12, 30.0, 40.0)
    full = layout_text("字" * 18, 30.0, 40.0)
    assert len({g.x for g in short}) == 2
    assert short[-1].y == pytest.approx(full[-1].y)
    # columns go from right to left
    assert short[0].x > short[-1].x


def test_layout_three_columns():
    glyphs = layout_text("字" * 20, 30.0, 40.0)
    assert len(glyphs) == 20
    assert len({g.x for g in glyphs}) == 3


def test_daily_seed():
    day = date(2021, 11, 30)
    assert daily_seed(0, day) == 20211130
    assert daily_seed(7, day) - daily_seed(0, day) == 7


def test_config_defaults_and_round_trip(tmp_path):
    path = tmp_path / "cfg.json"
    config = FortuneConfig(path)
    config.load()
    assert config.kind_for(123) == DEFAULT_KIND
    config.set_kind(123, "原神")
    config.set_kind(-5, TABLE[-1])

    reloaded = FortuneConfig(path)
    reloaded.load()
    assert reloaded.kind_for(123) == "原神"
    assert reloaded.kind_for(-5) == TABLE[-1]
    assert reloaded.kind_for(9) == DEFAULT_KIND


def test_config_unknown_kind(tmp_path):
    config = FortuneConfig(tmp_path / "cfg.json")
    with pytest.raises(ValueError):
        config.set_kind(1, "不存在的底图")
    assert config.kind_for(1) == DEFAULT_KIND


def test_config_save_without_directory(tmp_path):
    config = FortuneConfig(tmp_path / "missing" / "cfg.json")
    with pytest.raises(FileNotFoundError):
        config.set_kind(1, "原神")


def test_rand_image_is_deterministic(tmp_path):
    for name in ("a.png", "b.png", "c.png", "d.png"):
        (tmp_path / name).write_bytes(b"x")
    first = rand_image(tmp_path, 42)
    assert first == rand_image(tmp_path, 42)
    assert first.startswith(str(tmp_path))
    assert first.rsplit("/", 1)[-1] in {"a.png", "b.png", "c.png", "d.png"}


def test_rand_image_empty_dir(tmp_path):
    with pytest.raises(ValueError):
        rand_image(tmp_path, 1)


def test_rand_text(tmp_path):
    slips = [{"title": f"t{i}", "content": f"c{i}"} for i in range(6)]
    path = tmp_path / "slips.json"
    path.write_text(json.dumps(slips, ensure_ascii=False), encoding="utf-8")
    title, content = rand_text(path, 99)
    assert (title, content) == rand_text(path, 99)
    assert {"title": title, "content": content} in slips


def test_unpack_round_trip(tmp_path):
    archive = tmp_path / "set.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("one.jpg", b"first")
        zf.writestr("two.jpg", b"second")
    dest = tmp_path / "out"
    written = unpack(archive, dest)
    assert sorted(p.name for p in written) == ["one.jpg", "two.jpg"]
    assert (dest / "one.jpg").read_bytes() == b"first"
    assert (dest / "two.jpg").read_bytes() == b"second"


def test_unpack_rejects_escaping_names(tmp_path):
    archive = tmp_path / "bad.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("../evil.txt", b"no")
    with pytest.raises(ValueError):
        unpack(archive, tmp_path / "out")


def test_draw_produces_jpeg_with_swapped_size(tmp_path):
    background = tmp_path / "bg.png"
    Image.new("RGB", (100, 60), (200, 100, 50)).save(background)
    encoded = draw(background, "Lucky", "Hello world", None)
    picture = Image.open(io.BytesIO(base64.b64decode(encoded)))
    assert picture.format == "JPEG"
    assert picture.size == (60, 100)


def test_draw_missing_background(tmp_path):
    with pytest.raises(FileNotFoundError):
        draw(tmp_path / "none.png", "t", "c", None)