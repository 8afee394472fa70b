import random

from plugbot import choose


def _final(text):
    return text.rsplit("你最终会选: ", 1)[1]


def test_lists_options_in_order():
    text = choose.choose("可乐还是雪碧还是茶", "nick", random.Random(0))
    lines = text.split("\n")
    assert lines[0] == "> nick"
    assert lines[1] == "你的选项有:"
    assert lines[2] == "1, 可乐"
    assert lines[4] == "3, 茶"


def test_choice_is_one_of_options():
    for seed in range(20):
        text = choose.choose("A还是B还是C", "n", random.Random(seed))
        assert _final(text) in {"A", "B", "C"}


def test_all_options_reachable():
    picks = {_final(choose.choose("A还是B", "n", random.Random(seed))) for seed in range(50)}
    assert picks == {"A", "B"}


def test_single_option():
    text = choose.choose("only", "n", random.Random(3))
    assert _final(text) == "only"
    assert text.count("\n") == 3