import pytest

from jsinline import Identifier
from jsinline import Patcher


def test_offsets_refer_to_original():
    p = Patcher("let abc = 1;")
    p.remove(0, 4)
    p.overwrite(4, 7, "xy")
    p.overwrite(10, 11, "2")
    assert p.to_string() == "xy = 2;"
    assert str(p) == "xy = 2;"
    assert p.original == "let abc = 1;"


def test_slice_sees_edits():
    p = Patcher("f(a + a)")
    p.overwrite(2, 3, "1")
    assert p.slice(2, 7) == "1 + a"
    assert p.slice(0, 1) == "f"


def test_later_patches_win():
    p = Patcher("abcdef")
    p.overwrite(1, 3, "X")
    p.remove(0, 4)
    assert p.to_string() == "ef"


def test_empty_remove_is_noop():
    p = Patcher("abc")
    p.remove(1, 1)
    assert not p.has_changed()


@pytest.mark.parametrize("start,end", [(-1, 1), (2, 1), (0, 4)])
def test_invalid_range(start: int, end: int):
    with pytest.raises(ValueError, match="invalid range"):
        Patcher("abc").remove(start, end)


def test_empty_overwrite():
    with pytest.raises(ValueError, match="cannot overwrite an empty range"):
        Patcher("abc").overwrite(1, 1, "x")


def test_live():
    a = Identifier(0, 1, name="a")
    b = Identifier(2, 3, name="b")
    p = Patcher("a b")
    p.mark_removed(a)
    assert p.live([a, b]) == [b]


def test_overwrite_inside_removal():
    p = Patcher("abcdef")
    p.remove(1, 4)
    with pytest.raises(ValueError, match="overlaps removed text"):
        p.overwrite(2, 3, "X")
    with pytest.raises(ValueError, match="overlaps removed text"):
        p.overwrite(3, 5, "X")
    p.overwrite(4, 5, "X")
    assert p.to_string() == "aXf"
