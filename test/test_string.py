import pytest

from consoletools.color import Color
from consoletools.string import ColoredString, Segment, to_colored

RED = Color("red")
BLUE = Color("blue")


def cs(*segments: tuple[str, Color] | str) -> ColoredString:
    return ColoredString(
        Segment(s) if isinstance(s, str) else Segment(*s) for s in segments
    )


class TestSegment:
    def test_whitespace_loses_foreground(self):
        assert Segment(" \t ", Color("red", "blue")).color == Color(background="blue")
        assert Segment(" x ", Color("red", "blue")).color == Color("red", "blue")

    def test_has_color(self):
        assert not Segment("x").has_color
        assert Segment("x", RED).has_color
        assert not Segment("  ", RED).has_color


class TestColoredString:
    def test_merges_equal_colors(self):
        s = ColoredString([Segment("ab", RED), Segment("cd", Color("RED"))])
        assert len(s.segments) == 1
        assert s.segments[0].content == "abcd"

    def test_drops_empty_segments(self):
        s = ColoredString([Segment("", RED), Segment("ab"), Segment("", BLUE)])
        assert s.segments == (Segment("ab"),)

    def test_merge_after_drop(self):
        s = ColoredString([Segment("a", RED), Segment("", BLUE), Segment("b", RED)])
        assert s.segments == (Segment("ab", RED),)

    def test_empty(self):
        assert not ColoredString.EMPTY
        assert len(ColoredString.EMPTY) == 0
        assert ColoredString.EMPTY.content == ""
        assert ColoredString() == ColoredString.EMPTY

    def test_content_and_colors(self):
        s = cs(("a", RED), "b")
        assert s.content == "ab"
        assert str(s) == "ab"
        assert s.has_colors
        assert not s.without_colors().has_colors
        assert s.without_colors() == cs("ab")
        assert s.with_color(BLUE) == cs(("ab", BLUE))

    def test_iter(self):
        s = cs(("a", RED), "b")
        assert list(s) == [Segment("a", RED), Segment("b")]

    @pytest.mark.parametrize(
        ("index", "expect"),
        [
            (0, cs(("a", RED))),
            (1, cs(("b", RED))),
            (2, cs("c")),
            (-1, cs("d")),
            (-4, cs(("a", RED))),
        ],
    )
    def test_index(self, index, expect):
        s = cs(("ab", RED), "cd")
        assert s[index] == expect

    @pytest.mark.parametrize("index", [4, -5, 100])
    def test_index_out_of_range(self, index):
        with pytest.raises(IndexError):
            cs(("ab", RED), "cd")[index]

    @pytest.mark.parametrize(
        ("start", "stop", "expect"),
        [
            (0, 4, cs(("ab", RED), "cd")),
            (1, 3, cs(("b", RED), "c")),
            (2, 4, cs("cd")),
            (0, 1, cs(("a", RED))),
            (3, 3, ColoredString.EMPTY),
            (None, None, cs(("ab", RED), "cd")),
            (-3, None, cs(("b", RED), "cd")),
        ],
    )
    def test_slice(self, start, stop, expect):
        s = cs(("ab", RED), "cd")
        assert s[start:stop] == expect

    def test_slice_with_step(self):
        with pytest.raises(ValueError):
            cs("abcd")[::2]

    def test_add(self):
        a = cs(("a", RED))
        assert a + cs(("b", RED)) == cs(("ab", RED))
        assert a + "[blue:b]" == cs(("a", RED), ("b", BLUE))
        assert "[blue:b]" + a == cs(("b", BLUE), ("a", RED))

    def test_add_unsupported(self):
        with pytest.raises(TypeError):
            cs("a") + 1  # type: ignore

    def test_hash(self):
        assert hash(cs(("a", RED), "b")) == hash(ColoredString.parse("[red:a]b"))

    def test_from_content_ignores_markup(self):
        s = ColoredString.from_content("[red:a]", BLUE)
        assert s == cs(("[red:a]", BLUE))

    def test_to_colored(self):
        s = cs(("a", RED))
        assert to_colored(s) is s
        assert to_colored("[red:a]") == s


@pytest.mark.parametrize(
    ("text", "expect"),
    [
        ("", ColoredString.EMPTY),
        ("plain", cs("plain")),
        ("[red:x]", cs(("x", RED))),
        ("a[red:b]c", cs("a", ("b", RED), "c")),
        ("[red|blue:x]", cs(("x", Color("red", "blue")))),
        ("[red:a[blue:b]c]", cs(("a", RED), ("b", BLUE), ("c", RED))),
        ("[red:a[:b]c]", cs(("abc", RED))),
        ("[no colon]", cs("[no colon]")),
        ("[red:[no colon]]", cs(("[no colon]", RED))),
        ("[red\\:x]", cs("[red\\:x]")),
        ("\\[red:x]", cs("[red:x]")),
        ("a\\", cs("a")),
        ("[red:unclosed", cs(("unclosed", RED))),
        ("[unclosed", cs("[unclosed")),
        ("[red:a\\]b]", cs(("a]b", RED))),
        ("[red: ]", cs(" ")),
    ],
)
def test_parse(text, expect):
    assert ColoredString.parse(text) == expect
