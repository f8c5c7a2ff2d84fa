import pytest

import consoletools.format
from consoletools.format import (
    NO_CONTENT,
    ColorFormat,
    ConcatenationFormat,
    ConditionFormat,
    FunctionFormat,
    Padding,
    TextFormat,
    VariableFormat,
    combine,
    parse,
)


def concat(*elements):
    return ConcatenationFormat(elements)


@pytest.mark.parametrize(
    ("template", "expect"),
    [
        ("", NO_CONTENT),
        ("hello world", TextFormat("hello world")),
        ("a, b. {c}: d]", TextFormat("a, b. {c}: d]")),
        # Escapes.
        ("a\\[b", TextFormat("a[b")),
        ("hello \\world", TextFormat("hello world")),
        ("\\$x\\?y\\@z", TextFormat("$x?y@z")),
        ("\\\\", TextFormat("\\")),
        ("trailing\\", TextFormat("trailing")),
        ("\\", NO_CONTENT),
        # Colors.
        (
            "text1[green:hello world]text2",
            concat(
                TextFormat("text1"),
                ColorFormat("green", TextFormat("hello world")),
                TextFormat("text2"),
            ),
        ),
        ("[Green:x]", ColorFormat("green", TextFormat("x"))),
        ("[red|blue:x]", ColorFormat("red|blue", TextFormat("x"))),
        ("[green:]", NO_CONTENT),
        ("[:hello]", TextFormat("hello")),
        ("[hello]", TextFormat("hello")),
        ("[  :hello]", TextFormat("hello")),
        ("a[hello]b", TextFormat("ahellob")),
        ("[red:unclosed", ColorFormat("red", TextFormat("unclosed"))),
        (
            "[red:a[blue:b]]",
            ColorFormat(
                "red", concat(TextFormat("a"), ColorFormat("blue", TextFormat("b")))
            ),
        ),
        ("[red:a][red:b]", ColorFormat("red", TextFormat("ab"))),
        ("[red:a:b]", ColorFormat("red", TextFormat("a:b"))),
        ("[a]:b", TextFormat("a:b")),
        # Conditions.
        ("?cond{text}", ConditionFormat("cond", False, TextFormat("text"))),
        ("?!cond1{text}", ConditionFormat("cond1", True, TextFormat("text"))),
        ("?cond{}", ConditionFormat("cond", False, NO_CONTENT)),
        ("?cond{unclosed", ConditionFormat("cond", False, TextFormat("unclosed"))),
        ("?cond{a,b}", ConditionFormat("cond", False, TextFormat("a,b"))),
        ("?cond", TextFormat("?cond")),
        ("why?", TextFormat("why?")),
        ("?1c{x}", TextFormat("?1c{x}")),
        (
            "?a{?b{x}}",
            ConditionFormat("a", False, ConditionFormat("b", False, TextFormat("x"))),
        ),
        # Functions.
        (
            "@func{arg1,arg2}",
            FunctionFormat("func", (TextFormat("arg1"), TextFormat("arg2"))),
        ),
        ("@func{}", FunctionFormat("func", (NO_CONTENT,))),
        ("@func{a,}", FunctionFormat("func", (TextFormat("a"), NO_CONTENT))),
        ("@func{", FunctionFormat("func", ())),
        ("@func{a", FunctionFormat("func", (TextFormat("a"),))),
        (
            "@f{a}b",
            concat(FunctionFormat("f", (TextFormat("a"),)), TextFormat("b")),
        ),
        (
            "@f{[red:a,b],c}",
            FunctionFormat(
                "f", (ColorFormat("red", TextFormat("a,b")), TextFormat("c"))
            ),
        ),
        ("@f{\\,}", FunctionFormat("f", (TextFormat(","),))),
        ("mail@example.com", TextFormat("mail@example.com")),
        # Variables.
        ("$name", VariableFormat("name")),
        ("$+name", VariableFormat("name", Padding.PAD_LEFT)),
        ("$name+", VariableFormat("name", Padding.PAD_RIGHT)),
        ("$+name+", VariableFormat("name", Padding.PAD_BOTH)),
        ("$first-name_2", VariableFormat("first-name_2")),
        ("$1name", TextFormat("$1name")),
        ("$", TextFormat("$")),
        ("$ x", TextFormat("$ x")),
        ("$a$b", concat(VariableFormat("a"), VariableFormat("b"))),
        ("$a b", concat(VariableFormat("a"), TextFormat(" b"))),
        ("$имя", VariableFormat("имя")),
    ],
)
def test_parse(template, expect):
    assert parse(template) == expect


@pytest.mark.parametrize(
    ("a", "b"),
    [
        ("text1", "[green:hello]text2"),
        ("[green:a]", "[green:b]"),
        ("$a", "$b"),
        ("$a text", " more $b"),
        ("[red:a]$x", "[red:b]$y"),
        ("?c{x}", "@f{y}"),
        ("", "$x"),
        ("plain", ""),
    ],
)
def test_parse_is_compatible_with_combine(a, b):
    assert parse(a + b) == combine(parse(a), parse(b))


class TestCombine:
    def test_no_content_is_identity(self):
        x = VariableFormat("x")
        assert combine(NO_CONTENT, x) is x
        assert combine(x, NO_CONTENT) is x
        assert combine(NO_CONTENT, NO_CONTENT) is NO_CONTENT

    def test_text(self):
        assert combine(TextFormat("a"), TextFormat("b")) == TextFormat("ab")

    def test_colors(self):
        assert combine(
            ColorFormat("red", TextFormat("a")), ColorFormat("red", TextFormat("b"))
        ) == ColorFormat("red", TextFormat("ab"))
        assert combine(
            ColorFormat("red", TextFormat("a")), ColorFormat("blue", TextFormat("b"))
        ) == concat(
            ColorFormat("red", TextFormat("a")), ColorFormat("blue", TextFormat("b"))
        )

    def test_splice(self):
        left = concat(VariableFormat("a"), TextFormat("b"))
        right = concat(TextFormat("c"), VariableFormat("d"))
        assert combine(left, right) == concat(
            VariableFormat("a"), TextFormat("bc"), VariableFormat("d")
        )
        assert combine(left, TextFormat("c")) == concat(
            VariableFormat("a"), TextFormat("bc")
        )
        assert combine(TextFormat("z"), left) == concat(
            TextFormat("z"), VariableFormat("a"), TextFormat("b")
        )

    def test_plus_operator(self):
        assert TextFormat("a") + TextFormat("b") == TextFormat("ab")


class TestNodes:
    def test_concatenation_is_flattened(self):
        nested = ConcatenationFormat(
            (
                VariableFormat("a"),
                ConcatenationFormat((VariableFormat("b"), VariableFormat("c"))),
            )
        )
        assert nested.elements == (
            VariableFormat("a"),
            VariableFormat("b"),
            VariableFormat("c"),
        )

    def test_concatenation_is_not_empty(self):
        with pytest.raises(ValueError):
            ConcatenationFormat(())

    def test_color_is_lowercase(self):
        assert ColorFormat("RED", NO_CONTENT).color == "red"

    @pytest.mark.parametrize(
        "make",
        [
            lambda: VariableFormat("a b"),
            lambda: ConditionFormat("a b", False, NO_CONTENT),
        ],
    )
    def test_names_without_spaces(self, make):
        with pytest.raises(ValueError):
            make()

    def test_hashable(self):
        assert len({parse("$a [red:b]"), parse("$a [red:b]")}) == 1
        assert hash(FunctionFormat("f", [TextFormat("a")])) == hash(
            FunctionFormat("f", (TextFormat("a"),))
        )


def test_extract_variables():
    format = parse("$a [red:$b] ?c{$d} @f{$e} $g")
    assert consoletools.format.extract_variables(format) == [
        VariableFormat("a"),
        VariableFormat("g"),
    ]
    assert consoletools.format.extract_variables(VariableFormat("x")) == [
        VariableFormat("x")
    ]
    assert consoletools.format.extract_variables(TextFormat("x")) == []


@pytest.mark.parametrize(
    "template",
    [
        "",
        "hello world",
        "text1[green:hello world]text2",
        "[red|blue:$+name+] is ?!old{young}",
        "@aliases{$name,\\, , and }",
        "$name\\s and $other+",
        "$a-b\\-c",
        "costs \\$5 \\[approx\\]",
        "?c{[red::x]}",
        "back\\\\slash",
        "@f{a,[b:c,d],?e{f}}",
    ],
)
def test_str_round_trip(template):
    format = parse(template)
    assert parse(str(format)) == format


@pytest.mark.parametrize(
    ("format", "expect"),
    [
        (TextFormat("a[b]"), "a\\[b\\]"),
        (VariableFormat("x", Padding.PAD_LEFT), "$+x"),
        (concat(VariableFormat("x"), TextFormat("s")), "$x\\s"),
        (concat(VariableFormat("x"), TextFormat(" s")), "$x s"),
        (FunctionFormat("f", (TextFormat("a,b"), NO_CONTENT)), "@f{a\\,b,}"),
    ],
)
def test_str(format, expect):
    assert str(format) == expect
