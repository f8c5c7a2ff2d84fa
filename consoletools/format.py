# ConsoleTools project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
This module implements a small template language that describes how an item
should be displayed. A template is parsed into a tree of :class:`Format` nodes,
which is later evaluated by a :class:`~consoletools.formatter.Formatter`.


Template syntax
---------------

``$name``
    Substitutes a variable. Use ``$+name``, ``$name+`` or ``$+name+``
    to pad the value on the left, on the right, or on both sides.

``[color:content]``
    Paints ``content`` with the given color. The color can be a color name
    (see :class:`~consoletools.color.Color`), or a name of a dynamic color
    defined by a variable used in ``content``.

``?name{content}``, ``?!name{content}``
    Includes ``content`` only if condition ``name`` holds (or doesn't hold).

``@name{arg1,arg2,...}``
    Calls a function with a list of formats as arguments.

``\\x``
    Inserts character ``x`` verbatim.

Parsing never fails. Constructs that can't be parsed are kept as text::

    >>> parse("price: $1")
    TextFormat(text='price: $1')

Templates can be rendered back::

    >>> str(parse("[green:$+name+ is ?!old{young}]"))
    '[green:$+name+ is ?!old{young}]'


Format tree
-----------

.. autoclass:: Format

.. autoclass:: NoContentFormat

.. autodata:: NO_CONTENT

.. autoclass:: TextFormat

.. autoclass:: VariableFormat

.. autoclass:: Padding
   :members:

.. autoclass:: ColorFormat

.. autoclass:: ConditionFormat

.. autoclass:: FunctionFormat

.. autoclass:: ConcatenationFormat


Operations
----------

.. autofunction:: parse

.. autofunction:: combine

.. autofunction:: extract_variables

"""

from __future__ import annotations

import abc
import enum
import re
from dataclasses import dataclass

from consoletools import _typing as _t

__all__ = [
    "NO_CONTENT",
    "ColorFormat",
    "ConcatenationFormat",
    "ConditionFormat",
    "Format",
    "FunctionFormat",
    "NoContentFormat",
    "Padding",
    "TextFormat",
    "VariableFormat",
    "combine",
    "extract_variables",
    "parse",
]


class Format(abc.ABC):
    """
    Base class for nodes of a parsed template.

    All nodes are immutable and compared structurally. Two nodes can be joined
    with ``+``, which is a shortcut for :func:`combine`.

    """

    __slots__ = ()

    def __add__(self, other: Format) -> Format:
        if not isinstance(other, Format):
            return NotImplemented
        return combine(self, other)

    @abc.abstractmethod
    def __str__(self) -> str:
        """
        Render this node back to template syntax.

        """


@dataclass(frozen=True)
class NoContentFormat(Format):
    """
    An empty template. Use :data:`NO_CONTENT` instead of creating new instances.

    """

    def __str__(self) -> str:
        return ""


NO_CONTENT: _t.Final[NoContentFormat] = NoContentFormat()
"""
Empty template. It is the identity element of :func:`combine`.

"""


@dataclass(frozen=True)
class TextFormat(Format):
    """
    Literal text.

    """

    text: str

    def __str__(self) -> str:
        return _ESCAPE_RE.sub(r"\\\g<0>", self.text)


class Padding(enum.Enum):
    """
    Padding applied to a variable's value.

    """

    NONE = "none"
    """
    Value is not padded.

    """

    PAD_LEFT = "left"
    """
    Spaces are added to the left of the value, aligning it to the right.

    """

    PAD_RIGHT = "right"
    """
    Spaces are added to the right of the value, aligning it to the left.

    """

    PAD_BOTH = "both"
    """
    Value is centered; when the padding is odd, the extra space
    goes to the right.

    """


@dataclass(frozen=True)
class VariableFormat(Format):
    """
    Reference to a variable.

    """

    name: str
    padding: Padding = Padding.NONE

    def __post_init__(self):
        if " " in self.name:
            raise ValueError(f"variable name {self.name!r} contains spaces")

    def __str__(self) -> str:
        left = "+" if self.padding in (Padding.PAD_LEFT, Padding.PAD_BOTH) else ""
        right = "+" if self.padding in (Padding.PAD_RIGHT, Padding.PAD_BOTH) else ""
        return f"${left}{self.name}{right}"


@dataclass(frozen=True)
class ColorFormat(Format):
    """
    Content painted with a color. Color names are lowercase.

    """

    color: str
    content: Format

    def __post_init__(self):
        object.__setattr__(self, "color", self.color.lower())

    def __str__(self) -> str:
        return f"[{self.color}:{self.content}]"


@dataclass(frozen=True)
class ConditionFormat(Format):
    """
    Content that is only displayed if a condition holds.

    If ``negated`` is :data:`True`, content is displayed if the condition
    doesn't hold.

    """

    name: str
    negated: bool
    content: Format

    def __post_init__(self):
        if " " in self.name:
            raise ValueError(f"condition name {self.name!r} contains spaces")

    def __str__(self) -> str:
        return f"?{'!' if self.negated else ''}{self.name}{{{self.content}}}"


@dataclass(frozen=True)
class FunctionFormat(Format):
    """
    Call to a function. Arguments are passed to the function unevaluated.

    """

    name: str
    arguments: tuple[Format, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "arguments", tuple(self.arguments))

    def __str__(self) -> str:
        return f"@{self.name}{{{','.join(map(str, self.arguments))}}}"


@dataclass(frozen=True)
class ConcatenationFormat(Format):
    """
    A sequence of formats.

    Nested concatenations are flattened on construction, so a concatenation
    never directly contains another one.

    """

    elements: tuple[Format, ...]

    def __post_init__(self):
        elements: list[Format] = []
        for element in self.elements:
            if isinstance(element, ConcatenationFormat):
                elements.extend(element.elements)
            else:
                elements.append(element)
        if not elements:
            raise ValueError("concatenation must contain at least one element")
        object.__setattr__(self, "elements", tuple(elements))

    def __str__(self) -> str:
        parts: list[str] = []
        prev: Format | None = None
        for element in self.elements:
            s = str(element)
            if (
                isinstance(prev, VariableFormat)
                and isinstance(element, TextFormat)
                and _VARIABLE_TAIL_RE.match(s)
            ):
                # Otherwise the text would become part of the variable name.
                s = "\\" + s
            parts.append(s)
            prev = element
        return "".join(parts)


def combine(a: Format, b: Format, /) -> Format:
    """
    Join two formats, merging adjacent nodes where possible.

    Text nodes are merged into one, color nodes with the same color are merged
    under a single color, and concatenations are spliced at the boundary.
    This keeps trees in a canonical form::

        >>> combine(TextFormat("a"), TextFormat("b"))
        TextFormat(text='ab')
        >>> combine(parse("[red:a]"), parse("[red:b]$x")) == parse("[red:ab]$x")
        True

    """

    match a, b:
        case NoContentFormat(), _:
            return b
        case _, NoContentFormat():
            return a
        case TextFormat(), TextFormat():
            return TextFormat(a.text + b.text)
        case ColorFormat(), ColorFormat() if a.color == b.color:
            return ColorFormat(a.color, combine(a.content, b.content))
        case ConcatenationFormat(), ConcatenationFormat():
            return ConcatenationFormat(
                (
                    *a.elements[:-1],
                    combine(a.elements[-1], b.elements[0]),
                    *b.elements[1:],
                )
            )
        case ConcatenationFormat(), _:
            return ConcatenationFormat((*a.elements[:-1], combine(a.elements[-1], b)))
        case _, ConcatenationFormat():
            return ConcatenationFormat((combine(a, b.elements[0]), *b.elements[1:]))
        case _:
            return ConcatenationFormat((a, b))


def extract_variables(format: Format, /) -> list[VariableFormat]:
    """
    Find variables that are used directly in the given format.

    Only top-level variables and variables within concatenations are returned.
    Variables within nested colors, conditions, or function arguments
    are not considered.

    """

    match format:
        case VariableFormat():
            return [format]
        case ConcatenationFormat():
            return [v for e in format.elements for v in extract_variables(e)]
        case _:
            return []


def parse(template: str, /) -> Format:
    """
    Parse a template.

    :param template:
        template string.
    :returns:
        parsed template. Parsing never fails: invalid constructs
        are preserved as text.
    :example:
        ::

            >>> parse("")
            NoContentFormat()
            >>> parse("?!cond{text}")
            ConditionFormat(name='cond', negated=True, content=TextFormat(text='text'))

    """

    return _FormatParser(template).parse()


_SPECIAL_CHARS = "[?@$\\"

_ESCAPE_RE = re.compile(r"[\[\]?@$\\{},]")
_VARIABLE_TAIL_RE = re.compile(r"[\w+-]")

_COLOR_RE = re.compile(r"([^\[\]:]*):")
_VARIABLE_RE = re.compile(r"\$(\+?)([^\W\d_][\w-]*)(\+?)")
_CONDITION_RE = re.compile(r"\?(!?)([^\W\d_][\w-]*)\{")
_FUNCTION_RE = re.compile(r"@([^\W\d_][\w-]*)\{")


class _FormatParser:
    def __init__(self, text: str):
        self._text = text
        self._pos = 0

    def parse(self) -> Format:
        return self._parse("")

    def _parse(self, stop: str) -> Format:
        text = self._text
        element: Format = NO_CONTENT

        while self._pos < len(text):
            char = text[self._pos]
            if char == "[":
                element = combine(element, self._parse_color())
            elif char == "?":
                element = combine(element, self._parse_condition())
            elif char == "@":
                element = combine(element, self._parse_function())
            elif char == "$":
                element = combine(element, self._parse_variable())
            elif char == "\\":
                if self._pos + 1 < len(text):
                    element = combine(element, TextFormat(text[self._pos + 1]))
                self._pos += 2
            else:
                next_special = _find_any(text, _SPECIAL_CHARS, self._pos)
                next_stop = _find_any(text, stop, self._pos)
                if next_stop < next_special:
                    if next_stop > self._pos:
                        element = combine(
                            element, TextFormat(text[self._pos : next_stop])
                        )
                        self._pos = next_stop
                    return element
                element = combine(element, TextFormat(text[self._pos : next_special]))
                self._pos = next_special

        return element

    def _consume(self, char: str):
        if self._pos < len(self._text) and self._text[self._pos] == char:
            self._pos += 1

    def _parse_color(self) -> Format:
        self._pos += 1

        color = ""
        if match := _COLOR_RE.match(self._text, self._pos):
            color = match.group(1)
            self._pos = match.end()

        content = self._parse("]")
        self._consume("]")

        if not color.strip() or isinstance(content, NoContentFormat):
            return content
        else:
            return ColorFormat(color, content)

    def _parse_variable(self) -> Format:
        match = _VARIABLE_RE.match(self._text, self._pos)
        if match is None:
            self._pos += 1
            return TextFormat("$")

        self._pos = match.end()
        left, name, right = match.groups()
        if left and right:
            padding = Padding.PAD_BOTH
        elif left:
            padding = Padding.PAD_LEFT
        elif right:
            padding = Padding.PAD_RIGHT
        else:
            padding = Padding.NONE
        return VariableFormat(name, padding)

    def _parse_condition(self) -> Format:
        match = _CONDITION_RE.match(self._text, self._pos)
        if match is None:
            self._pos += 1
            return TextFormat("?")

        self._pos = match.end()
        negated, name = match.groups()
        content = self._parse("}")
        self._consume("}")
        return ConditionFormat(name, bool(negated), content)

    def _parse_function(self) -> Format:
        match = _FUNCTION_RE.match(self._text, self._pos)
        if match is None:
            self._pos += 1
            return TextFormat("@")

        self._pos = match.end()
        arguments: list[Format] = []
        while self._pos < len(self._text) and self._text[self._pos - 1] != "}":
            arguments.append(self._parse("},"))
            # Skip the separator, or the closing brace.
            self._pos += 1
        return FunctionFormat(match.group(1), tuple(arguments))


def _find_any(text: str, chars: str, start: int) -> int:
    return min(
        (i for i in (text.find(c, start) for c in chars) if i >= 0),
        default=len(text),
    )
