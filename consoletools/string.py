# ConsoleTools project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Colored strings are the output of formatting, and the input of console writers.
Here they are stored as immutable sequences of same-colored segments.

This is a low-level module upon which :mod:`consoletools.formatter`
and :mod:`consoletools.term` build.

.. autoclass:: ColoredString
   :members:

.. autoclass:: Segment
   :members:


Inline color markup
-------------------

:meth:`ColoredString.parse` understands a simple markup: ``[color:text]``
paints ``text`` with ``color`` (parsed by :meth:`Color.parse
<consoletools.color.Color.parse>`), blocks can be nested, and a backslash
escapes the next character::

    >>> ColoredString.parse("[red:error:] file [data] not found").content
    'error: file [data] not found'

A block without a colon, such as ``[data]`` above, is kept as is.

Unlike the :mod:`format mini-language <consoletools.format>`,
this markup knows nothing about variables, conditions or functions.

"""

from __future__ import annotations

import functools
from dataclasses import dataclass

import consoletools.color
from consoletools import _typing as _t

__all__ = [
    "AnyString",
    "ColoredString",
    "Segment",
    "to_colored",
]


@dataclass(frozen=True)
class Segment:
    """
    A run of text painted with a single color.

    Whitespace is never colorized meaningfully, so a segment that only contains
    whitespace loses its foreground color::

        >>> Segment("   ", consoletools.color.Color("red", "blue")).color
        Color(background='blue')

    """

    content: str
    """
    Text of this segment.

    """

    color: consoletools.color.Color = consoletools.color.Color.NONE
    """
    Color of this segment.

    """

    def __post_init__(self):
        if not self.content.strip() and self.color.has_foreground:
            object.__setattr__(self, "color", self.color.without_foreground())

    @property
    def has_color(self) -> bool:
        """
        Return :data:`True` if this segment has any color.

        """

        return self.color != consoletools.color.Color.NONE


@_t.final
class ColoredString:
    """ColoredString(segments: ~typing.Iterable[Segment] = (), /)

    An immutable string with colors.

    Adjacent segments with equal colors are merged on construction,
    and empty segments are dropped. Thus, two colored strings
    with the same text and the same colors are always equal,
    regardless of how they were built::

        >>> a = ColoredString(
        ...     [
        ...         Segment("hello ", consoletools.color.Color("red")),
        ...         Segment("world", consoletools.color.Color("RED")),
        ...     ]
        ... )
        >>> a == ColoredString.parse("[red:hello world]")
        True
        >>> len(a.segments)
        1

    Colored strings support concatenation, indexing, and slicing::

        >>> s = ColoredString.parse("[blue:test1]test2")
        >>> s[0] == ColoredString.parse("[blue:t]")
        True
        >>> s[3:7] == ColoredString.parse("[blue:t1]te")
        True
        >>> (s + " and more").content
        'test1test2 and more'

    """

    def __init__(self, segments: _t.Iterable[Segment] = (), /):
        merged: list[Segment] = []
        for segment in segments:
            if not segment.content:
                continue
            if merged and merged[-1].color == segment.color:
                merged[-1] = Segment(
                    merged[-1].content + segment.content, segment.color
                )
            else:
                merged.append(segment)
        self.__segments = tuple(merged)

    EMPTY: _t.ClassVar[ColoredString]
    """
    Empty string.

    """

    @classmethod
    def from_content(
        cls,
        content: str,
        color: consoletools.color.Color = consoletools.color.Color.NONE,
        /,
    ) -> ColoredString:
        """
        Create a colored string that consists of a single segment.

        No markup parsing is applied to ``content``.

        """

        return cls([Segment(content, color)])

    @classmethod
    def parse(cls, content: str, /) -> ColoredString:
        """
        Parse inline color markup and produce a colored string.

        :param content:
            text with ``[color:text]`` blocks and backslash escapes.
        :returns:
            a colored string.

        """

        return cls(_parse_segments(content, consoletools.color.Color.NONE))

    @property
    def segments(self) -> tuple[Segment, ...]:
        """
        Segments of this string.

        """

        return self.__segments

    @functools.cached_property
    def content(self) -> str:
        """
        Text of this string, without colors.

        """

        return "".join(segment.content for segment in self.__segments)

    @functools.cached_property
    def has_colors(self) -> bool:
        """
        Return :data:`True` if any part of this string is colored.

        """

        return any(segment.has_color for segment in self.__segments)

    def with_color(self, color: consoletools.color.Color, /) -> ColoredString:
        """
        Return a copy of this string with all segments painted with ``color``.

        """

        return ColoredString.from_content(self.content, color)

    def without_colors(self) -> ColoredString:
        """
        Return a copy of this string with all colors removed.

        """

        return ColoredString.from_content(self.content)

    @_t.overload
    def __getitem__(self, index: int, /) -> ColoredString: ...

    @_t.overload
    def __getitem__(self, index: slice, /) -> ColoredString: ...

    def __getitem__(self, index: int | slice, /) -> ColoredString:
        if isinstance(index, slice):
            start, stop, step = index.indices(len(self))
            if step != 1:
                raise ValueError("colored strings can't be sliced with a step")
            return self.__slice(start, stop)

        offset = index + len(self) if index < 0 else index
        if not 0 <= offset < len(self):
            raise IndexError("colored string index out of range")
        for segment in self.__segments:
            if offset < len(segment.content):
                return ColoredString.from_content(
                    segment.content[offset], segment.color
                )
            offset -= len(segment.content)
        raise AssertionError("unreachable")  # pragma: no cover

    def __slice(self, start: int, stop: int) -> ColoredString:
        result: list[Segment] = []
        pos = 0
        for segment in self.__segments:
            end = pos + len(segment.content)
            if end > start and pos < stop:
                result.append(
                    Segment(
                        segment.content[max(start - pos, 0) : stop - pos],
                        segment.color,
                    )
                )
            pos = end
            if pos >= stop:
                break
        return ColoredString(result)

    def __len__(self) -> int:
        return len(self.content)

    def __bool__(self) -> bool:
        return bool(self.__segments)

    def __iter__(self) -> _t.Iterator[Segment]:
        return iter(self.__segments)

    def __add__(self, rhs: AnyString) -> ColoredString:
        if isinstance(rhs, str):
            rhs = ColoredString.parse(rhs)
        elif not isinstance(rhs, ColoredString):
            return NotImplemented
        return ColoredString(self.__segments + rhs.__segments)

    def __radd__(self, lhs: AnyString) -> ColoredString:
        if isinstance(lhs, str):
            lhs = ColoredString.parse(lhs)
        elif not isinstance(lhs, ColoredString):
            return NotImplemented
        return ColoredString(lhs.__segments + self.__segments)

    def __eq__(self, value: object) -> bool:
        if isinstance(value, ColoredString):
            return self.__segments == value.__segments
        else:
            return NotImplemented

    def __ne__(self, value: object) -> bool:
        return not (self == value)

    def __hash__(self) -> int:
        return hash(self.__segments)

    def __str__(self) -> str:
        return self.content

    def __repr__(self) -> str:
        return f"ColoredString({list(self.__segments)!r})"


ColoredString.EMPTY = ColoredString()


AnyString: _t.TypeAlias = "str | ColoredString"
"""
A plain string with inline color markup, or a colored string.

"""


def to_colored(s: AnyString, /) -> ColoredString:
    """
    Convert a markup string to a colored string, pass colored strings through.

    """

    if isinstance(s, ColoredString):
        return s
    else:
        return ColoredString.parse(s)


def _parse_segments(
    value: str, color: consoletools.color.Color
) -> _t.Iterator[Segment]:
    index = 0

    while index < len(value):
        char = value[index]
        if char == "[":
            end = _find_end(value, index)
            block = value[index + 1 : end]
            colon = block.find(":")
            if colon > 0 and block[colon - 1] == "\\":
                colon = -1

            if colon == -1:
                closed = end < len(value)
                yield Segment(f"[{block}]" if closed else f"[{block}", color)
            else:
                inner = consoletools.color.Color.parse(block[:colon])
                if inner == consoletools.color.Color.NONE:
                    inner = color
                yield from _parse_segments(block[colon + 1 :], inner)
            index = end + 1
        elif char == "\\":
            if index + 1 < len(value):
                yield Segment(value[index + 1], color)
            index += 2
        else:
            next_index = _find_any(value, "[\\", index)
            yield Segment(value[index:next_index], color)
            index = next_index


def _find_end(text: str, index: int) -> int:
    # Index of the bracket that closes the one at `index`,
    # or `len(text)` if it's not closed.
    depth = 0
    while index < len(text):
        char = text[index]
        if char == "\\":
            index += 2
            continue
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth == 0:
                return index
        index += 1
    return len(text)


def _find_any(text: str, chars: str, start: int) -> int:
    return min(
        (i for i in (text.find(c, start) for c in chars) if i >= 0),
        default=len(text),
    )
