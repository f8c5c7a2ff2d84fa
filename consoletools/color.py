# ConsoleTools project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Text foreground and background colors are defined by the :class:`Color` class.
A color is a pair of *names*: it doesn't know how a name maps
to an actual terminal color. This decision is deferred
to a :class:`~consoletools.term.ColorTable`.

This is a low-level module upon which :mod:`consoletools.string`
and :mod:`consoletools.formatter` build.

.. autoclass:: Color
   :members:

.. autoclass:: Colors
   :members:

"""

from __future__ import annotations

import typing
from dataclasses import dataclass

__all__ = [
    "Color",
    "Colors",
]


@dataclass(frozen=True, eq=False)
class Color:
    """
    A pair of foreground and background color names.

    Names are compared case-insensitively. Empty names are normalized
    to :data:`None`::

        >>> Color.parse("Red|blue") == Color("red", "BLUE")
        True
        >>> Color.parse("  |  ") == Color.NONE
        True

    """

    foreground: str | None = None
    """
    Name of the foreground color.

    """

    background: str | None = None
    """
    Name of the background color.

    """

    def __post_init__(self):
        if self.foreground is not None and not self.foreground.strip():
            object.__setattr__(self, "foreground", None)
        if self.background is not None and not self.background.strip():
            object.__setattr__(self, "background", None)

    @classmethod
    def parse(cls, color: str, /) -> Color:
        """
        Parse a color from a ``"foreground|background"`` string.

        Either side may be omitted. Whitespace around both sides is ignored.

        :example:
            ::

                >>> Color.parse("red")
                Color('red')
                >>> Color.parse("|red")
                Color(background='red')

        """

        foreground, _, background = color.partition("|")
        return cls(foreground.strip(), background.strip())

    @property
    def has_foreground(self) -> bool:
        """
        Return :data:`True` if this color defines a foreground.

        """

        return self.foreground is not None

    @property
    def has_background(self) -> bool:
        """
        Return :data:`True` if this color defines a background.

        """

        return self.background is not None

    def with_foreground(self, foreground: str, /) -> Color:
        return Color(foreground, self.background)

    def with_background(self, background: str, /) -> Color:
        return Color(self.foreground, background)

    def without_foreground(self) -> Color:
        return Color(None, self.background)

    def without_background(self) -> Color:
        return Color(self.foreground, None)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return _casefold(self.foreground) == _casefold(
            other.foreground
        ) and _casefold(self.background) == _casefold(other.background)

    def __hash__(self) -> int:
        return hash((_casefold(self.foreground), _casefold(self.background)))

    def __str__(self) -> str:
        if self.background is None:
            return self.foreground or ""
        else:
            return f"{self.foreground or ''}|{self.background}"

    def __repr__(self) -> str:
        if self.background is None:
            if self.foreground is None:
                return "Color.NONE"
            return f"Color({self.foreground!r})"
        elif self.foreground is None:
            return f"Color(background={self.background!r})"
        else:
            return f"Color({self.foreground!r}, {self.background!r})"

    NONE: typing.ClassVar[Color]
    """
    No color.

    """


Color.NONE = Color()


def _casefold(name: str | None) -> str | None:
    return name.casefold() if name is not None else None


def _from_name(name: str) -> Color:
    cased = name.lower()
    return Color(f"{cased}_f", f"{cased}_b")


class Colors:
    """
    Predefined colors used when rendering diagnostics and error messages.

    Their names are derived from attribute names, so that a color table
    can assign them actual colors::

        >>> Colors.ERROR_VALUE
        Color('error_value_f', 'error_value_b')

    """

    ERROR_MESSAGE: typing.ClassVar[Color] = _from_name("ERROR_MESSAGE")
    """
    Text of an error message.

    """

    ERROR_VALUE: typing.ClassVar[Color] = _from_name("ERROR_VALUE")
    """
    Offending value quoted in an error message.

    """

    UNKNOWN_FORMAT_VARIABLE: typing.ClassVar[Color] = _from_name(
        "UNKNOWN_FORMAT_VARIABLE"
    )
    """
    Variable reference that a formatter doesn't know about.

    """

    UNKNOWN_FORMAT_CONDITION: typing.ClassVar[Color] = _from_name(
        "UNKNOWN_FORMAT_CONDITION"
    )
    """
    Condition reference that a formatter doesn't know about.

    """

    UNKNOWN_FORMAT_FUNCTION: typing.ClassVar[Color] = _from_name(
        "UNKNOWN_FORMAT_FUNCTION"
    )
    """
    Function call that a formatter doesn't know about.

    """
