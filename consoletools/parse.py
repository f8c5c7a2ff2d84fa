# ConsoleTools project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Parsers convert user input to values of a specific type.

Parsers raise :class:`ParsingError` if input can't be parsed.
The error carries a colored message that can be displayed to the user::

    >>> Int().parse("42")
    42
    >>> Int().parse("forty two")
    Traceback (most recent call last):
    ...
    consoletools.parse.ParsingError: 'forty two' is not a valid integer

Parsers for common types are collected in a :class:`ParserRegistry`::

    >>> ParserRegistry.DEFAULT.get(bool).parse("Yes")
    True


Base parser
-----------

.. autoclass:: Parser
   :members:

.. autoclass:: ParsingError
   :members:


Value parsers
-------------

.. autoclass:: Str

.. autoclass:: Int

.. autoclass:: Float

.. autoclass:: Bool

.. autoclass:: Enum

.. autoclass:: Func

.. autoclass:: Regex


Parser registry
---------------

.. autoclass:: ParserRegistry
   :members:

.. autoclass:: MissingParserError

"""

from __future__ import annotations

import abc
import enum
import re
import types
import typing

import consoletools.color
import consoletools.string
from consoletools import _typing as _t

__all__ = [
    "Bool",
    "Enum",
    "Float",
    "Func",
    "Int",
    "MissingParserError",
    "Parser",
    "ParserRegistry",
    "ParsingError",
    "Regex",
    "Str",
]

T = _t.TypeVar("T")
T_co = _t.TypeVar("T_co", covariant=True)
E = _t.TypeVar("E", bound=enum.Enum)


class ParsingError(ValueError):
    """
    Raised when parsing fails.

    :param message:
        error message, either a colored string or a string with inline
        color markup.

    """

    def __init__(self, message: consoletools.string.AnyString, /):
        self.message = consoletools.string.to_colored(message)
        """
        Colored error message.

        """

        super().__init__(self.message.content)


def _value_error(value: str, explanation: str, /) -> consoletools.string.ColoredString:
    # User input is never parsed as markup.
    return consoletools.string.ColoredString(
        [
            consoletools.string.Segment(
                f"'{value}'", consoletools.color.Colors.ERROR_VALUE
            ),
            consoletools.string.Segment(
                f" {explanation}", consoletools.color.Colors.ERROR_MESSAGE
            ),
        ]
    )


class Parser(abc.ABC, _t.Generic[T_co]):
    """
    Base class for parsers.

    """

    @abc.abstractmethod
    def parse(self, value: str, /) -> T_co:
        """
        Parse user input, raise :class:`ParsingError` on failure.

        :param value:
            value to parse.

        """


class Str(Parser[str]):
    """
    Parser for str values. Returns input as is.

    """

    def parse(self, value: str, /) -> str:
        return value


class Int(Parser[int]):
    """
    Parser for int values.

    """

    def parse(self, value: str, /) -> int:
        try:
            return int(value.strip())
        except ValueError:
            raise ParsingError(_value_error(value, "is not a valid integer")) from None


class Float(Parser[float]):
    """
    Parser for float values.

    """

    def parse(self, value: str, /) -> float:
        try:
            return float(value.strip())
        except ValueError:
            raise ParsingError(_value_error(value, "is not a valid number")) from None


class Bool(Parser[bool]):
    """
    Parser for bool values, such as ``"yes"`` or ``"no"``.

    """

    def parse(self, value: str, /) -> bool:
        folded = value.strip().casefold()

        if folded in ("y", "yes", "true"):
            return True
        elif folded in ("n", "no", "false"):
            return False
        else:
            raise ParsingError(_value_error(value, "is not a supported boolean value"))


class Enum(Parser[E], _t.Generic[E]):
    """
    Parser for enums, as defined in the standard :mod:`enum` module.
    Input is matched against names of enum members, ignoring case.

    :param enum_type:
        enum class that will be used to parse and extract values.

    """

    def __init__(self, enum_type: type[E], /):
        self.__enum_type = enum_type

    def parse(self, value: str, /) -> E:
        folded = value.strip().casefold()
        for member in self.__enum_type:
            if member.name.casefold() == folded:
                return member
        raise ParsingError(
            _value_error(value, f"is not a valid {self.__enum_type.__name__}")
        )


class Func(Parser[T], _t.Generic[T]):
    """
    Parser that calls a function. If the function fails with an exception,
    input is considered invalid::

        >>> Func(bytes.fromhex, "hex string").parse("zz")
        Traceback (most recent call last):
        ...
        consoletools.parse.ParsingError: Failed to parse 'zz' as hex string

    :param fn:
        function that converts input to a value.
    :param type_name:
        name of the resulting type that's used in error messages.

    """

    def __init__(self, fn: _t.Callable[[str], T], type_name: str, /):
        self.__fn = fn
        self.__type_name = type_name

    def parse(self, value: str, /) -> T:
        try:
            return self.__fn(value)
        except ParsingError:
            raise
        except Exception as e:
            prefix = consoletools.string.ColoredString.from_content(
                "Failed to parse ", consoletools.color.Colors.ERROR_MESSAGE
            )
            raise ParsingError(
                prefix + _value_error(value, f"as {self.__type_name}")
            ) from e


class Regex(Parser[T], _t.Generic[T]):
    """
    Parser that checks input against a regular expression, and converts
    the match to a value. The whole input should match::

        >>> parser = Regex(r"(\\d+)x(\\d+)", lambda m: (int(m[1]), int(m[2])))
        >>> parser.parse("1920x1080")
        (1920, 1080)

    :param pattern:
        regular expression.
    :param fn:
        function that receives a match object and returns a value.

    """

    def __init__(
        self, pattern: str | re.Pattern[str], fn: _t.Callable[[re.Match[str]], T], /
    ):
        if isinstance(pattern, str):
            pattern = re.compile(pattern)
        self.__pattern = pattern
        self.__fn = fn

    def parse(self, value: str, /) -> T:
        if match := self.__pattern.fullmatch(value):
            return self.__fn(match)
        raise ParsingError(
            _value_error(value, f"does not match pattern {self.__pattern.pattern}")
        )


class MissingParserError(LookupError):
    """
    Raised when a parser registry doesn't have a parser for the requested type.

    """


@_t.final
class ParserRegistry:
    """ParserRegistry(parsers: ~typing.Mapping[type, Parser] = {}, /)

    An immutable mapping from types to parsers.

    Use :attr:`~ParserRegistry.DEFAULT` as a starting point, and add parsers
    for your own types::

        >>> class Color(enum.Enum):
        ...     RED = 1
        ...     GREEN = 2
        >>> registry = ParserRegistry.DEFAULT.with_(Color, Enum(Color))
        >>> registry.get(Color).parse("green")
        <Color.GREEN: 2>

    """

    def __init__(self, parsers: _t.Mapping[type, Parser[_t.Any]] = {}, /):
        self.__parsers: _t.Mapping[type, Parser[_t.Any]] = types.MappingProxyType(
            dict(parsers)
        )

    EMPTY: typing.ClassVar[ParserRegistry]
    """
    Registry without any parsers.

    """

    DEFAULT: typing.ClassVar[ParserRegistry]
    """
    Registry with parsers for :class:`str`, :class:`int`,
    :class:`float`, and :class:`bool`.

    """

    def with_(self, ty: type[T], parser: Parser[T], /) -> ParserRegistry:
        """
        Return a copy of this registry with a parser for the given type.
        An existing parser for this type is replaced.

        """

        return ParserRegistry({**self.__parsers, ty: parser})

    def without(self, ty: type, /) -> ParserRegistry:
        """
        Return a copy of this registry without a parser for the given type.

        """

        return ParserRegistry({k: v for k, v in self.__parsers.items() if k is not ty})

    def get(self, ty: type[T], /) -> Parser[T]:
        """
        Find a parser for the given type.

        :raises:
            :class:`MissingParserError` if there's no such parser.

        """

        parser = self.__parsers.get(ty)
        if parser is None:
            raise MissingParserError(f"no parser registered for {ty!r}")
        return parser

    def try_get(self, ty: type[T], /) -> Parser[T] | None:
        """
        Find a parser for the given type, return :data:`None` if there's no such parser.

        """

        return self.__parsers.get(ty)

    def __contains__(self, ty: object, /) -> bool:
        return ty in self.__parsers

    def __len__(self) -> int:
        return len(self.__parsers)

    def __repr__(self) -> str:
        return f"ParserRegistry({dict(self.__parsers)!r})"


ParserRegistry.EMPTY = ParserRegistry()
ParserRegistry.DEFAULT = ParserRegistry(
    {
        str: Str(),
        int: Int(),
        float: Float(),
        bool: Bool(),
    }
)
