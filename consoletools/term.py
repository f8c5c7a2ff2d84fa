# ConsoleTools project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Writing colored strings to a terminal, and reading user input from it.

Colors in :class:`~consoletools.string.ColoredString` are just names.
To display them, a :class:`Console` looks up each name in a :class:`ColorTable`,
and converts the result to ANSI escape codes::

    >>> import io
    >>> term = Term(io.StringIO(), io.StringIO(), color_support=ColorSupport.ANSI)
    >>> console = Console(term, ColorTable.SYSTEM)
    >>> console.write("[red:error:] file not found")
    >>> term.ostream.getvalue()
    '\\x1b[91merror:\\x1b[0m file not found'


Console
-------

.. autoclass:: Console
   :members:

.. autofunction:: get_console

.. autofunction:: setup


Color tables
------------

.. autoclass:: ColorTable
   :members:

.. autoclass:: ConsoleColor
   :members:

.. autoclass:: ColorTableWarning


Detecting terminal capabilities
-------------------------------

.. autofunction:: get_term_from_stream

.. autoclass:: Term
   :members:

.. autoclass:: ColorSupport
   :members:

.. autofunction:: detect_ci

"""

from __future__ import annotations

import dataclasses
import enum
import os
import sys
import threading
import types
import typing
import warnings
from dataclasses import dataclass

import consoletools
import consoletools.color
import consoletools.string
from consoletools import _typing as _t

__all__ = [
    "ColorSupport",
    "ColorTable",
    "ColorTableWarning",
    "Console",
    "ConsoleColor",
    "Term",
    "detect_ci",
    "get_console",
    "get_term_from_stream",
    "setup",
]


class ColorTableWarning(consoletools.ConsoleToolsWarning):
    """
    Emitted when a color name is not found in a color table.

    """


class ConsoleColor(enum.Enum):
    """
    Sixteen standard terminal colors.

    Values are ANSI codes for setting the foreground color.

    """

    BLACK = 30
    DARK_RED = 31
    DARK_GREEN = 32
    DARK_YELLOW = 33
    DARK_BLUE = 34
    DARK_MAGENTA = 35
    DARK_CYAN = 36
    GRAY = 37
    DARK_GRAY = 90
    RED = 91
    GREEN = 92
    YELLOW = 93
    BLUE = 94
    MAGENTA = 95
    CYAN = 96
    WHITE = 97

    @property
    def fore_code(self) -> int:
        """
        ANSI code for using this color as foreground.

        """

        return self.value

    @property
    def back_code(self) -> int:
        """
        ANSI code for using this color as background.

        """

        return self.value + 10


@_t.final
class ColorTable:
    """ColorTable(colors: ~typing.Mapping[str, ConsoleColor | None] = {}, /)

    An immutable mapping from color names to terminal colors.

    A name mapped to :data:`None` is known to the table, but renders
    without any color.

    Names are case-insensitive::

        >>> ColorTable.SYSTEM.get("DarkRed")
        <ConsoleColor.DARK_RED: 31>
        >>> ColorTable.SYSTEM.get("dark_red")
        <ConsoleColor.DARK_RED: 31>

    """

    def __init__(self, colors: _t.Mapping[str, ConsoleColor | None] = {}, /):
        self.__colors: _t.Mapping[str, ConsoleColor | None] = types.MappingProxyType(
            {_normalize_name(name): color for name, color in colors.items()}
        )

    EMPTY: typing.ClassVar[ColorTable]
    """
    Color table without any colors.

    """

    SYSTEM: typing.ClassVar[ColorTable]
    """
    Color table with names of all :class:`ConsoleColor` members,
    with and without underscores. I.e. ``dark_red`` and ``darkred``.

    """

    DEFAULT: typing.ClassVar[ColorTable]
    """
    :attr:`~ColorTable.SYSTEM` table, plus colors
    for :class:`~consoletools.color.Colors`.

    """

    @property
    def colors(self) -> _t.Mapping[str, ConsoleColor | None]:
        """
        Contents of this table. Keys are normalized to lowercase.

        """

        return self.__colors

    def with_(self, name: str, color: ConsoleColor | None, /) -> ColorTable:
        """
        Return a copy of this table with an additional color.

        """

        if not name.strip():
            raise ValueError("color name can't be empty")
        return ColorTable({**self.__colors, name: color})

    def with_color(
        self,
        color: consoletools.color.Color,
        foreground: ConsoleColor | None,
        background: ConsoleColor | None,
        /,
    ) -> ColorTable:
        """
        Return a copy of this table that maps names from ``color``
        to the given terminal colors.

        If ``foreground`` or ``background`` is :data:`None`,
        the corresponding name renders without color.

        """

        table = self
        for name, value in [
            (color.foreground, foreground),
            (color.background, background),
        ]:
            if name is not None:
                table = table.with_(name, value)
        return table

    def without(self, name: str, /) -> ColorTable:
        """
        Return a copy of this table without the given color.

        """

        name = _normalize_name(name)
        return ColorTable({k: v for k, v in self.__colors.items() if k != name})

    def get(self, name: str, /) -> ConsoleColor | None:
        """
        Find a color by its name.

        """

        return self.__colors.get(_normalize_name(name))

    def __contains__(self, name: object, /) -> bool:
        return isinstance(name, str) and _normalize_name(name) in self.__colors

    def __len__(self) -> int:
        return len(self.__colors)

    def __eq__(self, value: object, /) -> bool:
        if isinstance(value, ColorTable):
            return self.__colors == value.__colors
        else:
            return NotImplemented

    def __ne__(self, value: object, /) -> bool:
        return not (self == value)

    def __hash__(self) -> int:
        return hash(frozenset(self.__colors.items()))

    def __repr__(self) -> str:
        return f"ColorTable({dict(self.__colors)!r})"


def _normalize_name(name: str) -> str:
    return name.strip().casefold()


def _system_colors() -> dict[str, ConsoleColor]:
    colors = {}
    for color in ConsoleColor:
        colors[color.name.lower()] = color
        colors[color.name.lower().replace("_", "")] = color
    return colors


ColorTable.EMPTY = ColorTable()
ColorTable.SYSTEM = ColorTable(_system_colors())
ColorTable.DEFAULT = (
    ColorTable.SYSTEM.with_color(
        consoletools.color.Colors.ERROR_MESSAGE, ConsoleColor.GRAY, None
    )
    .with_color(consoletools.color.Colors.ERROR_VALUE, ConsoleColor.WHITE, None)
    .with_color(
        consoletools.color.Colors.UNKNOWN_FORMAT_VARIABLE, ConsoleColor.RED, None
    )
    .with_color(
        consoletools.color.Colors.UNKNOWN_FORMAT_CONDITION, ConsoleColor.RED, None
    )
    .with_color(
        consoletools.color.Colors.UNKNOWN_FORMAT_FUNCTION, ConsoleColor.RED, None
    )
)


class ColorSupport(enum.IntEnum):
    """
    Terminal's capability for coloring output.

    """

    NONE = 0
    """
    Color codes are not supported.

    """

    ANSI = 1
    """
    Sixteen standard ANSI colors are supported.

    """


@dataclass(frozen=True)
class Term:
    """
    This class contains streams of a terminal and info about what kinds
    of things the terminal supports.

    """

    ostream: _t.TextIO
    """
    Terminal's output stream.

    """

    istream: _t.TextIO
    """
    Terminal's input stream.

    """

    color_support: ColorSupport = dataclasses.field(
        default=ColorSupport.NONE, kw_only=True
    )
    """
    Terminal's capability for coloring output.

    """

    @property
    def supports_colors(self) -> bool:
        """
        Return :data:`True` if terminal supports simple 8-bit color codes.

        """

        return self.color_support >= ColorSupport.ANSI


_CI_ENV_VARS = [
    "TRAVIS",
    "CIRCLECI",
    "APPVEYOR",
    "GITLAB_CI",
    "BUILDKITE",
    "DRONE",
    "TEAMCITY_VERSION",
    "GITHUB_ACTIONS",
]


def get_term_from_stream(ostream: _t.TextIO, istream: _t.TextIO, /) -> Term:
    """
    Query info about a terminal attached to the given streams.

    Colors are enabled if output is a TTY that looks like it understands ANSI
    escape codes. Environment variables ``FORCE_COLOR``, ``NO_COLOR``
    and ``FORCE_NO_COLOR``, as well as command line flags ``--color``
    and ``--no-color``, override this detection.

    :param ostream:
        output stream.
    :param istream:
        input stream.

    """

    explicit_color_settings = _detect_explicit_color_settings()

    output_is_tty = _output_is_tty(ostream)
    term = os.environ.get("TERM", "").lower()
    colorterm = os.environ.get("COLORTERM", "").lower()

    color_support = ColorSupport.NONE
    if explicit_color_settings:
        color_support = ColorSupport.ANSI
    if output_is_tty and explicit_color_settings is not False:
        if detect_ci():
            if any(ci in os.environ for ci in _CI_ENV_VARS):
                color_support = ColorSupport.ANSI
        elif os.name == "nt":
            color_support = ColorSupport.ANSI
        elif colorterm or any(
            kind in term for kind in ("linux", "color", "ansi", "xterm", "screen")
        ):
            color_support = ColorSupport.ANSI

    consoletools._logger.debug(
        "detected color support %s for %r", color_support.name, ostream
    )

    return Term(ostream, istream, color_support=color_support)


def _detect_explicit_color_settings():
    color_support = None

    if "FORCE_COLOR" in os.environ:
        color_support = True

    if "NO_COLOR" in os.environ or "FORCE_NO_COLOR" in os.environ:
        color_support = False

    # Flags are checked before any argument parsing happens.
    for arg in sys.argv[1:]:
        if arg in ("--color", "--force-color"):
            color_support = True
        elif arg in ("--no-color", "--force-no-color"):
            color_support = False
        elif arg.startswith(("--color=", "--colors=")):
            value = arg.split("=", maxsplit=1)[1].casefold()
            if value in ["1", "yes", "true"]:
                color_support = True
            elif value in ["0", "no", "false"]:
                color_support = False

    return color_support


def detect_ci() -> bool:
    """
    Scan environment variables to detect if we're in a known CI environment.

    """

    return "CI" in os.environ or any(ci in os.environ for ci in _CI_ENV_VARS)


def _is_tty(stream: _t.TextIO | None) -> bool:
    try:
        return stream is not None and stream.isatty()
    except Exception:  # pragma: no cover
        return False


def _output_is_tty(stream: _t.TextIO | None) -> bool:
    try:
        return stream is not None and _is_tty(stream) and stream.writable()
    except Exception:  # pragma: no cover
        return False


class Console:
    """
    Writes colored strings to a terminal and reads user input.

    :param term:
        terminal to work with.
    :param color_table:
        table that maps color names to terminal colors.

    """

    def __init__(self, term: Term, color_table: ColorTable | None = None, /):
        self.__term = term
        if color_table is None:
            color_table = ColorTable.DEFAULT
        self.__color_table = color_table
        self.__reported_names: set[str] = set()

    @property
    def term(self) -> Term:
        """
        Terminal used by this console.

        """

        return self.__term

    @property
    def color_table(self) -> ColorTable:
        """
        Color table used by this console.

        """

        return self.__color_table

    def write(self, value: consoletools.string.AnyString, /):
        """
        Write a colored string, or a string with inline color markup.

        Each colored segment is wrapped into ANSI escape codes, unless
        the terminal doesn't support colors.

        """

        ostream = self.__term.ostream
        for segment in consoletools.string.to_colored(value):
            codes = self.__codes(segment.color) if self.__term.supports_colors else []
            if codes:
                ostream.write(f"\x1b[{';'.join(codes)}m{segment.content}\x1b[0m")
            else:
                ostream.write(segment.content)
        ostream.flush()

    def write_line(self, value: consoletools.string.AnyString = "", /):
        """
        Write a colored string followed by a newline.

        """

        self.write(value)
        self.__term.ostream.write("\n")
        self.__term.ostream.flush()

    def read_line(self) -> str:
        """
        Read a line of input, without the trailing newline.

        :raises:
            :class:`EOFError` if the input stream is exhausted.

        """

        self.__term.ostream.flush()
        line = self.__term.istream.readline()
        if not line:
            raise EOFError("end of input")
        return line.removesuffix("\n").removesuffix("\r")

    def read_char(self) -> str:
        """
        Read a single character of input.

        :raises:
            :class:`EOFError` if the input stream is exhausted.

        """

        self.__term.ostream.flush()
        char = self.__term.istream.read(1)
        if not char:
            raise EOFError("end of input")
        return char

    def __codes(self, color: consoletools.color.Color) -> list[str]:
        codes = []
        if color.foreground is not None:
            if (console_color := self.__lookup(color.foreground)) is not None:
                codes.append(str(console_color.fore_code))
        if color.background is not None:
            if (console_color := self.__lookup(color.background)) is not None:
                codes.append(str(console_color.back_code))
        return codes

    def __lookup(self, name: str) -> ConsoleColor | None:
        console_color = self.__color_table.get(name)
        if name not in self.__color_table:
            key = _normalize_name(name)
            if key not in self.__reported_names:
                self.__reported_names.add(key)
                warnings.warn(f"unknown color {name!r}", ColorTableWarning)
        return console_color


_CONSOLE_LOCK = threading.Lock()
_CONSOLE: Console | None = None


def get_console() -> Console:
    """
    Get a console attached to the standard streams.

    The console is created on first use; :func:`setup` replaces it.
    Functions in this library never use this console implicitly,
    it's a convenience for scripts.

    """

    global _CONSOLE

    if _CONSOLE is None:
        with _CONSOLE_LOCK:
            if _CONSOLE is None:
                _CONSOLE = Console(_default_term())
    return _CONSOLE


def setup(
    *,
    term: Term | None = None,
    color_table: ColorTable | None = None,
) -> Console:
    """
    Configure the console returned by :func:`get_console`.

    :param term:
        terminal that will be used for input and output.

        If not passed, the terminal is not re-configured; the default is to use
        a term attached to :data:`sys.stdout` and :data:`sys.stdin`.
    :param color_table:
        color table that will be used for output.

        If not passed, the color table is not re-configured; the default is to use
        :attr:`ColorTable.DEFAULT`.
    :returns:
        the new console.

    """

    global _CONSOLE

    with _CONSOLE_LOCK:
        if term is None:
            if _CONSOLE is not None:
                term = _CONSOLE.term
            else:
                term = _default_term()
        if color_table is None:
            if _CONSOLE is not None:
                color_table = _CONSOLE.color_table
            else:
                color_table = ColorTable.DEFAULT
        _CONSOLE = Console(term, color_table)
    return _CONSOLE


def _default_term() -> Term:
    return get_term_from_stream(sys.__stdout__, sys.__stdin__)  # type: ignore
