# ConsoleTools project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Asking the user for typed values.

:func:`read_line` writes a prompt, reads a line, then parses and validates it.
If the input is not valid, the error is displayed and the user is asked again.

.. invisible-code-block: python

    import io
    from consoletools.term import Console, Term

For example::

    >>> term = Term(io.StringIO(), io.StringIO("abc\\n-5\\n12\\n"))
    >>> console = Console(term)
    >>> configuration = (
    ...     ReadLineConfiguration.for_type(int)
    ...     .with_prompt("Enter age: ")
    ...     .where(lambda x: x >= 0, "age can't be negative")
    ... )
    >>> read_line(console, configuration)
    12
    >>> print(term.ostream.getvalue().rstrip())
    Enter age: 'abc' is not a valid integer
    Enter age: age can't be negative
    Enter age:

:func:`read_char` asks the user to pick one of the options by pressing a key.

.. autoclass:: ReadLineConfiguration
   :members:

.. autofunction:: read_line

.. autofunction:: read_line_or_cancel

.. autoclass:: ReadCharConfiguration
   :members:

.. autofunction:: read_char

.. autofunction:: read_char_or_cancel

"""

from __future__ import annotations

import dataclasses
import types
from dataclasses import dataclass

import consoletools
import consoletools.parse
import consoletools.string
import consoletools.term
import consoletools.validate
from consoletools import _typing as _t

__all__ = [
    "ReadCharConfiguration",
    "ReadLineConfiguration",
    "read_char",
    "read_char_or_cancel",
    "read_line",
    "read_line_or_cancel",
]

T = _t.TypeVar("T")

_ESCAPE = "\x1b"


@dataclass(frozen=True)
class ReadLineConfiguration(_t.Generic[T]):
    """
    Settings for :func:`read_line`.

    Configurations are immutable, use ``with_*`` methods to get an updated copy.

    """

    parser: consoletools.parse.Parser[T]
    """
    Parser for user input.

    """

    prompt: consoletools.string.ColoredString = (
        consoletools.string.ColoredString.EMPTY
    )
    """
    Prompt that's written before reading each line.

    """

    initial: str | None = None
    """
    Input that's used when the user enters an empty line.

    """

    validator: consoletools.validate.Validator[T] = (
        consoletools.validate.Validator.NO_RULES
    )
    """
    Validator for parsed values.

    """

    max_attempts: int | None = None
    """
    Number of attempts the user has to enter a valid value.
    :data:`None` means unlimited attempts.

    """

    def __post_init__(self):
        if self.max_attempts is not None and self.max_attempts <= 0:
            raise ValueError(
                f"max_attempts must be positive, got {self.max_attempts}"
            )
        object.__setattr__(
            self, "prompt", consoletools.string.to_colored(self.prompt)
        )

    @classmethod
    def for_type(
        cls,
        ty: type[T],
        /,
        registry: consoletools.parse.ParserRegistry = (
            consoletools.parse.ParserRegistry.DEFAULT
        ),
    ) -> ReadLineConfiguration[T]:
        """
        Create a configuration with a parser for the given type.

        :raises:
            :class:`~consoletools.parse.MissingParserError` if the registry
            doesn't have a parser for this type.

        """

        return cls(registry.get(ty))

    def with_prompt(
        self, prompt: consoletools.string.AnyString, /
    ) -> ReadLineConfiguration[T]:
        return dataclasses.replace(
            self, prompt=consoletools.string.to_colored(prompt)
        )

    def with_initial(self, initial: str | None, /) -> ReadLineConfiguration[T]:
        return dataclasses.replace(self, initial=initial)

    def with_parser(
        self, parser: consoletools.parse.Parser[T], /
    ) -> ReadLineConfiguration[T]:
        return dataclasses.replace(self, parser=parser)

    def with_validator(
        self, validator: consoletools.validate.Validator[T], /
    ) -> ReadLineConfiguration[T]:
        """
        Replace the validator.

        """

        return dataclasses.replace(self, validator=validator)

    def with_max_attempts(
        self, max_attempts: int | None, /
    ) -> ReadLineConfiguration[T]:
        return dataclasses.replace(self, max_attempts=max_attempts)

    def where(
        self,
        predicate: _t.Callable[[T], bool],
        message: (
            consoletools.string.AnyString
            | _t.Callable[[T], consoletools.string.AnyString]
            | None
        ) = None,
        /,
    ) -> ReadLineConfiguration[T]:
        """
        Add a validation rule, in addition to the existing ones.

        See :class:`~consoletools.validate.Where`.

        """

        where = consoletools.validate.Where(predicate, message)
        return self.with_validator(self.validator & where)


def read_line(
    console: consoletools.term.Console,
    configuration: ReadLineConfiguration[T],
    /,
) -> T:
    """
    Read a value from the console.

    :param console:
        console to interact with.
    :param configuration:
        prompt, parser and validation rules.
    :returns:
        parsed and validated value.
    :raises:
        :class:`EOFError` if input ends, or the last
        :class:`~consoletools.parse.ParsingError`
        or :class:`~consoletools.validate.ValidationError`
        when the user runs out of attempts.

    """

    attempts = 0
    while True:
        console.write(configuration.prompt)
        line = console.read_line()
        if not line and configuration.initial is not None:
            line = configuration.initial
        try:
            value = configuration.parser.parse(line)
            configuration.validator.validate(value)
        except (
            consoletools.parse.ParsingError,
            consoletools.validate.ValidationError,
        ) as e:
            attempts += 1
            consoletools._logger.debug("invalid input %r: %s", line, e)
            console.write_line(e.message)
            if (
                configuration.max_attempts is not None
                and attempts >= configuration.max_attempts
            ):
                raise
        else:
            return value


def read_line_or_cancel(
    console: consoletools.term.Console,
    configuration: ReadLineConfiguration[T],
    /,
) -> T | None:
    """
    Like :func:`read_line`, but returns :data:`None` if input ends.

    """

    try:
        return read_line(console, configuration)
    except EOFError:
        return None


@dataclass(frozen=True)
class ReadCharConfiguration(_t.Generic[T]):
    """
    Settings for :func:`read_char`.

    ::

        >>> configuration = (
        ...     ReadCharConfiguration()
        ...     .with_prompt("Overwrite? [y/n] ")
        ...     .with_option("y", True)
        ...     .with_option("n", False)
        ... )

    """

    prompt: consoletools.string.ColoredString = (
        consoletools.string.ColoredString.EMPTY
    )
    """
    Prompt that's written before reading.

    """

    options: _t.Mapping[str, T] = dataclasses.field(
        default_factory=lambda: types.MappingProxyType({})
    )
    """
    Values for each accepted character.

    """

    def __post_init__(self):
        for char in self.options:
            if len(char) != 1:
                raise ValueError(
                    f"option key must be a single character, got {char!r}"
                )
        object.__setattr__(
            self, "prompt", consoletools.string.to_colored(self.prompt)
        )
        object.__setattr__(
            self, "options", types.MappingProxyType(dict(self.options))
        )

    def with_prompt(
        self, prompt: consoletools.string.AnyString, /
    ) -> ReadCharConfiguration[T]:
        return dataclasses.replace(
            self, prompt=consoletools.string.to_colored(prompt)
        )

    def with_option(self, char: str, value: T, /) -> ReadCharConfiguration[T]:
        """
        Add an option, replacing any existing option for the same character.

        """

        return dataclasses.replace(self, options={**self.options, char: value})


def read_char(
    console: consoletools.term.Console,
    configuration: ReadCharConfiguration[T],
    /,
) -> T:
    """
    Ask the user to press one of the option keys.

    Characters that don't correspond to any option are ignored.

    :param console:
        console to interact with.
    :param configuration:
        prompt and options.
    :returns:
        value of the selected option.
    :raises:
        :class:`ValueError` if there are no options,
        :class:`EOFError` if input ends.

    """

    if not configuration.options:
        raise ValueError("at least one option is required")

    console.write(configuration.prompt)
    while True:
        char = console.read_char()
        if char in configuration.options:
            console.write_line()
            return configuration.options[char]


def read_char_or_cancel(
    console: consoletools.term.Console,
    configuration: ReadCharConfiguration[T],
    /,
) -> T | None:
    """
    Like :func:`read_char`, but returns :data:`None` if the user presses escape,
    or if input ends.

    """

    if not configuration.options:
        raise ValueError("at least one option is required")

    console.write(configuration.prompt)
    while True:
        try:
            char = console.read_char()
        except EOFError:
            return None
        if char == _ESCAPE:
            console.write_line()
            return None
        if char in configuration.options:
            console.write_line()
            return configuration.options[char]
