# ConsoleTools project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Validators check parsed values, and raise :class:`ValidationError`
with a colored message if a value is not acceptable.

Validators are combined with ``&``::

    >>> positive = Where(lambda x: x > 0, "value should be positive")
    >>> even = Where(lambda x: x % 2 == 0, lambda x: f"[error_value_f:{x}] is odd")
    >>> (positive & even).validate(3)
    Traceback (most recent call last):
    ...
    consoletools.validate.ValidationError: 3 is odd

.. autoclass:: Validator
   :members:

.. autoclass:: Where

.. autoclass:: And

.. autoclass:: ValidationError
   :members:

"""

from __future__ import annotations

import abc
import typing

import consoletools.color
import consoletools.string
from consoletools import _typing as _t

__all__ = [
    "And",
    "ValidationError",
    "Validator",
    "Where",
]

T = _t.TypeVar("T")
T_contra = _t.TypeVar("T_contra", contravariant=True)


class ValidationError(ValueError):
    """
    Raised when validation fails.

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


class Validator(abc.ABC, _t.Generic[T_contra]):
    """
    Base class for validators.

    """

    NO_RULES: typing.ClassVar[Validator[_t.Any]]
    """
    Validator that accepts all values.

    """

    @abc.abstractmethod
    def validate(self, value: T_contra, /):
        """
        Check a value, raise :class:`ValidationError` if it's not valid.

        """

    def __and__(self, other: Validator[T_contra], /) -> Validator[T_contra]:
        if not isinstance(other, Validator):
            return NotImplemented
        return And(self, other)


class _NoRules(Validator[object]):
    def validate(self, value: object, /):
        pass

    def __repr__(self) -> str:
        return "Validator.NO_RULES"


Validator.NO_RULES = _NoRules()


class Where(Validator[T], _t.Generic[T]):
    """
    Validator that checks a predicate.

    :param predicate:
        function that returns :data:`True` for valid values.
    :param message:
        error message for invalid values. Can be a colored string, a string with
        inline color markup, or a function that builds a message
        for the given value. By default, the message
        is ``'value' is not a valid value``.

    """

    def __init__(
        self,
        predicate: _t.Callable[[T], bool],
        message: (
            consoletools.string.AnyString
            | _t.Callable[[T], consoletools.string.AnyString]
            | None
        ) = None,
        /,
    ):
        if not callable(predicate):
            raise TypeError(f"predicate must be callable, got {predicate!r}")
        self.__predicate = predicate
        self.__message = message

    def validate(self, value: T, /):
        if self.__predicate(value):
            return

        if self.__message is None:
            message = consoletools.string.ColoredString(
                [
                    consoletools.string.Segment(
                        f"'{value}'", consoletools.color.Colors.ERROR_VALUE
                    ),
                    consoletools.string.Segment(
                        " is not a valid value",
                        consoletools.color.Colors.ERROR_MESSAGE,
                    ),
                ]
            )
        elif callable(self.__message):
            message = self.__message(value)
        else:
            message = self.__message
        raise ValidationError(message)


class And(Validator[T], _t.Generic[T]):
    """
    Validator that runs other validators in order,
    and fails on the first failure.

    Nested :class:`And` validators are flattened.

    """

    def __init__(self, *validators: Validator[T]):
        flat: list[Validator[T]] = []
        for validator in validators:
            if isinstance(validator, And):
                flat.extend(validator.validators)
            elif validator is not Validator.NO_RULES:
                flat.append(validator)
        self.__validators = tuple(flat)

    @property
    def validators(self) -> tuple[Validator[T], ...]:
        """
        Validators that are run by this validator.

        """

        return self.__validators

    def validate(self, value: T, /):
        for validator in self.__validators:
            validator.validate(value)
