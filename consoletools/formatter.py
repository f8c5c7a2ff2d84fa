# ConsoleTools project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Formatter evaluates a parsed template against a data item, producing
a :class:`~consoletools.string.ColoredString`.

A formatter knows three kinds of names: *variables*, which extract text
from an item, *conditions*, which test an item, and *functions*, which
receive unevaluated template arguments and render them however they like.

.. invisible-code-block: python

    from dataclasses import dataclass, field
    from consoletools.color import Colors
    from consoletools.format import parse
    from consoletools.string import ColoredString

Let's format a person::

    >>> @dataclass
    ... class Person:
    ...     name: str
    ...     age: int
    ...     aliases: list[str] = field(default_factory=list)

    >>> formatter = (
    ...     Formatter.EMPTY
    ...     .with_("name", lambda p: p.name)
    ...     .with_typed("age", lambda p: p.age, lambda v: v.with_auto_color(
    ...         lambda age: "red" if age < 18 else "green"
    ...     ))
    ...     .with_condition("adult", lambda p: p.age >= 18)
    ...     .with_list_function(
    ...         "aliases",
    ...         lambda p: p.aliases,
    ...         lambda f: f.with_("alias", lambda a: a),
    ...     )
    ... )

    >>> bob = Person("Bob", 17, ["Bobby", "B", "Robert"])
    >>> formatter.format("$name ([auto:$age]) ?!adult{minor}", bob).content
    'Bob (17) minor'
    >>> formatter.format("[auto:$age]", bob) == ColoredString.parse("[red:17]")
    True
    >>> formatter.format("aka @aliases{$alias,\\\\, , and }", bob).content
    'aka Bobby, B and Robert'

Names that the formatter doesn't know are rendered as is,
with a diagnostic color::

    >>> formatter.format("$nickname", bob) == ColoredString.from_content(
    ...     "$nickname", Colors.UNKNOWN_FORMAT_VARIABLE
    ... )
    True


Formatter
---------

.. autoclass:: Formatter
   :members:


Variables
---------

.. autoclass:: Variable
   :members:


Functions
---------

.. autoclass:: Function
   :members:

.. autoclass:: ListFunction
   :members:

"""

from __future__ import annotations

import dataclasses
import types
import typing
from dataclasses import dataclass

import consoletools
import consoletools.color
import consoletools.format
import consoletools.string
from consoletools import _typing as _t

__all__ = [
    "Formatter",
    "Function",
    "ListFunction",
    "Variable",
]

T = _t.TypeVar("T")
T_contra = _t.TypeVar("T_contra", contravariant=True)
U = _t.TypeVar("U")
V = _t.TypeVar("V")


def _frozen_dict(*args, **kwargs) -> _t.Mapping[_t.Any, _t.Any]:
    return types.MappingProxyType(dict(*args, **kwargs))


def _to_color(
    value: consoletools.color.Color | str | None, /
) -> consoletools.color.Color:
    if value is None:
        return consoletools.color.Color.NONE
    elif isinstance(value, consoletools.color.Color):
        return value
    else:
        return consoletools.color.Color.parse(value)


class _ColorSelector(_t.Generic[T]):
    # Converts whatever a user-supplied color selector returns to a Color.

    def __init__(
        self, selector: _t.Callable[[T], consoletools.color.Color | str | None], /
    ):
        self.__selector = selector

    def __call__(self, item: T, /) -> consoletools.color.Color:
        return _to_color(self.__selector(item))


def _color_selector(
    name: str, selector: _t.Callable[[T], consoletools.color.Color | str | None], /
) -> _ColorSelector[T]:
    _check_name("color", name)
    _check_callable("color selector", selector)
    if isinstance(selector, _ColorSelector):
        return selector
    return _ColorSelector(selector)


def _check_name(kind: str, name: str, /):
    if not name or not name.strip():
        raise ValueError(f"{kind} name can't be empty")
    if name != name.strip():
        raise ValueError(f"{kind} name {name!r} can't start or end with whitespace")


def _check_callable(kind: str, fn: object, /):
    if not callable(fn):
        raise TypeError(f"{kind} must be callable, got {fn!r}")


@dataclass(frozen=True)
class Variable(_t.Generic[T]):
    """
    A variable extracts text from an item.

    Variables are immutable, use ``with_*`` methods to get an updated copy.

    """

    selector: _t.Callable[[T], str]
    """
    Function that extracts text from an item.

    """

    padded_length: int | None = None
    """
    If set, the variable's value is padded with spaces up to this length
    when the template requests padding (i.e. ``$+name``).

    """

    dynamic_colors: _t.Mapping[
        str, _t.Callable[[T], consoletools.color.Color | str | None]
    ] = dataclasses.field(default_factory=_frozen_dict)
    """
    Colors that depend on an item. Keys are lowercase color names that can be
    used in templates, i.e. ``[auto:$name]``. Selectors may return
    a :class:`~consoletools.color.Color`, a color string, or :data:`None`.

    """

    def __post_init__(self):
        _check_callable("variable selector", self.selector)
        if self.padded_length is not None and self.padded_length <= 0:
            raise ValueError(
                f"padded length must be positive, got {self.padded_length}"
            )
        object.__setattr__(
            self,
            "dynamic_colors",
            _frozen_dict(
                (name.lower(), _color_selector(name, selector))
                for name, selector in self.dynamic_colors.items()
            ),
        )

    def with_padded_length(self, padded_length: int | None, /) -> Variable[T]:
        """
        Set padded length for this variable.

        """

        return dataclasses.replace(self, padded_length=padded_length)

    def with_padded_length_from(self, items: _t.Iterable[T], /) -> Variable[T]:
        """
        Set padded length to the length of the longest value among the given items.

        This is useful when displaying tables::

            >>> variable = Variable(str).with_padded_length_from(["a", "abc"])
            >>> variable.padded_length
            3

        If all values are empty, or there are no items, padded length
        is left unset.

        """

        padded_length = max((len(self.selector(item)) for item in items), default=0)
        return self.with_padded_length(padded_length or None)

    def with_dynamic_color(
        self,
        color: str,
        selector: _t.Callable[[T], consoletools.color.Color | str | None],
        /,
    ) -> Variable[T]:
        """
        Add a dynamic color.

        :param color:
            name that's used to refer to this color in templates.
        :param selector:
            function that returns a :class:`~consoletools.color.Color`,
            a color string (see :meth:`Color.parse <consoletools.color.Color.parse>`),
            or :data:`None` for no color.

        """

        return dataclasses.replace(
            self,
            dynamic_colors={**self.dynamic_colors, color.lower(): selector},
        )

    def with_auto_color(
        self,
        selector: _t.Callable[[T], consoletools.color.Color | str | None],
        /,
    ) -> Variable[T]:
        """
        Add a dynamic color named ``auto``.

        """

        return self.with_dynamic_color("auto", selector)

    def _map(self, fn: _t.Callable[[U], T], /) -> Variable[U]:
        # Lift this variable to items of another type.
        return Variable(
            lambda item: self.selector(fn(item)),
            self.padded_length,
            {
                name: (lambda item, color=color: color(fn(item)))
                for name, color in self.dynamic_colors.items()
            },
        )


class Function(_t.Protocol[T_contra]):
    """
    Interface for template functions.

    """

    def evaluate(
        self,
        item: T_contra,
        arguments: _t.Sequence[consoletools.format.Format],
        /,
    ) -> consoletools.string.ColoredString:
        """
        Render a function call.

        :param item:
            item that's being formatted.
        :param arguments:
            unevaluated arguments of the call.

        """

        ...


class ListFunction(_t.Generic[T, U]):
    """
    A function that renders a list of items, each one with its own template.

    Given arguments ``item,sep1,sep2,...``, the first element of the list is
    rendered with ``item``, and every next element is rendered with
    ``sep + item``. The last separator is used for the last element,
    the first one is repeated to fill the middle::

        >>> fn = ListFunction(lambda s: s.split(), Formatter.EMPTY.with_("x", str))
        >>> args = [parse("$x"), parse(", "), parse(" and ")]
        >>> fn.evaluate("a b c d", args).content
        'a, b, c and d'

    :param items_selector:
        function that extracts list elements from an item.
    :param item_formatter:
        formatter for the list elements.

    """

    def __init__(
        self,
        items_selector: _t.Callable[[T], _t.Iterable[U]],
        item_formatter: Formatter[U],
        /,
    ):
        _check_callable("items selector", items_selector)
        self.__items_selector = items_selector
        self.__item_formatter = item_formatter

    def evaluate(
        self, item: T, arguments: _t.Sequence[consoletools.format.Format], /
    ) -> consoletools.string.ColoredString:
        if not arguments:
            return consoletools.string.ColoredString.EMPTY
        items = list(self.__items_selector(item))
        if not items:
            return consoletools.string.ColoredString.EMPTY

        first = arguments[0]
        units = [first] + [
            consoletools.format.combine(separator, first)
            for separator in arguments[1:]
        ]
        if len(units) > len(items):
            units = [units[0]] + units[len(units) - len(items) + 1 :]
        while len(units) < len(items):
            units.insert(1, units[1] if len(units) > 1 else units[0])

        result = consoletools.string.ColoredString.EMPTY
        for unit, element in zip(units, items):
            result += self.__item_formatter.format(unit, element)
        return result


@dataclass(frozen=True)
class Formatter(_t.Generic[T]):
    """
    Evaluates templates against items of type ``T``.

    Formatters are immutable, use ``with_*`` methods to get an updated copy.
    Start with :attr:`Formatter.EMPTY`.

    """

    variables: _t.Mapping[str, Variable[T]] = dataclasses.field(
        default_factory=_frozen_dict
    )
    """
    Known variables.

    """

    conditions: _t.Mapping[str, _t.Callable[[T], bool]] = dataclasses.field(
        default_factory=_frozen_dict
    )
    """
    Known conditions.

    """

    functions: _t.Mapping[str, Function[T]] = dataclasses.field(
        default_factory=_frozen_dict
    )
    """
    Known functions.

    """

    EMPTY: typing.ClassVar[Formatter[_t.Any]]
    """
    Formatter that knows no names.

    """

    def __post_init__(self):
        for name in self.variables:
            _check_name("variable", name)
        for name in self.conditions:
            _check_name("condition", name)
        for name in self.functions:
            _check_name("function", name)
        object.__setattr__(self, "variables", _frozen_dict(self.variables))
        object.__setattr__(self, "conditions", _frozen_dict(self.conditions))
        object.__setattr__(self, "functions", _frozen_dict(self.functions))

    def with_variable(self, name: str, variable: Variable[T], /) -> Formatter[T]:
        """
        Add a variable, replacing any existing variable with the same name.

        """

        return dataclasses.replace(self, variables={**self.variables, name: variable})

    def with_condition(
        self, name: str, predicate: _t.Callable[[T], bool], /
    ) -> Formatter[T]:
        """
        Add a condition, replacing any existing condition with the same name.

        """

        _check_callable("condition", predicate)
        return dataclasses.replace(
            self, conditions={**self.conditions, name: predicate}
        )

    def with_function(self, name: str, function: Function[T], /) -> Formatter[T]:
        """
        Add a function, replacing any existing function with the same name.

        """

        _check_callable("function.evaluate", getattr(function, "evaluate", None))
        return dataclasses.replace(self, functions={**self.functions, name: function})

    def with_(
        self,
        name: str,
        selector: _t.Callable[[T], str],
        configure: _t.Callable[[Variable[T]], Variable[T]] | None = None,
        /,
    ) -> Formatter[T]:
        """
        Add a text variable.

        :param name:
            name of the variable.
        :param selector:
            function that extracts text from an item.
        :param configure:
            function that configures the variable, i.e. adds padding
            or dynamic colors.

        """

        variable = Variable(selector)
        if configure is not None:
            variable = configure(variable)
        return self.with_variable(name, variable)

    def with_typed(
        self,
        name: str,
        selector: _t.Callable[[T], V],
        configure: _t.Callable[[Variable[V]], Variable[V]] | None = None,
        /,
    ) -> Formatter[T]:
        """
        Add a variable that converts a value of an arbitrary type to text
        using :class:`str`. :data:`None` becomes an empty string.

        Unlike :meth:`~Formatter.with_`, the configured variable operates
        on the selected value, not on the item. This way, dynamic colors
        can inspect the value directly::

            >>> formatter = Formatter.EMPTY.with_typed(
            ...     "n", abs, lambda v: v.with_auto_color(lambda n: "blue")
            ... )
            >>> formatter.format("[auto:$n]", -5) == ColoredString.parse("[blue:5]")
            True

        """

        _check_callable("variable selector", selector)
        variable: Variable[V] = Variable(_stringify)
        if configure is not None:
            variable = configure(variable)
        return self.with_variable(name, variable._map(selector))

    def with_list_function(
        self,
        name: str,
        items_selector: _t.Callable[[T], _t.Iterable[U]],
        item_formatter: Formatter[U] | _t.Callable[[Formatter[U]], Formatter[U]],
        /,
    ) -> Formatter[T]:
        """
        Add a :class:`ListFunction`.

        :param name:
            name of the function.
        :param items_selector:
            function that extracts list elements from an item.
        :param item_formatter:
            formatter for list elements, or a function that configures
            an empty formatter.

        """

        if not isinstance(item_formatter, Formatter):
            item_formatter = item_formatter(Formatter.EMPTY)
        return self.with_function(name, ListFunction(items_selector, item_formatter))

    def format(
        self, format: consoletools.format.Format | str, item: T, /
    ) -> consoletools.string.ColoredString:
        """
        Evaluate a template.

        :param format:
            a parsed template, or a template string.
        :param item:
            item that provides values for variables, conditions and functions.
        :returns:
            formatted string.

        """

        if isinstance(format, str):
            format = consoletools.format.parse(format)

        match format:
            case consoletools.format.NoContentFormat():
                return consoletools.string.ColoredString.EMPTY
            case consoletools.format.TextFormat(text=text):
                return consoletools.string.ColoredString.from_content(text)
            case consoletools.format.VariableFormat(name=name, padding=padding):
                return self._format_variable(name, padding, item)
            case consoletools.format.ColorFormat(color=color, content=content):
                return self._format_color(color, content, item)
            case consoletools.format.ConditionFormat(
                name=name, negated=negated, content=content
            ):
                return self._format_condition(name, negated, content, item)
            case consoletools.format.FunctionFormat(name=name, arguments=arguments):
                return self._format_function(name, arguments, item)
            case consoletools.format.ConcatenationFormat(elements=elements):
                result = consoletools.string.ColoredString.EMPTY
                for element in elements:
                    result += self.format(element, item)
                return result
            case _:
                raise TypeError(f"expected a format, got {format!r}")

    def _format_variable(
        self, name: str, padding: consoletools.format.Padding, item: T
    ) -> consoletools.string.ColoredString:
        variable = self.variables.get(name)
        if variable is None:
            consoletools._logger.debug("unknown format variable %r", name)
            return consoletools.string.ColoredString.from_content(
                f"${name}", consoletools.color.Colors.UNKNOWN_FORMAT_VARIABLE
            )

        value = variable.selector(item)
        diff = (variable.padded_length or 0) - len(value)
        if diff > 0:
            if padding is consoletools.format.Padding.PAD_LEFT:
                value = " " * diff + value
            elif padding is consoletools.format.Padding.PAD_RIGHT:
                value = value + " " * diff
            elif padding is consoletools.format.Padding.PAD_BOTH:
                left = diff // 2
                value = " " * left + value + " " * (diff - left)
        return consoletools.string.ColoredString.from_content(value)

    def _format_color(
        self, color: str, content: consoletools.format.Format, item: T
    ) -> consoletools.string.ColoredString:
        rendered = self.format(content, item)

        resolved: consoletools.color.Color | None = None
        for reference in consoletools.format.extract_variables(content):
            variable = self.variables.get(reference.name)
            if variable is not None and color in variable.dynamic_colors:
                resolved = variable.dynamic_colors[color](item)
                break
        if resolved is None:
            resolved = consoletools.color.Color.parse(color)

        # Colors of nested blocks take precedence.
        return consoletools.string.ColoredString(
            (
                segment
                if segment.has_color
                else consoletools.string.Segment(segment.content, resolved)
            )
            for segment in rendered
        )

    def _format_condition(
        self,
        name: str,
        negated: bool,
        content: consoletools.format.Format,
        item: T,
    ) -> consoletools.string.ColoredString:
        predicate = self.conditions.get(name)
        if predicate is None:
            consoletools._logger.debug("unknown format condition %r", name)
            return consoletools.string.ColoredString.from_content(
                f"?{name}", consoletools.color.Colors.UNKNOWN_FORMAT_CONDITION
            )

        if bool(predicate(item)) != negated:
            return self.format(content, item)
        else:
            return consoletools.string.ColoredString.EMPTY

    def _format_function(
        self,
        name: str,
        arguments: tuple[consoletools.format.Format, ...],
        item: T,
    ) -> consoletools.string.ColoredString:
        function = self.functions.get(name)
        if function is None:
            consoletools._logger.debug("unknown format function %r", name)
            return consoletools.string.ColoredString.from_content(
                f"@{name}{{...}}", consoletools.color.Colors.UNKNOWN_FORMAT_FUNCTION
            )

        return function.evaluate(item, arguments)


Formatter.EMPTY = Formatter()


def _stringify(value: object, /) -> str:
    return "" if value is None else str(value)
