import pytest

import consoletools.validate
from consoletools.color import Color, Colors
from consoletools.string import ColoredString, Segment
from consoletools.validate import And, ValidationError, Validator, Where


class TestWhere:
    def test_valid(self):
        Where(lambda x: x > 0).validate(1)

    def test_default_message(self):
        with pytest.raises(ValidationError) as e:
            Where(lambda x: x > 0).validate(-1)
        assert str(e.value) == "'-1' is not a valid value"
        assert e.value.message == ColoredString(
            [
                Segment("'-1'", Colors.ERROR_VALUE),
                Segment(" is not a valid value", Colors.ERROR_MESSAGE),
            ]
        )

    def test_markup_message(self):
        with pytest.raises(ValidationError) as e:
            Where(lambda x: False, "[red:bad] value").validate(0)
        assert e.value.message == ColoredString(
            [Segment("bad", Color("red")), Segment(" value")]
        )

    def test_colored_message(self):
        message = ColoredString.from_content("[not markup]")
        with pytest.raises(ValidationError) as e:
            Where(lambda x: False, message).validate(0)
        assert e.value.message is message

    def test_message_function(self):
        validator = Where(lambda x: x % 2 == 0, lambda x: f"{x} is odd")
        with pytest.raises(ValidationError, match="^3 is odd$"):
            validator.validate(3)

    def test_predicate_must_be_callable(self):
        with pytest.raises(TypeError):
            Where(True)  # type: ignore

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            Where(lambda x: False).validate(0)


class TestAnd:
    def test_order(self):
        calls = []

        def check(name, result):
            def predicate(value):
                calls.append(name)
                return result

            return Where(predicate, name)

        validator = check("a", True) & check("b", False) & check("c", False)
        with pytest.raises(ValidationError, match="^b$"):
            validator.validate(0)
        assert calls == ["a", "b"]

    def test_flatten(self):
        a = Where(bool)
        b = Where(bool)
        c = Where(bool)
        validator = (a & b) & (Validator.NO_RULES & c)
        assert isinstance(validator, And)
        assert validator.validators == (a, b, c)

    def test_empty(self):
        And().validate(object())
        assert And(Validator.NO_RULES).validators == ()

    def test_and_with_non_validator(self):
        with pytest.raises(TypeError):
            Where(bool) & (lambda x: True)  # type: ignore


def test_no_rules():
    Validator.NO_RULES.validate(None)
    Validator.NO_RULES.validate(object())
    assert repr(Validator.NO_RULES) == "Validator.NO_RULES"


def test_custom_validator():
    class NotEmpty(consoletools.validate.Validator[str]):
        def validate(self, value, /):
            if not value:
                raise ValidationError("value can't be empty")

    validator = NotEmpty() & Where(lambda s: s.isdigit())
    validator.validate("10")
    with pytest.raises(ValidationError, match="can't be empty"):
        validator.validate("")
    with pytest.raises(ValidationError, match="is not a valid value"):
        validator.validate("x")
