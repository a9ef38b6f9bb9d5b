import pytest

from calc import (
    ArityMismatch,
    CalcError,
    EvalError,
    IntegerDivisionByZero,
    ParseError,
    TokenizeError,
    UnknownFunction,
    UnknownIdentifier,
    UnknownOperator,
    calculate,
    parse,
)


def test_all_errors_are_subclasses_of_calc_error() -> None:
    assert issubclass(ParseError, CalcError)
    assert issubclass(TokenizeError, ParseError)
    assert issubclass(EvalError, CalcError)
    for cls in (
        UnknownIdentifier,
        UnknownFunction,
        ArityMismatch,
        UnknownOperator,
        IntegerDivisionByZero,
    ):
        assert issubclass(cls, EvalError)


def test_parse_error_carries_column() -> None:
    with pytest.raises(ParseError) as info:
        parse("1 + * 2")
    assert info.value.col == 5
    assert info.value.msg == "unexpected token '*'"
    assert str(info.value) == "unexpected token '*' at col 5"


def test_eval_error_has_no_column() -> None:
    with pytest.raises(UnknownIdentifier) as info:
        calculate("1 + tau")
    assert info.value.col is None
    assert str(info.value) == "unknown identifier 'tau'"


def test_arity_message_pluralizes() -> None:
    assert str(ArityMismatch("sqrt", 1, 2)) == "sqrt expects 1 argument, got 2"
    assert str(ArityMismatch("max", 2, 1)) == "max expects 2 arguments, got 1"


def test_error_kinds() -> None:
    assert ParseError("x", 1).kind == "syntax error"
    assert TokenizeError("x", 1).kind == "syntax error"
    assert UnknownFunction("f").kind == "unknown function"
    assert IntegerDivisionByZero("x").kind == "integer division by zero"


def test_can_catch_any_calc_error() -> None:
    for source in ["(", "2x", "tau", "nope(1)", "sqrt()", "1 % 0"]:
        with pytest.raises(CalcError):
            calculate(source)


def test_deep_nesting_is_a_parse_error() -> None:
    with pytest.raises(ParseError, match="nested too deeply"):
        parse("(" * 100_000 + "1" + ")" * 100_000)
