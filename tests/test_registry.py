"""Builtin registry tests: table shape, immutability, and IEEE edge cases."""

import math

import pytest

from calc import BUILTINS, CONSTANTS, Builtin, make_registry
from calc.registry import fdiv, fpow

EXPECTED_ARITY = {
    "sqrt": 1,
    "floor": 1,
    "ceil": 1,
    "abs": 1,
    "log": 2,
    "ln": 1,
    "sin": 1,
    "cos": 1,
    "tan": 1,
    "arcsin": 1,
    "arccos": 1,
    "arctan": 1,
    "max": 2,
    "min": 2,
}


def test_registry_contents():
    assert set(BUILTINS) == set(EXPECTED_ARITY)
    for name, builtin in BUILTINS.items():
        assert builtin.name == name
        assert builtin.arity == EXPECTED_ARITY[name]


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        BUILTINS["sqrt"] = Builtin("sqrt", 2, lambda a, b: a)  # type: ignore[index]
    with pytest.raises(TypeError):
        CONSTANTS["tau"] = 2 * math.pi  # type: ignore[index]


def test_builtin_is_frozen():
    with pytest.raises(AttributeError):
        BUILTINS["sqrt"].arity = 2  # type: ignore[misc]


def test_constants():
    assert CONSTANTS["pi"] == math.pi
    assert CONSTANTS["e"] == math.e
    assert CONSTANTS["phi"] == (1 + math.sqrt(5)) / 2


def test_make_registry_lowercases_names():
    reg = make_registry(Builtin("Double", 1, lambda x: 2 * x))
    assert list(reg) == ["double"]
    assert reg["double"](21.0) == 42.0


def test_make_registry_rejects_duplicates():
    with pytest.raises(ValueError, match="duplicate builtin 'twice'"):
        make_registry(Builtin("twice", 1, lambda x: 2 * x), Builtin("TWICE", 1, abs))


@pytest.mark.parametrize(
    "name,args",
    [
        ("sqrt", (-1.0,)),
        ("ln", (-1.0,)),
        ("ln", (math.nan,)),
        ("log", (0.0, 0.0)),
        ("sin", (math.inf,)),
        ("cos", (-math.inf,)),
        ("tan", (math.inf,)),
        ("arcsin", (1.5,)),
        ("arccos", (-1.5,)),
        ("arcsin", (math.nan,)),
        ("max", (math.nan, 1.0)),
        ("min", (1.0, math.nan)),
        ("floor", (math.nan,)),
        ("ceil", (math.nan,)),
    ],
)
def test_out_of_domain_is_nan(name: str, args: tuple[float, ...]):
    assert math.isnan(BUILTINS[name](*args))


def test_rounding_passes_infinities_through():
    assert BUILTINS["floor"](math.inf) == math.inf
    assert BUILTINS["ceil"](-math.inf) == -math.inf
    assert BUILTINS["floor"](-0.5) == -1.0
    assert BUILTINS["ceil"](-0.5) == 0.0


def test_rounding_returns_floats():
    assert isinstance(BUILTINS["floor"](1.5), float)
    assert isinstance(BUILTINS["ceil"](1.5), float)


def test_ln_of_zero():
    assert BUILTINS["ln"](0.0) == -math.inf
    assert BUILTINS["ln"](math.inf) == math.inf


def test_log_is_ratio_of_natural_logs():
    assert BUILTINS["log"](8.0, 2.0) == pytest.approx(3.0)
    assert BUILTINS["log"](100.0, 10.0) == pytest.approx(2.0)
    assert BUILTINS["log"](8.0, 1.0) == math.inf


def test_max_min_infinities_win_over_nan():
    assert BUILTINS["max"](math.nan, math.inf) == math.inf
    assert BUILTINS["min"](-math.inf, math.nan) == -math.inf


def test_max_min_signed_zeros():
    assert math.copysign(1.0, BUILTINS["max"](-0.0, 0.0)) == 1.0
    assert math.copysign(1.0, BUILTINS["max"](0.0, -0.0)) == 1.0
    assert math.copysign(1.0, BUILTINS["min"](0.0, -0.0)) == -1.0
    assert math.copysign(1.0, BUILTINS["min"](-0.0, 0.0)) == -1.0


def test_fdiv():
    assert fdiv(1.0, 4.0) == 0.25
    assert fdiv(1.0, 0.0) == math.inf
    assert fdiv(-1.0, 0.0) == -math.inf
    assert fdiv(1.0, -0.0) == -math.inf
    assert math.isnan(fdiv(0.0, 0.0))
    assert math.isnan(fdiv(math.nan, 0.0))
    assert fdiv(math.inf, 0.0) == math.inf


def test_fpow():
    assert fpow(2.0, 10.0) == 1024.0
    assert fpow(2.0, 0.5) == math.sqrt(2.0)
    assert fpow(0.0, -1.0) == math.inf
    assert fpow(-0.0, -1.0) == -math.inf
    assert fpow(-0.0, -2.0) == math.inf
    assert fpow(0.0, -0.5) == math.inf
    assert math.isnan(fpow(-8.0, 1.0 / 3.0))
    assert fpow(10.0, 400.0) == math.inf
    assert fpow(-10.0, 401.0) == -math.inf
    assert fpow(-10.0, 400.0) == math.inf
    assert fpow(math.nan, 0.0) == 1.0
