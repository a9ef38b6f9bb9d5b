"""Builtin function and constant tables.

Both tables are built once, at import, and exposed through read-only
mappings; evaluators on any number of threads share them without locking.

Every implementation is total: where `math` would raise (`sqrt(-1)`,
`log(0)`, `sin(inf)`, `asin(2)`), the IEEE-754 result is returned instead,
so a call on a known function with the right arity never fails.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from types import MappingProxyType
from typing import Callable, Mapping

INF: float = math.inf
NAN: float = math.nan

# Golden ratio, (1 + sqrt(5)) / 2
PHI: float = 1.61803398874989484820458683436563811772030917980576286213544862


@dataclass(frozen=True)
class Builtin:
    """A named numeric function of fixed arity."""

    name: str
    arity: int
    fn: Callable[..., float]

    def __call__(self, *args: float) -> float:
        return self.fn(*args)


# ============================================================
# IEEE-total wrappers
# ============================================================


def _sqrt(x: float) -> float:
    if x < 0:
        return NAN
    return math.sqrt(x)


def _floor(x: float) -> float:
    if math.isinf(x) or math.isnan(x):
        return x
    return float(math.floor(x))


def _ceil(x: float) -> float:
    if math.isinf(x) or math.isnan(x):
        return x
    return float(math.ceil(x))


def _ln(x: float) -> float:
    if math.isnan(x) or x < 0:
        return NAN
    if x == 0:
        return -INF
    return math.log(x)


def _log(x: float, base: float) -> float:
    return fdiv(_ln(x), _ln(base))


def _periodic(fn: Callable[[float], float]) -> Callable[[float], float]:
    def wrapped(x: float) -> float:
        if math.isinf(x):
            return NAN
        return fn(x)

    return wrapped


def _unit_domain(fn: Callable[[float], float]) -> Callable[[float], float]:
    def wrapped(x: float) -> float:
        if not -1.0 <= x <= 1.0:
            return NAN
        return fn(x)

    return wrapped


def _max(x: float, y: float) -> float:
    """Larger of x and y; +inf wins over nan, and +0 is larger than -0."""
    if x == INF or y == INF:
        return INF
    if math.isnan(x) or math.isnan(y):
        return NAN
    if x == 0 and x == y:
        return y if math.copysign(1.0, x) < 0 else x
    return x if x > y else y


def _min(x: float, y: float) -> float:
    """Smaller of x and y; -inf wins over nan, and -0 is smaller than +0."""
    if x == -INF or y == -INF:
        return -INF
    if math.isnan(x) or math.isnan(y):
        return NAN
    if x == 0 and x == y:
        return x if math.copysign(1.0, x) < 0 else y
    return x if x < y else y


def fdiv(x: float, y: float) -> float:
    """IEEE-754 division: `x/0` is a signed infinity, `0/0` is nan."""
    if y == 0:
        if x == 0 or math.isnan(x):
            return NAN
        return math.copysign(INF, x) * math.copysign(1.0, y)
    return x / y


def fpow(x: float, y: float) -> float:
    """IEEE-754 power: out-of-domain results are nan or inf, never errors."""
    try:
        return math.pow(x, y)
    except OverflowError:
        if x < 0 and _is_odd_integer(y):
            return -INF
        return INF
    except ValueError:
        # Either a zero base with a negative exponent or a negative base with
        # a non-integer exponent.
        if x == 0:
            if _is_odd_integer(y):
                return math.copysign(INF, x)
            return INF
        return NAN


def _is_odd_integer(y: float) -> bool:
    if math.isinf(y) or math.isnan(y) or y != math.floor(y):
        return False
    return int(y) % 2 == 1


# ============================================================
# Tables
# ============================================================


def make_registry(*builtins: Builtin) -> Mapping[str, Builtin]:
    """Build a read-only registry keyed by each builtin's lowercase name."""
    table: dict[str, Builtin] = {}
    for b in builtins:
        name = b.name.lower()
        if name in table:
            raise ValueError("duplicate builtin '" + name + "'")
        table[name] = b
    return MappingProxyType(table)


BUILTINS: Mapping[str, Builtin] = make_registry(
    Builtin("sqrt", 1, _sqrt),
    Builtin("floor", 1, _floor),
    Builtin("ceil", 1, _ceil),
    Builtin("abs", 1, math.fabs),
    Builtin("log", 2, _log),
    Builtin("ln", 1, _ln),
    Builtin("sin", 1, _periodic(math.sin)),
    Builtin("cos", 1, _periodic(math.cos)),
    Builtin("tan", 1, _periodic(math.tan)),
    Builtin("arcsin", 1, _unit_domain(math.asin)),
    Builtin("arccos", 1, _unit_domain(math.acos)),
    Builtin("arctan", 1, math.atan),
    Builtin("max", 2, _max),
    Builtin("min", 2, _min),
)

CONSTANTS: Mapping[str, float] = MappingProxyType(
    {
        "pi": math.pi,
        "e": math.e,
        "phi": PHI,
    }
)
