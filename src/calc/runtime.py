"""calc runtime — fold an expression tree into a float.

Operator notes:

- `/` follows IEEE-754: dividing by zero gives a signed infinity (or nan for
  `0/0`) rather than an error.
- `%`, `&` and `|` work on integers. Each operand is first truncated toward
  zero to a signed 64-bit integer, so fractional parts are silently dropped:
  `7.9 % 2.5` is `7 % 2`, which is `1`. Floats that have no int64 value (nan,
  infinities, anything beyond +/-2**63) truncate to -2**63.
- `^` is exponentiation, not exclusive-or: `2^0.5` is the square root of 2.
"""

from __future__ import annotations

import logging
from typing import Mapping

from .ast import (
    Binary,
    Call,
    Grouping,
    Identifier,
    Literal,
    Node,
    Operator,
    Sign,
    Unary,
)
from .errors import (
    ArityMismatch,
    EvalError,
    IntegerDivisionByZero,
    UnknownFunction,
    UnknownIdentifier,
    UnknownOperator,
)
from .registry import BUILTINS, CONSTANTS, Builtin, fdiv, fpow

logger = logging.getLogger("calc.eval")

INT64_MIN: int = -(2**63)


def to_int64(x: float) -> int:
    """Truncate toward zero; non-representable values become INT64_MIN."""
    if x != x or x >= 2.0**63 or x < -(2.0**63):
        return INT64_MIN
    return int(x)


def _rem(a: int, b: int) -> int:
    """Remainder of truncated division; the sign follows the dividend."""
    r = abs(a) % abs(b)
    return -r if a < 0 else r


class Evaluator:
    """Evaluates expression trees against a function and constant table."""

    def __init__(
        self,
        registry: Mapping[str, Builtin] = BUILTINS,
        constants: Mapping[str, float] = CONSTANTS,
    ):
        self.registry: Mapping[str, Builtin] = registry
        self.constants: Mapping[str, float] = constants

    def evaluate(self, node: Node) -> float:
        """Fold a tree into a float, raising an `EvalError` on failure."""
        try:
            return self._eval(node)
        except RecursionError:
            raise EvalError("expression nested too deeply") from None

    def _eval(self, node: Node) -> float:
        if isinstance(node, Literal):
            return node.value

        if isinstance(node, Grouping):
            return self._eval(node.inner)

        if isinstance(node, Unary):
            operand = self._eval(node.operand)
            if node.op is Sign.MINUS:
                return -operand
            if node.op is Sign.PLUS:
                return operand
            raise UnknownOperator(node.op)

        if isinstance(node, Binary):
            return self._eval_binary(node)

        if isinstance(node, Identifier):
            name = node.name.lower()
            if name in self.constants:
                return self.constants[name]
            raise UnknownIdentifier(name)

        if isinstance(node, Call):
            return self._eval_call(node)

        raise EvalError("cannot evaluate " + type(node).__name__)

    def _eval_binary(self, node: Binary) -> float:
        # The left spine is folded in a loop, so `1 + 1 + ... + 1` runs in
        # constant stack depth; only right operands recurse. Both sides are
        # always evaluated, and a failure on the left outranks one on the
        # right.
        chain: list[Binary] = [node]
        base = node.left
        while isinstance(base, Binary):
            chain.append(base)
            base = base.left
        error: EvalError | None = None
        value = 0.0
        try:
            value = self._eval(base)
        except EvalError as e:
            error = e
        for link in reversed(chain):
            try:
                right = self._eval(link.right)
            except EvalError as e:
                if error is None:
                    error = e
                continue
            if error is None:
                try:
                    value = apply_binary(link.op, value, right)
                except EvalError as e:
                    error = e
        if error is not None:
            raise error
        return value

    def _eval_call(self, node: Call) -> float:
        args: list[float] = []
        for arg in node.args:
            args.append(self._eval(arg))
        name = node.name.lower()
        builtin = self.registry.get(name)
        if builtin is None:
            raise UnknownFunction(name)
        if len(args) != builtin.arity:
            raise ArityMismatch(name, builtin.arity, len(args))
        result = builtin(*args)
        logger.debug("call %s%r -> %r", name, tuple(args), result)
        return result


def apply_binary(op: Operator, x: float, y: float) -> float:
    """Apply a binary operator to two already-evaluated operands."""
    if op is Operator.ADD:
        return x + y
    if op is Operator.SUB:
        return x - y
    if op is Operator.MUL:
        return x * y
    if op is Operator.DIV:
        return fdiv(x, y)
    if op is Operator.MOD:
        divisor = to_int64(y)
        if divisor == 0:
            raise IntegerDivisionByZero("integer modulo by zero")
        return float(_rem(to_int64(x), divisor))
    if op is Operator.BIT_AND:
        return float(to_int64(x) & to_int64(y))
    if op is Operator.BIT_OR:
        return float(to_int64(x) | to_int64(y))
    if op is Operator.POW:
        return fpow(x, y)
    raise UnknownOperator(op)


DEFAULT_EVALUATOR: Evaluator = Evaluator()


def evaluate(node: Node) -> float:
    """Evaluate a tree with the builtin functions and constants."""
    return DEFAULT_EVALUATOR.evaluate(node)
