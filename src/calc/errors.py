"""calc exception hierarchy.

Every error raised by `parse`, `evaluate` or `calculate` derives from
`CalcError`, so embedders can catch the whole family with one clause.
"""

from __future__ import annotations


class CalcError(Exception):
    """Base error for expression parsing and evaluation."""

    kind: str = "error"

    def __init__(self, msg: str, col: int | None = None):
        if col is None:
            super().__init__(msg)
        else:
            super().__init__(msg + " at col " + str(col))
        self.msg: str = msg
        self.col: int | None = col


# ============================================================
# Parsing
# ============================================================


class ParseError(CalcError):
    """Malformed input detected while parsing."""

    kind = "syntax error"

    def __init__(self, msg: str, col: int):
        super().__init__(msg, col)


class TokenizeError(ParseError):
    """Malformed input detected while lexing (bad character or literal)."""


# ============================================================
# Evaluation
# ============================================================


class EvalError(CalcError):
    """Error while folding a syntax tree into a value."""

    kind = "evaluation error"


class UnknownIdentifier(EvalError):
    """A bare name that is not in the constant table."""

    kind = "unknown identifier"

    def __init__(self, name: str):
        super().__init__("unknown identifier '" + name + "'")
        self.name: str = name


class UnknownFunction(EvalError):
    """A call to a name that is not in the builtin registry."""

    kind = "unknown function"

    def __init__(self, name: str):
        super().__init__("unknown function '" + name + "'")
        self.name: str = name


class ArityMismatch(EvalError):
    """A call with the wrong number of arguments for a known function."""

    kind = "arity mismatch"

    def __init__(self, name: str, expected: int, got: int):
        super().__init__(
            name
            + " expects "
            + str(expected)
            + (" argument" if expected == 1 else " arguments")
            + ", got "
            + str(got)
        )
        self.name: str = name
        self.expected: int = expected
        self.got: int = got


class UnknownOperator(EvalError):
    """An operator the evaluator has no semantics for."""

    kind = "unknown operator"

    def __init__(self, op: object):
        super().__init__("unknown operator '" + str(getattr(op, "value", op)) + "'")
        self.op: object = op


class IntegerDivisionByZero(EvalError):
    """Integer remainder whose truncated divisor is zero."""

    kind = "integer division by zero"
