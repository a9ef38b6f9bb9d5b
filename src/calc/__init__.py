"""calc — a small arithmetic expression language. Public API."""

from __future__ import annotations

import logging

from .ast import (
    Binary as Binary,
    Call as Call,
    Grouping as Grouping,
    Identifier as Identifier,
    Literal as Literal,
    Node as Node,
    Operator as Operator,
    Sign as Sign,
    Unary as Unary,
)
from .emit import to_sexpr as to_sexpr, to_source as to_source
from .errors import (
    ArityMismatch as ArityMismatch,
    CalcError as CalcError,
    EvalError as EvalError,
    IntegerDivisionByZero as IntegerDivisionByZero,
    ParseError as ParseError,
    TokenizeError as TokenizeError,
    UnknownFunction as UnknownFunction,
    UnknownIdentifier as UnknownIdentifier,
    UnknownOperator as UnknownOperator,
)
from .parse import parse as parse
from .registry import (
    BUILTINS as BUILTINS,
    CONSTANTS as CONSTANTS,
    Builtin as Builtin,
    make_registry as make_registry,
)
from .runtime import Evaluator as Evaluator, evaluate as evaluate
from .tokens import tokenize as tokenize

logger = logging.getLogger("calc")


def calculate(expression: str) -> float:
    """Parse and evaluate an expression.

    Raises the first error from either phase: a `ParseError` for malformed
    text, otherwise an `EvalError` from folding the tree.
    """
    node = parse(expression)
    try:
        result = evaluate(node)
    except CalcError as e:
        logger.debug("calculate %r failed: %s: %s", expression, e.kind, e)
        raise
    logger.debug("calculate %r = %r", expression, result)
    return result
