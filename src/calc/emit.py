"""calc emitter — converts an expression tree back into text.

`to_source` is total over the node types in `calc/ast.py`; if a new node type
is added, this emitter should be updated alongside it.
"""

from __future__ import annotations

from decimal import Decimal
import math

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
from .tokens import INT64_MAX


def to_source(node: Node) -> str:
    """Render a tree as expression text that parses back to an equivalent tree.

    A negative `Literal` has no literal syntax of its own: it is written as a
    negation of its magnitude, so it reparses to a `Unary` with the same value.
    """
    return _Emitter().render(node, _Emitter._PREC_BITOR)


def to_sexpr(node: Node) -> str:
    """Render a tree as a parenthesized prefix dump, e.g. `(+ 1 (* 2 3))`."""
    if isinstance(node, Literal):
        return _number_text(node.value)
    if isinstance(node, Identifier):
        return node.name
    if isinstance(node, Unary):
        tag = "neg" if node.op is Sign.MINUS else "pos"
        return "(" + tag + " " + to_sexpr(node.operand) + ")"
    if isinstance(node, Binary):
        return (
            "("
            + node.op.value
            + " "
            + to_sexpr(node.left)
            + " "
            + to_sexpr(node.right)
            + ")"
        )
    if isinstance(node, Grouping):
        return "(group " + to_sexpr(node.inner) + ")"
    if isinstance(node, Call):
        parts = ["call", node.name]
        for arg in node.args:
            parts.append(to_sexpr(arg))
        return "(" + " ".join(parts) + ")"
    raise ValueError("unknown node type " + type(node).__name__)


def _number_text(value: float) -> str:
    text = repr(value)
    if text.endswith(".0"):
        text = text[:-2]
    return text


class _Emitter:
    _PREC_BITOR: int = 1
    _PREC_BITAND: int = 2
    _PREC_SUM: int = 3
    _PREC_PRODUCT: int = 4
    _PREC_UNARY: int = 5
    _PREC_POWER: int = 6
    _PREC_PRIMARY: int = 7

    _BIN_PREC: dict[Operator, int] = {
        Operator.BIT_OR: _PREC_BITOR,
        Operator.BIT_AND: _PREC_BITAND,
        Operator.ADD: _PREC_SUM,
        Operator.SUB: _PREC_SUM,
        Operator.MUL: _PREC_PRODUCT,
        Operator.DIV: _PREC_PRODUCT,
        Operator.MOD: _PREC_PRODUCT,
        Operator.POW: _PREC_POWER,
    }

    def _prec(self, node: Node) -> int:
        if isinstance(node, Binary):
            return self._BIN_PREC[node.op]
        if isinstance(node, Unary):
            return self._PREC_UNARY
        if isinstance(node, Literal) and math.copysign(1.0, node.value) < 0:
            return self._PREC_UNARY
        return self._PREC_PRIMARY

    def render(self, node: Node, min_prec: int) -> str:
        text = self._render_inner(node)
        if self._prec(node) < min_prec:
            return "(" + text + ")"
        return text

    def _render_inner(self, node: Node) -> str:
        if isinstance(node, Literal):
            return self._render_number(node.value)
        if isinstance(node, Identifier):
            return node.name
        if isinstance(node, Grouping):
            return "(" + self.render(node.inner, self._PREC_BITOR) + ")"
        if isinstance(node, Unary):
            min_prec = self._PREC_UNARY
            if isinstance(node.operand, Literal):
                # a negative literal operand prints as `-(-1)`, never `--1`
                min_prec = self._PREC_PRIMARY
            operand = self.render(node.operand, min_prec)
            return node.op.value + operand
        if isinstance(node, Binary):
            op_prec = self._BIN_PREC[node.op]
            if node.op is Operator.POW:
                # base ^ exponent: the base is a primary, the exponent a unary
                left = self.render(node.left, self._PREC_PRIMARY)
                right = self.render(node.right, self._PREC_UNARY)
            else:
                left = self.render(node.left, op_prec)
                right = self.render(node.right, op_prec + 1)
            return left + " " + node.op.value + " " + right
        if isinstance(node, Call):
            args: list[str] = []
            for arg in node.args:
                args.append(self.render(arg, self._PREC_BITOR))
            return node.name + "(" + ", ".join(args) + ")"
        raise ValueError("unknown node type " + type(node).__name__)

    def _render_number(self, value: float) -> str:
        if math.isinf(value) or math.isnan(value):
            raise ValueError("no literal syntax for " + repr(value))
        if math.copysign(1.0, value) < 0:
            return "-" + self._render_number(-value)
        text = repr(value)
        if "e" in text:
            text = format(Decimal(text), "f")
        if text.endswith(".0"):
            text = text[:-2]
        if "." not in text and value > INT64_MAX:
            text += ".0"
        return text
