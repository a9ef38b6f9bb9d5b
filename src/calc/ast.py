"""calc AST — parse-time node definitions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


# ============================================================
# OPERATORS
# ============================================================


class Sign(Enum):
    """Unary sign."""

    PLUS = "+"
    MINUS = "-"


class Operator(Enum):
    """Binary operator, valued by its source token.

    `POW` is spelled `^`: the token usually read as bitwise XOR means
    exponentiation here.
    """

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    BIT_AND = "&"
    BIT_OR = "|"
    POW = "^"


# ============================================================
# EXPRESSIONS
# ============================================================


@dataclass(frozen=True)
class Literal:
    """Numeric literal."""

    value: float


@dataclass(frozen=True)
class Identifier:
    """Bare name, resolved against the constant table."""

    name: str


@dataclass(frozen=True)
class Unary:
    """+x or -x."""

    op: Sign
    operand: Node


@dataclass(frozen=True)
class Binary:
    """left op right."""

    op: Operator
    left: Node
    right: Node


@dataclass(frozen=True)
class Grouping:
    """( inner ) — evaluates to inner."""

    inner: Node


@dataclass(frozen=True)
class Call:
    """name(args...)."""

    name: str
    args: tuple[Node, ...]


Node = Literal | Identifier | Unary | Binary | Grouping | Call
