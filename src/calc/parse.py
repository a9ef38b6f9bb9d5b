"""calc parser — recursive descent, one method per grammar production.

Precedence, loosest first:

    |        bitwise or
    &        bitwise and
    + -      sum
    * / %    product
    + -      unary sign
    ^        power, right-associative
    primary  number, name, call, ( expr )

Power binds tighter than the unary sign, so `-2^2` is `-(2^2)`, while the
right operand of `^` may carry its own sign: `2^-1`.
"""

from __future__ import annotations

import logging

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
from .errors import ParseError
from .tokens import TK_EOF, TK_IDENT, TK_NUMBER, TK_OP, Token, tokenize

logger = logging.getLogger("calc.parse")

SUM_OPS: dict[str, Operator] = {"+": Operator.ADD, "-": Operator.SUB}

PRODUCT_OPS: dict[str, Operator] = {
    "*": Operator.MUL,
    "/": Operator.DIV,
    "%": Operator.MOD,
}

SIGNS: dict[str, Sign] = {"+": Sign.PLUS, "-": Sign.MINUS}


class Parser:
    """Recursive descent parser for calc expressions."""

    def __init__(self, tokens: list[Token]):
        self.tokens: list[Token] = tokens
        self.pos: int = 0

    # ── Helpers ──────────────────────────────────────────────

    def current(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def at(self, value: str) -> bool:
        tok = self.current()
        return tok.type == TK_OP and tok.value == value

    def at_type(self, type_: str) -> bool:
        return self.current().type == type_

    def error(self, msg: str) -> ParseError:
        return ParseError(msg, self.current().col)

    def unexpected(self) -> ParseError:
        tok = self.current()
        if tok.type == TK_EOF:
            return self.error("unexpected end of input")
        if tok.value == ")":
            return self.error("unmatched ')'")
        return self.error("unexpected token '" + tok.value + "'")

    def expect_close(self, open_tok: Token) -> Token:
        if self.at(")"):
            return self.advance()
        if self.at_type(TK_EOF):
            raise ParseError("unmatched '('", open_tok.col)
        raise self.unexpected()

    # ── Top Level ────────────────────────────────────────────

    def parse_expression(self) -> Node:
        """Expression = BitOr EOF"""
        if self.at_type(TK_EOF):
            raise self.error("empty expression")
        expr = self.parse_bit_or()
        if not self.at_type(TK_EOF):
            raise self.unexpected()
        return expr

    # ── Expressions ──────────────────────────────────────────

    def parse_bit_or(self) -> Node:
        """BitOr = BitAnd ( '|' BitAnd )*"""
        left = self.parse_bit_and()
        while self.at("|"):
            self.advance()
            right = self.parse_bit_and()
            left = Binary(Operator.BIT_OR, left, right)
        return left

    def parse_bit_and(self) -> Node:
        """BitAnd = Sum ( '&' Sum )*"""
        left = self.parse_sum()
        while self.at("&"):
            self.advance()
            right = self.parse_sum()
            left = Binary(Operator.BIT_AND, left, right)
        return left

    def parse_sum(self) -> Node:
        """Sum = Product ( ( '+' | '-' ) Product )*"""
        left = self.parse_product()
        while self.at("+") or self.at("-"):
            op = SUM_OPS[self.advance().value]
            right = self.parse_product()
            left = Binary(op, left, right)
        return left

    def parse_product(self) -> Node:
        """Product = Unary ( ( '*' | '/' | '%' ) Unary )*"""
        left = self.parse_unary()
        while self.at("*") or self.at("/") or self.at("%"):
            op = PRODUCT_OPS[self.advance().value]
            right = self.parse_unary()
            left = Binary(op, left, right)
        return left

    def parse_unary(self) -> Node:
        """Unary = ( '+' | '-' ) Unary | Power"""
        if self.at("+") or self.at("-"):
            sign = SIGNS[self.advance().value]
            operand = self.parse_unary()
            return Unary(sign, operand)
        return self.parse_power()

    def parse_power(self) -> Node:
        """Power = Primary ( '^' Unary )?"""
        base = self.parse_primary()
        if self.at("("):
            raise self.error(
                "unsupported expression form: only a bare name can be called"
            )
        if self.at("^"):
            self.advance()
            exponent = self.parse_unary()
            return Binary(Operator.POW, base, exponent)
        return base

    def parse_arg_list(self) -> tuple[Node, ...]:
        """ArgList = ( BitOr ( ',' BitOr )* )?"""
        args: list[Node] = []
        if self.at(")"):
            return tuple(args)
        args.append(self.parse_arg())
        while self.at(","):
            self.advance()
            args.append(self.parse_arg())
        return tuple(args)

    def parse_arg(self) -> Node:
        if self.at(",") or self.at(")"):
            raise self.error("unsupported expression form: empty argument")
        return self.parse_bit_or()

    def parse_primary(self) -> Node:
        """Primary = NUMBER | IDENT | IDENT '(' ArgList ')' | '(' BitOr ')'"""
        tok = self.current()

        if tok.type == TK_NUMBER:
            self.advance()
            return Literal(float(tok.value))

        if tok.type == TK_IDENT:
            self.advance()
            if self.at("("):
                open_tok = self.advance()
                args = self.parse_arg_list()
                self.expect_close(open_tok)
                return Call(tok.value, args)
            return Identifier(tok.value)

        if self.at("("):
            open_tok = self.advance()
            if self.at(")"):
                raise self.error("empty parentheses")
            inner = self.parse_bit_or()
            self.expect_close(open_tok)
            return Grouping(inner)

        raise self.unexpected()


def parse(source: str) -> Node:
    """Parse an expression into its syntax tree. Performs no evaluation."""
    tokens = tokenize(source)
    parser = Parser(tokens)
    try:
        node = parser.parse_expression()
    except RecursionError:
        raise ParseError(
            "expression nested too deeply", parser.current().col
        ) from None
    logger.debug("parsed %r -> %r", source, node)
    return node
