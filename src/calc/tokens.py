"""calc tokenizer — lexes an expression into a flat token list."""

from __future__ import annotations

from .errors import TokenizeError


# Token type constants
TK_NUMBER = "NUMBER"
TK_IDENT = "IDENT"
TK_OP = "OP"
TK_EOF = "EOF"

OPERATORS: set[str] = {
    "+",
    "-",
    "*",
    "/",
    "%",
    "&",
    "|",
    "^",
    "(",
    ")",
    ",",
}

WHITESPACE: set[str] = {" ", "\t", "\r", "\n"}

INT64_MAX: int = 2**63 - 1


class Token:
    """A token with type, value, and 1-based column."""

    def __init__(self, type_: str, value: str, col: int):
        self.type: str = type_
        self.value: str = value
        self.col: int = col

    def __repr__(self) -> str:
        return (
            "Token(" + self.type + ", " + repr(self.value) + ", " + str(self.col) + ")"
        )


def _is_digit(c: str) -> bool:
    return c >= "0" and c <= "9"


def _is_alpha(c: str) -> bool:
    return (c >= "a" and c <= "z") or (c >= "A" and c <= "Z") or c == "_"


def _is_alnum(c: str) -> bool:
    return _is_alpha(c) or _is_digit(c)


def _scan_number(source: str, pos: int) -> int:
    """Scan a numeric literal starting at pos. Returns the end offset.

    Accepts `12`, `1.5`, `1.` and `.5`. Rejects a literal that runs straight
    into an identifier character or a second decimal point.
    """
    length = len(source)
    start = pos
    while pos < length and _is_digit(source[pos]):
        pos += 1
    if pos < length and source[pos] == ".":
        pos += 1
        while pos < length and _is_digit(source[pos]):
            pos += 1
    if pos - start == 1 and source[start] == ".":
        raise TokenizeError("malformed number '.'", start + 1)
    if pos < length and (_is_alpha(source[pos]) or source[pos] == "."):
        end = pos
        while end < length and (_is_alnum(source[end]) or source[end] == "."):
            end += 1
        raise TokenizeError("malformed number '" + source[start:end] + "'", start + 1)
    raw = source[start:pos]
    if "." not in raw and int(raw) > INT64_MAX:
        raise TokenizeError("integer literal out of range '" + raw + "'", start + 1)
    return pos


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression into a flat list ending with TK_EOF."""
    tokens: list[Token] = []
    pos = 0
    length = len(source)

    while pos < length:
        c = source[pos]

        if c in WHITESPACE:
            pos += 1
            continue

        start = pos

        # Number: 12, 1.5, 1., .5
        if _is_digit(c) or c == ".":
            pos = _scan_number(source, pos)
            tokens.append(Token(TK_NUMBER, source[start:pos], start + 1))
            continue

        # Identifier
        if _is_alpha(c):
            while pos < length and _is_alnum(source[pos]):
                pos += 1
            tokens.append(Token(TK_IDENT, source[start:pos], start + 1))
            continue

        if c in OPERATORS:
            tokens.append(Token(TK_OP, c, start + 1))
            pos += 1
            continue

        raise TokenizeError("unexpected character " + repr(c), start + 1)

    tokens.append(Token(TK_EOF, "", length + 1))
    return tokens
