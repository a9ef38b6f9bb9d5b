"""calc CLI — evaluate expressions from arguments or stdin."""

from __future__ import annotations

import logging
import sys

from . import calculate, parse
from .emit import to_sexpr
from .errors import CalcError


USAGE: str = """\
calc [OPTIONS] [EXPR ...]

Evaluate arithmetic expressions. Each EXPR is evaluated and printed on its
own line; with no EXPR, each non-blank line of stdin is evaluated.

Options:
  --ast            Print the parsed tree instead of evaluating
  --precision N    Print results with N digits after the decimal point
  --verbose        Log parse and evaluation details to stderr
  --help           Show this help message
"""


def format_result(value: float, precision: int | None) -> str:
    if precision is None:
        return repr(value)
    return f"{value:.{precision}f}"


def main(argv: list[str] | None = None) -> int:
    args = argv if argv is not None else sys.argv[1:]
    exprs: list[str] = []
    show_ast = False
    verbose = False
    precision: int | None = None
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            return 0
        elif arg == "--ast":
            show_ast = True
            i += 1
        elif arg == "--verbose" or arg == "-v":
            verbose = True
            i += 1
        elif arg == "--precision":
            if i + 1 >= len(args):
                print("calc: --precision requires a value", file=sys.stderr)
                return 2
            value = args[i + 1]
            if not value.isdigit():
                print("calc: invalid precision '" + value + "'", file=sys.stderr)
                return 2
            precision = int(value)
            i += 2
        elif arg == "--":
            exprs.extend(args[i + 1 :])
            break
        elif arg.startswith("--"):
            print("calc: unknown flag '" + arg + "'", file=sys.stderr)
            return 2
        else:
            # A leading '-' may be a negative number: `calc -1+2`
            exprs.append(arg)
            i += 1

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, stream=sys.stderr, format="%(name)s: %(message)s"
        )

    if not exprs:
        for line in sys.stdin:
            if line.strip() != "":
                exprs.append(line.strip())

    status = 0
    for expr in exprs:
        try:
            if show_ast:
                print(to_sexpr(parse(expr)))
            else:
                print(format_result(calculate(expr), precision))
        except CalcError as e:
            print("calc: " + e.kind + ": " + str(e), file=sys.stderr)
            status = 1
    return status


if __name__ == "__main__":
    sys.exit(main())
