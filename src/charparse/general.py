"""
Pre-built character classes and small grammars, composed from the combinators in `charparse.main`.

The parsers are built once at import time. Parsers are immutable, so the functions return the same objects every time.
"""

from __future__ import annotations

import charparse.const as const
from charparse.main import (
    Parser,
    literal,
    choose,
    or_,
    and_,
    oneplus,
    maybe,
    joined,
)

# character classes

_DIGIT = choose(const.DECIMAL).named("digit")
_HEXDIGIT = choose(const.HEXADECIMAL).named("hexdigit")
_LOWER = choose(const.LOWERCASE).named("lower")
_UPPER = choose(const.UPPERCASE).named("upper")
_WHITESPACE = choose(const.WHITESPACES).named("whitespace")
_ALPHA = or_(_LOWER, _UPPER).named("alpha")
_ALPHANUM = or_(_ALPHA, _DIGIT).named("alphanum")

def digit() -> Parser:
    return _DIGIT

def hexdigit() -> Parser:
    """`0-9`, `a-f` and `A-F`."""
    return _HEXDIGIT

def lower() -> Parser:
    return _LOWER

def upper() -> Parser:
    return _UPPER

def whitespace() -> Parser:
    """A space, tab or newline."""
    return _WHITESPACE

def alpha() -> Parser:
    return _ALPHA

def alphanum() -> Parser:
    return _ALPHANUM

# numbers

_DIGITS = joined(oneplus(_DIGIT)).named("digits")
_HEXDIGITS = joined(oneplus(_HEXDIGIT)).named("hexdigits")
_SIGN = maybe(choose(const.SIGNS)).named("sign")
_INT = and_(_SIGN, _DIGITS).named("int")
_HEXINT = and_(_SIGN, literal("0"), or_(literal("x"), literal("X")), _HEXDIGITS).named("hexint")

def digits() -> Parser:
    """
    One or more decimal digits, as a single atom.

    `"123"` gives `123`, not `[1, 2, 3]`.
    """
    return _DIGITS

def hexdigits() -> Parser:
    """One or more hexadecimal digits, as a single atom."""
    return _HEXDIGITS

def int_() -> Parser:
    """
    An optionally signed decimal integer.

    `"-42"` gives `[-, 42]`, `"42"` gives `42`.
    """
    return _INT

def hexint() -> Parser:
    """
    An optionally signed hexadecimal integer with a `0x` or `0X` prefix.

    `"0x1A"` gives `[0, x, 1A]`, `"-0X1a"` gives `[-, 0, X, 1a]`.
    """
    return _HEXINT
