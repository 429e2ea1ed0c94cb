"""
Character sets used by the pre-built parsers.
"""

from __future__ import annotations
from typing import Final

WHITESPACES: Final[frozenset[str]] = frozenset({" ", "\t", "\n"})
SIGNS: Final[frozenset[str]] = frozenset({"+", "-"})
DECIMAL: Final[frozenset[str]] = frozenset("0123456789")
HEXADECIMAL: Final[frozenset[str]] = DECIMAL | frozenset("abcdefABCDEF")
LOWERCASE: Final[frozenset[str]] = frozenset("abcdefghijklmnopqrstuvwxyz")
UPPERCASE: Final[frozenset[str]] = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ")
