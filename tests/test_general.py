"""Tests for the pre-built character classes and grammars."""

from __future__ import annotations

import pytest

from charparse import (
    Failure,
    StringIterator,
    alpha,
    alphanum,
    atom,
    digit,
    digits,
    hexdigit,
    hexdigits,
    hexint,
    int_,
    lower,
    render,
    upper,
    whitespace,
)


def run(parser, src: str):
    si = StringIterator(src)
    result = parser(si)
    return result, si.pos


class TestCharacterClasses:
    @pytest.mark.parametrize(
        "parser, accepted, rejected",
        [
            (digit(), "0123456789", "aA -"),
            (hexdigit(), "0123456789abcdefABCDEF", "gG x"),
            (lower(), "az", "AZ0_"),
            (upper(), "AZ", "az0_"),
            (alpha(), "azAZ", "09_ "),
            (alphanum(), "azAZ09", "_- "),
            (whitespace(), " \t\n", "a_\r"),
        ],
    )
    def test_membership(self, parser, accepted, rejected):
        for char in accepted:
            assert run(parser, char) == (atom(char), 1)
        for char in rejected:
            assert run(parser, char) == (Failure(), 0)

    def test_prebuilt(self):
        assert digit() is digit()
        assert digit().name == "digit"


class TestNumbers:
    def test_digits(self):
        assert run(digits(), "123x") == (atom("123"), 3)
        assert run(digits(), "x") == (Failure(), 0)

    def test_hexdigits(self):
        assert run(hexdigits(), "1aF9g") == (atom("1aF9"), 4)

    def test_int(self):
        assert render(int_().parse("42")) == "42"
        assert render(int_().parse("-42")) == "[-, 42]"
        assert render(int_().parse("+7")) == "[+, 7]"

    def test_int_failure(self):
        assert run(int_(), "-x") == (Failure(), 0)
        assert run(int_(), "") == (Failure(), 0)

    def test_hexint(self):
        result, pos = run(hexint(), "0x1A")
        assert render(result) == "[0, x, 1A]"
        assert [str(item) for item in result] == ["0", "x", "1A"]
        assert pos == 4

    def test_hexint_signed(self):
        assert render(hexint().parse("-0X1a")) == "[-, 0, X, 1a]"

    def test_hexint_stops_at_non_hex(self):
        assert run(hexint(), "0xffz") == (hexint().parse("0xff"), 4)

    @pytest.mark.parametrize("src", ["0y1A", "0x", "x1A", "+0y1", "-", ""])
    def test_hexint_failure_rewinds(self, src):
        result, pos = run(hexint(), src)
        assert not result
        assert pos == 0
