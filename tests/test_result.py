"""Tests for the result algebra."""

from __future__ import annotations

import pytest

from charparse import (
    Atom,
    Empty,
    Failure,
    Sequence,
    atom,
    atoms,
    empty,
    failure,
    is_failure,
    is_success,
    merge,
    render,
)


class TestConstructors:
    def test_atom(self):
        assert atom("a") == Atom("a")
        assert atom("abc").text == "abc"

    def test_empty_is_distinct_from_atoms(self):
        assert empty() == Empty()
        assert empty() != atom("")
        assert empty() != atom("e")

    def test_fresh_values(self):
        assert failure() == failure()
        assert failure() is not failure()

    def test_truthiness(self):
        assert atom("a")
        assert empty()
        assert Sequence()
        assert not failure()

    def test_predicates(self):
        for r in (atom("a"), empty(), Sequence([atom("a")])):
            assert is_success(r)
            assert not is_failure(r)
        assert is_failure(failure())
        assert not is_success(failure())


class TestMerge:
    def test_both_empty(self):
        assert merge(empty(), empty()) == empty()

    def test_one_empty(self):
        assert merge(empty(), atom("x")) == atom("x")
        assert merge(atom("x"), empty()) == atom("x")
        seq = Sequence([atom("a"), atom("b")])
        assert merge(empty(), seq) == seq

    def test_two_atoms(self):
        assert merge(atom("a"), atom("b")) == Sequence([atom("a"), atom("b")])

    def test_sequences_are_spliced(self):
        left = Sequence([atom("a"), atom("b")])
        right = Sequence([atom("c"), atom("d")])
        assert merge(left, right) == Sequence([atom("a"), atom("b"), atom("c"), atom("d")])
        assert merge(atom("z"), right) == Sequence([atom("z"), atom("c"), atom("d")])
        assert merge(left, atom("z")) == Sequence([atom("a"), atom("b"), atom("z")])

    def test_nested_sequences_keep_their_depth(self):
        inner = Sequence([atom("b"), atom("c")])
        left = Sequence([atom("a"), inner])
        assert merge(left, atom("d")) == Sequence([atom("a"), inner, atom("d")])

    def test_empty_sequence_is_not_empty_atom(self):
        assert merge(Sequence(), atom("a")) == Sequence([atom("a")])

    def test_failure_rejected(self):
        with pytest.raises(ValueError):
            merge(failure(), atom("a"))
        with pytest.raises(ValueError):
            merge(atom("a"), failure())


class TestRender:
    def test_atom(self):
        assert render(atom("1A")) == "1A"

    def test_sequence(self):
        assert render(Sequence([atom("0"), atom("x"), atom("1A")])) == "[0, x, 1A]"

    def test_nested(self):
        r = Sequence([atom("a"), Sequence([atom("b"), atom("c")])])
        assert render(r) == "[a, [b, c]]"
        assert str(r) == render(r)

    def test_empty_sequence(self):
        assert render(Sequence()) == "[]"

    def test_empty_and_failure(self):
        assert render(empty()) == ""
        assert render(failure()) == "<failure>"


def test_atoms_walks_depth_first():
    r = Sequence([atom("a"), Sequence([atom("b"), Sequence([atom("c")])]), atom("d")])
    assert list(atoms(r)) == ["a", "b", "c", "d"]
    assert list(atoms(empty())) == []
    assert list(atoms(failure())) == []
