"""
The implementations of the main classes and combinators.
"""

from __future__ import annotations
from typing import Any, Literal, Final, Callable, Protocol, TextIO
from collections.abc import Iterable, Iterator

import logging


log = logging.getLogger("charparse")

debug: bool = False
"""
Set to `True` to log every parser invocation at DEBUG level:
```
import logging
logging.basicConfig(level=logging.DEBUG)
charparse.main.debug = True
```
"""



# results

class Failure:
    """
    Returned from a parser when it didn't match at the current position.

    Carries no payload. Always falsy, so it can be checked like this:
    ```
    r = parser(si)
    if r:
        ... # `r` is an `Empty`, `Atom` or `Sequence`
    else:
        ... # `r` is a `Failure`
    ```
    """
    __slots__ = ()

    def __bool__(self) -> Literal[False]:
        return False

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Failure)

    def __hash__(self) -> int:
        return hash(Failure)

    def __str__(self) -> str:
        return "<failure>"

    def __repr__(self) -> str:
        return "Failure()"

class Empty:
    """The designated empty atom. Successful, but carries nothing."""
    __slots__ = ()

    def __bool__(self) -> Literal[True]:
        return True

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Empty)

    def __hash__(self) -> int:
        return hash(Empty)

    def __str__(self) -> str:
        return ""

    def __repr__(self) -> str:
        return "Empty()"

class Atom:
    """A single character or a contiguous string token."""
    __slots__ = ("text",)

    def __init__(self, text: str) -> None:
        self.text: Final[str] = text

    def __bool__(self) -> Literal[True]:
        return True

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Atom):
            return self.text == other.text
        return NotImplemented

    def __hash__(self) -> int:
        return hash((Atom, self.text))

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Atom({self.text!r})"

class Sequence:
    """
    An ordered list of successful results, each an `Atom` or a nested `Sequence`.

    Never holds `Empty` or `Failure` items when built by `merge()` or the repetition combinators.
    """
    __slots__ = ("items",)

    def __init__(self, items: Iterable[Success] = ()) -> None:
        self.items: Final[tuple[Success, ...]] = tuple(items)

    def __bool__(self) -> Literal[True]:
        # an empty Sequence is still a success
        return True

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Success]:
        return iter(self.items)

    def __getitem__(self, index: int) -> Success:
        return self.items[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Sequence):
            return self.items == other.items
        return NotImplemented

    def __hash__(self) -> int:
        return hash((Sequence, self.items))

    def __str__(self) -> str:
        return "[" + ", ".join(str(item) for item in self.items) + "]"

    def __repr__(self) -> str:
        return f"Sequence({list(self.items)!r})"

Success = Empty | Atom | Sequence
Result = Success | Failure


def atom(value: str) -> Atom:
    return Atom(value)

def empty() -> Empty:
    return Empty()

def failure() -> Failure:
    return Failure()

def is_success(result: Result) -> bool:
    return not isinstance(result, Failure)

def is_failure(result: Result) -> bool:
    return isinstance(result, Failure)

def merge(result0: Result, result1: Result) -> Success:
    """
    Combines two successful results.

    - Both empty: returns an empty result.
    - One empty: returns the other one.
    - Otherwise: returns a `Sequence` of both. `Sequence` operands are spliced into it instead of nested, so chains stay flat.
    """
    if isinstance(result0, Failure) or isinstance(result1, Failure):
        raise ValueError("Only successful results can be merged.")
    if isinstance(result0, Empty):
        return result1
    if isinstance(result1, Empty):
        return result0
    items: list[Success] = []
    for result in (result0, result1):
        if isinstance(result, Sequence):
            items.extend(result.items)
        else:
            items.append(result)
    return Sequence(items)

def render(result: Result) -> str:
    """
    Textual form of a result.

    An `Atom` renders as its text, a `Sequence` as `[a, b, [c, d]]`.
    """
    return str(result)

def atoms(result: Result) -> Iterator[str]:
    """Yields the text of every `Atom` in the result, depth first."""
    if isinstance(result, Atom):
        yield result.text
    elif isinstance(result, Sequence):
        for item in result.items:
            yield from atoms(item)



# input

class StringIterator:
    """
    The input stream parsers read from.

    Holds the whole source string and a cursor into it, so saving and restoring the position is O(1).
    """
    def __init__(self, src: str, starting_pos: int = 0) -> None:
        self.src: str = src
        """The string that's being parsed."""
        self.pos: int = starting_pos
        """The current position."""

    @classmethod
    def from_file(cls, fp: TextIO) -> StringIterator:
        """Buffers the remaining contents of a readable text file."""
        return cls(fp.read())

    def __len__(self) -> int:
        return len(self.src)

    def __repr__(self) -> str:
        return f"<StringIterator {self.pos}/{len(self.src)}>"

    def has_chars(self, amount: int) -> bool:
        """Whether there are at least that many characters left."""
        return self.pos+amount <= len(self.src)

    def is_eof(self) -> bool:
        """Whether the end of the input has been reached."""
        return self.pos >= len(self.src)

    def peek(self) -> str | None:
        """Retrieves the next character without consuming it. `None` at the end of the input."""
        if self.is_eof():
            return None
        return self.src[self.pos]

    def advance(self) -> str | None:
        """Consumes and retrieves the next character. `None` at the end of the input."""
        if self.is_eof():
            return None
        self.pos += 1
        return self.src[self.pos-1]

    def take(self, amount: int) -> str | None:
        """
        Consumes and retrieves the specified amount of characters.

        If there aren't enough characters, returns `None` without consuming.
        """
        if not self.has_chars(amount):
            return None
        start_pos = self.pos
        self.pos += amount
        return self.src[start_pos:self.pos]

    def save(self) -> Savepoint:
        """Saves the current position as a `Savepoint` and returns it."""
        return Savepoint(self)


class Savepoint:
    """
    A saved position of a `StringIterator`.

    Can only be reverted manually. (By calling the savepoint.)
    """
    __slots__ = ("pos", "si")

    def __init__(self, si: StringIterator) -> None:
        self.pos: Final[int] = si.pos
        self.si: Final[StringIterator] = si

    def __call__(self) -> None:
        """Same as `Savepoint.rollback()`."""
        self.si.pos = self.pos

    def rollback(self) -> None:
        """Same as `Savepoint.__call__()`."""
        self.si.pos = self.pos



# parsers

class ParserFunction(Protocol):
    def __call__(self, si: StringIterator) -> Result: ...

class Parser:
    """
    An immutable parsing behavior.

    Call it with a `StringIterator` to run it:
    ```
    r = parser(StringIterator("0x1A"))
    if r:
        print(r)    # [0, x, 1A]
    ```

    `p0 | p1` is `or_(p0, p1)` and `p0 & p1` is `and_(p0, p1)`.
    """
    __slots__ = ("_fn", "name")

    def __init__(self, fn: ParserFunction, name: str | None = None) -> None:
        if not callable(fn):
            raise ValueError("A parser must wrap a callable.")
        object.__setattr__(self, "_fn", fn)
        object.__setattr__(self, "name", getattr(fn, "__name__", "parser") if name is None else name)

    def __setattr__(self, key: str, value: Any) -> None:
        raise AttributeError(f"Parser is immutable, can't set `{key}`.")

    def __delattr__(self, key: str) -> None:
        raise AttributeError(f"Parser is immutable, can't delete `{key}`.")

    def __call__(self, si: StringIterator) -> Result:
        if not debug:
            return self._fn(si)
        log.debug("trying %s at %d", self.name, si.pos)
        result = self._fn(si)
        log.debug("%s -> %r, pos = %d", self.name, result, si.pos)
        return result

    def named(self, name: str) -> Parser:
        """Creates a copy of this parser with the provided name. The name shows up in debug logs."""
        return Parser(self._fn, name)

    def parse(self, src: str) -> Result:
        """Runs the parser on a string, starting at the beginning."""
        return self(StringIterator(src))

    def __or__(self, other: Parser) -> Parser:
        return or_(self, other)

    def __and__(self, other: Parser) -> Parser:
        return and_(self, other)

    def __repr__(self) -> str:
        return f"<Parser {self.name}>"


def _check_count(n: int) -> None:
    if n < 0:
        raise ValueError(f"Repetition count can't be negative, got {n}.")

def _check_parsers(parsers: tuple[Parser, ...]) -> None:
    if len(parsers) < 2:
        raise ValueError("At least two parsers required.")
    for parser in parsers:
        if not isinstance(parser, Parser):
            raise ValueError(f"Expected a Parser, got {parser!r}.")


def empty_parser() -> Parser:
    """Always succeeds with an empty result. Consumes nothing."""
    return Parser(lambda si: Empty(), "empty")

def any_() -> Parser:
    """Matches the next character, whatever it is. Fails at the end of the input."""
    def inner(si: StringIterator) -> Result:
        char = si.advance()
        if char is None:
            return Failure()
        return Atom(char)
    return Parser(inner, "any")

def literal(value: str) -> Parser:
    """
    Matches the given character or string. Case sensitive.

    A string is returned as a single `Atom`. On a mismatch, nothing is consumed.
    """
    if len(value) == 0:
        return empty_parser()
    if len(value) == 1:
        def character(si: StringIterator) -> Result:
            if si.peek() == value:
                si.advance()
                return Atom(value)
            return Failure()
        return Parser(character, repr(value))
    def string(si: StringIterator) -> Result:
        savepoint = si.save()
        if si.take(len(value)) != value:
            savepoint.rollback()
            return Failure()
        return Atom(value)
    return Parser(string, repr(value))

def satisfy(predicate: Callable[[str], Any], name: str = "satisfy") -> Parser:
    """Matches the next character if `predicate(char)` is truthy."""
    if not callable(predicate):
        raise ValueError("The predicate must be callable.")
    def inner(si: StringIterator) -> Result:
        char = si.peek()
        if char is not None and predicate(char):
            si.advance()
            return Atom(char)
        return Failure()
    return Parser(inner, name)

def choose(chars: Iterable[str]) -> Parser:
    """
    Matches any one character of the given set. Duplicates don't matter.

    An empty set matches nothing and always succeeds, like `empty_parser()`.
    """
    charset = frozenset(chars)
    if len(charset) == 0:
        return empty_parser()
    return satisfy(charset.__contains__, "{" + "".join(sorted(charset)) + "}")

def _or2(parser0: Parser, parser1: Parser) -> Parser:
    def inner(si: StringIterator) -> Result:
        savepoint = si.save()
        if result := parser0(si):
            return result
        savepoint.rollback()
        return parser1(si)
    return Parser(inner, f"({parser0.name} | {parser1.name})")

def or_(*parsers: Parser) -> Parser:
    """
    Attempts to match any of the parsers, in order, until one matches. If none match, fails.

    The first matching parser wins. There's no backtracking into it once it has matched.
    """
    _check_parsers(parsers)
    result = parsers[-1]
    for parser in reversed(parsers[:-1]):
        result = _or2(parser, result)
    return result

def _and2(parser0: Parser, parser1: Parser) -> Parser:
    def inner(si: StringIterator) -> Result:
        savepoint = si.save()
        if not (result0 := parser0(si)):
            savepoint.rollback()
            return Failure()
        if not (result1 := parser1(si)):
            # undo parser0 too
            savepoint.rollback()
            return Failure()
        return merge(result0, result1)
    return Parser(inner, f"({parser0.name} & {parser1.name})")

def and_(*parsers: Parser) -> Parser:
    """
    All the given parsers must match in sequence for the parser to succeed.

    The results are merged into one flat `Sequence`. If any of them fails, the whole chain is undone.
    """
    _check_parsers(parsers)
    result = parsers[-1]
    for parser in reversed(parsers[:-1]):
        result = _and2(parser, result)
    return result

def between(opening: Parser, body: Parser, closing: Parser) -> Parser:
    """
    Matches `opening`, `body` and `closing` in sequence. Returns only the result of `body`.

    Doesn't roll back on its own. After a failure the position is wherever the failing parser left it.
    """
    def inner(si: StringIterator) -> Result:
        if not opening(si):
            return Failure()
        if not (result := body(si)):
            return Failure()
        if not closing(si):
            return Failure()
        return result
    return Parser(inner, f"between({opening.name}, {body.name}, {closing.name})")

def atleast(parser: Parser, n: int) -> Parser:
    """
    Repeatedly matches the given parser until it fails. Succeeds if it matched at least `n` times.

    The results are collected into a `Sequence`. Empty results are counted, but not collected.
    """
    _check_count(n)
    def inner(si: StringIterator) -> Result:
        savepoint = si.save()
        items: list[Success] = []
        count = 0
        while True:
            pos = si.pos
            if not (result := parser(si)):
                break
            count += 1
            if not isinstance(result, Empty):
                items.append(result)
            if si.pos == pos:
                # matches here forever without consuming
                count = max(count, n)
                break
        if count < n:
            savepoint.rollback()
            return Failure()
        return Sequence(items)
    return Parser(inner, f"atleast({parser.name}, {n})")

def exactly(parser: Parser, n: int) -> Parser:
    """
    Matches the given parser `n` times. Fails if it fails before that.

    Stops after `n` matches, even if the parser could match more.
    """
    _check_count(n)
    def inner(si: StringIterator) -> Result:
        savepoint = si.save()
        items: list[Success] = []
        for _ in range(n):
            if not (result := parser(si)):
                savepoint.rollback()
                return Failure()
            if not isinstance(result, Empty):
                items.append(result)
        return Sequence(items)
    return Parser(inner, f"exactly({parser.name}, {n})")

def zeroplus(parser: Parser) -> Parser:
    """Zero or more matches. Never fails."""
    return atleast(parser, 0)

def oneplus(parser: Parser) -> Parser:
    """One or more matches."""
    return atleast(parser, 1)

def maybe(parser: Parser) -> Parser:
    """Matches the parser if possible, otherwise succeeds with an empty result."""
    return or_(parser, empty_parser())

def chomp(parser: Parser) -> Parser:
    """Matches the parser but throws away its result, returning an empty result instead."""
    def inner(si: StringIterator) -> Result:
        if not parser(si):
            return Failure()
        return Empty()
    return Parser(inner, f"chomp({parser.name})")

def joined(parser: Parser) -> Parser:
    """
    Matches the parser and joins every atom of its result into one `Atom`.

    `joined(oneplus(digit()))` returns `"123"` instead of `[1, 2, 3]`.
    """
    def inner(si: StringIterator) -> Result:
        result = parser(si)
        if isinstance(result, (Failure, Empty)):
            return result
        if text := "".join(atoms(result)):
            return Atom(text)
        return Empty()
    return Parser(inner, f"joined({parser.name})")
