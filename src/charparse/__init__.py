"""
Library of composable parser values with automatic backtracking.

See the objects for more explanations.

See the `charparse.general` module for pre-built parsers you can use as examples.

Building parsers:
```
sign = maybe(choose("+-"))
number = and_(sign, literal("0"), or_(literal("x"), literal("X")), hexdigits())
pair = between(literal("("), and_(lower(), chomp(literal(",")), lower()), literal(")"))
```

Using parsers:
```
si = StringIterator("0x1A")

result = number(si)
if result:
    print(render(result))   # [0, x, 1A]
else:
    ...                     # `result` is a `Failure`, and `si.pos` is back where it started
```
"""

import charparse.const as const
import charparse.main
from charparse.main import (
    Failure,
    Empty,
    Atom,
    Sequence,
    Success,
    Result,
    atom,
    empty,
    failure,
    is_success,
    is_failure,
    merge,
    render,
    atoms,
    StringIterator,
    Savepoint,
    Parser,
    empty_parser,
    any_,
    literal,
    satisfy,
    choose,
    or_,
    and_,
    between,
    atleast,
    exactly,
    zeroplus,
    oneplus,
    maybe,
    chomp,
    joined,
)
import charparse.general as general
from charparse.general import (
    digit,
    hexdigit,
    lower,
    upper,
    whitespace,
    alpha,
    alphanum,
    digits,
    hexdigits,
    int_,
    hexint,
)
