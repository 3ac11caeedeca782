"""Built-in constants and functions.

Both tables are plain data so that the lexer, parser and evaluator share a
single source of truth:

- `CONSTANTS` maps a (lower-case) name to its value. The lexer folds these
  straight into `Float` tokens whose lexeme is `repr(value)`, so there is no
  AST node kind for constant references.
- `FUNCTIONS` maps a (lower-case) function name to a `Function` record
  holding its arity, an optional domain check and the underlying `math`
  operation. Adding a function is a one-line change here.

Undefined points that the domain checks do not guard (e.g. `arcsin(2)` or
`ln(-1)`) evaluate to nan, and overflows and poles (`arctanh(1)`) to an
infinity, the way the C math
library reports them, instead of raising Python's `ValueError` or
`OverflowError`.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from errors import MathError


CONSTANTS: Dict[str, float] = {
    "pi": math.pi,
    "e": math.e,
    "tau": math.tau,
    "inf": math.inf,
    "nan": math.nan,
    "phi": (1 + math.sqrt(5)) / 2,
}


@dataclass(frozen=True)
class Function:
    name: str
    arity: int
    operation: Callable[..., float]
    domain_check: Optional[Callable[..., None]] = None
    # Odd functions overflow towards the sign of their argument
    odd: bool = False

    def __call__(self, *args: float) -> float:
        if len(args) != self.arity:
            raise TypeError(
                f"{self.name}() takes {self.arity} argument(s), got {len(args)}"
            )
        if self.domain_check is not None:
            self.domain_check(*args)
        try:
            return self.operation(*args)
        except ValueError:
            return math.nan
        except OverflowError:
            return math.copysign(math.inf, args[0]) if self.odd else math.inf


def _non_negative(x: float) -> None:
    if x < 0:
        raise MathError("cannot take the square root of a negative number")


def _non_zero(x: float, *_: float) -> None:
    if x == 0:
        raise MathError("logarithm of zero is undefined")


def _log_domain(x: float, base: float) -> None:
    _non_zero(x)
    if base == 1:
        raise MathError("logarithm base can't be 1")


def _log(x: float, base: float) -> float:
    # Dedicated routines are exact for powers of their base
    if base == 2:
        return math.log2(x)
    if base == 10:
        return math.log10(x)
    return math.log(x, base)


def _atanh(x: float) -> float:
    # The poles at +-1 are infinite rather than undefined
    if abs(x) == 1:
        return math.copysign(math.inf, x)
    return math.atanh(x)


def _define(*functions: Function) -> Dict[str, Function]:
    return {f.name: f for f in functions}


FUNCTIONS: Dict[str, Function] = _define(
    # Trigonometric
    Function("sin", 1, math.sin),
    Function("cos", 1, math.cos),
    Function("tan", 1, math.tan),
    Function("arcsin", 1, math.asin),
    Function("arccos", 1, math.acos),
    Function("arctan", 1, math.atan),
    # Hyperbolic
    Function("sinh", 1, math.sinh, odd=True),
    Function("cosh", 1, math.cosh),
    Function("tanh", 1, math.tanh),
    Function("arcsinh", 1, math.asinh),
    Function("arccosh", 1, math.acosh),
    Function("arctanh", 1, _atanh),
    # Roots
    Function("sqrt", 1, math.sqrt, _non_negative),
    Function("cbrt", 1, math.cbrt),
    # Logarithms; log(x, base)
    Function("ln", 1, math.log, _non_zero),
    Function("log10", 1, math.log10, _non_zero),
    Function("log2", 1, math.log2, _non_zero),
    Function("log", 2, _log, _log_domain),
    Function("hypot", 2, math.hypot),
)


def lookup(name: str) -> Optional[Function]:
    """Return the built-in function called `name` (case-insensitive)."""
    return FUNCTIONS.get(name.lower())
