"""Error kinds raised by the calculator pipeline.

- `ParseError` covers everything detected before evaluation: unknown
    identifiers, unexpected characters, malformed grouping, leftover tokens,
    wrong call arity and calls on non-identifiers.
- `MathError` is raised by the evaluator for division/modulo by zero,
    modulo on non-integers and domain violations of built-in functions.
- `InternalError` marks states the parser should have made unreachable. It
    is a defect, not a user-facing condition, and is never caught.
"""


class ParseError(SyntaxError):
    pass


class MathError(ArithmeticError):
    pass


class InternalError(RuntimeError):
    pass
