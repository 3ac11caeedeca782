"""Token definitions for the lexer.

This module defines the `TokenType` enum for every token kind recognized by
the lexer and a small immutable `Token` dataclass holding the kind and the
lexeme. Tokens are produced by the lexer and consumed by the parser; operator
tokens are also kept inside `UnaryNode`/`BinaryNode` for display.
"""

from __future__ import annotations
from enum import Enum
from dataclasses import dataclass, field


class TokenType(Enum):
    # Literals
    INT = "Int"
    FLOAT = "Float"

    # Arithmetic operators
    PLUS = "Plus"
    MINUS = "Minus"
    DIV = "Div"
    EXP = "Exp"
    MODULO = "Modulo"
    MUL = "Mul"

    # Grouping and punctuation
    LEFT_PAREN = "LeftParen"
    RIGHT_PAREN = "RightParen"
    COMMA = "Comma"

    # Function names
    IDENT = "Ident"

    # Special
    EOF = "Eof"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Token:
    kind: TokenType
    lexeme: str = ""
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)

    def __repr__(self) -> str:
        return f"Token({self.kind}, '{self.lexeme}')"

    __str__ = __repr__
