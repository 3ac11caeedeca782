"""
Lexer for calculator expressions.

Overview:
- This module implements a small hand-written scanner that turns an input
    string into a list of `Token` objects defined in `tokens.py`, ending with
    a single `EOF` token.
- It recognizes numeric literals (integers, decimals and scientific
    notation), the single-character operators `+ - * / % ^`, parentheses,
    commas, and identifiers. Spaces, tabs, carriage returns and newlines are
    skipped.

Examples:
    Input:  "2 * sin(pi / 2)"
    Tokens: [INT('2'), MUL, IDENT('sin'), LEFT_PAREN, FLOAT('3.14...'), DIV,
             INT('2'), RIGHT_PAREN, EOF]

Implementation notes:
- The lexer is a simple stateful scanner using `self.pos` and
    `self.current_char`, moving strictly forward.
- Identifiers are resolved case-insensitively as soon as they are scanned:
    constants (`pi`, `e`, `tau`, `inf`, `nan`, `phi`) are folded into `FLOAT`
    tokens carrying the constant's literal value, function names become
    `IDENT` tokens, and anything else is reported immediately.
- A number accepts at most one decimal point and one exponent marker. A
    repeated `.` or `e` simply ends the number; validating the lexeme is left
    to the parser.
"""

from __future__ import annotations
import logging
from typing import Optional, List

from errors import ParseError
from functions import CONSTANTS, FUNCTIONS
from tokens import Token, TokenType

logger = logging.getLogger(__name__)

WHITESPACE = " \t\r\n"

SINGLE_CHAR_TOKENS = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    "*": TokenType.MUL,
    "/": TokenType.DIV,
    "%": TokenType.MODULO,
    "^": TokenType.EXP,
    ",": TokenType.COMMA,
}


def _is_digit(char: Optional[str]) -> bool:
    # str.isdigit() also accepts superscripts, which float() rejects
    return char is not None and "0" <= char <= "9"


class Lexer:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1
        self.current_char = self.text[self.pos] if self.text else None

    def error(self, message: str = "") -> ParseError:
        msg = f"Lexical error at line {self.line}, column {self.column}: {message}"
        return ParseError(msg)

    def advance(self) -> None:
        """Advance to next character."""
        if self.current_char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        self.pos += 1
        if self.pos < len(self.text):
            self.current_char = self.text[self.pos]
        else:
            self.current_char = None

    def skip_whitespace(self) -> None:
        """Skip whitespace characters."""
        while self.current_char is not None and self.current_char in WHITESPACE:
            self.advance()

    def number(self) -> Token:
        """Scan an integer, decimal or scientific-notation literal."""
        line, column = self.line, self.column
        result = []
        kind = TokenType.INT
        seen_dot = False
        seen_exponent = False

        while self.current_char is not None:
            if _is_digit(self.current_char):
                result.append(self.current_char)
                self.advance()
            elif self.current_char == "." and not (seen_dot or seen_exponent):
                seen_dot = True
                kind = TokenType.FLOAT
                result.append(self.current_char)
                self.advance()
            elif self.current_char in "eE" and not seen_exponent:
                seen_exponent = True
                kind = TokenType.FLOAT
                result.append(self.current_char)
                self.advance()
                # One optional sign right after the marker
                if self.current_char is not None and self.current_char in "+-":
                    result.append(self.current_char)
                    self.advance()
            else:
                break

        return Token(kind, "".join(result), line, column)

    def identifier(self) -> Token:
        """Scan an identifier and resolve it to a constant or function name."""
        line, column = self.line, self.column
        result = []

        while self.current_char is not None and (
            self.current_char.isalnum() or self.current_char == "_"
        ):
            result.append(self.current_char)
            self.advance()

        text = "".join(result)
        name = text.lower()
        if name in CONSTANTS:
            return Token(TokenType.FLOAT, repr(CONSTANTS[name]), line, column)
        if name in FUNCTIONS:
            return Token(TokenType.IDENT, text, line, column)

        self.line, self.column = line, column
        raise self.error(f"Unknown identifier '{text}'")

    def get_next_token(self) -> Token:
        """Lexical analyzer that returns tokens one at a time."""
        while self.current_char is not None:
            if self.current_char in WHITESPACE:
                self.skip_whitespace()
                continue

            kind = SINGLE_CHAR_TOKENS.get(self.current_char)
            if kind is not None:
                token = Token(kind, self.current_char, self.line, self.column)
                self.advance()
                return token

            if _is_digit(self.current_char):
                return self.number()

            if self.current_char.isalpha() or self.current_char == "_":
                return self.identifier()

            raise self.error(f"Unexpected character '{self.current_char}'")

        return Token(TokenType.EOF, "", self.line, self.column)

    def tokenize(self) -> List[Token]:
        """Return all tokens from the input string."""
        tokens = []
        while True:
            token = self.get_next_token()
            tokens.append(token)
            if token.kind == TokenType.EOF:
                break
        logger.debug("lexed %d token(s) from %r", len(tokens), self.text)
        return tokens
