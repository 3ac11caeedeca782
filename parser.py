"""
Parser for calculator expressions.

Overview and approach:
- This parser is a small hand-written recursive-descent parser with one
    method per precedence level, from loosest to tightest binding:

        expression     := additive
        additive       := multiplicative (('+' | '-') multiplicative)*
        multiplicative := power (('*' | '/' | '%') power)*
        power          := unary ('^' power)?
        unary          := ('-' | '+') unary | call
        call           := primary ( '(' arguments? ')' )?
        primary        := INT | FLOAT | IDENT | '(' expression ')'

Key points:
- Unary operators bind tighter than `^`, so `-2^2` is `(-2)^2`. Exponentiation
    is right-associative; the other binary operators are left-associative.
- A parenthesized expression becomes a `GroupingNode`.
- Calls are validated here rather than at evaluation time: only identifiers
    may be called, the argument count must match the function table, and an
    identifier that is not called is rejected.
- The whole token list must be consumed: `2 2` is an error, not `2`.
- Nesting depth is bounded by `max_depth` so that adversarial input (e.g.
    thousands of parentheses) produces a `ParseError` rather than exhausting
    the interpreter stack during parsing or evaluation. Parentheses, call
    arguments and unary and `^` chains count against it. Flat `+ - * / %`
    chains do not: they are parsed in a loop and walked via `left_spine`.
"""

from __future__ import annotations
import logging
from typing import List, Optional

from ast_nodes import *
from errors import ParseError
from functions import lookup
from tokens import Token, TokenType

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 200
# A nested expression costs several stack frames per level of parentheses
EXPRESSION_COST = 4


class Parser:
    def __init__(self, tokens: List[Token], max_depth: int = DEFAULT_MAX_DEPTH):
        self.tokens = tokens
        self.pos = 0
        self.current = tokens[0] if tokens else Token(TokenType.EOF)
        self.max_depth = max_depth
        self.depth = 0

    def error(self, message: str) -> ParseError:
        return ParseError(message)

    def advance(self) -> Token:
        """Consume the current token and return it."""
        token = self.current
        self.pos += 1
        if self.pos < len(self.tokens):
            self.current = self.tokens[self.pos]
        else:
            self.current = Token(TokenType.EOF)
        return token

    def check(self, *kinds: TokenType) -> bool:
        return self.current.kind in kinds

    def match(self, *kinds: TokenType) -> Optional[Token]:
        """Consume and return the current token if it has one of `kinds`."""
        if self.check(*kinds):
            return self.advance()
        return None

    def expect(self, kind: TokenType, message: str) -> Token:
        """Expect and consume a token of the given kind."""
        if self.current.kind == kind:
            return self.advance()
        if self.current.kind == TokenType.EOF:
            raise self.error("unexpected end of input")
        raise self.error(f"{message}, got {self.current}")

    def descend(self, cost: int = 1) -> None:
        """Account for `cost` more levels of nesting."""
        self.depth += cost
        if self.depth > self.max_depth:
            raise self.error(
                f"expression is nested too deeply (limit is {self.max_depth})"
            )

    def parse_number(self, token: Token) -> ASTNode:
        try:
            value = float(token.lexeme)
        except ValueError:
            raise self.error(f"malformed number '{token.lexeme}'") from None
        if token.kind == TokenType.INT:
            return IntegerNode(value=value)
        return FloatNode(value=value)

    def parse_primary(self) -> ASTNode:
        """Parse literals, function names and parenthesized expressions."""
        token = self.current

        match token.kind:
            case TokenType.INT | TokenType.FLOAT:
                self.advance()
                return self.parse_number(token)

            case TokenType.IDENT:
                self.advance()
                return IdentNode(name=token.lexeme.lower())

            case TokenType.LEFT_PAREN:
                self.advance()
                expression = self.parse_expression()
                self.expect(TokenType.RIGHT_PAREN, "Expected ')'")
                return GroupingNode(expression=expression)

            case TokenType.EOF:
                raise self.error("unexpected end of input")

            case _:
                raise self.error(f"Unexpected token: {token}")

    def parse_call(self) -> ASTNode:
        """Parse a primary expression optionally followed by an argument list."""
        callee = self.parse_primary()

        if self.match(TokenType.LEFT_PAREN) is None:
            if isinstance(callee, IdentNode):
                raise self.error(f"function '{callee.name}' must be called")
            return callee

        if not isinstance(callee, IdentNode):
            raise self.error(f"cannot call a non-identifier ({callee})")

        args: List[ASTNode] = []
        if not self.check(TokenType.RIGHT_PAREN):
            args.append(self.parse_expression())
            while self.match(TokenType.COMMA):
                args.append(self.parse_expression())
        self.expect(TokenType.RIGHT_PAREN, f"Unclosed call to '{callee.name}'")

        function = lookup(callee.name)
        if function is None:
            raise self.error(f"unknown function '{callee.name}'")
        arity = function.arity
        if len(args) != arity:
            raise self.error(
                f"wrong number of arguments for '{callee.name}': "
                f"expected {arity}, got {len(args)}"
            )
        return CallNode(function=callee, arguments=tuple(args))

    def parse_unary(self) -> ASTNode:
        """Parse prefix `-` and `+`."""
        operator = self.match(TokenType.MINUS, TokenType.PLUS)
        if operator is None:
            return self.parse_call()

        depth = self.depth
        self.descend()
        node = UnaryNode(operator=operator, operand=self.parse_unary())
        self.depth = depth
        return node

    def parse_power(self) -> ASTNode:
        """Parse right-associative exponentiation."""
        base = self.parse_unary()
        operator = self.match(TokenType.EXP)
        if operator is None:
            return base

        depth = self.depth
        self.descend()
        node = BinaryNode(left=base, operator=operator, right=self.parse_power())
        self.depth = depth
        return node

    def parse_left_associative(self, operand, *kinds: TokenType) -> ASTNode:
        """Parse `operand (op operand)*` for the given operator kinds.

        The chain is built in a loop and every operand starts at the same
        depth, so the number of terms is not limited by `max_depth`.
        """
        left = operand()
        while (operator := self.match(*kinds)) is not None:
            left = BinaryNode(left=left, operator=operator, right=operand())
        return left

    def parse_multiplicative(self) -> ASTNode:
        return self.parse_left_associative(
            self.parse_power, TokenType.MUL, TokenType.DIV, TokenType.MODULO
        )

    def parse_additive(self) -> ASTNode:
        return self.parse_left_associative(
            self.parse_multiplicative, TokenType.PLUS, TokenType.MINUS
        )

    def parse_expression(self) -> ASTNode:
        """Parse an expression."""
        depth = self.depth
        self.descend(EXPRESSION_COST)
        node = self.parse_additive()
        self.depth = depth
        return node

    def parse(self) -> ASTNode:
        """Parse the complete token list into a single expression."""
        result = self.parse_expression()
        if self.current.kind != TokenType.EOF:
            raise self.error(f"Unexpected token after expression: {self.current}")
        logger.debug("parsed %s", result)
        return result
