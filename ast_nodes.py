"""AST node definitions for calculator expressions.

This module defines the AST node dataclasses built by the parser and reduced
by the evaluator. Each node is a frozen dataclass carrying its operator
token, child nodes, name or numeric value. The `NodeType` enum identifies
node kinds and is used by the JSON exporter and the visualizer.

Conventions:
- All node dataclasses inherit from `ASTNode`, which records the node kind.
- Nodes are never mutated: the evaluator builds new leaves instead.
- `IntegerNode` and `FloatNode` both store a Python `float`. The class only
    decides how the value is displayed and whether `%` accepts it.
- `str(node)` gives the canonical one-line representation, e.g.
    `Binary(Integer(2), Plus, Float(0.5))`.
- Chains of left-associative operators are only bounded by the input
    length, so walkers go through `left_spine` rather than recursing down
    `BinaryNode.left`.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Tuple

from tokens import Token, TokenType


class NodeType(Enum):
    INTEGER = auto()
    FLOAT = auto()
    UNARY = auto()
    BINARY = auto()
    GROUPING = auto()
    IDENT = auto()
    CALL = auto()

    def __str__(self) -> str:
        return self.name


# Base AST Node
@dataclass(frozen=True)
class ASTNode:
    type: NodeType


# Numeric leaves
@dataclass(frozen=True)
class NumberNode(ASTNode):
    value: float = 0.0


@dataclass(frozen=True)
class IntegerNode(NumberNode):
    type: NodeType = NodeType.INTEGER

    def __str__(self) -> str:
        return f"Integer({int(self.value)})"


@dataclass(frozen=True)
class FloatNode(NumberNode):
    type: NodeType = NodeType.FLOAT

    def __str__(self) -> str:
        return f"Float({self.value!r})"


@dataclass(frozen=True)
class IdentNode(ASTNode):
    type: NodeType = NodeType.IDENT
    name: str = ""

    def __str__(self) -> str:
        return f"Identifier({self.name})"


# Operators
@dataclass(frozen=True)
class UnaryNode(ASTNode):
    type: NodeType = NodeType.UNARY
    operator: Token = field(default_factory=lambda: Token(TokenType.MINUS, "-"))
    operand: ASTNode = field(default_factory=lambda: IntegerNode())

    def __str__(self) -> str:
        return f"Unary({self.operator.kind}, {self.operand})"


@dataclass(frozen=True)
class BinaryNode(ASTNode):
    type: NodeType = NodeType.BINARY
    left: ASTNode = field(default_factory=lambda: IntegerNode())
    operator: Token = field(default_factory=lambda: Token(TokenType.PLUS, "+"))
    right: ASTNode = field(default_factory=lambda: IntegerNode())

    def __str__(self) -> str:
        leftmost, chain = left_spine(self)
        text = str(leftmost)
        for node in chain:
            text = f"Binary({text}, {node.operator.kind}, {node.right})"
        return text


def left_spine(node: ASTNode) -> Tuple[ASTNode, List[BinaryNode]]:
    """Unwind a chain of binary operators along their left operands.

    `1 + 2 + 3 + 4` parses to a tree whose depth grows with every term, so
    code that walks binary nodes follows the left spine with this loop
    instead of recursing into it. Returns the first non-binary left operand
    and the binary nodes from the innermost one out to `node` itself.
    """
    chain = []
    while isinstance(node, BinaryNode):
        chain.append(node)
        node = node.left
    chain.reverse()
    return node, chain


@dataclass(frozen=True)
class GroupingNode(ASTNode):
    type: NodeType = NodeType.GROUPING
    expression: ASTNode = field(default_factory=lambda: IntegerNode())

    def __str__(self) -> str:
        return f"Grouping({self.expression})"


@dataclass(frozen=True)
class CallNode(ASTNode):
    type: NodeType = NodeType.CALL
    function: IdentNode = field(default_factory=lambda: IdentNode())
    arguments: Tuple[ASTNode, ...] = ()

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"Call({self.function.name}, {args})"
