"""Convert AST nodes into JSON-serializable structures.

This module provides `ast_to_json(node)` which returns a nested structure of
dicts/lists/primitives describing the AST node. Each dict carries the node
kind under `node_type` plus the node's fields; operator tokens are encoded as
their kind name and lexeme. Non-finite values (`inf`, `nan`) are kept as
floats, which `json.dumps` writes as `Infinity`/`NaN`.
"""

from typing import Any, Dict, Optional
from ast_nodes import *
from tokens import Token


def token_to_json(token: Token) -> Dict[str, Any]:
    return {"kind": str(token.kind), "lexeme": token.lexeme}


def ast_to_json(node: Optional[ASTNode]) -> Any:
    if node is None:
        return None

    t = getattr(node, "type", None)
    # leaves
    if t == NodeType.INTEGER and isinstance(node, IntegerNode):
        return {"node_type": "Integer", "value": int(node.value)}
    if t == NodeType.FLOAT and isinstance(node, FloatNode):
        return {"node_type": "Float", "value": node.value}
    if t == NodeType.IDENT and isinstance(node, IdentNode):
        return {"node_type": "Identifier", "name": node.name}
    # expressions
    if t == NodeType.BINARY and isinstance(node, BinaryNode):
        leftmost, chain = left_spine(node)
        result = ast_to_json(leftmost)
        for n in chain:
            result = {
                "node_type": "Binary",
                "operator": token_to_json(n.operator),
                "left": result,
                "right": ast_to_json(n.right),
            }
        return result
    if t == NodeType.UNARY and isinstance(node, UnaryNode):
        return {
            "node_type": "Unary",
            "operator": token_to_json(node.operator),
            "operand": ast_to_json(node.operand),
        }
    if t == NodeType.GROUPING and isinstance(node, GroupingNode):
        return {"node_type": "Grouping", "expression": ast_to_json(node.expression)}
    if t == NodeType.CALL and isinstance(node, CallNode):
        return {
            "node_type": "Call",
            "function": node.function.name,
            "arguments": [ast_to_json(a) for a in node.arguments],
        }

    raise TypeError(f"Cannot serialize {node!r}")
