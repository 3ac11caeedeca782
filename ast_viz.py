"""Graphviz visualization helpers for ASTs.

Provides `render_ast_dot(node, include_values=False)` which returns a
`graphviz.Digraph` object (not rendered). Optionally `write_and_render` can
write the file to disk.

Layout: each AST node becomes a box labelled with its kind and payload
(operator, value or function name), with edges to its children labelled by
role (`left`, `right`, `operand`, `arg[i]`). With `include_values` every
operator node also shows the value its subtree evaluates to, or the
arithmetic error it raises.
"""

from typing import Iterator, Optional, Tuple
import html
from ast_nodes import *
from errors import MathError
from evaluator import evaluate
from graphviz import Digraph
from pretty_printer import PrettyPrinter


def _children(node: ASTNode) -> Iterator[Tuple[str, ASTNode]]:
    match node:
        case BinaryNode(left=l, right=r):
            yield "left", l
            yield "right", r
        case UnaryNode(operand=operand):
            yield "operand", operand
        case GroupingNode(expression=expr):
            yield "expr", expr
        case CallNode(arguments=args):
            for i, arg in enumerate(args):
                yield f"arg[{i}]", arg


def _node_label(node: ASTNode) -> str:
    match node:
        case IntegerNode() | FloatNode() | IdentNode():
            return str(node)
        case BinaryNode(operator=op) | UnaryNode(operator=op):
            title = "Binary" if isinstance(node, BinaryNode) else "Unary"
            return f"{title}({op.kind})"
        case GroupingNode():
            return "Grouping"
        case CallNode(function=func):
            return f"Call({func.name})"
        case _:
            return type(node).__name__


def _value_label(node: ASTNode) -> Optional[str]:
    if isinstance(node, (IntegerNode, FloatNode)):
        return None
    try:
        return f"= {PrettyPrinter.print_surface(evaluate(node))}"
    except MathError as e:
        return f"error: {e}"


def _node_html(node: ASTNode, include_values: bool) -> str:
    rows = [f"<TR><TD><B>{html.escape(_node_label(node))}</B></TD></TR>"]
    if include_values:
        value = _value_label(node)
        if value is not None:
            rows.append(
                f'<TR><TD><FONT POINT-SIZE="8">{html.escape(value)}</FONT></TD></TR>'
            )
    return f'<<TABLE BORDER="0" CELLBORDER="1" CELLSPACING="0">{"".join(rows)}</TABLE>>'


def render_ast_dot(node: ASTNode, include_values: bool = False) -> Digraph:
    """Return a graphviz.Digraph for the given AST.

    The caller may call `dot.source` to inspect the dot text, or call
    `dot.render(filename, format=...)` to write files (requires Graphviz installed).
    """
    dot = Digraph(format="svg")
    dot.attr("graph", rankdir="TB")
    dot.attr("node", shape="plaintext")

    # Walk the tree with an explicit stack; node ids follow pre-order
    counter = 0
    stack = [(node, None, None)]
    while stack:
        current, parent_id, role = stack.pop()
        node_id = f"n{counter}"
        counter += 1
        dot.node(node_id, label=_node_html(current, include_values))
        if parent_id is not None:
            dot.edge(parent_id, node_id, label=role)
        # Push in reverse so children are numbered left to right
        for child_role, child in reversed(list(_children(current))):
            stack.append((child, node_id, child_role))

    return dot


def write_and_render(
    node: ASTNode,
    out_path: str,
    fmt: str = "svg",
    include_values: bool = False,
) -> str:
    """Write and render the AST to the given path (without extension).

    Example: write_and_render(ast, 'out/ast', fmt='png') will create out/ast.png
    (requires Graphviz). Returns the path of the rendered file."""
    dot = render_ast_dot(node, include_values=include_values)
    dot.format = fmt
    # Note: render will append extension automatically
    return dot.render(out_path, cleanup=True)
