"""Pretty-printer for the AST.

Provides `PrettyPrinter.print_ast(node, indent, prefix)` which renders an AST
into a readable multi-line tree, and `PrettyPrinter.print_surface(node)`
which turns it back into one line of infix source text. Both are intended
for debugging, the CLI and the Graphviz labels; the canonical one-line form
is `str(node)`.

Examples:
    PrettyPrinter.print_ast(Parser(Lexer("1 + 2").tokenize()).parse())
"""

from __future__ import annotations
from ast_nodes import *
from tokens import Token, TokenType

OPERATOR_SYMBOLS = {
    TokenType.PLUS: "+",
    TokenType.MINUS: "-",
    TokenType.MUL: "*",
    TokenType.DIV: "/",
    TokenType.MODULO: "%",
    TokenType.EXP: "^",
}


def _symbol(token: Token) -> str:
    return OPERATOR_SYMBOLS.get(token.kind, token.lexeme)


class PrettyPrinter:
    @staticmethod
    def print_ast(node: ASTNode, indent: int = 0, prefix: str = "") -> str:
        """Pretty print AST and return as string."""
        lines = []
        indent_str = " " * indent

        match node:
            case IntegerNode() | FloatNode():
                lines.append(f"{indent_str}{prefix}{node}")

            case IdentNode(name=n):
                lines.append(f"{indent_str}{prefix}Identifier({n})")

            case BinaryNode():
                leftmost, chain = left_spine(node)
                depth = len(chain)
                # Headers run down the left spine, then the right operands
                # come back up from the innermost node
                for level, n in enumerate(reversed(chain)):
                    label = prefix if level == 0 else "left: "
                    lines.append(f"{' ' * (indent + 2 * level)}{label}Binary({n.operator.kind})")
                lines.append(PrettyPrinter.print_ast(leftmost, indent + 2 * depth, "left: "))
                for level, n in zip(range(depth - 1, -1, -1), chain):
                    lines.append(PrettyPrinter.print_ast(n.right, indent + 2 * level + 2, "right: "))

            case UnaryNode(operator=op, operand=operand):
                lines.append(f"{indent_str}{prefix}Unary({op.kind})")
                lines.append(PrettyPrinter.print_ast(operand, indent + 2))

            case GroupingNode(expression=expr):
                lines.append(f"{indent_str}{prefix}Grouping")
                lines.append(PrettyPrinter.print_ast(expr, indent + 2))

            case CallNode(function=func, arguments=args):
                lines.append(f"{indent_str}{prefix}Call({func.name})")
                for i, arg in enumerate(args):
                    lines.append(PrettyPrinter.print_ast(arg, indent + 4, f"arg[{i}]: "))

            case _:
                lines.append(f"{indent_str}{prefix}Unknown node type: {type(node)}")

        return "\n".join(line for line in lines if line)

    @staticmethod
    def print_surface(node: ASTNode) -> str:
        """Return a compact, source-like one-line representation of an AST node.

        Only the parentheses recorded as `GroupingNode`s are printed, so the
        output of a parsed expression reads like its input (e.g. `2 * (x + 1)`).
        """
        match node:
            case IntegerNode(value=v):
                return str(int(v))
            case FloatNode(value=v):
                return repr(v)
            case IdentNode(name=n):
                return n
            case BinaryNode():
                leftmost, chain = left_spine(node)
                parts = [PrettyPrinter.print_surface(leftmost)]
                for n in chain:
                    parts.append(f"{_symbol(n.operator)} {PrettyPrinter.print_surface(n.right)}")
                return " ".join(parts)
            case UnaryNode(operator=op, operand=operand):
                return f"{_symbol(op)}{PrettyPrinter.print_surface(operand)}"
            case GroupingNode(expression=expr):
                return f"({PrettyPrinter.print_surface(expr)})"
            case CallNode(function=func, arguments=args):
                args_s = ", ".join(PrettyPrinter.print_surface(a) for a in args)
                return f"{func.name}({args_s})"
            case _:
                s = PrettyPrinter.print_ast(node)
                return " ".join(line.strip() for line in s.splitlines())
