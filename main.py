from __future__ import annotations
import json
import logging
import sys
from typing import List, Optional

from ast_json import ast_to_json
from ast_nodes import ASTNode, IntegerNode, NumberNode
from ast_viz import write_and_render
from errors import MathError, ParseError
from evaluator import evaluate as evaluate_node
from lexer import Lexer
from parser import Parser
from pretty_printer import PrettyPrinter
from tokens import Token

logger = logging.getLogger(__name__)


def tokenize(source: str) -> List[Token]:
    """Tokenize input string."""
    return Lexer(source).tokenize()


def parse(tokens: List[Token]) -> ASTNode:
    """Parse tokens into AST."""
    return Parser(tokens).parse()


def evaluate(node: ASTNode) -> NumberNode:
    """Reduce an AST to a single Integer or Float leaf."""
    return evaluate_node(node)


def run(source: str) -> NumberNode:
    """Tokenize, parse and evaluate `source`."""
    return evaluate(parse(tokenize(source)))


def format_result(result: NumberNode) -> str:
    """Format a result leaf the way the REPL prints it."""
    if isinstance(result, IntegerNode):
        return str(int(result.value))
    return str(result.value)


def process_expression(
    text: str,
    *,
    print_tokens: bool = False,
    print_ast: bool = False,
    print_tree: bool = False,
    dump_ast_path: Optional[str] = None,
    viz_path: Optional[str] = None,
    viz_format: str = "svg",
) -> bool:
    """Evaluate a single expression and print its value.

    Flags control which intermediate stages are printed or exported. Returns
    False if the expression raised a parse or arithmetic error.
    """
    try:
        tokens = tokenize(text)
        if print_tokens:
            # The trailing EOF token carries no information
            print(f"Tokens: {', '.join(str(t) for t in tokens[:-1])}")

        ast = parse(tokens)
        if print_ast:
            print(f"AST: {ast}")
        if print_tree:
            print(PrettyPrinter.print_ast(ast))

        if dump_ast_path:
            with open(dump_ast_path, "w", encoding="utf-8") as fh:
                json.dump(ast_to_json(ast), fh, indent=2)
            print(f"Wrote AST JSON to {dump_ast_path}")

        if viz_path:
            try:
                write_and_render(ast, viz_path, fmt=viz_format, include_values=True)
                print(f"Wrote AST visualization to {viz_path}.{viz_format}")
            except Exception as e:
                print(f"Failed to render AST visualization to {viz_path}: {e}")

        result = evaluate(ast)
        print(format_result(result))
        return True

    except ParseError as e:
        print(f"A parsing error occurred: {e}")
    except MathError as e:
        print(f"An arithmetic error occurred: {e}")
    return False


def interactive_mode(
    print_tokens: bool = False,
    print_ast: bool = False,
    print_tree: bool = False,
) -> None:
    """Run the calculator REPL reading expressions from stdin."""
    print("Type a math expression and press enter ('quit' to exit)")

    while True:
        try:
            text = input("=> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye.")
            break

        if text.lower() in ("quit", "exit", "q"):
            print("Goodbye.")
            break

        if not text:
            continue

        process_expression(
            text,
            print_tokens=print_tokens,
            print_ast=print_ast,
            print_tree=print_tree,
        )


def build_arg_parser():
    import argparse

    parser = argparse.ArgumentParser(
        description="Evaluate math expressions given as an argument, a file or interactively"
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument("expression", nargs="?", help="Expression to evaluate")
    group.add_argument(
        "--file",
        "-f",
        dest="file",
        help="Path to a file with one expression per line",
    )
    group.add_argument(
        "--interactive",
        "-i",
        dest="interactive",
        action="store_true",
        help="Start interactive REPL mode",
    )
    # printing/verbosity options
    parser.add_argument(
        "--print-tokens", dest="print_tokens", action="store_true", help="Print tokens"
    )
    parser.add_argument(
        "--print-ast",
        dest="print_ast",
        action="store_true",
        help="Print the canonical one-line AST",
    )
    parser.add_argument(
        "--tree",
        dest="print_tree",
        action="store_true",
        help="Print the AST as an indented tree",
    )
    parser.add_argument(
        "--dump-ast", dest="dump_ast", help="Path to write the AST as JSON"
    )
    parser.add_argument(
        "--viz-ast",
        dest="viz_ast",
        help="Path (without extension) to write a Graphviz visualization of the AST",
    )
    parser.add_argument(
        "--viz-format",
        dest="viz_format",
        default="svg",
        help="Format for Graphviz output (svg, png, pdf, etc)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        dest="verbose",
        action="store_true",
        help="Trace lexing, parsing and every evaluation step",
    )
    return parser


def cli(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )
    logger.debug("arguments: %s", args)

    if args.interactive:
        interactive_mode(
            print_tokens=args.print_tokens,
            print_ast=args.print_ast,
            print_tree=args.print_tree,
        )
        return 0

    if args.file:
        try:
            with open(args.file, "r", encoding="utf-8") as fh:
                lines = [line.strip() for line in fh]
        except OSError as e:
            print(f"Failed to read file {args.file}: {e}")
            return 1

        ok = True
        for line in lines:
            if not line or line.startswith("#"):
                continue
            ok = (
                process_expression(
                    line,
                    print_tokens=args.print_tokens,
                    print_ast=args.print_ast,
                    print_tree=args.print_tree,
                )
                and ok
            )
        return 0 if ok else 1

    if args.expression is not None:
        ok = process_expression(
            args.expression,
            print_tokens=args.print_tokens,
            print_ast=args.print_ast,
            print_tree=args.print_tree,
            dump_ast_path=args.dump_ast,
            viz_path=args.viz_ast,
            viz_format=args.viz_format,
        )
        return 0 if ok else 1

    interactive_mode(
        print_tokens=args.print_tokens,
        print_ast=args.print_ast,
        print_tree=args.print_tree,
    )
    return 0


if __name__ == "__main__":
    sys.exit(cli())
