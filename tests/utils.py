from lexer import Lexer
from parser import Parser
from evaluator import evaluate


def lex(text: str):
    """Return a list of tokens for the given source text."""
    return Lexer(text).tokenize()


def parse_text(text: str):
    """Convenience: lex+parse a source text into an AST."""
    return Parser(Lexer(text).tokenize()).parse()


def run_text(text: str) -> str:
    """Evaluate a source text and return the canonical form of the result."""
    return str(evaluate(parse_text(text)))
