import re

import pytest

from tests.utils import lex, parse_text
from ast_nodes import *
from errors import ParseError
from parser import Parser
from tokens import Token, TokenType


def test_parser_parses_literals():
    assert parse_text("42") == IntegerNode(value=42.0)
    assert parse_text("0.5") == FloatNode(value=0.5)


def test_multiplication_binds_tighter_than_addition():
    assert str(parse_text("1 + 2 * 3")) == (
        "Binary(Integer(1), Plus, Binary(Integer(2), Mul, Integer(3)))"
    )


def test_additive_and_multiplicative_operators_are_left_associative():
    assert str(parse_text("8 - 4 - 2")) == (
        "Binary(Binary(Integer(8), Minus, Integer(4)), Minus, Integer(2))"
    )
    assert str(parse_text("8 / 4 % 3 * 2")) == (
        "Binary(Binary(Binary(Integer(8), Div, Integer(4)), Modulo, Integer(3)), Mul, Integer(2))"
    )


def test_exponentiation_is_right_associative():
    assert str(parse_text("2 ^ 3 ^ 2")) == (
        "Binary(Integer(2), Exp, Binary(Integer(3), Exp, Integer(2)))"
    )


def test_unary_binds_tighter_than_exponentiation():
    ast = parse_text("-2^2")
    assert isinstance(ast, BinaryNode)
    assert ast.operator.kind == TokenType.EXP
    assert str(ast.left) == "Unary(Minus, Integer(2))"


def test_nested_unary_operators():
    assert str(parse_text("-+-1")) == "Unary(Minus, Unary(Plus, Unary(Minus, Integer(1))))"


def test_parentheses_produce_grouping_nodes():
    ast = parse_text("(1 + 2) * 3")
    assert isinstance(ast, BinaryNode)
    assert isinstance(ast.left, GroupingNode)
    assert str(ast) == "Binary(Grouping(Binary(Integer(1), Plus, Integer(2))), Mul, Integer(3))"


def test_call_node_shape():
    ast = parse_text("LOG(8, 2)")
    assert isinstance(ast, CallNode)
    assert ast.function == IdentNode(name="log")
    assert ast.arguments == (IntegerNode(value=8.0), IntegerNode(value=2.0))
    assert str(ast) == "Call(log, Integer(8), Integer(2))"


def test_call_arguments_are_full_expressions():
    ast = parse_text("hypot(1 + 2, sin(0) * 4)")
    assert isinstance(ast, CallNode)
    assert len(ast.arguments) == 2
    assert isinstance(ast.arguments[1], BinaryNode)
    assert isinstance(ast.arguments[1].left, CallNode)


def test_operator_tokens_are_kept_in_nodes():
    ast = parse_text("1 % 2")
    assert ast.operator == Token(TokenType.MODULO, "%")


@pytest.mark.parametrize(
    "text, message",
    [
        ("2 2", "Unexpected token after expression"),
        ("(1 + 2) 3", "Unexpected token after expression"),
        ("1 )", "Unexpected token after expression"),
        ("", "unexpected end of input"),
        ("1 +", "unexpected end of input"),
        ("(1 + 2", "unexpected end of input"),
        ("sqrt(4", "unexpected end of input"),
        ("-", "unexpected end of input"),
        ("*2", "Unexpected token"),
        ("()", "Unexpected token"),
        ("2(3)", "cannot call a non-identifier"),
        ("(1)(2)", "cannot call a non-identifier"),
        ("sin", "must be called"),
        ("sin + 1", "must be called"),
        ("sin(1, 2)", "wrong number of arguments for 'sin': expected 1, got 2"),
        ("log(8)", "wrong number of arguments for 'log': expected 2, got 1"),
        ("hypot()", "expected 2, got 0"),
        ("sqrt(4 4)", "Unclosed call to 'sqrt'"),
        ("2e", "malformed number '2e'"),
        ("1e+", "malformed number"),
    ],
)
def test_syntax_errors(text, message):
    with pytest.raises(ParseError, match=re.escape(message)):
        parse_text(text)


def test_parser_rejects_empty_token_list():
    with pytest.raises(ParseError, match="unexpected end of input"):
        Parser([]).parse()


def test_deep_parenthesis_nesting_is_reported_as_parse_error():
    text = "(" * 5000 + "1" + ")" * 5000
    with pytest.raises(ParseError, match="nested too deeply"):
        parse_text(text)


def test_long_unary_and_power_chains_are_bounded():
    with pytest.raises(ParseError, match="nested too deeply"):
        parse_text("-" * 1000 + "1")
    with pytest.raises(ParseError, match="nested too deeply"):
        parse_text("^".join(["1"] * 1000))


def test_flat_operator_chains_are_not_limited_by_depth():
    ast = parse_text("+".join(["1"] * 1000))
    leftmost, chain = left_spine(ast)
    assert leftmost == IntegerNode(value=1.0)
    assert len(chain) == 999
    assert chain[-1] is ast
    assert len(left_spine(parse_text(" * ".join(["2"] * 500)))[1]) == 499


def test_moderate_nesting_is_accepted():
    ast = parse_text("(" * 20 + "1" + ")" * 20)
    assert str(ast).startswith("Grouping(" * 20)
    assert isinstance(parse_text("+".join(["1"] * 100)), BinaryNode)


def test_call_to_function_missing_from_table_is_a_parse_error():
    tokens = [
        Token(TokenType.IDENT, "foo"),
        Token(TokenType.LEFT_PAREN, "("),
        Token(TokenType.INT, "1"),
        Token(TokenType.RIGHT_PAREN, ")"),
        Token(TokenType.EOF),
    ]
    with pytest.raises(ParseError, match="unknown function 'foo'"):
        Parser(tokens).parse()


def test_max_depth_is_configurable():
    tokens = lex("1 + 2 + 3")
    assert isinstance(Parser(tokens, max_depth=10).parse(), BinaryNode)
    with pytest.raises(ParseError, match="limit is 5"):
        Parser(tokens, max_depth=5).parse()
