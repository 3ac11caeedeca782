from tests.utils import parse_text
from pretty_printer import PrettyPrinter


def test_print_ast_renders_indented_tree():
    ast = parse_text("1 + sqrt(4) * -2")
    assert PrettyPrinter.print_ast(ast).splitlines() == [
        "Binary(Plus)",
        "  left: Integer(1)",
        "  right: Binary(Mul)",
        "    left: Call(sqrt)",
        "        arg[0]: Integer(4)",
        "    right: Unary(Minus)",
        "      Integer(2)",
    ]


def test_print_ast_shows_grouping():
    lines = PrettyPrinter.print_ast(parse_text("(0.5)")).splitlines()
    assert lines == ["Grouping", "  Float(0.5)"]


def test_print_surface_reads_like_source():
    for src in ["1 + 2 * 3", "-(2 ^ 3) % 5", "log(8, 2) / hypot(3, 4)", "2.5 - +1"]:
        assert PrettyPrinter.print_surface(parse_text(src)) == src


def test_print_surface_uses_constant_values():
    assert PrettyPrinter.print_surface(parse_text("2 * pi")) == "2 * 3.141592653589793"


def test_print_ast_left_nested_chain():
    assert PrettyPrinter.print_ast(parse_text("1 - 2 - 3")).splitlines() == [
        "Binary(Minus)",
        "  left: Binary(Minus)",
        "    left: Integer(1)",
        "    right: Integer(2)",
        "  right: Integer(3)",
    ]


def test_long_chains_print_without_recursion_limit():
    ast = parse_text("+".join(["1"] * 1000))
    assert PrettyPrinter.print_surface(ast) == " + ".join(["1"] * 1000)
    lines = PrettyPrinter.print_ast(ast).splitlines()
    assert len(lines) == 999 + 1 + 999
    assert lines[999] == " " * 1998 + "left: Integer(1)"
    assert str(ast).count("Binary(") == 999
