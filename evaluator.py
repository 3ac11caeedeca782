"""Tree-walking evaluator for calculator ASTs.

`evaluate(node)` reduces a parsed expression to a single `IntegerNode` or
`FloatNode`. It dispatches with structural pattern matching over the node
classes of `ast_nodes.py` and never mutates its input: every reduction
builds a new leaf, and leaves themselves are returned unchanged.

After each operation the result is re-tagged from its value alone: a finite,
whole-valued float within the signed 64-bit range becomes an `IntegerNode`,
anything else a `FloatNode`. Binary operands are evaluated right first, then
left; call arguments left to right. Operator chains are walked along their
left spine in a loop, so long sums do not recurse. Reductions are traced at DEBUG level on this module's logger.
"""

from __future__ import annotations
import logging
import math

from ast_nodes import *
from errors import InternalError, MathError
from functions import lookup
from tokens import Token, TokenType

logger = logging.getLogger(__name__)


# Whole values outside the signed 64-bit range are shown as floats
INTEGER_MIN = -(2**63)
INTEGER_MAX = 2**63 - 1


def number(value: float) -> NumberNode:
    """Wrap `value` in the leaf kind its value calls for."""
    if (
        math.isfinite(value)
        and value.is_integer()
        and INTEGER_MIN <= value <= INTEGER_MAX
    ):
        return IntegerNode(value=value)
    return FloatNode(value=value)


def _power(base: float, exponent: float) -> float:
    # math.pow raises where the C library returns an infinity or nan
    odd_exponent = exponent.is_integer() and math.fmod(exponent, 2) != 0
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and odd_exponent:
            return -math.inf
        return math.inf
    except ValueError:
        if base == 0:
            # Zero to a negative power
            return math.copysign(math.inf, base) if odd_exponent else math.inf
        return math.nan


def _modulo(left: NumberNode, right: NumberNode) -> NumberNode:
    if right.value == 0:
        raise MathError("modulo by zero")
    if not (isinstance(left, IntegerNode) and isinstance(right, IntegerNode)):
        raise MathError("an integer is required")
    # Truncating modulo: the result takes the sign of the dividend
    return IntegerNode(value=math.fmod(left.value, right.value))


def _evaluate_binary(left: NumberNode, operator: Token, right: NumberNode) -> NumberNode:
    lv, rv = left.value, right.value
    match operator.kind:
        case TokenType.PLUS:
            return number(lv + rv)
        case TokenType.MINUS:
            return number(lv - rv)
        case TokenType.MUL:
            return number(lv * rv)
        case TokenType.DIV:
            if rv == 0:
                raise MathError("division by zero")
            return number(lv / rv)
        case TokenType.MODULO:
            return _modulo(left, right)
        case TokenType.EXP:
            return number(_power(lv, rv))
        case _:
            raise InternalError(f"Unsupported binary operator: {operator}")


def _evaluate_unary(operator: Token, operand: NumberNode) -> NumberNode:
    match operator.kind:
        case TokenType.MINUS:
            if isinstance(operand, IntegerNode):
                # -INTEGER_MIN does not fit back into the integer range
                return number(-operand.value)
            return FloatNode(value=-operand.value)
        case TokenType.PLUS:
            return operand
        case _:
            raise InternalError(f"Unsupported unary operator: {operator}")


def _evaluate_chain(node: BinaryNode) -> NumberNode:
    leftmost, chain = left_spine(node)
    # Same order as recursing: every right operand from the outside in,
    # then the leftmost operand, then the reductions from the inside out
    rights = [evaluate(n.right) for n in reversed(chain)]
    result = evaluate(leftmost)
    for n, right in zip(chain, reversed(rights)):
        result = _evaluate_binary(result, n.operator, right)
        logger.debug("%s -> %s", n, result)
    return result


def evaluate(node: ASTNode) -> NumberNode:
    """Evaluate `node` and return the resulting numeric leaf."""
    match node:
        case IntegerNode() | FloatNode():
            return node
        case GroupingNode(expression=expr):
            return evaluate(expr)
        case UnaryNode(operator=op, operand=operand):
            result = _evaluate_unary(op, evaluate(operand))
        case BinaryNode():
            return _evaluate_chain(node)
        case CallNode(function=IdentNode(name=fname), arguments=args):
            function = lookup(fname)
            if function is None or len(args) != function.arity:
                raise InternalError(f"Call to unchecked function: {node}")
            values = [evaluate(a).value for a in args]
            result = number(function(*values))
        case _:
            raise InternalError(f"Unhandled expression node type: {node!r}")

    logger.debug("%s -> %s", node, result)
    return result
