"""Arithmetic literals for durations and constants, e.g. ``"60*60*24*365"``."""

import ast
import math
import operator
from typing import Union

_BINARY_OPS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}

_UNARY_OPS = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}


class ExpressionError(ValueError):
    """Raised for anything that is not a plain arithmetic expression."""


def evaluate_expression(expression: Union[str, int, float]) -> float:
    """Evaluate a numeric literal or arithmetic expression.

    Only numbers, parentheses, unary +/- and ``+ - * / // % **`` are
    accepted. Numbers pass through unchanged (as float).

    Args:
        expression: Expression string or number

    Returns:
        The value as a float
    """
    if isinstance(expression, bool):
        raise ExpressionError(f"invalid expression: {expression!r}")
    if isinstance(expression, (int, float)):
        return float(expression)
    if not isinstance(expression, str) or not expression.strip():
        raise ExpressionError(f"invalid expression: {expression!r}")

    try:
        tree = ast.parse(expression.strip(), mode="eval")
    except SyntaxError as exc:
        raise ExpressionError(f"invalid expression: {expression!r}") from exc

    try:
        value = _evaluate(tree.body)
    except (ZeroDivisionError, OverflowError) as exc:
        raise ExpressionError(f"invalid expression: {expression!r} ({exc})") from exc
    if isinstance(value, complex):
        raise ExpressionError(f"invalid expression: {expression!r} is not real")
    return float(value)


def _evaluate(node):
    if isinstance(node, ast.Constant) and isinstance(node.value, (int, float)) and not isinstance(node.value, bool):
        return node.value
    if isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPS:
        left = _evaluate(node.left)
        right = _evaluate(node.right)
        if isinstance(node.op, ast.Pow) and abs(right) > 1024:
            raise OverflowError("exponent too large")
        return _BINARY_OPS[type(node.op)](left, right)
    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPS:
        return _UNARY_OPS[type(node.op)](_evaluate(node.operand))
    if isinstance(node, ast.Name) and node.id in ("pi", "e"):
        return getattr(math, node.id)
    raise ExpressionError(f"unsupported element: {ast.dump(node)}")
