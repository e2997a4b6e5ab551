"""
Expression evaluator for the exprcalc expression language.

Walks an expression tree post-order and computes a float. Pure
evaluation: no I/O, no side effects, and no use of Python's eval().

Arithmetic follows IEEE-754 double semantics throughout. Python raises
where IEEE returns a value (float division by zero, math.pow domain and
overflow errors, math.fmod by zero), so those cases are mapped back to
inf/nan here instead of surfacing as exceptions.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable

from exprcalc.core.config import EvaluatorConfig
from exprcalc.core.errors import DepthLimitError, ExpressionEvalError, UnresolvedReferenceError
from exprcalc.core.expression_lang.parser import parse
from exprcalc.core.ir.expressions import BinaryExpr, BinaryOp, CallExpr, Expr, NumberLiteral

logger = logging.getLogger(__name__)


def _call_unary(fn: Callable[[float], float]) -> Callable[[float], float]:
    def call(value: float) -> float:
        try:
            return fn(value)
        except ValueError:
            # sin(inf), cos(-inf)
            return math.nan

    return call


BUILTIN_FUNCTIONS: dict[str, Callable[[float], float]] = {
    "sin": _call_unary(math.sin),
    "cos": _call_unary(math.cos),
}


def evaluate(source: str, config: EvaluatorConfig | None = None) -> float:
    """Tokenize, parse and evaluate an expression string.

    Args:
        source: Expression string (e.g., "cos(1 + 2) * 4").
        config: Parsing options; defaults to EvaluatorConfig().

    Returns:
        The computed value.

    Raises:
        ExpressionSyntaxError: If the expression cannot be parsed.
        ExpressionEvalError: If the parsed expression cannot be evaluated.
    """
    expr = parse(source, config)
    result = evaluate_expr(expr)
    logger.debug("Evaluated %r to %r", source, result)
    return result


def evaluate_expr(expr: Expr) -> float:
    """Evaluate a parsed expression tree.

    Raises:
        UnresolvedReferenceError: If a call names an unknown function.
        DepthLimitError: If parentheses or calls nest too deep for the
            interpreter stack (only reachable with hand-built trees or a
            very large max_depth).
    """
    try:
        return _interpret(expr)
    except RecursionError:
        raise DepthLimitError() from None


def _interpret(expr: Expr) -> float:
    """Evaluate a subtree.

    Operator chains such as ``1 + 2 + ... + n`` parse into left-deep trees,
    so the left spine is walked in a loop. Only right operands and call
    arguments recurse, and their depth is bounded by parenthesis nesting.
    """
    spine: list[BinaryExpr] = []
    node = expr
    while isinstance(node, BinaryExpr):
        spine.append(node)
        node = node.left

    value = _interpret_leaf(node)
    # Innermost operator first, left operand before right, matching source order
    for binary in reversed(spine):
        right = _interpret(binary.right)
        value = apply_binary(binary.op, value, right)
    return value


def _interpret_leaf(expr: Expr) -> float:
    if isinstance(expr, NumberLiteral):
        return expr.value

    if isinstance(expr, CallExpr):
        value = _interpret(expr.argument)
        fn = BUILTIN_FUNCTIONS.get(expr.name)
        if fn is None:
            raise UnresolvedReferenceError(expr.name)
        return fn(value)

    raise ExpressionEvalError(f"Unknown expression type: {type(expr).__name__}")


def apply_binary(op: BinaryOp, left: float, right: float) -> float:
    """Combine two operands with a binary operator."""
    if op == BinaryOp.ADD:
        return left + right
    if op == BinaryOp.SUB:
        return left - right
    if op == BinaryOp.MUL:
        return left * right
    if op == BinaryOp.DIV:
        return _divide(left, right)
    if op == BinaryOp.POW:
        return _power(left, right)
    if op == BinaryOp.MOD:
        return _remainder(left, right)
    raise ExpressionEvalError(f"Unknown binary op: {op}")


def _divide(left: float, right: float) -> float:
    try:
        return left / right
    except ZeroDivisionError:
        if left == 0 or math.isnan(left):
            return math.nan
        # Sign of the zero divisor matters: 1 / -0.0 == -inf
        return math.copysign(math.inf, left) * math.copysign(1.0, right)


def _remainder(left: float, right: float) -> float:
    """Truncated remainder; the result takes the sign of ``left``."""
    try:
        return math.fmod(left, right)
    except ValueError:
        # fmod(x, 0) and fmod(inf, y)
        return math.nan


def _power(left: float, right: float) -> float:
    try:
        return math.pow(left, right)
    except OverflowError:
        if left < 0 and _is_odd_integer(right):
            return -math.inf
        return math.inf
    except ValueError:
        if left == 0 and right < 0:
            # pow(±0, odd negative integer) keeps the sign of zero
            if _is_odd_integer(right):
                return math.copysign(math.inf, left)
            return math.inf
        # Negative base with a non-integer exponent
        return math.nan


def _is_odd_integer(value: float) -> bool:
    return math.isfinite(value) and float(value).is_integer() and int(value) % 2 == 1
