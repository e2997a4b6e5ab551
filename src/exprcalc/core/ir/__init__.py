"""Expression tree (IR) types."""

from exprcalc.core.ir.expressions import BinaryExpr, BinaryOp, CallExpr, Expr, NumberLiteral

__all__ = ["BinaryExpr", "BinaryOp", "CallExpr", "Expr", "NumberLiteral"]
