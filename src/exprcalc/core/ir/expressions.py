"""
Expression tree types for exprcalc.

Supports:
- Numeric literals: 42, 3.5, -7, 5.
- Arithmetic: +, -, *, /, **, %
- Single-argument built-in calls: sin(x), cos(x)

Each node owns its children and is immutable once built.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Binary operators for expressions."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "**"
    MOD = "%"


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class NumberLiteral(BaseModel):
    """A numeric literal."""

    value: float = Field(description="The literal value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.value)


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    left: Expr
    op: BinaryOp
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        # Left spines of operator chains can be thousands deep; render them in a loop
        spine: list[BinaryExpr] = []
        node: Expr = self
        while isinstance(node, BinaryExpr):
            spine.append(node)
            node = node.left
        text = str(node)
        for binary in reversed(spine):
            text = f"({text} {binary.op.value} {binary.right})"
        return text


class CallExpr(BaseModel):
    """
    Built-in function call with a single argument: name(argument).

    The name is resolved at evaluation time, so an unknown name parses
    successfully and fails only when evaluated.
    """

    name: str = Field(description="Function name")
    argument: Expr = Field(description="Sole argument")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.name}({self.argument})"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = NumberLiteral | BinaryExpr | CallExpr

# Rebuild models for recursive forward references
BinaryExpr.model_rebuild()
CallExpr.model_rebuild()
