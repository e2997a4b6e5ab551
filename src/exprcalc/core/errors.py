"""
Error types for exprcalc tokenizing, parsing, and evaluation.

Every error raised by the pipeline derives from ExprCalcError, so callers
can catch a single type. The first error aborts the remaining stages;
nothing is recovered locally.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from exprcalc.core.expression_lang.lexer import Token, TokenKind


@dataclass(frozen=True)
class ErrorContext:
    """
    Location of an error inside the expression source.

    Attributes:
        pos: 0-based character offset into the source
        source: Optional full expression text, used to render a snippet
    """

    pos: int
    source: str | None = None

    @property
    def line(self) -> int:
        """1-indexed line of ``pos``."""
        if self.source is None:
            return 1
        return self.source.count("\n", 0, self.pos) + 1

    @property
    def column(self) -> int:
        """1-indexed column of ``pos``."""
        if self.source is None:
            return self.pos + 1
        line_start = self.source.rfind("\n", 0, self.pos) + 1
        return self.pos - line_start + 1

    def format(self) -> str:
        """
        Format the context as a human-readable string.

        Returns:
            Location such as "line 1, column 7" followed by the source line
            with a caret under the error position, when the source is known.
        """
        location = f"line {self.line}, column {self.column}"
        if self.source is None:
            return location
        return f"{location}\n{self._format_snippet(self.source)}"

    def _format_snippet(self, source: str) -> str:
        text = source.split("\n")[self.line - 1]
        prefix = f"{self.line:4d} | "
        marker = " " * (len(prefix) + self.column - 1) + "^"
        return f"{prefix}{text}\n{marker}"


class ExprCalcError(Exception):
    """Base exception for all exprcalc errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.message} at {self.context.format()}"
        return self.message


# ---------------------------------------------------------------------------
# Parse stage
# ---------------------------------------------------------------------------


class ExpressionSyntaxError(ExprCalcError):
    """
    Raised when a token sequence does not form a valid expression.

    Examples:
    - Numeric literal that cannot be converted
    - Missing operand or closing parenthesis
    - Nesting deeper than the configured limit
    """


class NumberParseError(ExpressionSyntaxError):
    """A NUMBER token's text could not be converted to a float."""

    def __init__(self, text: str, context: ErrorContext | None = None):
        self.text = text
        super().__init__(f"Parse error: invalid number {text!r}", context)


class UnexpectedTokenError(ExpressionSyntaxError):
    """The parser expected one token kind and found another."""

    def __init__(
        self,
        found: Token,
        expected: TokenKind | None = None,
        context: ErrorContext | None = None,
    ):
        self.found = found
        self.expected = expected
        super().__init__(self._describe(), context)

    def _describe(self) -> str:
        found = _describe_token(self.found)
        if self.expected is None:
            return f"Unexpected token: {found}"
        return f"Unexpected token: expected {self.expected.name}, found {found}"


class TrailingInputError(UnexpectedTokenError):
    """Tokens remain after a complete expression (strict mode only)."""

    def _describe(self) -> str:
        return f"Unexpected token after expression: {_describe_token(self.found)}"


class UnexpectedBinaryOperatorError(ExpressionSyntaxError):
    """A token kind with no binary operator was looked up as one."""

    def __init__(self, kind: TokenKind, context: ErrorContext | None = None):
        self.kind = kind
        super().__init__(f"Unexpected binary operator: {kind.name}", context)


class NestingDepthError(ExpressionSyntaxError):
    """Parentheses or calls are nested deeper than ``max_depth``."""

    def __init__(self, max_depth: int, context: ErrorContext | None = None):
        self.max_depth = max_depth
        super().__init__(f"Expression nested deeper than {max_depth} levels", context)


# ---------------------------------------------------------------------------
# Evaluation stage
# ---------------------------------------------------------------------------


class ExpressionEvalError(ExprCalcError):
    """Raised when a parsed expression cannot be evaluated."""


class UnresolvedReferenceError(ExpressionEvalError):
    """A call names a function outside the built-in table."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unresolved reference: {name}")


class DepthLimitError(ExpressionEvalError):
    """The expression tree is too deep to walk on the interpreter stack."""

    def __init__(self, action: str = "evaluate") -> None:
        super().__init__(f"Expression tree too deep to {action}")


def _describe_token(token: Token) -> str:
    if token.kind.name == "EOF":
        return "end of input"
    return f"{token.kind.name} ({token.value!r})"
