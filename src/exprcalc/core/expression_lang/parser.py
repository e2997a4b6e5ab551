"""
Recursive descent parser for the exprcalc expression language.

Grammar (precedence low to high, both tiers left-associative):
    expr    → term (("+" | "-") term)*
    term    → factor (("*" | "/" | "**" | "%") factor)*
    factor  → NUMBER | IDENT "(" expr ")" | "(" expr ")"

``**`` shares the multiplicative tier, so ``2 ** 10 / 16`` parses as
``(2 ** 10) / 16`` rather than giving exponentiation its own tier.
"""

from __future__ import annotations

import logging

from exprcalc.core.config import DEFAULT_MAX_DEPTH, EvaluatorConfig
from exprcalc.core.errors import (
    ErrorContext,
    NestingDepthError,
    NumberParseError,
    TrailingInputError,
    UnexpectedBinaryOperatorError,
    UnexpectedTokenError,
)
from exprcalc.core.expression_lang.lexer import Token, TokenKind, tokenize
from exprcalc.core.ir.expressions import BinaryExpr, BinaryOp, CallExpr, Expr, NumberLiteral

logger = logging.getLogger(__name__)

_BINARY_OPS: dict[TokenKind, BinaryOp] = {
    TokenKind.PLUS: BinaryOp.ADD,
    TokenKind.MINUS: BinaryOp.SUB,
    TokenKind.STAR: BinaryOp.MUL,
    TokenKind.SLASH: BinaryOp.DIV,
    TokenKind.STAR_STAR: BinaryOp.POW,
    TokenKind.PERCENT: BinaryOp.MOD,
}

_ADDITIVE = (TokenKind.PLUS, TokenKind.MINUS)
_MULTIPLICATIVE = (TokenKind.STAR, TokenKind.SLASH, TokenKind.STAR_STAR, TokenKind.PERCENT)


def binary_operator(kind: TokenKind) -> BinaryOp:
    """Map an operator token kind to its BinaryOp.

    Raises:
        UnexpectedBinaryOperatorError: If ``kind`` is not an operator.
    """
    try:
        return _BINARY_OPS[kind]
    except KeyError:
        raise UnexpectedBinaryOperatorError(kind) from None


class Parser:
    """Recursive descent parser over a token list with one-token lookahead."""

    def __init__(
        self,
        tokens: list[Token],
        *,
        source: str | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        strict: bool = False,
    ) -> None:
        self.tokens = tokens
        self.source = source
        self.max_depth = max_depth
        self.strict = strict
        self.pos = 0
        self._depth = 0
        end = tokens[-1].end if tokens else 0
        if source is not None:
            end = len(source)
        self._eof = Token(TokenKind.EOF, "", end)

    @property
    def current(self) -> Token:
        """The token under the cursor, or the EOF sentinel past the end."""
        if self.pos >= len(self.tokens):
            return self._eof
        return self.tokens[self.pos]

    def eat(self, kind: TokenKind) -> Token:
        """Consume the current token if it has ``kind``; otherwise fail in place."""
        tok = self.current
        if tok.kind != kind:
            raise UnexpectedTokenError(tok, kind, self._context(tok))
        self.pos += 1
        return tok

    def _context(self, tok: Token) -> ErrorContext:
        return ErrorContext(pos=tok.pos, source=self.source)

    # -- Grammar rules --

    def parse(self) -> Expr:
        """Parse one complete expression.

        Trailing tokens are ignored unless ``strict`` is set.
        """
        try:
            expr = self.parse_expr()
        except RecursionError:
            # max_depth set above what the interpreter stack can hold
            raise NestingDepthError(self.max_depth, self._context(self.current)) from None
        if self.strict and self.current.kind != TokenKind.EOF:
            raise TrailingInputError(self.current, context=self._context(self.current))
        return expr

    def parse_expr(self) -> Expr:
        """term (('+' | '-') term)*"""
        left = self.parse_term()
        while self.current.kind in _ADDITIVE:
            tok = self.eat(self.current.kind)
            right = self.parse_term()
            left = BinaryExpr(left=left, op=binary_operator(tok.kind), right=right)
        return left

    def parse_term(self) -> Expr:
        """factor (('*' | '/' | '**' | '%') factor)*"""
        left = self.parse_factor()
        while self.current.kind in _MULTIPLICATIVE:
            tok = self.eat(self.current.kind)
            right = self.parse_factor()
            left = BinaryExpr(left=left, op=binary_operator(tok.kind), right=right)
        return left

    def parse_factor(self) -> Expr:
        """NUMBER | IDENT '(' expr ')' | '(' expr ')'"""
        tok = self.current

        if tok.kind == TokenKind.NUMBER:
            try:
                value = float(tok.value)
            except ValueError:
                raise NumberParseError(tok.value, self._context(tok)) from None
            self.eat(TokenKind.NUMBER)
            return NumberLiteral(value=value)

        if tok.kind == TokenKind.IDENT:
            return self._parse_call()

        if tok.kind == TokenKind.LPAREN:
            self._enter(tok)
            self.eat(TokenKind.LPAREN)
            expr = self.parse_expr()
            self.eat(TokenKind.RPAREN)
            self._depth -= 1
            return expr

        raise UnexpectedTokenError(tok, context=self._context(tok))

    def _parse_call(self) -> CallExpr:
        """IDENT '(' expr ')'"""
        name_tok = self.eat(TokenKind.IDENT)
        self._enter(name_tok)
        self.eat(TokenKind.LPAREN)
        argument = self.parse_expr()
        self.eat(TokenKind.RPAREN)
        self._depth -= 1
        return CallExpr(name=name_tok.value, argument=argument)

    def _enter(self, tok: Token) -> None:
        self._depth += 1
        if self._depth > self.max_depth:
            raise NestingDepthError(self.max_depth, self._context(tok))


def parse_tokens(tokens: list[Token], config: EvaluatorConfig | None = None) -> Expr:
    """Parse an already tokenized expression."""
    config = config or EvaluatorConfig()
    parser = Parser(tokens, max_depth=config.max_depth, strict=config.strict)
    return parser.parse()


def parse(source: str, config: EvaluatorConfig | None = None) -> Expr:
    """Parse an expression string into an expression tree.

    Args:
        source: Expression string (e.g., "2 ** 10 / 16 * 32")
        config: Parsing options; defaults to EvaluatorConfig().

    Returns:
        Parsed expression tree.

    Raises:
        ExpressionSyntaxError: If the expression is invalid.
    """
    config = config or EvaluatorConfig()
    parser = Parser(
        tokenize(source),
        source=source,
        max_depth=config.max_depth,
        strict=config.strict,
    )
    expr = parser.parse()
    logger.debug("Parsed %r as %s", source, expr)
    return expr
