"""
Lexer for the exprcalc expression language.

Converts an expression string into a sequence of typed tokens by trying an
ordered list of rules at each position. The first rule that matches wins,
so longer keywords must come before their prefixes (``**`` before ``*``).
Characters no rule recognizes, whitespace included, are skipped silently.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum, auto

logger = logging.getLogger(__name__)


class TokenKind(StrEnum):
    """Token types for the expression language."""

    # Literals
    NUMBER = auto()

    # Function names
    IDENT = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    STAR_STAR = auto()
    PERCENT = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()

    # End of input (parser sentinel, never produced by the lexer)
    EOF = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A single token: its kind, the exact matched text, and its offset."""

    kind: TokenKind
    value: str
    pos: int

    @property
    def end(self) -> int:
        return self.pos + len(self.value)

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, pos={self.pos})"


@dataclass(frozen=True, slots=True)
class Rule:
    """
    A token kind paired with exactly one recognition strategy.

    Build rules with ``Rule.with_pattern`` or ``Rule.with_keyword``.
    """

    kind: TokenKind
    pattern: re.Pattern[str] | None = None
    keyword: str | None = None

    def __post_init__(self) -> None:
        if (self.pattern is None) == (self.keyword is None):
            raise ValueError(f"Rule for {self.kind} needs exactly one of pattern or keyword")
        if self.keyword == "":
            raise ValueError(f"Rule for {self.kind} has an empty keyword")

    @classmethod
    def with_pattern(cls, kind: TokenKind, pattern: str | re.Pattern[str]) -> Rule:
        if isinstance(pattern, str):
            pattern = re.compile(pattern)
        return cls(kind=kind, pattern=pattern)

    @classmethod
    def with_keyword(cls, kind: TokenKind, keyword: str) -> Rule:
        return cls(kind=kind, keyword=keyword)

    def match(self, source: str, pos: int) -> str | None:
        """Return the text this rule matches starting exactly at ``pos``."""
        if self.pattern is not None:
            m = self.pattern.match(source, pos)
            # An empty match would never advance the cursor
            if m is None or m.end() == pos:
                return None
            return m.group(0)

        if self.keyword is not None and source.startswith(self.keyword, pos):
            return self.keyword
        return None


# Number: optional sign, digits, optional point, optional fraction ("5." is valid)
_NUMBER_RE = re.compile(r"-?[0-9]+\.?[0-9]*")
# Identifier: letters or underscores followed by alphanumerics/underscores
_IDENT_RE = re.compile(r"[a-zA-Z_]+[a-zA-Z0-9_]*")

DEFAULT_RULES: tuple[Rule, ...] = (
    Rule.with_pattern(TokenKind.NUMBER, _NUMBER_RE),
    Rule.with_pattern(TokenKind.IDENT, _IDENT_RE),
    Rule.with_keyword(TokenKind.PLUS, "+"),
    Rule.with_keyword(TokenKind.MINUS, "-"),
    Rule.with_keyword(TokenKind.STAR_STAR, "**"),
    Rule.with_keyword(TokenKind.STAR, "*"),
    Rule.with_keyword(TokenKind.SLASH, "/"),
    Rule.with_keyword(TokenKind.PERCENT, "%"),
    Rule.with_keyword(TokenKind.LPAREN, "("),
    Rule.with_keyword(TokenKind.RPAREN, ")"),
)


class Lexer:
    """Tokenizer driven by an ordered rule list."""

    def __init__(self, rules: Iterable[Rule] = DEFAULT_RULES) -> None:
        self.rules = tuple(rules)

    def token(self, source: str, pos: int) -> Token | None:
        """Try every rule at ``pos`` in order; return the first match."""
        for rule in self.rules:
            text = rule.match(source, pos)
            if text is not None:
                return Token(rule.kind, text, pos)
        return None

    def tokenize(self, source: str) -> list[Token]:
        """Tokenize ``source``, skipping anything no rule recognizes."""
        tokens: list[Token] = []
        cursor = 0
        n = len(source)

        while cursor < n:
            tok = self.token(source, cursor)
            if tok is None:
                cursor += 1
                continue
            tokens.append(tok)
            cursor = tok.end

        logger.debug("Tokenized %r into %s", source, tokens)
        return tokens


_DEFAULT_LEXER = Lexer(DEFAULT_RULES)


def tokenize(source: str, rules: Iterable[Rule] | None = None) -> list[Token]:
    """Tokenize an expression string into a list of tokens.

    Args:
        source: Expression text.
        rules: Ordered rules to apply; defaults to ``DEFAULT_RULES``.

    Returns:
        Tokens in source order. No EOF token is appended.
    """
    lexer = _DEFAULT_LEXER if rules is None else Lexer(rules)
    return lexer.tokenize(source)
