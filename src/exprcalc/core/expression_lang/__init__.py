"""
exprcalc expression language.

Lexer, parser, and evaluator for arithmetic expressions over floats with
the operators + - * / ** % , parentheses, and the built-in calls sin/cos.

Usage:
    from exprcalc.core.expression_lang import evaluate, parse

    evaluate("2 ** 10 / 16 * 32 - (1024 + 512)")
    # 512.0
    tree = parse("cos(1 + 2)")
"""

from exprcalc.core.expression_lang.evaluator import evaluate, evaluate_expr
from exprcalc.core.expression_lang.lexer import DEFAULT_RULES, Lexer, Rule, Token, TokenKind, tokenize
from exprcalc.core.expression_lang.parser import Parser, parse, parse_tokens

__all__ = [
    "DEFAULT_RULES",
    "Lexer",
    "Parser",
    "Rule",
    "Token",
    "TokenKind",
    "evaluate",
    "evaluate_expr",
    "parse",
    "parse_tokens",
    "tokenize",
]
