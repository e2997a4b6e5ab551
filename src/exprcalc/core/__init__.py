"""Core lexer, parser, evaluator, and supporting types."""
