"""
exprcalc - arithmetic expression evaluator.

Evaluates text such as ``"2 ** 10 / 16 * 32 - (1024 + 512)"`` or
``"cos(1 + 2)"`` to a float without using Python's eval().
"""

from __future__ import annotations

import re
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path as _Path

from .core.config import EvaluatorConfig, load_config
from .core.errors import (
    ExprCalcError,
    ExpressionEvalError,
    ExpressionSyntaxError,
    UnexpectedTokenError,
    UnresolvedReferenceError,
)
from .core.expression_lang import evaluate, evaluate_expr, parse, tokenize


def get_version() -> str:
    """Get version from pyproject.toml (editable) or importlib.metadata (installed)."""
    # In editable mode, read directly from pyproject.toml for live updates
    pyproject = _Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        content = pyproject.read_text()
        if match := re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE):
            return match.group(1)

    try:
        return _metadata_version("exprcalc")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = get_version()

__all__ = [
    "EvaluatorConfig",
    "ExprCalcError",
    "ExpressionEvalError",
    "ExpressionSyntaxError",
    "UnexpectedTokenError",
    "UnresolvedReferenceError",
    "__version__",
    "evaluate",
    "evaluate_expr",
    "get_version",
    "load_config",
    "parse",
    "tokenize",
]
