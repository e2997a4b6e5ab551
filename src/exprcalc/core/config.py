"""
Evaluation configuration for exprcalc.

Settings come from code (an explicit EvaluatorConfig) or from the
environment through load_config():

    EXPRCALC_STRICT     reject tokens left after a complete expression
                        (1/true/yes/on, 0/false/no/off; default off)
    EXPRCALC_MAX_DEPTH  maximum parenthesis/call nesting (default 200)

Usage:
    from exprcalc.core.config import EvaluatorConfig, load_config

    config = load_config()
    strict = config.model_copy(update={"strict": True})
"""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

STRICT_ENV_VAR = "EXPRCALC_STRICT"
MAX_DEPTH_ENV_VAR = "EXPRCALC_MAX_DEPTH"

DEFAULT_MAX_DEPTH = 200

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class EvaluatorConfig(BaseModel):
    """Options that change how expressions are parsed."""

    strict: bool = Field(
        default=False,
        description="Reject tokens remaining after a complete expression",
    )
    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        ge=1,
        description="Maximum nesting of parentheses and calls",
    )

    model_config = ConfigDict(frozen=True)


def load_config() -> EvaluatorConfig:
    """Build an EvaluatorConfig from EXPRCALC_* environment variables.

    Unrecognized values are logged and replaced by the defaults.

    Examples:
        >>> import os
        >>> os.environ["EXPRCALC_STRICT"] = "yes"
        >>> load_config().strict
        True
    """
    return EvaluatorConfig(strict=_read_strict(), max_depth=_read_max_depth())


def _read_strict() -> bool:
    raw = os.environ.get(STRICT_ENV_VAR, "").lower().strip()
    if raw in _TRUE_VALUES:
        return True
    if raw not in _FALSE_VALUES:
        logger.warning(
            "Unknown %s value '%s'. Expected one of: %s. Strict mode stays off.",
            STRICT_ENV_VAR,
            raw,
            ", ".join(sorted(_TRUE_VALUES | (_FALSE_VALUES - {""}))),
        )
    return False


def _read_max_depth() -> int:
    raw = os.environ.get(MAX_DEPTH_ENV_VAR, "").strip()
    if not raw:
        return DEFAULT_MAX_DEPTH
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value < 1:
        logger.warning(
            "Invalid %s value '%s'. Expected a positive integer. Using %d.",
            MAX_DEPTH_ENV_VAR,
            raw,
            DEFAULT_MAX_DEPTH,
        )
        return DEFAULT_MAX_DEPTH
    return value
