"""Shared pytest fixtures for exprcalc tests."""

import pytest

from exprcalc.core.config import MAX_DEPTH_ENV_VAR, STRICT_ENV_VAR, EvaluatorConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep EXPRCALC_* settings from the outer environment out of tests."""
    monkeypatch.delenv(STRICT_ENV_VAR, raising=False)
    monkeypatch.delenv(MAX_DEPTH_ENV_VAR, raising=False)


@pytest.fixture
def strict_config() -> EvaluatorConfig:
    """Return a config that rejects trailing tokens."""
    return EvaluatorConfig(strict=True)
