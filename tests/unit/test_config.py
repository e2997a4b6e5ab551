"""Tests for evaluation configuration and environment loading."""

import logging

import pytest
from pydantic import ValidationError

from exprcalc.core.config import (
    DEFAULT_MAX_DEPTH,
    MAX_DEPTH_ENV_VAR,
    STRICT_ENV_VAR,
    EvaluatorConfig,
    load_config,
)


class TestEvaluatorConfig:
    def test_defaults(self) -> None:
        config = EvaluatorConfig()
        assert config.strict is False
        assert config.max_depth == DEFAULT_MAX_DEPTH

    def test_max_depth_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            EvaluatorConfig(max_depth=0)

    def test_frozen(self) -> None:
        config = EvaluatorConfig()
        with pytest.raises(ValidationError):
            config.strict = True  # type: ignore[misc]

    def test_model_copy_update(self) -> None:
        config = EvaluatorConfig().model_copy(update={"strict": True})
        assert config.strict is True


class TestLoadConfig:
    """load_config reads EXPRCALC_* variables."""

    def test_unset(self) -> None:
        assert load_config() == EvaluatorConfig()

    @pytest.mark.parametrize("value", ["1", "true", "YES", " on "])
    def test_strict_true(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        monkeypatch.setenv(STRICT_ENV_VAR, value)
        assert load_config().strict is True

    @pytest.mark.parametrize("value", ["0", "false", "no", "off", ""])
    def test_strict_false(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        monkeypatch.setenv(STRICT_ENV_VAR, value)
        assert load_config().strict is False

    def test_strict_unknown_value(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setenv(STRICT_ENV_VAR, "maybe")
        with caplog.at_level(logging.WARNING, logger="exprcalc.core.config"):
            assert load_config().strict is False
        assert "Unknown EXPRCALC_STRICT value 'maybe'" in caplog.text

    def test_max_depth(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(MAX_DEPTH_ENV_VAR, "50")
        assert load_config().max_depth == 50

    @pytest.mark.parametrize("value", ["abc", "0", "-4", "1.5"])
    def test_max_depth_invalid(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture, value: str
    ) -> None:
        monkeypatch.setenv(MAX_DEPTH_ENV_VAR, value)
        with caplog.at_level(logging.WARNING, logger="exprcalc.core.config"):
            assert load_config().max_depth == DEFAULT_MAX_DEPTH
        assert "Invalid EXPRCALC_MAX_DEPTH" in caplog.text
