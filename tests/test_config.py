"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from rollexpr.config import Settings


def test_defaults(monkeypatch) -> None:
    for name in ("ROLLEXPR_VERBOSITY", "ROLLEXPR_SEED", "ROLLEXPR_MAX_DRAWS"):
        monkeypatch.delenv(name, raising=False)
    config = Settings(_env_file=None)
    assert config.verbosity == "default"
    assert config.seed is None
    assert config.max_draws == 100_000
    assert config.max_expression_length == 1024


def test_reads_prefixed_environment(monkeypatch) -> None:
    monkeypatch.setenv("ROLLEXPR_VERBOSITY", "quiet")
    monkeypatch.setenv("ROLLEXPR_SEED", "1234")
    monkeypatch.setenv("ROLLEXPR_MAX_DRAWS", "0")
    config = Settings(_env_file=None)
    assert config.verbosity == "quiet"
    assert config.seed == 1234
    assert config.max_draws == 0


def test_rejects_unknown_verbosity(monkeypatch) -> None:
    monkeypatch.setenv("ROLLEXPR_VERBOSITY", "loud")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
