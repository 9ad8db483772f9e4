"""Environment-driven configuration tests."""

from __future__ import annotations

import logging

import pytest

from pm2openapi.config import configure_logging, live_updates_enabled, resolve_output_format
from pm2openapi.transpiler import OutputFormat


def test_output_format_defaults_to_yaml(monkeypatch):
    monkeypatch.delenv("PM2OPENAPI_FORMAT", raising=False)
    assert resolve_output_format() is OutputFormat.YAML


def test_output_format_env_and_flag_precedence(monkeypatch):
    monkeypatch.setenv("PM2OPENAPI_FORMAT", " JSON ")
    assert resolve_output_format() is OutputFormat.JSON
    assert resolve_output_format("yaml") is OutputFormat.YAML
    assert resolve_output_format("yml") is OutputFormat.YAML


def test_invalid_output_format_is_value_error(monkeypatch):
    monkeypatch.setenv("PM2OPENAPI_FORMAT", "xml")
    with pytest.raises(ValueError, match="Unsupported output format"):
        resolve_output_format()


@pytest.mark.parametrize(
    "raw, expected",
    [(None, True), ("0", False), ("no", False), ("TRUE", True), ("maybe", True)],
)
def test_live_updates_env(monkeypatch, raw, expected):
    if raw is None:
        monkeypatch.delenv("PM2OPENAPI_LIVE", raising=False)
    else:
        monkeypatch.setenv("PM2OPENAPI_LIVE", raw)
    assert live_updates_enabled() is expected


def test_live_updates_flag_wins(monkeypatch):
    monkeypatch.setenv("PM2OPENAPI_LIVE", "1")
    assert live_updates_enabled(False) is False


def test_configure_logging_levels(monkeypatch):
    monkeypatch.setenv("PM2OPENAPI_LOG_LEVEL", "debug")
    assert configure_logging() == logging.DEBUG
    assert configure_logging("info") == logging.INFO
    with pytest.raises(ValueError, match="Unknown log level"):
        configure_logging("chatty")
