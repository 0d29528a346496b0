"""Tests for CLI logging configuration."""

import logging

import pytest

from gcloud_ssh.logging_setup import LOG_LEVEL_ENV, resolve_log_level, setup_cli_logging
from gcloud_ssh.redact import SecretRedactingFilter


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.parametrize(
    "value,expected",
    [("debug", logging.DEBUG), ("WARNING", logging.WARNING), (" error ", logging.ERROR), ("chatty", logging.INFO)],
)
def test_resolve_log_level(value, expected):
    assert resolve_log_level(value) == expected


def test_resolve_log_level_from_env(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
    assert resolve_log_level() == logging.DEBUG


def test_resolve_log_level_default(monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    assert resolve_log_level() == logging.INFO


def test_setup_cli_logging_single_redacting_handler(restore_root_logger):
    setup_cli_logging("debug")
    setup_cli_logging("debug")

    root = restore_root_logger
    assert root.level == logging.DEBUG
    (handler,) = root.handlers
    assert any(isinstance(f, SecretRedactingFilter) for f in handler.filters)
