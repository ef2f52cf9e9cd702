"""Tests for loguru sink configuration."""

from unittest.mock import patch

import pytest

from hybrid_architect import logging_config


@pytest.fixture(autouse=True)
def reset_level(monkeypatch):
    monkeypatch.setattr(logging_config, "_configured_level", None)


@patch("hybrid_architect.logging_config.logger")
def test_setup_replaces_default_sink(mock_logger):
    logging_config.setup_logging("DEBUG")
    mock_logger.remove.assert_called_once_with()
    assert mock_logger.add.call_args.kwargs["level"] == "DEBUG"
    assert mock_logger.add.call_args.kwargs["format"] == logging_config.LOG_FORMAT


@patch("hybrid_architect.logging_config.logger")
def test_same_level_is_noop(mock_logger):
    logging_config.setup_logging("INFO")
    logging_config.setup_logging("INFO")
    assert mock_logger.add.call_count == 1


@patch("hybrid_architect.logging_config.logger")
def test_level_change_reconfigures(mock_logger):
    logging_config.setup_logging("INFO")
    logging_config.setup_logging("DEBUG")
    assert mock_logger.remove.call_count == 2
    assert mock_logger.add.call_args.kwargs["level"] == "DEBUG"
