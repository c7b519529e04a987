"""Tests for the CLI entry point."""

import json
import logging

import pytest

from restbridge import cli
from restbridge.core.logging import get_logger, setup_logging


def test_no_command_prints_usage(capsys):
    assert cli.main([]) == 1
    assert "Usage: restbridge" in capsys.readouterr().err


def test_unknown_command(capsys):
    assert cli.main(["bogus"]) == 1
    assert "Unknown command: bogus" in capsys.readouterr().err


def test_missing_config_exits_before_serving(capsys):
    assert cli.main(["serve"]) == cli.EXIT_CONFIG_ERROR
    assert "REST_BASE_URL" in capsys.readouterr().err


def test_invalid_numeric_config(monkeypatch, capsys):
    monkeypatch.setenv("REST_BASE_URL", "http://localhost:3000")
    monkeypatch.setenv("REST_TIMEOUT", "soon")
    assert cli.main(["describe"]) == cli.EXIT_CONFIG_ERROR
    assert "REST_TIMEOUT" in capsys.readouterr().err


def test_describe(monkeypatch, capsys):
    monkeypatch.setenv("REST_BASE_URL", "https://api.example.com/")
    monkeypatch.setenv("AUTH_BEARER", "token123")

    assert cli.main(["describe"]) == 0

    out = capsys.readouterr().out
    assert "# AVAILABLE TOOLS" in out
    assert "test_request(" in out
    assert "https://api.example.com" in out
    assert "Auth: Bearer token authentication configured" in out
    assert "token123" not in out


def test_unsendable_custom_header_is_config_error(monkeypatch, capsys):
    monkeypatch.setenv("REST_BASE_URL", "http://localhost:3000")
    monkeypatch.setenv("HEADER_X_Team", "équipe")

    assert cli.main(["request", "GET", "/users"]) == cli.EXIT_CONFIG_ERROR
    assert "HEADER_X_Team" in capsys.readouterr().err


def test_request_usage(monkeypatch, capsys):
    monkeypatch.setenv("REST_BASE_URL", "http://localhost:3000")
    assert cli.main(["request", "GET"]) == 1
    assert "Usage: restbridge request" in capsys.readouterr().err


def test_request_rejects_invalid_method(monkeypatch, capsys):
    monkeypatch.setenv("REST_BASE_URL", "http://localhost:3000")

    assert cli.main(["request", "fetch", "/users"]) == 1

    result = json.loads(capsys.readouterr().out)
    assert result["success"] is False
    assert result["data"] == {"error_type": "validation"}


def test_parse_body():
    assert cli._parse_body('{"a": 1}') == {"a": 1}
    assert cli._parse_body("plain text") == "plain text"


def test_debug_flag_sets_level(capsys):
    cli.main(["--debug"])
    assert logging.getLogger("restbridge").level == logging.DEBUG


def test_setup_logging_does_not_stack_handlers():
    setup_logging()
    logger = setup_logging()
    assert len(logger.handlers) == 1
    assert get_logger("cli").name == "restbridge.cli"


def test_log_file_flag_writes_logs(tmp_path, capsys):
    log_file = tmp_path / "logs" / "restbridge.log"

    assert cli.main(["--log-file", str(log_file), "serve"]) == cli.EXIT_CONFIG_ERROR

    assert "Configuration error" in log_file.read_text(encoding="utf-8")
    setup_logging()


def test_log_file_flag_requires_path(capsys):
    assert cli.main(["--log-file"]) == 1
    assert "--log-file requires a path" in capsys.readouterr().err
