"""Shared fixtures."""

import os
import re

import pytest

from restbridge.core.config import Config

_CONFIG_VARS = re.compile(r"^(rest_|auth_|header_)", re.IGNORECASE)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from REST_*/AUTH_*/HEADER_* variables and any .env file."""
    for key in list(os.environ):
        if _CONFIG_VARS.match(key):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def make_config():
    """Build a Config without touching the environment."""

    def _make(**overrides) -> Config:
        values = {"base_url": "http://localhost:3000"}
        values.update(overrides)
        return Config(_env_file=None, **values)

    return _make
