"""Shared pytest fixtures."""

import pytest

from formatconverter.config import reset_settings


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep user config files and CONVERTER_* variables out of tests."""
    monkeypatch.setenv("HOME", str(tmp_path))
    for name in (
        "CONVERTER_HOST",
        "CONVERTER_PORT",
        "JSON_INDENT",
        "SCHEMA_POLICY",
        "LOG_LEVEL",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)

    reset_settings()
    yield
    reset_settings()
