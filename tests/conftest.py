"""Pytest configuration for unit tests."""

import pytest

from environment import BIGQUERY_EMULATOR_HOST, CREDENTIAL_ENV_VARS

CONFIG_ENV_VARS = (
    "BQ_EMULATOR_HOST",
    "EMULATOR_HOST",
    "BQ_EMULATOR_PROJECT_ID",
    "EMULATOR_PROJECT_ID",
    "BQ_EMULATOR_AUTH_MODE",
    "AUTH_MODE",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """
    Fixture that starts every test with none of the emulator or credential variables set.

    Each variable is set then deleted so monkeypatch restores the original
    environment even when the code under test writes to os.environ.
    """
    for name in (*CREDENTIAL_ENV_VARS, BIGQUERY_EMULATOR_HOST, *CONFIG_ENV_VARS):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture
def emulator_url():
    """Fixture that provides the default emulator base URL."""
    return "http://127.0.0.1:9050"
