"""Tests for emulator environment handling."""

import os

from environment import (
    BIGQUERY_EMULATOR_HOST,
    CREDENTIAL_ENV_VARS,
    clear_credential_environment,
    set_emulator_host,
)


def test_clear_credential_environment_removes_set_variables(monkeypatch):
    """Test that only variables that were set are reported as removed."""
    monkeypatch.setenv("GOOGLE_APPLICATION_CREDENTIALS", "/secrets/key.json")
    monkeypatch.setenv("GCLOUD_PROJECT", "prod-project")

    removed = clear_credential_environment()

    assert removed == ["GOOGLE_APPLICATION_CREDENTIALS", "GCLOUD_PROJECT"]
    for name in CREDENTIAL_ENV_VARS:
        assert name not in os.environ


def test_clear_credential_environment_when_nothing_set():
    """Test that clearing an already clean environment is a no-op."""
    assert clear_credential_environment() == []


def test_clear_credential_environment_keeps_emulator_host(monkeypatch):
    """Test that the emulator host variable survives clearing."""
    monkeypatch.setenv(BIGQUERY_EMULATOR_HOST, "http://127.0.0.1:9050")
    monkeypatch.setenv("GOOGLE_CLOUD_PROJECT", "prod-project")

    clear_credential_environment()

    assert os.environ[BIGQUERY_EMULATOR_HOST] == "http://127.0.0.1:9050"


def test_set_emulator_host():
    """Test that the emulator host is published to the environment."""
    set_emulator_host("http://localhost:9050")

    assert os.environ[BIGQUERY_EMULATOR_HOST] == "http://localhost:9050"
