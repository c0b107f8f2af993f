"""Pytest configuration for integration tests."""

import pytest
from tenacity import retry, stop_after_attempt, wait_exponential
from testcontainers.core.container import DockerContainer

from config import Config
from environment import BIGQUERY_EMULATOR_HOST, CREDENTIAL_ENV_VARS


@pytest.fixture(scope="session")
def bigquery_emulator():
    """
    Fixture that provides a BigQuery emulator container for integration testing.

    The emulator exposes:
    - REST API endpoint on port 9050 (used by the Python client)
    - gRPC endpoint on port 9060

    Note: On ARM64 (Apple Silicon), the container uses platform emulation (linux/x86_64).
    """
    container = (
        DockerContainer("ghcr.io/goccy/bigquery-emulator:latest", platform="linux/x86_64")
        .with_exposed_ports(9050, 9060)
        .with_env("PORT", "9050")
        .with_env("GRPC_PORT", "9060")
        .with_command("--project test-project")  # Required by the emulator
    )

    container.start()

    # Wait for container to be ready and port mapping to be available
    @retry(stop=stop_after_attempt(10), wait=wait_exponential(multiplier=0.5, min=0.5, max=10))
    def get_container_ports():
        """Get container ports with retry logic."""
        return container.get_container_host_ip(), container.get_exposed_port(9050)

    emulator_host, emulator_port = get_container_ports()

    yield {
        "container": container,
        "host": emulator_host,
        "port": emulator_port,
    }

    container.stop()


@pytest.fixture(scope="function")
def emulator_config(bigquery_emulator, monkeypatch):
    """
    Fixture that provides a Config pointing at the emulator container.

    Credential and emulator variables are restored after each test since
    the client factories modify os.environ.
    """
    for name in (*CREDENTIAL_ENV_VARS, BIGQUERY_EMULATOR_HOST):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)

    monkeypatch.setenv(
        "BQ_EMULATOR_HOST", f"http://{bigquery_emulator['host']}:{bigquery_emulator['port']}"
    )
    monkeypatch.setenv("BQ_EMULATOR_PROJECT_ID", "test-project")
    return Config()
