"""Tests for emulator connection checks."""

import os

import pytest
import requests
from google.auth.exceptions import DefaultCredentialsError
from google.cloud import bigquery

from config import Config
from demo.connection import (
    CONNECTION_QUERY,
    HELLO_QUERY,
    EmulatorConnectionError,
    check_connection,
    compare_approaches,
    probe_emulator,
)
from environment import BIGQUERY_EMULATOR_HOST
from tests.fake_http import make_response
from transport import EmulatorTransport


def test_check_connection_returns_first_row(mocker):
    """Test a connection check that gets a row back."""
    client = mocker.MagicMock(spec=bigquery.Client)
    mock_run_query = mocker.patch(
        "demo.connection.run_query", return_value=[{"test_value": 1, "current_time": "now"}]
    )

    row = check_connection(client)

    assert row == {"test_value": 1, "current_time": "now"}
    mock_run_query.assert_called_once_with(client, CONNECTION_QUERY)


def test_check_connection_without_rows_raises(mocker):
    """Test that an empty result is reported as a connection error."""
    mocker.patch("demo.connection.run_query", return_value=[])

    with pytest.raises(EmulatorConnectionError) as exc_info:
        check_connection(mocker.MagicMock(spec=bigquery.Client), HELLO_QUERY)

    assert exc_info.value.message == "No results returned from test query"


def test_probe_emulator_fetches_discovery_document(mocker):
    """Test the discovery probe, which may return a non-JSON body."""
    session = mocker.MagicMock(spec=requests.Session)
    session.request.return_value = make_response(
        200, "not json", headers={"Content-Type": "text/plain"}
    )

    result = probe_emulator(EmulatorTransport("localhost:9050", session=session))

    assert result.ok
    assert result.body == "not json"
    assert session.request.call_args.args == (
        "GET",
        "http://localhost:9050/discovery/v1/apis/bigquery/v2/rest",
    )


def test_probe_emulator_reports_error_status(mocker, caplog):
    """Test that a non-2xx discovery answer is returned, not raised."""
    session = mocker.MagicMock(spec=requests.Session)
    session.request.return_value = make_response(404, "404 page not found")

    result = probe_emulator(EmulatorTransport("localhost:9050", session=session))

    assert result.status_code == 404
    assert "answered HTTP 404" in caplog.text


def test_compare_approaches_records_each_outcome(mocker):
    """Test that a failing attempt does not stop the next one."""
    # Arrange
    override_client = mocker.MagicMock(spec=bigquery.Client)
    mocker.patch(
        "demo.connection._create_environment_only_client",
        side_effect=DefaultCredentialsError("Your default credentials were not found."),
    )
    mock_override = mocker.patch(
        "demo.connection.create_override_client", return_value=override_client
    )
    mock_run_query = mocker.patch(
        "demo.connection.run_query", return_value=[{"num": 1, "msg": "hello"}]
    )
    config = Config()

    # Act
    outcomes = compare_approaches(config)

    # Assert
    assert outcomes == {"environment variable only": False, "override transport": True}
    mock_override.assert_called_once_with(config)
    mock_run_query.assert_called_once_with(override_client, HELLO_QUERY)


def test_environment_only_attempt_publishes_emulator_host(mocker):
    """Test that the environment-only attempt builds a client without credentials."""
    mock_client_class = mocker.patch("demo.connection.bigquery.Client")
    mocker.patch("demo.connection.run_query", side_effect=RuntimeError("no credentials"))
    mocker.patch("demo.connection.create_override_client")

    outcomes = compare_approaches(Config())

    assert outcomes == {"environment variable only": False, "override transport": False}
    assert os.environ[BIGQUERY_EMULATOR_HOST] == "http://127.0.0.1:9050"
    mock_client_class.assert_called_once_with(project="test-project")
