"""Connection checks against the emulator."""

import logging

from google.cloud import bigquery

from bigquery import create_override_client
from config import Config
from demo.common import run_query
from environment import clear_credential_environment, set_emulator_host
from transport import DISCOVERY_PATH, EmulatorTransport, RequestDescriptor, TransportResult

logger = logging.getLogger(__name__)

CONNECTION_QUERY = "SELECT 1 AS test_value, CURRENT_TIMESTAMP() AS current_time"
HELLO_QUERY = 'SELECT 1 AS num, "hello" AS msg'


class EmulatorConnectionError(Exception):
    """Exception raised when the emulator answers a check query with no rows."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def check_connection(client: bigquery.Client, query: str = CONNECTION_QUERY) -> dict:
    """
    Run a single-row query to verify the client reaches the emulator.

    Returns:
        The first result row

    Raises:
        EmulatorConnectionError: If the query returned no rows
    """
    rows = run_query(client, query)
    if not rows:
        raise EmulatorConnectionError("No results returned from test query")

    logger.info("Connection successful!")
    for name, value in rows[0].items():
        logger.info(f"  {name}: {value}")
    return rows[0]


def probe_emulator(transport: EmulatorTransport) -> TransportResult:
    """Fetch the emulator's discovery document."""
    result = transport.send(RequestDescriptor(uri=f"{transport.emulator_url}{DISCOVERY_PATH}"))
    if result.ok:
        logger.info(f"Emulator reachable at {transport.emulator_url} (HTTP {result.status_code})")
    else:
        logger.warning(
            f"Emulator at {transport.emulator_url} answered HTTP {result.status_code} "
            f"for {DISCOVERY_PATH}"
        )
    return result


def _create_environment_only_client(config: Config) -> bigquery.Client:
    # No credentials object: the client falls back to google.auth.default()
    clear_credential_environment()
    set_emulator_host(config.emulator_url)
    return bigquery.Client(project=config.project_id)


def compare_approaches(config: Config) -> dict[str, bool]:
    """
    Run the same query with the environment variable alone and with the override client.

    Failures are logged and recorded, not raised.

    Returns:
        Attempt name mapped to whether it succeeded
    """
    attempts = {
        "environment variable only": _create_environment_only_client,
        "override transport": create_override_client,
    }

    outcomes = {}
    for name, create_client in attempts.items():
        logger.info(f"Attempt: {name}")
        try:
            rows = run_query(create_client(config), HELLO_QUERY)
        except Exception as e:
            logger.warning(f"Failed with {name}: {e}")
            outcomes[name] = False
            continue
        logger.info(f"Success with {name}: {rows}")
        outcomes[name] = True

    return outcomes


__all__ = [
    "CONNECTION_QUERY",
    "EmulatorConnectionError",
    "HELLO_QUERY",
    "check_connection",
    "compare_approaches",
    "probe_emulator",
]
