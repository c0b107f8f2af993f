"""BigQuery client factories for the local emulator."""

from google.api_core import client_options
from google.cloud import bigquery

from auth import create_placeholder_auth_client
from config import Config
from environment import clear_credential_environment, set_emulator_host
from transport import EmulatorSession, EmulatorTransport

# Endpoint the override client builds URLs for, whatever BIGQUERY_EMULATOR_HOST says
CLOUD_API_ENDPOINT = "https://bigquery.googleapis.com"


def create_environment_client(config: Config) -> bigquery.Client:
    """
    Create a client that finds the emulator through BIGQUERY_EMULATOR_HOST.

    The client swaps its API base URL for the variable's value. It still
    resolves credentials through google.auth, so placeholder credentials
    are passed explicitly.
    """
    clear_credential_environment()
    set_emulator_host(config.emulator_url)

    return bigquery.Client(
        project=config.project_id,
        credentials=create_placeholder_auth_client(config.project_id, config.emulator_url),
    )


def create_endpoint_client(config: Config) -> bigquery.Client:
    """Create a client with the emulator as its explicit API endpoint."""
    clear_credential_environment()

    client_options_obj = client_options.ClientOptions(api_endpoint=config.emulator_url)

    return bigquery.Client(
        project=config.project_id,
        client_options=client_options_obj,
        credentials=create_placeholder_auth_client(config.project_id, config.emulator_url),
    )


def create_override_client(config: Config) -> bigquery.Client:
    """
    Create a client whose HTTP session redirects cloud API calls to the emulator.

    The client is pinned to the cloud endpoint so a BIGQUERY_EMULATOR_HOST
    left in the environment cannot bypass the session, which rewrites each
    URL before it leaves the process.
    """
    clear_credential_environment()

    session = EmulatorSession(config.emulator_url)
    transport = EmulatorTransport(config.emulator_url, session=session)
    client_options_obj = client_options.ClientOptions(api_endpoint=CLOUD_API_ENDPOINT)

    return bigquery.Client(
        project=config.project_id,
        client_options=client_options_obj,
        credentials=create_placeholder_auth_client(
            config.project_id, config.emulator_url, transport=transport
        ),
        _http=session,
    )


_FACTORIES = {
    "environment": create_environment_client,
    "endpoint": create_endpoint_client,
    "override": create_override_client,
}


def create_bigquery_client(config: Config) -> bigquery.Client:
    """
    Create a BigQuery client using the configured connection approach.

    Args:
        config: Application configuration

    Returns:
        Configured BigQuery client instance
    """
    return _FACTORIES[config.auth_mode](config)


__all__ = [
    "CLOUD_API_ENDPOINT",
    "create_bigquery_client",
    "create_endpoint_client",
    "create_environment_client",
    "create_override_client",
]
