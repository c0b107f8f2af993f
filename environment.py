"""Process environment handling for emulator mode."""

import logging
import os

logger = logging.getLogger(__name__)

BIGQUERY_EMULATOR_HOST = "BIGQUERY_EMULATOR_HOST"

# Variables that would let google.auth find real credentials or a real project
CREDENTIAL_ENV_VARS = (
    "GOOGLE_APPLICATION_CREDENTIALS",
    "GOOGLE_CLOUD_PROJECT",
    "GCLOUD_PROJECT",
)


def clear_credential_environment() -> list[str]:
    """
    Unset real-credential environment variables.

    Returns:
        Names of the variables that were set and have been removed
    """
    removed = [name for name in CREDENTIAL_ENV_VARS if os.environ.pop(name, None) is not None]
    if removed:
        logger.info(f"Cleared credential environment variables: {', '.join(removed)}")
    return removed


def set_emulator_host(emulator_url: str) -> None:
    """Publish the emulator address for the BigQuery client to pick up."""
    os.environ[BIGQUERY_EMULATOR_HOST] = emulator_url
    logger.info(f"{BIGQUERY_EMULATOR_HOST}: {emulator_url}")


__all__ = [
    "BIGQUERY_EMULATOR_HOST",
    "CREDENTIAL_ENV_VARS",
    "clear_credential_environment",
    "set_emulator_host",
]
