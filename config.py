"""Application configuration."""

import logging
from typing import Any, Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from transport import normalize_emulator_url


class Config(BaseSettings):
    """
    Emulator connection configuration.

    Loads configuration from environment variables.

    Environment variables (checked in order: prefixed, then plain):
    - BQ_EMULATOR_HOST, EMULATOR_HOST or BIGQUERY_EMULATOR_HOST (default: "http://127.0.0.1:9050")
    - BQ_EMULATOR_PROJECT_ID or EMULATOR_PROJECT_ID (default: "test-project")
    - BQ_EMULATOR_AUTH_MODE or AUTH_MODE (default: "override")
    """

    emulator_host: str = Field(
        default="http://127.0.0.1:9050",
        validation_alias=AliasChoices(
            "BQ_EMULATOR_HOST", "EMULATOR_HOST", "BIGQUERY_EMULATOR_HOST"
        ),
    )
    project_id: str = Field(
        default="test-project",
        validation_alias=AliasChoices("BQ_EMULATOR_PROJECT_ID", "EMULATOR_PROJECT_ID"),
    )
    auth_mode: Literal["environment", "endpoint", "override"] = Field(
        default="override",
        validation_alias=AliasChoices("BQ_EMULATOR_AUTH_MODE", "AUTH_MODE"),
    )

    model_config = SettingsConfigDict(
        env_file=None,  # Don't read .env files
        case_sensitive=False,
        extra="ignore",
        cli_parse_args=False,
    )

    def __init__(self, **kwargs: Any):
        """Initialize config and log configuration."""
        super().__init__(**kwargs)

        logging.info(f"Emulator host: {self.emulator_url}")
        logging.info(f"Project ID: {self.project_id}")
        logging.info(f"Auth mode: {self.auth_mode}")

    @property
    def emulator_url(self) -> str:
        """Emulator base URL with an explicit scheme and no trailing slash."""
        return normalize_emulator_url(self.emulator_host)


__all__ = ["Config"]
