"""Placeholder credentials for talking to the BigQuery emulator."""

import logging
from dataclasses import dataclass

from google.auth import credentials

from transport import (
    EmulatorTransport,
    RequestDescriptor,
    TransportResult,
    make_authenticated_request,
)

logger = logging.getLogger(__name__)

DUMMY_TOKEN = "dummy-token"


@dataclass(frozen=True)
class CredentialStandIn:
    """Fixed token and project that never expire."""

    token: str
    project_id: str


class PlaceholderCredentials(credentials.Credentials):
    """
    Credentials that satisfy the BigQuery client without real authentication.

    The client accepts any ``google.auth`` credentials object, so passing
    this one skips ``google.auth.default()`` entirely. No authorization
    header is attached to requests; the emulator does not check it.

    Without an explicit transport, one is created for ``emulator_host`` on
    the first ``request()`` call.
    """

    def __init__(
        self,
        stand_in: CredentialStandIn,
        transport: EmulatorTransport | None = None,
        emulator_host: str | None = None,
    ):
        if transport is None and emulator_host is None:
            raise ValueError("Either a transport or an emulator host is required")
        super().__init__()
        self.stand_in = stand_in
        self.token = stand_in.token
        self._transport = transport
        self._emulator_host = emulator_host
        self._request = None

    @property
    def transport(self) -> EmulatorTransport:
        if self._transport is None:
            self._transport = EmulatorTransport(self._emulator_host)
        return self._transport

    @property
    def expired(self) -> bool:
        return False

    @property
    def valid(self) -> bool:
        return True

    def refresh(self, request) -> None:
        """Nothing to refresh; the token is fixed."""

    def apply(self, headers, token=None) -> None:
        headers.update(self.get_request_headers())

    def before_request(self, request, method, url, headers) -> None:
        self.apply(headers)

    def request(self, descriptor: RequestDescriptor) -> TransportResult:
        """Send a request to the emulator, see ``transport.make_authenticated_request``."""
        if self._request is None:
            self._request = make_authenticated_request(self.transport)
        return self._request(descriptor)

    def get_access_token(self) -> str:
        return self.stand_in.token

    def get_project_id(self) -> str:
        return self.stand_in.project_id

    def get_request_headers(self) -> dict[str, str]:
        return {}


def create_placeholder_auth_client(
    project_id: str,
    emulator_host: str,
    transport: EmulatorTransport | None = None,
) -> PlaceholderCredentials:
    """
    Create placeholder credentials bound to an emulator.

    Args:
        project_id: Project reported by the credentials
        emulator_host: Emulator address, ``host:port`` or full URL
        transport: Transport to send requests with (one is created for
            ``emulator_host`` on first use if omitted)

    Returns:
        Credentials accepted by ``bigquery.Client``
    """
    logger.debug(f"Using placeholder credentials for {project_id} at {emulator_host}")
    return PlaceholderCredentials(
        CredentialStandIn(DUMMY_TOKEN, project_id),
        transport=transport,
        emulator_host=emulator_host,
    )


__all__ = ["CredentialStandIn", "PlaceholderCredentials", "create_placeholder_auth_client"]
