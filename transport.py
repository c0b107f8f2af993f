"""Request redirection from the BigQuery cloud API to a local emulator.

The BigQuery client sends every API call through the ``requests.Session``
it holds as ``client._http``. Replacing that session with an
``EmulatorSession`` rewrites each outgoing URL from the cloud hostname to
the emulator, so the client never needs real credentials or network access
to Google.

``EmulatorTransport`` offers the same redirection for callers that build
requests themselves, using a plain descriptor in and a normalized result
out.
"""

import ipaddress
import json
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import requests

logger = logging.getLogger(__name__)

# Authority of any Google API host, e.g. https://bigquery.googleapis.com:443
_CLOUD_API_PATTERN = re.compile(
    r"^https?://[^/?#]+\.googleapis\.com(?::\d+)?(?=[/?#]|$)", re.IGNORECASE
)

DEFAULT_HEADERS = {"Content-Type": "application/json"}
DISCOVERY_PATH = "/discovery/v1/apis/bigquery/v2/rest"


class EmulatorRequestError(Exception):
    """Exception passed to request callbacks for a non-2xx emulator response."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: "TransportResult | None" = None,
    ):
        self.message = message
        self.status_code = status_code
        self.response = response
        super().__init__(message)


@dataclass
class RequestDescriptor:
    """An outbound request before it is sent to the emulator."""

    uri: str
    method: str = "GET"
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None
    callback: Callable[..., None] | None = None


@dataclass(frozen=True)
class TransportResult:
    """Normalized emulator response."""

    status_code: int
    body: Any
    headers: dict[str, str]

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def normalize_emulator_url(value: str) -> str:
    """
    Turn an emulator address into a base URL.

    Accepts either ``host:port`` (as used by BIGQUERY_EMULATOR_HOST) or a
    full URL. A missing scheme defaults to ``http``.
    """
    value = value.strip()
    if "://" not in value:
        value = f"http://{value}"
    return value.rstrip("/")


def is_loopback_host(host: str | None) -> bool:
    """Return True for localhost names and loopback IP addresses."""
    if not host:
        return False
    host = host.strip("[]").lower()
    if host == "localhost" or host.endswith(".localhost"):
        return True
    try:
        return ipaddress.ip_address(host).is_loopback
    except ValueError:
        return False


def _host_of(uri: str) -> str | None:
    _, sep, rest = uri.partition("://")
    if not sep:
        return None
    authority = re.split(r"[/?#]", rest, maxsplit=1)[0]
    authority = authority.rpartition("@")[2]
    if authority.startswith("["):
        return authority[1:].partition("]")[0]
    return authority.partition(":")[0]


def rewrite_uri(uri: str, emulator_url: str) -> str:
    """
    Point a cloud API URI at the emulator.

    Any ``http(s)://*.googleapis.com`` authority is replaced with the
    emulator base URL, keeping path and query. Loopback targets are always
    downgraded to ``http`` since the emulator does not terminate TLS.
    Other URIs are returned unchanged.
    """
    rewritten = _CLOUD_API_PATTERN.sub(lambda _: emulator_url, uri, count=1)
    if rewritten[:8].lower() == "https://" and is_loopback_host(_host_of(rewritten)):
        rewritten = "http://" + rewritten[8:]
    return rewritten


def parse_body(response: requests.Response) -> Any:
    """Decode a JSON body, or return the raw text if it is not JSON."""
    text = response.text
    if not text:
        return ""
    try:
        return json.loads(text)
    except ValueError:
        return text


def _merge_headers(headers: dict[str, str]) -> dict[str, str]:
    provided = {name.lower() for name in headers}
    merged = {
        name: value for name, value in DEFAULT_HEADERS.items() if name.lower() not in provided
    }
    merged.update(headers)
    return merged


def _serialize_body(body: Any) -> str | bytes | None:
    if body is None or isinstance(body, (str, bytes)):
        return body
    return json.dumps(body)


class EmulatorSession(requests.Session):
    """
    ``requests.Session`` that sends cloud API calls to the emulator instead.

    Meant to be handed to ``bigquery.Client(_http=...)``.
    """

    # Read by the client when choosing between the regular and mTLS endpoints
    is_mtls = False

    def __init__(self, emulator_url: str):
        super().__init__()
        self.emulator_url = normalize_emulator_url(emulator_url)

    def request(self, method, url, *args, **kwargs):
        rewritten = rewrite_uri(url, self.emulator_url)
        logger.debug(f"[Request] {method} {rewritten}")
        return super().request(method, rewritten, *args, **kwargs)


class EmulatorTransport:
    """Sends request descriptors to the emulator and normalizes the responses."""

    def __init__(self, emulator_url: str, session: requests.Session | None = None):
        """
        Initialize the transport.

        Args:
            emulator_url: Emulator address, ``host:port`` or full URL
            session: HTTP session to send with (a new one if omitted)
        """
        self._emulator_url = normalize_emulator_url(emulator_url)
        self._session = session if session is not None else requests.Session()

    @property
    def emulator_url(self) -> str:
        return self._emulator_url

    def rewrite(self, uri: str) -> str:
        return rewrite_uri(uri, self._emulator_url)

    def send(self, descriptor: RequestDescriptor) -> TransportResult:
        """
        Send a request to the emulator.

        Args:
            descriptor: Request to send; its URI may target the cloud API

        Returns:
            Status code, decoded body and headers of the emulator response

        Raises:
            requests.RequestException: On connection failures or timeouts
        """
        uri = self.rewrite(descriptor.uri)
        method = (descriptor.method or "GET").upper()
        logger.debug(f"[Request] {method} {uri}")

        try:
            response = self._session.request(
                method,
                uri,
                headers=_merge_headers(descriptor.headers),
                data=_serialize_body(descriptor.body),
            )
        except requests.RequestException as e:
            logger.error(f"[Request Error] {e}")
            raise

        return TransportResult(
            status_code=response.status_code,
            body=parse_body(response),
            headers=dict(response.headers),
        )


def make_authenticated_request(
    transport: EmulatorTransport,
) -> Callable[[RequestDescriptor], TransportResult]:
    """
    Wrap a transport for callers using the completion-callback convention.

    The returned function always returns the ``TransportResult``. When the
    descriptor carries a callback it is also invoked:

    - ``callback(None, body, result)`` for a 2xx response
    - ``callback(EmulatorRequestError, None, result)`` otherwise; the error
      is reported only through the callback
    - ``callback(error)`` on a network failure, which is then re-raised
    """

    def authenticated_request(descriptor: RequestDescriptor) -> TransportResult:
        try:
            result = transport.send(descriptor)
        except requests.RequestException as e:
            if descriptor.callback is not None:
                descriptor.callback(e)
            raise

        if descriptor.callback is not None:
            if result.ok:
                descriptor.callback(None, result.body, result)
            else:
                error = EmulatorRequestError(
                    f"Request failed with status {result.status_code}",
                    status_code=result.status_code,
                    response=result,
                )
                descriptor.callback(error, None, result)

        return result

    return authenticated_request


__all__ = [
    "DISCOVERY_PATH",
    "EmulatorRequestError",
    "EmulatorSession",
    "EmulatorTransport",
    "RequestDescriptor",
    "TransportResult",
    "is_loopback_host",
    "make_authenticated_request",
    "normalize_emulator_url",
    "parse_body",
    "rewrite_uri",
]
