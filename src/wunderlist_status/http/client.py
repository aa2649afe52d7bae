"""Async HTTP client for the Wunderlist REST API."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

import httpx

logger = logging.getLogger(__name__)

ACCESS_TOKEN_HEADER = "X-Access-Token"
CLIENT_ID_HEADER = "X-Client-ID"
INVALID_REQUEST_FIELD = "invalid_request"


@dataclass(slots=True)
class RemoteError(Exception):
    """Base error for one failed service call."""

    message: str
    code: str = "remote_error"

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class TransportError(RemoteError):
    """Connection or socket level failure."""

    code: str = "transport_error"


@dataclass(slots=True)
class RequestTimeoutError(RemoteError):
    """No response within the transport timeout."""

    code: str = "timeout"


@dataclass(slots=True)
class InvalidRequestError(RemoteError):
    """Service rejected the request, usually because of missing or bad credentials."""

    code: str = "invalid_request"
    payload: dict[str, object] = field(default_factory=dict)


@dataclass(slots=True)
class UnexpectedPayloadError(RemoteError):
    """Response body is not the JSON shape the caller expects."""

    code: str = "unexpected_payload"


@dataclass(frozen=True, slots=True)
class ApiConfig:
    """Immutable request configuration shared by every call of one run."""

    host: str
    access_token: str
    client_id: str

    @property
    def headers(self) -> Mapping[str, str]:
        return MappingProxyType(
            {
                ACCESS_TOKEN_HEADER: self.access_token,
                CLIENT_ID_HEADER: self.client_id,
            },
        )


def build_url(config: ApiConfig, path: str) -> str:
    """Return the absolute HTTPS URL for an API path."""

    return f"https://{config.host}/{path.lstrip('/')}"


def _credential_headers(config: ApiConfig) -> dict[str, str]:
    """Return the auth headers. Non-ASCII values raise `InvalidRequestError`."""

    headers = dict(config.headers)
    for name, value in headers.items():
        try:
            value.encode("ascii")
        except UnicodeEncodeError as exc:
            logger.warning("%s contains non-ASCII characters", name)
            raise InvalidRequestError(f"{name} must contain only ASCII characters") from exc
    return headers


class RemoteClient:
    """Authenticated GET-only client returning decoded JSON payloads."""

    def __init__(
        self,
        config: ApiConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._client = httpx.AsyncClient(headers=_credential_headers(config), transport=transport)

    @property
    def config(self) -> ApiConfig:
        return self._config

    async def get(self, path: str, params: Mapping[str, object] | None = None) -> object:
        """Issue one GET request and return the decoded JSON body."""

        url = build_url(self._config, path)
        logger.debug("GET %s params=%s", url, dict(params or {}))
        try:
            response = await self._client.get(url, params=dict(params or {}))
        except httpx.TimeoutException as exc:
            logger.warning("Timeout fetching %s", url)
            raise RequestTimeoutError(f"Timeout fetching {url}") from exc
        except httpx.HTTPError as exc:
            logger.warning("HTTP error fetching %s: %s", url, exc)
            raise TransportError(f"HTTP error fetching {url}: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise UnexpectedPayloadError(
                f"Non-JSON response from {url} (HTTP {response.status_code})",
            ) from exc

        if isinstance(payload, dict) and payload.get(INVALID_REQUEST_FIELD):
            logger.warning("Service rejected request to %s", url)
            raise InvalidRequestError(
                f"Invalid request to {url}",
                payload=payload,
            )
        if not response.is_success:
            raise UnexpectedPayloadError(f"HTTP {response.status_code} from {url}")
        return payload

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> RemoteClient:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()
