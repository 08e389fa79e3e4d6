"""HTTP transport boundary.

The transport receives the compiled request plus auth metadata and owns OAuth
1.0a signing, so signing secrets never end up in a stored request or in a
generated snippet.
"""

import json
import logging
from typing import Any, Protocol

import httpx
from oauthlib.oauth1 import SIGNATURE_HMAC, Client
from pydantic import BaseModel

from x_api_explorer.auth.resolver import OAuth1Credentials
from x_api_explorer.catalog.base import AuthType

logger = logging.getLogger("x_api_explorer.transport")


class TransportRequest(BaseModel):
    method: str
    url: str
    headers: dict[str, str] = {}
    body: Any = None
    auth_type: AuthType = "bearer"
    bearer_token: str | None = None
    oauth1_keys: OAuth1Credentials | None = None


class TransportResponse(BaseModel):
    status: int
    headers: dict[str, str] = {}
    body: str = ""


class TransportFault(Exception):
    """A failure crossing the transport boundary; every field is optional."""

    def __init__(
        self,
        message: str | None = None,
        *,
        status: int | None = None,
        body: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.status = status
        self.message = message
        self.body = body
        self.headers = headers
        super().__init__(message or "")


class Transport(Protocol):
    async def execute(self, request: TransportRequest) -> TransportResponse: ...


def sign_oauth1(request: TransportRequest) -> dict[str, str]:
    """Return the request headers with an OAuth 1.0a Authorization header added."""
    keys = request.oauth1_keys
    if keys is None:
        raise TransportFault("Missing OAuth 1.0a keys", status=0)
    client = Client(
        keys.api_key,
        client_secret=keys.api_secret,
        resource_owner_key=keys.access_token,
        resource_owner_secret=keys.access_secret,
        signature_method=SIGNATURE_HMAC,
    )
    # JSON bodies are not part of the OAuth 1.0a signature base string.
    _, headers, _ = client.sign(request.url, http_method=request.method, headers=dict(request.headers))
    return headers


class HttpxTransport:
    """Sends requests with ``httpx.AsyncClient``.

    Any HTTP status is returned as a response; classification into success or
    failure happens in the execution adapter.
    """

    def __init__(
        self,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ) -> None:
        self._transport = transport
        self._timeout = timeout

    async def execute(self, request: TransportRequest) -> TransportResponse:
        headers = dict(request.headers)
        if request.auth_type == "oauth1a":
            headers = sign_oauth1(request)

        content = None
        if request.body is not None:
            content = json.dumps(request.body).encode("utf-8")

        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self._timeout) as client:
                response = await client.request(request.method, request.url, headers=headers, content=content)
        except httpx.HTTPError as e:
            logger.warning("transport_error method=%s url=%s error=%s", request.method, request.url, e)
            raise TransportFault(f"Request failed: {e}", status=0) from e

        return TransportResponse(
            status=response.status_code,
            headers=dict(response.headers),
            body=response.text,
        )
