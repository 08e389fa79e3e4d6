"""Execution adapter: runs a RequestSpec and normalizes the result into an Outcome.

Nothing raised by the transport escapes this module; every failure becomes a
``Failure`` the presentation layer can display.
"""

import json
import logging
from collections.abc import Mapping
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from x_api_explorer.auth.resolver import AuthResult, BearerAuth, OAuth1Auth
from x_api_explorer.request.compiler import RequestSpec

from .transport import Transport, TransportFault, TransportRequest

logger = logging.getLogger("x_api_explorer.execution")

UNEXPECTED_ERROR = "An unexpected error occurred."


class Success(BaseModel):
    kind: Literal["success"] = "success"
    status: int
    headers: dict[str, str] = {}
    body: str = ""


class Failure(BaseModel):
    kind: Literal["failure"] = "failure"
    status: int = 0
    message: str
    body: str | None = None
    headers: dict[str, str] | None = None


Outcome = Annotated[Success | Failure, Field(discriminator="kind")]


def pretty_body(text: str | None) -> str | None:
    """Pretty-print JSON text; anything else is returned verbatim."""
    if not text:
        return text
    try:
        return json.dumps(json.loads(text), indent=2, ensure_ascii=False)
    except ValueError:
        return text


def is_success_status(status: int) -> bool:
    return 200 <= status <= 299


def _fault_body(body: object) -> str | None:
    if body is None:
        return None
    return pretty_body(body if isinstance(body, str) else json.dumps(body, default=str))


def normalize_fault(error: object) -> Failure:
    """Map any fault shape from the transport boundary onto ``Failure``.

    Whatever status, message, body and headers the fault carries are kept;
    a fault carrying neither a status nor a message becomes
    ``Failure(status=0, message=UNEXPECTED_ERROR)``.
    """
    if isinstance(error, str):
        return Failure(status=0, message=error or UNEXPECTED_ERROR)

    if isinstance(error, Mapping):
        status = error.get("status")
        message = error.get("message")
        body = error.get("body")
        headers = error.get("headers")
    else:
        status = getattr(error, "status", None)
        message = getattr(error, "message", None)
        body = getattr(error, "body", None)
        headers = getattr(error, "headers", None)
        if not message and isinstance(error, BaseException):
            message = str(error)

    if not isinstance(status, int) or isinstance(status, bool):
        status = 0
    return Failure(
        status=status,
        message=str(message or UNEXPECTED_ERROR),
        body=_fault_body(body),
        headers=dict(headers) if isinstance(headers, Mapping) else None,
    )


def transport_request(spec: RequestSpec, auth: AuthResult) -> TransportRequest:
    request = TransportRequest(
        method=spec.method,
        url=spec.url,
        headers=spec.headers,
        body=spec.body,
        auth_type=auth.auth_type,
    )
    if isinstance(auth, BearerAuth):
        request.bearer_token = auth.token
    elif isinstance(auth, OAuth1Auth):
        request.oauth1_keys = auth.credentials
    return request


class ExecutionAdapter:
    """Sends compiled requests through a transport."""

    def __init__(self, transport: Transport):
        self.transport = transport

    async def execute(self, spec: RequestSpec, auth: AuthResult) -> Success | Failure:
        try:
            response = await self.transport.execute(transport_request(spec, auth))
        except Exception as e:
            logger.warning("request_failed method=%s url=%s error=%r", spec.method, spec.url, e)
            return normalize_fault(e)

        body = pretty_body(response.body) or ""
        if not is_success_status(response.status):
            return Failure(
                status=response.status,
                message=f"API request failed with status {response.status}",
                body=body,
                headers=response.headers,
            )
        return Success(status=response.status, headers=response.headers, body=body)
