"""Request compiler.

Combines an endpoint, the collected parameter values, the resolved auth and
the routing directives into one ``RequestSpec``. The same spec feeds the
execution adapter and every code generator, so the request that runs and the
snippets shown to the operator cannot drift apart.
"""

import json
import logging
import math
import re
from typing import Any
from urllib.parse import quote

from pydantic import BaseModel

from x_api_explorer.auth.resolver import AuthResult, BearerAuth
from x_api_explorer.catalog.base import PATH_PLACEHOLDER, Endpoint, ParamSchema

from .routing import RoutingDirectives, routing_headers

logger = logging.getLogger("x_api_explorer.compiler")

DEFAULT_BASE_URL = "https://api.twitter.com"
INVALID_BODY = "Invalid JSON in request body"

# Characters encodeURIComponent leaves alone, on top of quote()'s defaults.
_URI_COMPONENT_SAFE = "!~*'()"

# Plain ASCII number forms only; int() and float() also take "1_000" and "inf".
_INTEGER = re.compile(r"-?\d+", re.ASCII)
_DECIMAL = re.compile(r"-?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


class RequestBodyError(ValueError):
    """Raised when the raw JSON body cannot be parsed."""


class RequestSpec(BaseModel):
    method: str
    url: str
    headers: dict[str, str] = {}
    body: Any = None


def missing_placeholder(name: str) -> str:
    return f"[{name}_missing]"


def encode_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_url(
    endpoint: Endpoint,
    path_values: dict[str, str],
    query_values: dict[str, str],
    expansions: str = "",
    base_url: str = DEFAULT_BASE_URL,
) -> str:
    def substitute(match: re.Match) -> str:
        name = match.group(1)
        value = path_values.get(name)
        return encode_component(value) if value else missing_placeholder(name)

    path = PATH_PLACEHOLDER.sub(substitute, endpoint.path)

    pairs = []
    for param in endpoint.query_params:
        if param.name not in query_values:
            continue
        value = query_values[param.name]
        if value:
            pairs.append(f"{encode_component(param.name)}={encode_component(value)}")
        elif param.required:
            pairs.append(f"{encode_component(param.name)}={missing_placeholder(param.name)}")
    if expansions:
        pairs.append(f"expansions={encode_component(expansions)}")

    query = "&".join(pairs)
    return f"{base_url.rstrip('/')}{path}{'?' + query if query else ''}"


def _coerce(param: ParamSchema, value: str) -> Any:
    match param.type:
        case "string":
            return value
        case "boolean":
            return value.strip().lower() == "true"
        case "number":
            text = value.strip()
            if _INTEGER.fullmatch(text):
                return int(text)
            if _DECIMAL.fullmatch(text):
                number = float(text)
                if math.isfinite(number):
                    return number
            logger.warning("body param %s is not a number, sending as string", param.name)
            return value
        case "object" | "array":
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                logger.warning("body param %s is not valid JSON, sending as string", param.name)
                return value
    raise ValueError(f"Unsupported parameter type: {param.type}")


def check_raw_body(endpoint: Endpoint, raw_body: str) -> str | None:
    """Return the blocking condition for an unparseable raw body, if any."""
    if not endpoint.accepts_body or endpoint.body_params or not raw_body.strip():
        return None
    try:
        json.loads(raw_body)
    except json.JSONDecodeError:
        return INVALID_BODY
    return None


def build_body(endpoint: Endpoint, body_values: dict[str, str], raw_body: str = "") -> Any:
    """Build the JSON body, or ``None`` when the request carries none."""
    if not endpoint.accepts_body:
        return None

    if not endpoint.body_params:
        if not raw_body.strip():
            return None
        try:
            return json.loads(raw_body)
        except json.JSONDecodeError as e:
            raise RequestBodyError(f"{INVALID_BODY}: {e.msg} (line {e.lineno})") from e

    body: dict[str, Any] = {}
    for param in endpoint.body_params:
        value = body_values.get(param.name, "")
        if value == "":
            if param.required:
                body[param.name] = missing_placeholder(param.name)
            continue
        body[param.name] = _coerce(param, value)
    return body


def auth_headers(auth: AuthResult) -> dict[str, str]:
    # OAuth 1.0a is signed by the transport just before sending.
    if isinstance(auth, BearerAuth):
        return {"Authorization": f"Bearer {auth.token}"}
    if auth.auth_type == "bearer":
        return {"Authorization": f"Bearer {missing_placeholder('bearer_token')}"}
    return {}


def compile_request(
    endpoint: Endpoint,
    path_values: dict[str, str],
    query_values: dict[str, str],
    body_values: dict[str, str],
    expansions: str,
    auth: AuthResult,
    directives: RoutingDirectives,
    *,
    raw_body: str = "",
    base_url: str = DEFAULT_BASE_URL,
) -> RequestSpec:
    """Compile the current form state into a RequestSpec.

    Raises RequestBodyError when a raw JSON body is present but malformed.
    """
    url = build_url(endpoint, path_values, query_values, expansions, base_url)
    body = build_body(endpoint, body_values, raw_body)

    headers = auth_headers(auth)
    if body is not None:
        headers["Content-Type"] = "application/json"
    headers.update(routing_headers(directives))

    return RequestSpec(method=endpoint.method, url=url, headers=headers, body=body)
