"""Helpers shared by the snippet generators."""

from x_api_explorer.auth.resolver import AuthResult
from x_api_explorer.request.compiler import RequestSpec

PLACEHOLDER_TOKEN = "YOUR_BEARER_TOKEN"
OAUTH1_NOTE = (
    "OAuth 1.0a endpoint: requests are signed when they are sent. "
    f"Sign this request with your app keys or replace {PLACEHOLDER_TOKEN}."
)


def is_oauth1(auth: AuthResult) -> bool:
    return auth.auth_type == "oauth1a"


def snippet_headers(spec: RequestSpec, auth: AuthResult) -> dict[str, str]:
    """The request headers, plus a placeholder Authorization for OAuth 1.0a."""
    if is_oauth1(auth) and "Authorization" not in spec.headers:
        return {"Authorization": f"Bearer {PLACEHOLDER_TOKEN}", **spec.headers}
    return dict(spec.headers)
