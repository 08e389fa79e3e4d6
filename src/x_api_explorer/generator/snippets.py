"""Renders one compiled request in every supported language."""

from x_api_explorer.auth.resolver import AuthResult
from x_api_explorer.request.compiler import RequestSpec

from .curl import render_curl
from .javascript import render_javascript
from .python_requests import render_python

LANGUAGES = ("curl", "python", "javascript")

RENDERERS = {
    "curl": render_curl,
    "python": render_python,
    "javascript": render_javascript,
}


def render_snippets(spec: RequestSpec, auth: AuthResult) -> dict[str, str]:
    """Return ``{language: snippet}`` for the given request."""
    return {lang: RENDERERS[lang](spec, auth) for lang in LANGUAGES}
