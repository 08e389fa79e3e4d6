"""cURL snippet generator."""

import json

from x_api_explorer.auth.resolver import AuthResult
from x_api_explorer.request.compiler import RequestSpec

from .common import OAUTH1_NOTE, is_oauth1, snippet_headers


def _double_quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$").replace("`", "\\`")
    return f'"{escaped}"'


def _single_quote(value: str) -> str:
    return "'" + value.replace("'", "'\\''") + "'"


def render_curl(spec: RequestSpec, auth: AuthResult) -> str:
    if spec.method == "GET":
        parts = [f"curl {_double_quote(spec.url)}"]
    else:
        parts = [f"curl -X {spec.method} {_double_quote(spec.url)}"]

    for name, value in snippet_headers(spec, auth).items():
        parts.append(f"-H {_double_quote(f'{name}: {value}')}")

    if spec.body is not None:
        parts.append(f"-d {_single_quote(json.dumps(spec.body))}")

    command = " \\\n  ".join(parts)
    if is_oauth1(auth):
        return f"# {OAUTH1_NOTE}\n{command}"
    return command
