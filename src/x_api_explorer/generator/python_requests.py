"""Python (requests) snippet generator."""

import json
from pprint import pformat

from x_api_explorer.auth.resolver import AuthResult
from x_api_explorer.request.compiler import RequestSpec

from .common import OAUTH1_NOTE, is_oauth1, snippet_headers


def render_python(spec: RequestSpec, auth: AuthResult) -> str:
    lines = ["import requests", ""]
    if is_oauth1(auth):
        lines.append(f"# {OAUTH1_NOTE}")

    # json.dumps of str-only values is also a valid Python literal.
    lines.append(f"url = {json.dumps(spec.url)}")
    lines.append(f"headers = {json.dumps(snippet_headers(spec, auth), indent=4)}")

    args = ["url", "headers=headers"]
    if spec.body is not None:
        lines.append(f"payload = {pformat(spec.body, sort_dicts=False)}")
        args.append("json=payload")

    lines.extend([
        "",
        f"response = requests.request({json.dumps(spec.method)}, {', '.join(args)})",
        "",
        "print(response.status_code)",
        "print(response.text)",
    ])
    return "\n".join(lines) + "\n"
