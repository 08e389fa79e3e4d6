"""JavaScript (fetch) snippet generator."""

import json

from x_api_explorer.auth.resolver import AuthResult
from x_api_explorer.request.compiler import RequestSpec

from .common import OAUTH1_NOTE, is_oauth1, snippet_headers

_FETCH_CALL = """fetch(url, options)
  .then(res => {
    if (!res.ok) {
      throw new Error(`HTTP error! status: ${res.status}`);
    }
    return res.text();
  })
  .then(data => {
    console.log(data);
  })
  .catch(error => {
    console.error('Fetch error:', error);
  });"""


def _indent(text: str, prefix: str = "  ") -> str:
    first, *rest = text.split("\n")
    return "\n".join([first, *(prefix + line for line in rest)])


def render_javascript(spec: RequestSpec, auth: AuthResult) -> str:
    lines = []
    if is_oauth1(auth):
        lines.append(f"// {OAUTH1_NOTE}")

    lines.append(f"const url = {json.dumps(spec.url)};")
    lines.append("const options = {")
    lines.append(f"  method: {json.dumps(spec.method)},")
    lines.append(f"  headers: {_indent(json.dumps(snippet_headers(spec, auth), indent=2))},")
    if spec.body is not None:
        lines.append(f"  body: JSON.stringify({_indent(json.dumps(spec.body, indent=2))}),")
    lines.append("};")
    lines.append("")
    lines.append(_FETCH_CALL)
    return "\n".join(lines) + "\n"
