"""Run gate: decides from the current form state alone whether a run may start."""

from pydantic import BaseModel

from x_api_explorer.auth.resolver import AuthError, AuthResult
from x_api_explorer.catalog.base import Endpoint

from .compiler import check_raw_body

NO_CREDENTIALS = "Select an application or provide an override token"
RUN_IN_PROGRESS = "A request is already running"


class RunGate(BaseModel):
    allowed: bool
    reasons: list[str] = []


def evaluate_run_gate(
    endpoint: Endpoint,
    *,
    has_application: bool,
    override_token: str,
    auth: AuthResult,
    path_values: dict[str, str],
    query_values: dict[str, str],
    body_values: dict[str, str],
    raw_body: str = "",
    loading: bool = False,
) -> RunGate:
    reasons: list[str] = []

    if loading:
        reasons.append(RUN_IN_PROGRESS)
    if not has_application and not override_token.strip():
        reasons.append(NO_CREDENTIALS)
    if isinstance(auth, AuthError):
        reasons.append(auth.error)

    for param in endpoint.path_params:
        if not path_values.get(param.name):
            reasons.append(f"Missing path parameter: {param.name}")
    for param in endpoint.query_params:
        if param.required and not query_values.get(param.name):
            reasons.append(f"Missing required query parameter: {param.name}")
    for param in endpoint.body_params:
        if param.required and not body_values.get(param.name):
            reasons.append(f"Missing required body parameter: {param.name}")

    body_error = check_raw_body(endpoint, raw_body)
    if body_error:
        reasons.append(body_error)

    return RunGate(allowed=not reasons, reasons=reasons)
