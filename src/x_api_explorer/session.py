"""Explorer session: the form state behind one API surface.

A session owns the selected endpoint, the selected application, the collected
parameter values and the routing directives. Everything shown to the operator
(request preview, code snippets, run gate) is derived from that state on
demand; only the outcome of the last run is stored.
"""

import logging
from collections.abc import Sequence

from pydantic import BaseModel

from x_api_explorer.auth.profiles import CredentialBundle, Environment, ProfileStore
from x_api_explorer.auth.resolver import AuthResult, resolve_auth
from x_api_explorer.catalog.base import Endpoint
from x_api_explorer.execution.adapter import ExecutionAdapter, Failure, Outcome, Success
from x_api_explorer.generator.snippets import render_snippets
from x_api_explorer.params.body import BodyParamCollector
from x_api_explorer.params.expansions import ExpansionCollector
from x_api_explorer.params.path import PathParamCollector
from x_api_explorer.params.query import QueryParamCollector
from x_api_explorer.request.compiler import DEFAULT_BASE_URL, RequestBodyError, RequestSpec, compile_request
from x_api_explorer.request.gate import RUN_IN_PROGRESS, RunGate, evaluate_run_gate
from x_api_explorer.request.routing import DtabPair, DtabSetStore, RoutingDirectives

logger = logging.getLogger("x_api_explorer.session")


class SessionView(BaseModel):
    """Everything a presentation layer needs to render the current form."""

    endpoint: Endpoint
    request: RequestSpec | None = None
    snippets: dict[str, str] = {}
    gate: RunGate
    outcome: Outcome | None = None
    loading: bool = False
    problems: list[str] = []


class ExplorerSession:
    def __init__(
        self,
        endpoints: Sequence[Endpoint],
        *,
        profiles: ProfileStore | None = None,
        dtab_store: DtabSetStore | None = None,
        adapter: ExecutionAdapter | None = None,
        base_url: str = DEFAULT_BASE_URL,
    ):
        if not endpoints:
            raise ValueError("A session needs at least one endpoint")
        self.endpoints = tuple(endpoints)
        self.profiles = profiles or ProfileStore()
        self.dtab_store = dtab_store
        self.adapter = adapter
        self.base_url = base_url

        self.application_id: int | None = None
        self.override_token = ""
        self.outcome: Success | Failure | None = None
        self.loading = False
        self._generation = 0
        self.select_endpoint(self.endpoints[0].id)

    # -- selection ------------------------------------------------------------

    def select_endpoint(self, endpoint_id: str) -> None:
        """Select an endpoint and reset all per-endpoint state."""
        for endpoint in self.endpoints:
            if endpoint.id == endpoint_id:
                break
        else:
            raise ValueError(f"Unknown endpoint: {endpoint_id}")

        self.endpoint = endpoint
        self.path = PathParamCollector(endpoint.path_params)
        self.query = QueryParamCollector(endpoint.query_params)
        self.body = BodyParamCollector(endpoint.body_params)
        self.expansions = ExpansionCollector(endpoint.expansion_options)
        self.directives = RoutingDirectives(environment=self._app_environment())
        self._supersede()

    def select_application(self, app_id: int | None) -> None:
        if app_id is not None:
            try:
                self.profiles.application(app_id)
            except KeyError as e:
                raise ValueError(f"Unknown application: {app_id}") from e
        self.application_id = app_id
        self.directives.environment = self._app_environment()
        self._supersede()

    def set_override_token(self, token: str) -> None:
        self.override_token = token

    def _app_environment(self) -> Environment:
        if self.application_id is None:
            return "prod"
        return self.profiles.environment(self.application_id)

    def _supersede(self) -> None:
        # Results of runs started before this point belong to a previous form.
        self._generation += 1
        self.outcome = None
        self.loading = False

    # -- parameter edits ------------------------------------------------------

    def set_path_value(self, name: str, value: str) -> None:
        self.path.set(name, value)

    def toggle_query(self, name: str, active: bool) -> None:
        self.query.toggle(name, active)

    def set_query_value(self, name: str, value: str) -> None:
        self.query.set(name, value)

    def set_body_value(self, name: str, value: str | bool) -> None:
        self.body.set(name, value)

    def set_raw_body(self, text: str) -> None:
        self.body.raw_body = text

    def toggle_expansion(self, name: str, selected: bool) -> None:
        self.expansions.toggle(name, selected)

    def select_all_expansions(self, selected: bool) -> None:
        self.expansions.set_all(selected)

    # -- saved Dtab sets ------------------------------------------------------

    def saved_dtab_sets(self) -> dict[str, list[DtabPair]]:
        return self.dtab_store.get() if self.dtab_store else {}

    def save_dtab_set(self, name: str) -> None:
        name = name.strip()
        if not name:
            raise ValueError("Enter a name to save the Dtab set")
        if self.dtab_store is None:
            raise ValueError("No Dtab set store configured")
        sets = self.dtab_store.get()
        sets[name] = [d for d in self.directives.dtabs if not d.is_blank]
        self.dtab_store.set(sets)

    def load_dtab_set(self, name: str) -> None:
        sets = self.saved_dtab_sets()
        if name not in sets:
            raise ValueError(f"Unknown Dtab set: {name}")
        self.directives.dtabs = [d.model_copy() for d in sets[name]] or [DtabPair()]

    def delete_dtab_set(self, name: str) -> None:
        sets = self.saved_dtab_sets()
        if name not in sets:
            raise ValueError(f"Unknown Dtab set: {name}")
        del sets[name]
        self.dtab_store.set(sets)

    # -- derived state --------------------------------------------------------

    def credentials(self) -> CredentialBundle | None:
        if self.application_id is None:
            return None
        return self.profiles.credentials(self.application_id)

    def auth(self) -> AuthResult:
        return resolve_auth(self.endpoint.auth_type, self.credentials(), self.override_token)

    def compile(self, auth: AuthResult | None = None) -> RequestSpec:
        return compile_request(
            self.endpoint,
            self.path.values(),
            self.query.values(),
            self.body.values(),
            self.expansions.value(),
            auth if auth is not None else self.auth(),
            self.directives,
            raw_body=self.body.raw_body,
            base_url=self.base_url,
        )

    def gate(self, auth: AuthResult | None = None) -> RunGate:
        return evaluate_run_gate(
            self.endpoint,
            has_application=self.application_id is not None,
            override_token=self.override_token,
            auth=auth if auth is not None else self.auth(),
            path_values=self.path.values(),
            query_values=self.query.values(),
            body_values=self.body.values(),
            raw_body=self.body.raw_body,
            loading=self.loading,
        )

    def snapshot(self) -> SessionView:
        auth = self.auth()
        request = None
        snippets: dict[str, str] = {}
        problems: list[str] = []
        try:
            request = self.compile(auth)
        except RequestBodyError as e:
            problems.append(str(e))
        else:
            snippets = render_snippets(request, auth)

        return SessionView(
            endpoint=self.endpoint,
            request=request,
            snippets=snippets,
            gate=self.gate(auth),
            outcome=self.outcome,
            loading=self.loading,
            problems=problems,
        )

    # -- execution ------------------------------------------------------------

    async def run(self) -> Success | Failure | None:
        """Execute the current request.

        Returns the outcome, or ``None`` when the endpoint or application was
        switched while the request was in flight and the result was dropped.
        """
        if self.loading:
            return Failure(status=0, message=RUN_IN_PROGRESS)

        auth = self.auth()
        gate = self.gate(auth)
        if not gate.allowed:
            self.outcome = Failure(status=0, message="; ".join(gate.reasons))
            return self.outcome
        if self.adapter is None:
            raise ValueError("No execution adapter configured")

        spec = self.compile(auth)
        generation = self._generation
        self.loading = True
        self.outcome = None
        try:
            outcome = await self.adapter.execute(spec, auth)
        finally:
            if generation == self._generation:
                self.loading = False

        if generation != self._generation:
            logger.debug("dropping stale outcome url=%s status=%s", spec.url, outcome.status)
            return None
        self.outcome = outcome
        return outcome
