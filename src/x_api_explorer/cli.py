"""CLI entry point for x-api-explorer."""

import asyncio
import json
import logging
from pathlib import Path

import click

from x_api_explorer.auth.profiles import ProfileStore, mask_secret
from x_api_explorer.catalog.builder import Catalog
from x_api_explorer.catalog.loader import load_sections
from x_api_explorer.catalog.sections import default_builder
from x_api_explorer.config import Settings, get_settings
from x_api_explorer.execution.adapter import ExecutionAdapter, Failure
from x_api_explorer.execution.transport import HttpxTransport
from x_api_explorer.generator.snippets import LANGUAGES
from x_api_explorer.params.ordering import display_order
from x_api_explorer.request.routing import DtabSetStore, parse_dtab
from x_api_explorer.session import ExplorerSession


def _load_catalog(settings: Settings, catalog_path: Path | None) -> Catalog:
    builder = default_builder()
    path = catalog_path or settings.catalog_path
    if path:
        builder = builder.with_sections(load_sections(path))
    return builder.build()


def _split_pair(value: str, option: str) -> tuple[str, str]:
    name, sep, rest = value.partition("=")
    if not sep or not name:
        raise click.BadParameter(f"expected NAME=VALUE, got '{value}'", param_hint=option)
    return name, rest


def _request_options(func):
    options = [
        click.argument("endpoint_id"),
        click.option("--app", "app_id", type=int, default=None, help="Application whose credentials are used."),
        click.option("--token", default="", help="Bearer token overriding the application's token."),
        click.option("--path", "path_values", multiple=True, metavar="NAME=VALUE", help="Path parameter value."),
        click.option("--query", "query_values", multiple=True, metavar="NAME=VALUE", help="Query parameter value."),
        click.option("--body", "body_values", multiple=True, metavar="NAME=VALUE", help="Body parameter value."),
        click.option("--raw-body", default="", help="Raw JSON body for endpoints without body parameters."),
        click.option("--expansion", "expansions", multiple=True, help="Expansion to include."),
        click.option("--all-expansions", is_flag=True, help="Include every expansion."),
        click.option("--dtab", "dtabs", multiple=True, metavar="FROM=>TO", help="Dtab-Local override."),
        click.option("--dtab-set", default=None, help="Load a saved Dtab set."),
        click.option("--trace", is_flag=True, help="Request tracing (X-B3-Flags)."),
        click.option("--env", type=click.Choice(["prod", "staging1", "staging2"]), default=None, help="Routing environment."),
        click.option("--catalog", "catalog_path", type=click.Path(exists=True, path_type=Path), default=None, help="Extra catalog file."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_session(settings: Settings, opts: dict) -> ExplorerSession:
    catalog = _load_catalog(settings, opts["catalog_path"])
    try:
        section = catalog.section_of(opts["endpoint_id"])
    except KeyError as e:
        raise click.BadParameter(str(e.args[0]), param_hint="ENDPOINT_ID") from e

    session = ExplorerSession(
        section.endpoints,
        profiles=ProfileStore.from_yaml(settings.profiles_path),
        dtab_store=DtabSetStore(settings.dtab_sets_path),
        adapter=ExecutionAdapter(HttpxTransport()),
        base_url=settings.base_url,
    )
    try:
        session.select_endpoint(opts["endpoint_id"])
        session.select_application(opts["app_id"])
        session.set_override_token(opts["token"])

        for raw in opts["path_values"]:
            session.set_path_value(*_split_pair(raw, "--path"))
        for raw in opts["query_values"]:
            session.set_query_value(*_split_pair(raw, "--query"))
        for raw in opts["body_values"]:
            session.set_body_value(*_split_pair(raw, "--body"))
        session.set_raw_body(opts["raw_body"])

        if opts["all_expansions"]:
            session.select_all_expansions(True)
        for name in opts["expansions"]:
            session.toggle_expansion(name, True)

        if opts["dtab_set"]:
            session.load_dtab_set(opts["dtab_set"])
        if opts["dtabs"]:
            session.directives.dtabs = [parse_dtab(d) for d in opts["dtabs"]]
        session.directives.tracing = opts["trace"]
        if opts["env"]:
            session.directives.environment = opts["env"]
    except ValueError as e:
        raise click.UsageError(str(e)) from e
    return session


@click.group()
@click.option("--log-level", default=None, help="Logging level (default from X_API_EXPLORER_LOG_LEVEL).")
@click.pass_context
def main(ctx: click.Context, log_level: str | None):
    """X API Explorer: build, run and export API requests."""
    settings = get_settings()
    logging.basicConfig(
        level=(log_level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    ctx.obj = settings


@main.command()
@click.option("--surface", default=None, help="Only list endpoints of this surface.")
@click.option("--catalog", "catalog_path", type=click.Path(exists=True, path_type=Path), default=None, help="Extra catalog file.")
@click.pass_obj
def endpoints(settings: Settings, surface: str | None, catalog_path: Path | None):
    """List catalog endpoints."""
    catalog = _load_catalog(settings, catalog_path)
    sections = catalog.sections
    if surface:
        try:
            sections = (catalog.section(surface),)
        except KeyError as e:
            raise click.BadParameter(str(e.args[0]), param_hint="--surface") from e

    for section in sections:
        click.echo(f"{section.label}:")
        for ep in section.endpoints:
            click.echo(f"  {ep.id:<24} {ep.method:<7} {ep.path}  [{ep.auth_type}]")


@main.command()
@click.argument("endpoint_id")
@click.option("--catalog", "catalog_path", type=click.Path(exists=True, path_type=Path), default=None, help="Extra catalog file.")
@click.pass_obj
def describe(settings: Settings, endpoint_id: str, catalog_path: Path | None):
    """Show an endpoint's parameters and expansions."""
    catalog = _load_catalog(settings, catalog_path)
    try:
        ep = catalog.endpoint(endpoint_id)
    except KeyError as e:
        raise click.BadParameter(str(e.args[0]), param_hint="ENDPOINT_ID") from e

    click.echo(f"{ep.method} {ep.path}  [{ep.auth_type}]")
    if ep.summary:
        click.echo(ep.summary)
    for title, params in (("Path", ep.path_params), ("Query", ep.query_params), ("Body", ep.body_params)):
        if not params:
            continue
        click.echo(f"{title} parameters:")
        for p in display_order(params):
            flag = " (required)" if p.required else ""
            click.echo(f"  {p.name}: {p.type}{flag}  {p.description}".rstrip())
    if ep.expansion_options:
        click.echo("Expansions:")
        for option in sorted(ep.expansion_options, key=lambda o: o.name):
            click.echo(f"  {option.name}  {option.description}".rstrip())


@main.command()
@click.option("--reveal", is_flag=True, help="Show secrets instead of masking them.")
@click.pass_obj
def apps(settings: Settings, reveal: bool):
    """List projects, applications and their credentials."""
    store = ProfileStore.from_yaml(settings.profiles_path)
    if not store.projects:
        click.echo(f"No projects found in {settings.profiles_path}")
        return
    for project in store.projects:
        click.echo(f"{project.name} (usage {project.usage}/{project.cap})")
        for app in project.apps:
            creds = app.credentials
            click.echo(f"  [{app.id}] {app.name} ({app.environment})")
            click.echo(f"    bearer token: {mask_secret(creds.bearer_token, reveal) or '-'}")
            if creds.oauth1:
                for field, value in creds.oauth1.model_dump().items():
                    click.echo(f"    {field}: {mask_secret(value, reveal) or '-'}")


@main.command()
@_request_options
@click.option("--lang", type=click.Choice([*LANGUAGES, "all"]), default="all", help="Snippet language.")
@click.pass_obj
def show(settings: Settings, lang: str, **opts):
    """Preview the compiled request and its code snippets."""
    view = _build_session(settings, opts).snapshot()

    if view.request:
        click.echo(f"{view.request.method} {view.request.url}")
        for name, value in view.request.headers.items():
            click.echo(f"{name}: {value}")
        if view.request.body is not None:
            click.echo(json.dumps(view.request.body, indent=2))
    for problem in view.problems:
        click.echo(f"Error: {problem}")

    if view.gate.allowed:
        click.echo("Run: ready")
    else:
        click.echo("Run: blocked")
        for reason in view.gate.reasons:
            click.echo(f"  - {reason}")

    for language, snippet in view.snippets.items():
        if lang in ("all", language):
            click.echo(f"\n--- {language} ---")
            click.echo(snippet.rstrip("\n"))


@main.command()
@_request_options
@click.pass_context
def run(ctx: click.Context, **opts):
    """Execute the request and print the response."""
    session = _build_session(ctx.obj, opts)
    click.echo(f"Running {session.endpoint.method} {session.endpoint.path}...")
    outcome = asyncio.run(session.run())

    if outcome is None:
        raise click.ClickException("The request was superseded before it completed")
    if isinstance(outcome, Failure):
        click.echo(f"Error ({outcome.status}): {outcome.message}", err=True)
        if outcome.body:
            click.echo(outcome.body)
        ctx.exit(1)
    click.echo(f"Status: {outcome.status}")
    click.echo(outcome.body)


@main.group()
def dtabs():
    """Manage saved Dtab sets."""


@dtabs.command("list")
@click.pass_obj
def dtabs_list(settings: Settings):
    """List saved Dtab sets."""
    sets = DtabSetStore(settings.dtab_sets_path).get()
    if not sets:
        click.echo("No saved Dtab sets.")
    for name, pairs in sets.items():
        click.echo(f"{name}: {';'.join(p.render() for p in pairs)}")


def _dtab_session(settings: Settings) -> ExplorerSession:
    catalog = _load_catalog(settings, None)
    return ExplorerSession(catalog.endpoints(), dtab_store=DtabSetStore(settings.dtab_sets_path))


@dtabs.command("save")
@click.argument("name")
@click.option("--dtab", "pairs", multiple=True, required=True, metavar="FROM=>TO", help="Dtab override to save.")
@click.pass_obj
def dtabs_save(settings: Settings, name: str, pairs: tuple[str, ...]):
    """Save a named Dtab set."""
    session = _dtab_session(settings)
    session.directives.dtabs = [parse_dtab(p) for p in pairs]
    try:
        session.save_dtab_set(name)
    except ValueError as e:
        raise click.UsageError(str(e)) from e
    click.echo(f"Saved Dtab set '{name.strip()}'")


@dtabs.command("delete")
@click.argument("name")
@click.pass_obj
def dtabs_delete(settings: Settings, name: str):
    """Delete a named Dtab set."""
    try:
        _dtab_session(settings).delete_dtab_set(name)
    except ValueError as e:
        raise click.UsageError(str(e)) from e
    click.echo(f"Deleted Dtab set '{name}'")
