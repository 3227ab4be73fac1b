"""Command-line interface for a Discovery service instance."""
from __future__ import annotations

import json
import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import typer

try:  # pragma: no cover - exercised in runtime environments
    from rich import box
    from rich.console import Console
    from rich.table import Table
except ImportError as exc:  # pragma: no cover - optional dependency guard
    raise RuntimeError(
        "The CLI requires Rich for table rendering. Install it with "
        "'pip install discovery-client' to enable this command."
    ) from exc

from . import DiscoveryClient
from .auth import ApiKeyAuth, AuthStrategy, BasicAuth, BearerTokenAuth
from .cli_schema import CLI_TABLE_VIEWS, TableView
from .config import DEFAULT_SERVICE_URL, DEFAULT_VERSION
from .exceptions import DecodeError, DiscoveryError, TransportError, ValidationError
from .http import DetailedResponse

app = typer.Typer(help="Discovery cognitive-search CLI.", no_args_is_help=True)

environments_app = typer.Typer(help="Environment operations.")
collections_app = typer.Typer(help="Collection operations.")
documents_app = typer.Typer(help="Document ingestion operations.")
queries_app = typer.Typer(help="Query operations.")
metrics_app = typer.Typer(help="Usage metrics.")
app.add_typer(environments_app, name="environments")
app.add_typer(collections_app, name="collections")
app.add_typer(documents_app, name="documents")
app.add_typer(queries_app, name="query")
app.add_typer(metrics_app, name="metrics")


def _build_client(
    url: str,
    api_version: str,
    auth: str,
    apikey: str | None,
    username: str | None,
    password: str | None,
    token: str | None,
    verify_ssl: bool,
    cert_path: Path | None,
    timeout: float,
) -> DiscoveryClient:
    auth = auth.lower()
    if auth not in {"apikey", "basic", "bearer"}:
        raise typer.BadParameter("--auth must be one of 'apikey', 'basic' or 'bearer'.")

    strategy: AuthStrategy
    try:
        if auth == "bearer":
            if not token:
                raise typer.BadParameter("--token is required when --auth bearer is selected.")
            strategy = BearerTokenAuth(token=token)
        elif auth == "basic":
            if not username or not password:
                raise typer.BadParameter("--username and --password are required for basic auth.")
            strategy = BasicAuth(username=username, password=password)
        else:
            if not apikey:
                raise typer.BadParameter("--apikey is required when --auth apikey is selected.")
            strategy = ApiKeyAuth(api_key=apikey)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    verify_target: bool | str
    if cert_path:
        expanded_cert = cert_path.expanduser()
        if not expanded_cert.exists():
            raise typer.BadParameter("Certificate file not found for --cert option.")
        if not verify_ssl:
            raise typer.BadParameter("Cannot combine --cert with --no-verify.")
        verify_target = str(expanded_cert)
    else:
        verify_target = verify_ssl

    try:
        return DiscoveryClient(
            base_url=url,
            version=api_version,
            auth_strategy=strategy,
            verify_ssl=verify_target,
            timeout=timeout,
        )
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, default=str))


console = Console(force_terminal=False, color_system=None)


def _render_rich_table(view: TableView, rows: Sequence[Mapping[str, Any]]) -> None:
    table = Table(
        title=view.title,
        box=box.SIMPLE,
        show_lines=False,
        header_style="bold cyan",
    )
    for column in view.columns:
        table.add_column(column.header, justify=column.justify)
    ordered_rows = list(rows)
    if view.sort_key:
        ordered_rows.sort(key=view.sort_key)
    for row in ordered_rows:
        table.add_row(*(column.render(row) for column in view.columns))
    console.print(table)


def _present_output(payload: Any, *, view_id: str | None, json_output: bool) -> None:
    if json_output or view_id is None:
        _echo_json(payload)
        return
    view = CLI_TABLE_VIEWS.get(view_id)
    if not view:
        _echo_json(payload)
        return
    items = payload
    if view.rows_key and isinstance(payload, Mapping):
        items = payload.get(view.rows_key)
    if not isinstance(items, Sequence) or isinstance(items, (str, bytes)):
        _echo_json(payload)
        return
    rows = [item for item in items if isinstance(item, Mapping)]
    if not rows:
        _echo_json(payload)
        return
    _render_rich_table(view, rows)


def _payload(response: DetailedResponse) -> Any:
    """Return the plain JSON view of a successful response, exiting on failure."""

    if not response.ok:
        message = f"Request failed (status {response.status_code})"
        if response.result:
            details = response.result
            if not isinstance(details, str):
                details = json.dumps(details)
            message += f"\nDetails: {details}"
        typer.secho(message, err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)
    return response.to_dict()["result"]


def _handle_client_error(exc: DiscoveryError) -> None:
    if isinstance(exc, TransportError):
        label = "Transport error"
    elif isinstance(exc, DecodeError):
        label = f"Unreadable response (status {exc.status_code})"
    elif isinstance(exc, ValidationError):
        label = "Invalid arguments"
    else:
        label = "Request failed"
    message = f"{label}: {exc}"
    if exc.details and not isinstance(exc, ValidationError):
        message += f"\nDetails: {exc.details}"
    typer.secho(message, err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1)


def _metric_rows(payload: Any) -> list[Mapping[str, Any]]:
    rows: list[Mapping[str, Any]] = []
    if not isinstance(payload, Mapping):
        return rows
    for aggregation in payload.get("aggregations") or []:
        if isinstance(aggregation, Mapping):
            rows.extend(r for r in aggregation.get("results") or [] if isinstance(r, Mapping))
    return rows


def _shared_options() -> dict[str, Any]:  # pragma: no cover - helper indirection
    # Respect DISCOVERY_VERIFY_SSL when present (1/0, true/false, yes/no).
    env_verify = os.getenv("DISCOVERY_VERIFY_SSL")
    if env_verify is None:
        default_verify = True
    else:
        default_verify = env_verify.strip().lower() not in {"0", "false", "no", "off"}

    return {
        "url": typer.Option(
            DEFAULT_SERVICE_URL,
            "--url",
            envvar="DISCOVERY_URL",
            help="Discovery service URL.",
        ),
        "api_version": typer.Option(
            DEFAULT_VERSION,
            "--api-version",
            envvar="DISCOVERY_VERSION",
            help="API version date (YYYY-MM-DD).",
            show_default=True,
        ),
        "auth": typer.Option(
            "apikey",
            "--auth",
            "-a",
            case_sensitive=False,
            help="Authentication strategy to use (apikey, basic or bearer).",
        ),
        "apikey": typer.Option(
            None,
            "--apikey",
            envvar="DISCOVERY_APIKEY",
            help="Service API key for --auth=apikey.",
        ),
        "username": typer.Option(
            None,
            "--username",
            "-u",
            envvar="DISCOVERY_USERNAME",
            help="Service username for basic auth.",
        ),
        "password": typer.Option(
            None,
            "--password",
            "-p",
            envvar="DISCOVERY_PASSWORD",
            help="Service password for basic auth.",
            hide_input=True,
        ),
        "token": typer.Option(
            None,
            "--token",
            envvar="DISCOVERY_TOKEN",
            help="Bearer access token for --auth=bearer.",
        ),
        "verify_ssl": typer.Option(
            default_verify,
            "--verify/--no-verify",
            envvar="DISCOVERY_VERIFY_SSL",
            help="Enable or disable TLS certificate verification.",
            show_default=True,
        ),
        "cert_path": typer.Option(
            None,
            "--cert",
            envvar="DISCOVERY_CA_CERT",
            help="Path to a custom CA bundle for TLS verification.",
        ),
        "timeout": typer.Option(30.0, help="Request timeout (seconds).", show_default=True),
        "output_json": typer.Option(
            False,
            "--json",
            "-j",
            help="Return raw JSON instead of rendering a table.",
        ),
        "environment_id": typer.Option(
            ..., "--environment-id", "-e", envvar="DISCOVERY_ENVIRONMENT_ID", help="Environment ID."
        ),
        "collection_id": typer.Option(
            ..., "--collection-id", "-c", envvar="DISCOVERY_COLLECTION_ID", help="Collection ID."
        ),
    }


_SHARED_OPTIONS = _shared_options()


@environments_app.command("list")
def environments_list(
    url: str = _SHARED_OPTIONS["url"],
    api_version: str = _SHARED_OPTIONS["api_version"],
    auth: str = _SHARED_OPTIONS["auth"],
    apikey: str | None = _SHARED_OPTIONS["apikey"],
    username: str | None = _SHARED_OPTIONS["username"],
    password: str | None = _SHARED_OPTIONS["password"],
    token: str | None = _SHARED_OPTIONS["token"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    cert_path: Path | None = _SHARED_OPTIONS["cert_path"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    output_json: bool = _SHARED_OPTIONS["output_json"],
    name: str | None = typer.Option(None, "--name", help="Only show environments with this name."),
) -> None:
    """List environments in the service instance."""

    with _build_client(
        url, api_version, auth, apikey, username, password, token, verify_ssl, cert_path, timeout
    ) as client:
        try:
            response = client.environments.list(name=name)
        except DiscoveryError as exc:
            _handle_client_error(exc)
            return
    _present_output(_payload(response), view_id="environments", json_output=output_json)


@collections_app.command("list")
def collections_list(
    environment_id: str = _SHARED_OPTIONS["environment_id"],
    url: str = _SHARED_OPTIONS["url"],
    api_version: str = _SHARED_OPTIONS["api_version"],
    auth: str = _SHARED_OPTIONS["auth"],
    apikey: str | None = _SHARED_OPTIONS["apikey"],
    username: str | None = _SHARED_OPTIONS["username"],
    password: str | None = _SHARED_OPTIONS["password"],
    token: str | None = _SHARED_OPTIONS["token"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    cert_path: Path | None = _SHARED_OPTIONS["cert_path"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    output_json: bool = _SHARED_OPTIONS["output_json"],
    name: str | None = typer.Option(None, "--name", help="Only show collections with this name."),
) -> None:
    """List collections of an environment."""

    with _build_client(
        url, api_version, auth, apikey, username, password, token, verify_ssl, cert_path, timeout
    ) as client:
        try:
            response = client.collections.list(environment_id, name=name)
        except DiscoveryError as exc:
            _handle_client_error(exc)
            return
    _present_output(_payload(response), view_id="collections", json_output=output_json)


@documents_app.command("add")
def documents_add(
    environment_id: str = _SHARED_OPTIONS["environment_id"],
    collection_id: str = _SHARED_OPTIONS["collection_id"],
    url: str = _SHARED_OPTIONS["url"],
    api_version: str = _SHARED_OPTIONS["api_version"],
    auth: str = _SHARED_OPTIONS["auth"],
    apikey: str | None = _SHARED_OPTIONS["apikey"],
    username: str | None = _SHARED_OPTIONS["username"],
    password: str | None = _SHARED_OPTIONS["password"],
    token: str | None = _SHARED_OPTIONS["token"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    cert_path: Path | None = _SHARED_OPTIONS["cert_path"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    file: Path | None = typer.Option(None, "--file", "-f", help="Document to upload."),
    content_type: str | None = typer.Option(
        None, "--content-type", help="Media type of the document (detected by the service if omitted)."
    ),
    metadata: str | None = typer.Option(
        None, "--metadata", help='Document metadata as a JSON object, e.g. \'{"author": "x"}\'.'
    ),
) -> None:
    """Upload a document (and/or metadata) to a collection."""

    if file is None and metadata is None:
        raise typer.BadParameter("Provide --file, --metadata or both.")
    if metadata is not None:
        try:
            json.loads(metadata)
        except ValueError as exc:
            raise typer.BadParameter(f"--metadata is not valid JSON: {exc}") from exc
    if file is not None and not file.expanduser().is_file():
        raise typer.BadParameter(f"Document not found: {file}")

    with _build_client(
        url, api_version, auth, apikey, username, password, token, verify_ssl, cert_path, timeout
    ) as client:
        stream = file.expanduser().open("rb") if file is not None else None
        try:
            response = client.documents.add(
                environment_id,
                collection_id,
                file=stream,
                file_content_type=content_type,
                metadata=metadata,
            )
        except DiscoveryError as exc:
            _handle_client_error(exc)
            return
        finally:
            if stream is not None and not stream.closed:
                stream.close()
    _echo_json(_payload(response))


@queries_app.command("run")
def query_run(
    environment_id: str = _SHARED_OPTIONS["environment_id"],
    collection_id: list[str] = typer.Option(
        ...,
        "--collection-id",
        "-c",
        envvar="DISCOVERY_COLLECTION_ID",
        help="Collection ID; repeat to run a federated query across collections.",
    ),
    url: str = _SHARED_OPTIONS["url"],
    api_version: str = _SHARED_OPTIONS["api_version"],
    auth: str = _SHARED_OPTIONS["auth"],
    apikey: str | None = _SHARED_OPTIONS["apikey"],
    username: str | None = _SHARED_OPTIONS["username"],
    password: str | None = _SHARED_OPTIONS["password"],
    token: str | None = _SHARED_OPTIONS["token"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    cert_path: Path | None = _SHARED_OPTIONS["cert_path"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    output_json: bool = _SHARED_OPTIONS["output_json"],
    natural_language_query: str | None = typer.Option(
        None, "--nlq", "-q", help="Natural language query."
    ),
    query: str | None = typer.Option(None, "--query", help="Query language expression."),
    filter: str | None = typer.Option(None, "--filter", help="Query language filter."),
    count: int | None = typer.Option(None, "--count", "-n", help="Number of results to return."),
    return_fields: str | None = typer.Option(
        None, "--return", help="Comma-separated fields to return."
    ),
) -> None:
    """Query one collection, or several at once when -c is repeated."""

    with _build_client(
        url, api_version, auth, apikey, username, password, token, verify_ssl, cert_path, timeout
    ) as client:
        try:
            if len(collection_id) == 1:
                response = client.queries.query(
                    environment_id,
                    collection_id[0],
                    natural_language_query=natural_language_query,
                    query=query,
                    filter=filter,
                    count=count,
                    return_fields=return_fields,
                )
            else:
                response = client.queries.federated_query(
                    environment_id,
                    collection_id,
                    natural_language_query=natural_language_query,
                    query=query,
                    filter=filter,
                    count=count,
                    return_fields=return_fields,
                )
        except DiscoveryError as exc:
            _handle_client_error(exc)
            return
    payload = _payload(response)
    if not output_json and isinstance(payload, Mapping):
        typer.echo(f"Matching results: {payload.get('matching_results', 0)}")
    _present_output(payload, view_id="query_results", json_output=output_json)


@metrics_app.command("queries")
def metrics_queries(
    url: str = _SHARED_OPTIONS["url"],
    api_version: str = _SHARED_OPTIONS["api_version"],
    auth: str = _SHARED_OPTIONS["auth"],
    apikey: str | None = _SHARED_OPTIONS["apikey"],
    username: str | None = _SHARED_OPTIONS["username"],
    password: str | None = _SHARED_OPTIONS["password"],
    token: str | None = _SHARED_OPTIONS["token"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    cert_path: Path | None = _SHARED_OPTIONS["cert_path"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    output_json: bool = _SHARED_OPTIONS["output_json"],
    start_time: str | None = typer.Option(None, "--start", help="RFC3339 start timestamp."),
    end_time: str | None = typer.Option(None, "--end", help="RFC3339 end timestamp."),
    kind: str = typer.Option(
        "total",
        "--kind",
        case_sensitive=False,
        help="total, with-event, no-results or event-rate.",
    ),
) -> None:
    """Show query counts over time."""

    kind = kind.lower()
    if kind not in {"total", "with-event", "no-results", "event-rate"}:
        raise typer.BadParameter("--kind must be total, with-event, no-results or event-rate.")

    with _build_client(
        url, api_version, auth, apikey, username, password, token, verify_ssl, cert_path, timeout
    ) as client:
        operation = {
            "total": client.metrics.query,
            "with-event": client.metrics.query_event,
            "no-results": client.metrics.query_no_results,
            "event-rate": client.metrics.event_rate,
        }[kind]
        try:
            response = operation(start_time=start_time, end_time=end_time)
        except DiscoveryError as exc:
            _handle_client_error(exc)
            return
    payload = _payload(response)
    if output_json:
        _echo_json(payload)
        return
    _present_output(_metric_rows(payload), view_id="metrics", json_output=False)


@metrics_app.command("top-tokens")
def metrics_top_tokens(
    url: str = _SHARED_OPTIONS["url"],
    api_version: str = _SHARED_OPTIONS["api_version"],
    auth: str = _SHARED_OPTIONS["auth"],
    apikey: str | None = _SHARED_OPTIONS["apikey"],
    username: str | None = _SHARED_OPTIONS["username"],
    password: str | None = _SHARED_OPTIONS["password"],
    token: str | None = _SHARED_OPTIONS["token"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    cert_path: Path | None = _SHARED_OPTIONS["cert_path"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    output_json: bool = _SHARED_OPTIONS["output_json"],
    count: int | None = typer.Option(None, "--count", "-n", help="Number of tokens to return."),
) -> None:
    """Show the most frequent query tokens and their event rate."""

    with _build_client(
        url, api_version, auth, apikey, username, password, token, verify_ssl, cert_path, timeout
    ) as client:
        try:
            response = client.metrics.query_token_event(count=count)
        except DiscoveryError as exc:
            _handle_client_error(exc)
            return
    payload = _payload(response)
    if output_json:
        _echo_json(payload)
        return
    _present_output(_metric_rows(payload), view_id="top_tokens", json_output=False)


if __name__ == "__main__":  # pragma: no cover
    app()
