"""Entity CLI commands."""

from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from penneo.connector import get_connector, initialize_from_settings
from penneo.connector.ports import Connector
from penneo.errors import ConfigurationError, PenneoError
from penneo.resources import default_registry
from penneo.schemas.entity import Entity

entity_app = typer.Typer(no_args_is_help=True)
console = Console()


def _connector() -> Connector:
    try:
        initialize_from_settings()
    except ConfigurationError as e:
        _fail(f"{e} Set PENNEO_API_KEY and PENNEO_API_SECRET.")
    return get_connector()


def _fail(message: str) -> NoReturn:
    console.print(Panel(f"[red]{message}[/red]", title="Error", border_style="red"))
    raise typer.Exit(1)


def _entity_type(resource: str) -> type[Entity]:
    try:
        return default_registry().type_for(resource)
    except PenneoError as e:
        _fail(str(e))


def _parse_query(pairs: list[str]) -> dict[str, str]:
    query: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            _fail(f"Invalid query '{pair}', expected key=value")
        query[key] = value
    return query


def _entities_table(title: str, entities: list[Entity]) -> Table:
    table = Table(title=title, border_style="cyan")
    columns: list[str] = []
    for entity in entities:
        for name, value in entity.model_dump(exclude_none=True).items():
            if name not in columns and not isinstance(value, dict):
                columns.append(name)
    for name in columns:
        table.add_column(name, style="bold cyan" if name == "id" else "white")
    for entity in entities:
        row = entity.model_dump()
        table.add_row(*[str(row.get(name)) if row.get(name) is not None else "" for name in columns])
    return table


@entity_app.command("get")
def get_entity(
    resource: str = typer.Argument(..., help="Resource path, e.g. casefiles"),
    entity_id: int = typer.Argument(..., help="Entity identifier"),
) -> None:
    """Fetch one entity by id."""
    entity_type = _entity_type(resource)
    try:
        result = _connector().find(entity_type, entity_id)
    except PenneoError as e:
        _fail(str(e))
    if not result.ok or result.value is None:
        _fail(f"{resource}/{entity_id} not found (status {result.status_code})")
    console.print(_entities_table(f"{resource}/{entity_id}", [result.value]))


@entity_app.command("find")
def find_entities(
    resource: str = typer.Argument(..., help="Resource path, e.g. casefiles"),
    query: list[str] = typer.Option([], "--query", "-q", help="Filter as key=value, repeatable"),
) -> None:
    """List entities of a resource, optionally filtered."""
    entity_type = _entity_type(resource)
    try:
        result = _connector().find_by(entity_type, _parse_query(query))
    except PenneoError as e:
        _fail(str(e))
    if not result.ok:
        _fail(f"Lookup failed (status {result.status_code}): {result.error}")
    items = result.value or []
    if not items:
        console.print("[yellow]No entities found.[/yellow]")
        return
    console.print(_entities_table(resource, items))


@entity_app.command("asset")
def fetch_asset(
    resource: str = typer.Argument(..., help="Resource path, e.g. documents"),
    entity_id: int = typer.Argument(..., help="Entity identifier"),
    asset_name: str = typer.Argument(..., help="Asset name, e.g. pdf or link"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write decoded bytes to this file"),
) -> None:
    """Download an entity asset."""
    entity = _entity_type(resource)(id=entity_id)
    connector = _connector()
    try:
        if output is None:
            console.print(connector.get_text_assets(entity, asset_name), markup=False)
            return
        content = connector.get_file_assets(entity, asset_name)
    except (PenneoError, ValueError) as e:
        _fail(f"Could not fetch {asset_name}: {e}")
    output.write_bytes(content)
    console.print(f"[green]Wrote {len(content)} bytes to {output}[/green]")


@entity_app.command("action")
def run_action(
    resource: str = typer.Argument(..., help="Resource path, e.g. casefiles"),
    entity_id: int = typer.Argument(..., help="Entity identifier"),
    action: str = typer.Argument(..., help="Action name, e.g. send or activate"),
) -> None:
    """Trigger a server-side action on an entity."""
    entity = _entity_type(resource)(id=entity_id)
    if not _connector().perform_action(entity, action):
        _fail(f"Action '{action}' on {resource}/{entity_id} failed")
    console.print(f"[green]{action} accepted for {resource}/{entity_id}[/green]")
