"""Penneo CLI - Main entry point."""

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from penneo.cli.entity_commands import entity_app
from penneo.config import get_settings
from penneo.observability import configure_logging
from penneo.resources import default_registry

app = typer.Typer(
    name="penneo",
    help="Penneo API client CLI",
    no_args_is_help=True,
)

app.add_typer(entity_app, name="entity", help="Read, query and act on API entities")

console = Console()


@app.callback()
def main(
    log_level: str = typer.Option(None, "--log-level", help="Logging level, e.g. TRACE or INFO"),
) -> None:
    configure_logging(log_level or get_settings().log_level)


@app.command()
def status() -> None:
    """Show connector configuration."""
    settings = get_settings()

    console.print(
        Panel(
            "[bold cyan]Penneo[/bold cyan] - API connector",
            title="Connector Status",
            border_style="cyan",
        )
    )

    table = Table(border_style="cyan")
    table.add_column("Setting", style="bold white")
    table.add_column("Status", justify="center")
    table.add_column("Details", style="dim")

    table.add_row("Endpoint", "[green]Set[/green]", settings.endpoint)

    key_status = "[green]Configured[/green]" if settings.api_key else "[red]Missing[/red]"
    table.add_row("API Key", key_status, f"{settings.api_key[:6]}..." if settings.api_key else "PENNEO_API_KEY")

    secret_status = "[green]Configured[/green]" if settings.api_secret else "[red]Missing[/red]"
    table.add_row("API Secret", secret_status, "PENNEO_API_SECRET")

    user_status = "[green]Set[/green]" if settings.api_user else "[yellow]Not set[/yellow]"
    table.add_row("API User", user_status, settings.api_user or "N/A")

    timeout = f"{settings.timeout_seconds}s" if settings.timeout_seconds else "none"
    table.add_row("Timeout", "[cyan]Transport[/cyan]", timeout)

    console.print(table)


@app.command()
def resources() -> None:
    """List registered resource paths."""
    registry = default_registry()
    table = Table(title="Resources", border_style="cyan")
    table.add_column("Path", style="bold cyan")
    table.add_column("Entity", style="white")
    for path in registry.resource_names():
        table.add_row(path, registry.type_for(path).__name__)
    console.print(table)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
