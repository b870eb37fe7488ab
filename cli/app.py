import asyncio
import logging
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from showcase import __version__
from showcase.models import MountStatus
from showcase.mount import mounted
from showcase.registry import get_registry
from showcase.utils.config import get_configuration_summary
from showcase.utils.exceptions import ConfigurationError
from showcase.utils.logging import setup_logging

app = typer.Typer(add_completion=False, help="Showcase - Host embeddable demo widgets")
console = Console()
log = logging.getLogger(__name__)


def _version_callback(value: bool):
    if value:
        console.print(f"Showcase {__version__}")
        raise typer.Exit()


@app.callback()
def _init(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    log_file: bool = typer.Option(True, "--log-file/--no-log-file", help="Write logs to file"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """Initialize logging for all commands."""
    setup_logging(logging.DEBUG if verbose else None, log_file=log_file)


def _load_registry():
    try:
        return get_registry()
    except ConfigurationError as e:
        console.print(f"[red]Configuration Error: {e}[/red]")
        raise typer.Exit(1)


@app.command("list")
def cmd_list():
    """List registered widgets."""
    registry = _load_registry()

    table = Table(title="Registered Widgets")
    table.add_column("Key", style="cyan")
    table.add_column("Title", style="bold")
    table.add_column("Description")
    table.add_column("Hosting", style="yellow")

    for entry in registry:
        hosting = "embedded" if not entry.is_external else "external"
        if entry.subdomain:
            hosting += f" ({entry.subdomain})"
        table.add_row(entry.key, entry.title, entry.description or "", hosting)

    console.print(table)


async def _show(key: str, commands: List[str]):
    registry = _load_registry()
    async with mounted(key, registry=registry) as widget_mount:
        for command in commands:
            if not widget_mount.dispatch(command):
                break
        rendered = widget_mount.render()
        if widget_mount.failure is not None:
            log.debug(f"Widget failure: {widget_mount.failure.to_dict()}")
        return rendered


@app.command("show")
def cmd_show(
    key: str = typer.Argument(..., help="Widget key"),
    command: Optional[List[str]] = typer.Option(
        None, "--command", "-c", help="Command to send to the widget (repeatable)"
    ),
):
    """Mount a widget once and print its output."""
    rendered = asyncio.run(_show(key, command or []))
    console.print(rendered.renderable)
    if rendered.status is MountStatus.FAILED:
        raise typer.Exit(1)


@app.command("config")
def cmd_config():
    """Show current configuration."""
    table = Table(title="Showcase Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="yellow")

    config = get_configuration_summary()

    table.add_row("Environment", config['environment'])
    table.add_row("Log Level", config['log_level'])
    table.add_row("Widget Catalog", config['widget_catalog'])
    table.add_row("Load Timeout", str(config['widget_load_timeout']))
    table.add_row("Session Timeout", str(config['session_timeout_seconds']))
    table.add_row("Terminal Feature", "enabled" if config['feature_terminal'] else "disabled")
    table.add_row("Terminal WebSocket", config['terminal_ws_url'])

    console.print(table)


@app.command("tui")
def cmd_tui():
    """Launch the interactive widget host."""
    from cli.tui import run
    _load_registry()
    run()


def main():
    app()

if __name__ == "__main__":
    main()
