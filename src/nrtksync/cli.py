"""CLI entry point."""

from __future__ import annotations

import signal
import threading
from pathlib import Path
from typing import NoReturn, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from nrtksync.core.config import get_settings
from nrtksync.core.exceptions import NrtkSyncError
from nrtksync.core.logs import configure_logging

app = typer.Typer(
    name="nrtk-sync",
    help="Sync a Newsroom Toolkit site feed to local files",
    no_args_is_help=True,
)
console = Console()


def _fail(error: Exception) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    raise typer.Exit(code=1) from error


def _install_stop_handlers(stop: threading.Event) -> None:
    def _handle(signum: int, frame: object) -> None:
        console.print(f"[yellow]Received signal {signum}, stopping after current sync[/yellow]")
        stop.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        signal.signal(sig, _handle)


@app.command()
def sync(
    force: Optional[bool] = typer.Option(
        None, "--force/--no-force", help="Publish even if the feed is unchanged"
    ),
    remote: Optional[bool] = typer.Option(
        None, "--remote/--local", help="Fetch from the API or read the local file"
    ),
    repeat: Optional[int] = typer.Option(
        None, "--repeat", min=0, help="Repeat interval in milliseconds (0 runs once)"
    ),
    app_dir: Optional[Path] = typer.Option(None, "--app-dir", help="Root application directory"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level"),
) -> None:
    """Fetch the feed and publish it if it changed."""
    from nrtksync.core.runner import SyncRunner

    try:
        settings = get_settings(
            is_force_update=force,
            is_remote=remote,
            repeat_interval_ms=repeat,
            app_dir=app_dir,
            log_level=log_level,
        )
        configure_logging(settings.log_level)
        runner = SyncRunner(settings)

        if runner.repeats:
            stop = threading.Event()
            _install_stop_handlers(stop)
            runner.run(stop=stop)
            return

        result = runner.sync_once()
    except (NrtkSyncError, ValidationError) as e:
        _fail(e)

    if not result.published:
        console.print(f"Nothing to update ([dim]{result.checksum}[/dim])")
    else:
        console.print(
            f"Published {len(result.written)} files for checksum [bold]{result.checksum}[/bold]"
            f" ({result.reason.value})"
        )
    for failure in result.failures:
        console.print(f"[red]Failed:[/red] {escape(str(failure))}")


@app.command()
def version() -> None:
    """Show version."""
    from nrtksync import __version__

    console.print(f"nrtk-sync {__version__}")


@app.command()
def info() -> None:
    """Show resolved configuration."""
    import sys

    from nrtksync import __version__

    try:
        settings = get_settings()
    except ValidationError as e:
        _fail(e)
    layout = settings.layout()

    console.print(f"[bold]nrtk-sync[/bold] {__version__}")
    console.print(f"Python {sys.version}")

    table = Table(show_header=False)
    table.add_row("content_dir", str(layout.content_dir))
    table.add_row("snapshot_dir", str(layout.snapshot_dir))
    table.add_row("meta_path", str(layout.meta_path))
    table.add_row("extension", layout.extension)
    table.add_row("source", str(settings.api_url) if settings.is_remote else str(settings.local_path))
    table.add_row("api_token", "set" if settings.api_token else "unset")
    table.add_row("force", str(settings.is_force_update))
    table.add_row("repeat_interval_ms", str(settings.repeat_interval_ms))
    console.print(table)


if __name__ == "__main__":
    app()
