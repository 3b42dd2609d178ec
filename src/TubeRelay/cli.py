"""Typer-based CLI for TubeRelay with Pydantic v2 configuration."""

import asyncio
import json
import logging
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from TubeRelay.command import run_video_command
from TubeRelay.config import CONFIG_PATH_ENV, PROVIDER_ORDER, TubeRelayConfig, load_config
from TubeRelay.types import ImageMessage, OutboundMessage, TextMessage, VideoMessage

console = Console()
app = typer.Typer(help="TubeRelay: resolve a video link or search query to a download URL")

# ============================================================================
# Setup
# ============================================================================


def _setup_logging(verbose: bool) -> None:
    """Setup logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _load(config_path: Optional[str]) -> TubeRelayConfig:
    try:
        return load_config(config_path)
    except Exception as e:
        console.print(f"[red]✗ Config error:[/red] {e}")
        raise typer.Exit(1) from e


class ConsoleSink:
    """Message sink rendering payloads to the terminal."""

    def __init__(self, out: Console) -> None:
        self._out = out

    async def send(self, message: OutboundMessage) -> None:
        if isinstance(message, ImageMessage):
            self._out.print(Panel(f"{message.caption}\n\n[dim]{message.url}[/dim]", title="preview"))
        elif isinstance(message, VideoMessage):
            self._out.print(
                Panel(
                    f"{message.caption}\n\n[bold]{message.url}[/bold]\n"
                    f"[dim]{message.filename} ({message.mimetype})[/dim]",
                    title="video",
                    border_style="green",
                )
            )
        elif isinstance(message, TextMessage):
            self._out.print(Panel(message.text, title="reply", border_style="yellow"))


# ============================================================================
# Commands
# ============================================================================


@app.command()
def resolve(
    query: List[str] = typer.Argument(..., help="Video link or search terms"),
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
        envvar=CONFIG_PATH_ENV,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Resolve QUERY through the provider chain and print the replies."""
    _setup_logging(verbose)
    cfg = _load(config)
    message = asyncio.run(run_video_command(" ".join(query), ConsoleSink(console), cfg))
    if not isinstance(message, VideoMessage):
        raise typer.Exit(1)


@app.command()
def providers(
    config: Optional[str] = typer.Option(None, "--config", "-c", envvar=CONFIG_PATH_ENV),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Show the provider fallback chain."""
    _setup_logging(verbose)
    cfg = _load(config)
    enabled = cfg.providers.enabled_names()

    table = Table(title="Provider chain")
    table.add_column("Priority", justify="right")
    table.add_column("Provider", style="cyan")
    table.add_column("Enabled")
    table.add_column("Endpoint")

    for priority, name in enumerate(PROVIDER_ORDER, start=1):
        table.add_row(
            str(priority),
            name,
            "[green]yes[/green]" if name in enabled else "[red]no[/red]",
            getattr(cfg.providers, name).endpoint,
        )
    console.print(table)


@app.command("config-show")
def config_show(
    config: Optional[str] = typer.Option(None, "--config", "-c", envvar=CONFIG_PATH_ENV),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Print the effective configuration as JSON."""
    _setup_logging(verbose)
    cfg = _load(config)
    console.print_json(json.dumps(cfg.model_dump(mode="json")))
    console.print(f"[dim]config hash: {cfg.config_hash()[:12]}[/dim]")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
