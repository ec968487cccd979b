"""Codegen Bridge CLI - main entry point."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from codegen_bridge import __version__
from codegen_bridge.env import load_environment

# Load environment variables from .env file at startup
load_environment()

app = typer.Typer(
    name="cgb",
    help="Codegen Bridge - generate code with Cursor or Claude Code CLIs",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


def _run_async(coro):
    """Run an async coroutine from sync CLI context."""
    return asyncio.run(coro)


def _load_settings(config: Optional[Path]):
    from pydantic import ValidationError

    from codegen_bridge.config import load_settings, load_settings_file

    try:
        return load_settings_file(config) if config else load_settings()
    except (FileNotFoundError, ValidationError) as e:
        err_console.print(f"[red]Invalid settings:[/] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def generate(
    prompt: str = typer.Argument(..., help="What to generate"),
    provider: str = typer.Option(..., "--provider", "-p", help="CURSOR, CLAUDE_CODE or CLAUDE"),
    api_key: Optional[str] = typer.Option(
        None, "--api-key", help="Provider credential (defaults to the provider's environment variable)"
    ),
    source_dir: Optional[str] = typer.Option(None, "--source-dir", "-s", help="Project directory"),
    language: Optional[str] = typer.Option(None, "--language", help="Target language"),
    framework: Optional[str] = typer.Option(None, "--framework", help="Target framework"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write generated code to this file"),
    as_json: bool = typer.Option(False, "--json", help="Print the result payload as JSON"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Settings YAML file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print diagnostics to stderr"),
):
    """Generate code from a prompt."""
    from codegen_bridge.dispatcher import generate_code
    from codegen_bridge.env import get_api_key
    from codegen_bridge.models import GenerationRequest

    settings = _load_settings(config)
    if source_dir:
        load_environment(source_dir)
    if verbose:
        settings = settings.model_copy(update={"verbose": True})

    request = GenerationRequest(
        prompt=prompt,
        provider_type=provider,
        api_key=api_key or get_api_key(provider) or "",
        source_dir=source_dir,
        language=language,
        framework=framework,
    )
    result = _run_async(generate_code(request, settings))

    if as_json:
        typer.echo(json.dumps(result.to_payload(), indent=2))
    elif not result.success:
        err_console.print(Panel(
            f"[bold red]Error:[/] {escape(result.error or '')}",
            title="[bold red]Generation Failed[/]",
            border_style="red",
        ))
    elif output:
        output.write_text(result.code)
        console.print(f"[green]✓[/] Code written to {output}")
    else:
        typer.echo(result.code, nl=False)

    if not result.success:
        raise typer.Exit(1)


@app.command()
def collect(
    source_dir: str = typer.Argument(..., help="Project directory to collect"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the context to this file"),
    ext: Optional[List[str]] = typer.Option(None, "--ext", "-e", help="Extension to include (repeatable)"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Settings YAML file"),
):
    """Print the aggregated source context of a directory."""
    from codegen_bridge.collector import collect_source_code

    settings = _load_settings(config)
    extensions = ext or settings.source_extensions

    try:
        context = _run_async(collect_source_code(source_dir, extensions))
    except OSError as e:
        err_console.print(f"[red]{escape(str(e))}[/]")
        raise typer.Exit(1)

    if output:
        output.write_text(context)
        console.print(f"[green]✓[/] Context written to {output}")
    else:
        typer.echo(context)


@app.command()
def check(
    provider: str = typer.Argument(..., help="Provider to check (CURSOR, CLAUDE_CODE, CLAUDE)"),
):
    """Check whether a provider's CLI can be used."""
    from codegen_bridge.dispatcher import check_cli_available
    from codegen_bridge.env import get_api_key

    available = _run_async(check_cli_available(provider))

    checks = []
    if available:
        checks.append(("✓", "green", f"Provider '{provider}' is available"))
    else:
        checks.append(("✗", "red", f"Provider '{provider}' is not available"))

    if get_api_key(provider):
        checks.append(("✓", "green", "API key is set"))
    else:
        checks.append(("⚠", "yellow", "API key is not set in the environment"))

    for icon, color, msg in checks:
        console.print(f"[{color}]{icon}[/{color}] {msg}")

    if not available:
        raise typer.Exit(1)


@app.command()
def version():
    """Show Codegen Bridge version."""
    console.print(f"[bold cyan]Codegen Bridge[/] v{__version__}")


if __name__ == "__main__":
    app()
