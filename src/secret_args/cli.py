"""Command-line interface for secret argument lists."""

from __future__ import annotations

import json
import sys
from pathlib import Path  # noqa: TC003

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .command import SecretArgumentList
from .core import build_command, build_runtime_context, load_spec
from .logging import get_logger, setup_logging

app = typer.Typer(help="Build and display command lines that contain secrets")
console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", envvar="SECRET_ARGS_LOG_LEVEL", help="Logging level"),
    log_format: str = typer.Option("console", "--log-format", envvar="SECRET_ARGS_LOG_FORMAT", help="Log format: console or json"),
) -> None:
    """Build and display command lines that contain secrets."""
    try:
        setup_logging(log_level, log_format)
    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)


@app.command()
def show(
    spec_file: Path = typer.Argument(..., help="Path to YAML command file"),
    raw: bool = typer.Option(False, "--raw", help="Show real secret values instead of the mask"),
    mask: str | None = typer.Option(None, "--mask", help="Override the mask text"),
    alt: str | None = typer.Option(None, "--alt", help="Override the whole display string"),
) -> None:
    """Show the command line of a command file."""
    try:
        command = _load_command(spec_file)
        if mask is not None:
            command = command.mask(mask)
        if alt is not None:
            command = command.alt(alt)

        if raw:
            err_console.print("[yellow]Warning: output contains secret values[/yellow]")
            typer.echo(command.to_raw_display_string())
        else:
            typer.echo(command.to_display_string())

    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)


@app.command()
def argv(
    spec_file: Path = typer.Argument(..., help="Path to YAML command file"),
    reveal: bool = typer.Option(False, "--reveal", help="Print real secret values"),
    json_output: bool = typer.Option(False, "--json", help="Output as a JSON array"),
) -> None:
    """Print the argument vector of a command file, one argument per line."""
    try:
        command = _load_command(spec_file)
        arguments = command.to_raw_arguments() if reveal else command.to_masked_arguments()
        if reveal:
            logger.warning("secrets_revealed", command=str(command))

        if json_output:
            typer.echo(json.dumps(arguments, indent=2))
        else:
            for argument in arguments:
                typer.echo(argument)

    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)


@app.command()
def explain(
    spec_file: Path = typer.Argument(..., help="Path to YAML command file"),
) -> None:
    """Explain a command file argument by argument."""
    try:
        spec = load_spec(spec_file)
        command = _load_command(spec_file)

        table = Table(title="Arguments")
        table.add_column("#", style="cyan")
        table.add_column("Kind", style="magenta")
        table.add_column("Template", style="green")
        table.add_column("Secrets", style="yellow")
        table.add_column("Displayed as")

        for position, (argument_spec, argument) in enumerate(zip(spec.arguments, command.arguments), start=1):
            table.add_row(
                str(position),
                argument_spec.kind,
                escape(argument.template),
                f"{argument.placeholder_count}/{len(argument.secrets)}",
                escape(argument.render_masked(command.mask_text)),
            )

        console.print(table)
        console.print(f"\nMask: {command.mask_text}", markup=False)
        if command.alternate_text is not None:
            console.print(f"Alternate text: {command.alternate_text}", markup=False)
        console.print(f"Command: {command}", markup=False, highlight=False)

    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)


@app.command()
def validate(
    spec_file: Path = typer.Argument(..., help="Path to YAML command file"),
    strict: bool = typer.Option(False, "--strict", help="Enable strict validation"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Enable quiet mode (minimal output)"),
) -> None:
    """Validate a command file without resolving its secrets."""
    try:
        # Load command file (this will validate schema)
        spec = load_spec(spec_file)

        from .validation import semantic_validate
        semantic_errors = semantic_validate(spec, strict=strict)

        if semantic_errors:
            console.print("[red]Validation failed:[/red]")
            for error in semantic_errors:
                console.print(f"  [red]• {escape(error)}[/red]")
            sys.exit(1)

        if not quiet:
            if strict:
                console.print("[green]✓ Command file is valid (strict mode)[/green]")
            else:
                console.print("[green]✓ Command file is valid[/green]")

    except Exception as e:
        console.print(f"[red]Validation error: {escape(str(e))}[/red]")
        sys.exit(1)


@app.command()
def print_schema() -> None:
    """Print the JSON schema for command files."""
    from .models import CommandSpec

    schema = CommandSpec.model_json_schema()
    typer.echo(json.dumps(schema, indent=2))


@app.command()
def demo() -> None:
    """Show what a secret argument list prints."""
    cmd = SecretArgumentList.builder() \
        .add("openssl") \
        .add("enc") \
        .add("-pass") \
        .add("pass:%s", "secret") \
        .build()

    typer.echo(str(cmd))
    typer.echo(json.dumps(cmd.to_raw_arguments()))
    typer.echo(str(cmd.mask("<password>")))
    typer.echo(str(cmd.alt("encrypt message...")))


def _load_command(spec_file: Path) -> SecretArgumentList:
    """Load a command file and build its command, failing on any error."""
    spec = load_spec(spec_file)
    context = build_runtime_context()
    result = build_command(spec, context)
    if result.errors:
        raise ValueError("; ".join(result.errors))
    return result.command


if __name__ == "__main__":
    app()
