"""Main CLI entry point for FormatConverter."""

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from formatconverter import __version__
from formatconverter.config import Settings, get_settings
from formatconverter.exceptions import FormatConverterError
from formatconverter.logging_config import setup_logging

app = typer.Typer(
    name="formatconverter",
    help="FormatConverter - convert tabular files between CSV, JSON, Excel and Parquet",
    add_completion=True,
    rich_markup_mode="rich",
    no_args_is_help=False,
)

console = Console()
console_err = Console(stderr=True)


class CLIState:
    """Global CLI state."""

    verbose: bool = False
    quiet: bool = False
    settings: Optional[Settings] = None


state = CLIState()


def version_callback(value: bool) -> None:
    """Callback for --version flag."""
    if value:
        console.print(f"FormatConverter version: {__version__}")
        console.print(f"Python: {sys.version.split()[0]}")
        raise typer.Exit(0)


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version information and exit",
        callback=version_callback,
        is_eager=True,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file path",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress non-error output",
    ),
) -> None:
    """
    FormatConverter - tabular file conversion

    Converts uploads between CSV, JSON, Excel (XLSX) and Parquet, over HTTP
    or directly from the command line.
    """
    state.verbose = verbose
    state.quiet = quiet
    state.settings = get_settings(config_path=config, reload=config is not None)

    if verbose:
        setup_logging("DEBUG")
    elif quiet:
        setup_logging("ERROR")
    else:
        setup_logging()

    ctx.obj = state


def handle_error(error: Exception) -> None:
    """Handle CLI errors with user-friendly messages.

    Args:
        error: Exception to handle
    """
    if isinstance(error, FormatConverterError):
        console_err.print(f"\n[red]Error:[/red] {error.message}")

        if state.verbose and error.context:
            console_err.print("\n[yellow]Context:[/yellow]")
            for key, value in error.context.items():
                console_err.print(f"  {key}: {value}")
    else:
        console_err.print(f"\n[red]Unexpected Error:[/red] {str(error)}")

        if state.verbose:
            import traceback

            console_err.print("\n[yellow]Traceback:[/yellow]")
            console_err.print(traceback.format_exc())

    raise typer.Exit(1)


from formatconverter.cli import api, convert  # noqa: E402

app.command("serve", help="Start the API server")(api.serve)
app.command("status", help="Check API server status")(api.status)
app.command("formats", help="List supported conversions")(convert.formats)
app.command("convert", help="Convert a local file")(convert.convert)


def main_cli() -> None:
    """Entry point for CLI application with error handling."""
    try:
        app()
    except FormatConverterError as e:
        handle_error(e)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(1)
    except Exception as e:
        handle_error(e)


if __name__ == "__main__":
    main_cli()
