"""Local conversion commands for FormatConverter."""

import asyncio
from pathlib import Path
from typing import Optional

import typer

from formatconverter.cli.output import (
    print_conversion_summary,
    print_conversions,
    print_conversions_json,
    print_error,
)
from formatconverter.config import get_settings
from formatconverter.conversion.dispatcher import ConversionDispatcher
from formatconverter.conversion.exceptions import UnsupportedFormatError
from formatconverter.conversion.formats import (
    TabularFormat,
    conversion_id,
    format_from_extension,
    parse_conversion_id,
)
from formatconverter.conversion.result import ConversionRequest
from formatconverter.exceptions import OutputWriteError
from formatconverter.logging_config import (
    get_logger,
    log_conversion,
    log_output_error,
)

logger = get_logger(__name__)

_TARGET_ALIASES = {"xlsx": TabularFormat.EXCEL}


def formats(
    output: str = typer.Option(
        "table",
        "--output",
        "-o",
        help="Output format: table, json",
    ),
) -> None:
    """List supported conversion identifiers.

    Example:
        formatconverter formats -o json
    """
    if output not in ("table", "json"):
        print_error(f"Invalid output format: {output} (valid: table, json)")
        raise typer.Exit(1)

    dispatcher = ConversionDispatcher.default(get_settings().conversion_config())
    identifiers = dispatcher.list_supported_formats()

    if output == "json":
        print_conversions_json(identifiers)
    else:
        print_conversions(identifiers)


def convert(
    ctx: typer.Context,
    input_path: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        help="File to convert",
    ),
    to: str = typer.Option(
        ...,
        "--to",
        "-t",
        help='Target format ("json") or conversion identifier ("csv-to-json")',
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output path (default: input name with the target extension)",
    ),
) -> None:
    """Convert a local file.

    The source format is inferred from the input extension unless a full
    "<source>-to-<target>" identifier is given.

    Examples:
        formatconverter convert sales.csv --to json

        formatconverter convert report.xlsx --to excel-to-parquet -o out.parquet
    """
    quiet = bool(ctx.obj and ctx.obj.quiet)

    try:
        identifier = resolve_conversion_id(input_path, to)
    except UnsupportedFormatError as e:
        print_error(str(e))
        raise typer.Exit(1)

    dispatcher = ConversionDispatcher.default(get_settings().conversion_config())
    request = ConversionRequest(
        content=input_path.read_bytes(),
        filename=input_path.name,
        target_format=identifier,
    )

    result = asyncio.run(dispatcher.convert(request))
    log_conversion(logger, identifier, result, source=str(input_path))

    if not result.success:
        print_error(result.error_message or "Conversion failed")
        raise typer.Exit(1)

    destination = output or input_path.with_name(result.filename)
    try:
        destination.write_bytes(result.data)
    except OSError as e:
        error = OutputWriteError(str(destination), str(e))
        log_output_error(logger, identifier, error)
        print_error(error.message)
        raise typer.Exit(1)

    if quiet:
        return

    print_conversion_summary(result, input_path, destination)


def resolve_conversion_id(input_path: Path, to: str) -> str:
    """Turn a --to value into a conversion identifier.

    Raises:
        UnsupportedFormatError: If the source or target cannot be determined
    """
    requested = to.strip().lower()
    if "-to-" in requested:
        source, target = parse_conversion_id(requested)
        return conversion_id(source, target)

    source = format_from_extension(input_path.name)
    try:
        target = _TARGET_ALIASES.get(requested) or TabularFormat(requested)
    except ValueError as e:
        raise UnsupportedFormatError(f"Unsupported target format: {to}") from e

    return conversion_id(source, target)
