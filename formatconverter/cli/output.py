"""Rich rendering for FormatConverter CLI output."""

import json
from pathlib import Path

from rich.console import Console
from rich.table import Table

from formatconverter.conversion.formats import parse_conversion_id
from formatconverter.conversion.result import ConversionResult

console = Console()
console_err = Console(stderr=True)


def format_size(size_bytes: int) -> str:
    """Render a byte count with a binary unit suffix."""
    size = float(size_bytes)
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024.0:
            return f"{size:.1f} {unit}"
        size /= 1024.0
    return f"{size:.1f} TB"


def print_conversions(identifiers: list[str]) -> None:
    """Print conversion identifiers as a source -> targets table."""
    if not identifiers:
        console.print("[yellow]No conversions registered[/yellow]")
        return

    targets_by_source: dict[str, list[str]] = {}
    for identifier in identifiers:
        source, target = parse_conversion_id(identifier)
        targets_by_source.setdefault(source.value, []).append(target.value)

    table = Table(
        title="Supported conversions", show_header=True, header_style="bold cyan"
    )
    table.add_column("Source", style="cyan", no_wrap=True)
    table.add_column("Targets", style="white")

    for source, targets in targets_by_source.items():
        table.add_row(source, ", ".join(targets))

    console.print(table)


def print_conversions_json(identifiers: list[str]) -> None:
    """Print conversion identifiers as a JSON array."""
    console.print_json(json.dumps(identifiers))


def print_conversion_summary(
    result: ConversionResult,
    source: Path,
    destination: Path,
) -> None:
    """Print the outcome of a successful conversion.

    Args:
        result: Successful conversion result
        source: File that was converted
        destination: File that was written
    """
    console.print(f"[green]✓[/green] Converted {source.name} -> {destination}")

    columns = result.metadata.get("columns", [])
    table = Table(show_header=False)
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    table.add_row("Conversion", f"{result.source_format}-to-{result.target_format}")
    table.add_row("Rows", str(result.row_count))
    column_names = ", ".join(columns[:8]) + (", ..." if len(columns) > 8 else "")
    table.add_row("Columns", f"{len(columns)} ({column_names})")
    table.add_row(
        "Size",
        f"{format_size(result.source_size_bytes)} -> "
        f"{format_size(result.dest_size_bytes)} (x{result.size_ratio:.2f})",
    )
    table.add_row(
        "Duration",
        f"{result.duration_seconds:.3f}s ({result.throughput_mbps:.2f} MB/s)",
    )

    console.print(table)


def print_error(message: str) -> None:
    """Print error message with X mark."""
    console_err.print(f"[red]✗[/red] {message}")
