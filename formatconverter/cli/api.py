"""API server CLI commands for FormatConverter."""

from typing import Optional

import typer
from rich.console import Console

console = Console()


def serve(
    host: Optional[str] = typer.Option(
        None,
        "--host",
        "-h",
        help="Host to bind to (default: converter_host setting)",
    ),
    port: Optional[int] = typer.Option(
        None,
        "--port",
        "-p",
        help="Port to bind to (default: converter_port setting)",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        help="Number of worker processes",
    ),
    reload: bool = typer.Option(
        False,
        "--reload",
        "-r",
        help="Enable auto-reload for development",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Logging level (debug, info, warning, error, critical)",
    ),
) -> None:
    """Start the FormatConverter API server.

    Examples:
        formatconverter serve

        formatconverter serve --host 127.0.0.1 --port 9000

        formatconverter serve --workers 4
    """
    import uvicorn
    from formatconverter.config import get_settings

    settings = get_settings()

    host = host or settings.converter_host
    port = port or settings.converter_port
    workers = workers or settings.converter_workers
    effective_log_level = (log_level or settings.log_level).lower()

    if reload and workers > 1:
        console.print(
            "[yellow]Warning:[/yellow] --reload flag is ignored when workers > 1. "
            "Using single worker mode with reload."
        )
        workers = 1

    console.print("\n[bold cyan]Starting FormatConverter API Server[/bold cyan]\n")
    console.print(f"  Host:        {host}")
    console.print(f"  Port:        {port}")
    console.print(f"  Workers:     {workers}")
    console.print(f"  Reload:      {reload}")
    console.print(f"  Log Level:   {effective_log_level}")
    console.print(f"  Upload Max:  {settings.max_upload_size_mb} MB")

    host_display = "localhost" if host == "0.0.0.0" else host
    console.print(f"\n  Docs:        http://{host_display}:{port}/docs")
    console.print(f"  Formats:     http://{host_display}:{port}/formats\n")

    uvicorn_config = {
        "app": "formatconverter.api.app:app",
        "host": host,
        "port": port,
        "log_level": effective_log_level,
    }

    if reload:
        uvicorn_config["reload"] = True
    else:
        uvicorn_config["workers"] = workers

    try:
        uvicorn.run(**uvicorn_config)
    except KeyboardInterrupt:
        console.print("\n[green]✓ Server stopped gracefully[/green]\n")
    except Exception as e:
        console.print(f"\n[red]✗ Server error: {e}[/red]\n")
        raise typer.Exit(1)


def status(
    host: str = typer.Option(
        "localhost",
        "--host",
        "-h",
        help="API server host",
    ),
    port: int = typer.Option(
        8000,
        "--port",
        "-p",
        help="API server port",
    ),
) -> None:
    """Check API server status.

    Example:
        formatconverter status --host localhost --port 9000
    """
    import httpx

    url = f"http://{host}:{port}/health"

    try:
        console.print(f"[blue]Checking API server at {url}...[/blue]")
        response = httpx.get(url, timeout=5.0)
    except httpx.ConnectError:
        console.print(f"\n[red]✗ Cannot connect to API server at {url}[/red]")
        console.print("[yellow]Is the server running?[/yellow]\n")
        raise typer.Exit(1)
    except httpx.TimeoutException:
        console.print(f"\n[red]✗ Connection timeout to {url}[/red]\n")
        raise typer.Exit(1)

    if response.status_code != 200:
        console.print(
            f"\n[yellow]⚠ Server responded with status {response.status_code}[/yellow]\n"
        )
        raise typer.Exit(1)

    data = response.json()
    console.print("\n[green]✓ API server is running[/green]\n")
    console.print(f"  Status:      {data.get('status', 'unknown')}")
    console.print(f"  Version:     {data.get('version', 'unknown')}")
    console.print(f"  Timestamp:   {data.get('timestamp', 'unknown')}\n")
