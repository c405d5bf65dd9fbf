"""FormatConverter command-line interface."""

from formatconverter.cli.main import app, main_cli

__all__ = ["app", "main_cli"]
