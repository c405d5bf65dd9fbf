"""FormatConverter HTTP API."""

from formatconverter.api.app import create_app

__all__ = ["create_app"]
