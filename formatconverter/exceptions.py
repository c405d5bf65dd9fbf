"""Application-level exceptions for FormatConverter."""

from typing import Any


class FormatConverterError(Exception):
    """Base exception for all FormatConverter errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class ConfigurationError(FormatConverterError):
    """Configuration-related errors."""

    pass


class OutputWriteError(FormatConverterError):
    """Converted payload could not be written to its destination."""

    def __init__(self, path: str, details: str) -> None:
        super().__init__(f"Failed to write {path}: {details}", path=path, details=details)
