"""Request and result models for file conversion operations."""

from dataclasses import dataclass, field
from typing import Any, Optional

from formatconverter.conversion.exceptions import ErrorKind


@dataclass
class ConversionRequest:
    """A buffered upload and the conversion asked of it."""

    content: bytes
    filename: str
    target_format: str
    # Accepted and carried for future per-format knobs; no converter reads it
    options: dict[str, str] = field(default_factory=dict)

    @property
    def size_bytes(self) -> int:
        return len(self.content)


@dataclass
class ConversionResult:
    """Result of a conversion operation.

    A successful result carries the payload, a failed one carries the
    error; never both.
    """

    success: bool

    data: Optional[bytes] = None
    filename: Optional[str] = None
    content_type: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    source_format: str = ""
    target_format: str = ""
    source_size_bytes: int = 0
    duration_seconds: float = 0.0

    error_message: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    def __post_init__(self):
        """Validate that payload and error are mutually exclusive."""
        if self.success:
            if self.data is None or self.content_type is None:
                raise ValueError("successful result requires data and content_type")
            if self.error_message is not None:
                raise ValueError("successful result cannot carry an error")
        else:
            if not self.error_message:
                raise ValueError("failed result requires an error_message")
            if self.data is not None:
                raise ValueError("failed result cannot carry data")
            if self.error_kind is None:
                self.error_kind = ErrorKind.UNEXPECTED

    @classmethod
    def failure(
        cls,
        message: str,
        kind: ErrorKind = ErrorKind.UNEXPECTED,
        **kwargs: Any,
    ) -> "ConversionResult":
        """Build a failed result."""
        return cls(success=False, error_message=message, error_kind=kind, **kwargs)

    @property
    def dest_size_bytes(self) -> int:
        return len(self.data) if self.data is not None else 0

    @property
    def row_count(self) -> int:
        """Row or record count reported in metadata."""
        return self.metadata.get("recordCount", self.metadata.get("rowCount", 0))

    @property
    def size_ratio(self) -> float:
        """Calculate output size relative to input size."""
        if self.source_size_bytes == 0:
            return 0.0
        return self.dest_size_bytes / self.source_size_bytes

    @property
    def throughput_mbps(self) -> float:
        """Calculate throughput in MB/s."""
        if self.duration_seconds == 0:
            return 0.0
        mb = self.source_size_bytes / 1024**2
        return mb / self.duration_seconds
