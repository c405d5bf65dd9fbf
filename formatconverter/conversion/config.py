"""Configuration for file conversion operations."""

from dataclasses import dataclass
from typing import Literal


@dataclass
class ConversionConfig:
    """Configuration shared by every format strategy."""

    json_indent: int = 2
    sheet_name: str = "Sheet1"

    parquet_compression: Literal["snappy", "zstd", "gzip", "none"] = "snappy"
    read_all_row_groups: bool = False

    schema_policy: Literal["pad", "strict"] = "pad"

    max_file_size_bytes: int = 1024**3

    def __post_init__(self):
        """Validate configuration."""
        if self.json_indent < 0:
            raise ValueError("json_indent must be >= 0")
        if not self.sheet_name:
            raise ValueError("sheet_name must not be empty")
        if self.parquet_compression not in ("snappy", "zstd", "gzip", "none"):
            raise ValueError(
                f"Unsupported parquet_compression: {self.parquet_compression}"
            )
        if self.schema_policy not in ("pad", "strict"):
            raise ValueError(f"Unsupported schema_policy: {self.schema_policy}")
        if self.max_file_size_bytes < 1:
            raise ValueError("max_file_size_bytes must be >= 1")
