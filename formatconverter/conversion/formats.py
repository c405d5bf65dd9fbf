"""Tabular format definitions and conversion identifiers."""

import re
from enum import Enum
from pathlib import PurePath

from formatconverter.conversion.exceptions import UnsupportedFormatError

DEFAULT_STEM = "upload"
FALLBACK_EXTENSION = ".bin"


class TabularFormat(str, Enum):
    """Supported tabular file formats."""

    CSV = "csv"
    JSON = "json"
    EXCEL = "excel"
    PARQUET = "parquet"

    @property
    def content_type(self) -> str:
        """Get MIME content type for format."""
        content_types = {
            TabularFormat.CSV: "text/csv",
            TabularFormat.JSON: "application/json",
            TabularFormat.EXCEL: (
                "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
            ),
            TabularFormat.PARQUET: "application/octet-stream",
        }
        return content_types[self]

    @property
    def extension(self) -> str:
        """Get file extension for format."""
        extensions = {
            TabularFormat.CSV: ".csv",
            TabularFormat.JSON: ".json",
            TabularFormat.EXCEL: ".xlsx",
            TabularFormat.PARQUET: ".parquet",
        }
        return extensions[self]


_EXTENSIONS_BY_NAME = {
    "json": ".json",
    "csv": ".csv",
    "parquet": ".parquet",
    "excel": ".xlsx",
    "xlsx": ".xlsx",
}


def conversion_id(source: TabularFormat, target: TabularFormat) -> str:
    """Build a "<source>-to-<target>" identifier."""
    return f"{source.value}-to-{target.value}"


def parse_conversion_id(identifier: str) -> tuple[TabularFormat, TabularFormat]:
    """Split a "<source>-to-<target>" identifier into formats.

    Raises:
        UnsupportedFormatError: If either side is not a known format
    """
    source, separator, target = identifier.strip().lower().partition("-to-")
    if not separator:
        raise UnsupportedFormatError(f"Unsupported conversion format: {identifier}")

    try:
        return TabularFormat(source), TabularFormat(target)
    except ValueError as e:
        raise UnsupportedFormatError(
            f"Unsupported conversion format: {identifier}"
        ) from e


def output_filename(source_name: str | None, target: str | TabularFormat) -> str:
    """Replace the extension of an uploaded file name.

    Args:
        source_name: Original file name, possibly with a client-side path
        target: Target format or format name ("json", "csv", "parquet",
            "excel"/"xlsx"); anything else maps to ".bin"

    Returns:
        Output file name
    """
    name = re.split(r"[\\/]", source_name or "")[-1]
    stem = PurePath(name).stem if name else DEFAULT_STEM

    key = target.value if isinstance(target, TabularFormat) else str(target).lower()
    return stem + _EXTENSIONS_BY_NAME.get(key, FALLBACK_EXTENSION)


def format_from_extension(filename: str) -> TabularFormat:
    """Infer a tabular format from a file extension.

    Raises:
        UnsupportedFormatError: If the extension is not recognised
    """
    suffix = PurePath(filename).suffix.lower()
    for file_format in TabularFormat:
        if file_format.extension == suffix:
            return file_format

    raise UnsupportedFormatError(f"Unsupported file format: {suffix or filename}")
