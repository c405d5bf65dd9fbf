"""Cell values shared by every tabular format.

A cell is one of a closed set of kinds. Each kind has a fixed rendering per
output family:

- ``to_text`` feeds CSV, Parquet string columns and Excel cells
- ``to_json`` feeds JSON output and keeps numbers and booleans native
- ``to_excel`` feeds worksheet cells, leaving nulls as empty cells
"""

import base64
import json
import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any


class CellKind(str, Enum):
    """Kinds of value a tabular cell can hold."""

    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    DURATION = "duration"
    NULL = "null"


@dataclass(frozen=True)
class CellValue:
    """A single tagged cell value."""

    kind: CellKind
    value: Any = None

    @classmethod
    def of(cls, raw: Any) -> "CellValue":
        """Classify a native Python value.

        Args:
            raw: Value produced by a decoder (json, csv, openpyxl, pyarrow)

        Returns:
            CellValue with the matching kind
        """
        if raw is None:
            return NULL
        if isinstance(raw, CellValue):
            return raw
        # bool before int: bool is an int subclass
        if isinstance(raw, bool):
            return cls(CellKind.BOOLEAN, raw)
        if isinstance(raw, (int, float, Decimal)):
            return cls(CellKind.NUMBER, raw)
        if isinstance(raw, (datetime, date, time)):
            return cls(CellKind.DATETIME, raw)
        if isinstance(raw, timedelta):
            return cls(CellKind.DURATION, raw)
        if isinstance(raw, str):
            return cls(CellKind.TEXT, raw)
        if isinstance(raw, (bytes, bytearray, memoryview)):
            return cls(CellKind.TEXT, base64.b64encode(bytes(raw)).decode("ascii"))
        if isinstance(raw, (list, tuple, dict)):
            return cls(
                CellKind.TEXT,
                json.dumps(raw, default=str, ensure_ascii=False, separators=(",", ":")),
            )
        return cls(CellKind.TEXT, str(raw))

    @classmethod
    def text(cls, value: str) -> "CellValue":
        """Build a TEXT cell."""
        return cls(CellKind.TEXT, value)

    @property
    def is_null(self) -> bool:
        return self.kind is CellKind.NULL

    def to_text(self) -> str:
        """Render the value as plain text."""
        if self.kind is CellKind.NULL:
            return ""
        if self.kind is CellKind.BOOLEAN:
            return "true" if self.value else "false"
        if self.kind is CellKind.NUMBER:
            return _format_number(self.value)
        if self.kind is CellKind.DATETIME:
            return self.value.isoformat()
        if self.kind is CellKind.DURATION:
            return _format_duration(self.value)
        return self.value

    def to_json(self) -> Any:
        """Render the value as a JSON-serializable object."""
        if self.kind is CellKind.NULL:
            return None
        if self.kind is CellKind.BOOLEAN:
            return self.value
        if self.kind is CellKind.NUMBER:
            return _json_number(self.value)
        if self.kind in (CellKind.DATETIME, CellKind.DURATION):
            return self.to_text()
        return self.value

    def to_excel(self) -> str | None:
        """Render the value for a worksheet cell."""
        if self.kind is CellKind.NULL:
            return None
        return self.to_text()


NULL = CellValue(CellKind.NULL)


def _format_number(value: int | float | Decimal) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, float):
        return repr(value)
    return str(value)


def _json_number(value: int | float | Decimal) -> int | float | None:
    if isinstance(value, Decimal):
        if not value.is_finite():
            return None
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _format_duration(delta: timedelta) -> str:
    """Format as [-]H:MM:SS[.ffffff] with unbounded hours."""
    sign = "-" if delta < timedelta(0) else ""
    delta = abs(delta)

    total_seconds = delta.days * 86400 + delta.seconds
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)

    text = f"{sign}{hours}:{minutes:02d}:{seconds:02d}"
    if delta.microseconds:
        text += f".{delta.microseconds:06d}"
    return text
