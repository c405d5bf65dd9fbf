"""Tabular record model used between decoding and encoding."""

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Literal, Mapping, Sequence

import structlog

from formatconverter.conversion.exceptions import DecodeError
from formatconverter.conversion.values import NULL, CellValue

logger = structlog.get_logger(__name__)

TabularRecord = dict[str, CellValue]


@dataclass
class RecordSet:
    """Ordered columns plus the records of one conversion.

    Column order comes from the first record (or the header row) and drives
    every fixed-layout output.
    """

    columns: list[str] = field(default_factory=list)
    records: list[TabularRecord] = field(default_factory=list)

    @classmethod
    def from_records(
        cls,
        records: Sequence[Mapping[str, Any]],
        policy: Literal["pad", "strict"] = "pad",
    ) -> "RecordSet":
        """Build a record set from keyed records.

        The first record defines the columns. With ``pad`` missing keys
        become NULL and keys unknown to the first record are dropped; with
        ``strict`` any differing key set is rejected.

        Args:
            records: Mappings of column name to native or cell value
            policy: Heterogeneous record handling

        Returns:
            Normalized RecordSet

        Raises:
            DecodeError: If policy is strict and key sets differ
        """
        if not records:
            return cls()

        columns = list(records[0].keys())
        expected = set(columns)
        normalized: list[TabularRecord] = []
        dropped = 0

        for index, record in enumerate(records):
            keys = set(record.keys())
            if keys != expected:
                if policy == "strict":
                    missing = sorted(expected - keys)
                    extra = sorted(keys - expected)
                    raise DecodeError(
                        f"Record {index} does not match the columns of the first "
                        f"record (missing: {missing}, unexpected: {extra})"
                    )
                dropped += len(keys - expected)

            normalized.append(
                {column: CellValue.of(record.get(column)) for column in columns}
            )

        if dropped:
            logger.debug("record_keys_dropped", count=dropped, columns=len(columns))

        return cls(columns=columns, records=normalized)

    @classmethod
    def from_rows(
        cls,
        columns: Sequence[str],
        rows: Iterable[Sequence[Any]],
    ) -> "RecordSet":
        """Build a record set from positional rows.

        Cells are matched to columns by index. Short rows are padded with
        NULL, surplus cells are ignored.

        Raises:
            DecodeError: If a column name appears more than once
        """
        columns = list(columns)
        duplicates = sorted({name for name in columns if columns.count(name) > 1})
        if duplicates:
            raise DecodeError(f"Duplicate column names: {duplicates}")
        records: list[TabularRecord] = []

        for row in rows:
            record: TabularRecord = {}
            for index, column in enumerate(columns):
                record[column] = CellValue.of(row[index]) if index < len(row) else NULL
            records.append(record)

        return cls(columns=columns, records=records)

    def __len__(self) -> int:
        return len(self.records)

    @property
    def row_count(self) -> int:
        return len(self.records)

    def rows(self) -> Iterator[list[CellValue]]:
        """Iterate records as cell lists in column order."""
        for record in self.records:
            yield [record.get(column, NULL) for column in self.columns]

    def column_values(self, column: str) -> list[CellValue]:
        """Return every cell of one column."""
        return [record.get(column, NULL) for record in self.records]

    def to_json_objects(self) -> list[dict[str, Any]]:
        """Return records as JSON-ready dictionaries."""
        return [
            {column: record.get(column, NULL).to_json() for column in self.columns}
            for record in self.records
        ]
