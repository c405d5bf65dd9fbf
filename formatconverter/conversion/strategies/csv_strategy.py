"""CSV format strategy."""

import csv
import io

from formatconverter.conversion.exceptions import DecodeError, EncodeError
from formatconverter.conversion.formats import TabularFormat
from formatconverter.conversion.records import RecordSet
from formatconverter.conversion.strategies.base import BaseStrategy


class CSVStrategy(BaseStrategy):
    """Strategy for reading and writing comma-separated values."""

    format = TabularFormat.CSV

    def decode(self, data: bytes) -> RecordSet:
        """Decode CSV into text-valued records.

        The first non-blank row is the header. Values are kept as text, blank
        lines are skipped, short rows are padded with nulls and surplus fields
        are dropped.

        Args:
            data: CSV file content

        Returns:
            RecordSet keyed by the header names

        Raises:
            DecodeError: If the file has no header or is malformed
        """
        text = self._decode_text(data)

        try:
            reader = csv.reader(io.StringIO(text, newline=""))
            header = next((row for row in reader if row), None)
            if not header:
                raise DecodeError("No headers found in CSV file")

            rows = [row for row in reader if row]
        except csv.Error as e:
            raise DecodeError(f"CSV parsing failed: {e}") from e

        return RecordSet.from_rows(header, rows)

    def encode(self, record_set: RecordSet) -> bytes:
        """Encode records as CSV with a header row and CRLF line endings.

        A record set without columns produces an empty payload.
        """
        if not record_set.columns:
            return b""

        buffer = io.StringIO(newline="")
        try:
            writer = csv.writer(buffer, lineterminator="\r\n")
            writer.writerow(record_set.columns)
            for row in record_set.rows():
                writer.writerow([cell.to_text() for cell in row])
        except csv.Error as e:
            raise EncodeError(f"CSV writing failed: {e}") from e

        return buffer.getvalue().encode("utf-8")
