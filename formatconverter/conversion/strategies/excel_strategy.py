"""Excel (XLSX) format strategy."""

import io
from typing import Any

import openpyxl
from openpyxl.cell import WriteOnlyCell
from openpyxl.cell.cell import Cell

from formatconverter.conversion.exceptions import DecodeError, EncodeError
from formatconverter.conversion.formats import TabularFormat
from formatconverter.conversion.records import RecordSet
from formatconverter.conversion.strategies.base import BaseStrategy
from formatconverter.conversion.values import CellValue


class ExcelStrategy(BaseStrategy):
    """Strategy for XLSX workbooks using openpyxl."""

    format = TabularFormat.EXCEL

    def decode(self, data: bytes) -> RecordSet:
        """Decode the first worksheet of a workbook.

        Rows without any value are skipped. The first remaining row is the
        header; later rows are matched to it by column index. Cached
        formula results are read rather than the formulas themselves.

        Args:
            data: XLSX file content

        Returns:
            RecordSet with native cell types; empty when the sheet is empty

        Raises:
            DecodeError: If the workbook cannot be read
        """
        try:
            workbook = openpyxl.load_workbook(
                io.BytesIO(data), read_only=True, data_only=True
            )
        except Exception as e:
            raise DecodeError(f"Invalid Excel workbook: {e}") from e

        try:
            if not workbook.worksheets:
                raise DecodeError("Excel workbook has no worksheets")

            worksheet = workbook.worksheets[0]
            used_rows = [
                row
                for row in worksheet.iter_rows(values_only=True)
                if any(value is not None for value in row)
            ]
        except DecodeError:
            raise
        except Exception as e:
            raise DecodeError(f"Failed to read Excel worksheet: {e}") from e
        finally:
            workbook.close()

        if not used_rows:
            return RecordSet()

        header = list(used_rows[0])
        while header and header[-1] is None:
            header.pop()

        columns = [CellValue.of(value).to_text() for value in header]
        return RecordSet.from_rows(columns, used_rows[1:])

    def encode(self, record_set: RecordSet) -> bytes:
        """Encode records into a single-sheet workbook.

        Header at A1, one row per record, every value written as text.
        """
        try:
            workbook = openpyxl.Workbook(write_only=True)
            worksheet = workbook.create_sheet(title=self.config.sheet_name)

            if record_set.columns:
                worksheet.append(
                    [self._text_cell(worksheet, name) for name in record_set.columns]
                )
                for row in record_set.rows():
                    worksheet.append(
                        [self._text_cell(worksheet, cell.to_excel()) for cell in row]
                    )

            buffer = io.BytesIO()
            workbook.save(buffer)
        except Exception as e:
            raise EncodeError(f"Excel writing failed: {e}") from e

        return buffer.getvalue()

    @staticmethod
    def _text_cell(worksheet: Any, value: str | None) -> Cell | None:
        """Wrap a value so leading "=" is stored as text, not a formula."""
        if value is None:
            return None

        cell = WriteOnlyCell(worksheet, value=value)
        cell.data_type = "s"
        return cell
