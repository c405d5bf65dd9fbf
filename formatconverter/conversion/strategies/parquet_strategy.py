"""Parquet format strategy."""

import pyarrow as pa
import pyarrow.parquet as pq
import structlog

from formatconverter.conversion.exceptions import DecodeError, EncodeError
from formatconverter.conversion.formats import TabularFormat
from formatconverter.conversion.records import RecordSet
from formatconverter.conversion.strategies.base import BaseStrategy

logger = structlog.get_logger(__name__)


class ParquetStrategy(BaseStrategy):
    """Strategy for Apache Parquet files using pyarrow."""

    format = TabularFormat.PARQUET

    def decode(self, data: bytes) -> RecordSet:
        """Decode a Parquet file.

        Only the first row group is read unless ``read_all_row_groups`` is
        set; skipped groups are logged. Each column is read whole and its
        values are matched to rows by position.

        Args:
            data: Parquet file content

        Returns:
            RecordSet of natively typed values

        Raises:
            DecodeError: If the payload is not a readable Parquet file
        """
        try:
            parquet_file = pq.ParquetFile(pa.BufferReader(data))
            schema = parquet_file.schema_arrow
            row_groups = parquet_file.num_row_groups

            if row_groups == 0:
                table = schema.empty_table()
            elif self.config.read_all_row_groups:
                table = parquet_file.read()
            else:
                if row_groups > 1:
                    logger.warning(
                        "parquet_row_groups_skipped",
                        row_groups=row_groups,
                        skipped=row_groups - 1,
                        skipped_rows=parquet_file.metadata.num_rows
                        - parquet_file.metadata.row_group(0).num_rows,
                    )
                table = parquet_file.read_row_group(0)

            columns = [field.name for field in schema]
            column_values = [
                table.column(index).to_pylist() for index in range(table.num_columns)
            ]
        except Exception as e:
            raise DecodeError(f"Invalid Parquet file: {e}") from e

        return RecordSet.from_rows(columns, zip(*column_values))

    def encode(self, record_set: RecordSet) -> bytes:
        """Encode records as string columns in a single row group.

        A record set without columns produces an empty payload.
        """
        if not record_set.columns:
            return b""

        try:
            arrays = [
                pa.array(
                    [cell.to_text() for cell in record_set.column_values(column)],
                    type=pa.string(),
                )
                for column in record_set.columns
            ]
            table = pa.Table.from_arrays(arrays, names=list(record_set.columns))

            sink = pa.BufferOutputStream()
            pq.write_table(
                table,
                sink,
                compression=self.config.parquet_compression,
                row_group_size=max(table.num_rows, 1),
            )
        except Exception as e:
            raise EncodeError(f"Parquet writing failed: {e}") from e

        return sink.getvalue().to_pybytes()
