"""Format strategies.

Each strategy reads one tabular format into a RecordSet and writes a
RecordSet back out in that format.
"""

from formatconverter.conversion.strategies.base import BaseStrategy
from formatconverter.conversion.strategies.csv_strategy import CSVStrategy
from formatconverter.conversion.strategies.excel_strategy import ExcelStrategy
from formatconverter.conversion.strategies.json_strategy import JSONStrategy
from formatconverter.conversion.strategies.parquet_strategy import ParquetStrategy

__all__ = [
    "BaseStrategy",
    "CSVStrategy",
    "ExcelStrategy",
    "JSONStrategy",
    "ParquetStrategy",
]
