"""File conversion module for FormatConverter.

This module converts tabular files between CSV, JSON, Excel (XLSX) and
Parquet by decoding the source into a common record model and encoding it
into the target layout.
"""

from formatconverter.conversion.config import ConversionConfig
from formatconverter.conversion.exceptions import (
    ConversionError,
    DecodeError,
    EncodeError,
    ErrorKind,
    FileSizeExceededError,
    InvalidInputError,
    UnsupportedFormatError,
)
from formatconverter.conversion.formats import TabularFormat, output_filename
from formatconverter.conversion.records import RecordSet, TabularRecord
from formatconverter.conversion.result import ConversionRequest, ConversionResult
from formatconverter.conversion.values import CellKind, CellValue
from formatconverter.conversion.converter import FormatConverter
from formatconverter.conversion.dispatcher import ConversionDispatcher

__all__ = [
    "CellKind",
    "CellValue",
    "ConversionConfig",
    "ConversionDispatcher",
    "ConversionError",
    "ConversionRequest",
    "ConversionResult",
    "DecodeError",
    "EncodeError",
    "ErrorKind",
    "FileSizeExceededError",
    "FormatConverter",
    "InvalidInputError",
    "RecordSet",
    "TabularFormat",
    "TabularRecord",
    "UnsupportedFormatError",
    "output_filename",
]
