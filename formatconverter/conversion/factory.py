"""Factory for creating format strategies and converters."""

from typing import Optional

from formatconverter.conversion.config import ConversionConfig
from formatconverter.conversion.converter import FormatConverter
from formatconverter.conversion.exceptions import UnsupportedFormatError
from formatconverter.conversion.formats import TabularFormat
from formatconverter.conversion.strategies.base import BaseStrategy
from formatconverter.conversion.strategies.csv_strategy import CSVStrategy
from formatconverter.conversion.strategies.excel_strategy import ExcelStrategy
from formatconverter.conversion.strategies.json_strategy import JSONStrategy
from formatconverter.conversion.strategies.parquet_strategy import ParquetStrategy


class ConverterFactory:
    """Factory for creating format-specific converters."""

    STRATEGIES = {
        TabularFormat.CSV: CSVStrategy,
        TabularFormat.JSON: JSONStrategy,
        TabularFormat.EXCEL: ExcelStrategy,
        TabularFormat.PARQUET: ParquetStrategy,
    }

    # Registration order of the default converters
    SOURCE_ORDER = (
        TabularFormat.CSV,
        TabularFormat.JSON,
        TabularFormat.EXCEL,
        TabularFormat.PARQUET,
    )

    @staticmethod
    def create_strategy(
        file_format: TabularFormat | str,
        config: Optional[ConversionConfig] = None,
    ) -> BaseStrategy:
        """Create the strategy for a format.

        Args:
            file_format: Format or format name
            config: Optional conversion configuration

        Returns:
            BaseStrategy: Configured strategy

        Raises:
            UnsupportedFormatError: If format not supported
        """
        if config is None:
            config = ConversionConfig()

        name = (
            file_format.value
            if isinstance(file_format, TabularFormat)
            else str(file_format).strip().lower()
        )
        try:
            file_format = TabularFormat(name)
        except ValueError as e:
            raise UnsupportedFormatError(
                f"Unsupported file format: {file_format}. "
                f"Supported: {[f.value for f in TabularFormat]}"
            ) from e

        return ConverterFactory.STRATEGIES[file_format](config)

    @staticmethod
    def create_converter(
        source_format: TabularFormat | str,
        config: Optional[ConversionConfig] = None,
    ) -> FormatConverter:
        """Create a converter from one format to every other format.

        Args:
            source_format: Format the converter decodes
            config: Optional conversion configuration

        Returns:
            FormatConverter: Configured converter

        Raises:
            UnsupportedFormatError: If format not supported
        """
        if config is None:
            config = ConversionConfig()

        source = ConverterFactory.create_strategy(source_format, config)
        targets = [
            ConverterFactory.create_strategy(target, config)
            for target in TabularFormat
            if target is not source.format
        ]
        return FormatConverter(config, source, targets)

    @staticmethod
    def create_default_converters(
        config: Optional[ConversionConfig] = None,
    ) -> list[FormatConverter]:
        """Create one converter per supported source format."""
        if config is None:
            config = ConversionConfig()

        return [
            ConverterFactory.create_converter(source, config)
            for source in ConverterFactory.SOURCE_ORDER
        ]

