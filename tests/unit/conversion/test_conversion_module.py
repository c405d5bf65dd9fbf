"""Tests for conversion configuration, exceptions, results and formats."""

import pytest

from formatconverter.conversion import (
    ConversionConfig,
    ConversionError,
    ConversionResult,
    DecodeError,
    EncodeError,
    ErrorKind,
    FileSizeExceededError,
    InvalidInputError,
    TabularFormat,
    UnsupportedFormatError,
    output_filename,
)
from formatconverter.conversion.factory import ConverterFactory
from formatconverter.conversion.formats import (
    format_from_extension,
    parse_conversion_id,
)
from formatconverter.conversion.strategies import ExcelStrategy, ParquetStrategy


class TestConversionConfig:
    """Tests for ConversionConfig."""

    def test_default_config(self):
        config = ConversionConfig()

        assert config.json_indent == 2
        assert config.sheet_name == "Sheet1"
        assert config.parquet_compression == "snappy"
        assert config.read_all_row_groups is False
        assert config.schema_policy == "pad"
        assert config.max_file_size_bytes == 1024**3

    def test_invalid_indent(self):
        with pytest.raises(ValueError, match="json_indent must be >= 0"):
            ConversionConfig(json_indent=-1)

    def test_invalid_compression(self):
        with pytest.raises(ValueError, match="Unsupported parquet_compression"):
            ConversionConfig(parquet_compression="lz77")

    def test_invalid_schema_policy(self):
        with pytest.raises(ValueError, match="Unsupported schema_policy"):
            ConversionConfig(schema_policy="merge")

    def test_invalid_file_size(self):
        with pytest.raises(ValueError, match="max_file_size_bytes must be >= 1"):
            ConversionConfig(max_file_size_bytes=0)


class TestConversionExceptions:
    """Tests for the conversion exception hierarchy."""

    @pytest.mark.parametrize(
        "exc_class,kind",
        [
            (ConversionError, ErrorKind.UNEXPECTED),
            (InvalidInputError, ErrorKind.INVALID_INPUT),
            (UnsupportedFormatError, ErrorKind.INVALID_INPUT),
            (FileSizeExceededError, ErrorKind.INVALID_INPUT),
            (DecodeError, ErrorKind.DECODE_FAILURE),
            (EncodeError, ErrorKind.ENCODE_FAILURE),
        ],
    )
    def test_kinds(self, exc_class, kind):
        error = exc_class("boom")

        assert isinstance(error, ConversionError)
        assert error.kind is kind
        assert str(error) == "boom"


class TestConversionResult:
    """Tests for ConversionResult."""

    def test_successful_result(self):
        result = ConversionResult(
            success=True,
            data=b"12345",
            filename="out.csv",
            content_type="text/csv",
            metadata={"rowCount": 3, "columns": ["a"]},
            source_size_bytes=10,
            duration_seconds=0.5,
        )

        assert result.dest_size_bytes == 5
        assert result.row_count == 3
        assert result.size_ratio == 0.5
        assert result.error_message is None

    def test_failed_result(self):
        result = ConversionResult.failure("bad input", ErrorKind.INVALID_INPUT)

        assert not result.success
        assert result.data is None
        assert result.error_kind is ErrorKind.INVALID_INPUT
        assert result.row_count == 0

    def test_failure_defaults_to_unexpected(self):
        result = ConversionResult(success=False, error_message="oops")

        assert result.error_kind is ErrorKind.UNEXPECTED

    def test_success_requires_payload(self):
        with pytest.raises(ValueError, match="requires data"):
            ConversionResult(success=True)

    def test_success_cannot_carry_error(self):
        with pytest.raises(ValueError, match="cannot carry an error"):
            ConversionResult(
                success=True,
                data=b"",
                content_type="text/csv",
                error_message="no",
            )

    def test_failure_requires_message(self):
        with pytest.raises(ValueError, match="requires an error_message"):
            ConversionResult(success=False)

    def test_failure_cannot_carry_data(self):
        with pytest.raises(ValueError, match="cannot carry data"):
            ConversionResult(success=False, data=b"x", error_message="no")

    def test_size_ratio_zero_source(self):
        result = ConversionResult(success=True, data=b"x", content_type="text/csv")

        assert result.size_ratio == 0.0

    def test_throughput_mbps(self):
        result = ConversionResult(
            success=True,
            data=b"x",
            content_type="text/csv",
            source_size_bytes=2 * 1024**2,
            duration_seconds=2.0,
        )

        assert result.throughput_mbps == 1.0

    def test_throughput_mbps_zero_duration(self):
        result = ConversionResult(success=True, data=b"x", content_type="text/csv")

        assert result.throughput_mbps == 0.0


class TestFormats:
    """Tests for format names, identifiers and file names."""

    def test_content_types(self):
        assert TabularFormat.CSV.content_type == "text/csv"
        assert TabularFormat.JSON.content_type == "application/json"
        assert TabularFormat.PARQUET.content_type == "application/octet-stream"
        assert TabularFormat.EXCEL.content_type.endswith("spreadsheetml.sheet")

    @pytest.mark.parametrize(
        "source_name,target,expected",
        [
            ("data.csv", "json", "data.json"),
            ("data.json", "csv", "data.csv"),
            ("data.csv", "parquet", "data.parquet"),
            ("data.csv", "excel", "data.xlsx"),
            ("data.csv", "xlsx", "data.xlsx"),
            ("data.csv", "yaml", "data.bin"),
            ("archive.tar.csv", TabularFormat.JSON, "archive.tar.json"),
            ("C:\\Users\\me\\sales.csv", "json", "sales.json"),
            ("", "json", "upload.json"),
            (None, "csv", "upload.csv"),
        ],
    )
    def test_output_filename(self, source_name, target, expected):
        assert output_filename(source_name, target) == expected

    def test_parse_conversion_id(self):
        assert parse_conversion_id("Excel-to-JSON") == (
            TabularFormat.EXCEL,
            TabularFormat.JSON,
        )

    @pytest.mark.parametrize("identifier", ["csv", "csv-to-yaml", "xml-to-csv"])
    def test_parse_conversion_id_rejects(self, identifier):
        with pytest.raises(UnsupportedFormatError, match=identifier):
            parse_conversion_id(identifier)

    def test_format_from_extension(self):
        assert format_from_extension("report.XLSX") is TabularFormat.EXCEL
        assert format_from_extension("data.parquet") is TabularFormat.PARQUET

    def test_format_from_unknown_extension(self):
        with pytest.raises(UnsupportedFormatError, match=".txt"):
            format_from_extension("notes.txt")


class TestConverterFactory:
    """Tests for ConverterFactory."""

    def test_create_strategy(self):
        strategy = ConverterFactory.create_strategy("EXCEL")

        assert isinstance(strategy, ExcelStrategy)
        assert strategy.config == ConversionConfig()

    def test_create_strategy_with_config(self):
        config = ConversionConfig(read_all_row_groups=True)

        strategy = ConverterFactory.create_strategy(TabularFormat.PARQUET, config)

        assert isinstance(strategy, ParquetStrategy)
        assert strategy.config is config

    def test_create_strategy_unsupported(self):
        with pytest.raises(UnsupportedFormatError, match="Unsupported file format"):
            ConverterFactory.create_strategy("yaml")

    def test_create_converter(self):
        converter = ConverterFactory.create_converter("parquet")

        assert converter.source_format is TabularFormat.PARQUET
        assert converter.supported_conversions == (
            "parquet-to-csv",
            "parquet-to-json",
            "parquet-to-excel",
        )

    def test_default_converters_order(self):
        converters = ConverterFactory.create_default_converters()

        assert [c.source_format for c in converters] == [
            TabularFormat.CSV,
            TabularFormat.JSON,
            TabularFormat.EXCEL,
            TabularFormat.PARQUET,
        ]
