"""Tests for FormatConverter."""

import json

import pyarrow as pa
import pyarrow.parquet as pq
import pytest

from formatconverter.conversion.config import ConversionConfig
from formatconverter.conversion.converter import FormatConverter
from formatconverter.conversion.exceptions import ErrorKind
from formatconverter.conversion.factory import ConverterFactory
from formatconverter.conversion.result import ConversionRequest
from formatconverter.conversion.strategies import CSVStrategy, JSONStrategy


def make_request(content, target_format, filename="data.csv"):
    return ConversionRequest(
        content=content, filename=filename, target_format=target_format
    )


@pytest.fixture
def csv_converter():
    return ConverterFactory.create_converter("csv")


@pytest.fixture
def json_converter():
    return ConverterFactory.create_converter("json")


class TestCapabilities:
    """Tests for the static capability set."""

    def test_csv_converter_targets(self, csv_converter):
        assert csv_converter.supported_conversions == (
            "csv-to-json",
            "csv-to-excel",
            "csv-to-parquet",
        )

    def test_supports_is_case_insensitive(self, csv_converter):
        assert csv_converter.supports(" CSV-to-JSON ")
        assert not csv_converter.supports("json-to-csv")


class TestConvert:
    """Tests for FormatConverter.convert."""

    @pytest.mark.asyncio
    async def test_json_to_csv(self, json_converter):
        content = b'[{"a": 1, "b": "x"}, {"a": 2, "b": "y"}]'

        result = await json_converter.convert(
            make_request(content, "json-to-csv", "data.json")
        )

        assert result.success
        assert result.data == b"a,b\r\n1,x\r\n2,y\r\n"
        assert result.filename == "data.csv"
        assert result.content_type == "text/csv"
        assert result.metadata == {"recordCount": 2, "columns": ["a", "b"]}

    @pytest.mark.asyncio
    async def test_csv_to_json_keeps_text_values(self, csv_converter):
        result = await csv_converter.convert(
            make_request(b"a,b\n1,x\n", "csv-to-json")
        )

        assert result.success
        assert json.loads(result.data) == [{"a": "1", "b": "x"}]
        assert result.content_type == "application/json"
        assert result.row_count == 1

    @pytest.mark.asyncio
    async def test_csv_to_parquet_reports_row_count(self, csv_converter):
        result = await csv_converter.convert(
            make_request(b"a,b\n1,x\n2,y\n", "csv-to-parquet")
        )

        assert result.success
        assert result.metadata == {"rowCount": 2, "columns": ["a", "b"]}
        assert result.filename == "data.parquet"
        table = pq.read_table(pa.BufferReader(result.data))
        assert table.to_pylist() == [{"a": "1", "b": "x"}, {"a": "2", "b": "y"}]

    @pytest.mark.asyncio
    async def test_csv_to_excel_uses_xlsx_extension(self, csv_converter):
        result = await csv_converter.convert(
            make_request(b"a\n1\n", "csv-to-excel", "reports/q1.csv")
        )

        assert result.success
        assert result.filename == "q1.xlsx"
        assert result.content_type == (
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )

    @pytest.mark.asyncio
    async def test_records_timing_and_sizes(self, csv_converter):
        content = b"a\n1\n"

        result = await csv_converter.convert(make_request(content, "csv-to-json"))

        assert result.source_format == "csv"
        assert result.target_format == "json"
        assert result.source_size_bytes == len(content)
        assert result.dest_size_bytes == len(result.data)
        assert result.duration_seconds >= 0

    @pytest.mark.asyncio
    async def test_empty_upload(self, csv_converter):
        result = await csv_converter.convert(make_request(b"", "csv-to-json"))

        assert not result.success
        assert result.error_kind is ErrorKind.INVALID_INPUT
        assert result.error_message == "No file uploaded"

    @pytest.mark.asyncio
    async def test_file_size_limit(self):
        converter = ConverterFactory.create_converter(
            "csv", ConversionConfig(max_file_size_bytes=4)
        )

        result = await converter.convert(make_request(b"a,b\n1,2\n", "csv-to-json"))

        assert not result.success
        assert result.error_kind is ErrorKind.INVALID_INPUT
        assert "exceeds limit 4" in result.error_message

    @pytest.mark.asyncio
    async def test_unsupported_pair(self, csv_converter):
        result = await csv_converter.convert(make_request(b"a\n1\n", "json-to-csv"))

        assert not result.success
        assert result.error_kind is ErrorKind.INVALID_INPUT
        assert result.error_message == "Conversion json-to-csv not supported"
        assert result.data is None

    @pytest.mark.asyncio
    async def test_decode_failure(self, json_converter):
        result = await json_converter.convert(
            make_request(b'{"a": 1}', "json-to-csv", "data.json")
        )

        assert not result.success
        assert result.error_kind is ErrorKind.DECODE_FAILURE
        assert result.error_message.startswith("Invalid JSON format")
        assert result.filename is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "target_format", ["csv-to-json", "csv-to-excel", "csv-to-parquet"]
    )
    async def test_duplicate_header_fails_every_target(
        self, csv_converter, target_format
    ):
        result = await csv_converter.convert(
            make_request(b"a,a\n1,2\n", target_format)
        )

        assert not result.success
        assert result.error_kind is ErrorKind.DECODE_FAILURE
        assert result.error_message == "Duplicate column names: ['a']"

    @pytest.mark.asyncio
    async def test_unexpected_error_is_returned(self):
        class BrokenStrategy(JSONStrategy):
            def encode(self, record_set):
                raise RuntimeError("disk on fire")

        config = ConversionConfig()
        converter = FormatConverter(config, CSVStrategy(config), [BrokenStrategy(config)])

        result = await converter.convert(make_request(b"a\n1\n", "csv-to-json"))

        assert not result.success
        assert result.error_kind is ErrorKind.UNEXPECTED
        assert result.error_message == "disk on fire"

    @pytest.mark.asyncio
    async def test_empty_json_array(self, json_converter):
        result = await json_converter.convert(
            make_request(b"[]", "json-to-csv", "empty.json")
        )

        assert result.success
        assert result.data == b""
        assert result.metadata == {"recordCount": 0, "columns": []}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "source,target_format,content",
        [
            ("csv", "csv-to-json", b"a,b\n1,x\n"),
            ("csv", "csv-to-parquet", b"a,b\n1,x\n"),
            ("json", "json-to-csv", b'[{"a": 1, "b": true}]'),
        ],
    )
    async def test_output_is_deterministic(self, source, target_format, content):
        converter = ConverterFactory.create_converter(source)
        request = make_request(content, target_format)

        first = await converter.convert(request)
        second = await converter.convert(request)

        assert first.data == second.data
