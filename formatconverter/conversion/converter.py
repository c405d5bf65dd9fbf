"""Per-source-format converter with async execution."""

import asyncio
import time
from typing import Sequence

import structlog

from formatconverter.conversion.config import ConversionConfig
from formatconverter.conversion.exceptions import (
    ConversionError,
    ErrorKind,
    FileSizeExceededError,
    InvalidInputError,
    UnsupportedFormatError,
)
from formatconverter.conversion.formats import (
    TabularFormat,
    conversion_id,
    output_filename,
)
from formatconverter.conversion.result import ConversionRequest, ConversionResult
from formatconverter.conversion.strategies.base import BaseStrategy

logger = structlog.get_logger(__name__)


class FormatConverter:
    """Converts one source format into each of its target formats."""

    def __init__(
        self,
        config: ConversionConfig,
        source: BaseStrategy,
        targets: Sequence[BaseStrategy],
    ):
        """Initialize the converter.

        Args:
            config: Conversion configuration
            source: Strategy decoding the source format
            targets: Strategies encoding each supported target format
        """
        self.config = config
        self.source = source
        self._targets = {
            conversion_id(source.format, target.format): target for target in targets
        }

    @property
    def source_format(self) -> TabularFormat:
        return self.source.format

    @property
    def supported_conversions(self) -> tuple[str, ...]:
        """Conversion identifiers handled by this converter, in declared order."""
        return tuple(self._targets)

    def supports(self, identifier: str) -> bool:
        return identifier.strip().lower() in self._targets

    async def convert(self, request: ConversionRequest) -> ConversionResult:
        """Convert a buffered upload.

        Decoding and encoding run in a worker thread. Every failure is
        returned as an unsuccessful result rather than raised.

        Args:
            request: Upload and requested conversion identifier

        Returns:
            ConversionResult: Payload and metadata, or the error
        """
        start_time = time.time()
        identifier = (request.target_format or "").strip().lower()

        try:
            self._validate_request(request)
            target = self._resolve_target(identifier, request.target_format)

            result = await asyncio.to_thread(self._execute_conversion, request, target)
            result.duration_seconds = time.time() - start_time

            logger.info(
                "conversion_completed",
                conversion=identifier,
                filename=result.filename,
                row_count=result.row_count,
                source_size_bytes=result.source_size_bytes,
                dest_size_bytes=result.dest_size_bytes,
                duration_seconds=round(result.duration_seconds, 4),
            )
            return result

        except ConversionError as e:
            logger.warning(
                "conversion_failed",
                conversion=identifier,
                error_kind=e.kind.value,
                error=str(e),
            )
            return self._failure(request, identifier, str(e), e.kind, start_time)

        except Exception as e:
            logger.error(
                "conversion_error",
                conversion=identifier,
                error_type=type(e).__name__,
                error=str(e),
                exc_info=True,
            )
            return self._failure(
                request,
                identifier,
                str(e) or type(e).__name__,
                ErrorKind.UNEXPECTED,
                start_time,
            )

    def _validate_request(self, request: ConversionRequest) -> None:
        """Validate the upload before conversion.

        Raises:
            InvalidInputError: If no file content was uploaded
            FileSizeExceededError: If file exceeds size limit
        """
        if not request.content:
            raise InvalidInputError("No file uploaded")

        if request.size_bytes > self.config.max_file_size_bytes:
            raise FileSizeExceededError(
                f"File size {request.size_bytes} exceeds limit "
                f"{self.config.max_file_size_bytes}"
            )

    def _resolve_target(self, identifier: str, requested: str) -> BaseStrategy:
        """Find the target strategy for an identifier.

        Raises:
            UnsupportedFormatError: If this converter does not handle it
        """
        target = self._targets.get(identifier)
        if target is None:
            raise UnsupportedFormatError(f"Conversion {requested} not supported")
        return target

    def _execute_conversion(
        self,
        request: ConversionRequest,
        target: BaseStrategy,
    ) -> ConversionResult:
        """Blocking decode and encode (runs in a worker thread)."""
        record_set = self.source.decode(request.content)
        data = target.encode(record_set)

        if TabularFormat.JSON in (self.source.format, target.format):
            count_key = "recordCount"
        else:
            count_key = "rowCount"

        return ConversionResult(
            success=True,
            data=data,
            filename=output_filename(request.filename, target.format),
            content_type=target.format.content_type,
            metadata={
                count_key: record_set.row_count,
                "columns": list(record_set.columns),
            },
            source_format=self.source.format.value,
            target_format=target.format.value,
            source_size_bytes=request.size_bytes,
        )

    def _failure(
        self,
        request: ConversionRequest,
        identifier: str,
        message: str,
        kind: ErrorKind,
        start_time: float,
    ) -> ConversionResult:
        return ConversionResult.failure(
            message,
            kind,
            source_format=self.source.format.value,
            target_format=identifier.partition("-to-")[2],
            source_size_bytes=request.size_bytes,
            duration_seconds=time.time() - start_time,
        )
