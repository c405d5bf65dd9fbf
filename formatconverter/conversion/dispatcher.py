"""Routing of conversion requests to registered converters."""

from typing import Optional, Sequence

import structlog

from formatconverter.conversion.config import ConversionConfig
from formatconverter.conversion.converter import FormatConverter
from formatconverter.conversion.exceptions import ErrorKind
from formatconverter.conversion.factory import ConverterFactory
from formatconverter.conversion.result import ConversionRequest, ConversionResult

logger = structlog.get_logger(__name__)


class ConversionDispatcher:
    """Routes "<source>-to-<target>" identifiers to converters.

    The route table is resolved once, at construction. When several
    converters declare the same identifier the first registered wins.
    """

    def __init__(self, converters: Sequence[FormatConverter]):
        """Initialize the dispatcher.

        Args:
            converters: Converters in registration order
        """
        self.converters = list(converters)
        self._routes: dict[str, FormatConverter] = {}

        for converter in self.converters:
            for identifier in converter.supported_conversions:
                self._routes.setdefault(identifier, converter)

        logger.debug(
            "dispatcher_initialized",
            converters=len(self.converters),
            routes=len(self._routes),
        )

    @classmethod
    def default(cls, config: Optional[ConversionConfig] = None) -> "ConversionDispatcher":
        """Create a dispatcher with the CSV, JSON, Excel and Parquet converters."""
        return cls(ConverterFactory.create_default_converters(config))

    def list_supported_formats(self) -> list[str]:
        """Return every supported identifier, sorted and deduplicated."""
        return sorted(self._routes)

    def resolve(self, target_format: str) -> Optional[FormatConverter]:
        """Return the converter registered for an identifier, if any."""
        return self._routes.get(target_format.strip().lower())

    async def convert(self, request: ConversionRequest) -> ConversionResult:
        """Route a request to its converter.

        Missing input and unknown identifiers are reported as INVALID_INPUT
        failures without invoking any converter. Otherwise the converter's
        result is returned unchanged.

        Args:
            request: Upload and requested conversion identifier

        Returns:
            ConversionResult from the converter, or the routing failure
        """
        if not request.content:
            return ConversionResult.failure("No file uploaded", ErrorKind.INVALID_INPUT)

        if not request.target_format or not request.target_format.strip():
            return ConversionResult.failure(
                "Target format is required", ErrorKind.INVALID_INPUT
            )

        converter = self.resolve(request.target_format)
        if converter is None:
            logger.info(
                "unsupported_conversion_requested",
                target_format=request.target_format,
            )
            return ConversionResult.failure(
                f"Unsupported conversion format: {request.target_format}",
                ErrorKind.INVALID_INPUT,
                source_size_bytes=request.size_bytes,
            )

        return await converter.convert(request)
