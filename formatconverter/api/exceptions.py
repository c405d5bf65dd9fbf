"""HTTP exceptions for the FormatConverter API.

Every exception here is rendered as a plain-text body by the handlers
registered in ``formatconverter.api.app``.
"""

from typing import Optional

from fastapi import HTTPException, status

from formatconverter.conversion.exceptions import ErrorKind
from formatconverter.conversion.result import ConversionResult

GENERIC_ERROR_MESSAGE = "An error occurred while processing your request"


class FormatConverterAPIException(HTTPException):
    """Base API exception; ``detail`` is the response body."""

    error_kind: Optional[ErrorKind] = None

    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)


class BadRequestException(FormatConverterAPIException):
    """Missing upload, blank identifier or malformed form field (400)."""

    error_kind = ErrorKind.INVALID_INPUT

    def __init__(self, detail: str):
        super().__init__(status.HTTP_400_BAD_REQUEST, detail)


class ConversionFailedException(BadRequestException):
    """A dispatcher or converter returned a failed result (400).

    The body is the result's message; the error kind is kept for logging.
    """

    def __init__(self, result: ConversionResult):
        super().__init__(result.error_message or "Conversion failed")
        self.error_kind = result.error_kind


class InternalServerException(FormatConverterAPIException):
    """Unexpected fault while handling a conversion (500).

    The body never carries the underlying error.
    """

    error_kind = ErrorKind.UNEXPECTED

    def __init__(self):
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)
