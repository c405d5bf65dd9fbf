"""Exceptions for file conversion operations."""

from enum import Enum


class ErrorKind(str, Enum):
    """Category of a failed conversion."""

    INVALID_INPUT = "invalid_input"
    DECODE_FAILURE = "decode_failure"
    ENCODE_FAILURE = "encode_failure"
    UNEXPECTED = "unexpected"


class ConversionError(Exception):
    """Base exception for conversion operations."""

    kind: ErrorKind = ErrorKind.UNEXPECTED


class InvalidInputError(ConversionError):
    """Request is missing data or names something that cannot be converted."""

    kind = ErrorKind.INVALID_INPUT


class UnsupportedFormatError(InvalidInputError):
    """Conversion pair is not supported."""


class FileSizeExceededError(InvalidInputError):
    """File exceeds maximum size limit."""


class DecodeError(ConversionError):
    """Source payload could not be read as its declared format."""

    kind = ErrorKind.DECODE_FAILURE


class EncodeError(ConversionError):
    """Records could not be written in the target format."""

    kind = ErrorKind.ENCODE_FAILURE
