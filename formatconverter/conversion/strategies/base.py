"""Base strategy for file conversion operations."""

from abc import ABC, abstractmethod

from formatconverter.conversion.config import ConversionConfig
from formatconverter.conversion.exceptions import DecodeError
from formatconverter.conversion.formats import TabularFormat
from formatconverter.conversion.records import RecordSet


class BaseStrategy(ABC):
    """Abstract base class for format strategies.

    A strategy reads its format into a RecordSet and writes a RecordSet
    back out in its format.
    """

    format: TabularFormat

    def __init__(self, config: ConversionConfig):
        """Initialize the conversion strategy.

        Args:
            config: Configuration for conversion operations.
        """
        self.config = config

    @abstractmethod
    def decode(self, data: bytes) -> RecordSet:
        """Read a buffered file into records.

        Args:
            data: Entire source file content

        Returns:
            RecordSet with columns in source order

        Raises:
            DecodeError: If the payload is not valid for this format
        """
        pass

    @abstractmethod
    def encode(self, record_set: RecordSet) -> bytes:
        """Write records in this format.

        Args:
            record_set: Records to serialize

        Returns:
            bytes: Encoded file content

        Raises:
            EncodeError: If the records cannot be written
        """
        pass

    def _decode_text(self, data: bytes) -> str:
        """Decode UTF-8 text, tolerating a byte order mark.

        Args:
            data: Raw payload

        Returns:
            str: Decoded text

        Raises:
            DecodeError: If the payload is not valid UTF-8
        """
        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise DecodeError(
                f"{self.format.value.upper()} input is not valid UTF-8: {e}"
            ) from e
