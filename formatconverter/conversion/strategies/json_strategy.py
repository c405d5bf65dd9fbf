"""JSON format strategy."""

import json

from formatconverter.conversion.exceptions import DecodeError, EncodeError
from formatconverter.conversion.formats import TabularFormat
from formatconverter.conversion.records import RecordSet
from formatconverter.conversion.strategies.base import BaseStrategy


class JSONStrategy(BaseStrategy):
    """Strategy for JSON arrays of flat objects."""

    format = TabularFormat.JSON

    def decode(self, data: bytes) -> RecordSet:
        """Decode a JSON array of objects.

        The first object defines the column order; the configured schema
        policy decides what happens to objects with other keys.

        Args:
            data: JSON file content

        Returns:
            RecordSet of natively typed values

        Raises:
            DecodeError: If the payload is not an array of objects
        """
        text = self._decode_text(data)

        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise DecodeError(f"Invalid JSON format: {e}") from e

        if not isinstance(payload, list) or not all(
            isinstance(item, dict) for item in payload
        ):
            raise DecodeError("Invalid JSON format: expected an array of objects")

        return RecordSet.from_records(payload, policy=self.config.schema_policy)

    def encode(self, record_set: RecordSet) -> bytes:
        """Encode records as a pretty-printed JSON array."""
        try:
            text = json.dumps(
                record_set.to_json_objects(),
                indent=self.config.json_indent or None,
                ensure_ascii=False,
            )
        except (TypeError, ValueError) as e:
            raise EncodeError(f"JSON writing failed: {e}") from e

        return text.encode("utf-8")
