"""Conversion router for FormatConverter API.

This module provides REST endpoints for listing the supported conversion
identifiers and converting an uploaded file.
"""

import json
from typing import Optional
from urllib.parse import quote

import structlog
from fastapi import APIRouter, File, Form, Response, UploadFile, status

from formatconverter.api.dependencies import Dispatcher
from formatconverter.api.exceptions import (
    BadRequestException,
    ConversionFailedException,
    FormatConverterAPIException,
    InternalServerException,
)
from formatconverter.conversion.result import ConversionRequest, ConversionResult

router = APIRouter(tags=["conversion"])

logger = structlog.get_logger(__name__)


@router.get(
    "/formats",
    response_model=list[str],
    status_code=status.HTTP_200_OK,
    summary="List supported conversions",
)
async def list_formats(dispatcher: Dispatcher) -> list[str]:
    """List every supported "<source>-to-<target>" identifier.

    Example:
        GET /formats
        ["csv-to-excel", "csv-to-json", ...]
    """
    return dispatcher.list_supported_formats()


@router.post(
    "/convert",
    status_code=status.HTTP_200_OK,
    summary="Convert an uploaded file",
    responses={
        200: {"description": "Converted file as an attachment"},
        400: {"description": "Missing input or failed conversion (plain text)"},
        500: {"description": "Unexpected server error (plain text)"},
    },
)
async def convert_file(
    dispatcher: Dispatcher,
    file: Optional[UploadFile] = File(None, description="File to convert"),
    target_format: Optional[str] = Form(
        None,
        alias="targetFormat",
        description='Conversion identifier, e.g. "csv-to-json"',
    ),
    options: Optional[str] = Form(
        None, description="JSON object of string options (reserved)"
    ),
) -> Response:
    """Convert an uploaded file and return it as a download.

    Args:
        dispatcher: Conversion dispatcher
        file: Uploaded file (multipart form data)
        target_format: Conversion identifier
        options: Optional JSON object of string options

    Returns:
        Converted bytes with Content-Disposition and X-Conversion-Metadata
        headers

    Raises:
        BadRequestException: If input is missing or malformed
        ConversionFailedException: If the conversion failed
        InternalServerException: If an unexpected error occurs

    Example:
        POST /convert
        Content-Type: multipart/form-data

        file=@data.csv
        targetFormat=csv-to-json
    """
    try:
        content = await file.read() if file is not None else b""
        if not content:
            raise BadRequestException("No file uploaded")

        if not target_format or not target_format.strip():
            raise BadRequestException("Target format is required")

        request = ConversionRequest(
            content=content,
            filename=file.filename or "",
            target_format=target_format,
            options=_parse_options(options),
        )
        result = await dispatcher.convert(request)
    except FormatConverterAPIException:
        raise
    except Exception as e:
        logger.error("convert_request_failed", error=str(e), exc_info=True)
        raise InternalServerException() from e

    if not result.success:
        raise ConversionFailedException(result)

    return Response(
        content=result.data,
        media_type=result.content_type,
        headers=_download_headers(result),
    )


def _parse_options(raw: Optional[str]) -> dict[str, str]:
    """Parse the options form field into a string map."""
    if raw is None or not raw.strip():
        return {}

    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        raise BadRequestException(f"Invalid options: {e}") from e

    if not isinstance(parsed, dict):
        raise BadRequestException("Invalid options: expected a JSON object")

    return {str(key): str(value) for key, value in parsed.items()}


def _download_headers(result: ConversionResult) -> dict[str, str]:
    return {
        "Content-Disposition": content_disposition(result.filename or "download"),
        "X-Conversion-Metadata": json.dumps(result.metadata, default=str),
    }


def content_disposition(filename: str) -> str:
    """Build an attachment Content-Disposition header.

    Non-ASCII names keep an ASCII fallback and add an RFC 5987 filename*.
    """
    ascii_name = filename.encode("ascii", "ignore").decode("ascii")
    ascii_name = ascii_name.replace('"', "").replace("\\", "") or "download"

    header = f'attachment; filename="{ascii_name}"'
    if ascii_name != filename:
        header += f"; filename*=UTF-8''{quote(filename, safe='')}"
    return header
