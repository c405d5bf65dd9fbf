"""ASGI middleware for the FormatConverter API.

Order of registration in ``create_app`` (outermost first): request id,
access log, CORS.
"""

import re
import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

EXPOSED_HEADERS = ("Content-Disposition", "X-Conversion-Metadata", REQUEST_ID_HEADER)
ALLOWED_METHODS = ("GET", "POST", "OPTIONS")
ALLOWED_HEADERS = ("Content-Type", REQUEST_ID_HEADER)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id for log correlation.

    A client-supplied X-Request-ID is reused when it is a short token;
    anything else is replaced by a fresh uuid4. The id is bound to the
    structlog context and echoed in the response.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        incoming = request.headers.get(REQUEST_ID_HEADER, "")
        request_id = incoming if _REQUEST_ID_PATTERN.match(incoming) else str(uuid4())
        request.state.request_id = request_id

        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one access line per request with upload and download sizes."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)

        logger.info(
            "request_completed",
            method=request.method,
            path=request.url.path,
            client=request.client.host if request.client else "unknown",
            status_code=response.status_code,
            upload_bytes=_content_length(request.headers),
            response_bytes=_content_length(response.headers),
            content_type=response.headers.get("content-type"),
            duration_seconds=round(time.perf_counter() - start_time, 4),
        )
        return response


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Permissive CORS so browser clients can read download headers.

    Preflight requests are answered here with 204.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        preflight = (
            request.method == "OPTIONS"
            and "access-control-request-method" in request.headers
        )
        if preflight:
            response = Response(status_code=204)
        else:
            response = await call_next(request)

        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Methods"] = ", ".join(ALLOWED_METHODS)
        response.headers["Access-Control-Allow-Headers"] = ", ".join(ALLOWED_HEADERS)
        response.headers["Access-Control-Expose-Headers"] = ", ".join(EXPOSED_HEADERS)
        return response


def _content_length(headers) -> int | None:
    value = headers.get("content-length")
    return int(value) if value and value.isdigit() else None
