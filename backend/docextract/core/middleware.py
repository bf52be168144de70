"""Per-request context: correlation id, access log line, response headers."""

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from docextract.core.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


def describe_body(request: Request) -> str:
    """Short summary of the request payload, e.g. ``multipart/form-data 1.2MB``."""
    content_type = request.headers.get("content-type", "").split(";")[0].strip()
    length = request.headers.get("content-length")
    if not content_type and not length:
        return ""
    size = ""
    if length and length.isdigit():
        size_bytes = int(length)
        size = f"{size_bytes / (1024 * 1024):.1f}MB" if size_bytes >= 1024 * 1024 else f"{size_bytes}B"
    return " ".join(part for part in (content_type, size) if part)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tags every request with an id and logs it once the response is ready.

    Uploads and download requests carry their payload type and size in the
    log line so a slow extraction can be matched to the file that caused it.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        request.state.request_id = request_id
        body = describe_body(request)

        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000

        logger.info(
            f"[{request_id}] {request.method} {request.url.path}"
            f"{f' ({body})' if body else ''} -> {response.status_code} ({duration_ms:.0f}ms)"
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response
