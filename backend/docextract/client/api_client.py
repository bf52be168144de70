from pathlib import Path

import httpx
from pydantic import ValidationError

from docextract.core.logging import get_logger
from docextract.schemas.extraction import ExtractionResponse
from docextract.services.extraction.factory import guess_mime_type

logger = get_logger(__name__)

CONNECTION_FAILED = "Server connection failed ({status}). Please check if the backend is running."


class ApiError(Exception):
    def __init__(self, message: str, status_code: int | None = None, details: str | None = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


def _raise_for_error(response: httpx.Response, fallback: str) -> None:
    if response.is_success:
        return

    # Only trust the body when the server says it is JSON; an HTML error page
    # from a proxy or a dead backend is reported as a connectivity problem.
    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            data = response.json()
        except ValueError:
            data = {}
        raise ApiError(
            data.get("error") or fallback,
            status_code=response.status_code,
            details=data.get("details"),
        )
    raise ApiError(CONNECTION_FAILED.format(status=response.status_code), status_code=response.status_code)


class ExtractorClient:
    """Thin client for the /api/extract and /api/download endpoints."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 300.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self._client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def extract(self, path: Path, mime_type: str | None = None) -> ExtractionResponse:
        path = Path(path)
        mime_type = mime_type or guess_mime_type(path.name) or "application/octet-stream"
        with open(path, "rb") as fh:
            response = self._post("/api/extract", files={"file": (path.name, fh, mime_type)})
        _raise_for_error(response, "Failed to extract text")
        try:
            return ExtractionResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            # A 200 that is not an extraction result came from something other than the API
            logger.warning(f"Unexpected extraction response: {e}")
            raise ApiError(
                CONNECTION_FAILED.format(status=response.status_code),
                status_code=response.status_code,
            ) from e

    def download(self, text: str, fmt: str) -> bytes:
        response = self._post("/api/download", json={"text": text, "format": fmt})
        _raise_for_error(response, "Generation failed on server")
        return response.content

    def _post(self, url: str, **kwargs) -> httpx.Response:
        try:
            return self._client.post(url, **kwargs)
        except httpx.TransportError as e:
            logger.warning(f"POST {url} failed: {e}")
            raise ApiError(CONNECTION_FAILED.format(status="unreachable")) from e

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ExtractorClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
