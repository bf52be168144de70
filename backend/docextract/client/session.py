"""
Client-side session for a single document.

Status only moves forward, ``idle -> selected -> uploading -> processing``,
ending in ``success`` or ``error``. Leaving a terminal status requires
``reset()``; ``change_file()`` is the only other way back to ``idle`` and is
valid from ``selected`` alone. An in-flight extraction cannot be cancelled.
"""

from enum import Enum
from pathlib import Path
from typing import Callable

from docextract.client.api_client import ApiError, ExtractorClient
from docextract.client.exporters import export_txt, render_text_image
from docextract.core.logging import get_logger
from docextract.schemas.extraction import SERVER_FORMATS, ExtractionResponse
from docextract.services.extraction.factory import ALLOWED_MIME_TYPES, guess_mime_type
from docextract.services.generation import attachment_filename

logger = get_logger(__name__)

StatusListener = Callable[["ExtractionStatus"], None]


class ExtractionStatus(str, Enum):
    IDLE = "idle"
    SELECTED = "selected"
    UPLOADING = "uploading"
    PROCESSING = "processing"
    SUCCESS = "success"
    ERROR = "error"


class SessionError(Exception):
    """An action was attempted from a status that does not allow it."""


def format_pages(result: ExtractionResponse) -> str:
    return "\n\n".join(f"--- Page {p.page} ---\n{p.text}" for p in result.pages)


class ExtractionSession:
    def __init__(self, client: ExtractorClient):
        self.client = client
        self.status = ExtractionStatus.IDLE
        self.file: Path | None = None
        self.mime_type: str | None = None
        self.result: ExtractionResponse | None = None
        self.error_message: str | None = None
        self._editable_text = ""
        self._listeners: list[StatusListener] = []

    def subscribe(self, listener: StatusListener) -> None:
        self._listeners.append(listener)

    def _set_status(self, status: ExtractionStatus) -> None:
        self.status = status
        for listener in self._listeners:
            listener(status)

    def _require(self, *allowed: ExtractionStatus) -> None:
        if self.status not in allowed:
            names = ", ".join(s.value for s in allowed)
            raise SessionError(f"Action not allowed while {self.status.value} (expected {names})")

    def select_file(self, path: Path, mime_type: str | None = None) -> None:
        self._require(ExtractionStatus.IDLE, ExtractionStatus.SELECTED)
        path = Path(path)
        mime_type = mime_type or guess_mime_type(path.name)
        if mime_type not in ALLOWED_MIME_TYPES:
            raise SessionError("Unsupported file type. Please upload JPG, PNG, PDF, or DOCX.")

        self.file = path
        self.mime_type = mime_type
        self.result = None
        self.error_message = None
        self._set_status(ExtractionStatus.SELECTED)

    def change_file(self) -> None:
        self._require(ExtractionStatus.SELECTED)
        self._clear()

    def reset(self) -> None:
        self._clear()

    def _clear(self) -> None:
        self.file = None
        self.mime_type = None
        self.result = None
        self.error_message = None
        self._editable_text = ""
        self._set_status(ExtractionStatus.IDLE)

    def extract(self) -> ExtractionStatus:
        self._require(ExtractionStatus.SELECTED)

        self._set_status(ExtractionStatus.UPLOADING)
        self.error_message = None
        self._set_status(ExtractionStatus.PROCESSING)
        try:
            result = self.client.extract(self.file, self.mime_type)
        except ApiError as e:
            logger.error(f"Extraction error: {e.message}")
            return self._fail(e.message)
        except Exception as e:
            logger.error(f"Extraction error: {e}", exc_info=True)
            return self._fail(None)

        self.result = result
        self._editable_text = format_pages(result)
        self._set_status(ExtractionStatus.SUCCESS)
        return self.status

    def _fail(self, message: str | None) -> ExtractionStatus:
        self.error_message = message or "An unknown error occurred during processing."
        self._set_status(ExtractionStatus.ERROR)
        return self.status

    @property
    def editable_text(self) -> str:
        return self._editable_text

    @editable_text.setter
    def editable_text(self, value: str) -> None:
        self._require(ExtractionStatus.SUCCESS)
        self._editable_text = value

    def export(self, fmt: str) -> tuple[str, bytes]:
        """Produce ``(filename, content)`` for the current editable text."""
        self._require(ExtractionStatus.SUCCESS)
        text = self._editable_text

        if fmt == "txt":
            content = export_txt(text)
        elif fmt in SERVER_FORMATS:
            content = self.client.download(text, fmt)
        elif fmt in ("png", "jpeg"):
            content = render_text_image(text, fmt)
        else:
            raise SessionError(f"Unsupported download format: {fmt}")
        return attachment_filename(fmt), content
