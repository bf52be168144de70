"""
Tesseract OCR worker.

A worker is acquired per image or per PDF job and released on every exit
path through the ``ocr_worker`` context manager.
"""

from contextlib import contextmanager
from typing import Iterator

import pytesseract
from PIL import Image

from docextract.config import settings
from docextract.core.exceptions import OcrError
from docextract.core.logging import get_logger

logger = get_logger(__name__)


class OcrWorker:
    def __init__(self, language: str = "eng", timeout: float = 0, tesseract_cmd: str | None = None):
        self.language = language
        self.timeout = timeout
        self.tesseract_cmd = tesseract_cmd
        self.closed = False
        self.pages_recognized = 0

    def start(self) -> "OcrWorker":
        if self.tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = self.tesseract_cmd
        try:
            version = pytesseract.get_tesseract_version()
        except pytesseract.TesseractNotFoundError as e:
            raise OcrError(f"OCR engine unavailable: {e}") from e
        logger.debug(f"Tesseract {version} worker started (lang={self.language})")
        return self

    def recognize(self, image: Image.Image) -> str:
        if self.closed:
            raise OcrError("OCR worker has already been terminated")
        try:
            text = pytesseract.image_to_string(image, lang=self.language, timeout=self.timeout)
        except (pytesseract.TesseractError, RuntimeError, OSError) as e:
            # pytesseract signals a timeout with a bare RuntimeError
            raise OcrError(f"OCR recognition failed: {e}") from e
        self.pages_recognized += 1
        return text.strip()

    def terminate(self) -> None:
        if not self.closed:
            logger.debug(f"Tesseract worker terminated after {self.pages_recognized} page(s)")
        self.closed = True


@contextmanager
def ocr_worker(
    language: str | None = None,
    timeout: float | None = None,
) -> Iterator[OcrWorker]:
    worker = OcrWorker(
        language=language or settings.ocr_language,
        timeout=settings.ocr_timeout_seconds if timeout is None else timeout,
        tesseract_cmd=settings.tesseract_cmd,
    )
    try:
        yield worker.start()
    finally:
        worker.terminate()
