import time
from pathlib import Path
from typing import BinaryIO

from docextract.core.exceptions import FileTooLargeError, UnsupportedFileTypeError
from docextract.core.logging import get_logger
from docextract.schemas.extraction import ExtractionMeta, ExtractionResponse, PageTextSchema
from docextract.services.extraction.base import PageText
from docextract.services.extraction.factory import ALLOWED_MIME_TYPES, ExtractorFactory
from docextract.services.upload_storage import UploadStorage

logger = get_logger(__name__)


class ExtractionService:
    """Runs one upload through validation, extraction and cleanup."""

    def __init__(self, storage: UploadStorage):
        self.storage = storage

    def validate(self, mime_type: str | None, declared_size: int | None = None) -> None:
        if mime_type not in ALLOWED_MIME_TYPES:
            raise UnsupportedFileTypeError(mime_type or "unknown")
        if declared_size is not None and declared_size > self.storage.max_bytes:
            raise FileTooLargeError(self.storage.max_bytes // (1024 * 1024))

    def extract_upload(
        self,
        source: BinaryIO,
        filename: str | None,
        mime_type: str | None,
        declared_size: int | None = None,
    ) -> ExtractionResponse:
        self.validate(mime_type, declared_size)

        start = time.perf_counter()
        temp_path = self.storage.path_for(filename)
        try:
            size = self.storage.save(source, temp_path)
            logger.info(f"Received file: {filename} ({mime_type}, {size} bytes)")
            pages = self.extract_file(temp_path, mime_type)
        finally:
            self.storage.delete(temp_path)

        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.info(f"Extracted {len(pages)} page(s) from {filename} in {elapsed_ms}ms")
        return build_result(pages, mime_type, elapsed_ms)

    @staticmethod
    def extract_file(file_path: Path, mime_type: str) -> list[PageText]:
        extractor = ExtractorFactory.get_extractor(mime_type)
        return extractor.extract(file_path)


def build_result(pages: list[PageText], file_type: str, processing_time_ms: int) -> ExtractionResponse:
    return ExtractionResponse(
        pages=[PageTextSchema(page=p.page, text=p.text) for p in pages],
        meta=ExtractionMeta(
            file_type=file_type,
            page_count=len(pages),
            processing_time_ms=max(processing_time_ms, 0),
        ),
    )
