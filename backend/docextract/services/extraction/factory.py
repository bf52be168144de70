import mimetypes
from pathlib import Path

from docextract.core.exceptions import UnsupportedFileTypeError
from docextract.services.extraction.base import DocumentExtractor
from docextract.services.extraction.docx_extractor import DocxExtractor
from docextract.services.extraction.image_extractor import ImageExtractor
from docextract.services.extraction.pdf_extractor import PdfExtractor

DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

EXTRACTOR_MAP: dict[str, type[DocumentExtractor]] = {
    "image/jpeg": ImageExtractor,
    "image/png": ImageExtractor,
    "application/pdf": PdfExtractor,
    DOCX_MIME_TYPE: DocxExtractor,
}

ALLOWED_MIME_TYPES = frozenset(EXTRACTOR_MAP)


class ExtractorFactory:
    @staticmethod
    def get_extractor(mime_type: str) -> DocumentExtractor:
        extractor_class = EXTRACTOR_MAP.get(mime_type)
        if not extractor_class:
            raise UnsupportedFileTypeError(mime_type)
        return extractor_class()

EXTENSION_MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".pdf": "application/pdf",
    ".docx": DOCX_MIME_TYPE,
}


def guess_mime_type(filename: str) -> str | None:
    """MIME type from the file extension; the platform table often lacks .docx."""
    suffix = Path(filename).suffix.lower()
    return EXTENSION_MIME_TYPES.get(suffix) or mimetypes.guess_type(filename)[0]
