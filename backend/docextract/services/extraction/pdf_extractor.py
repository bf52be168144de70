from pathlib import Path

import pdfplumber
from pdf2image import convert_from_path
from PIL import Image

from docextract.config import settings
from docextract.core.exceptions import PdfConversionError
from docextract.core.logging import get_logger
from docextract.services.extraction.base import DocumentExtractor, PageText
from docextract.services.extraction.ocr import ocr_worker

logger = get_logger(__name__)

# PDF user space is 72 points per inch
BASE_DPI = 72


class PdfExtractor(DocumentExtractor):
    # Minimum characters per page to trust the embedded text layer
    MIN_TEXT_THRESHOLD = 50

    def __init__(self, render_scale: float | None = None, text_layer_first: bool | None = None):
        self.render_scale = render_scale or settings.pdf_render_scale
        self.text_layer_first = (
            settings.pdf_text_layer_first if text_layer_first is None else text_layer_first
        )

    def extract(self, file_path: Path) -> list[PageText]:
        native = self._extract_text_layer(file_path) if self.text_layer_first else {}
        if native and all(self._has_text(text) for text in native.values()):
            logger.info(f"Using text layer for all {len(native)} page(s) of {file_path.name}")
            return [PageText(page=n, text=text) for n, text in sorted(native.items())]

        images = self._rasterize(file_path)
        if not images:
            logger.info(f"{file_path.name} has no pages")
            return []

        pages = []
        total = len(images)
        with ocr_worker() as worker:
            for page_number, image in enumerate(images, start=1):
                text = native.get(page_number, "")
                if self._has_text(text):
                    logger.info(f"Using text layer for PDF page {page_number}/{total}")
                else:
                    logger.info(f"Processing PDF page {page_number}/{total}...")
                    text = worker.recognize(image)
                pages.append(PageText(page=page_number, text=text))
                image.close()

        return pages

    def _has_text(self, text: str) -> bool:
        return len(text.strip()) >= self.MIN_TEXT_THRESHOLD

    def _rasterize(self, file_path: Path) -> list[Image.Image]:
        dpi = round(BASE_DPI * self.render_scale)
        try:
            return convert_from_path(str(file_path), dpi=dpi)
        except Exception as e:
            raise PdfConversionError(
                "PDF conversion failed. The file might be password protected or corrupted. "
                f"Details: {e}"
            ) from e

    def _extract_text_layer(self, file_path: Path) -> dict[int, str]:
        try:
            with pdfplumber.open(file_path) as pdf:
                return {i: page.extract_text() or "" for i, page in enumerate(pdf.pages, start=1)}
        except Exception as e:
            logger.warning(f"pdfplumber extraction failed for {file_path.name}: {e}")
            return {}
