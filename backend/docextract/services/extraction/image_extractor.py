from pathlib import Path

from PIL import Image, UnidentifiedImageError

from docextract.core.exceptions import OcrError
from docextract.core.logging import get_logger
from docextract.services.extraction.base import DocumentExtractor, PageText
from docextract.services.extraction.ocr import ocr_worker

logger = get_logger(__name__)


class ImageExtractor(DocumentExtractor):
    def extract(self, file_path: Path) -> list[PageText]:
        with ocr_worker() as worker:
            try:
                with Image.open(file_path) as image:
                    image.load()
                    text = worker.recognize(image)
            except (UnidentifiedImageError, OSError) as e:
                raise OcrError(f"Image OCR failed: {e}") from e

        return [PageText(page=1, text=text)]
