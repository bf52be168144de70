import io

from docx import Document
from docx.shared import Pt

from docextract.config import settings
from docextract.core.exceptions import GenerationError
from docextract.core.logging import get_logger
from docextract.services.generation.base import split_lines

logger = get_logger(__name__)


class DocxGenerator:
    media_type = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    extension = "docx"

    def __init__(
        self,
        font_name: str | None = None,
        font_size: float | None = None,
        space_after: float | None = None,
    ):
        self.font_name = font_name or settings.docx_font_name
        self.font_size = font_size or settings.docx_font_size
        self.space_after = settings.docx_space_after_pt if space_after is None else space_after

    def build(self, text: str):
        """One paragraph per input line."""
        doc = Document()
        for line in split_lines(text):
            paragraph = doc.add_paragraph()
            paragraph.paragraph_format.space_after = Pt(self.space_after)
            run = paragraph.add_run(line)
            run.font.name = self.font_name
            run.font.size = Pt(self.font_size)
        return doc

    def generate(self, text: str) -> bytes:
        try:
            buffer = io.BytesIO()
            self.build(text).save(buffer)
        except Exception as e:
            logger.error(f"DOCX generation failed: {e}", exc_info=True)
            raise GenerationError(str(e)) from e
        return buffer.getvalue()
