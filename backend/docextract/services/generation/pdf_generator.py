"""Plain text to PDF, laid out with one standard font, left aligned."""

from typing import IO

from reportlab.lib.pagesizes import letter
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from docextract.config import settings
from docextract.core.exceptions import GenerationError
from docextract.core.logging import get_logger
from docextract.services.generation.base import new_spool, split_lines

logger = get_logger(__name__)

PAGE_MARGIN = 72


class PdfGenerator:
    media_type = "application/pdf"
    extension = "pdf"

    def __init__(
        self,
        font_name: str | None = None,
        font_size: float | None = None,
        line_gap: float | None = None,
        pagesize: tuple[float, float] = letter,
    ):
        self.font_name = font_name or settings.pdf_font_name
        self.font_size = font_size or settings.pdf_font_size
        self.line_gap = settings.pdf_line_gap if line_gap is None else line_gap
        self.pagesize = pagesize

    @property
    def leading(self) -> float:
        return self.font_size * 1.2 + self.line_gap

    def write(self, text: str, sink: IO[bytes]) -> int:
        """Render ``text`` into ``sink``; returns the number of pages."""
        width, height = self.pagesize
        max_width = width - 2 * PAGE_MARGIN
        top = height - PAGE_MARGIN - self.font_size

        pdf = canvas.Canvas(sink, pagesize=self.pagesize)
        pdf.setTitle("Extracted Text")
        pdf.setFont(self.font_name, self.font_size)
        y = top
        pages = 1

        for line in split_lines(text):
            # A blank input line still takes one line of vertical space
            for segment in simpleSplit(line, self.font_name, self.font_size, max_width) or [""]:
                if y < PAGE_MARGIN:
                    pdf.showPage()
                    pdf.setFont(self.font_name, self.font_size)
                    y = top
                    pages += 1
                pdf.drawString(PAGE_MARGIN, y, segment)
                y -= self.leading

        pdf.save()
        return pages

    def generate(self, text: str) -> IO[bytes]:
        """Render into a spooled temp file positioned at the start."""
        spool = new_spool()
        try:
            pages = self.write(text, spool)
        except Exception as e:
            spool.close()
            logger.error(f"PDF generation failed: {e}", exc_info=True)
            raise GenerationError(str(e)) from e
        logger.info(f"Generated PDF with {pages} page(s)")
        spool.seek(0)
        return spool
