import zipfile
from pathlib import Path

from docx import Document as DocxDocument
from docx.opc.exceptions import PackageNotFoundError

from docextract.core.exceptions import DocxParseError
from docextract.core.logging import get_logger
from docextract.services.extraction.base import DocumentExtractor, PageText

logger = get_logger(__name__)


class DocxExtractor(DocumentExtractor):
    def extract(self, file_path: Path) -> list[PageText]:
        try:
            doc = DocxDocument(str(file_path))
        except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError, SyntaxError) as e:
            # lxml parse failures surface as SyntaxError subclasses
            raise DocxParseError(f"DOCX parsing failed: {e}") from e

        lines = [para.text for para in doc.paragraphs]

        # Table cells come after the body paragraphs, one row per line
        for table in doc.tables:
            for row in table.rows:
                lines.append("\t".join(cell.text.strip() for cell in row.cells))

        logger.debug(f"{file_path.name}: {len(doc.paragraphs)} paragraphs, {len(doc.tables)} tables")

        # DOCX doesn't have pages natively, treat as single page
        return [PageText(page=1, text="\n".join(lines).strip())]
