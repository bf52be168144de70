from docextract.core.exceptions import UnsupportedFormatError
from docextract.services.generation.docx_generator import DocxGenerator
from docextract.services.generation.pdf_generator import PdfGenerator

GENERATOR_MAP: dict[str, type[PdfGenerator] | type[DocxGenerator]] = {
    "pdf": PdfGenerator,
    "docx": DocxGenerator,
}


def get_generator(fmt: str | None) -> PdfGenerator | DocxGenerator:
    generator_class = GENERATOR_MAP.get(fmt or "")
    if not generator_class:
        raise UnsupportedFormatError(fmt)
    return generator_class()


def attachment_filename(extension: str) -> str:
    return f"extracted_text.{extension}"
