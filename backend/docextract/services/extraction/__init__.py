from docextract.services.extraction.base import DocumentExtractor, PageText
from docextract.services.extraction.factory import ExtractorFactory

__all__ = ["DocumentExtractor", "ExtractorFactory", "PageText"]
