"""Document text extraction service: OCR for images and PDFs, raw text for DOCX."""

__version__ = "0.1.0"
