class DocExtractError(Exception):
    """Base exception for the application."""

    def __init__(self, message: str = "An error occurred", status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


# Validation errors: bad or missing client input, always 400.


class ValidationError(DocExtractError):
    def __init__(self, message: str = "Invalid request"):
        super().__init__(message, status_code=400)


class NoFileUploadedError(ValidationError):
    def __init__(self):
        super().__init__("No file uploaded.")


class UnsupportedFileTypeError(ValidationError):
    def __init__(self, mime_type: str):
        self.mime_type = mime_type
        super().__init__("Invalid file type. Only JPG, PNG, PDF, and DOCX are allowed.")


class FileTooLargeError(ValidationError):
    def __init__(self, max_mb: int):
        self.max_mb = max_mb
        super().__init__(f"File size is too large. Max limit is {max_mb}MB.")


class MissingTextError(ValidationError):
    def __init__(self):
        super().__init__("No text provided for generation.")


class UnsupportedFormatError(ValidationError):
    def __init__(self, fmt: str | None):
        self.format = fmt
        super().__init__("Unsupported format requested.")


# Extraction errors: raised by the adapters, rendered as 500 with a
# category-specific message and the raw cause as details.


class ExtractionError(DocExtractError):
    user_message = "An unexpected error occurred during processing."

    def __init__(self, details: str):
        self.details = details
        super().__init__(self.user_message, status_code=500)

    def __str__(self) -> str:
        return self.details


class PdfConversionError(ExtractionError):
    user_message = "Could not convert PDF. The file may be password protected or corrupted."


class OcrError(ExtractionError):
    user_message = "OCR engine failed to read the image data."


class DocxParseError(ExtractionError):
    user_message = "Could not read the Word document structure."


class GenerationError(DocExtractError):
    def __init__(self, details: str = ""):
        self.details = details
        super().__init__("Failed to generate file.", status_code=500)


class UnexpectedExtractionError(ExtractionError):
    """Any non-adapter failure while processing an accepted upload."""
