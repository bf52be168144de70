from docextract.client.api_client import ApiError, ExtractorClient
from docextract.client.session import ExtractionSession, ExtractionStatus, SessionError

__all__ = ["ApiError", "ExtractionSession", "ExtractionStatus", "ExtractorClient", "SessionError"]
