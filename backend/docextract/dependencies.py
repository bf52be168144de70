from fastapi import Depends

from docextract.config import Settings, settings
from docextract.services.extraction_service import ExtractionService
from docextract.services.upload_storage import UploadStorage


def get_settings() -> Settings:
    return settings


def get_upload_storage(app_settings: Settings = Depends(get_settings)) -> UploadStorage:
    return UploadStorage(
        upload_dir=app_settings.upload_dir,
        max_bytes=app_settings.max_file_size_bytes,
        chunk_size=app_settings.upload_chunk_size,
    )


def get_extraction_service(storage: UploadStorage = Depends(get_upload_storage)) -> ExtractionService:
    return ExtractionService(storage)
