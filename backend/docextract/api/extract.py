from fastapi import APIRouter, Depends, File, UploadFile
from starlette.concurrency import run_in_threadpool

from docextract.core.exceptions import (
    DocExtractError,
    ExtractionError,
    NoFileUploadedError,
    UnexpectedExtractionError,
)
from docextract.core.logging import get_logger
from docextract.dependencies import get_extraction_service
from docextract.schemas.extraction import ErrorResponse, ExtractionResponse
from docextract.services.extraction_service import ExtractionService

router = APIRouter(tags=["Extraction"])
logger = get_logger(__name__)


@router.post(
    "/extract",
    response_model=ExtractionResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def extract_document(
    file: UploadFile | None = File(None),
    service: ExtractionService = Depends(get_extraction_service),
):
    if file is None or not file.filename:
        raise NoFileUploadedError()

    try:
        return await run_in_threadpool(
            service.extract_upload,
            file.file,
            file.filename,
            file.content_type,
            file.size,
        )
    except ExtractionError as e:
        logger.error(f"Processing error for {file.filename}: {e.details}")
        raise
    except DocExtractError:
        raise
    except Exception as e:
        logger.error(f"Processing error for {file.filename}: {e}", exc_info=True)
        raise UnexpectedExtractionError(str(e)) from e
    finally:
        await file.close()
