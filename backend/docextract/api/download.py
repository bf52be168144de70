from fastapi import APIRouter, Depends
from fastapi.responses import Response, StreamingResponse
from starlette.concurrency import run_in_threadpool

from docextract.config import Settings
from docextract.core.exceptions import MissingTextError
from docextract.core.logging import get_logger
from docextract.dependencies import get_settings
from docextract.schemas.extraction import DownloadRequest, ErrorResponse
from docextract.services.generation import attachment_filename, get_generator
from docextract.services.generation.base import iter_chunks
from docextract.services.generation.pdf_generator import PdfGenerator

router = APIRouter(tags=["Download"])
logger = get_logger(__name__)


@router.post(
    "/download",
    response_class=Response,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def download_text(
    body: DownloadRequest,
    app_settings: Settings = Depends(get_settings),
):
    if not body.text:
        raise MissingTextError()

    generator = get_generator(body.format)
    headers = {
        "Content-Disposition": f"attachment; filename={attachment_filename(generator.extension)}"
    }

    if isinstance(generator, PdfGenerator):
        spool = await run_in_threadpool(generator.generate, body.text)
        return StreamingResponse(
            iter_chunks(spool, app_settings.download_chunk_size),
            media_type=generator.media_type,
            headers=headers,
        )

    content = await run_in_threadpool(generator.generate, body.text)
    return Response(content=content, media_type=generator.media_type, headers=headers)
