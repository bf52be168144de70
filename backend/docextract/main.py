from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from docextract.api import frontend
from docextract.api.router import api_router
from docextract.config import settings
from docextract.core.exceptions import DocExtractError, ExtractionError
from docextract.core.logging import get_logger, setup_logging
from docextract.core.middleware import RequestContextMiddleware

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    logger.info(f"Starting {settings.app_name} {settings.app_version}")
    logger.info(f"Uploads directory: {settings.upload_dir}")
    logger.info(f"Serving static files from: {settings.static_dir}")

    yield

    logger.info(f"Shutting down {settings.app_name}")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Extract text from images, PDFs and Word documents, and export it again",
    lifespan=lifespan,
)

app.add_middleware(RequestContextMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)
# Must come last: it matches every remaining GET path
app.include_router(frontend.router)


def _is_api(request: Request) -> bool:
    path = request.url.path
    return path == "/api" or path.startswith("/api/")


@app.exception_handler(ExtractionError)
async def extraction_exception_handler(request: Request, exc: ExtractionError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "details": exc.details},
    )


@app.exception_handler(DocExtractError)
async def doc_extract_exception_handler(request: Request, exc: DocExtractError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request body for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request body."})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code in (404, 405) and _is_api(request):
        return JSONResponse(status_code=404, content=frontend.API_NOT_FOUND)
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})
