from fastapi import APIRouter

from docextract.api import download, extract, health

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(extract.router)
api_router.include_router(download.router)
