from fastapi import APIRouter

from docextract.config import settings

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check():
    return {"status": "healthy", "version": settings.app_version}
