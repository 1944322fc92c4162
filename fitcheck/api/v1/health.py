from fastapi import APIRouter

from fitcheck.core.config import settings

router = APIRouter()


@router.get("/health", summary="Health Check", description="Liveness probe for the fit analysis service.")
async def health_check():
    return {"status": "healthy", "environment": settings.app_env}
