"""Health check route."""

from fastapi import APIRouter

from solarpro.core.config import settings

router = APIRouter()


@router.get("/health")
def health_check():
    """Report that the service is up."""
    return {"status": "healthy", "service": "solarpro", "version": settings.VERSION}
