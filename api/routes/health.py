"""Health check endpoint."""

from fastapi import APIRouter

from api.routes import forms
from formpilot import __version__

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health():
    """Service status and loaded form categories."""
    categories = forms.loader.list_categories() if forms.loader else []
    return {
        "service": "FormPilot API",
        "version": __version__,
        "status": "running",
        "forms_loaded": len(categories),
        "categories": categories,
    }
