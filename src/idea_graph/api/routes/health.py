"""Health check endpoint."""

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    """Report liveness and whether AI detail extraction is configured."""
    return {
        "status": "ok",
        "detail_extraction": getattr(request.app.state, "openai", None) is not None,
    }
