"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """
    Health check endpoint.

    Returns:
        Status message and the current UTC time in ISO 8601
    """
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
