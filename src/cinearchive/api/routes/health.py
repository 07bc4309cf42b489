"""Health check endpoints."""

from fastapi import APIRouter, HTTPException

from cinearchive.database import check_connection

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """
    Health check endpoint.

    Returns:
        Simple status message indicating the API is running
    """
    return {"status": "ok"}


@router.get("/health/db", tags=["health"])
async def database_health_check() -> dict[str, str]:
    """Report whether the database answers a trivial query."""
    if not await check_connection():
        raise HTTPException(status_code=503, detail="Database unavailable")
    return {"status": "ok", "database": "ok"}
