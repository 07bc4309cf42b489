"""Reference data API endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from cinearchive.database import get_db
from cinearchive.errors import QueryFailed
from cinearchive.schemas.reference import ReferenceItem
from cinearchive.services import reference_data

router = APIRouter(prefix="/reference")


def _unavailable(e: QueryFailed) -> HTTPException:
    return HTTPException(status_code=503, detail=f"Error loading reference data: {e.message}")


@router.get("/countries", response_model=list[ReferenceItem])
async def get_countries(db: AsyncSession = Depends(get_db)) -> list[ReferenceItem]:
    try:
        return await reference_data.list_countries(db)
    except QueryFailed as e:
        raise _unavailable(e)


@router.get("/genres", response_model=list[ReferenceItem])
async def get_genres(db: AsyncSession = Depends(get_db)) -> list[ReferenceItem]:
    try:
        return await reference_data.list_genres(db)
    except QueryFailed as e:
        raise _unavailable(e)


@router.get("/keywords", response_model=list[ReferenceItem])
async def get_keywords(db: AsyncSession = Depends(get_db)) -> list[ReferenceItem]:
    try:
        return await reference_data.list_keywords(db)
    except QueryFailed as e:
        raise _unavailable(e)


@router.get("/directors", response_model=list[ReferenceItem])
async def get_directors(db: AsyncSession = Depends(get_db)) -> list[ReferenceItem]:
    try:
        return await reference_data.list_directors(db)
    except QueryFailed as e:
        raise _unavailable(e)


@router.get("/release-years", response_model=list[int])
async def get_release_years(db: AsyncSession = Depends(get_db)) -> list[int]:
    """Distinct release years, newest first."""
    try:
        return await reference_data.list_release_years(db)
    except QueryFailed as e:
        raise _unavailable(e)
