"""Films API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from cinearchive.database import get_db
from cinearchive.errors import FilmNotFound, QueryFailed
from cinearchive.schemas.film import FilmDetail, FilmSummary
from cinearchive.schemas.search import FilterRequest
from cinearchive.services.film_search import get_film_detail, search_films

router = APIRouter()


@router.get("/films/search", response_model=list[FilmSummary])
async def search(
    query: str | None = Query(None, description="Title or keyword text"),
    country_id: str | None = Query(None),
    genre_id: str | None = Query(None),
    keyword_ids: list[str] = Query(default=[], description="Repeat or comma-separate"),
    director_id: str | None = Query(None),
    start_year: str | None = Query(None),
    end_year: str | None = Query(None),
    type: str | None = Query(None, description="Exact film type"),
    db: AsyncSession = Depends(get_db),
) -> list[FilmSummary]:
    """
    Search the catalogue.

    Filter values that do not parse are ignored. Returns at most
    ``search_row_cap`` films, newest first.
    """
    request = FilterRequest.from_params(
        query=query,
        country_id=country_id,
        genre_id=genre_id,
        keyword_ids=keyword_ids,
        director_id=director_id,
        start_year=start_year,
        end_year=end_year,
        type=type,
    )
    try:
        return await search_films(db, request)
    except QueryFailed as e:
        raise HTTPException(status_code=503, detail=f"Error loading films: {e.message}")


@router.get("/films/{film_id}", response_model=FilmDetail)
async def get_film(
    film_id: str,
    db: AsyncSession = Depends(get_db),
) -> FilmDetail:
    """
    Get one film with all of its relations.

    Args:
        film_id: Film UUID
        db: Database session

    Returns:
        Film detail
    """
    try:
        return await get_film_detail(db, film_id)
    except FilmNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except QueryFailed as e:
        raise HTTPException(status_code=503, detail=f"Error loading film: {e.message}")
