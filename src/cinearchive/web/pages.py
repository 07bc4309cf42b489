"""Public catalogue pages."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import Response

from cinearchive.database import get_db
from cinearchive.errors import FilmNotFound, QueryFailed
from cinearchive.schemas.search import FilterRequest
from cinearchive.services import reference_data
from cinearchive.services.film_search import (
    featured_films,
    genre_rows,
    get_film_detail,
    latest_films,
    search_films,
)
from cinearchive.web.templating import render

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])


async def filter_options(db: AsyncSession) -> dict[str, list]:
    """Choices for the catalogue filter form."""
    return {
        "countries": await reference_data.list_countries(db),
        "genres": await reference_data.list_genres(db),
        "keywords": await reference_data.list_keywords(db),
        "directors": await reference_data.list_directors(db),
        "years": await reference_data.list_release_years(db),
    }


@router.get("/", response_class=HTMLResponse)
async def home(request: Request, db: AsyncSession = Depends(get_db)) -> Response:
    """Featured films, the latest additions and one row per genre."""
    context: dict = {"featured": [], "latest": [], "rows": [], "error": None}
    try:
        context["featured"] = await featured_films(db)
        context["latest"] = await latest_films(db)
        context["rows"] = await genre_rows(db)
    except QueryFailed as e:
        context["error"] = f"Error loading films: {e.message}"
    return render(request, "home.html", **context)


@router.get("/movies", response_class=HTMLResponse)
async def catalogue(
    request: Request,
    search: str | None = Query(None),
    country_id: str | None = Query(None),
    genre_id: str | None = Query(None),
    keyword_ids: list[str] = Query(default=[]),
    director_id: str | None = Query(None),
    start_year: str | None = Query(None),
    end_year: str | None = Query(None),
    type: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Search box, filter form and results grid."""
    filters = FilterRequest.from_params(
        query=search,
        country_id=country_id,
        genre_id=genre_id,
        keyword_ids=keyword_ids,
        director_id=director_id,
        start_year=start_year,
        end_year=end_year,
        type=type,
    )
    context: dict = {"filters": filters, "films": [], "options": {}, "error": None}
    try:
        context["options"] = await filter_options(db)
        context["films"] = await search_films(db, filters)
    except QueryFailed as e:
        context["error"] = f"Error loading films: {e.message}"
    return render(request, "catalogue.html", **context)


@router.get("/movies/{film_id}", response_class=HTMLResponse)
async def film_page(
    request: Request,
    film_id: str,
    db: AsyncSession = Depends(get_db),
) -> Response:
    try:
        film = await get_film_detail(db, film_id)
    except FilmNotFound:
        raise HTTPException(status_code=404, detail="Film not found")
    except QueryFailed as e:
        return render(
            request,
            "detail.html",
            status_code=503,
            film=None,
            error=f"Error loading film: {e.message}",
        )
    return render(request, "detail.html", film=film, error=None)


@router.get("/stats", response_class=HTMLResponse)
async def stats(request: Request, db: AsyncSession = Depends(get_db)) -> Response:
    """Keyword usage across the catalogue."""
    try:
        rows = await reference_data.keyword_stats(db)
    except QueryFailed as e:
        return render(request, "stats.html", stats=[], error=f"Error loading statistics: {e.message}")
    return render(request, "stats.html", stats=rows, error=None)
