"""Catalogue search: turns a FilterRequest into an ordered list of film summaries."""

import logging
from collections.abc import Awaitable, Callable, Iterable, Sequence
from typing import Any

from sqlalchemy import ColumnElement, Select, func, literal_column, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from cinearchive.config import settings
from cinearchive.errors import FilmNotFound, QueryFailed
from cinearchive.models import Film, Genre, Keyword
from cinearchive.schemas.film import FilmDetail, FilmSummary, NamedRef
from cinearchive.schemas.search import FilterRequest
from cinearchive.services.links import COUNTRIES, DIRECTORS, GENRES, KEYWORDS, film_ids_through
from cinearchive.services.storage import resolve_image_url

logger = logging.getLogger(__name__)

# Leading four characters of release_date, compared as text against
# zero-padded bounds. Only rows whose release_date starts with four digits
# take part in year filtering.
RELEASE_YEAR = func.substr(Film.release_date, literal_column("1"), literal_column("4"))
HAS_RELEASE_YEAR = Film.release_date.regexp_match(r"^[0-9]{4}")

SearchStrategy = Callable[
    [AsyncSession, str, list[ColumnElement[bool]], int],
    Awaitable[list[Film]],
]


def contains_pattern(text: str) -> str:
    """Build an ILIKE pattern matching ``text`` literally anywhere in a column."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def structured_conditions(request: FilterRequest) -> list[ColumnElement[bool]]:
    """
    Translate the structured part of a request into WHERE conditions.

    Each present field contributes one condition and all of them are
    AND-ed by the caller. Keyword ids are OR-ed within their own
    condition: a film linked to any requested keyword qualifies.
    """
    conditions: list[ColumnElement[bool]] = []

    if request.country_id is not None:
        conditions.append(Film.id.in_(film_ids_through(COUNTRIES, [request.country_id])))
    if request.genre_id is not None:
        conditions.append(Film.id.in_(film_ids_through(GENRES, [request.genre_id])))
    if request.keyword_ids:
        conditions.append(Film.id.in_(film_ids_through(KEYWORDS, request.keyword_ids)))
    if request.director_id is not None:
        conditions.append(Film.id.in_(film_ids_through(DIRECTORS, [request.director_id])))

    if request.start_year is not None or request.end_year is not None:
        conditions.append(HAS_RELEASE_YEAR)
        if request.start_year is not None:
            conditions.append(RELEASE_YEAR >= f"{request.start_year:04d}")
        if request.end_year is not None:
            conditions.append(RELEASE_YEAR <= f"{request.end_year:04d}")

    if request.type is not None:
        conditions.append(Film.type == request.type)

    return conditions


def summary_query(*conditions: ColumnElement[bool]) -> Select:
    """Films matching ``conditions`` with the relations a summary shows, newest first."""
    return (
        select(Film)
        .options(
            selectinload(Film.genres),
            selectinload(Film.keywords),
            selectinload(Film.directors),
        )
        .where(*conditions)
        .order_by(Film.created_at.desc(), Film.id)
    )


async def _execute(db: AsyncSession, stmt: Select) -> list[Any]:
    try:
        result = await db.execute(stmt)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Catalogue query failed: {e}")
        raise QueryFailed(str(e)) from e
    return list(result.scalars().all())


async def _match_title(
    db: AsyncSession,
    query: str,
    conditions: list[ColumnElement[bool]],
    limit: int,
) -> list[Film]:
    stmt = summary_query(Film.title.ilike(contains_pattern(query), escape="\\"), *conditions)
    return await _execute(db, stmt.limit(limit))


async def _match_keyword(
    db: AsyncSession,
    query: str,
    conditions: list[ColumnElement[bool]],
    limit: int,
) -> list[Film]:
    keyword_ids = await _execute(
        db, select(Keyword.id).where(Keyword.name.ilike(contains_pattern(query), escape="\\"))
    )
    if not keyword_ids:
        logger.debug(f"No keyword matches {query!r}")
        return []

    film_ids = await _execute(db, film_ids_through(KEYWORDS, keyword_ids))
    if not film_ids:
        logger.debug(f"Keywords {keyword_ids} matching {query!r} tag no films")
        return []

    stmt = summary_query(Film.id.in_(film_ids), *conditions)
    return await _execute(db, stmt.limit(limit))


# Tried in order; the first strategy returning films wins.
TEXT_STRATEGIES: tuple[SearchStrategy, ...] = (_match_title, _match_keyword)


async def search_films(
    db: AsyncSession,
    request: FilterRequest,
    limit: int | None = None,
) -> list[FilmSummary]:
    """
    Run a catalogue search.

    With no criteria at all, returns the most recently added films. A
    free-text query is matched against titles first and only falls back
    to keyword names when no title matches. Structured filters narrow
    whichever of those runs.

    Raises:
        QueryFailed: if a database read fails
    """
    limit = limit or settings.search_row_cap
    conditions = structured_conditions(request)

    if request.query is None:
        films = await _execute(db, summary_query(*conditions).limit(limit))
    else:
        films = []
        for strategy in TEXT_STRATEGIES:
            films = await strategy(db, request.query, conditions, limit)
            if films:
                logger.debug(f"{strategy.__name__} matched {len(films)} films for {request.query!r}")
                break

    return shape_summaries(films, limit)


def shape_summaries(films: Iterable[Film], limit: int | None = None) -> list[FilmSummary]:
    """Project films to summaries, dropping repeated ids and keeping first-seen order."""
    seen: set[str] = set()
    summaries: list[FilmSummary] = []
    for film in films:
        if film.id in seen:
            continue
        seen.add(film.id)
        summaries.append(to_summary(film))
        if limit is not None and len(summaries) >= limit:
            break
    return summaries


def _refs(rows: Sequence[Any] | None) -> list[NamedRef]:
    return [NamedRef(id=row.id, name=row.name) for row in rows or []]


def to_summary(film: Film) -> FilmSummary:
    return FilmSummary(
        id=film.id,
        title=film.title,
        image_url=resolve_image_url(film.image_url),
        release_date=film.release_date,
        genres=_refs(film.genres),
        keywords=_refs(film.keywords),
        directors=_refs(film.directors),
    )


def to_detail(film: Film) -> FilmDetail:
    return FilmDetail(
        **to_summary(film).model_dump(),
        description=film.description,
        language=film.language,
        runtime=film.runtime,
        type=film.type,
        boost=film.boost,
        countries=_refs(film.countries),
        created_at=film.created_at,
        updated_at=film.updated_at,
    )


async def featured_films(db: AsyncSession, limit: int | None = None) -> list[FilmSummary]:
    """Boosted films for the homepage hero."""
    limit = limit or settings.home_featured_size
    films = await _execute(db, summary_query(Film.boost.is_(True)).limit(limit))
    return shape_summaries(films)


async def latest_films(db: AsyncSession, limit: int | None = None) -> list[FilmSummary]:
    """Most recently added films."""
    limit = limit or settings.home_catalogue_size
    films = await _execute(db, summary_query().limit(limit))
    return shape_summaries(films)


async def films_by_genre(
    db: AsyncSession,
    genre_id: int,
    limit: int | None = None,
) -> list[FilmSummary]:
    """Newest films linked to one genre."""
    limit = limit or settings.genre_row_size
    stmt = summary_query(Film.id.in_(film_ids_through(GENRES, [genre_id]))).limit(limit)
    return shape_summaries(await _execute(db, stmt))


async def genre_rows(
    db: AsyncSession,
    limit: int | None = None,
) -> list[tuple[NamedRef, list[FilmSummary]]]:
    """One row of films per genre that has any, genres in name order."""
    used = select(GENRES.target_column).distinct()
    genres = await _execute(db, select(Genre).where(Genre.id.in_(used)).order_by(Genre.name))

    rows: list[tuple[NamedRef, list[FilmSummary]]] = []
    for genre in genres:
        films = await films_by_genre(db, genre.id, limit)
        if films:
            rows.append((NamedRef(id=genre.id, name=genre.name), films))
    return rows


async def get_film(db: AsyncSession, film_id: str) -> Film:
    """
    Load a film with all of its relations.

    Raises:
        FilmNotFound: if no film has this id
        QueryFailed: if the read fails
    """
    stmt = (
        select(Film)
        .options(
            selectinload(Film.directors),
            selectinload(Film.countries),
            selectinload(Film.genres),
            selectinload(Film.keywords),
        )
        .where(Film.id == film_id)
    )
    films = await _execute(db, stmt)
    if not films:
        raise FilmNotFound(film_id)
    return films[0]


async def get_film_detail(db: AsyncSession, film_id: str) -> FilmDetail:
    return to_detail(await get_film(db, film_id))
