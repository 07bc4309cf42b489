"""Reference data for filter controls and edit forms."""

import logging
from typing import Any

from sqlalchemy import Select, distinct, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cinearchive.errors import QueryFailed
from cinearchive.models import Country, Director, FilmKeyword, Genre, Keyword
from cinearchive.schemas.reference import KeywordStat, ReferenceItem
from cinearchive.services.film_search import HAS_RELEASE_YEAR, RELEASE_YEAR

logger = logging.getLogger(__name__)


async def _rows(db: AsyncSession, stmt: Select) -> list[Any]:
    try:
        result = await db.execute(stmt)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Reference data query failed: {e}")
        raise QueryFailed(str(e)) from e
    return list(result.all())


async def _list_named(db: AsyncSession, model: type) -> list[ReferenceItem]:
    rows = await _rows(db, select(model.id, model.name).order_by(model.name))
    return [ReferenceItem(id=row.id, name=row.name) for row in rows]


async def list_countries(db: AsyncSession) -> list[ReferenceItem]:
    return await _list_named(db, Country)


async def list_genres(db: AsyncSession) -> list[ReferenceItem]:
    return await _list_named(db, Genre)


async def list_keywords(db: AsyncSession) -> list[ReferenceItem]:
    return await _list_named(db, Keyword)


async def list_directors(db: AsyncSession) -> list[ReferenceItem]:
    return await _list_named(db, Director)


async def list_release_years(db: AsyncSession) -> list[int]:
    """Distinct release years present in the catalogue, newest first."""
    year = distinct(RELEASE_YEAR).label("year")
    stmt = select(year).where(HAS_RELEASE_YEAR).order_by(year.desc())
    rows = await _rows(db, stmt)
    return [int(row.year) for row in rows]


async def keyword_stats(db: AsyncSession) -> list[KeywordStat]:
    """Keywords with the number of films they tag, most used first."""
    film_count = func.count(FilmKeyword.film_id).label("film_count")
    stmt = (
        select(Keyword.id, Keyword.name, film_count)
        .join(FilmKeyword, FilmKeyword.keyword_id == Keyword.id)
        .group_by(Keyword.id, Keyword.name)
        .order_by(film_count.desc(), Keyword.name)
    )
    rows = await _rows(db, stmt)
    return [KeywordStat(id=row.id, name=row.name, film_count=row.film_count) for row in rows]
