"""Create, update and delete films, including their link rows and image."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TypeVar

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cinearchive.errors import FilmNotFound, QueryFailed
from cinearchive.models import Country, Director, Film, Genre, Keyword
from cinearchive.schemas.film import FilmInput
from cinearchive.services.film_search import get_film
from cinearchive.services.storage import StorageClient

logger = logging.getLogger(__name__)

RefT = TypeVar("RefT", Director, Country, Genre, Keyword)


@dataclass
class ImageUpload:
    """An image file received from a form."""

    filename: str
    content: bytes
    content_type: str | None = None


async def reconcile_names(db: AsyncSession, model: type[RefT], names: list[str]) -> list[RefT]:
    """
    Find reference rows by exact name, creating the missing ones.

    Returned rows follow the order of ``names``; new rows are pending in
    the session until the next flush. Names are stripped, blanks dropped
    and repeats collapsed.
    """
    names = list(dict.fromkeys(name.strip() for name in names if name.strip()))
    if not names:
        return []

    result = await db.execute(select(model).where(model.name.in_(names)))
    existing = {row.name: row for row in result.scalars().all()}

    rows: list[RefT] = []
    for name in names:
        row = existing.get(name)
        if row is None:
            row = model(name=name)
            db.add(row)
            existing[name] = row
            logger.info(f"Created {model.__name__} {name!r}")
        rows.append(row)
    return rows


async def _resolve_refs(
    db: AsyncSession,
    model: type[RefT],
    ids: list[int],
    names: list[str],
) -> list[RefT]:
    """Rows selected by id plus rows named in free text, one per name."""
    rows: list[RefT] = []
    if ids:
        result = await db.execute(select(model).where(model.id.in_(ids)))
        rows.extend(result.scalars().all())
    rows.extend(await reconcile_names(db, model, names))

    unique: list[RefT] = []
    seen: set[str] = set()
    for row in rows:
        if row.name not in seen:
            seen.add(row.name)
            unique.append(row)
    return unique


async def _assign(db: AsyncSession, film: Film, data: FilmInput) -> None:
    film.title = data.title
    film.description = data.description
    film.release_date = data.release_date
    film.language = data.language
    film.runtime = data.runtime
    film.type = data.type
    film.boost = data.boost

    film.directors = await _resolve_refs(db, Director, data.director_ids, data.director_names)
    film.countries = await _resolve_refs(db, Country, data.country_ids, [])
    film.genres = await _resolve_refs(db, Genre, data.genre_ids, data.genre_names)
    film.keywords = await _resolve_refs(db, Keyword, data.keyword_ids, data.keyword_names)


async def _upload(image: ImageUpload | None, storage: StorageClient | None) -> str | None:
    if image is None or not image.content:
        return None
    storage = storage or StorageClient()
    return await storage.upload(image.filename, image.content, image.content_type)


async def _commit(db: AsyncSession, action: str) -> None:
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to {action}: {e}")
        raise QueryFailed(str(e)) from e


async def create_film(
    db: AsyncSession,
    data: FilmInput,
    image: ImageUpload | None = None,
    storage: StorageClient | None = None,
) -> Film:
    """
    Insert a film with its links.

    The image is uploaded before anything is written, so a storage failure
    leaves the database untouched.

    Raises:
        StorageError: if the image upload fails
        QueryFailed: if the insert fails
    """
    uploaded_url = await _upload(image, storage)

    film = Film()
    try:
        await _assign(db, film, data)
    except SQLAlchemyError as e:
        await db.rollback()
        raise QueryFailed(str(e)) from e
    film.image_url = uploaded_url or data.image_url
    db.add(film)

    await _commit(db, f"create film {data.title!r}")
    logger.info(f"Created film {film.id!r} ({film.title!r})")
    return film


async def update_film(
    db: AsyncSession,
    film_id: str,
    data: FilmInput,
    image: ImageUpload | None = None,
    storage: StorageClient | None = None,
) -> Film:
    """
    Replace a film's fields and link sets.

    A newly uploaded image takes precedence over ``data.image_url``.

    Raises:
        FilmNotFound: if the film does not exist
        StorageError: if the image upload fails
        QueryFailed: if the update fails
    """
    film = await get_film(db, film_id)
    uploaded_url = await _upload(image, storage)

    try:
        await _assign(db, film, data)
    except SQLAlchemyError as e:
        await db.rollback()
        raise QueryFailed(str(e)) from e
    film.image_url = uploaded_url or data.image_url
    film.updated_at = datetime.now(timezone.utc)

    await _commit(db, f"update film {film_id!r}")
    logger.info(f"Updated film {film_id!r} ({film.title!r})")
    return film


async def delete_film(db: AsyncSession, film_id: str) -> None:
    """
    Delete a film. Its link rows go with it (ON DELETE CASCADE).

    Raises:
        FilmNotFound: if the film does not exist
        QueryFailed: if the delete fails
    """
    try:
        result = await db.execute(delete(Film).where(Film.id == film_id))
    except SQLAlchemyError as e:
        await db.rollback()
        raise QueryFailed(str(e)) from e
    if result.rowcount == 0:
        raise FilmNotFound(film_id)

    await _commit(db, f"delete film {film_id!r}")
    logger.info(f"Deleted film {film_id!r}")
