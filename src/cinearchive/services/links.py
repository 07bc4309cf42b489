"""Traversal of the film link tables (film <-> director/country/genre/keyword)."""

from collections.abc import Collection
from dataclasses import dataclass

from sqlalchemy import Select, select
from sqlalchemy.orm import InstrumentedAttribute

from cinearchive.models import FilmCountry, FilmDirector, FilmGenre, FilmKeyword


@dataclass(frozen=True)
class LinkTable:
    """A link table seen from the film side."""

    name: str
    film_column: InstrumentedAttribute
    target_column: InstrumentedAttribute


DIRECTORS = LinkTable("directors", FilmDirector.film_id, FilmDirector.director_id)
COUNTRIES = LinkTable("countries", FilmCountry.film_id, FilmCountry.country_id)
GENRES = LinkTable("genres", FilmGenre.film_id, FilmGenre.genre_id)
KEYWORDS = LinkTable("keywords", FilmKeyword.film_id, FilmKeyword.keyword_id)


def film_ids_through(link: LinkTable, target_ids: Collection[int] | Select) -> Select:
    """
    Select the distinct ids of films linked to any of ``target_ids``.

    ``target_ids`` may be a list of ids or a select producing them, so the
    result can be executed on its own or embedded as an ``IN`` subquery.
    """
    return select(link.film_column).where(link.target_column.in_(target_ids)).distinct()
