"""SQLAlchemy ORM models."""

from cinearchive.models.base import Base
from cinearchive.models.country import Country
from cinearchive.models.director import Director
from cinearchive.models.film import Film
from cinearchive.models.film_country import FilmCountry
from cinearchive.models.film_director import FilmDirector
from cinearchive.models.film_genre import FilmGenre
from cinearchive.models.film_keyword import FilmKeyword
from cinearchive.models.genre import Genre
from cinearchive.models.keyword import Keyword

__all__ = [
    "Base",
    "Country",
    "Director",
    "Film",
    "FilmCountry",
    "FilmDirector",
    "FilmGenre",
    "FilmKeyword",
    "Genre",
    "Keyword",
]
