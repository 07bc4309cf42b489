"""FilmGenre link table.

Holds only the two foreign keys.
"""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from cinearchive.models.base import Base


class FilmGenre(Base):
    """Many-to-many link between a film and a genre."""

    __tablename__ = "film_genres"

    film_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("films.id", ondelete="CASCADE"),
        primary_key=True,
    )
    genre_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("genres.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<FilmGenre(film_id={self.film_id!r}, genre_id={self.genre_id})>"
