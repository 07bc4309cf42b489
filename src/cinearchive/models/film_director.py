"""FilmDirector link table.

Holds only the two foreign keys; a film may credit several directors.
"""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from cinearchive.models.base import Base


class FilmDirector(Base):
    """Many-to-many link between a film and a director."""

    __tablename__ = "film_directors"

    film_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("films.id", ondelete="CASCADE"),
        primary_key=True,
    )
    director_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("directors.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<FilmDirector(film_id={self.film_id!r}, director_id={self.director_id})>"
