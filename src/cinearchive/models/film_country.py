"""FilmCountry link table.

Holds only the two foreign keys; co-productions list several countries.
"""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from cinearchive.models.base import Base


class FilmCountry(Base):
    """Many-to-many link between a film and a country."""

    __tablename__ = "film_countries"

    film_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("films.id", ondelete="CASCADE"),
        primary_key=True,
    )
    country_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("countries.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<FilmCountry(film_id={self.film_id!r}, country_id={self.country_id})>"
