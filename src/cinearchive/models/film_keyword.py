"""FilmKeyword link table.

Holds only the two foreign keys. Traversed by the keyword search fallback.
"""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from cinearchive.models.base import Base


class FilmKeyword(Base):
    """Many-to-many link between a film and a keyword."""

    __tablename__ = "film_keywords"

    film_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("films.id", ondelete="CASCADE"),
        primary_key=True,
    )
    keyword_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("keywords.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<FilmKeyword(film_id={self.film_id!r}, keyword_id={self.keyword_id})>"
