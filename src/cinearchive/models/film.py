"""Film model for catalogue entries."""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cinearchive.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from cinearchive.models.country import Country
    from cinearchive.models.director import Director
    from cinearchive.models.genre import Genre
    from cinearchive.models.keyword import Keyword


def _new_film_id() -> str:
    return str(uuid.uuid4())


class Film(Base, TimestampMixin):
    """
    Film model.

    ``release_date`` is free text entered by editors: usually a year or an
    ISO date, but not guaranteed to parse. Directors, countries, genres and
    keywords are all many-to-many through link tables.
    """

    __tablename__ = "films"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_film_id)
    title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    release_date: Mapped[str | None] = mapped_column(String(50), nullable=True)
    language: Mapped[str | None] = mapped_column(String(100), nullable=True)
    runtime: Mapped[int | None] = mapped_column(Integer, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    type: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)

    # Featured on the homepage hero
    boost: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Relationships (link rows are removed by ON DELETE CASCADE)
    directors: Mapped[list["Director"]] = relationship(
        secondary="film_directors",
        order_by="Director.name",
        passive_deletes=True,
    )
    countries: Mapped[list["Country"]] = relationship(
        secondary="film_countries",
        order_by="Country.name",
        passive_deletes=True,
    )
    genres: Mapped[list["Genre"]] = relationship(
        secondary="film_genres",
        order_by="Genre.name",
        passive_deletes=True,
    )
    keywords: Mapped[list["Keyword"]] = relationship(
        secondary="film_keywords",
        order_by="Keyword.name",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Film(id={self.id!r}, title={self.title!r}, release_date={self.release_date!r})>"

    def __str__(self) -> str:
        return self.title
