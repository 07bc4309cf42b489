"""Keyword model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from cinearchive.models.base import Base, TimestampMixin


class Keyword(Base, TimestampMixin):
    """
    Descriptive tag attached to films.

    Keyword names are what the catalogue search box falls back to when
    no film title matches.
    """

    __tablename__ = "keywords"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Keyword(id={self.id}, name={self.name!r})>"

    def __str__(self) -> str:
        return self.name
