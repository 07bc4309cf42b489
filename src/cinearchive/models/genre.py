"""Genre model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from cinearchive.models.base import Base, TimestampMixin


class Genre(Base, TimestampMixin):
    """Genre reference table (drama, documentary, ...)."""

    __tablename__ = "genres"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Genre(id={self.id}, name={self.name!r})>"

    def __str__(self) -> str:
        return self.name
