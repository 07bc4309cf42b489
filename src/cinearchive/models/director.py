"""Director model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from cinearchive.models.base import Base, TimestampMixin


class Director(Base, TimestampMixin):
    """Film director, linked to films through ``film_directors``."""

    __tablename__ = "directors"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Director(id={self.id}, name={self.name!r})>"

    def __str__(self) -> str:
        return self.name
