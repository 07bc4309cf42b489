"""Country model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from cinearchive.models.base import Base, TimestampMixin


class Country(Base, TimestampMixin):
    """Production country."""

    __tablename__ = "countries"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    code: Mapped[str | None] = mapped_column(String(3), nullable=True)

    def __repr__(self) -> str:
        return f"<Country(id={self.id}, name={self.name!r}, code={self.code!r})>"

    def __str__(self) -> str:
        return self.name
