"""Pydantic schemas for film data."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cinearchive.errors import InvalidFilterValue
from cinearchive.schemas.search import clean_text, parse_id, parse_int, split_ids


class NamedRef(BaseModel):
    """An (id, name) reference row: director, country, genre or keyword."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class FilmSummary(BaseModel):
    """Display-ready projection of a film returned by listings and searches."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    image_url: str
    release_date: str | None = None
    genres: list[NamedRef] | None = None
    keywords: list[NamedRef] | None = None
    directors: list[NamedRef] | None = None


class FilmDetail(FilmSummary):
    """Everything shown on the film page."""

    description: str | None = None
    language: str | None = None
    runtime: int | None = None
    type: str | None = None
    boost: bool = False
    countries: list[NamedRef] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class FilmInput(BaseModel):
    """Fields submitted by the create and edit forms."""

    title: str
    description: str | None = None
    release_date: str | None = None
    language: str | None = None
    runtime: int | None = None
    type: str | None = None
    image_url: str | None = None
    boost: bool = False

    # Existing reference rows picked from selects
    director_ids: list[int] = Field(default_factory=list)
    country_ids: list[int] = Field(default_factory=list)
    genre_ids: list[int] = Field(default_factory=list)
    keyword_ids: list[int] = Field(default_factory=list)

    # Free-text entries, created when no row has that name yet
    director_names: list[str] = Field(default_factory=list)
    genre_names: list[str] = Field(default_factory=list)
    keyword_names: list[str] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title is required")
        return v

    @classmethod
    def from_form(cls, form: Any) -> "FilmInput":
        """
        Build input from submitted form data.

        ``form`` is a Starlette ``FormData`` (anything with ``get`` and
        ``getlist``). Blank optional fields become None; a runtime that is
        not a whole number of minutes is dropped.
        """

        def text(key: str) -> str | None:
            value = form.get(key)
            return clean_text(value) if isinstance(value, str) else None

        def ids(key: str) -> list[int]:
            return parse_ids(form.getlist(key))

        def names(key: str) -> list[str]:
            return split_names(form.getlist(key))

        try:
            runtime = parse_int(text("runtime"))
        except InvalidFilterValue:
            runtime = None

        return cls(
            title=form.get("title") or "",
            description=text("description"),
            release_date=text("release_date"),
            language=text("language"),
            runtime=runtime,
            type=text("type"),
            image_url=text("image_url"),
            boost=form.get("boost") in ("on", "true", "1"),
            director_ids=ids("director_ids"),
            country_ids=ids("country_ids"),
            genre_ids=ids("genre_ids"),
            keyword_ids=ids("keyword_ids"),
            director_names=names("director_names"),
            genre_names=names("genre_names"),
            keyword_names=names("keyword_names"),
        )


def parse_ids(values: list[str] | str | None) -> list[int]:
    """Selected ids to a de-duplicated list; values that are not valid ids are skipped."""
    parsed: list[int] = []
    for raw in split_ids(values):
        try:
            value = parse_id(raw)
        except InvalidFilterValue:
            continue
        if value is not None and value not in parsed:
            parsed.append(value)
    return parsed


def split_names(values: list[str] | str | None) -> list[str]:
    """Comma-separated names to a de-duplicated list, order kept, blanks dropped."""
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    names: list[str] = []
    for value in values:
        for part in str(value).split(","):
            part = part.strip()
            if part and part not in names:
                names.append(part)
    return names
