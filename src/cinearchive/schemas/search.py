"""Filter request schema for catalogue searches."""

import logging
import re
from collections.abc import Iterable

from pydantic import BaseModel, Field

from cinearchive.errors import InvalidFilterValue

logger = logging.getLogger(__name__)

_YEAR_RE = re.compile(r"[0-9]{1,4}")
_DIGITS_RE = re.compile(r"[0-9]+")

# Upper bound of a PostgreSQL INTEGER column
MAX_INT = 2**31 - 1


def clean_text(value: str | None) -> str | None:
    """Strip a raw text value; blank or whitespace-only means absent."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_int(value: str | int | None) -> int | None:
    """
    Parse a non-negative whole number written in ASCII digits.

    Raises:
        InvalidFilterValue: if the value is present but not an integer in 0..MAX_INT
    """
    if isinstance(value, int):
        number = value
    else:
        text = clean_text(value)
        if text is None:
            return None
        if not _DIGITS_RE.fullmatch(text):
            raise InvalidFilterValue(f"Invalid number: {value!r}")
        number = int(text)
    if not 0 <= number <= MAX_INT:
        raise InvalidFilterValue(f"Number out of range: {value!r}")
    return number


def parse_id(value: str | int | None) -> int | None:
    """
    Parse a reference id coming from a select control.

    Raises:
        InvalidFilterValue: if the value is present but not a positive integer
    """
    number = parse_int(value)
    if number == 0:
        raise InvalidFilterValue(f"Invalid id: {value!r}")
    return number


def parse_year(value: str | int | None) -> int | None:
    """
    Parse a release-year bound.

    Raises:
        InvalidFilterValue: if the value is present but not a year in 1..9999
    """
    if isinstance(value, int):
        text = str(value)
    else:
        text = clean_text(value)
        if text is None:
            return None
    if not _YEAR_RE.fullmatch(text) or int(text) == 0:
        raise InvalidFilterValue(f"Invalid year: {value!r}")
    return int(text)


def split_ids(values: Iterable[str] | str | None) -> list[str]:
    """Accept repeated params (``?keyword_ids=1&keyword_ids=2``) or a comma list."""
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    parts: list[str] = []
    for value in values:
        parts.extend(p for p in str(value).split(",") if p.strip())
    return parts


class FilterRequest(BaseModel):
    """
    Search and filter criteria for the catalogue.

    Every field is optional. ``query`` drives the title-then-keyword search
    box; the remaining fields are structured filters that are AND-combined.
    """

    query: str | None = None
    country_id: int | None = None
    genre_id: int | None = None
    keyword_ids: list[int] = Field(default_factory=list)
    director_id: int | None = None
    start_year: int | None = None
    end_year: int | None = None
    type: str | None = None

    @classmethod
    def from_params(
        cls,
        query: str | None = None,
        country_id: str | None = None,
        genre_id: str | None = None,
        keyword_ids: Iterable[str] | str | None = None,
        director_id: str | None = None,
        start_year: str | None = None,
        end_year: str | None = None,
        type: str | None = None,
    ) -> "FilterRequest":
        """
        Build a request from raw form / query-string values.

        Blank values mean "no constraint". Values that cannot be parsed are
        dropped (logged at DEBUG) rather than rejected.
        """
        return cls(
            query=clean_text(query),
            country_id=_lenient(parse_id, "country_id", country_id),
            genre_id=_lenient(parse_id, "genre_id", genre_id),
            keyword_ids=_lenient_ids(keyword_ids),
            director_id=_lenient(parse_id, "director_id", director_id),
            start_year=_lenient(parse_year, "start_year", start_year),
            end_year=_lenient(parse_year, "end_year", end_year),
            type=clean_text(type),
        )

    @property
    def has_structured_filters(self) -> bool:
        return any(
            (
                self.country_id is not None,
                self.genre_id is not None,
                bool(self.keyword_ids),
                self.director_id is not None,
                self.start_year is not None,
                self.end_year is not None,
                self.type is not None,
            )
        )

    @property
    def is_empty(self) -> bool:
        return self.query is None and not self.has_structured_filters


def _lenient(parser, field: str, value):
    try:
        return parser(value)
    except InvalidFilterValue as e:
        logger.debug(f"Ignoring {field}: {e}")
        return None


def _lenient_ids(values: Iterable[str] | str | None) -> list[int]:
    ids: list[int] = []
    for raw in split_ids(values):
        parsed = _lenient(parse_id, "keyword_ids", raw)
        if parsed is not None and parsed not in ids:
            ids.append(parsed)
    return ids
