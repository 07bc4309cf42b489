"""Pydantic schemas for API requests and responses."""

from cinearchive.schemas.film import FilmDetail, FilmInput, FilmSummary, NamedRef
from cinearchive.schemas.reference import KeywordStat, ReferenceItem
from cinearchive.schemas.search import FilterRequest

__all__ = [
    "FilmDetail",
    "FilmInput",
    "FilmSummary",
    "FilterRequest",
    "KeywordStat",
    "NamedRef",
    "ReferenceItem",
]
