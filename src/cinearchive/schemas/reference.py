"""Pydantic schemas for reference data used by filter controls."""

from pydantic import BaseModel, ConfigDict


class ReferenceItem(BaseModel):
    """Option for a select control."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class KeywordStat(BaseModel):
    """Keyword with the number of films it tags."""

    id: int
    name: str
    film_count: int
