"""Schemas for the GitHub repository search response."""

from datetime import datetime

from pydantic import BaseModel, Field


class Repository(BaseModel):
    """One repository record from /search/repositories (fields we use)."""

    name: str = ""
    description: str | None = None
    stargazers_count: int = 0
    forks_count: int = 0
    language: str | None = None
    updated_at: datetime | None = None
    html_url: str = ""


class SearchResult(BaseModel):
    """Search page: total_count can exceed len(items). Items come sorted by stars, descending."""

    total_count: int = 0
    items: list[Repository] = Field(default_factory=list)
