"""Search-related models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SafeSearch(str, Enum):
    """DuckDuckGo safe-search levels."""

    STRICT = "on"
    MODERATE = "moderate"
    OFF = "off"


class ThrottleOptions(BaseModel):
    """Rate policy for outbound search calls: ``limit`` calls per ``interval`` ms."""

    model_config = ConfigDict(frozen=True)

    limit: int = Field(default=1, gt=0)
    interval: float = Field(default=3000.0, gt=0)


class SearchInput(BaseModel):
    """Validated tool input."""

    model_config = ConfigDict(frozen=True)

    query: str
    page: int = 1


class SearchResult(BaseModel):
    """A single normalized web search result item."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    description: str = ""
    url: str
