"""Pydantic models used across the project."""

from __future__ import annotations

from ddgtool.models.search import SafeSearch, SearchInput, SearchResult, ThrottleOptions

__all__ = [
    "SafeSearch",
    "SearchInput",
    "SearchResult",
    "ThrottleOptions",
]
