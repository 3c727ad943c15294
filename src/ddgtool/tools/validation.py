"""Input schema for the search tool."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, create_model
from pydantic import ValidationError as PydanticValidationError

from ddgtool.errors import ValidationError
from ddgtool.models.search import SearchInput

MAX_QUERY_LENGTH = 128
MAX_PAGE = 10


def build_input_schema(max_results_per_page: int) -> type[BaseModel]:
    """Create the pydantic model describing accepted tool input."""

    return create_model(
        "DuckDuckGoSearchToolInput",
        __config__=ConfigDict(str_strip_whitespace=True, extra="forbid"),
        query=(
            str,
            Field(min_length=1, max_length=MAX_QUERY_LENGTH, description="Search query"),
        ),
        page=(
            int,
            Field(
                default=1,
                ge=1,
                le=MAX_PAGE,
                description=(
                    "Search result page "
                    f"(each page contains maximally {max_results_per_page} results)"
                ),
            ),
        ),
    )


def validate_input(schema: type[BaseModel], raw: Mapping[str, Any] | BaseModel) -> SearchInput:
    """Validate raw tool input against ``schema``.

    Raises:
        ValidationError: naming the first offending field.
    """

    if isinstance(raw, BaseModel):
        data = raw.model_dump()
    elif isinstance(raw, Mapping):
        data = dict(raw)
    else:
        raise ValidationError("input", f"expected an object, got {type(raw).__name__}")

    if data.get("page") is None:
        data.pop("page", None)

    try:
        parsed = schema.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e) from e

    return SearchInput(query=parsed.query, page=parsed.page)
