"""Tool and tool output base classes."""

from __future__ import annotations

import json
import time
from abc import ABC, abstractmethod
from typing import Any, Generic, Iterator, Mapping, Sequence, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ddgtool.errors import SerializationError, ToolError
from ddgtool.logging import call_context, get_logger
from ddgtool.models.search import SearchInput, SearchResult
from ddgtool.tools.validation import validate_input
from ddgtool.utils.ids import new_call_id

logger = get_logger(__name__)

OutputT = TypeVar("OutputT", bound="ToolOutput")
OptionsT = TypeVar("OptionsT", bound=BaseModel)
RunOptionsT = TypeVar("RunOptionsT", bound=BaseModel)


class ToolOutput(ABC):
    """Base class for tool outputs."""

    @abstractmethod
    def get_text_content(self) -> str:
        """Text representation handed back to the agent."""

    @abstractmethod
    def is_empty(self) -> bool:
        """Whether the output carries no content."""

    @abstractmethod
    def create_snapshot(self) -> dict[str, Any]:
        """Plain structure sufficient to rebuild this output."""

    @abstractmethod
    def load_snapshot(self, snapshot: Mapping[str, Any]) -> None:
        """Restore state produced by :meth:`create_snapshot`."""

    def __str__(self) -> str:
        return self.get_text_content()


class SearchToolOutput(ToolOutput):
    """Ordered, immutable sequence of normalized search results."""

    def __init__(self, results: Sequence[SearchResult]) -> None:
        self.results: tuple[SearchResult, ...] = tuple(results)

    @property
    def sources(self) -> list[str]:
        """URLs of all results, in order."""
        return [result.url for result in self.results]

    def is_empty(self) -> bool:
        return not self.results

    def get_text_content(self) -> str:
        return json.dumps([result.model_dump() for result in self.results], ensure_ascii=False)

    def create_snapshot(self) -> dict[str, Any]:
        return {"results": list(self.results)}

    def load_snapshot(self, snapshot: Mapping[str, Any]) -> None:
        # Snapshots hold already-normalized results; copy without re-validating.
        self.results = tuple(
            item if isinstance(item, SearchResult) else SearchResult.model_construct(**item)
            for item in snapshot["results"]
        )

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self) -> Iterator[SearchResult]:
        return iter(self.results)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SearchToolOutput):
            return NotImplemented
        return type(self) is type(other) and self.results == other.results

    def __repr__(self) -> str:
        return f"{type(self).__name__}(results={len(self.results)})"


class Tool(ABC, Generic[OutputT, OptionsT, RunOptionsT]):
    """Base class for async tools.

    Subclasses declare ``name``, ``description``, an input schema and
    implement :meth:`_run`. Input is always validated before ``_run`` is
    entered, so validation failures never reach the network.
    """

    options_model: type[BaseModel]
    options: OptionsT

    @property
    @abstractmethod
    def name(self) -> str:
        """Tool name."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Tool description for LLM."""

    @abstractmethod
    def input_schema(self) -> type[BaseModel]:
        """Pydantic model describing tool input."""

    @abstractmethod
    async def _run(self, tool_input: SearchInput, options: RunOptionsT | None) -> OutputT:
        """Execute the tool with validated input."""

    def get_schema(self) -> dict[str, Any]:
        """Get JSON schema for tool arguments."""
        return self.input_schema().model_json_schema()

    def validate(self, tool_input: Mapping[str, Any] | BaseModel) -> SearchInput:
        return validate_input(self.input_schema(), tool_input)

    async def run(
        self,
        tool_input: Mapping[str, Any] | BaseModel,
        options: RunOptionsT | None = None,
    ) -> OutputT:
        """Validate ``tool_input`` and execute the tool.

        Raises:
            ValidationError: input rejected; nothing was sent.
            TransportError: the request could not be delivered.
            BackendError: the backend answered with a failure.
        """
        with call_context(call_id=new_call_id(), tool=self.name):
            parsed = self.validate(tool_input)
            started = time.monotonic()
            try:
                output = await self._run(parsed, options)
            except ToolError as e:
                logger.warning(
                    "Tool run failed",
                    extra={
                        "error_type": type(e).__name__,
                        "error": str(e),
                        "elapsed_ms": int((time.monotonic() - started) * 1000),
                    },
                )
                raise

            logger.info(
                "Tool run ok",
                extra={
                    "query_len": len(parsed.query),
                    "page": parsed.page,
                    "elapsed_ms": int((time.monotonic() - started) * 1000),
                },
            )
            return output

    def create_snapshot(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "options": self.options.model_dump(mode="json"),
        }

    def load_snapshot(self, snapshot: Mapping[str, Any]) -> None:
        try:
            self.options = self.options_model.model_validate(snapshot["options"])
        except (KeyError, TypeError, PydanticValidationError) as e:
            raise SerializationError(f"invalid {self.name} snapshot: {e}") from e
