"""DuckDuckGo search tool."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Literal, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ddgtool.core.concurrency import ThrottleGate
from ddgtool.errors import BackendError, ToolError, TransportError, ValidationError
from ddgtool.logging import get_logger
from ddgtool.models.search import SafeSearch, SearchInput, ThrottleOptions
from ddgtool.tools.base import SearchToolOutput, Tool
from ddgtool.tools.headers import BrowserHeaderProvider, HeaderProvider
from ddgtool.tools.sanitize import normalize_result
from ddgtool.tools.transport import install_proxy, merge_options
from ddgtool.tools.validation import build_input_schema
from ddgtool.tools.web_search import DuckDuckGoBackend, SearchBackend
from ddgtool.utils.cache import clear_memoized, memoize_per_instance

logger = get_logger(__name__)

DEFAULT_MAX_RESULTS_PER_PAGE = 15

SearchClient = Callable[[str, Mapping[str, Any], Mapping[str, Any]], Awaitable[dict[str, Any]]]


class DuckDuckGoSearchToolOptions(BaseModel):
    """Tool configuration, fixed at construction.

    ``throttle`` left unset means one call per 3000 ms; ``False`` disables throttling.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    search: dict[str, Any] = Field(default_factory=dict)
    throttle: ThrottleOptions | Literal[False] | None = None
    http_client_options: dict[str, Any] = Field(default_factory=dict)
    max_results_per_page: int = Field(default=DEFAULT_MAX_RESULTS_PER_PAGE, gt=0)
    api_key: str | None = None
    http_proxy_url: str | None = None


class DuckDuckGoSearchToolRunOptions(BaseModel):
    """Per-call overrides, merged over the tool configuration."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    search: dict[str, Any] | None = None
    http_client_options: dict[str, Any] | None = None


class DuckDuckGoSearchToolOutput(SearchToolOutput):
    """Results of one DuckDuckGo search page."""


def page_offset(max_results_per_page: int, page: int) -> int:
    """Zero-based index of the first result on ``page``."""

    return max_results_per_page * (page - 1)


class DuckDuckGoSearchTool(
    Tool[DuckDuckGoSearchToolOutput, DuckDuckGoSearchToolOptions, DuckDuckGoSearchToolRunOptions]
):
    """Rate-limited DuckDuckGo search with paginated, HTML-free results."""

    name = "DuckDuckGo"
    description = (
        "Search for online trends, news, current events, real-time information, or research topics."
    )
    options_model = DuckDuckGoSearchToolOptions

    def __init__(
        self,
        options: DuckDuckGoSearchToolOptions | Mapping[str, Any] | None = None,
        *,
        backend: SearchBackend | None = None,
        header_provider: HeaderProvider | None = None,
    ) -> None:
        """Initialize the tool.

        Args:
            options: Tool configuration, as a model or a plain mapping.
            backend: Search backend. Defaults to :class:`DuckDuckGoBackend`.
            header_provider: Header source. Defaults to :class:`BrowserHeaderProvider`.

        Raises:
            ValidationError: if ``options`` is invalid.
        """
        self.options = _coerce_options(options)
        self.backend: SearchBackend = backend or DuckDuckGoBackend()
        self.header_provider: HeaderProvider = header_provider or BrowserHeaderProvider()
        self.client: SearchClient = self._create_client()

    @memoize_per_instance
    def input_schema(self) -> type[BaseModel]:
        return build_input_schema(self.options.max_results_per_page)

    def _create_client(self) -> SearchClient:
        throttle = self.options.throttle
        if throttle is False:
            return self.backend.search
        return ThrottleGate.from_options(throttle or ThrottleOptions()).wrap(self.backend.search)

    async def _run(
        self,
        tool_input: SearchInput,
        options: DuckDuckGoSearchToolRunOptions | Mapping[str, Any] | None = None,
    ) -> DuckDuckGoSearchToolOutput:
        # Read config and client once; a concurrent restore swaps both wholesale.
        config = self.options
        client = self.client
        run_options = _coerce_run_options(options)

        headers = self._build_headers(config)

        http_options = merge_options(config.http_client_options, run_options.http_client_options)
        if config.http_proxy_url:
            install_proxy(http_options, config.http_proxy_url)

        max_results = config.max_results_per_page
        search_options = merge_options(
            {
                "offset": page_offset(max_results, tool_input.page),
                "safe_search": SafeSearch.MODERATE,
                "max_results": max_results,
            },
            config.search,
            run_options.search,
        )
        transport_options = merge_options(
            {"headers": headers, "user_agent": _user_agent(headers)},
            http_options,
        )

        try:
            response = await client(tool_input.query, search_options, transport_options)
        except ToolError:
            raise
        except Exception as e:
            raise TransportError(f"search request failed: {e}") from e

        raw_results = _extract_results(response)
        if len(raw_results) > max_results:
            logger.debug(
                "Dropping surplus results",
                extra={"received": len(raw_results), "kept": max_results},
            )

        return DuckDuckGoSearchToolOutput(
            [normalize_result(raw) for raw in raw_results[:max_results]]
        )

    def _build_headers(self, config: DuckDuckGoSearchToolOptions) -> dict[str, str]:
        try:
            headers = dict(self.header_provider.get_headers())
        except Exception as e:
            raise TransportError(f"header generation failed: {e}") from e

        if _user_agent(headers) is None:
            raise TransportError("header provider returned no user-agent")
        if config.api_key:
            headers["Authorization"] = f"Bearer {config.api_key}"
        return headers

    def load_snapshot(self, snapshot: Mapping[str, Any]) -> None:
        super().load_snapshot(snapshot)
        clear_memoized(self, DuckDuckGoSearchTool.input_schema)
        if not hasattr(self, "backend"):
            self.backend = DuckDuckGoBackend()
        if not hasattr(self, "header_provider"):
            self.header_provider = BrowserHeaderProvider()
        self.client = self._create_client()


def _coerce_options(
    options: DuckDuckGoSearchToolOptions | Mapping[str, Any] | None,
) -> DuckDuckGoSearchToolOptions:
    if isinstance(options, DuckDuckGoSearchToolOptions):
        return options
    try:
        return DuckDuckGoSearchToolOptions.model_validate(dict(options or {}))
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e, "options") from e


def _coerce_run_options(
    options: DuckDuckGoSearchToolRunOptions | Mapping[str, Any] | None,
) -> DuckDuckGoSearchToolRunOptions:
    if isinstance(options, DuckDuckGoSearchToolRunOptions):
        return options
    try:
        return DuckDuckGoSearchToolRunOptions.model_validate(dict(options or {}))
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e, "options") from e


def _user_agent(headers: Mapping[str, str]) -> str | None:
    for key, value in headers.items():
        if key.lower() == "user-agent":
            return value
    return None


def _extract_results(response: Any) -> Sequence[Mapping[str, Any]]:
    results = response.get("results") if isinstance(response, Mapping) else None
    if not isinstance(results, Sequence) or isinstance(results, (str, bytes)):
        raise BackendError("search backend response has no results list")
    for item in results:
        if not isinstance(item, Mapping):
            raise BackendError("search backend returned a malformed result item")
    return results
