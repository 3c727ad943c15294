"""Browser-like request headers."""

from __future__ import annotations

import random
from typing import Protocol, Sequence

DEFAULT_USER_AGENTS: tuple[str, ...] = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_2) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.2 Safari/605.1.15",
)


class HeaderProvider(Protocol):
    """Header/identity provider interface."""

    def get_headers(self) -> dict[str, str]:
        """Return a header mapping that includes ``user-agent``."""


class BrowserHeaderProvider:
    """Produce a plausible browser header set per request."""

    def __init__(
        self,
        user_agents: Sequence[str] = DEFAULT_USER_AGENTS,
        *,
        accept_language: str = "en-US,en;q=0.9",
        rng: random.Random | None = None,
    ) -> None:
        if not user_agents:
            raise ValueError("at least one user agent is required")
        self._user_agents = tuple(user_agents)
        self._accept_language = accept_language
        self._rng = rng or random.Random()

    def get_headers(self) -> dict[str, str]:
        return {
            "user-agent": self._rng.choice(self._user_agents),
            "accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "accept-language": self._accept_language,
            "accept-encoding": "gzip, deflate, br",
            "upgrade-insecure-requests": "1",
        }
