"""HTML stripping for search result fields."""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import Any, Mapping

from bs4 import BeautifulSoup

from ddgtool.logging import get_logger
from ddgtool.models.search import SearchResult

logger = get_logger(__name__)

_TAG_RE = re.compile(r"<[^>]*>?")
_WS_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class StripResult:
    """Plain text produced by :func:`strip_html`."""

    result: str


def strip_html(text: Any) -> StripResult:
    """Remove markup and decode entities.

    Malformed HTML degrades to a best-effort regex strip; non-string values are
    stringified. This never raises.
    """

    if text is None or text == "":
        return StripResult(result="")
    if not isinstance(text, str):
        text = str(text)

    try:
        plain = BeautifulSoup(text, "lxml").get_text()
    except Exception as e:
        logger.warning("HTML parse failed, falling back to tag strip: %s", e)
        plain = html.unescape(_TAG_RE.sub("", text))

    return StripResult(result=_normalize_text(plain))


def normalize_result(raw: Mapping[str, Any]) -> SearchResult:
    """Turn a backend-native result into a :class:`SearchResult`."""

    return SearchResult(
        title=strip_html(raw.get("title")).result,
        description=strip_html(raw.get("description")).result,
        url=str(raw.get("url") or ""),
    )


def _normalize_text(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()
