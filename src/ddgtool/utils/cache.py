"""Per-instance memoization."""

from __future__ import annotations

import functools
import weakref
from typing import Any, Callable, TypeVar

T = TypeVar("T")


def memoize_per_instance(method: Callable[[Any], T]) -> Callable[[Any], T]:
    """Cache a zero-argument method's result, keyed by the owning instance.

    The value is computed lazily on first call and reused until the instance
    is garbage collected or :func:`clear_memoized` is called for it.
    """

    cache: weakref.WeakKeyDictionary[Any, T] = weakref.WeakKeyDictionary()

    @functools.wraps(method)
    def _wrapper(self: Any) -> T:
        try:
            return cache[self]
        except KeyError:
            value = method(self)
            cache[self] = value
            return value

    _wrapper.cache = cache  # type: ignore[attr-defined]
    return _wrapper


def clear_memoized(instance: Any, method: Callable[..., Any]) -> None:
    """Drop a memoized value for ``instance``."""

    cache = getattr(method, "cache", None)
    if cache is not None:
        cache.pop(instance, None)
