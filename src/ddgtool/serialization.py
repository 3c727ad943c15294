"""Snapshot registry and JSON (de)serialization.

Types are registered explicitly with a type id and a pair of functions: one
that turns an instance into a plain snapshot, one that restores a fresh
instance from it. Lookup is always by type id, never by introspection.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from pydantic import BaseModel

from ddgtool.errors import SerializationError
from ddgtool.logging import get_logger

logger = get_logger(__name__)

TYPE_KEY = "__type"
SNAPSHOT_KEY = "__snapshot"


@dataclass(frozen=True)
class SnapshotHandler:
    """Snapshot functions for one registered type."""

    cls: type
    create: Callable[[Any], dict[str, Any]]
    restore: Callable[[Mapping[str, Any]], Any]


class SnapshotRegistry:
    """Mapping from type id to snapshot/restore functions."""

    def __init__(self) -> None:
        self._by_id: dict[str, SnapshotHandler] = {}

    def register(
        self,
        cls: type,
        *,
        type_id: str | None = None,
        create: Callable[[Any], dict[str, Any]] | None = None,
        restore: Callable[[Mapping[str, Any]], Any] | None = None,
    ) -> None:
        """Register ``cls``.

        By default the instance's ``create_snapshot``/``load_snapshot`` methods are
        used, and restore starts from an uninitialized ``cls.__new__(cls)``.
        """
        type_id = type_id or cls.__name__
        if type_id in self._by_id and self._by_id[type_id].cls is not cls:
            raise SerializationError(f"type id already registered: {type_id}")

        def _default_restore(snapshot: Mapping[str, Any]) -> Any:
            instance = cls.__new__(cls)
            instance.load_snapshot(snapshot)
            return instance

        self._by_id[type_id] = SnapshotHandler(
            cls=cls,
            create=create or (lambda obj: obj.create_snapshot()),
            restore=restore or _default_restore,
        )

    def type_id_of(self, obj: Any) -> str:
        for type_id, handler in self._by_id.items():
            if type(obj) is handler.cls:
                return type_id
        raise SerializationError(f"type not registered: {type(obj).__name__}")

    def is_registered(self, type_id: str) -> bool:
        return type_id in self._by_id

    def to_snapshot(self, obj: Any) -> dict[str, Any]:
        """Wrap ``obj``'s snapshot in a ``{__type, __snapshot}`` envelope."""
        type_id = self.type_id_of(obj)
        return {TYPE_KEY: type_id, SNAPSHOT_KEY: self._by_id[type_id].create(obj)}

    def from_snapshot(self, envelope: Mapping[str, Any]) -> Any:
        try:
            type_id = envelope[TYPE_KEY]
            snapshot = envelope[SNAPSHOT_KEY]
        except (KeyError, TypeError) as e:
            raise SerializationError(f"malformed snapshot envelope: {e}") from e

        handler = self._by_id.get(type_id)
        if handler is None:
            raise SerializationError(f"unknown snapshot type: {type_id}")
        return handler.restore(snapshot)

    def serialize(self, obj: Any, *, indent: int | None = None) -> str:
        """Serialize ``obj`` to a JSON document."""
        return json.dumps(self.to_snapshot(obj), default=_json_default, ensure_ascii=False, indent=indent)

    def deserialize(self, text: str) -> Any:
        """Restore an instance from :meth:`serialize` output."""
        try:
            envelope = json.loads(text)
        except json.JSONDecodeError as e:
            raise SerializationError(f"snapshot is not valid JSON: {e}") from e
        return self.from_snapshot(envelope)


def _json_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def register_builtin_types(registry: SnapshotRegistry) -> None:
    """Register the package's snapshot-capable types."""

    from ddgtool.tools.duckduckgo import DuckDuckGoSearchTool, DuckDuckGoSearchToolOutput

    registry.register(DuckDuckGoSearchToolOutput)
    registry.register(DuckDuckGoSearchTool)
    logger.debug("Registered builtin snapshot types")


_global_registry = SnapshotRegistry()
register_builtin_types(_global_registry)


def get_snapshot_registry() -> SnapshotRegistry:
    """Get the global snapshot registry."""
    return _global_registry


def serialize(obj: Any, *, indent: int | None = None) -> str:
    return _global_registry.serialize(obj, indent=indent)


def deserialize(text: str) -> Any:
    return _global_registry.deserialize(text)
