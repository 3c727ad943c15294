"""ID utilities."""

from __future__ import annotations

import uuid


def new_call_id(prefix: str = "call_") -> str:
    """Return a short random id for a single tool invocation."""

    return f"{prefix}{uuid.uuid4().hex[:8]}"
