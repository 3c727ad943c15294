"""Core async primitives."""

from __future__ import annotations

from ddgtool.core.concurrency import ThrottleGate, throttle

__all__ = ["ThrottleGate", "throttle"]
