# src/logging/context.py — v2
"""Contextual logging support — attach run_id, logical_path, phase to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging — set per compile pass.
_run_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "run_id", default=None
)
_logical_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "logical_path", default=None
)
_phase: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "phase", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    run_id: str | None = None
    logical_path: str | None = None
    phase: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        run_id=_run_id.get(),
        logical_path=_logical_path.get(),
        phase=_phase.get(),
    )


def set_run_context(run_id: str) -> None:
    """Set pass-level context (called once per compile pass)."""
    _run_id.set(run_id)
    _logical_path.set(None)
    _phase.set(None)


def set_asset_context(logical_path: str | None, phase: str | None = None) -> None:
    """Set asset-level context (called per logical path and phase)."""
    _logical_path.set(logical_path)
    _phase.set(phase)


def clear_context() -> None:
    """Reset all context variables."""
    _run_id.set(None)
    _logical_path.set(None)
    _phase.set(None)
