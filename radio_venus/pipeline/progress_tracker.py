"""Run progress tracking with callback-based listener notification.

Each command run has a ``run_id``.  The pipeline reports phase changes and
completion percentages through :meth:`ProgressTracker.update`; registered
listeners (the CLI progress line, tests) are called with every update.
A listener that raises is logged and skipped so it can never stop a run.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass

import structlog

from radio_venus.models.pipeline import RunPhase
from radio_venus.utils.logging import get_logger


@dataclass
class _RunStatus:
    phase: RunPhase = RunPhase.LOAD
    progress: float = 0.0
    message: str = ""


class ProgressTracker:
    """Tracks and broadcasts per-run progress via callbacks."""

    def __init__(self) -> None:
        self._statuses: dict[str, _RunStatus] = {}
        self._listeners: dict[str, list[Callable]] = {}
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def update(
        self, run_id: str, phase: RunPhase, progress: float, message: str = ""
    ) -> None:
        """Record a progress update and notify the run's listeners.

        Parameters
        ----------
        run_id:
            The run to update.
        phase:
            Current build phase.
        progress:
            Completion percentage, clamped to ``[0, 100]``.
        message:
            Short human-readable status.
        """
        progress = max(0.0, min(100.0, progress))
        self._statuses[run_id] = _RunStatus(phase=phase, progress=progress, message=message)
        self._logger.debug(
            "progress_update",
            run_id=run_id,
            phase=phase.value,
            progress=round(progress, 1),
            message=message,
        )
        await self._notify_listeners(run_id, phase, progress, message)

    def register_listener(self, run_id: str, callback: Callable) -> None:
        """Register a sync or async ``callback(run_id, phase, progress, message)``."""
        listeners = self._listeners.setdefault(run_id, [])
        if callback not in listeners:
            listeners.append(callback)

    def unregister_listener(self, run_id: str, callback: Callable) -> None:
        listeners = self._listeners.get(run_id, [])
        if callback in listeners:
            listeners.remove(callback)

    def get_status(self, run_id: str) -> dict:
        """Return ``{"phase", "progress", "message"}`` for *run_id*."""
        status = self._statuses.get(run_id) or _RunStatus()
        return {
            "phase": status.phase.value,
            "progress": status.progress,
            "message": status.message,
        }

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _notify_listeners(
        self, run_id: str, phase: RunPhase, progress: float, message: str
    ) -> None:
        for callback in list(self._listeners.get(run_id, [])):
            try:
                result = callback(run_id, phase, progress, message)
                if asyncio.iscoroutine(result):
                    await result
            except Exception as exc:  # noqa: BLE001
                self._logger.warning(
                    "listener_callback_error",
                    run_id=run_id,
                    error=str(exc),
                    callback=getattr(callback, "__name__", repr(callback)),
                )
