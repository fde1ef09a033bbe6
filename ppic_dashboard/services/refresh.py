from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from datetime import UTC, datetime

from ..models.dashboard import DashboardModel
from ..sheet.interpreter import parse_dashboard

"""Refresh cycle for the dashboard model.

DashboardState keeps the last successfully parsed model. A refresh fetches
the CSV text, parses it and swaps the model in one assignment; if the fetch or
parse raises, the previous model stays in place and the exception propagates.

Overlapping refreshes are rejected (RefreshInProgressError) instead of racing.
Results are applied in completion order, so the last applied refresh wins.
"""

__all__ = [
    "DashboardState",
    "RefreshInProgressError",
    "run_watch",
]

logger = logging.getLogger(__name__)


class RefreshInProgressError(Exception):
    """Raised when refresh() is called while another refresh is running."""


class DashboardState:
    """Holder of the last-good DashboardModel."""

    def __init__(self, loader: Callable[[], str]) -> None:
        self._loader = loader
        self._lock = threading.Lock()
        self._current: DashboardModel | None = None
        self._last_refreshed: datetime | None = None

    @property
    def current(self) -> DashboardModel | None:
        return self._current

    @property
    def last_refreshed(self) -> datetime | None:
        return self._last_refreshed

    def refresh(self) -> DashboardModel:
        """Fetch + parse and replace the current model on success.

        Raises:
            RefreshInProgressError: another refresh holds the lock
            Exception: whatever the loader raises (e.g. SheetFetchError);
                state is left untouched
        """
        if not self._lock.acquire(blocking=False):
            raise RefreshInProgressError("refresh already in progress")
        try:
            text = self._loader()
            model = parse_dashboard(text)
            self._current = model
            self._last_refreshed = datetime.now(UTC)
            return model
        finally:
            self._lock.release()


def run_watch(
    state: DashboardState,
    interval: float,
    cycles: int | None = None,
    on_update: Callable[[DashboardModel], None] | None = None,
    sleep: Callable[[float], None] | None = None,
) -> int:
    """Run refresh cycles every ``interval`` seconds.

    ``cycles=None`` runs until interrupted. Failed cycles are logged and the
    last-good model is kept. Returns the number of successful cycles.
    """
    sleep = sleep or time.sleep
    succeeded = 0
    n = 0
    while cycles is None or n < cycles:
        if n > 0:
            sleep(interval)
        n += 1
        try:
            model = state.refresh()
        except RefreshInProgressError as e:
            logger.warning(f"refresh cycle {n} skipped: {e}")
            continue
        except Exception as e:
            logger.warning(f"refresh cycle {n} failed, keeping last data: {e}")
            continue
        succeeded += 1
        if on_update is not None:
            on_update(model)
    return succeeded
