"""Lock-guarded container shared by the poller and the renderer."""

from __future__ import annotations

import threading
from typing import Callable

from .models import AppState


class StateStore:
    """Serializes every read and write of the dashboard's ``AppState``.

    The lock is only ever held for in-memory field copies and updates, never across
    a network call or a draw.
    """

    def __init__(self, state: AppState | None = None) -> None:
        self._state = state if state is not None else AppState()
        self._lock = threading.Lock()

    def read_snapshot(self) -> AppState:
        """Return a point-in-time copy of the state."""
        with self._lock:
            return self._state.copy()

    def update(self, mutator: Callable[[AppState], None]) -> None:
        """Apply ``mutator`` to the live state while holding the lock."""
        with self._lock:
            mutator(self._state)
