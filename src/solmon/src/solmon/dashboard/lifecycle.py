"""Lifecycle management for the dashboard."""

from __future__ import annotations

import asyncio
import contextlib
from typing import Callable

from loguru import logger

from solmon import settings

from .dashboard import ClusterDashboard
from .models import AppState
from .poller import TelemetryPoller, TelemetrySource
from .state import StateStore
from .terminal import TerminalSession


def is_quit_key(key: str) -> bool:
    return key == settings.QUIT_KEY


class SolanaDashboard:
    """Runs the telemetry poller in the background and the renderer in the foreground.

    The renderer owns the visible lifecycle. When it exits, for any reason, the poller
    task is cancelled and awaited before ``run`` returns.
    """

    def __init__(
        self,
        *,
        source: TelemetrySource,
        store: StateStore,
        session_factory: Callable[[], TerminalSession] = TerminalSession,
        poll_interval: float = settings.POLL_INTERVAL,
        input_timeout: float = settings.INPUT_POLL_TIMEOUT,
    ) -> None:
        self._store = store
        self._poller = TelemetryPoller(source, store, interval=poll_interval)
        self._session_factory = session_factory
        self._input_timeout = input_timeout
        self._poller_task: asyncio.Task[None] | None = None
        self.frames = 0

    async def run(self) -> None:
        self._poller_task = asyncio.create_task(self._poller.run(), name="solmon-poller")
        try:
            await self._render_loop()
        finally:
            await self.stop()

    async def stop(self) -> None:
        task, self._poller_task = self._poller_task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _render_loop(self) -> None:
        with self._session_factory() as session:
            view = ClusterDashboard(width=session.width)
            logger.info("Dashboard started")
            while True:
                snapshot = self._store.read_snapshot()
                view.width = session.width
                session.draw(view.render(snapshot))
                self.frames += 1

                # Blocking keypress wait runs off the event loop so the poller keeps going
                key = await asyncio.to_thread(session.read_key, self._input_timeout)
                if is_quit_key(key):
                    logger.info(f"Quit requested after {self.frames} frames")
                    break


async def run_dashboard(source: TelemetrySource, initial_tps: int = 0, initial_slot: int = 0) -> None:
    """Launch the full-screen dashboard and block until the user quits."""
    store = StateStore(AppState.seeded(initial_tps, initial_slot))
    dashboard = SolanaDashboard(source=source, store=store)
    await dashboard.run()
