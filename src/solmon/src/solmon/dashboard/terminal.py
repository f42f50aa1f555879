"""Scoped ownership of the terminal while the dashboard is on screen."""

from __future__ import annotations

import contextlib

from blessed import Terminal
from loguru import logger
from rich.console import Console, RenderableType
from rich.live import Live


class TerminalSession:
    """Switch the terminal to the alternate screen with cbreak input for the duration of a ``with`` block.

    Whatever was acquired is released exactly once on the way out, including when the
    block exits with an exception or setup itself fails halfway.
    """

    def __init__(self, term: Terminal | None = None, console: Console | None = None) -> None:
        self.term = term if term is not None else Terminal()
        self.console = console if console is not None else Console()
        self._stack: contextlib.ExitStack | None = None
        self._live: Live | None = None

    def __enter__(self) -> "TerminalSession":
        stack = contextlib.ExitStack()
        try:
            stack.enter_context(self.term.cbreak())
            stack.enter_context(self.term.hidden_cursor())
            self._live = stack.enter_context(Live(console=self.console, screen=True, auto_refresh=False))
        except BaseException:
            stack.close()
            raise
        self._stack = stack
        logger.debug("Terminal session acquired")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        stack, self._stack = self._stack, None
        self._live = None
        if stack is not None:
            stack.close()
            logger.debug("Terminal session released")
        return False

    @property
    def width(self) -> int:
        return self.term.width or self.console.width

    def draw(self, renderable: RenderableType) -> None:
        if self._live is None:
            raise RuntimeError("TerminalSession is not active")
        self._live.update(renderable, refresh=True)

    def read_key(self, timeout: float) -> str:
        """Wait up to ``timeout`` seconds for a keypress; returns ``""`` when none arrived."""
        return str(self.term.inkey(timeout=timeout))
