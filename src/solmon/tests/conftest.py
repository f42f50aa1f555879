import contextlib
import io

import pytest
from rich.console import Console

from solmon.exceptions import RPCError
from solmon.rpc.models import BlockProduction, PerformanceSample, SlotRange, SlotStats


def make_sample(tps: int, slot: int, period: int = 60) -> PerformanceSample:
    return PerformanceSample(num_transactions=tps * period, sample_period_secs=period, slot=slot)


def make_production(stats: dict[str, tuple[int, int]]) -> BlockProduction:
    return BlockProduction(
        by_identity={identity: SlotStats(assigned=a, produced=p) for identity, (a, p) in stats.items()},
        range=SlotRange(first_slot=0, last_slot=100),
    )


class FakeSource:
    """Scripted telemetry source; each queued item is returned, or raised if it is an exception.

    Once a script runs out the last item keeps being served.
    """

    def __init__(self, samples=None, productions=None):
        self.samples = list(samples or [[]])
        self.productions = list(productions or [make_production({})])
        self.sample_calls = 0
        self.production_calls = 0

    @staticmethod
    def _next(script: list):
        item = script.pop(0) if len(script) > 1 else script[0]
        if isinstance(item, Exception):
            raise item
        return item

    async def fetch_performance_samples(self):
        self.sample_calls += 1
        return self._next(self.samples)

    async def fetch_block_production(self):
        self.production_calls += 1
        return self._next(self.productions)


class FakeTerm:
    """Stands in for ``blessed.Terminal``; counts mode switches and serves scripted keys."""

    def __init__(self, keys=None, width=80, fail_hidden_cursor=False):
        self.keys = list(keys or [])
        self.width = width
        self.fail_hidden_cursor = fail_hidden_cursor
        self.cbreak_enters = 0
        self.cbreak_exits = 0
        self.cursor_enters = 0
        self.cursor_exits = 0

    @contextlib.contextmanager
    def cbreak(self):
        self.cbreak_enters += 1
        try:
            yield
        finally:
            self.cbreak_exits += 1

    @contextlib.contextmanager
    def hidden_cursor(self):
        if self.fail_hidden_cursor:
            raise OSError("not a tty")
        self.cursor_enters += 1
        try:
            yield
        finally:
            self.cursor_exits += 1

    def inkey(self, timeout=None):
        return self.keys.pop(0) if self.keys else ""


def rpc_failure(method: str = "getRecentPerformanceSamples") -> RPCError:
    return RPCError(method, "connection refused")


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=100, height=30, record=True, color_system=None)
