"""Data models for the dashboard."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Iterable, Mapping

from solmon import settings
from solmon.rpc.models import SlotStats


@dataclass(frozen=True, slots=True)
class ValidatorStat:
    """Leader slots assigned to a validator vs. blocks it actually produced this epoch."""

    identity: str
    assigned: int
    produced: int


def _history() -> Deque[int]:
    return deque(maxlen=settings.TPS_HISTORY_SIZE)


@dataclass(slots=True)
class AppState:
    """Latest merged view of the cluster, written by the poller and read by the renderer."""

    tps: int = 0
    slot: int = 0
    tps_history: Deque[int] = field(default_factory=_history)
    validators: list[ValidatorStat] = field(default_factory=list)

    def __post_init__(self) -> None:
        # Ensure deque maxlen respects configuration
        if self.tps_history.maxlen != settings.TPS_HISTORY_SIZE:
            self.tps_history = deque(self.tps_history, maxlen=settings.TPS_HISTORY_SIZE)

    @classmethod
    def seeded(cls, tps: int, slot: int) -> "AppState":
        """Initial state for a dashboard launch: history starts with the initial reading."""
        state = cls(tps=tps, slot=slot)
        state.tps_history.append(tps)
        return state

    def record_sample(self, tps: int, slot: int) -> None:
        """Store a new reading; the oldest history entry is evicted once the window is full."""
        self.tps = tps
        self.slot = slot
        self.tps_history.append(tps)

    def replace_validators(self, validators: Iterable[ValidatorStat]) -> None:
        self.validators = list(validators)

    def copy(self) -> "AppState":
        # ValidatorStat is frozen, so a shallow list copy is enough
        return AppState(
            tps=self.tps,
            slot=self.slot,
            tps_history=deque(self.tps_history, maxlen=self.tps_history.maxlen),
            validators=list(self.validators),
        )


def compute_tps(num_transactions: int, sample_period_secs: int) -> int:
    """Transactions per second over a sample window, truncated to an integer.

    A zero-length window yields 0 rather than a division error.
    """
    if sample_period_secs <= 0:
        return 0
    return num_transactions // sample_period_secs


def rank_validators(
    by_identity: Mapping[str, SlotStats], limit: int = settings.TOP_VALIDATOR_COUNT
) -> list[ValidatorStat]:
    """Top ``limit`` validators by blocks produced, descending; ties ordered by identity."""
    stats = [
        ValidatorStat(identity=identity, assigned=slot_stats.assigned, produced=slot_stats.produced)
        for identity, slot_stats in by_identity.items()
    ]
    stats.sort(key=lambda v: (-v.produced, v.identity))
    return stats[:limit]


def success_percentage(assigned: int, produced: int) -> float:
    """Share of assigned leader slots that produced a block."""
    if assigned <= 0:
        return 0.0
    return 100.0 * produced / assigned
