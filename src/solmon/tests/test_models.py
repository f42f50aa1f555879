import threading
import time

import pytest

from solmon.dashboard.models import AppState, ValidatorStat, compute_tps, rank_validators, success_percentage
from solmon.dashboard.state import StateStore
from solmon.rpc.models import SlotStats


@pytest.mark.parametrize("count", [1, 29, 30, 31, 75])
def test_tps_history_keeps_last_thirty_in_order(count):
    state = AppState()
    for i in range(count):
        state.record_sample(i, 1000 + i)
        assert len(state.tps_history) <= 30

    assert list(state.tps_history) == list(range(count))[-30:]
    assert state.tps == count - 1
    assert state.slot == 1000 + count - 1


def test_seeded_state_starts_history_with_initial_reading():
    state = AppState.seeded(tps=1234, slot=99)
    assert state.tps == 1234
    assert state.slot == 99
    assert list(state.tps_history) == [1234]
    assert state.validators == []


def test_compute_tps_truncates():
    assert compute_tps(1000, 60) == 16


def test_compute_tps_zero_period_is_zero():
    assert compute_tps(1000, 0) == 0
    assert compute_tps(0, 0) == 0


def test_success_percentage():
    assert success_percentage(assigned=0, produced=0) == 0.0
    assert success_percentage(assigned=0, produced=12) == 0.0
    assert success_percentage(assigned=200, produced=150) == 75.0


def test_rank_validators_keeps_top_five_by_produced():
    by_identity = {f"v{i}": SlotStats(assigned=100, produced=p) for i, p in enumerate([5, 90, 40, 70, 10, 60, 80, 20])}

    ranked = rank_validators(by_identity)

    assert len(ranked) == 5
    assert [v.produced for v in ranked] == [90, 80, 70, 60, 40]
    assert ranked[0] == ValidatorStat(identity="v1", assigned=100, produced=90)


def test_rank_validators_with_fewer_than_five():
    by_identity = {"a": SlotStats(assigned=4, produced=1), "b": SlotStats(assigned=4, produced=3)}
    assert [v.identity for v in rank_validators(by_identity)] == ["b", "a"]


def test_rank_validators_breaks_ties_by_identity():
    by_identity = {name: SlotStats(assigned=10, produced=7) for name in ["delta", "alpha", "charlie", "bravo"]}
    assert [v.identity for v in rank_validators(by_identity)] == ["alpha", "bravo", "charlie", "delta"]


def test_snapshot_is_independent_of_store():
    store = StateStore(AppState.seeded(10, 1))
    store.update(lambda s: s.replace_validators([ValidatorStat("a", 2, 1)]))

    snapshot = store.read_snapshot()
    snapshot.tps_history.append(999)
    snapshot.validators.clear()

    fresh = store.read_snapshot()
    assert list(fresh.tps_history) == [10]
    assert fresh.validators == [ValidatorStat("a", 2, 1)]
    assert fresh.tps_history.maxlen == 30


def test_store_update_applies_all_fields_together():
    store = StateStore()
    store.update(lambda s: s.record_sample(500, 100))

    snapshot = store.read_snapshot()
    assert (snapshot.tps, snapshot.slot, list(snapshot.tps_history)) == (500, 100, [500])


def test_snapshots_never_see_a_half_applied_update():
    store = StateStore()
    done = threading.Event()
    torn = []

    def _slow_record(i: int):
        def _apply(state: AppState) -> None:
            state.tps = i
            time.sleep(0)  # hand the GIL to the reader mid-update
            state.slot = i + 1000
            time.sleep(0)
            state.tps_history.append(i)

        return _apply

    def _writer():
        for i in range(1, 2000):
            store.update(_slow_record(i))
        done.set()

    writer = threading.Thread(target=_writer)
    writer.start()
    while not done.is_set():
        snapshot = store.read_snapshot()
        if snapshot.tps and (snapshot.slot != snapshot.tps + 1000 or snapshot.tps_history[-1] != snapshot.tps):
            torn.append(snapshot)
    writer.join()

    assert torn == []
    assert store.read_snapshot().tps == 1999
