"""Background refresh of cluster telemetry into the shared state store."""

from __future__ import annotations

import asyncio
from typing import Protocol

from loguru import logger

from solmon import settings
from solmon.exceptions import RPCError
from solmon.rpc.models import BlockProduction, PerformanceSample

from .models import AppState, compute_tps, rank_validators
from .state import StateStore


class TelemetrySource(Protocol):
    async def fetch_performance_samples(self) -> list[PerformanceSample]: ...

    async def fetch_block_production(self) -> BlockProduction: ...


class TelemetryPoller:
    """Polls the RPC source every ``interval`` seconds and merges results into the store.

    Each data source fails independently: a failed fetch leaves the previous value in
    place and the cycle carries on with the next fetch.
    """

    def __init__(self, source: TelemetrySource, store: StateStore, interval: float = settings.POLL_INTERVAL) -> None:
        self._source = source
        self._store = store
        self._interval = interval
        self.cycles = 0

    async def run(self) -> None:
        """Poll until cancelled."""
        logger.info(f"Telemetry poller started (interval={self._interval}s)")
        try:
            while True:
                await self.poll_once()
                await asyncio.sleep(self._interval)
        finally:
            logger.info(f"Telemetry poller stopped after {self.cycles} cycles")

    async def poll_once(self) -> None:
        """Run a single refresh cycle."""
        self.cycles += 1
        await self._refresh_performance()
        await self._refresh_block_production()

    async def _refresh_performance(self) -> None:
        try:
            samples = await self._source.fetch_performance_samples()
        except RPCError as e:
            logger.warning(f"Skipping TPS update for cycle {self.cycles}: {e}")
            return
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error fetching performance samples in cycle {self.cycles}: {e}")
            return

        if not samples:
            logger.debug("No performance samples returned, keeping previous TPS")
            return

        sample = samples[0]
        if sample.sample_period_secs == 0:
            logger.warning(f"Performance sample at slot {sample.slot} has a zero sample period, using TPS 0")
        tps = compute_tps(sample.num_transactions, sample.sample_period_secs)

        def _apply(state: AppState) -> None:
            state.record_sample(tps, sample.slot)

        self._store.update(_apply)
        logger.debug(f"TPS updated: tps={tps}, slot={sample.slot}")

    async def _refresh_block_production(self) -> None:
        try:
            production = await self._source.fetch_block_production()
        except RPCError as e:
            logger.warning(f"Skipping validator update for cycle {self.cycles}: {e}")
            return
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error fetching block production in cycle {self.cycles}: {e}")
            return

        validators = rank_validators(production.by_identity)
        self._store.update(lambda state: state.replace_validators(validators))
        logger.debug(f"Validators updated: {len(validators)} of {len(production.by_identity)} identities")
