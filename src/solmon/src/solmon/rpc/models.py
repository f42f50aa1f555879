"""Typed results of the Solana JSON-RPC calls used by solmon."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class RPCModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class EpochInfo(RPCModel):
    epoch: int
    slot_index: int
    slots_in_epoch: int
    absolute_slot: int
    block_height: int | None = None
    transaction_count: int | None = None

    @property
    def progress(self) -> float:
        """Percentage of the epoch's slots already elapsed."""
        if self.slots_in_epoch == 0:
            return 0.0
        return 100.0 * self.slot_index / self.slots_in_epoch


class PerformanceSample(RPCModel):
    num_transactions: int
    sample_period_secs: int
    slot: int
    num_slots: int | None = None


class SlotStats(RPCModel):
    assigned: int
    produced: int

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, data: Any) -> Any:
        # byIdentity values arrive as [leaderSlots, blocksProduced]
        if isinstance(data, (list, tuple)):
            if len(data) != 2:
                raise ValueError(f"expected [leaderSlots, blocksProduced], got {data!r}")
            return {"assigned": data[0], "produced": data[1]}
        return data


class SlotRange(RPCModel):
    first_slot: int
    last_slot: int


class BlockProduction(RPCModel):
    by_identity: dict[str, SlotStats] = Field(default_factory=dict)
    range: SlotRange


class VoteAccount(RPCModel):
    node_pubkey: str
    activated_stake: int
    commission: int
    last_vote: int
    root_slot: int
    vote_pubkey: str | None = None


class VoteAccounts(RPCModel):
    current: list[VoteAccount] = Field(default_factory=list)
    delinquent: list[VoteAccount] = Field(default_factory=list)
