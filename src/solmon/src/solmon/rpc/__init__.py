from .client import SolanaRPCClient
from .models import BlockProduction, EpochInfo, PerformanceSample, SlotRange, SlotStats, VoteAccount, VoteAccounts

__all__ = [
    "BlockProduction",
    "EpochInfo",
    "PerformanceSample",
    "SlotRange",
    "SlotStats",
    "SolanaRPCClient",
    "VoteAccount",
    "VoteAccounts",
]
