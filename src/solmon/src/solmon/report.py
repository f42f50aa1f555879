"""One-shot textual reports: fetch once, format, print."""

from __future__ import annotations

import asyncio

from rich.console import Console
from rich.text import Text

from solmon import settings
from solmon.dashboard.models import compute_tps
from solmon.exceptions import ValidatorNotFoundError
from solmon.rpc import SolanaRPCClient, VoteAccount, VoteAccounts

__all__ = ["epoch_report", "find_vote_account", "print_header", "print_kv", "print_title", "status_report", "validator_report"]

LABEL_WIDTH = 22


def print_kv(console: Console, label: str, value) -> None:
    """Print a label padded to a fixed column followed by its value."""
    console.print(Text(f"{label:<{LABEL_WIDTH}} {value}"))


def print_title(console: Console, title: str) -> None:
    console.print()
    console.print(Text(title, style="bold cyan"))
    console.print(Text("-" * len(title), style="cyan"))


def print_header(console: Console, label: str) -> None:
    console.print()
    console.print(Text(label, style="bold"))


def format_sol(lamports: int) -> str:
    return f"{lamports / settings.LAMPORTS_PER_SOL:,.2f} SOL"


def find_vote_account(accounts: VoteAccounts, pubkey: str) -> tuple[VoteAccount, bool]:
    """Look up a validator by node identity or vote account; returns (account, delinquent)."""
    for delinquent, group in ((False, accounts.current), (True, accounts.delinquent)):
        for account in group:
            if pubkey in (account.node_pubkey, account.vote_pubkey):
                return account, delinquent
    raise ValidatorNotFoundError(pubkey)


async def epoch_report(client: SolanaRPCClient, console: Console) -> None:
    info = await client.fetch_epoch_info()
    print_title(console, "Epoch")
    print_kv(console, "Epoch:", info.epoch)
    print_kv(console, "Slot Index:", f"{info.slot_index}/{info.slots_in_epoch}")
    print_kv(console, "Absolute Slot:", info.absolute_slot)
    print_kv(console, "Progress:", f"{info.progress:.1f}%")


async def status_report(client: SolanaRPCClient, console: Console) -> None:
    info, samples, accounts = await asyncio.gather(
        client.fetch_epoch_info(),
        client.fetch_performance_samples(),
        client.fetch_vote_accounts(),
    )
    print_title(console, "Cluster Status")
    print_kv(console, "Slot:", info.absolute_slot)
    print_kv(console, "Epoch:", f"{info.epoch} ({info.progress:.1f}% complete)")
    if info.block_height is not None:
        print_kv(console, "Block Height:", info.block_height)
    if samples:
        sample = samples[0]
        print_kv(console, "TPS:", compute_tps(sample.num_transactions, sample.sample_period_secs))
    else:
        print_kv(console, "TPS:", "—")

    print_header(console, "Validators")
    print_kv(console, "Current:", len(accounts.current))
    print_kv(console, "Delinquent:", len(accounts.delinquent))


async def validator_report(client: SolanaRPCClient, console: Console, pubkey: str) -> None:
    accounts = await client.fetch_vote_accounts()
    account, delinquent = find_vote_account(accounts, pubkey)

    print_title(console, "Validator")
    print_kv(console, "Identity:", account.node_pubkey)
    if account.vote_pubkey:
        print_kv(console, "Vote Account:", account.vote_pubkey)
    print_kv(console, "Status:", "Delinquent" if delinquent else "Active")
    print_kv(console, "Activated Stake:", format_sol(account.activated_stake))
    print_kv(console, "Commission:", f"{account.commission}%")
    print_kv(console, "Last Vote:", account.last_vote)
    print_kv(console, "Root Slot:", account.root_slot)
