import argparse
import asyncio
import sys

from loguru import logger
from rich.console import Console
from rich.text import Text

from solmon import settings
from solmon.dashboard import run_dashboard
from solmon.dashboard.models import compute_tps
from solmon.exceptions import SolmonError
from solmon.report import epoch_report, status_report, validator_report
from solmon.rpc import SolanaRPCClient


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="solmon", description="Solana Monitoring CLI")
    parser.add_argument(
        "--url",
        dest="url",
        default=None,
        help=f"JSON-RPC endpoint to query (default: $SOLMON_RPC_URL or {settings.RPC_URL}).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("dashboard", help="Live TPS, slot and block production dashboard (press q to quit).")
    subparsers.add_parser("epoch", help="Print the current epoch.")
    subparsers.add_parser("status", help="Print a one-shot cluster status report.")
    validator = subparsers.add_parser("validator", help="Look up a validator by identity or vote account.")
    validator.add_argument("pubkey", help="Validator identity or vote account public key.")
    return parser


def configure_logging(dashboard: bool) -> None:
    """Route loguru output; the dashboard owns the terminal so stderr stays silent there."""
    logger.remove()
    if dashboard:
        if settings.LOG_FILE:
            logger.add(settings.LOG_FILE, level=settings.LOG_LEVEL, enqueue=True)
        return
    logger.add(sys.stderr, level=settings.LOG_LEVEL)


async def launch_dashboard(client: SolanaRPCClient) -> None:
    """Seed the dashboard from one performance sample and run it."""
    initial_tps = initial_slot = 0
    try:
        samples = await client.fetch_performance_samples()
    except SolmonError as e:
        logger.warning(f"Could not fetch initial performance sample, starting from zero: {e}")
    else:
        if samples:
            initial_tps = compute_tps(samples[0].num_transactions, samples[0].sample_period_secs)
            initial_slot = samples[0].slot
    await run_dashboard(client, initial_tps=initial_tps, initial_slot=initial_slot)


async def dispatch(args: argparse.Namespace, console: Console) -> None:
    client = SolanaRPCClient(args.url)
    if args.command == "dashboard":
        await launch_dashboard(client)
    elif args.command == "epoch":
        await epoch_report(client, console)
    elif args.command == "status":
        await status_report(client, console)
    elif args.command == "validator":
        await validator_report(client, console, args.pubkey)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for solmon."""
    args = build_parser().parse_args(argv)
    configure_logging(dashboard=args.command == "dashboard")
    console = Console()
    error_console = Console(stderr=True)

    try:
        asyncio.run(dispatch(args, console))
    except KeyboardInterrupt:
        pass
    except SolmonError as e:
        error_console.print(Text.assemble(("Error: ", "red"), str(e)))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
