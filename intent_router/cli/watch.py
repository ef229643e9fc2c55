"""Watch IntentChannel settlement events and monitor fallback bridges.

Usage:
    intent-router-watch --rpc https://rpc.example --channel 0xChannel

    # Replay from a block
    intent-router-watch --from-block 19000000 -v
"""

import argparse
import asyncio
import sys
from collections.abc import Sequence

import httpx
import structlog

from intent_router.bridge.lifi import LifiClient
from intent_router.bridge.monitor import BridgeOutcome, BridgeStatusMonitor
from intent_router.chain.client import Web3ChainClient
from intent_router.config import Settings
from intent_router.events.reconciler import ExecutionEvent, SettlementEventReconciler
from intent_router.logging_config import configure_logging
from intent_router.models.types import is_valid_address

logger = structlog.get_logger()


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Watch IntentChannel settlement events and LI.FI bridge completion",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment fallbacks:
  RPC_URL            default for --rpc
  INTENT_CHANNEL     default for --channel
  LIFI_API_KEY       optional LI.FI API key
  BRIDGE_POLL_SECONDS  bridge status poll interval (default: 15)
        """,
    )
    parser.add_argument("--rpc", type=str, default=settings.rpc_url, help="Chain RPC URL")
    parser.add_argument("--channel", type=str, default=settings.intent_channel, help="IntentChannel address")
    parser.add_argument(
        "--from-block",
        type=int,
        default=None,
        help="First block to scan (default: current head)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def _print_execution(event: ExecutionEvent) -> None:
    route = "fallback" if event.used_fallback else "rfq"
    dest = event.dest_chain_id if event.dest_chain_id is not None else "unknown"
    print(f"[executed] intent={event.intent_hash} tx={event.transaction_hash} route={route} dest={dest}")


def _print_bridge(outcome: BridgeOutcome) -> None:
    if outcome.success:
        print(f"[bridge] {outcome.source_tx_hash} DONE dest={outcome.dest_chain_id} tx={outcome.dest_tx_hash}")
    else:
        print(f"[bridge] {outcome.source_tx_hash} {outcome.status}: {outcome.message}")


async def watch(rpc_url: str, channel: str, from_block: int | None, settings: Settings) -> None:
    async with httpx.AsyncClient() as http:
        monitor = BridgeStatusMonitor(LifiClient(http, settings.lifi), settings.monitor)
        reconciler = SettlementEventReconciler(
            Web3ChainClient(rpc_url),
            channel,
            monitor=monitor,
            config=settings.reconciler,
            on_execution=_print_execution,
            on_bridge_result=_print_bridge,
        )
        await reconciler.start(from_block)
        try:
            await asyncio.Event().wait()
        finally:
            reconciler.stop()


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for ``intent-router-watch``."""
    settings = Settings.from_env()
    args = build_parser(settings).parse_args(argv)

    configure_logging("DEBUG" if args.verbose else settings.log_level)

    if not args.rpc:
        print("Error: --rpc or RPC_URL is required")
        return 1
    if not args.channel or not is_valid_address(args.channel):
        print("Error: --channel or INTENT_CHANNEL must be a valid address")
        return 1

    try:
        asyncio.run(watch(args.rpc, args.channel, args.from_block, settings))
    except KeyboardInterrupt:
        logger.info("watch_interrupted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
