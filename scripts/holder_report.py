"""Print a holder report for one mint without going through Telegram.

Usage:
    python scripts/holder_report.py <MINT_ADDRESS> [--compact]
    python scripts/holder_report.py <MINT_ADDRESS> --min-ui-amount 0 --min-sol 100
"""

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config.settings import ReportThresholds, settings  # noqa: E402
from holder_radar.parsers.aggregator import ReportStyle  # noqa: E402
from holder_radar.parsers.exceptions import HolderRadarError  # noqa: E402
from holder_radar.parsers.report_pipeline import generate_report  # noqa: E402
from holder_radar.parsers.solana_rpc.client import SolanaRpcClient  # noqa: E402
from holder_radar.utils.logger import setup_logger  # noqa: E402


async def run(args: argparse.Namespace) -> int:
    thresholds = ReportThresholds(
        min_ui_amount=args.min_ui_amount,
        max_wallet_age_hours=args.max_age_hours,
        min_sol_for_whale=args.min_sol,
    )
    client = SolanaRpcClient(
        args.rpc_url,
        commitment=settings.rpc_commitment,
        timeout=settings.rpc_timeout_sec,
        max_retries=settings.rpc_max_retries,
    )
    try:
        text = await generate_report(
            args.mint,
            client=client,
            thresholds=thresholds,
            style=ReportStyle.COMPACT if args.compact else ReportStyle.FULL,
            max_concurrent=args.max_concurrent,
            timeout_sec=settings.classify_timeout_sec,
        )
    except HolderRadarError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1
    finally:
        await client.close()

    print(text)
    return 0


async def main() -> int:
    parser = argparse.ArgumentParser(description="Token holder risk report")
    parser.add_argument("mint", help="Token mint address")
    parser.add_argument("--compact", action="store_true", help="List top 3 instead of top 5")
    parser.add_argument("--rpc-url", default=settings.solana_rpc_url)
    parser.add_argument("--min-ui-amount", type=float, default=settings.min_ui_amount)
    parser.add_argument("--max-age-hours", type=int, default=settings.max_wallet_age_hours)
    parser.add_argument("--min-sol", type=float, default=settings.min_sol_for_whale)
    parser.add_argument(
        "--max-concurrent", type=int, default=settings.classify_max_concurrent
    )
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    setup_logger(level=args.log_level)
    return await run(args)


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
