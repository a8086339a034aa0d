"""Holder report pipeline: fetch → filter → classify → aggregate → format."""

import time

from loguru import logger

from config.settings import ReportThresholds
from holder_radar.bot.formatters import format_report
from holder_radar.parsers.aggregator import ReportStyle, aggregate
from holder_radar.parsers.classification_driver import classify_all
from holder_radar.parsers.holder_fetcher import fetch_token_holders
from holder_radar.parsers.solana_rpc.client import SolanaRpcClient
from holder_radar.parsers.threshold_filter import filter_by_minimum_ui_amount


async def generate_report(
    mint_address: str,
    *,
    client: SolanaRpcClient,
    thresholds: ReportThresholds,
    style: ReportStyle = ReportStyle.FULL,
    max_concurrent: int = 20,
    timeout_sec: float = 30.0,
) -> str:
    """Build the holder report text for one mint.

    Raises InvalidMintAddress or UpstreamUnavailable; every per-account and
    per-holder failure below the fetch stage is absorbed.
    """
    started = time.monotonic()
    mint_address = mint_address.strip()
    logger.info(f"[REPORT] Generating {style.name.lower()} report for {mint_address[:12]}")

    all_holders = await fetch_token_holders(client, mint_address)
    filtered = filter_by_minimum_ui_amount(all_holders, thresholds.min_ui_amount)

    classified = await classify_all(
        client,
        filtered,
        thresholds.max_wallet_age_hours,
        thresholds.min_sol_for_whale,
        max_concurrent=max_concurrent,
        timeout_sec=timeout_sec,
    )
    report = aggregate(classified, len(all_holders), top_n=style.top_n)

    logger.info(
        f"[REPORT] {mint_address[:12]}: {report.total_holders} holders, "
        f"{report.filtered_holder_count} filtered, {report.bundle_count} bundle, "
        f"{report.whale_count} whale ({time.monotonic() - started:.1f}s)"
    )
    return format_report(report, thresholds)
