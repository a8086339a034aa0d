"""Render an AggregateReport as fixed-layout Telegram text."""

from config.settings import ReportThresholds
from holder_radar.parsers.aggregator import AggregateReport
from holder_radar.parsers.classification_driver import ClassificationFlags

FRESH_MARKER = "🆕"
WHALE_MARKER = "🐋"
NO_HOLDERS_LINE = "No holders found with the minimum balance."


def format_number(num: float) -> str:
    """Compact amount: 2.30M, 1.50K, 999.00."""
    if num >= 1_000_000:
        return f"{num / 1_000_000:.2f}M"
    if num >= 1_000:
        return f"{num / 1_000:.2f}K"
    return f"{num:.2f}"


def truncate_address(address: str) -> str:
    """Shorten addresses longer than 12 characters to first6...last6."""
    if len(address) > 12:
        return f"{address[:6]}...{address[-6:]}"
    return address


def _markers(flags: ClassificationFlags) -> str:
    marks = ""
    if flags.is_fresh_wallet:
        marks += f" {FRESH_MARKER}"
    if flags.is_whale:
        marks += f" {WHALE_MARKER}"
    return marks


def format_report(report: AggregateReport, thresholds: ReportThresholds) -> str:
    """Build the holder report text.

    Header counts are always present. When no holder passes the minimum
    balance, the body is a single explanatory line instead of a top-N list.
    """
    min_sol = format_number(thresholds.min_sol_for_whale)
    max_age = thresholds.max_wallet_age_hours
    lines = [
        "🎯 Token Holders Report",
        f"Total holders: {report.total_holders} | "
        f"Holders filtered: {report.filtered_holder_count} "
        f"(≥{format_number(thresholds.min_ui_amount)} tokens)",
        f"{FRESH_MARKER} Suspected bundle: {report.bundle_count} "
        f"({report.bundle_percentage:.1f}%) | wallets ≤{max_age}h old",
        f"{WHALE_MARKER} Suspected whale: {report.whale_count} "
        f"({report.whale_percentage:.1f}%) | wallets ≥{min_sol} SOL",
        "",
    ]

    if not report.top_holders:
        lines.append(NO_HOLDERS_LINE)
        return "\n".join(lines)

    amounts = [format_number(c.holder.ui_amount) for c in report.top_holders]
    width = max(len(a) for a in amounts)

    lines.append(f"Top {len(report.top_holders)} Holders:")
    for index, (classified, amount) in enumerate(zip(report.top_holders, amounts), start=1):
        lines.append(
            f"{index}. {truncate_address(classified.holder.owner)} -- "
            f"{amount.rjust(width)}{_markers(classified.flags)}"
        )

    if report.remaining_count > 0:
        lines.append(f"\n… and {report.remaining_count} more holders")

    legend = []
    if any(c.flags.is_fresh_wallet for c in report.top_holders):
        legend.append(f"{FRESH_MARKER} = fresh wallet (≤{max_age}h old)")
    if any(c.flags.is_whale for c in report.top_holders):
        legend.append(f"{WHALE_MARKER} = whale (≥{min_sol} SOL)")
    if legend:
        lines.append("")
        lines.extend(legend)

    return "\n".join(lines)
