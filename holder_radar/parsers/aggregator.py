"""Rank classified holders and compute bundle/whale population shares."""

from dataclasses import dataclass, field
from enum import Enum

from holder_radar.parsers.classification_driver import ClassifiedHolder


class ReportStyle(Enum):
    """Report layouts: full (/check) lists 5 holders, compact (/quick) lists 3."""

    FULL = 5
    COMPACT = 3

    @property
    def top_n(self) -> int:
        return self.value


@dataclass
class AggregateReport:
    total_holders: int
    filtered_holder_count: int
    bundle_count: int
    whale_count: int
    bundle_percentage: float
    whale_percentage: float
    ranked_holders: list[ClassifiedHolder] = field(default_factory=list)
    top_holders: list[ClassifiedHolder] = field(default_factory=list)

    @property
    def remaining_count(self) -> int:
        return len(self.ranked_holders) - len(self.top_holders)


def _pct(count: int, total: int) -> float:
    return count / total * 100 if total > 0 else 0.0


def aggregate(
    classified: list[ClassifiedHolder],
    total_holders: int,
    *,
    top_n: int = ReportStyle.FULL.top_n,
) -> AggregateReport:
    """Sort by raw balance (descending, stable on ties) and count flags."""
    ranked = sorted(classified, key=lambda c: c.holder.balance, reverse=True)
    filtered = len(ranked)
    bundle = sum(1 for c in ranked if c.flags.is_fresh_wallet)
    whales = sum(1 for c in ranked if c.flags.is_whale)

    return AggregateReport(
        total_holders=total_holders,
        filtered_holder_count=filtered,
        bundle_count=bundle,
        whale_count=whales,
        bundle_percentage=_pct(bundle, filtered),
        whale_percentage=_pct(whales, filtered),
        ranked_holders=ranked,
        top_holders=ranked[: max(top_n, 0)],
    )
