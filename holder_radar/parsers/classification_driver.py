"""Concurrent fresh-wallet / whale classification over a holder list."""

import asyncio
from dataclasses import dataclass

from loguru import logger

from holder_radar.parsers.holder_fetcher import Holder
from holder_radar.parsers.solana_rpc.client import SolanaRpcClient
from holder_radar.parsers.wallet_classifier import is_new_wallet, is_whale


@dataclass(frozen=True)
class CheckOutcome:
    """Result of a single lookup: a value, or the error that prevented it."""

    value: bool | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.value is not None


@dataclass(frozen=True)
class ClassificationFlags:
    is_fresh_wallet: bool = False
    is_whale: bool = False


@dataclass(frozen=True)
class ClassifiedHolder:
    holder: Holder
    flags: ClassificationFlags


def degrade(outcome: CheckOutcome, *, check: str = "", address: str = "") -> bool:
    """Collapse a lookup outcome to a flag; failed lookups count as False."""
    if outcome.ok:
        return bool(outcome.value)
    logger.debug(f"[CLASSIFY] {check} lookup failed for {address[:12]}: {outcome.error}")
    return False


def _to_outcome(result: bool | BaseException) -> CheckOutcome:
    if isinstance(result, BaseException):
        return CheckOutcome(error=f"{type(result).__name__}: {result}")
    return CheckOutcome(value=result)


async def classify_holder(
    client: SolanaRpcClient,
    holder: Holder,
    max_age_hours: float,
    min_sol: float,
) -> tuple[CheckOutcome, CheckOutcome]:
    """Run both checks for one holder; neither failure blocks the other."""
    fresh, whale = await asyncio.gather(
        is_new_wallet(client, holder.owner, max_age_hours),
        is_whale(client, holder.owner, min_sol),
        return_exceptions=True,
    )
    return _to_outcome(fresh), _to_outcome(whale)


async def classify_all(
    client: SolanaRpcClient,
    holders: list[Holder],
    max_age_hours: float,
    min_sol: float,
    *,
    max_concurrent: int = 20,
    timeout_sec: float = 30.0,
) -> list[ClassifiedHolder]:
    """Classify every holder concurrently, preserving input order.

    At most ``max_concurrent`` holders are looked up at once. A holder whose
    lookups exceed ``timeout_sec`` is reported with both flags False.
    """
    if not holders:
        return []

    semaphore = asyncio.Semaphore(max(max_concurrent, 1))

    async def _classify_one(holder: Holder) -> tuple[CheckOutcome, CheckOutcome]:
        async with semaphore:
            try:
                return await asyncio.wait_for(
                    classify_holder(client, holder, max_age_hours, min_sol),
                    timeout=timeout_sec,
                )
            except asyncio.TimeoutError:
                timed_out = CheckOutcome(error=f"timed out after {timeout_sec}s")
                return timed_out, timed_out

    outcomes = await asyncio.gather(*[_classify_one(h) for h in holders])

    classified: list[ClassifiedHolder] = []
    degraded = 0
    for holder, (fresh, whale) in zip(holders, outcomes):
        degraded += sum(1 for o in (fresh, whale) if not o.ok)
        classified.append(
            ClassifiedHolder(
                holder=holder,
                flags=ClassificationFlags(
                    is_fresh_wallet=degrade(fresh, check="freshness", address=holder.owner),
                    is_whale=degrade(whale, check="whale", address=holder.owner),
                ),
            )
        )

    if degraded:
        logger.info(f"[CLASSIFY] {degraded} of {len(holders) * 2} lookups degraded to False")
    return classified
