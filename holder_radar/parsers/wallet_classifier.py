"""Per-wallet heuristics: fresh ("bundle") wallet and whale detection.

Wallet age is approximated by the block time of the oldest signature in a
single getSignaturesForAddress page (newest first, at most 1000 entries).
For wallets with a longer history the oldest visible signature is not the
real first transaction, so the computed age is a lower bound and very active
old wallets can be reported as fresh.
"""

import time

from holder_radar.parsers.exceptions import ClassificationLookupFailure, NoHistory
from holder_radar.parsers.solana_rpc.client import SolanaRpcClient

LAMPORTS_PER_SOL = 1_000_000_000


async def get_wallet_creation_time(client: SolanaRpcClient, address: str) -> int:
    """Unix timestamp of the oldest known transaction for ``address``."""
    signatures = await client.get_signatures_for_address(address)
    if not signatures:
        raise NoHistory(f"No transactions found for wallet {address}")

    oldest = signatures[-1]
    if oldest.block_time is None:
        raise ClassificationLookupFailure(f"Block time not available for {oldest.signature}")
    return oldest.block_time


async def is_new_wallet(
    client: SolanaRpcClient,
    address: str,
    max_age_hours: float,
    *,
    now: float | None = None,
) -> bool:
    """True if the wallet's first transaction is at most ``max_age_hours`` old."""
    created_at = await get_wallet_creation_time(client, address)
    current = time.time() if now is None else now
    age_sec = current - created_at
    return age_sec <= max_age_hours * 3600


async def is_whale(client: SolanaRpcClient, address: str, min_sol: float) -> bool:
    """True if the wallet holds at least ``min_sol`` SOL."""
    lamports = await client.get_balance(address)
    return lamports / LAMPORTS_PER_SOL >= min_sol
