"""Fetch every non-zero holder of an SPL token mint via getProgramAccounts."""

from dataclasses import dataclass
from typing import Any

from loguru import logger

from holder_radar.parsers.exceptions import AccountDecodeError, UpstreamUnavailable
from holder_radar.parsers.solana_rpc.client import SolanaRpcClient
from holder_radar.parsers.solana_rpc.exceptions import RpcError
from holder_radar.parsers.solana_rpc.models import AccountInfo
from holder_radar.parsers.token_layout import (
    MINT_OFFSET,
    TOKEN_2022_PROGRAM_ID,
    TOKEN_ACCOUNT_SIZE,
    TOKEN_PROGRAM_ID,
    decode_mint,
    decode_token_account,
    parse_address,
)


@dataclass(frozen=True)
class Holder:
    """One owner address holding a non-zero balance of the mint."""

    owner: str
    balance: int  # raw smallest-unit amount
    decimals: int

    @property
    def ui_amount(self) -> float:
        return self.balance / 10**self.decimals


async def fetch_token_holders(client: SolanaRpcClient, mint_address: str) -> list[Holder]:
    """Return all holders of ``mint_address`` with a non-zero balance.

    Raises InvalidMintAddress for malformed input and UpstreamUnavailable when
    the mint account or the program account scan cannot be retrieved.
    Individual accounts that fail to decode are skipped.
    """
    mint = str(parse_address(mint_address))

    mint_account = await _get_mint_account(client, mint)
    try:
        decimals = decode_mint(mint_account.data).decimals
    except AccountDecodeError as e:
        raise UpstreamUnavailable(f"Failed to unpack mint data: {e}") from e

    program_id, filters = _token_account_query(mint_account.owner, mint)
    try:
        accounts = await client.get_program_accounts(program_id, filters)
    except RpcError as e:
        raise UpstreamUnavailable(f"Failed to fetch token accounts: {e}") from e

    holders: list[Holder] = []
    zero_balance = 0
    skipped = 0
    for account in accounts:
        try:
            token_account = decode_token_account(account.data)
        except AccountDecodeError as e:
            skipped += 1
            logger.warning(f"[FETCH] Failed to parse token account {account.pubkey}: {e}")
            continue

        if token_account.amount == 0:
            zero_balance += 1
            continue

        holders.append(
            Holder(owner=token_account.owner, balance=token_account.amount, decimals=decimals)
        )

    logger.info(
        f"[FETCH] {mint[:12]}: {len(accounts)} accounts, {len(holders)} holders, "
        f"{zero_balance} empty, {skipped} skipped"
    )
    return holders


async def _get_mint_account(client: SolanaRpcClient, mint: str) -> AccountInfo:
    try:
        account = await client.get_account_info(mint)
    except RpcError as e:
        raise UpstreamUnavailable(f"Failed to fetch mint account: {e}") from e
    if account is None:
        raise UpstreamUnavailable(f"Failed to fetch mint account: {mint} not found")
    return account


def _token_account_query(
    mint_owner: str, mint: str
) -> tuple[str, list[dict[str, Any]]]:
    """Build the program id and server-side filters for the mint's token accounts."""
    mint_filter = {"memcmp": {"offset": MINT_OFFSET, "bytes": mint}}
    if mint_owner == TOKEN_PROGRAM_ID:
        return TOKEN_PROGRAM_ID, [{"dataSize": TOKEN_ACCOUNT_SIZE}, mint_filter]
    if mint_owner == TOKEN_2022_PROGRAM_ID:
        # Token-2022 accounts carry extensions, so their size is not fixed
        return TOKEN_2022_PROGRAM_ID, [mint_filter]
    raise UpstreamUnavailable(f"Account {mint} is not a token mint (owner {mint_owner})")
