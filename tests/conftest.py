"""Shared test fixtures: in-memory Solana RPC and raw account builders."""

import asyncio
import struct

import pytest
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from holder_radar.parsers.solana_rpc.models import AccountInfo, SignatureInfo
from holder_radar.parsers.token_layout import TOKEN_PROGRAM_ID

MINT = str(Pubkey.from_bytes(bytes([200]) * 32))


def owner_address(i: int) -> str:
    """Deterministic valid base58 owner address for index ``i`` (0-199)."""
    return str(Pubkey.from_bytes(bytes([i + 1]) * 32))


def build_token_account(owner: str, amount: int, *, mint: str = MINT, state: int = 1) -> bytes:
    """Build a 165-byte SPL token account."""
    data = bytearray(165)
    data[0:32] = bytes(Pubkey.from_string(mint))
    data[32:64] = bytes(Pubkey.from_string(owner))
    struct.pack_into("<Q", data, 64, amount)
    data[108] = state
    return bytes(data)


def build_mint(decimals: int = 6, supply: int = 1_000_000_000_000_000) -> bytes:
    """Build an 82-byte initialized SPL mint."""
    data = bytearray(82)
    struct.pack_into("<Q", data, 36, supply)
    data[44] = decimals
    data[45] = 1
    return bytes(data)


class FakeRpc:
    """SolanaRpcClient stand-in backed by dictionaries.

    ``signatures`` / ``balances`` values may be exceptions, raised on lookup.
    ``delays`` makes lookups for an address sleep first (timeout tests).
    """

    def __init__(self) -> None:
        self.accounts: dict[str, AccountInfo] = {}
        self.program_accounts: list[AccountInfo] = []
        self.program_error: Exception | None = None
        self.signatures: dict[str, list[SignatureInfo] | Exception] = {}
        self.balances: dict[str, int | Exception] = {}
        self.delays: dict[str, float] = {}
        self.program_calls: list[tuple[str, list]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    def add_mint(
        self, mint: str = MINT, *, decimals: int = 6, owner: str = TOKEN_PROGRAM_ID
    ) -> None:
        self.accounts[mint] = AccountInfo(pubkey=mint, owner=owner, data=build_mint(decimals))

    def add_holder(self, owner: str, amount: int, *, pubkey: str = "") -> None:
        self.program_accounts.append(
            AccountInfo(
                pubkey=pubkey or f"ata_{len(self.program_accounts)}",
                owner=TOKEN_PROGRAM_ID,
                data=build_token_account(owner, amount),
            )
        )

    async def get_account_info(self, address: str) -> AccountInfo | None:
        return self.accounts.get(address)

    async def get_program_accounts(self, program_id: str, filters: list) -> list[AccountInfo]:
        self.program_calls.append((program_id, filters))
        if self.program_error is not None:
            raise self.program_error
        return list(self.program_accounts)

    async def _lookup(self, table: dict, address: str, default):
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(address, 0))
            value = table.get(address, default)
            if isinstance(value, Exception):
                raise value
            return value
        finally:
            self.in_flight -= 1

    async def get_signatures_for_address(self, address: str, *, limit: int = 1000):
        return await self._lookup(self.signatures, address, [])

    async def get_balance(self, address: str) -> int:
        return await self._lookup(self.balances, address, 0)


@pytest.fixture
def fake_rpc() -> FakeRpc:
    return FakeRpc()
