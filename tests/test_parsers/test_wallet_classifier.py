"""Tests for fresh-wallet and whale heuristics."""

import time

import pytest

from conftest import FakeRpc
from holder_radar.parsers.exceptions import ClassificationLookupFailure, NoHistory
from holder_radar.parsers.solana_rpc.exceptions import RpcHttpError
from holder_radar.parsers.solana_rpc.models import SignatureInfo
from holder_radar.parsers.wallet_classifier import (
    LAMPORTS_PER_SOL,
    get_wallet_creation_time,
    is_new_wallet,
    is_whale,
)

WALLET = "wallet_aaaaaaaaaaaaaaaaaaaa"


def _sigs(*timestamps: int | None) -> list[SignatureInfo]:
    return [
        SignatureInfo(signature=f"sig_{i}", slot=100 - i, block_time=ts)
        for i, ts in enumerate(timestamps)
    ]


class TestCreationTime:
    async def test_uses_last_signature_as_oldest(self, fake_rpc: FakeRpc):
        fake_rpc.signatures[WALLET] = _sigs(3000, 2000, 1000)
        assert await get_wallet_creation_time(fake_rpc, WALLET) == 1000

    async def test_empty_history_raises(self, fake_rpc: FakeRpc):
        with pytest.raises(NoHistory):
            await get_wallet_creation_time(fake_rpc, WALLET)

    async def test_missing_block_time_raises(self, fake_rpc: FakeRpc):
        fake_rpc.signatures[WALLET] = _sigs(3000, None)
        with pytest.raises(ClassificationLookupFailure, match="Block time"):
            await get_wallet_creation_time(fake_rpc, WALLET)


class TestIsNewWallet:
    async def test_fresh_wallet(self, fake_rpc: FakeRpc):
        now_ts = int(time.time())
        fake_rpc.signatures[WALLET] = _sigs(now_ts - 60, now_ts - 3600 * 5)
        assert await is_new_wallet(fake_rpc, WALLET, 48) is True

    async def test_old_wallet(self, fake_rpc: FakeRpc):
        now_ts = int(time.time())
        fake_rpc.signatures[WALLET] = _sigs(now_ts - 60, now_ts - 86400 * 30)
        assert await is_new_wallet(fake_rpc, WALLET, 48) is False

    async def test_boundary_is_inclusive(self, fake_rpc: FakeRpc):
        fake_rpc.signatures[WALLET] = _sigs(1_000_000)
        now = 1_000_000 + 48 * 3600
        assert await is_new_wallet(fake_rpc, WALLET, 48, now=now) is True
        assert await is_new_wallet(fake_rpc, WALLET, 48, now=now + 1) is False

    async def test_rpc_error_propagates(self, fake_rpc: FakeRpc):
        fake_rpc.signatures[WALLET] = RpcHttpError("getSignaturesForAddress HTTP 500")
        with pytest.raises(RpcHttpError):
            await is_new_wallet(fake_rpc, WALLET, 48)


class TestIsWhale:
    async def test_at_threshold(self, fake_rpc: FakeRpc):
        fake_rpc.balances[WALLET] = 40 * LAMPORTS_PER_SOL
        assert await is_whale(fake_rpc, WALLET, 40) is True

    async def test_below_threshold(self, fake_rpc: FakeRpc):
        fake_rpc.balances[WALLET] = 40 * LAMPORTS_PER_SOL - 1
        assert await is_whale(fake_rpc, WALLET, 40) is False

    async def test_rpc_error_propagates(self, fake_rpc: FakeRpc):
        fake_rpc.balances[WALLET] = RpcHttpError("getBalance HTTP 503")
        with pytest.raises(RpcHttpError):
            await is_whale(fake_rpc, WALLET, 40)
