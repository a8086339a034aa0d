"""Async JSON-RPC client for the Solana methods used by holder reports."""

import asyncio
import base64
import binascii
from typing import Any

import httpx
from loguru import logger

from holder_radar.parsers.solana_rpc.exceptions import (
    RpcHttpError,
    RpcResponseError,
    RpcTransportError,
)
from holder_radar.parsers.solana_rpc.models import AccountInfo, SignatureInfo

RETRY_DELAYS = [1.0, 3.0]
MAX_SIGNATURES_PAGE = 1000


class SolanaRpcClient:
    """Thin async wrapper over a shared httpx.AsyncClient.

    One instance is meant to be shared by every concurrent lookup of a report,
    so connections are pooled instead of opened per task.
    """

    def __init__(
        self,
        rpc_url: str,
        *,
        commitment: str = "confirmed",
        timeout: float = 15.0,
        max_retries: int = 2,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not rpc_url:
            raise ValueError("RPC URL is empty")
        self._rpc_url = rpc_url
        self._commitment = commitment
        self._max_retries = max_retries
        self._client = http_client or httpx.AsyncClient(timeout=timeout)
        self._request_id = 0

    async def close(self) -> None:
        await self._client.aclose()

    async def _call(self, method: str, params: list[Any]) -> Any:
        """Execute one JSON-RPC call and return its ``result`` member."""
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params,
        }

        for attempt in range(self._max_retries + 1):
            delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
            try:
                resp = await self._client.post(self._rpc_url, json=payload)
            except (httpx.TimeoutException, httpx.ConnectError) as e:
                if attempt < self._max_retries:
                    logger.debug(f"[RPC] {method} transport error (attempt {attempt + 1}): {e}")
                    await asyncio.sleep(delay)
                    continue
                raise RpcTransportError(f"{method} failed: {e}") from e
            except httpx.HTTPError as e:
                raise RpcTransportError(f"{method} failed: {type(e).__name__}: {e}") from e

            if resp.status_code == 429:
                if attempt < self._max_retries:
                    logger.debug(f"[RPC] {method} rate limited, retrying in {delay}s")
                    await asyncio.sleep(delay)
                    continue
                raise RpcHttpError(f"{method} rate limited after {attempt + 1} attempts")
            if resp.status_code != 200:
                raise RpcHttpError(f"{method} HTTP {resp.status_code}")

            try:
                data = resp.json()
            except ValueError as e:
                raise RpcResponseError(f"{method} returned a non-JSON body") from e
            if not isinstance(data, dict):
                raise RpcResponseError(f"{method} returned {type(data).__name__}, expected object")
            if "error" in data:
                err = data["error"]
                message = err.get("message", err) if isinstance(err, dict) else err
                raise RpcResponseError(f"{method} error: {message}")
            return data.get("result")

        raise RpcTransportError(f"{method} failed: retries exhausted")

    async def get_account_info(self, address: str) -> AccountInfo | None:
        """Fetch an account with base64 data. Returns None if it does not exist."""
        result = await self._call(
            "getAccountInfo",
            [address, {"encoding": "base64", "commitment": self._commitment}],
        )
        value = result.get("value") if isinstance(result, dict) else None
        if not value:
            return None
        return AccountInfo(
            pubkey=address,
            owner=value.get("owner", ""),
            lamports=value.get("lamports", 0),
            data=_decode_data(value.get("data")),
        )

    async def get_program_accounts(
        self, program_id: str, filters: list[dict[str, Any]]
    ) -> list[AccountInfo]:
        """Fetch every account owned by ``program_id`` matching server-side filters."""
        result = await self._call(
            "getProgramAccounts",
            [
                program_id,
                {
                    "encoding": "base64",
                    "commitment": self._commitment,
                    "filters": filters,
                },
            ],
        )
        accounts: list[AccountInfo] = []
        for item in result or []:
            account = item.get("account", {})
            accounts.append(
                AccountInfo(
                    pubkey=item.get("pubkey", ""),
                    owner=account.get("owner", program_id),
                    lamports=account.get("lamports", 0),
                    data=_decode_data(account.get("data")),
                )
            )
        return accounts

    async def get_signatures_for_address(
        self, address: str, *, limit: int = MAX_SIGNATURES_PAGE
    ) -> list[SignatureInfo]:
        """Fetch signatures for an address, newest first (one page only)."""
        result = await self._call(
            "getSignaturesForAddress",
            [
                address,
                {"limit": min(limit, MAX_SIGNATURES_PAGE), "commitment": self._commitment},
            ],
        )
        return [
            SignatureInfo(
                signature=sig.get("signature", ""),
                slot=sig.get("slot", 0),
                block_time=sig.get("blockTime"),
                err=sig.get("err"),
            )
            for sig in result or []
        ]

    async def get_balance(self, address: str) -> int:
        """Fetch native balance in lamports."""
        result = await self._call(
            "getBalance", [address, {"commitment": self._commitment}]
        )
        if isinstance(result, dict):
            return int(result.get("value", 0))
        return int(result or 0)


def _decode_data(data: Any) -> bytes:
    """Decode the ``[payload, "base64"]`` pair used by base64-encoded accounts."""
    if not data:
        return b""
    raw_b64 = data[0] if isinstance(data, list) else data
    try:
        return base64.b64decode(raw_b64)
    except (binascii.Error, ValueError):
        logger.debug("[RPC] Undecodable account data, treating as empty")
        return b""
