"""Pydantic models for Solana JSON-RPC responses."""

from pydantic import BaseModel


class AccountInfo(BaseModel):
    """Raw account as returned by getAccountInfo (base64 decoded)."""

    pubkey: str
    owner: str = ""
    lamports: int = 0
    data: bytes = b""


class SignatureInfo(BaseModel):
    """Transaction signature metadata (newest first in RPC responses)."""

    signature: str
    slot: int = 0
    block_time: int | None = None  # null for very old / pruned slots
    err: dict | str | None = None  # non-None means failed
