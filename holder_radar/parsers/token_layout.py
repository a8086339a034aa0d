"""SPL Token account layouts: token account and mint decoding.

Token account layout: 165 bytes
  [0:32]    mint (Pubkey)
  [32:64]   owner (Pubkey)
  [64:72]   amount (u64 LE)
  [72:108]  delegateOption (4) + delegate (32)
  [108]     state (0 = uninitialized, 1 = initialized, 2 = frozen)
  [109:165] isNative, delegatedAmount, closeAuthority

Mint layout: 82 bytes
  [0:36]    mintAuthorityOption (4) + mintAuthority (32)
  [36:44]   supply (u64 LE)
  [44]      decimals (u8)
  [45]      isInitialized (bool)
  [46:82]   freezeAuthorityOption (4) + freezeAuthority (32)

Token-2022 accounts share the same base layout, with extension TLV data after it.
"""

import struct
from dataclasses import dataclass

from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from holder_radar.parsers.exceptions import AccountDecodeError, InvalidMintAddress

TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
TOKEN_2022_PROGRAM_ID = "TokenzQdBNbLqP5VEhdkAS6EPFLxAJcR5WRbrHjQ9kM"

TOKEN_ACCOUNT_SIZE = 165
MINT_SIZE = 82

MINT_OFFSET = 0
OWNER_OFFSET = 32
AMOUNT_OFFSET = 64
STATE_OFFSET = 108
DECIMALS_OFFSET = 44

_VALID_ACCOUNT_STATES = {1, 2}  # uninitialized (0) is rejected


@dataclass(frozen=True)
class TokenAccountData:
    mint: str
    owner: str
    amount: int
    state: int


@dataclass(frozen=True)
class MintData:
    supply: int
    decimals: int
    is_initialized: bool


def parse_address(address: str) -> Pubkey:
    """Parse a base58 Solana address, raising InvalidMintAddress if malformed."""
    candidate = (address or "").strip()
    if not candidate:
        raise InvalidMintAddress("Invalid mint address: empty")
    try:
        return Pubkey.from_string(candidate)
    except ValueError as e:
        raise InvalidMintAddress(f"Invalid mint address: {e}") from e


def decode_token_account(data: bytes) -> TokenAccountData:
    """Decode a raw token account into mint/owner/amount."""
    if len(data) < TOKEN_ACCOUNT_SIZE:
        raise AccountDecodeError(
            f"Token account data too short: {len(data)} < {TOKEN_ACCOUNT_SIZE} bytes"
        )

    state = data[STATE_OFFSET]
    if state == 0:
        raise AccountDecodeError("Token account is not initialized")
    if state not in _VALID_ACCOUNT_STATES:
        raise AccountDecodeError(f"Invalid token account state: {state}")

    mint = str(Pubkey.from_bytes(data[MINT_OFFSET:MINT_OFFSET + 32]))
    owner = str(Pubkey.from_bytes(data[OWNER_OFFSET:OWNER_OFFSET + 32]))
    (amount,) = struct.unpack_from("<Q", data, AMOUNT_OFFSET)

    return TokenAccountData(mint=mint, owner=owner, amount=amount, state=state)


def decode_mint(data: bytes) -> MintData:
    """Decode a raw mint account (SPL Token or Token-2022 base layout)."""
    if len(data) < MINT_SIZE:
        raise AccountDecodeError(f"Mint data too short: {len(data)} < {MINT_SIZE} bytes")

    (supply,) = struct.unpack_from("<Q", data, 36)
    decimals = data[DECIMALS_OFFSET]
    is_initialized = data[45] != 0
    if not is_initialized:
        raise AccountDecodeError("Mint account is not initialized")

    return MintData(supply=supply, decimals=decimals, is_initialized=is_initialized)
