"""Models for the monitored pair, raw logs and decoded swaps."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from eth_utils import keccak
from pydantic import BaseModel, ConfigDict, Field

from swapwatch.helpers.constants import (
    DEFAULT_TOKEN0_DECIMALS,
    DEFAULT_TOKEN0_SYMBOL,
    DEFAULT_TOKEN1_DECIMALS,
    DEFAULT_TOKEN1_SYMBOL,
)
from swapwatch.helpers.parsers import hex_to_bytes, normalize_hex, parse_hex_int
from swapwatch.helpers.rpc_models import RpcLog


# ---------- event descriptor ----------

# ABI types that occupy exactly one 32-byte word
_STATIC_PREFIXES = ("address", "bool", "uint", "int", "bytes")


@dataclass(frozen=True)
class EventParam:
    """One event input: name, ABI type and whether it is indexed."""

    name: str
    abi_type: str
    indexed: bool = False

    def __post_init__(self) -> None:
        t = self.abi_type
        dynamic = t in ("bytes", "string") or t.endswith("]")
        if dynamic or not t.startswith(_STATIC_PREFIXES):
            msg = f"{self.name}: only single-word static ABI types are supported, got {t}"
            raise ValueError(msg)

    @property
    def kind(self) -> str:
        """Shape of the decoded value: address, int, uint, bool or bytes."""
        for prefix in ("address", "bool", "uint", "int", "bytes"):
            if self.abi_type.startswith(prefix):
                return prefix
        return self.abi_type


@dataclass(frozen=True)
class EventDescriptor:
    """Static description of one contract event."""

    name: str
    params: tuple[EventParam, ...]

    @property
    def signature(self) -> str:
        """Canonical signature text, e.g. ``Swap(address,address,int256)``."""
        return f"{self.name}({','.join(p.abi_type for p in self.params)})"

    @property
    def topic0(self) -> str:
        """Keccak-256 of the signature as lowercase 0x-hex."""
        return "0x" + keccak(text=self.signature).hex()

    @property
    def indexed_params(self) -> tuple[EventParam, ...]:
        return tuple(p for p in self.params if p.indexed)

    @property
    def data_params(self) -> tuple[EventParam, ...]:
        return tuple(p for p in self.params if not p.indexed)


# ---------- pair configuration ----------


class TokenPair(BaseModel):
    """Symbols and decimal precision of the pool's two tokens."""

    token0_symbol: str = DEFAULT_TOKEN0_SYMBOL
    token0_decimals: int = Field(default=DEFAULT_TOKEN0_DECIMALS, ge=0, le=77)
    token1_symbol: str = DEFAULT_TOKEN1_SYMBOL
    token1_decimals: int = Field(default=DEFAULT_TOKEN1_DECIMALS, ge=0, le=77)

    model_config = ConfigDict(frozen=True)


class TradeDirection(str, Enum):
    """Which token the swapper paid into the pool."""

    TOKEN0_TO_TOKEN1 = "token0_to_token1"
    TOKEN1_TO_TOKEN0 = "token1_to_token0"

    def label(self, pair: TokenPair) -> str:
        """Human-readable label such as ``DAI to USDC``."""
        if self is TradeDirection.TOKEN0_TO_TOKEN1:
            return f"{pair.token0_symbol} to {pair.token1_symbol}"
        return f"{pair.token1_symbol} to {pair.token0_symbol}"


# ---------- raw log ----------


@dataclass(frozen=True, slots=True)
class RawLog:
    """Raw log as fetched from RPC, minimally normalized."""

    topics: tuple[str, ...]  # lowercased 0x...
    data: bytes
    address: str | None = None
    block_number: int | None = None
    block_hash: str | None = None
    tx_hash: str | None = None
    log_index: int | None = None

    @classmethod
    def from_rpc(cls, log: RpcLog) -> "RawLog":
        return cls(
            topics=tuple(normalize_hex(t) for t in log.topics),
            data=hex_to_bytes(log.data),
            address=log.address.lower(),
            block_number=parse_hex_int(log.block_number) if log.block_number else None,
            block_hash=log.block_hash.lower() if log.block_hash else None,
            tx_hash=log.transaction_hash.lower() if log.transaction_hash else None,
            log_index=parse_hex_int(log.log_index) if log.log_index else None,
        )


# ---------- decoded swap ----------


class DecodedSwapEvent(BaseModel):
    """A decoded, sign-corrected and scaled swap."""

    sender: str = Field(..., description="Checksummed address that called swap")
    recipient: str = Field(..., description="Checksummed recipient of the output")
    amount0: int = Field(..., description="Signed token0 delta in smallest units")
    amount1: int = Field(..., description="Signed token1 delta in smallest units")
    decimal0: Decimal = Field(..., description="amount0 scaled by token0 decimals")
    decimal1: Decimal = Field(..., description="amount1 scaled by token1 decimals")
    direction: TradeDirection
    direction_label: str
    block_number: int | None = None
    tx_hash: str | None = None
    log_index: int | None = None

    model_config = ConfigDict(frozen=True)


__all__ = [
    "DecodedSwapEvent",
    "EventDescriptor",
    "EventParam",
    "RawLog",
    "TokenPair",
    "TradeDirection",
]
