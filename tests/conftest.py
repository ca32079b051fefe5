"""Pytest configuration and shared fixtures for swap watcher tests."""

from collections.abc import Callable

import pytest

from swapwatch.data.swaps.amounts import to_twos_complement
from swapwatch.data.swaps.constants import SWAP_TOPIC0
from swapwatch.data.swaps.models import RawLog
from swapwatch.helpers.models import BlockHeader


SENDER = "0x3fc91a3afd70395cd496c647d5a6cc9d4b2b7fad"
RECIPIENT = "0x8fb892e9c203752dcd4ce5423263b329baf070b7"


def block_hash(number: int) -> str:
    """Deterministic fake block hash for a block number."""
    return "0x" + f"{number:064x}"


def address_topic(address: str) -> str:
    """Left-pad a 20-byte address into a 32-byte topic."""
    return "0x" + "00" * 12 + address.lower().removeprefix("0x")


def word(value: int) -> bytes:
    """Encode a signed or unsigned integer as one ABI word."""
    if value < 0:
        value = to_twos_complement(value)
    return value.to_bytes(32, "big")


@pytest.fixture
def make_header() -> Callable[..., BlockHeader]:
    """Factory for block headers chained by parent hash."""

    def _make(number: int, parent: int | None = None) -> BlockHeader:
        parent_number = number - 1 if parent is None else parent
        return BlockHeader.from_number(
            number, block_hash(number), block_hash(parent_number)
        )

    return _make


@pytest.fixture
def make_swap_log() -> Callable[..., RawLog]:
    """Factory for Uniswap V3 Swap logs."""

    def _make(
        amount0: int = -227732600003252530000000,
        amount1: int = 227754403440,
        *,
        topic0: str = SWAP_TOPIC0,
        sender: str = SENDER,
        recipient: str = RECIPIENT,
        block_number: int = 18_000_000,
        log_index: int = 0,
        raw_amount0: int | None = None,
    ) -> RawLog:
        data = (
            (raw_amount0.to_bytes(32, "big") if raw_amount0 is not None else word(amount0))
            + word(amount1)
            + word(79228162514264337593543950336)  # sqrtPriceX96 = 2**96
            + word(10**18)  # liquidity
            + word(-5)  # tick
        )
        return RawLog(
            topics=(topic0, address_topic(sender), address_topic(recipient)),
            data=data,
            address="0x5777d92f208679db4b9778590fa3cab3ac9e2168",
            block_number=block_number,
            block_hash=block_hash(block_number),
            tx_hash="0x" + f"{block_number:062x}{log_index:02x}",
            log_index=log_index,
        )

    return _make
