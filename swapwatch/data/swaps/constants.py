"""Event descriptor for the Uniswap V3 pool Swap event."""

from swapwatch.data.swaps.models import EventDescriptor, EventParam


# event Swap(address indexed sender, address indexed recipient, int256 amount0,
#            int256 amount1, uint160 sqrtPriceX96, uint128 liquidity, int24 tick)
SWAP_EVENT = EventDescriptor(
    name="Swap",
    params=(
        EventParam("sender", "address", indexed=True),
        EventParam("recipient", "address", indexed=True),
        EventParam("amount0", "int256"),
        EventParam("amount1", "int256"),
        EventParam("sqrtPriceX96", "uint160"),
        EventParam("liquidity", "uint128"),
        EventParam("tick", "int24"),
    ),
)

SWAP_TOPIC0 = SWAP_EVENT.topic0
"""0xc42079f94a6350d7e6235f29174924f928cc2ac818eb64fed8004e115fbcca67"""

# Fields the decoder extracts, in order, with the value shape each must have
SWAP_FIELDS: tuple[tuple[str, str], ...] = (
    ("sender", "address"),
    ("recipient", "address"),
    ("amount0", "int"),
    ("amount1", "int"),
)


__all__ = [
    "SWAP_EVENT",
    "SWAP_FIELDS",
    "SWAP_TOPIC0",
]
