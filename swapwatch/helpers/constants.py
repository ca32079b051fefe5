"""Common configuration constants used across the application."""

# Confirmation window
DEFAULT_CONFIRMATION_DEPTH = 6
"""Blocks that must follow a block before its logs are processed"""

# Monitored pair (Uniswap V3 DAI/USDC 0.01% pool on mainnet)
DEFAULT_POOL_ADDRESS = "0x5777d92f208679db4b9778590fa3cab3ac9e2168"
"""Pool whose Swap events are watched"""

DEFAULT_TOKEN0_SYMBOL = "DAI"
DEFAULT_TOKEN0_DECIMALS = 18

DEFAULT_TOKEN1_SYMBOL = "USDC"
DEFAULT_TOKEN1_DECIMALS = 6

# Integer widths
UINT256_BITS = 256
"""Width of an ABI word in bits"""

SIGNED_AMOUNT_BITS = 128
"""Width of the signed range swap amounts are recovered into"""

# HTTP and Network Constants
DEFAULT_TIMEOUT = 30.0
"""Default HTTP request timeout in seconds"""

WS_PING_INTERVAL = 20.0
"""Seconds between websocket keepalive pings"""

WS_PING_TIMEOUT = 10.0
"""Seconds to wait for a pong before the socket is considered dead"""

# Retry Configuration
DEFAULT_LOG_FETCH_RETRIES = 1
"""Attempts per eth_getLogs call (1 disables retrying)"""

RETRY_BASE_DELAY = 1.0
"""Base delay for exponential backoff in seconds"""

RETRY_MAX_DELAY = 60.0
"""Maximum delay between retries in seconds"""


__all__ = [
    "DEFAULT_CONFIRMATION_DEPTH",
    "DEFAULT_LOG_FETCH_RETRIES",
    "DEFAULT_POOL_ADDRESS",
    "DEFAULT_TIMEOUT",
    "DEFAULT_TOKEN0_DECIMALS",
    "DEFAULT_TOKEN0_SYMBOL",
    "DEFAULT_TOKEN1_DECIMALS",
    "DEFAULT_TOKEN1_SYMBOL",
    "RETRY_BASE_DELAY",
    "RETRY_MAX_DELAY",
    "SIGNED_AMOUNT_BITS",
    "UINT256_BITS",
    "WS_PING_INTERVAL",
    "WS_PING_TIMEOUT",
]
