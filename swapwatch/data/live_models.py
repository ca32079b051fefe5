"""Pydantic models for the live watcher: configuration and run counters."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from swapwatch.data.swaps.models import TokenPair
from swapwatch.helpers.config import (
    get_bool_env,
    get_eth_rpc_url,
    get_eth_ws_url,
    get_int_env,
    get_optional_env,
)
from swapwatch.helpers.constants import (
    DEFAULT_CONFIRMATION_DEPTH,
    DEFAULT_LOG_FETCH_RETRIES,
    DEFAULT_POOL_ADDRESS,
    DEFAULT_TIMEOUT,
    DEFAULT_TOKEN0_DECIMALS,
    DEFAULT_TOKEN0_SYMBOL,
    DEFAULT_TOKEN1_DECIMALS,
    DEFAULT_TOKEN1_SYMBOL,
)


class WatcherConfig(BaseModel):
    """Settings for one swap watcher run."""

    ws_url: str = Field(..., description="WebSocket endpoint for newHeads")
    rpc_url: str = Field(..., description="HTTP JSON-RPC endpoint for eth_getLogs")
    pool_address: str = Field(default=DEFAULT_POOL_ADDRESS, description="Watched pool")
    confirmation_depth: int = Field(default=DEFAULT_CONFIRMATION_DEPTH, ge=1)
    pair: TokenPair = Field(default_factory=TokenPair)
    prefetch_logs: bool = Field(
        default=False, description="Fetch logs on arrival instead of on confirmation"
    )
    log_fetch_retries: int = Field(default=DEFAULT_LOG_FETCH_RETRIES, ge=1)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)

    model_config = ConfigDict(frozen=True)

    @field_validator("pool_address")
    @classmethod
    def _check_address(cls, value: str) -> str:
        digits = value[2:] if value[:2].lower() == "0x" else value
        if len(digits) != 40:
            msg = f"Pool address must be 20 bytes of hex, got {value!r}"
            raise ValueError(msg)
        int(digits, 16)
        return "0x" + digits.lower()

    @classmethod
    def from_env(cls, **overrides: object) -> "WatcherConfig":
        """Build the configuration from environment variables.

        Reads ETH_WS_URL, ETH_RPC_URL, POOL_ADDRESS, CONFIRMATION_DEPTH,
        TOKEN0_SYMBOL, TOKEN0_DECIMALS, TOKEN1_SYMBOL, TOKEN1_DECIMALS,
        PREFETCH_LOGS, LOG_FETCH_RETRIES. Keyword overrides that are not None
        win over the environment.

        Raises:
            ValueError: If a required variable is missing or a value is invalid
        """
        pair = TokenPair(
            token0_symbol=get_optional_env("TOKEN0_SYMBOL", DEFAULT_TOKEN0_SYMBOL)
            or DEFAULT_TOKEN0_SYMBOL,
            token0_decimals=get_int_env("TOKEN0_DECIMALS", DEFAULT_TOKEN0_DECIMALS),
            token1_symbol=get_optional_env("TOKEN1_SYMBOL", DEFAULT_TOKEN1_SYMBOL)
            or DEFAULT_TOKEN1_SYMBOL,
            token1_decimals=get_int_env("TOKEN1_DECIMALS", DEFAULT_TOKEN1_DECIMALS),
        )
        values: dict[str, object] = {
            "ws_url": get_eth_ws_url(),
            "rpc_url": get_eth_rpc_url(),
            "pool_address": get_optional_env("POOL_ADDRESS", DEFAULT_POOL_ADDRESS),
            "confirmation_depth": get_int_env(
                "CONFIRMATION_DEPTH", DEFAULT_CONFIRMATION_DEPTH
            ),
            "pair": pair,
            "prefetch_logs": get_bool_env("PREFETCH_LOGS"),
            "log_fetch_retries": get_int_env(
                "LOG_FETCH_RETRIES", DEFAULT_LOG_FETCH_RETRIES
            ),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(values)


class PipelineStats(BaseModel):
    """Counters kept by the pipeline."""

    blocks_received: int = 0
    blocks_processed: int = 0
    events_reported: int = 0
    decode_failures: int = 0
    discontinuities: int = 0


__all__ = [
    "PipelineStats",
    "WatcherConfig",
]
