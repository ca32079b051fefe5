"""Tests for watcher configuration and pipeline counters."""

import pytest

from pydantic import ValidationError

from swapwatch.data.live_models import PipelineStats, WatcherConfig
from swapwatch.data.swaps.models import TokenPair


ENV_KEYS = (
    "ETH_WS_URL",
    "ETH_RPC_URL",
    "POOL_ADDRESS",
    "CONFIRMATION_DEPTH",
    "TOKEN0_SYMBOL",
    "TOKEN0_DECIMALS",
    "TOKEN1_SYMBOL",
    "TOKEN1_DECIMALS",
    "PREFETCH_LOGS",
    "LOG_FETCH_RETRIES",
)


@pytest.fixture
def watcher_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Environment with only the endpoint URLs set."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("ETH_WS_URL", "wss://test.ws")
    monkeypatch.setenv("ETH_RPC_URL", "https://test.rpc")
    return monkeypatch


class TestWatcherConfig:
    """Tests for WatcherConfig."""

    def test_defaults(self, watcher_env: pytest.MonkeyPatch) -> None:
        """Test defaults for the reference DAI/USDC pool."""
        config = WatcherConfig.from_env()

        assert config.ws_url == "wss://test.ws"
        assert config.rpc_url == "https://test.rpc"
        assert config.pool_address == "0x5777d92f208679db4b9778590fa3cab3ac9e2168"
        assert config.confirmation_depth == 6
        assert config.pair == TokenPair()
        assert config.pair.token0_decimals == 18
        assert config.pair.token1_decimals == 6
        assert config.prefetch_logs is False
        assert config.log_fetch_retries == 1

    def test_reads_environment(self, watcher_env: pytest.MonkeyPatch) -> None:
        """Test every setting is read from the environment."""
        watcher_env.setenv("POOL_ADDRESS", "0x88E6A0C2DDD26FEEB64F039A2C41296FCB3F5640")
        watcher_env.setenv("CONFIRMATION_DEPTH", "12")
        watcher_env.setenv("TOKEN0_SYMBOL", "USDC")
        watcher_env.setenv("TOKEN0_DECIMALS", "6")
        watcher_env.setenv("TOKEN1_SYMBOL", "WETH")
        watcher_env.setenv("TOKEN1_DECIMALS", "18")
        watcher_env.setenv("PREFETCH_LOGS", "true")
        watcher_env.setenv("LOG_FETCH_RETRIES", "3")

        config = WatcherConfig.from_env()

        assert config.pool_address == "0x88e6a0c2ddd26feeb64f039a2c41296fcb3f5640"
        assert config.confirmation_depth == 12
        assert config.pair.token0_symbol == "USDC"
        assert config.pair.token1_decimals == 18
        assert config.prefetch_logs is True
        assert config.log_fetch_retries == 3

    def test_overrides_win(self, watcher_env: pytest.MonkeyPatch) -> None:
        """Test keyword overrides replace environment values, None is ignored."""
        watcher_env.setenv("CONFIRMATION_DEPTH", "12")

        config = WatcherConfig.from_env(confirmation_depth=3, pool_address=None)

        assert config.confirmation_depth == 3
        assert config.pool_address == "0x5777d92f208679db4b9778590fa3cab3ac9e2168"

    def test_missing_endpoint_raises(self, watcher_env: pytest.MonkeyPatch) -> None:
        """Test a missing RPC URL raises ValueError."""
        watcher_env.delenv("ETH_RPC_URL")

        with pytest.raises(ValueError, match="ETH_RPC_URL"):
            WatcherConfig.from_env()

    @pytest.mark.parametrize("depth", ["0", "-3"])
    def test_invalid_depth_raises(
        self, watcher_env: pytest.MonkeyPatch, depth: str
    ) -> None:
        """Test a non-positive depth fails validation."""
        watcher_env.setenv("CONFIRMATION_DEPTH", depth)

        with pytest.raises(ValidationError):
            WatcherConfig.from_env()

    @pytest.mark.parametrize("address", ["0x1234", "0x" + "zz" * 20, ""])
    def test_invalid_pool_address_raises(self, address: str) -> None:
        """Test malformed pool addresses fail validation."""
        with pytest.raises(ValidationError):
            WatcherConfig(ws_url="wss://x", rpc_url="https://x", pool_address=address)

    def test_frozen(self) -> None:
        """Test the configuration is immutable."""
        config = WatcherConfig(ws_url="wss://x", rpc_url="https://x")

        with pytest.raises(ValidationError):
            config.confirmation_depth = 1  # type: ignore[misc]


class TestPipelineStats:
    """Tests for PipelineStats."""

    def test_starts_at_zero(self) -> None:
        """Test all counters start at zero."""
        stats = PipelineStats()

        assert stats.model_dump() == {
            "blocks_received": 0,
            "blocks_processed": 0,
            "events_reported": 0,
            "decode_failures": 0,
            "discontinuities": 0,
        }
