"""Live Uniswap V3 swap watcher.

Block headers from a newHeads subscription go through a confirmation window.
Once a block has `depth` newer blocks behind it, its Swap logs are fetched,
decoded and reported.

Processing flow:
1. WebSocket receives block header -> pushed into the confirmation window
2. Window rejects non-advancing headers (logged, skipped)
3. Deep reorganization check on every push (fatal, propagated)
4. While the window is ready: pop confirmed block -> fetch logs -> decode -> report

Usage:
    swapwatch --depth 6
    python -m swapwatch.live
"""

import argparse
import signal
import sys

from collections.abc import AsyncIterable

import asyncio

from swapwatch.data.blocks.live import NewHeadsSubscription
from swapwatch.data.blocks.window import ConfirmationWindow, ReorgStatus
from swapwatch.data.live_models import PipelineStats, WatcherConfig
from swapwatch.data.swaps.decoder import EventDecoder
from swapwatch.data.swaps.fetcher import LogFetcher
from swapwatch.data.swaps.models import DecodedSwapEvent, RawLog
from swapwatch.data.swaps.reporter import ConsoleReporter, Reporter
from swapwatch.errors import (
    DecodeError,
    DeepReorganizationError,
    DiscontinuityError,
)
from swapwatch.helpers.config import get_bool_env, get_optional_env
from swapwatch.helpers.http import create_http_client
from swapwatch.helpers.logging import get_logger, set_log_color, set_log_level
from swapwatch.helpers.models import BlockHeader
from swapwatch.helpers.rpc import RPCClient

logger = get_logger(__name__)

EXIT_DEEP_REORG = 1
"""Process exit status when the chain reorganized deeper than the window"""


class SwapPipeline:
    """Drives the window, fetcher, decoder and reporter for one pool."""

    def __init__(
        self,
        window: ConfirmationWindow,
        fetcher: LogFetcher,
        decoder: EventDecoder,
        reporter: Reporter,
        *,
        prefetch_logs: bool = False,
    ) -> None:
        """Initialize the pipeline.

        Args:
            window: Confirmation window, owned by this pipeline
            fetcher: Log fetcher for the watched pool and event
            decoder: Swap decoder
            reporter: Receives each decoded swap
            prefetch_logs: Fetch logs on arrival and reuse them on confirmation
        """
        self.window = window
        self.fetcher = fetcher
        self.decoder = decoder
        self.reporter = reporter
        self.prefetch_logs = prefetch_logs
        self.stats = PipelineStats()
        self.should_shutdown = False
        self._log_cache: dict[str, list[RawLog]] = {}

    async def process_header(self, header: BlockHeader) -> list[DecodedSwapEvent]:
        """Push one header and process every block it confirms.

        Args:
            header: Newly observed block header

        Returns:
            Swaps reported during this step, in block and log order

        Raises:
            DeepReorganizationError: If the chain moved past the window head by
                at least the confirmation depth
        """
        self.stats.blocks_received += 1
        block_hash = header.hash.lower()

        # Only headers that advance past the tail are prefetched
        tail = self.window.tail
        advances = tail is None or header.block_number > tail.block_number
        if self.prefetch_logs and advances:
            self._log_cache[block_hash] = await self.fetcher.fetch_logs(block_hash)

        try:
            self.window.push(header)
        except DiscontinuityError as e:
            self.stats.discontinuities += 1
            logger.warning("Skipping block #%s: %s", header.block_number, e)
            return []

        if self.window.detect_reorg() is ReorgStatus.REORG_DETECTED:
            head, tail = self.window.head, self.window.tail
            assert head is not None and tail is not None  # non-empty after push
            raise DeepReorganizationError(
                head.block_number, tail.block_number, self.window.depth
            )

        reported: list[DecodedSwapEvent] = []
        while self.window.is_ready():
            confirmed = self.window.pop_confirmed()
            reported.extend(await self._process_confirmed(confirmed))
        return reported

    async def _process_confirmed(self, block: BlockHeader) -> list[DecodedSwapEvent]:
        """Fetch, decode and report the logs of one confirmed block."""
        block_hash = block.hash.lower()
        logger.info("Processing block #%s", block.block_number)

        logs = self._log_cache.pop(block_hash, None)
        if logs is None:
            logs = await self.fetcher.fetch_logs(block_hash)

        reported: list[DecodedSwapEvent] = []
        for raw_log in logs:
            try:
                event = self.decoder.decode(raw_log)
            except DecodeError as e:
                self.stats.decode_failures += 1
                logger.warning(
                    "Skipping log %s/%s in block #%s: %s",
                    raw_log.tx_hash,
                    raw_log.log_index,
                    block.block_number,
                    e,
                )
                continue

            self.reporter.report(event)
            reported.append(event)

        self.stats.blocks_processed += 1
        self.stats.events_reported += len(reported)
        return reported

    async def run(self, headers: AsyncIterable[BlockHeader]) -> PipelineStats:
        """Consume headers until the stream ends or shutdown is requested.

        Args:
            headers: Block headers in arrival order

        Returns:
            Final counters

        Raises:
            DeepReorganizationError: On a reorganization deeper than the window
        """
        logger.info(
            "Swap pipeline started (depth=%s, prefetch=%s)",
            self.window.depth,
            self.prefetch_logs,
        )
        async for header in headers:
            await self.process_header(header)
            if self.should_shutdown:
                break

        logger.info(
            "Swap pipeline stopped: %s blocks received, %s processed, %s swaps",
            self.stats.blocks_received,
            self.stats.blocks_processed,
            self.stats.events_reported,
        )
        return self.stats

    def shutdown(self) -> None:
        """Stop after the current header."""
        logger.info("Shutdown signal received, stopping...")
        self.should_shutdown = True


async def main(config: WatcherConfig) -> int:
    """Wire the collaborators and run the watcher.

    Args:
        config: Watcher settings

    Returns:
        Process exit status
    """
    decoder = EventDecoder(config.pair)
    rpc_client = RPCClient(config.rpc_url, timeout=config.timeout)

    async with create_http_client(timeout=config.timeout) as http_client:
        fetcher = LogFetcher(
            rpc_client,
            http_client,
            address=config.pool_address,
            topic0=decoder.topic0,
            max_retries=config.log_fetch_retries,
        )
        pipeline = SwapPipeline(
            ConfirmationWindow(config.confirmation_depth),
            fetcher,
            decoder,
            ConsoleReporter(config.pair),
            prefetch_logs=config.prefetch_logs,
        )

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, pipeline.shutdown)

        try:
            await pipeline.run(NewHeadsSubscription(config.ws_url))
        except DeepReorganizationError:
            logger.exception("Deep reorganization detected, exiting")
            return EXIT_DEEP_REORG
        finally:
            for sig in (signal.SIGINT, signal.SIGTERM):
                loop.remove_signal_handler(sig)

    return 0


def cli() -> None:
    """Command-line interface entry point."""
    parser = argparse.ArgumentParser(
        description="Watch a Uniswap V3 pool for confirmed Swap events",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
  ETH_WS_URL, ETH_RPC_URL           node endpoints (required)
  POOL_ADDRESS, CONFIRMATION_DEPTH  watched pool and window depth
  TOKEN0_SYMBOL, TOKEN0_DECIMALS    token0 scaling (default DAI, 18)
  TOKEN1_SYMBOL, TOKEN1_DECIMALS    token1 scaling (default USDC, 6)
  PREFETCH_LOGS, LOG_FETCH_RETRIES  log fetching behaviour
  LOG_LEVEL, LOG_COLOR              logging level and coloured output

Examples:
  swapwatch
  swapwatch --depth 12 --prefetch-logs
        """,
    )
    parser.add_argument("--depth", type=int, help="Confirmation depth (blocks)")
    parser.add_argument("--pool", help="Pool contract address")
    parser.add_argument(
        "--prefetch-logs",
        action="store_true",
        default=None,
        help="Fetch logs when a block arrives instead of when it is confirmed",
    )
    parser.add_argument("--log-level", help="Logging level")

    args = parser.parse_args()

    try:
        set_log_level(args.log_level or get_optional_env("LOG_LEVEL", "INFO") or "INFO")
        set_log_color(get_bool_env("LOG_COLOR"))
        config = WatcherConfig.from_env(
            confirmation_depth=args.depth,
            pool_address=args.pool,
            prefetch_logs=args.prefetch_logs,
        )
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        exit_code = asyncio.run(main(config))
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, exiting...")
        exit_code = 0
    sys.exit(exit_code)


if __name__ == "__main__":
    cli()
