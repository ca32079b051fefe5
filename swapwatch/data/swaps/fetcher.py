"""Log fetcher: eth_getLogs for one contract and one event, per block hash."""

import httpx

from swapwatch.data.swaps.models import RawLog
from swapwatch.helpers.constants import DEFAULT_LOG_FETCH_RETRIES
from swapwatch.helpers.http import retry_with_backoff
from swapwatch.helpers.logging import get_logger
from swapwatch.helpers.rpc import RPCClient

logger = get_logger(__name__)


class LogFetcher:
    """Fetches the raw logs of a confirmed block."""

    def __init__(
        self,
        rpc_client: RPCClient,
        http_client: httpx.AsyncClient,
        *,
        address: str,
        topic0: str,
        max_retries: int = DEFAULT_LOG_FETCH_RETRIES,
        retry_base_delay: float = 1.0,
    ) -> None:
        """Initialize the fetcher.

        Args:
            rpc_client: JSON-RPC client
            http_client: HTTP client the RPC calls go through
            address: Emitting contract address
            topic0: Event signature hash to filter on
            max_retries: Attempts per call; 1 means errors propagate immediately
            retry_base_delay: First backoff delay in seconds
        """
        self.rpc_client = rpc_client
        self.http_client = http_client
        self.address = address.lower()
        self.topic0 = topic0.lower()
        self._fetch = retry_with_backoff(
            max_retries=max_retries, base_delay=retry_base_delay
        )(self._fetch_once)

    async def _fetch_once(self, block_hash: str) -> list[RawLog]:
        rpc_logs = await self.rpc_client.get_logs(
            self.http_client,
            block_hash=block_hash,
            address=self.address,
            topic0=self.topic0,
        )
        logs: list[RawLog] = []
        for rpc_log in rpc_logs:
            if rpc_log.removed:
                logger.warning(
                    "Skipping removed log %s/%s in block %s",
                    rpc_log.transaction_hash,
                    rpc_log.log_index,
                    block_hash[:10],
                )
                continue
            logs.append(RawLog.from_rpc(rpc_log))
        return logs

    async def fetch_logs(self, block_hash: str) -> list[RawLog]:
        """Return the matching logs of one block.

        Raises:
            httpx.HTTPError: If the request fails after all attempts
            RPCError: If the node keeps answering with an error
        """
        logs = await self._fetch(block_hash)
        logger.debug("Fetched %s logs for block %s", len(logs), block_hash[:10])
        return logs


__all__ = [
    "LogFetcher",
]
