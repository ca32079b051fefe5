"""Ethereum JSON-RPC client utilities."""

from typing import Any

import httpx

from swapwatch.errors import RPCError
from swapwatch.helpers.constants import DEFAULT_TIMEOUT
from swapwatch.helpers.rpc_models import EthGetLogsRequest, JsonRpcRequest, RpcLog


class RPCClient:
    """Ethereum JSON-RPC client."""

    def __init__(self, rpc_url: str, timeout: float = DEFAULT_TIMEOUT) -> None:
        """Initialize RPC client.

        Args:
            rpc_url: Ethereum JSON-RPC endpoint URL
            timeout: Default timeout for requests in seconds

        Raises:
            ValueError: If rpc_url is empty or None
        """
        if not rpc_url:
            msg = "RPC URL cannot be empty"
            raise ValueError(msg)

        self.rpc_url = rpc_url
        self.timeout = timeout

    async def send(
        self,
        client: httpx.AsyncClient,
        request: JsonRpcRequest,
        *,
        timeout: float | None = None,
    ) -> Any:
        """Send a prepared JSON-RPC request.

        Args:
            client: HTTP client instance
            request: Request model
            timeout: Optional timeout override

        Returns:
            RPC result value

        Raises:
            httpx.HTTPError: If the HTTP request fails
            RPCError: If the RPC response contains an error
        """
        response = await client.post(
            self.rpc_url, json=request.model_dump(), timeout=timeout or self.timeout
        )
        response.raise_for_status()
        result = response.json()

        if "error" in result:
            raise RPCError(request.method, result["error"])

        return result.get("result")

    async def get_logs(
        self,
        client: httpx.AsyncClient,
        *,
        block_hash: str,
        address: str,
        topic0: str,
    ) -> list[RpcLog]:
        """Fetch the logs one contract emitted for one event in one block.

        Args:
            client: HTTP client instance
            block_hash: Hash of the block to query
            address: Emitting contract address
            topic0: Event signature hash

        Returns:
            Logs in the order the node returned them

        Example:
            ```python
            rpc = RPCClient(rpc_url)
            async with httpx.AsyncClient() as client:
                logs = await rpc.get_logs(
                    client, block_hash="0xe716...", address=pool, topic0=swap_topic
                )
            ```
        """
        request = EthGetLogsRequest.for_block(block_hash, address, topic0)
        result = await self.send(client, request)
        return [RpcLog.model_validate(entry) for entry in result or []]


__all__ = [
    "RPCClient",
]
