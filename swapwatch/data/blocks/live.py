"""Live block header source.

Subscribes to newHeads over a WebSocket and yields `BlockHeader` models in
arrival order. The stream ends when the socket closes; reconnecting is left
to the caller.
"""

import json

from collections.abc import AsyncIterator
from typing import Any

from pydantic import ValidationError
from websockets.asyncio.client import ClientConnection, connect

from swapwatch.errors import SubscriptionError
from swapwatch.helpers.constants import WS_PING_INTERVAL, WS_PING_TIMEOUT
from swapwatch.helpers.logging import get_logger
from swapwatch.helpers.models import BlockHeader
from swapwatch.helpers.rpc_models import EthSubscribeNewHeadsRequest

logger = get_logger(__name__)


def parse_new_head(message: str | bytes) -> BlockHeader | None:
    """Extract a block header from a subscription notification.

    Args:
        message: Raw WebSocket message

    Returns:
        BlockHeader for eth_subscription notifications, None for anything else

    Raises:
        json.JSONDecodeError: If the message is not JSON
        pydantic.ValidationError: If the header lacks required fields
    """
    data: dict[str, Any] = json.loads(message)
    params = data.get("params")
    if not isinstance(params, dict) or "result" not in params:
        return None
    return BlockHeader.model_validate(params["result"])


class NewHeadsSubscription:
    """Async iterator over newHeads notifications from one WebSocket connection."""

    def __init__(
        self,
        ws_url: str,
        *,
        ping_interval: float = WS_PING_INTERVAL,
        ping_timeout: float = WS_PING_TIMEOUT,
    ) -> None:
        """Initialize the subscription.

        Args:
            ws_url: Ethereum WebSocket endpoint URL
            ping_interval: Seconds between keepalive pings
            ping_timeout: Seconds to wait for a pong

        Raises:
            ValueError: If ws_url is empty
        """
        if not ws_url:
            msg = "WebSocket URL cannot be empty"
            raise ValueError(msg)

        self.ws_url = ws_url
        self.ping_interval = ping_interval
        self.ping_timeout = ping_timeout
        self.subscription_id: str | None = None
        self.headers_received = 0

    async def _subscribe(self, websocket: ClientConnection) -> str:
        """Send eth_subscribe and wait for the subscription id.

        Raises:
            SubscriptionError: If the node answers with an error
        """
        request = EthSubscribeNewHeadsRequest(id=1)
        await websocket.send(json.dumps(request.model_dump()))

        response = json.loads(await websocket.recv())
        if "result" not in response:
            msg = f"Subscription failed: {response.get('error', response)}"
            raise SubscriptionError(msg)

        return str(response["result"])

    async def stream(self, websocket: ClientConnection) -> AsyncIterator[BlockHeader]:
        """Subscribe on an open connection and yield headers until it closes.

        Args:
            websocket: Connected WebSocket client.
        """
        self.subscription_id = await self._subscribe(websocket)
        logger.info("Successfully subscribed to newHeads: %s", self.subscription_id)

        async for message in websocket:
            try:
                header = parse_new_head(message)
            except json.JSONDecodeError:
                logger.exception("Failed to decode WebSocket message")
                continue
            except ValidationError:
                logger.exception("Malformed block header in notification")
                continue

            if header is None:
                continue

            self.headers_received += 1
            logger.info(
                "New block #%s hash=%s...", header.block_number, header.hash[:10]
            )
            yield header

        logger.info("newHeads stream closed after %s headers", self.headers_received)

    async def __aiter__(self) -> AsyncIterator[BlockHeader]:
        logger.info("Connecting to %s", self.ws_url)
        async with connect(
            self.ws_url,
            ping_interval=self.ping_interval,
            ping_timeout=self.ping_timeout,
        ) as websocket:
            async for header in self.stream(websocket):
                yield header


__all__ = [
    "NewHeadsSubscription",
    "parse_new_head",
]
