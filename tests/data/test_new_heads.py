"""Tests for the newHeads WebSocket subscription."""

import json

from collections.abc import AsyncIterator
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from swapwatch.data.blocks.live import NewHeadsSubscription, parse_new_head
from swapwatch.errors import SubscriptionError


def notification(number: int) -> str:
    """newHeads notification message for a block number."""
    return json.dumps(
        {
            "jsonrpc": "2.0",
            "method": "eth_subscription",
            "params": {
                "subscription": "0xsub",
                "result": {
                    "number": hex(number),
                    "hash": "0x" + f"{number:064x}",
                    "parentHash": "0x" + f"{number - 1:064x}",
                    "timestamp": "0x65",
                },
            },
        }
    )


class FakeWebSocket:
    """Minimal stand-in for a websockets client connection."""

    def __init__(self, subscribe_response: dict[str, Any], messages: list[str]) -> None:
        self.sent: list[str] = []
        self.subscribe_response = subscribe_response
        self.messages = messages

    async def send(self, message: str) -> None:
        self.sent.append(message)

    async def recv(self) -> str:
        return json.dumps(self.subscribe_response)

    async def __aiter__(self) -> AsyncIterator[str]:
        for message in self.messages:
            yield message


class TestParseNewHead:
    """Tests for parse_new_head."""

    def test_notification(self) -> None:
        """Test a notification yields its header."""
        header = parse_new_head(notification(100))

        assert header is not None
        assert header.block_number == 100

    def test_non_notification_ignored(self) -> None:
        """Test responses without params are ignored."""
        assert parse_new_head(json.dumps({"jsonrpc": "2.0", "id": 1, "result": "0x1"})) is None

    def test_invalid_json_raises(self) -> None:
        """Test non-JSON input raises."""
        with pytest.raises(json.JSONDecodeError):
            parse_new_head("not json")


class TestNewHeadsSubscription:
    """Tests for NewHeadsSubscription."""

    def test_empty_url_raises(self) -> None:
        """Test that empty URL raises ValueError."""
        with pytest.raises(ValueError, match="WebSocket URL cannot be empty"):
            NewHeadsSubscription("")

    @pytest.mark.asyncio
    async def test_stream_yields_headers_in_order(self) -> None:
        """Test headers come out in arrival order and junk is skipped."""
        websocket = FakeWebSocket(
            {"jsonrpc": "2.0", "id": 1, "result": "0xsub"},
            [
                notification(1),
                "not json",
                json.dumps({"params": {"result": {"number": "0x2"}}}),
                notification(2),
                notification(3),
            ],
        )
        subscription = NewHeadsSubscription("wss://test.ws")

        numbers = [h.block_number async for h in subscription.stream(websocket)]  # type: ignore[arg-type]

        assert numbers == [1, 2, 3]
        assert subscription.subscription_id == "0xsub"
        assert subscription.headers_received == 3

        request = json.loads(websocket.sent[0])
        assert request["method"] == "eth_subscribe"
        assert request["params"] == ["newHeads"]

    @pytest.mark.asyncio
    async def test_subscription_error(self) -> None:
        """Test an error response raises SubscriptionError."""
        websocket = FakeWebSocket(
            {"jsonrpc": "2.0", "id": 1, "error": {"code": -32601, "message": "nope"}},
            [notification(1)],
        )
        subscription = NewHeadsSubscription("wss://test.ws")

        with pytest.raises(SubscriptionError, match="Subscription failed"):
            async for _ in subscription.stream(websocket):  # type: ignore[arg-type]
                pass

    @pytest.mark.asyncio
    async def test_iteration_connects(self) -> None:
        """Test iterating the subscription opens a connection with ping settings."""
        websocket = FakeWebSocket({"result": "0xsub"}, [notification(7)])
        connection = MagicMock()
        connection.__aenter__ = AsyncMock(return_value=websocket)
        connection.__aexit__ = AsyncMock(return_value=None)

        with patch(
            "swapwatch.data.blocks.live.connect", return_value=connection
        ) as mock_connect:
            subscription = NewHeadsSubscription("wss://test.ws", ping_interval=5.0)
            headers = [h async for h in subscription]

        assert [h.block_number for h in headers] == [7]
        mock_connect.assert_called_once_with(
            "wss://test.ws", ping_interval=5.0, ping_timeout=10.0
        )
