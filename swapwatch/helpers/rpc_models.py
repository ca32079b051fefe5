"""Pydantic models for JSON-RPC requests and responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class JsonRpcRequest(BaseModel):
    """JSON-RPC 2.0 request model."""

    jsonrpc: str = Field(default="2.0", description="JSON-RPC version")
    method: str = Field(..., description="Method name to call")
    params: list[Any] = Field(
        default_factory=list, description="Method parameters"
    )
    id: int | str = Field(..., description="Request ID")


class EthSubscribeNewHeadsRequest(JsonRpcRequest):
    """JSON-RPC request for eth_subscribe("newHeads")."""

    method: str = Field(default="eth_subscribe", frozen=True)
    params: list[Any] = Field(default_factory=lambda: ["newHeads"], frozen=True)


class LogFilter(BaseModel):
    """Filter object for eth_getLogs scoped to a single block hash."""

    block_hash: str = Field(..., alias="blockHash")
    address: str
    topics: list[list[str] | None] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class EthGetLogsRequest(JsonRpcRequest):
    """JSON-RPC request for eth_getLogs."""

    method: str = Field(default="eth_getLogs", frozen=True)

    @classmethod
    def for_block(
        cls, block_hash: str, address: str, topic0: str, request_id: int = 1
    ) -> "EthGetLogsRequest":
        """Build a request for one block, one emitter and one event signature."""
        log_filter = LogFilter(
            block_hash=block_hash, address=address.lower(), topics=[[topic0.lower()]]
        )
        return cls(params=[log_filter.model_dump(by_alias=True)], id=request_id)


class RpcLog(BaseModel):
    """Log object as returned by eth_getLogs or a logs subscription."""

    address: str
    topics: list[str] = Field(default_factory=list)
    data: str = "0x"
    block_number: str | None = Field(default=None, alias="blockNumber")
    block_hash: str | None = Field(default=None, alias="blockHash")
    transaction_hash: str | None = Field(default=None, alias="transactionHash")
    log_index: str | None = Field(default=None, alias="logIndex")
    removed: bool = False

    model_config = ConfigDict(extra="allow", populate_by_name=True)


__all__ = [
    "EthGetLogsRequest",
    "EthSubscribeNewHeadsRequest",
    "JsonRpcRequest",
    "LogFilter",
    "RpcLog",
]
