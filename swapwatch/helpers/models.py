"""Common Pydantic models for data structures used across the application."""

from pydantic import BaseModel, ConfigDict, Field


class BlockHeader(BaseModel):
    """Block header received from newHeads WebSocket subscription."""

    number: str = Field(..., description="Block number as hex string")
    hash: str = Field(..., description="Block hash")
    parent_hash: str = Field(..., description="Parent block hash", alias="parentHash")
    timestamp: str | None = Field(
        default=None, description="Block timestamp as hex string"
    )

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    @property
    def block_number(self) -> int:
        """Block number as an integer."""
        return int(self.number, 16)

    @classmethod
    def from_number(
        cls, number: int, block_hash: str, parent_hash: str
    ) -> "BlockHeader":
        """Build a header from an integer block number."""
        return cls(number=hex(number), hash=block_hash, parent_hash=parent_hash)


__all__ = [
    "BlockHeader",
]
