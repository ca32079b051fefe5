"""Confirmation window over incoming block headers.

Blocks are processed only after `depth` newer blocks have been observed.
The window keeps the headers in arrival order, rejects headers that do not
advance past its tail, and reports a deep reorganization when the chain has
moved past the head block by at least `depth` blocks.

    Filling (len < depth) --push--> Ready (len >= depth) --pop--> Filling
"""

from collections import deque
from enum import Enum

from swapwatch.errors import DiscontinuityError, WindowUsageError
from swapwatch.helpers.constants import DEFAULT_CONFIRMATION_DEPTH
from swapwatch.helpers.logging import get_logger
from swapwatch.helpers.models import BlockHeader

logger = get_logger(__name__)


class ReorgStatus(Enum):
    """Outcome of a reorganization check."""

    OK = "ok"
    REORG_DETECTED = "reorg_detected"


class ConfirmationWindow:
    """Fixed-depth FIFO buffer of block headers."""

    def __init__(self, depth: int = DEFAULT_CONFIRMATION_DEPTH) -> None:
        """Initialize the window.

        Args:
            depth: Confirmation depth D; the window is ready once it holds D headers.

        Raises:
            ValueError: If depth is lower than 1
        """
        if depth < 1:
            msg = f"Confirmation depth must be at least 1, got {depth}"
            raise ValueError(msg)

        self.depth = depth
        self._headers: deque[BlockHeader] = deque(maxlen=depth + 1)

    def __len__(self) -> int:
        return len(self._headers)

    @property
    def head(self) -> BlockHeader | None:
        """Oldest header, next to be confirmed."""
        return self._headers[0] if self._headers else None

    @property
    def tail(self) -> BlockHeader | None:
        """Most recently pushed header."""
        return self._headers[-1] if self._headers else None

    def headers(self) -> list[BlockHeader]:
        """Snapshot of the buffered headers, oldest first."""
        return list(self._headers)

    def push(self, header: BlockHeader) -> None:
        """Append a header at the tail.

        Raises:
            DiscontinuityError: If the header's number does not exceed the tail's.
                The header is not appended.
            WindowUsageError: If the window already holds depth + 1 headers
        """
        tail = self.tail
        if tail is not None:
            if header.block_number <= tail.block_number:
                raise DiscontinuityError(tail.block_number, header.block_number)
            if header.parent_hash.lower() != tail.hash.lower():
                logger.warning(
                    "Block #%s parent %s does not match tail #%s hash %s",
                    header.block_number,
                    header.parent_hash[:10],
                    tail.block_number,
                    tail.hash[:10],
                )

        if len(self._headers) > self.depth:
            msg = f"Window is full ({len(self._headers)} headers); pop before pushing"
            raise WindowUsageError(msg)

        self._headers.append(header)
        logger.debug(
            "Block #%s added to window, size %s/%s",
            header.block_number,
            len(self._headers),
            self.depth,
        )

    def is_ready(self) -> bool:
        """Whether the head block has enough confirmations to be processed."""
        return len(self._headers) >= self.depth

    def pop_confirmed(self) -> BlockHeader:
        """Remove and return the head header.

        Raises:
            WindowUsageError: If the window is not ready
        """
        if not self.is_ready():
            msg = f"Window not ready ({len(self._headers)}/{self.depth} headers)"
            raise WindowUsageError(msg)
        return self._headers.popleft()

    def detect_reorg(self) -> ReorgStatus:
        """Check whether the chain advanced past the head by at least depth blocks."""
        head, tail = self.head, self.tail
        if head is None or tail is None:
            return ReorgStatus.OK
        if head.block_number + self.depth <= tail.block_number:
            return ReorgStatus.REORG_DETECTED
        return ReorgStatus.OK


__all__ = [
    "ConfirmationWindow",
    "ReorgStatus",
]
