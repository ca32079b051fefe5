"""Exception hierarchy for the swap watcher.

Decode errors are per-log and recoverable: the pipeline logs them and moves on
to the next log of the same block. Window errors split into a recoverable
discontinuity, a fatal deep reorganization and plain misuse of the window.
Collaborator failures (RPC, subscription) propagate unchanged.
"""


class SwapWatchError(Exception):
    """Base class for all swap watcher errors."""


# Decoding


class DecodeError(SwapWatchError):
    """A raw log could not be turned into a swap event."""


class SignatureMismatchError(DecodeError):
    """The log's first topic is not the expected event signature."""

    def __init__(self, expected: str, actual: str | None) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Signature mismatch: expected {expected}, got {actual}")


class FieldTypeMismatchError(DecodeError):
    """A required event field is missing or has the wrong shape."""

    def __init__(self, field_name: str, detail: str = "") -> None:
        self.field_name = field_name
        msg = f"Field {field_name!r} is missing or has the wrong type"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class AmountOverflowError(DecodeError):
    """A signed amount does not fit the bounded signed range."""

    def __init__(self, raw_value: int, bits: int) -> None:
        self.raw_value = raw_value
        self.bits = bits
        super().__init__(
            f"Amount {hex(raw_value)} does not fit a signed {bits}-bit integer"
        )


# Confirmation window


class WindowError(SwapWatchError):
    """Base class for confirmation window errors."""


class DiscontinuityError(WindowError):
    """A header did not advance past the window's tail."""

    def __init__(self, tail_number: int, new_number: int) -> None:
        self.tail_number = tail_number
        self.new_number = new_number
        super().__init__(
            f"Block #{new_number} does not follow tail block #{tail_number}"
        )


class DeepReorganizationError(WindowError):
    """The chain moved past the window head by at least the confirmation depth."""

    def __init__(self, head_number: int, tail_number: int, depth: int) -> None:
        self.head_number = head_number
        self.tail_number = tail_number
        self.depth = depth
        super().__init__(
            f"Deep reorganization detected: head #{head_number} + depth {depth}"
            f" <= tail #{tail_number}"
        )


class WindowUsageError(WindowError):
    """The window was used outside its contract (pop when not ready, overfill)."""


# Collaborators


class RPCError(SwapWatchError):
    """A JSON-RPC call returned an error object."""

    def __init__(self, method: str, error: object) -> None:
        self.method = method
        self.error = error
        super().__init__(f"RPC error from {method}: {error}")


class SubscriptionError(SwapWatchError):
    """The node rejected or broke the newHeads subscription."""


__all__ = [
    "AmountOverflowError",
    "DecodeError",
    "DeepReorganizationError",
    "DiscontinuityError",
    "FieldTypeMismatchError",
    "RPCError",
    "SignatureMismatchError",
    "SubscriptionError",
    "SwapWatchError",
    "WindowError",
    "WindowUsageError",
]
