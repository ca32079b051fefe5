"""Swap event decoder.

Turns a raw log (topics + data) into a `DecodedSwapEvent`:

1. the first topic must be the descriptor's signature hash;
2. the log is parsed into the descriptor's ordered parameters (indexed ones
   from topics, the rest word by word from data), integers kept as raw
   unsigned words;
3. sender, recipient, amount0 and amount1 are taken in that order and their
   shapes checked;
4. amounts are sign-recovered into a bounded signed range and scaled by the
   pair's decimals;
5. the trade direction follows the sign of amount0.

Each step raises a `DecodeError` subclass; nothing is returned half-filled.
"""

from dataclasses import dataclass
from typing import Any

from eth_abi import decode as abi_decode
from eth_abi.exceptions import DecodingError
from eth_utils import to_checksum_address

from swapwatch.data.swaps.amounts import recover_signed
from swapwatch.data.swaps.constants import SWAP_EVENT, SWAP_FIELDS
from swapwatch.data.swaps.models import (
    DecodedSwapEvent,
    EventDescriptor,
    EventParam,
    RawLog,
    TokenPair,
    TradeDirection,
)
from swapwatch.errors import FieldTypeMismatchError, SignatureMismatchError
from swapwatch.helpers.constants import SIGNED_AMOUNT_BITS
from swapwatch.helpers.logging import get_logger
from swapwatch.helpers.parsers import hex_to_bytes, scale_amount

logger = get_logger(__name__)

WORD_SIZE = 32


@dataclass(frozen=True, slots=True)
class DecodedParam:
    """One parsed event parameter."""

    name: str
    kind: str  # address | int | uint | bool | bytes
    value: Any


# ---------- parsing ----------


def _decode_word(param: EventParam, word: bytes) -> DecodedParam:
    """Decode one 32-byte word according to the parameter's ABI type."""
    if len(word) != WORD_SIZE:
        raise FieldTypeMismatchError(param.name, f"expected {WORD_SIZE} bytes, got {len(word)}")

    # Integers are read as raw unsigned words; sign recovery happens later
    abi_type = "uint256" if param.kind in ("int", "uint") else param.abi_type
    try:
        (value,) = abi_decode([abi_type], word)
    except DecodingError as e:
        raise FieldTypeMismatchError(param.name, str(e)) from e

    if param.kind == "address":
        value = to_checksum_address(value)
    return DecodedParam(name=param.name, kind=param.kind, value=value)


def parse_log(descriptor: EventDescriptor, raw_log: RawLog) -> list[DecodedParam]:
    """Parse a log into the descriptor's parameters, in declaration order.

    Raises:
        FieldTypeMismatchError: If a topic or data word is missing or malformed
    """
    parsed: dict[str, DecodedParam] = {}

    topics = raw_log.topics[1:]
    for i, param in enumerate(descriptor.indexed_params):
        if i >= len(topics):
            raise FieldTypeMismatchError(param.name, "missing indexed topic")
        try:
            word = hex_to_bytes(topics[i])
        except ValueError as e:
            raise FieldTypeMismatchError(param.name, str(e)) from e
        parsed[param.name] = _decode_word(param, word)

    data = raw_log.data
    for i, param in enumerate(descriptor.data_params):
        start = i * WORD_SIZE
        if start + WORD_SIZE > len(data):
            raise FieldTypeMismatchError(param.name, "data payload too short")
        parsed[param.name] = _decode_word(param, data[start : start + WORD_SIZE])

    return [parsed[p.name] for p in descriptor.params]


def _extract_fields(params: list[DecodedParam]) -> list[Any]:
    """Take the swap fields by position and check their shape."""
    values: list[Any] = []
    for position, (field_name, kind) in enumerate(SWAP_FIELDS):
        if position >= len(params):
            raise FieldTypeMismatchError(field_name, "not present in event")
        param = params[position]
        if param.kind != kind:
            raise FieldTypeMismatchError(
                field_name, f"expected {kind}, got {param.kind} ({param.name})"
            )
        values.append(param.value)
    return values


# ---------- decoder ----------


class EventDecoder:
    """Decodes Swap logs for one pair.

    Args:
        pair: Token symbols and decimals used for scaling and labels
        descriptor: Event descriptor (defaults to the Uniswap V3 Swap event)
        amount_bits: Width of the signed range amounts must fit
    """

    def __init__(
        self,
        pair: TokenPair | None = None,
        descriptor: EventDescriptor = SWAP_EVENT,
        amount_bits: int = SIGNED_AMOUNT_BITS,
    ) -> None:
        self.pair = pair or TokenPair()
        self.descriptor = descriptor
        self.topic0 = descriptor.topic0
        self.amount_bits = amount_bits

    def decode(self, raw_log: RawLog) -> DecodedSwapEvent:
        """Decode one raw log.

        Raises:
            SignatureMismatchError: If the first topic is not the event signature
            FieldTypeMismatchError: If a field is missing or has the wrong shape
            AmountOverflowError: If an amount does not fit the signed range
        """
        actual = raw_log.topics[0].lower() if raw_log.topics else None
        if actual != self.topic0:
            raise SignatureMismatchError(self.topic0, actual)

        params = parse_log(self.descriptor, raw_log)
        sender, recipient, raw0, raw1 = _extract_fields(params)

        amount0 = recover_signed(raw0, self.amount_bits)
        amount1 = recover_signed(raw1, self.amount_bits)

        # Zero amount0 counts as token1 paid in
        if amount0 > 0:
            direction = TradeDirection.TOKEN0_TO_TOKEN1
        else:
            direction = TradeDirection.TOKEN1_TO_TOKEN0
            if amount0 == 0:
                logger.debug(
                    "Zero amount0 in log %s/%s, direction is ambiguous",
                    raw_log.tx_hash,
                    raw_log.log_index,
                )

        return DecodedSwapEvent(
            sender=sender,
            recipient=recipient,
            amount0=amount0,
            amount1=amount1,
            decimal0=scale_amount(amount0, self.pair.token0_decimals),
            decimal1=scale_amount(amount1, self.pair.token1_decimals),
            direction=direction,
            direction_label=direction.label(self.pair),
            block_number=raw_log.block_number,
            tx_hash=raw_log.tx_hash,
            log_index=raw_log.log_index,
        )


__all__ = [
    "DecodedParam",
    "EventDecoder",
    "parse_log",
]
