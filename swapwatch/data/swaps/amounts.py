"""Two's-complement recovery for ABI-encoded signed integers.

Swap amounts arrive as raw 256-bit words. They are reinterpreted as signed
values and bounded to a narrower signed range (128 bits by default) which is
wide enough for any realistic token amount. Values outside the bound raise
instead of wrapping.
"""

from swapwatch.errors import AmountOverflowError
from swapwatch.helpers.constants import SIGNED_AMOUNT_BITS, UINT256_BITS


def recover_signed(
    raw: int,
    bits: int = SIGNED_AMOUNT_BITS,
    word_bits: int = UINT256_BITS,
) -> int:
    """Reinterpret an unsigned word as a signed integer of at most ``bits`` bits.

    Args:
        raw: Unsigned word value, 0 <= raw < 2**word_bits
        bits: Width of the signed target range
        word_bits: Width of the encoded word

    Returns:
        The signed value

    Raises:
        AmountOverflowError: If raw is not a valid word or the value does not
            fit the signed target range

    Example:
        >>> recover_signed(2**256 - 1)
        -1
        >>> recover_signed(42)
        42
    """
    if raw < 0 or raw >= 1 << word_bits:
        raise AmountOverflowError(raw, bits)

    max_positive = (1 << (bits - 1)) - 1
    if raw <= max_positive:
        return raw

    magnitude = ~(raw - 1) & ((1 << word_bits) - 1)
    if magnitude > max_positive + 1:
        raise AmountOverflowError(raw, bits)
    return -magnitude


def to_twos_complement(value: int, word_bits: int = UINT256_BITS) -> int:
    """Encode a signed integer as an unsigned two's-complement word.

    Args:
        value: Signed value
        word_bits: Width of the encoded word

    Returns:
        Unsigned word value

    Raises:
        ValueError: If value is outside the signed range of the word

    Example:
        >>> hex(to_twos_complement(-1, 16))
        '0xffff'
    """
    bound = 1 << (word_bits - 1)
    if not -bound <= value < bound:
        msg = f"{value} does not fit a signed {word_bits}-bit word"
        raise ValueError(msg)
    return value & ((1 << word_bits) - 1)


__all__ = [
    "recover_signed",
    "to_twos_complement",
]
