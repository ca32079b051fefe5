"""Parsing utilities for common data transformations."""

from decimal import Decimal


def parse_hex_int(hex_value: str | None, default: int = 0) -> int:
    """Parse hex string to integer.

    Args:
        hex_value: Hex-encoded string or None
        default: Default value if hex_value is None

    Returns:
        int: Parsed integer value

    Example:
        >>> parse_hex_int("0xff")
        255
        >>> parse_hex_int(None, 0)
        0
    """
    if hex_value is None:
        return default
    return int(hex_value, 16)


def hex_to_bytes(hex_value: str | bytes | None) -> bytes:
    """Convert a 0x-prefixed (or bare) hex string to bytes.

    Args:
        hex_value: Hex string, raw bytes, or None

    Returns:
        bytes: Decoded bytes (empty for None, "" or "0x")

    Raises:
        ValueError: If the string is not valid hex

    Example:
        >>> hex_to_bytes("0x00ff")
        b'\\x00\\xff'
    """
    if hex_value is None:
        return b""
    if isinstance(hex_value, bytes):
        return hex_value
    digits = hex_value[2:] if hex_value[:2].lower() == "0x" else hex_value
    if len(digits) % 2:
        digits = "0" + digits
    return bytes.fromhex(digits)


def normalize_hex(value: str | bytes) -> str:
    """Return a lowercase 0x-prefixed hex string.

    Example:
        >>> normalize_hex("0xABCD")
        '0xabcd'
    """
    if isinstance(value, bytes):
        return "0x" + value.hex()
    lowered = value.lower()
    return lowered if lowered.startswith("0x") else "0x" + lowered


def scale_amount(amount: int, decimals: int) -> Decimal:
    """Scale an integer token amount down by its decimal precision.

    The result is exact (no float rounding).

    Args:
        amount: Amount in the token's smallest unit
        decimals: Token decimal precision

    Returns:
        Decimal: Human-readable quantity

    Example:
        >>> scale_amount(-1, 18)
        Decimal('-1E-18')
        >>> scale_amount(1500000, 6)
        Decimal('1.500000')
    """
    # Shift the exponent directly; scaleb would round to the context precision
    sign, digits, exponent = Decimal(amount).as_tuple()
    return Decimal((sign, digits, exponent - decimals))


__all__ = [
    "hex_to_bytes",
    "normalize_hex",
    "parse_hex_int",
    "scale_amount",
]
