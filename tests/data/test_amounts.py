"""Tests for two's-complement amount recovery."""

import pytest

from swapwatch.data.swaps.amounts import recover_signed, to_twos_complement
from swapwatch.errors import AmountOverflowError


MAX_128 = 2**127 - 1
MIN_128 = -(2**127)
WORD_MASK = 2**256 - 1


class TestRecoverSigned:
    """Tests for recover_signed."""

    @pytest.mark.parametrize(
        "value",
        [0, 1, -1, MAX_128, -MAX_128, MIN_128, 227754403440, -227732600003252530000000],
    )
    def test_boundaries(self, value: int) -> None:
        """Test encoded signed values within 128 bits come back unchanged."""
        assert recover_signed(to_twos_complement(value)) == value

    def test_all_ones_word_is_minus_one(self) -> None:
        """Test the all-ones word decodes to -1."""
        assert recover_signed(WORD_MASK) == -1

    def test_positive_values_pass_through(self) -> None:
        """Test raw values up to 2**127 - 1 are positive."""
        assert recover_signed(MAX_128) == MAX_128
        assert recover_signed(12345) == 12345

    def test_positive_above_bound_overflows(self) -> None:
        """Test a positive word above the signed 128-bit range overflows."""
        with pytest.raises(AmountOverflowError) as exc_info:
            recover_signed(2**200)

        assert exc_info.value.raw_value == 2**200
        assert exc_info.value.bits == 128

    def test_negative_below_bound_overflows(self) -> None:
        """Test a negative word with magnitude above 2**127 overflows."""
        with pytest.raises(AmountOverflowError):
            recover_signed(to_twos_complement(MIN_128 - 1))

    @pytest.mark.parametrize("raw", [-1, 2**256, 2**300])
    def test_invalid_word_overflows(self, raw: int) -> None:
        """Test values outside the 256-bit word raise."""
        with pytest.raises(AmountOverflowError):
            recover_signed(raw)

    def test_custom_width(self) -> None:
        """Test the signed range width is a parameter."""
        assert recover_signed(to_twos_complement(-128), bits=8) == -128
        assert recover_signed(127, bits=8) == 127

        with pytest.raises(AmountOverflowError):
            recover_signed(128, bits=8)
        with pytest.raises(AmountOverflowError):
            recover_signed(to_twos_complement(-129), bits=8)

    def test_full_width_range(self) -> None:
        """Test bits equal to the word width accepts every int256 value."""
        assert recover_signed(to_twos_complement(-(2**255)), bits=256) == -(2**255)
        assert recover_signed(2**255 - 1, bits=256) == 2**255 - 1


class TestToTwosComplement:
    """Tests for to_twos_complement."""

    def test_negative_one(self) -> None:
        """Test -1 encodes to the all-ones word."""
        assert to_twos_complement(-1) == WORD_MASK

    def test_non_negative_unchanged(self) -> None:
        """Test non-negative values are unchanged."""
        assert to_twos_complement(0) == 0
        assert to_twos_complement(42) == 42

    def test_narrow_word(self) -> None:
        """Test encoding into a narrower word."""
        assert to_twos_complement(-1, 16) == 0xFFFF
        assert to_twos_complement(-(2**15), 16) == 0x8000

    @pytest.mark.parametrize("value", [2**255, -(2**255) - 1])
    def test_out_of_range_raises(self, value: int) -> None:
        """Test values outside the signed word range raise ValueError."""
        with pytest.raises(ValueError, match="does not fit"):
            to_twos_complement(value)
