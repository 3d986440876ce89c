"""Tests for WordWidth and width lookups."""

import numpy as np
import pytest

from bitstack.width import (
    INT8,
    INT16,
    INT64,
    UINT8,
    UINT32,
    UINT64,
    WIDTHS,
    WordWidth,
    width_for,
    width_of,
)


class TestWordWidthInit:
    """Test WordWidth construction."""

    def test_unsigned_range(self) -> None:
        """Test range and mask of an unsigned width."""
        assert UINT8.min_value == 0
        assert UINT8.max_value == 255
        assert UINT8.mask == 0xFF
        assert UINT8.num_bytes == 1

    def test_signed_range(self) -> None:
        """Test range of a signed width."""
        assert INT16.min_value == -32768
        assert INT16.max_value == 32767
        assert INT16.mask == 0xFFFF
        assert INT16.num_bytes == 2

    def test_unsupported_bits_raises(self) -> None:
        """Test that widths other than 8/16/32/64 raise ValueError."""
        with pytest.raises(ValueError):
            WordWidth(24, signed=False)
        with pytest.raises(ValueError):
            WordWidth(128, signed=True)

    def test_names_match_numpy(self) -> None:
        """Test that every width names its numpy dtype."""
        for width in WIDTHS:
            assert width.dtype == np.dtype(width.name)
            assert np.iinfo(width.dtype).min == width.min_value
            assert np.iinfo(width.dtype).max == width.max_value

    def test_equality(self) -> None:
        """Test value equality and hashing."""
        assert WordWidth(32, signed=False) == UINT32
        assert hash(WordWidth(32, signed=False)) == hash(UINT32)
        assert INT64 != UINT64


class TestWordWidthConversion:
    """Test unsigned pattern conversion."""

    def test_to_unsigned_negative(self) -> None:
        """Test that negative values map to their two's complement pattern."""
        assert INT8.to_unsigned(-1) == 0xFF
        assert INT8.to_unsigned(-128) == 0x80
        assert INT64.to_unsigned(-2) == 0xFFFFFFFFFFFFFFFE

    def test_from_unsigned_sign_extends(self) -> None:
        """Test sign extension for signed widths."""
        assert INT8.from_unsigned(0xFF) == -1
        assert INT8.from_unsigned(0x7F) == 127
        assert UINT8.from_unsigned(0xFF) == 255

    def test_wrapping_matches_numpy_cast(self) -> None:
        """Test that out-of-domain values wrap like a numpy cast."""
        values = np.array([300, -1, 65535, 128], dtype=np.int64)
        for width in (INT8, UINT8, INT16):
            expected = values.astype(width.dtype)
            for value, wrapped in zip(values, expected):
                assert width.from_unsigned(width.to_unsigned(int(value))) == int(wrapped)

    def test_contains(self) -> None:
        """Test range membership."""
        assert INT8.contains(-128)
        assert not INT8.contains(128)
        assert not UINT8.contains(-1)


class TestWidthLookup:
    """Test width_for and width_of."""

    def test_by_name(self) -> None:
        """Test lookup by name."""
        assert width_for("uint32") is UINT32

    def test_by_dtype(self) -> None:
        """Test lookup by numpy type and dtype string."""
        assert width_for(np.int16) is INT16
        assert width_for("u8") is UINT64
        assert width_for(np.dtype(">i8")) is INT64

    def test_passthrough(self) -> None:
        """Test that a WordWidth resolves to itself."""
        assert width_for(INT8) is INT8

    def test_non_integer_raises(self) -> None:
        """Test that float and unknown types raise ValueError."""
        with pytest.raises(ValueError):
            width_for(np.float32)
        with pytest.raises(ValueError):
            width_for("not-a-type")
        with pytest.raises(ValueError):
            width_for(np.bool_)

    def test_width_of_array(self) -> None:
        """Test width inference from an array."""
        assert width_of(np.zeros(4, dtype=np.uint8)) is UINT8
