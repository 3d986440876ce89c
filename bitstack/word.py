"""
Bit, byte and text operations on single fixed-width words.

One WordBits engine serves one WordWidth. Words are plain ints and are never
modified: every "mutating" operation returns a new word in the width's value
domain.

Conventions:
- Bit position p is the bit with place value 2**p (position 0 = LSB)
- Byte position 0 is the most significant byte of the word
- Bit strings are exactly `bits` characters long, MSB first
- Hex strings are uppercase, unprefixed, without leading zeros
"""

import operator

from bitstack.contract import (
    PERMISSIVE,
    STRICT,
    BitValueError,
    ByteValueError,
    ContractPolicy,
    PositionError,
    check_read_index,
    default_policy,
)
from bitstack.width import WIDTHS, width_for

# Hamming weight reduction constants, truncated to the word width
M1 = 0x5555555555555555
M2 = 0x3333333333333333
M4 = 0x0F0F0F0F0F0F0F0F
H01 = 0x0101010101010101


class WordBits:
    """Bit manipulation engine for one word width."""

    def __init__(self, width, policy: "ContractPolicy | None" = None) -> None:
        """
        Initialize an engine.

        Args:
            width: WordWidth, width name or numpy integer dtype
            policy: Contract policy (default_policy() if None)

        Raises:
            ValueError: If width is not a supported integer type
        """
        self.width = width_for(width)
        self.policy = policy if policy is not None else default_policy()
        self.bits = self.width.bits

        mask = self.width.mask
        self._m1 = M1 & mask
        self._m2 = M2 & mask
        self._m4 = M4 & mask
        self._h01 = H01 & mask
        self._pop_shift = self.bits - 8

    def __repr__(self) -> str:
        return f"WordBits({self.width.name}, {self.policy!r})"

    def _check_pos(self, pos: int, op: str) -> int:
        pos = operator.index(pos)
        if 0 <= pos < self.bits:
            return pos

        self.policy.fail(
            PositionError(
                f"{self.width.name}.{op} - position must be between 0 and "
                f"{self.bits - 1} but was {pos}"
            )
        )
        return pos & (self.bits - 1)

    def _check_byte_pos(self, pos: int, op: str) -> int:
        pos = operator.index(pos)
        num_bytes = self.width.num_bytes
        if 0 <= pos < num_bytes:
            return pos

        self.policy.fail(
            PositionError(
                f"{self.width.name}.{op} - position must be between 0 and "
                f"{num_bytes - 1} but was {pos}"
            )
        )
        return pos & (num_bytes - 1)

    def bit_at(self, word: int, pos: int) -> int:
        """
        Get the bit at a position.

        Args:
            word: Word value
            pos: Bit position (0 = LSB, bits-1 = MSB)

        Returns:
            Bit value (0 or 1)

        Raises:
            PositionError: If pos is out of range (strict policy)
        """
        pos = self._check_pos(pos, "bit_at")
        return (self.width.to_unsigned(word) >> pos) & 1

    def bit_inv_at(self, word: int, pos: int) -> int:
        """Inverted bit at a position (1 - bit_at)."""
        pos = self._check_pos(pos, "bit_inv_at")
        return 1 - ((self.width.to_unsigned(word) >> pos) & 1)

    def set_bit_at(self, word: int, pos: int) -> int:
        """Return word with the bit at pos set to 1."""
        pos = self._check_pos(pos, "set_bit_at")
        return self.width.from_unsigned(self.width.to_unsigned(word) | (1 << pos))

    def unset_bit_at(self, word: int, pos: int) -> int:
        """Return word with the bit at pos cleared to 0."""
        pos = self._check_pos(pos, "unset_bit_at")
        return self.width.from_unsigned(self.width.to_unsigned(word) & ~(1 << pos))

    def toggle_bit_at(self, word: int, pos: int) -> int:
        """Return word with the bit at pos flipped."""
        pos = self._check_pos(pos, "toggle_bit_at")
        return self.width.from_unsigned(self.width.to_unsigned(word) ^ (1 << pos))

    def set_bit(self, word: int, pos: int, bit: int) -> int:
        """
        Return word with the bit at pos set to a given value.

        Args:
            word: Word value
            pos: Bit position
            bit: New bit value (0 or 1)

        Returns:
            Updated word

        Raises:
            PositionError: If pos is out of range (strict policy)
            BitValueError: If bit is not 0 or 1 (strict policy)
        """
        pos = self._check_pos(pos, "set_bit")

        if bit != 0 and bit != 1:
            self.policy.fail(
                BitValueError(
                    f"{self.width.name}.set_bit - bit value must be either 0 or 1 but was {bit}"
                )
            )

        mask = 1 << pos
        m1 = (int(bit) << pos) & mask
        m2 = self.width.to_unsigned(word) & ~mask

        return self.width.from_unsigned(m2 | m1)

    def pop_count(self, word: int) -> int:
        """
        Count set bits.

        Parallel Hamming weight: sums of 2-bit groups, then 4-bit, then
        bytes, then a multiply that accumulates all byte counts into the
        top byte.

        Args:
            word: Word value (signed words count their two's complement bits)

        Returns:
            Number of bits set to 1
        """
        value = self.width.to_unsigned(word)
        value0 = value - ((value >> 1) & self._m1)
        value1 = (value0 & self._m2) + ((value0 >> 2) & self._m2)
        value2 = (value1 + (value1 >> 4)) & self._m4

        return ((value2 * self._h01) & self.width.mask) >> self._pop_shift

    def is_power_of_two(self, word: int) -> bool:
        """Check whether exactly one bit of the word's bit pattern is set."""
        value = self.width.to_unsigned(word)
        return value != 0 and (value & (value - 1)) == 0

    def to_bool(self, word: int) -> bool:
        """True if the word is greater than zero (negative words are False)."""
        return self.width.from_unsigned(self.width.to_unsigned(word)) > 0

    def byte_at(self, word: int, pos: int) -> int:
        """
        Get a byte lane.

        Args:
            word: Word value
            pos: Byte position (0 = most significant byte)

        Returns:
            Byte value in [0, 255]

        Raises:
            PositionError: If pos is out of range (strict policy)
        """
        pos = self._check_byte_pos(pos, "byte_at")
        shift = self.bits - 8 - (pos * 8)
        return (self.width.to_unsigned(word) >> shift) & 0xFF

    def set_byte_at(self, word: int, new_byte: int, pos: int) -> int:
        """
        Return word with one byte lane replaced.

        Args:
            word: Word value
            new_byte: New byte value in [0, 255]
            pos: Byte position (0 = most significant byte)

        Returns:
            Updated word, all other lanes unchanged

        Raises:
            PositionError: If pos is out of range (strict policy)
            ByteValueError: If new_byte is outside [0, 255] (strict policy)
        """
        pos = self._check_byte_pos(pos, "set_byte_at")

        if not 0 <= new_byte <= 0xFF:
            self.policy.fail(
                ByteValueError(
                    f"{self.width.name}.set_byte_at - byte value must be between 0 and 255 "
                    f"but was {new_byte}"
                )
            )

        shift = self.bits - 8 - (pos * 8)
        mask = 0xFF << shift
        m1 = ((int(new_byte) & 0xFF) << shift) & mask
        m2 = self.width.to_unsigned(word) & ~mask

        return self.width.from_unsigned(m2 | m1)

    def bit_string(self, word: int) -> str:
        """Binary string of the word, `bits` characters, MSB first."""
        return format(self.width.to_unsigned(word), f"0{self.bits}b")

    def from_bit_string(self, text: str, read_index: int = 0) -> int:
        """
        Read a word from a binary string.

        Reads exactly `bits` characters starting at read_index, MSB first.
        '1' sets a bit, any other character clears it.

        Args:
            text: Binary string
            read_index: Index of the first (most significant) character

        Returns:
            Word value

        Raises:
            PositionError: If read_index is negative (strict policy)
            BitStringLengthError: If fewer than `bits` characters remain
                (strict policy)
        """
        read_index = check_read_index(
            self.policy, read_index, len(text), self.bits, f"{self.width.name}.from_bit_string"
        )

        value = 0
        for char in text[read_index:read_index + self.bits].ljust(self.bits, "0"):
            value = (value << 1) | (char == "1")

        return self.width.from_unsigned(value)

    def hex_string(self, word: int) -> str:
        """Uppercase hex of the word's bit pattern, no prefix or leading zeros."""
        return format(self.width.to_unsigned(word), "X")

    def to_bytes(self, word: int) -> bytes:
        """Byte lanes of the word in lane order (big-endian)."""
        return self.width.to_unsigned(word).to_bytes(self.width.num_bytes, "big")

    def from_bytes(self, data: bytes, read_index: int = 0) -> int:
        """
        Read a word from big-endian bytes.

        Args:
            data: Source bytes
            read_index: Index of the most significant byte

        Returns:
            Word value

        Raises:
            PositionError: If read_index is negative (strict policy)
            BitStringLengthError: If fewer than num_bytes bytes remain
                (strict policy)
        """
        num_bytes = self.width.num_bytes
        read_index = check_read_index(
            self.policy, read_index, len(data), num_bytes, f"{self.width.name}.from_bytes"
        )
        chunk = bytes(data[read_index:read_index + num_bytes]).ljust(num_bytes, b"\x00")

        return self.width.from_unsigned(int.from_bytes(chunk, "big"))


# One engine per width for each module-level policy; custom policies get
# their own engine so the table stays bounded.
_SHARED = {
    (width, policy): WordBits(width, policy)
    for width in WIDTHS
    for policy in (STRICT, PERMISSIVE)
}


def word_bits(width, policy: "ContractPolicy | None" = None) -> WordBits:
    """
    Engine for a width and policy.

    Args:
        width: WordWidth, width name or numpy integer dtype
        policy: Contract policy (default_policy() if None)

    Returns:
        WordBits engine, shared across calls for STRICT and PERMISSIVE,
        a new engine for any other policy
    """
    if policy is None:
        policy = default_policy()

    width = width_for(width)
    engine = _SHARED.get((width, policy))
    if engine is None:
        engine = WordBits(width, policy)
    return engine
