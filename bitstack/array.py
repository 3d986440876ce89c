"""
Bit and byte addressing across arrays of fixed-width words.

An array of L words of W bits is one flat space of L*W bits (or L*W/8
bytes). Flat bit index i lives in word i // W at bit offset i % W; flat
byte index j lives in word j // (W/8) at byte lane j % (W/8).

Arrays are borrowed from the caller: a list of ints or a one-dimensional
numpy integer array. A numpy array must have the engine's own dtype;
anything else raises ValueError. Mutating operations write the updated word
back into the caller's array and return None. Nothing here allocates,
resizes or replaces the array.

Out-of-range flat indices are contract failures. Under a permissive policy
reads return 0 and writes are dropped; indices never wrap into another word.
"""

import operator

import numpy as np

from bitstack.contract import ContractPolicy, PositionError, check_read_index
from bitstack.width import width_of
from bitstack.word import word_bits


class ArrayBits:
    """Flat bit and byte operations over arrays of one word width."""

    def __init__(self, width, policy: "ContractPolicy | None" = None) -> None:
        """
        Initialize an array engine.

        Args:
            width: WordWidth, width name or numpy integer dtype
            policy: Contract policy (default_policy() if None)
        """
        self.word = word_bits(width, policy)
        self.width = self.word.width
        self.policy = self.word.policy

    @classmethod
    def for_array(cls, array, policy: "ContractPolicy | None" = None) -> "ArrayBits":
        """Engine matching the dtype of a numpy array."""
        return cls(width_of(array), policy)

    def __repr__(self) -> str:
        return f"ArrayBits({self.width.name}, {self.policy!r})"

    def bit_length(self, array) -> int:
        """Number of addressable bits (L*W)."""
        return len(array) * self.width.bits

    def byte_length(self, array) -> int:
        """Number of addressable bytes (L*W/8)."""
        return len(array) * self.width.num_bytes

    def _check_storage(self, array) -> None:
        if isinstance(array, np.ndarray) and width_of(array) != self.width:
            raise ValueError(
                f"{self.width.name}[] - array dtype {array.dtype} does not match the engine width"
            )

    def _locate(self, array, index: int, per_word: int, op: str):
        self._check_storage(array)
        index = operator.index(index)
        total = len(array) * per_word
        if 0 <= index < total:
            return divmod(index, per_word)

        self.policy.fail(
            PositionError(
                f"{self.width.name}[{len(array)}].{op} - index must be between 0 and "
                f"{total - 1} but was {index}"
            )
        )
        return None

    def locate_bit(self, array, index: int):
        """
        Translate a flat bit index.

        Args:
            array: Word array
            index: Flat bit index in [0, L*W)

        Returns:
            (word_index, bit_offset), or None if out of range (permissive policy)

        Raises:
            PositionError: If index is out of range (strict policy)
        """
        return self._locate(array, index, self.width.bits, "locate_bit")

    def locate_byte(self, array, index: int):
        """
        Translate a flat byte index.

        Returns:
            (word_index, byte_lane), or None if out of range (permissive policy)
        """
        return self._locate(array, index, self.width.num_bytes, "locate_byte")

    def bit_at(self, array, index: int) -> int:
        """Bit at a flat index (0 or 1)."""
        location = self._locate(array, index, self.width.bits, "bit_at")
        if location is None:
            return 0

        word_index, offset = location
        return self.word.bit_at(array[word_index], offset)

    def bit_inv_at(self, array, index: int) -> int:
        """Inverted bit at a flat index."""
        location = self._locate(array, index, self.width.bits, "bit_inv_at")
        if location is None:
            return 0

        word_index, offset = location
        return self.word.bit_inv_at(array[word_index], offset)

    def _update_bit(self, array, index: int, op: str, func, *args) -> None:
        location = self._locate(array, index, self.width.bits, op)
        if location is None:
            return

        word_index, offset = location
        array[word_index] = func(array[word_index], offset, *args)

    def set_bit_at(self, array, index: int) -> None:
        """Set the bit at a flat index to 1, in place."""
        self._update_bit(array, index, "set_bit_at", self.word.set_bit_at)

    def unset_bit_at(self, array, index: int) -> None:
        """Clear the bit at a flat index to 0, in place."""
        self._update_bit(array, index, "unset_bit_at", self.word.unset_bit_at)

    def toggle_bit_at(self, array, index: int) -> None:
        """Flip the bit at a flat index, in place."""
        self._update_bit(array, index, "toggle_bit_at", self.word.toggle_bit_at)

    def set_bit(self, array, index: int, bit: int) -> None:
        """
        Set the bit at a flat index to a given value, in place.

        Args:
            array: Word array (modified)
            index: Flat bit index
            bit: New bit value (0 or 1)

        Raises:
            PositionError: If index is out of range (strict policy)
            BitValueError: If bit is not 0 or 1 (strict policy)
        """
        self._update_bit(array, index, "set_bit", self.word.set_bit, bit)

    def byte_at(self, array, index: int) -> int:
        """Byte at a flat byte index; lane 0 of each word is its MSB."""
        location = self._locate(array, index, self.width.num_bytes, "byte_at")
        if location is None:
            return 0

        word_index, lane = location
        return self.word.byte_at(array[word_index], lane)

    def set_byte_at(self, array, new_byte: int, index: int) -> None:
        """
        Replace the byte at a flat byte index, in place.

        Args:
            array: Word array (modified)
            new_byte: New byte value in [0, 255]
            index: Flat byte index

        Raises:
            PositionError: If index is out of range (strict policy)
            ByteValueError: If new_byte is outside [0, 255] (strict policy)
        """
        location = self._locate(array, index, self.width.num_bytes, "set_byte_at")
        if location is None:
            return

        word_index, lane = location
        array[word_index] = self.word.set_byte_at(array[word_index], new_byte, lane)

    def pop_count(self, array) -> int:
        """Total number of set bits across all words."""
        self._check_storage(array)
        return sum(self.word.pop_count(word) for word in array)

    def bit_string(self, array) -> str:
        """Per-word bit strings concatenated in array order."""
        self._check_storage(array)
        return "".join(self.word.bit_string(word) for word in array)

    def hex_string(self, array) -> str:
        """Per-word hex strings, zero-padded to W/4 digits, in array order."""
        self._check_storage(array)
        digits = self.width.bits // 4
        return "".join(self.word.hex_string(word).rjust(digits, "0") for word in array)

    def to_bytes(self, array) -> bytes:
        """Byte lanes of every word in flat byte index order."""
        self._check_storage(array)
        return b"".join(self.word.to_bytes(word) for word in array)

    def from_bit_string(self, array, text: str, read_index: int = 0) -> None:
        """
        Fill an array from a binary string, in place.

        Word k is read from the W characters at read_index + k*W.

        Args:
            array: Word array (every element is overwritten)
            text: Binary string, MSB first per word
            read_index: Index of the first character

        Raises:
            PositionError: If read_index is negative (strict policy)
            BitStringLengthError: If fewer than L*W characters remain
                (strict policy)
        """
        self._check_storage(array)
        bits = self.width.bits
        total = self.bit_length(array)
        read_index = check_read_index(
            self.policy, read_index, len(text), total, f"{self.width.name}[].from_bit_string"
        )
        chunk = text[read_index:read_index + total].ljust(total, "0")

        for word_index in range(len(array)):
            array[word_index] = self.word.from_bit_string(chunk, word_index * bits)

    def from_bytes(self, array, data: bytes, read_index: int = 0) -> None:
        """
        Fill an array from big-endian bytes, in place.

        Raises:
            PositionError: If read_index is negative (strict policy)
            BitStringLengthError: If fewer than L*W/8 bytes remain
                (strict policy)
        """
        self._check_storage(array)
        num_bytes = self.width.num_bytes
        total = self.byte_length(array)
        read_index = check_read_index(
            self.policy, read_index, len(data), total, f"{self.width.name}[].from_bytes"
        )
        chunk = bytes(data[read_index:read_index + total]).ljust(total, b"\x00")

        for word_index in range(len(array)):
            array[word_index] = self.word.from_bytes(chunk, word_index * num_bytes)
