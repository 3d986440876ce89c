"""
Word width descriptions.

A word is a plain Python int read under a fixed width and signedness. The
WordWidth trait carries everything the engines need to know about one word
type: bit count, masks, value range and the matching numpy dtype.

All bit arithmetic happens on the unsigned bit pattern of a word. Signed
widths convert back with two's complement, so every signed operation is the
unsigned one followed by a sign adjustment.
"""

import numpy as np

SUPPORTED_BITS = (8, 16, 32, 64)


class WordWidth:
    """Bit count and signedness of one fixed-width integer type."""

    __slots__ = ("bits", "signed", "num_bytes", "mask", "sign_bit", "min_value", "max_value")

    def __init__(self, bits: int, signed: bool) -> None:
        """
        Describe a word type.

        Args:
            bits: Word width in bits (8, 16, 32 or 64)
            signed: True for two's complement words

        Raises:
            ValueError: If bits is not a supported width
        """
        if bits not in SUPPORTED_BITS:
            raise ValueError(f"Unsupported word width {bits}, expected one of {SUPPORTED_BITS}")

        self.bits = bits
        self.signed = bool(signed)
        self.num_bytes = bits // 8
        self.mask = (1 << bits) - 1
        self.sign_bit = 1 << (bits - 1)

        if self.signed:
            self.min_value = -self.sign_bit
            self.max_value = self.sign_bit - 1
        else:
            self.min_value = 0
            self.max_value = self.mask

    @property
    def name(self) -> str:
        """numpy style name, e.g. 'int8' or 'uint64'."""
        return ("int" if self.signed else "uint") + str(self.bits)

    @property
    def dtype(self) -> np.dtype:
        """Matching numpy dtype."""
        return np.dtype(self.name)

    def to_unsigned(self, value: int) -> int:
        """Bit pattern of value, wrapped to the width."""
        return int(value) & self.mask

    def from_unsigned(self, pattern: int) -> int:
        """
        Value of a bit pattern in this width's domain.

        Args:
            pattern: Bit pattern (only the low `bits` bits are used)

        Returns:
            Pattern for unsigned widths, sign-extended value for signed ones
        """
        pattern &= self.mask
        if self.signed and pattern & self.sign_bit:
            return pattern - (1 << self.bits)
        return pattern

    def contains(self, value: int) -> bool:
        """Check whether value is representable without wrapping."""
        return self.min_value <= value <= self.max_value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WordWidth):
            return NotImplemented
        return self.bits == other.bits and self.signed == other.signed

    def __hash__(self) -> int:
        return hash((self.bits, self.signed))

    def __repr__(self) -> str:
        return f"WordWidth({self.bits}, signed={self.signed})"


INT8 = WordWidth(8, signed=True)
UINT8 = WordWidth(8, signed=False)
INT16 = WordWidth(16, signed=True)
UINT16 = WordWidth(16, signed=False)
INT32 = WordWidth(32, signed=True)
UINT32 = WordWidth(32, signed=False)
INT64 = WordWidth(64, signed=True)
UINT64 = WordWidth(64, signed=False)

WIDTHS = (INT8, UINT8, INT16, UINT16, INT32, UINT32, INT64, UINT64)

_BY_NAME = {width.name: width for width in WIDTHS}


def width_for(kind) -> WordWidth:
    """
    Resolve a width from a WordWidth, a width name or a numpy dtype.

    Args:
        kind: WordWidth, name such as 'uint32', or anything np.dtype() accepts

    Returns:
        Matching WordWidth

    Raises:
        ValueError: If kind does not describe a supported integer type
    """
    if isinstance(kind, WordWidth):
        return kind

    if isinstance(kind, str) and kind in _BY_NAME:
        return _BY_NAME[kind]

    try:
        dtype = np.dtype(kind)
    except TypeError as e:
        raise ValueError(f"Not an integer word type: {kind!r}") from e

    if dtype.kind not in "iu":
        raise ValueError(f"Not an integer word type: {dtype}")

    width = _BY_NAME.get(dtype.name)
    if width is None:
        raise ValueError(f"Unsupported word type: {dtype}")

    return width


def width_of(array: np.ndarray) -> WordWidth:
    """Width of a numpy integer array, taken from its dtype."""
    return width_for(array.dtype)
