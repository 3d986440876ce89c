"""
bitstack

Bit and byte addressing for fixed-width integer words (8/16/32/64-bit,
signed and unsigned) and for arrays of such words, with binary and hex
text encodings.
"""

__version__ = "1.0.0"

from bitstack.array import ArrayBits
from bitstack.contract import (
    PERMISSIVE,
    STRICT,
    BitStringLengthError,
    BitValueError,
    ByteValueError,
    ContractError,
    ContractPolicy,
    PositionError,
    default_policy,
)
from bitstack.width import (
    INT8,
    INT16,
    INT32,
    INT64,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    WIDTHS,
    WordWidth,
    width_for,
    width_of,
)
from bitstack.word import WordBits, word_bits

__all__ = [
    "ArrayBits",
    "BitStringLengthError",
    "BitValueError",
    "ByteValueError",
    "ContractError",
    "ContractPolicy",
    "INT8",
    "INT16",
    "INT32",
    "INT64",
    "PERMISSIVE",
    "PositionError",
    "STRICT",
    "UINT8",
    "UINT16",
    "UINT32",
    "UINT64",
    "WIDTHS",
    "WordBits",
    "WordWidth",
    "__version__",
    "default_policy",
    "width_for",
    "width_of",
    "word_bits",
]
