"""
Contract failure reporting.

Every documented precondition (position ranges, bit values, string lengths)
is checked and handed to a ContractPolicy:

- strict: the failure is raised as a ContractError subclass
- permissive: the failure is logged and the operation falls back to a
  bounded result (masked positions, zero reads, ignored writes)

Engines take the policy as a constructor argument. Without one they use
default_policy(), which reads the BITSTACK_DEBUG environment variable.
"""

import operator
import os

from bitstack.logging import get_logger

ENV_VAR = "BITSTACK_DEBUG"
FALSE_VALUES = ("0", "false", "no", "off")

LOGGER = get_logger("contract")


class ContractError(Exception):
    """Base class for precondition violations."""


class PositionError(ContractError, IndexError):
    """Bit position, byte position or flat index out of range."""


class BitValueError(ContractError, ValueError):
    """Bit value other than 0 or 1."""


class ByteValueError(ContractError, ValueError):
    """Byte value outside [0, 255]."""


class BitStringLengthError(ContractError, ValueError):
    """Not enough characters (or bytes) left to read a word."""


class ContractPolicy:
    """Decides what happens when a precondition is violated."""

    def __init__(self, strict: bool = True) -> None:
        """
        Initialize a policy.

        Args:
            strict: Raise on contract failures if True, log and continue if False
        """
        self.strict = strict

    def fail(self, error: ContractError) -> None:
        """
        Report a contract failure.

        Args:
            error: The violation

        Raises:
            ContractError: The given error, in strict mode
        """
        if self.strict:
            raise error

        LOGGER.warning("%s: %s", type(error).__name__, error)

    def __repr__(self) -> str:
        return f"ContractPolicy(strict={self.strict})"


def check_read_index(
    policy: ContractPolicy, read_index: int, length: int, needed: int, label: str
) -> int:
    """
    Validate the start of a fixed-size read from a string or byte sequence.

    Args:
        policy: Policy to report failures to
        read_index: Index of the first item to read
        length: Length of the source
        needed: Number of items the read consumes
        label: Operation name used in messages, e.g. 'uint8.from_bytes'

    Returns:
        read_index as a Python int, 0 if it was negative (permissive policy)

    Raises:
        PositionError: If read_index is negative (strict policy)
        BitStringLengthError: If fewer than `needed` items remain (strict policy)
    """
    read_index = operator.index(read_index)

    if read_index < 0:
        policy.fail(PositionError(f"{label} - read index must be >= 0 but was {read_index}"))
        read_index = 0

    if read_index + needed > length:
        policy.fail(
            BitStringLengthError(
                f"{label} - need {needed} items from read index "
                f"{read_index} but length is {length}"
            )
        )

    return read_index


STRICT = ContractPolicy(strict=True)
PERMISSIVE = ContractPolicy(strict=False)


def default_policy() -> ContractPolicy:
    """
    Policy selected by the environment.

    Returns:
        PERMISSIVE if BITSTACK_DEBUG is set to 0/false/no/off, STRICT otherwise
    """
    value = os.environ.get(ENV_VAR)
    if value is not None and value.strip().lower() in FALSE_VALUES:
        return PERMISSIVE
    return STRICT
