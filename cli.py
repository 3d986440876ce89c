#!/usr/bin/env python3
"""
bitstack command line interface.

Describes a single fixed-width word: value, hex, bit string, byte lanes,
population count and power-of-two flag.

Usage:
    python cli.py <width> <value>
    python cli.py -b <width> <bitstring>
    python cli.py -x <width> <hexstring>

Examples:
    python cli.py uint32 0x12345678
    python cli.py -b int8 11111111
    python cli.py -x int16 FF80
"""

import logging
import string
import sys

from bitstack import STRICT, WordBits, __version__
from bitstack.logging import get_logger, setup_logging

LOGGER = get_logger("cli")

WIDTH_NAMES = ("int8", "uint8", "int16", "uint16", "int32", "uint32", "int64", "uint64")
HEX_DIGITS = set(string.hexdigits)


def print_version() -> None:
    """Print version information."""
    print(f"bitstack {__version__}")


def print_help(prog_name: str) -> None:
    """Print help message."""
    print(f"bitstack word inspector (v{__version__})")
    print("=" * 33)
    print()
    print("Usage:")
    print(f"  {prog_name} <width> <value>")
    print(f"  {prog_name} -b <width> <bitstring>")
    print(f"  {prog_name} -x <width> <hexstring>")
    print()
    print("Options:")
    print("  -b             Read the word from a binary string (MSB first)")
    print("  -x             Read the word from a hex string (bit pattern)")
    print("  --debug        Log debug messages to stderr")
    print("  -h, --help     Show this help message")
    print("  -v, --version  Show version information")
    print()
    print("Arguments:")
    print(f"  width          One of: {', '.join(WIDTH_NAMES)}")
    print("  value          Integer literal (e.g. 42, -7, 0xFF, 0b1010)")
    print("  bitstring      Exactly <width bits> characters of 0 and 1")
    print("  hexstring      Hex digits without prefix, at most <width bits>/4")
    print()
    print("Examples:")
    print(f"  {prog_name} uint32 0x12345678")
    print(f"  {prog_name} -b int8 11111111")
    print(f"  {prog_name} -x int16 FF80")
    print()


def describe(engine: WordBits, word: int) -> None:
    """Print all encodings of a word.

    Args:
        engine: Engine of the word's width.
        word: Word value in the width's domain.
    """
    lanes = " ".join(
        f"{engine.byte_at(word, pos):02X}" for pos in range(engine.width.num_bytes)
    )
    print(f"Width:       {engine.width.name}")
    print(f"Value:       {word}")
    print(f"Hex:         {engine.hex_string(word)}")
    print(f"Bits:        {engine.bit_string(word)}")
    print(f"Bytes:       {lanes}")
    print(f"Pop count:   {engine.pop_count(word)}")
    print(f"Power of 2:  {'yes' if engine.is_power_of_two(word) else 'no'}")


def parse_value(engine: WordBits, text: str) -> int:
    """Parse an integer literal that must fit the width without wrapping."""
    value = int(text, 0)
    if not engine.width.contains(value):
        raise ValueError(
            f"value {value} out of range for {engine.width.name} "
            f"[{engine.width.min_value}, {engine.width.max_value}]"
        )
    return value


def parse_bit_string(engine: WordBits, text: str) -> int:
    """Parse a binary string of exactly the word width."""
    if len(text) != engine.bits or set(text) - {"0", "1"}:
        raise ValueError(f"bit string must be {engine.bits} characters of 0 and 1")
    return engine.from_bit_string(text)


def parse_hex_string(engine: WordBits, text: str) -> int:
    """Parse 1 to W/4 unprefixed hex digits into the width's value domain."""
    digits = engine.bits // 4
    if not text or set(text) - HEX_DIGITS:
        raise ValueError(f"hex string {text!r} must be hex digits without prefix")
    if len(text) > digits:
        raise ValueError(f"hex string {text!r} does not fit {engine.width.name} ({digits} digits)")
    return engine.width.from_unsigned(int(text, 16))


def main() -> int:
    """CLI entry point."""
    args = list(sys.argv)
    prog_name = args[0] if args else "cli.py"

    if "--debug" in args:
        args.remove("--debug")
        setup_logging(logging.DEBUG)

    # Check for help flag or no arguments
    if len(args) < 2:
        print_help(prog_name)
        return 1

    if args[1] in ("-h", "--help"):
        print_help(prog_name)
        return 0

    if args[1] in ("-v", "--version"):
        print_version()
        return 0

    mode = args[1] if args[1] in ("-b", "-x") else None
    arg_offset = 2 if mode else 1

    if len(args) != arg_offset + 2:
        print("Error: Expected a width and a value", file=sys.stderr)
        print(f"Usage: {prog_name} [-b | -x] <width> <value>", file=sys.stderr)
        return 1

    width_name = args[arg_offset]
    text = args[arg_offset + 1]

    if width_name not in WIDTH_NAMES:
        print(f"Error: Unknown width {width_name!r}", file=sys.stderr)
        return 1

    engine = WordBits(width_name, STRICT)
    LOGGER.debug("Parsing %r as %s (mode=%s)", text, width_name, mode)

    try:
        if mode == "-b":
            word = parse_bit_string(engine, text)
        elif mode == "-x":
            word = parse_hex_string(engine, text)
        else:
            word = parse_value(engine, text)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    describe(engine, word)
    return 0


if __name__ == "__main__":
    sys.exit(main())
