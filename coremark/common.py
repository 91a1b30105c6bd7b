"""CRC helpers, integer wrapping and shared benchmark definitions."""

from __future__ import annotations

import enum
import re

TOTAL_DATA_SIZE = 2 * 1000
NUM_ALGORITHMS = 3

_HEX_DIGITS = re.compile(r"[0-9a-f]*")
_DEC_DIGITS = re.compile(r"[0-9]*")


class Algorithm(enum.IntFlag):
    """Bitmask identifying the benchmarked algorithms."""

    LIST = 1 << 0
    MATRIX = 1 << 1
    STATE = 1 << 2
    ALL = LIST | MATRIX | STATE


def to_s16(value: int) -> int:
    """Wrap an integer to a signed 16-bit value."""
    return ((value + 0x8000) & 0xFFFF) - 0x8000


def to_u16(value: int) -> int:
    """Wrap an integer to an unsigned 16-bit value."""
    return value & 0xFFFF


def _to_s32(value: int) -> int:
    return ((value + 0x80000000) & 0xFFFFFFFF) - 0x80000000


def crcu8(data: int, crc: int) -> int:
    """Fold one byte into a 16-bit CRC."""
    data &= 0xFF
    crc &= 0xFFFF
    for _ in range(8):
        carry = (data ^ crc) & 1
        data >>= 1
        if carry:
            crc ^= 0x4002
            crc = (crc >> 1) | 0x8000
        else:
            crc = (crc >> 1) & 0x7FFF
    return crc


def crcu16(newval: int, crc: int) -> int:
    """Fold an unsigned 16-bit value into a CRC, low byte first."""
    newval &= 0xFFFF
    crc = crcu8(newval & 0xFF, crc)
    return crcu8(newval >> 8, crc)


def crc16(newval: int, crc: int) -> int:
    """Fold a signed 16-bit value into a CRC."""
    return crcu16(to_u16(newval), crc)


def crcu32(newval: int, crc: int) -> int:
    """Fold a 32-bit value into a CRC, low half first."""
    newval &= 0xFFFFFFFF
    crc = crc16(newval & 0xFFFF, crc)
    return crc16(newval >> 16, crc)


def parseval(text: str) -> int:
    """Parse a seed argument: decimal or lower-case 0x hex, optional sign and K/M suffix."""
    sign = 1
    if text.startswith("-"):
        sign = -1
        text = text[1:]
    if text.startswith("0x"):
        base, pattern, text = 16, _HEX_DIGITS, text[2:]
    else:
        base, pattern = 10, _DEC_DIGITS
    match = pattern.match(text)
    digits = match.group()
    value = int(digits, base) if digits else 0
    rest = text[match.end():]
    if rest.startswith("K"):
        value *= 1024
    elif rest.startswith("M"):
        value *= 1024 * 1024
    return _to_s32(value * sign)