"""State-machine benchmark: classify comma-separated numeric tokens."""

from __future__ import annotations

import enum
from collections.abc import MutableSequence

from coremark.common import crcu32, to_s16

_COMMA = ord(",")

_INT_PATTERNS = (b"5012", b"1234", b"-874", b"+122")
_FLOAT_PATTERNS = (b"35.54400", b".1234500", b"-110.700", b"+0.64400")
_SCI_PATTERNS = (b"5.500e+3", b"-.123e-2", b"-87e+832", b"+0.6e-12")
_ERR_PATTERNS = (b"T0.3e-1F", b"-T.T++Tq", b"1T3.4e4z", b"34.0e-T^")


class CoreState(enum.IntEnum):
    """States of the token classifier."""

    START = 0
    INVALID = 1
    S1 = 2
    S2 = 3
    INT = 4
    FLOAT = 5
    EXPONENT = 6
    SCIENTIFIC = 7


NUM_CORE_STATES = len(CoreState)


def _isdigit(symbol: int) -> bool:
    return 0x30 <= symbol <= 0x39


def _pattern_for(seed: int) -> bytes:
    kind = seed & 0x7
    index = (seed >> 3) & 0x3
    if kind <= 2:
        return _INT_PATTERNS[index]
    if kind <= 4:
        return _FLOAT_PATTERNS[index]
    if kind <= 6:
        return _SCI_PATTERNS[index]
    return _ERR_PATTERNS[index]


def init_state(size: int, seed: int) -> bytearray:
    """Build the NUL-padded input block of comma-separated tokens chosen by the seed."""
    if size < 1:
        raise ValueError("state block size must be at least 1")
    block = bytearray(size)
    limit = size - 1
    total = 0
    pattern = b""
    while total + len(pattern) + 1 < limit:
        if pattern:
            block[total:total + len(pattern)] = pattern
            block[total + len(pattern)] = _COMMA
            total += len(pattern) + 1
        seed = to_s16(seed + 1)
        pattern = _pattern_for(seed)
    return block


def state_transition(
    data: bytes | bytearray,
    pos: int,
    transition_count: MutableSequence[int],
) -> tuple[CoreState, int]:
    """Scan one token starting at pos; return its final state and the position after it.

    transition_count is updated in place with the transitions taken.
    """
    state = CoreState.START
    end = len(data)
    while pos < end and data[pos] != 0 and state != CoreState.INVALID:
        symbol = data[pos]
        if symbol == _COMMA:
            pos += 1
            break
        if state == CoreState.START:
            if _isdigit(symbol):
                state = CoreState.INT
            elif symbol in b"+-":
                state = CoreState.S1
            elif symbol == ord("."):
                state = CoreState.FLOAT
            else:
                state = CoreState.INVALID
                transition_count[CoreState.INVALID] += 1
            transition_count[CoreState.START] += 1
        elif state == CoreState.S1:
            if _isdigit(symbol):
                state = CoreState.INT
            elif symbol == ord("."):
                state = CoreState.FLOAT
            else:
                state = CoreState.INVALID
            transition_count[CoreState.S1] += 1
        elif state == CoreState.INT:
            if symbol == ord("."):
                state = CoreState.FLOAT
                transition_count[CoreState.INT] += 1
            elif not _isdigit(symbol):
                state = CoreState.INVALID
                transition_count[CoreState.INT] += 1
        elif state == CoreState.FLOAT:
            if symbol in b"Ee":
                state = CoreState.S2
                transition_count[CoreState.FLOAT] += 1
            elif not _isdigit(symbol):
                state = CoreState.INVALID
                transition_count[CoreState.FLOAT] += 1
        elif state == CoreState.S2:
            if symbol in b"+-":
                state = CoreState.EXPONENT
            else:
                state = CoreState.INVALID
            transition_count[CoreState.S2] += 1
        elif state == CoreState.EXPONENT:
            if _isdigit(symbol):
                state = CoreState.SCIENTIFIC
            else:
                state = CoreState.INVALID
            transition_count[CoreState.EXPONENT] += 1
        elif state == CoreState.SCIENTIFIC:
            if not _isdigit(symbol):
                state = CoreState.INVALID
                transition_count[CoreState.INVALID] += 1
        pos += 1
    return state, pos


def _scan(data: bytearray, final_counts: list[int], track_counts: list[int]) -> None:
    pos = 0
    while pos < len(data) and data[pos] != 0:
        state, pos = state_transition(data, pos, track_counts)
        final_counts[state] += 1


def _corrupt(data: bytearray, mask: int, step: int) -> None:
    mask &= 0xFF
    for pos in range(0, len(data), step):
        if data[pos] != _COMMA:
            data[pos] ^= mask


def bench_state(data: bytearray, seed1: int, seed2: int, step: int, crc: int) -> int:
    """Scan the block, corrupt it with seed1, scan again, undo with seed2; return the CRC.

    The block is modified in place and is restored only when seed1 equals seed2.
    """
    if step <= 0:
        raise ValueError("step must be positive")
    final_counts = [0] * NUM_CORE_STATES
    track_counts = [0] * NUM_CORE_STATES
    _scan(data, final_counts, track_counts)
    _corrupt(data, seed1, step)
    _scan(data, final_counts, track_counts)
    _corrupt(data, seed2, step)
    for final, track in zip(final_counts, track_counts):
        crc = crcu32(final, crc)
        crc = crcu32(track, crc)
    return crc