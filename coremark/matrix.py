"""Matrix benchmark: add, scale and multiply small integer matrices."""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass, field

from coremark.common import crc16, to_s16


def _to_s32(value: int) -> int:
    return ((value + 0x80000000) & 0xFFFFFFFF) - 0x80000000


def _c_mod(value: int, modulus: int) -> int:
    """Remainder with the sign of the dividend, as integer division truncates."""
    remainder = abs(value) % modulus
    return -remainder if value < 0 else remainder


def _rows(n: int, m: Sequence[int]) -> list[Sequence[int]]:
    return [m[row * n:(row + 1) * n] for row in range(n)]


@dataclass
class MatrixParams:
    """Dimension and storage of the three N x N matrices, kept row-major."""

    n: int
    a: list[int] = field(default_factory=list)
    b: list[int] = field(default_factory=list)
    c: list[int] = field(default_factory=list)


def init_matrix(blksize: int, seed: int) -> MatrixParams:
    """Size the matrices to fit blksize and fill A and B from the seed."""
    seed = _to_s32(seed)
    if seed == 0:
        seed = 1
    i = 0
    j = 0
    while j < blksize:
        i += 1
        j = i * i * 2 * 4
    n = i - 1
    if n < 0:
        raise ValueError("block size must be positive")
    a: list[int] = []
    b: list[int] = []
    order = 1
    for _ in range(n * n):
        seed = _c_mod(_to_s32(order * seed), 65536)
        val = to_s16(seed + order)
        b.append(val)
        val = to_s16(val + order) & 0xFF
        a.append(val)
        order += 1
    return MatrixParams(n=n, a=a, b=b, c=[0] * (n * n))


def matrix_add_const(n: int, a: MutableSequence[int], val: int) -> None:
    """Add val to every element of A in place, wrapping to 16 bits."""
    val = to_s16(val)
    size = n * n
    a[:size] = [to_s16(x + val) for x in a[:size]]


def matrix_mul_const(n: int, c: MutableSequence[int], a: Sequence[int], val: int) -> None:
    """Store A scaled by val into C."""
    val = to_s16(val)
    size = n * n
    c[:size] = [_to_s32(x * val) for x in a[:size]]


def matrix_mul_vect(n: int, c: MutableSequence[int], a: Sequence[int], b: Sequence[int]) -> None:
    """Store A times the first row of B, taken as a vector, into the first n cells of C."""
    vector = b[:n]
    for row_index, row in enumerate(_rows(n, a)):
        c[row_index] = _to_s32(sum(x * y for x, y in zip(row, vector)))


def matrix_mul_matrix(n: int, c: MutableSequence[int], a: Sequence[int], b: Sequence[int]) -> None:
    """Store the product A x B into C."""
    columns = [b[col:n * n:n] for col in range(n)]
    c[:n * n] = [
        _to_s32(sum(x * y for x, y in zip(row, column)))
        for row in _rows(n, a)
        for column in columns
    ]


def _bit_extract(value: int, start: int, width: int) -> int:
    return (value >> start) & ((1 << width) - 1)


def matrix_mul_matrix_bitextract(
    n: int, c: MutableSequence[int], a: Sequence[int], b: Sequence[int]
) -> None:
    """Multiply A by B, keeping for each term the product of two bit fields."""
    columns = [b[col:n * n:n] for col in range(n)]
    result = []
    for row in _rows(n, a):
        for column in columns:
            total = 0
            for x, y in zip(row, column):
                tmp = _to_s32(x * y)
                total += _bit_extract(tmp, 2, 4) * _bit_extract(tmp, 5, 7)
            result.append(_to_s32(total))
    c[:n * n] = result


def matrix_sum(n: int, c: Sequence[int], clipval: int) -> int:
    """Score C: +1 for each rising element, +10 and reset whenever the running sum passes clipval."""
    clipval = to_s16(clipval)
    tmp = 0
    prev = 0
    ret = 0
    for cur in c[:n * n]:
        tmp = _to_s32(tmp + cur)
        if tmp > clipval:
            ret += 10
            tmp = 0
        elif cur > prev:
            ret += 1
        prev = cur
    return to_s16(ret)


def matrix_test(
    n: int, c: MutableSequence[int], a: MutableSequence[int], b: Sequence[int], val: int
) -> int:
    """Run every matrix operation, CRC their sums, and restore A; return the CRC as signed 16-bit."""
    val = to_s16(val)
    crc = 0
    clipval = to_s16(0xF000 | val)
    matrix_add_const(n, a, val)
    matrix_mul_const(n, c, a, val)
    crc = crc16(matrix_sum(n, c, clipval), crc)
    matrix_mul_vect(n, c, a, b)
    crc = crc16(matrix_sum(n, c, clipval), crc)
    matrix_mul_matrix(n, c, a, b)
    crc = crc16(matrix_sum(n, c, clipval), crc)
    matrix_mul_matrix_bitextract(n, c, a, b)
    crc = crc16(matrix_sum(n, c, clipval), crc)
    matrix_add_const(n, a, -val)
    return to_s16(crc)


def bench_matrix(params: MatrixParams, seed: int, crc: int) -> int:
    """Run matrix_test with seed as the constant and fold its result into crc."""
    result = matrix_test(params.n, params.c, params.a, params.b, to_s16(seed))
    return crc16(result, crc)