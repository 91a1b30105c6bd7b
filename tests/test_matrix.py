import pytest

from coremark.matrix import (
    MatrixParams,
    bench_matrix,
    init_matrix,
    matrix_add_const,
    matrix_mul_const,
    matrix_mul_matrix,
    matrix_mul_matrix_bitextract,
    matrix_mul_vect,
    matrix_sum,
    matrix_test,
)


@pytest.mark.parametrize("blksize", [100, 400, 666, 2000])
def test_init_matrix_dimension_fits_block(blksize):
    params = init_matrix(blksize, 0x12345)
    n = params.n
    assert n * n * 8 < blksize <= (n + 1) * (n + 1) * 8
    assert len(params.a) == len(params.b) == len(params.c) == n * n


def test_init_matrix_value_ranges():
    params = init_matrix(666, 0x3415 | (0x3415 << 16))
    assert all(0 <= x <= 0xFF for x in params.a)
    assert all(-32768 <= x <= 32767 for x in params.b)
    assert all(x == 0 for x in params.c)


def test_init_matrix_zero_seed_same_as_one():
    assert init_matrix(666, 0) == init_matrix(666, 1)


def test_init_matrix_depends_on_seed():
    first = init_matrix(2000, 77)
    other = init_matrix(2000, 78)
    assert first.n == other.n
    assert first.b != other.b
    assert init_matrix(2000, 77).b == first.b
    assert init_matrix(2000, 77).a == first.a


def test_add_const_round_trip():
    a = [1, -5, 300, 32000]
    matrix_add_const(2, a, 1000)
    matrix_add_const(2, a, -1000)
    assert a == [1, -5, 300, 32000]


def test_add_const_wraps_16_bits():
    a = [32767]
    matrix_add_const(1, a, 1)
    assert a == [-32768]


def test_mul_const():
    a = [1, 2, 3, 4]
    c = [0] * 4
    matrix_mul_const(2, c, a, 3)
    assert c == [x * 3 for x in a]


def test_mul_vect_identity():
    identity = [1, 0, 0, 1]
    b = [7, 9, 0, 0]
    c = [0] * 4
    matrix_mul_vect(2, c, identity, b)
    assert c[:2] == [7, 9]


def test_mul_matrix_identity():
    a = [1, 2, 3, 4]
    identity = [1, 0, 0, 1]
    c = [0] * 4
    matrix_mul_matrix(2, c, a, identity)
    assert c == a
    matrix_mul_matrix(2, c, identity, a)
    assert c == a


def test_bitextract_small_products_are_zero():
    c = [5] * 4
    matrix_mul_matrix_bitextract(2, c, [1, 1, 1, 1], [1, 1, 1, 1])
    assert c == [0, 0, 0, 0]


def test_matrix_sum_rising_sequence():
    assert matrix_sum(2, [1, 2, 3, 0], 30000) == 3


def test_matrix_sum_clip_resets():
    assert matrix_sum(1, [100], 10) == 10


def test_matrix_test_restores_a():
    params = init_matrix(666, 0x3415 | (0x3415 << 16))
    original = list(params.a)
    result = matrix_test(params.n, params.c, params.a, params.b, 0x55)
    assert params.a == original
    assert -32768 <= result <= 32767


def test_bench_matrix_deterministic_and_restores():
    first = init_matrix(666, 0x10001)
    second = init_matrix(666, 0x10001)
    crc1 = bench_matrix(first, 0x22, 0)
    crc2 = bench_matrix(second, 0x22, 0)
    assert crc1 == crc2
    assert 0 <= crc1 <= 0xFFFF
    assert first.a == init_matrix(666, 0x10001).a


def test_bench_matrix_depends_on_crc_input():
    params = init_matrix(666, 5)
    results = {bench_matrix(params, 0x33, crc) for crc in (0, 1, 0x1234)}
    assert len(results) == 3


def test_matrix_params_defaults():
    params = MatrixParams(n=0)
    assert (params.a, params.b, params.c) == ([], [], [])