import pytest

from coremark.state import (
    CoreState,
    bench_state,
    init_state,
    state_transition,
)

PATTERNS = {
    b"5012", b"1234", b"-874", b"+122",
    b"35.54400", b".1234500", b"-110.700", b"+0.64400",
    b"5.500e+3", b"-.123e-2", b"-87e+832", b"+0.6e-12",
    b"T0.3e-1F", b"-T.T++Tq", b"1T3.4e4z", b"34.0e-T^",
}


def _counts():
    return [0] * len(CoreState)


@pytest.mark.parametrize("size, seed", [(666, 0), (666, 0x3415), (400, 8), (50, -3)])
def test_init_state_layout(size, seed):
    block = init_state(size, seed)
    assert len(block) == size
    assert block[-1] == 0
    text = bytes(block).rstrip(b"\0")
    assert b"\0" not in text
    tokens = text.rstrip(b",").split(b",") if text else []
    assert all(token in PATTERNS for token in tokens)


def test_init_state_first_token_follows_seed():
    assert init_state(100, 0).startswith(b"5012,")


def test_init_state_tiny_block_is_empty():
    assert init_state(1, 0) == bytearray(1)


def test_init_state_rejects_empty_size():
    with pytest.raises(ValueError):
        init_state(0, 0)


@pytest.mark.parametrize(
    "token, expected",
    [
        (b"5012", CoreState.INT),
        (b"35.54400", CoreState.FLOAT),
        (b".1234500", CoreState.FLOAT),
        (b"5.500e+3", CoreState.SCIENTIFIC),
        (b"-.123e-2", CoreState.SCIENTIFIC),
        (b"-87e+832", CoreState.INVALID),
        (b"T0.3e-1F", CoreState.INVALID),
    ],
)
def test_state_transition_classifies_tokens(token, expected):
    state, _ = state_transition(token + b",", 0, _counts())
    assert state == expected


def test_state_transition_skips_past_comma():
    data = b"5012,1234"
    state, pos = state_transition(data, 0, _counts())
    assert state == CoreState.INT
    assert pos == len(b"5012,")
    state, pos = state_transition(data, pos, _counts())
    assert state == CoreState.INT
    assert pos == len(data)


def test_state_transition_stops_after_invalid_symbol():
    counts = _counts()
    state, pos = state_transition(b"T0.3e-1F,", 0, counts)
    assert state == CoreState.INVALID
    assert pos == 1
    assert counts[CoreState.START] == 1
    assert counts[CoreState.INVALID] == 1


def test_state_transition_at_terminator():
    counts = _counts()
    state, pos = state_transition(b"\0abc", 0, counts)
    assert state == CoreState.START
    assert pos == 0
    assert sum(counts) == 0


def test_state_transition_int_counts_only_start():
    counts = _counts()
    state_transition(b"5012", 0, counts)
    assert counts[CoreState.START] == 1
    assert sum(counts) == counts[CoreState.START]


def test_bench_state_restores_block_when_seeds_match():
    block = init_state(666, 0x3415)
    original = bytes(block)
    bench_state(block, 0x3415, 0x3415, 0x22, 0)
    assert bytes(block) == original


def test_bench_state_is_deterministic():
    first = bench_state(init_state(666, 0), 0, 0, 0x33, 0)
    second = bench_state(init_state(666, 0), 0, 0, 0x33, 0)
    assert first == second
    assert 0 <= first <= 0xFFFF


def test_bench_state_leaves_corruption_when_seeds_differ():
    block = init_state(666, 0)
    original = bytes(block)
    bench_state(block, 0x15, 0x00, 0x22, 0)
    assert bytes(block) != original
    assert block[0] == original[0] ^ 0x15


def test_bench_state_depends_on_starting_crc():
    a = bench_state(init_state(400, 8), 8, 8, 0x44, 0)
    b = bench_state(init_state(400, 8), 8, 8, 0x44, 0x1234)
    assert a != b


def test_bench_state_rejects_non_positive_step():
    with pytest.raises(ValueError):
        bench_state(init_state(100, 0), 0, 0, 0, 0)