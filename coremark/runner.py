"""Benchmark driver: seed the inputs, run the timed loop, validate and report."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from dataclasses import dataclass

from coremark.common import (
    TOTAL_DATA_SIZE,
    Algorithm,
    crc16,
    crcu16,
    parseval,
    to_s16,
)
from coremark.listbench import CoreResults, bench_list, list_init
from coremark.matrix import init_matrix
from coremark.platform import (
    COMPILER_FLAGS,
    COMPILER_VERSION,
    DEFAULT_NUM_CONTEXTS,
    MEM_LOCATION,
    Timer,
    get_seed_32,
    run_mode_for_size,
    time_in_secs,
    welcome_banner,
)
from coremark.printf import sprintf
from coremark.state import init_state

_LIST_KNOWN_CRC = (0xD4B0, 0x3340, 0x6A79, 0xE714, 0xE3C1)
_MATRIX_KNOWN_CRC = (0xBE52, 0x1199, 0x5608, 0x1FD7, 0x0747)
_STATE_KNOWN_CRC = (0x5E47, 0x39BF, 0xE5A4, 0x8E3A, 0x8D84)

_KNOWN_RUNS = {
    0x8A02: (0, "6k performance run parameters for coremark."),
    0x7B05: (1, "6k validation run parameters for coremark."),
    0x4EAF: (2, "Profile generation run parameters for coremark."),
    0xE9F5: (3, "2K performance run parameters for coremark."),
    0x18F2: (4, "2K validation run parameters for coremark."),
}
_DESCRIPTIONS = {known_id: text for known_id, text in _KNOWN_RUNS.values()}

_MIN_VALID_SECONDS = 10
_MAX_SEED_ARGS = 5


@dataclass
class BenchmarkReport:
    """Outcome of one benchmark run."""

    results: CoreResults
    total_ticks: int
    seedcrc: int
    known_id: int | None
    total_errors: int
    num_contexts: int = DEFAULT_NUM_CONTEXTS

    @property
    def total_seconds(self) -> float:
        return time_in_secs(self.total_ticks)

    @property
    def total_iterations(self) -> int:
        return self.num_contexts * self.results.iterations

    @property
    def iterations_per_sec(self) -> float:
        seconds = self.total_seconds
        if seconds <= 0:
            raise ZeroDivisionError("no time was measured")
        return self.total_iterations / seconds


def iterate(res: CoreResults) -> None:
    """Run the list benchmark res.iterations times, accumulating the CRCs in res."""
    res.crc = 0
    res.crclist = 0
    res.crcmatrix = 0
    res.crcstate = 0
    for i in range(res.iterations):
        res.crc = crcu16(bench_list(res, 1), res.crc)
        res.crc = crcu16(bench_list(res, -1), res.crc)
        if i == 0:
            res.crclist = res.crc


def _crc_mismatches(report: BenchmarkReport) -> list[str]:
    if report.known_id is None:
        return []
    res = report.results
    known = report.known_id
    checks = (
        (Algorithm.LIST, "list", res.crclist, _LIST_KNOWN_CRC[known]),
        (Algorithm.MATRIX, "matrix", res.crcmatrix, _MATRIX_KNOWN_CRC[known]),
        (Algorithm.STATE, "state", res.crcstate, _STATE_KNOWN_CRC[known]),
    )
    return [
        sprintf("[%u]ERROR! %s crc 0x%04x - should be 0x%04x\n", 0, name, actual, expected)
        for algorithm, name, actual, expected in checks
        if algorithm & res.execs and actual != expected
    ]


def _auto_iterations(res: CoreResults, timer: Timer) -> int:
    """Find an iteration count that runs for roughly ten seconds."""
    res.iterations = 1
    seconds = 0.0
    while seconds < 1:
        res.iterations *= 10
        timer.start()
        iterate(res)
        timer.stop()
        seconds = time_in_secs(timer.ticks())
    divisor = int(seconds) or 1
    return res.iterations * (1 + 10 // divisor)


def run_benchmark(
    seed1: int = 0,
    seed2: int = 0,
    seed3: int = 0x66,
    iterations: int = 0,
    execs: int = 0,
    total_data_size: int = TOTAL_DATA_SIZE,
) -> BenchmarkReport:
    """Initialise the selected algorithms, run and time them, and validate the CRCs."""
    if iterations < 0:
        raise ValueError("iterations must not be negative")
    seed1, seed2, seed3 = to_s16(seed1), to_s16(seed2), to_s16(seed3)
    if execs == 0:
        execs = Algorithm.ALL
    selected = Algorithm(execs & Algorithm.ALL)
    if (seed1, seed2, seed3) == (0, 0, 0):
        seed3 = 0x66
    if (seed1, seed2, seed3) == (1, 0, 0):
        seed1, seed2, seed3 = 0x3415, 0x3415, 0x66

    num_algorithms = sum(
        1 for algorithm in (Algorithm.LIST, Algorithm.MATRIX, Algorithm.STATE)
        if algorithm & selected
    )
    if num_algorithms == 0:
        raise ValueError("no algorithm selected")
    size = total_data_size // num_algorithms

    res = CoreResults(
        seed1=seed1,
        seed2=seed2,
        seed3=seed3,
        size=size,
        iterations=iterations,
        execs=selected,
    )
    if selected & Algorithm.LIST:
        res.list_head = list_init(size, seed1)
    if selected & Algorithm.MATRIX:
        res.matrix = init_matrix(size, seed1 | (seed2 << 16))
    if selected & Algorithm.STATE:
        res.state_data = init_state(size, seed1)

    timer = Timer()
    if res.iterations == 0:
        res.iterations = _auto_iterations(res, timer)
    timer.start()
    iterate(res)
    timer.stop()
    total_ticks = timer.ticks()

    seedcrc = 0
    for value in (seed1, seed2, seed3, size):
        seedcrc = crc16(value, seedcrc)

    known = _KNOWN_RUNS.get(seedcrc)
    known_id = known[0] if known else None
    report = BenchmarkReport(
        results=res,
        total_ticks=total_ticks,
        seedcrc=seedcrc,
        known_id=known_id,
        total_errors=0 if known else -1,
    )
    res.err = len(_crc_mismatches(report))
    report.total_errors += res.err
    if report.total_seconds < _MIN_VALID_SECONDS:
        report.total_errors += 1
    return report


def format_report(report: BenchmarkReport) -> str:
    """Render the report in the benchmark's standard text layout."""
    res = report.results
    seconds = report.total_seconds
    lines: list[str] = []
    if report.known_id is not None:
        lines.append(_DESCRIPTIONS[report.known_id] + "\n")
    lines.extend(_crc_mismatches(report))
    lines.append(sprintf("CoreMark Size    : %lu\n", res.size))
    lines.append(sprintf("Total ticks      : %lu\n", report.total_ticks))
    lines.append(sprintf("Total time (secs): %f\n", seconds))
    if seconds > 0:
        lines.append(sprintf("Iterations/Sec   : %f\n", report.iterations_per_sec))
    if seconds < _MIN_VALID_SECONDS:
        lines.append("ERROR! Must execute for at least 10 secs for a valid result!\n")
    lines.append(sprintf("Iterations       : %lu\n", report.total_iterations))
    lines.append(sprintf("Compiler version : %s\n", COMPILER_VERSION))
    lines.append(sprintf("Compiler flags   : %s\n", COMPILER_FLAGS))
    lines.append(sprintf("Memory location  : %s\n", MEM_LOCATION))
    lines.append(sprintf("seedcrc          : 0x%04x\n", report.seedcrc))
    if res.execs & Algorithm.LIST:
        lines.append(sprintf("[%d]crclist       : 0x%04x\n", 0, res.crclist))
    if res.execs & Algorithm.MATRIX:
        lines.append(sprintf("[%d]crcmatrix     : 0x%04x\n", 0, res.crcmatrix))
    if res.execs & Algorithm.STATE:
        lines.append(sprintf("[%d]crcstate      : 0x%04x\n", 0, res.crcstate))
    lines.append(sprintf("[%d]crcfinal      : 0x%04x\n", 0, res.crc))
    if report.total_errors == 0:
        lines.append(
            "Correct operation validated. See README.md for run and reporting rules.\n"
        )
        if report.known_id == 3 and seconds > 0:
            lines.append(
                sprintf(
                    "CoreMark 1.0 : %f / %s %s / %s\n",
                    report.iterations_per_sec,
                    COMPILER_VERSION,
                    COMPILER_FLAGS,
                    MEM_LOCATION,
                )
            )
    if report.total_errors > 0:
        lines.append("Errors detected\n")
    if report.total_errors < 0:
        lines.append(
            "Cannot validate operation for these seed values, "
            "please compare with results on a known platform.\n"
        )
    return "".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the benchmark from the command line and print its report."""
    parser = argparse.ArgumentParser(
        prog="coremark",
        description="Run the CoreMark benchmark.",
    )
    parser.add_argument(
        "seeds",
        nargs="*",
        type=parseval,
        metavar="SEED",
        help="seed1 seed2 seed3 iterations execs (decimal or 0x hex, K/M suffix)",
    )
    parser.add_argument(
        "--size",
        type=int,
        default=TOTAL_DATA_SIZE,
        help="total data size shared by the algorithms",
    )
    args = parser.parse_args(argv)
    if len(args.seeds) > _MAX_SEED_ARGS:
        parser.error(f"at most {_MAX_SEED_ARGS} seed values are accepted")

    if args.seeds:
        values = list(args.seeds) + [0] * (_MAX_SEED_ARGS - len(args.seeds))
    else:
        mode = run_mode_for_size(args.size)
        values = [get_seed_32(mode, index) for index in range(1, _MAX_SEED_ARGS + 1)]

    sys.stdout.write(welcome_banner())
    try:
        report = run_benchmark(*values, total_data_size=args.size)
    except ValueError as exc:
        parser.error(str(exc))
    sys.stdout.write(format_report(report))
    sys.stdout.write("\n\nProgram Ended\n")
    return 0