"""Platform settings: seed sources, timing and the start-up banner."""

from __future__ import annotations

import enum
import sys
import time
from collections.abc import Callable
from dataclasses import dataclass, field

TICKS_PER_SEC = 1_000_000.0
ITERATIONS = 0
DEFAULT_NUM_CONTEXTS = 1
HAS_FLOAT = True
COMPILER_VERSION = f"Python {sys.version.split()[0]}"
COMPILER_FLAGS = "og"
MEM_LOCATION = "STACK"


class RunMode(enum.Enum):
    """Preset seed triples for the standard benchmark runs."""

    VALIDATION = (0x3415, 0x3415, 0x66)
    PERFORMANCE = (0x0, 0x0, 0x66)
    PROFILE = (0x8, 0x8, 0x8)

    @property
    def seeds(self) -> tuple[int, int, int]:
        return self.value


def run_mode_for_size(total_data_size: int) -> RunMode:
    """Choose the run mode implied by the total data size."""
    if total_data_size == 1200:
        return RunMode.PROFILE
    if total_data_size == 2000:
        return RunMode.PERFORMANCE
    return RunMode.VALIDATION


def get_seed_32(mode: RunMode, index: int) -> int:
    """Return seed number index (1-5) for the mode; unknown indices give 0."""
    if 1 <= index <= 3:
        return mode.seeds[index - 1]
    if index == 4:
        return ITERATIONS
    return 0


def _microseconds() -> int:
    return time.perf_counter_ns() // 1000


@dataclass
class Timer:
    """Measures the timed part of the benchmark in microsecond ticks."""

    clock: Callable[[], int] = _microseconds
    _start: int = field(default=0, init=False)
    _stop: int = field(default=0, init=False)

    def start(self) -> None:
        self._start = self.clock()

    def stop(self) -> None:
        self._stop = self.clock()

    def ticks(self) -> int:
        return self._stop - self._start


def time_in_secs(ticks: int) -> float:
    """Convert ticks to seconds."""
    return ticks / TICKS_PER_SEC


def welcome_banner() -> str:
    """Text shown before the benchmark starts."""
    return (
        "CoreMark Performance Benchmark\n\n"
        "CoreMark measures how quickly your processor can manage linked\n\n"
        "lists, compute matrix multiply, and execute state machine code.\n\n"
        "Iterations/Sec is the main benchmark result, higher numbers are better.\n\n"
        "Running.... (usually requires 12 to 20 seconds)\n\n"
    )