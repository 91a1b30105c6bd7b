# coremark

A pure Python implementation of the CoreMark processor benchmark. It works
on three kinds of data:

- a linked list that is searched, reversed, sorted and restored,
- matrix arithmetic (add, scale, multiply by a vector and by a matrix),
- a small state machine that sorts text tokens into integers, floats,
  scientific numbers and invalid input.

The timed loop runs the list benchmark; while sorting the list it calls
the matrix and state machine workloads. Each result is folded into a
16-bit CRC. For the well-known seed and size combinations the CRCs are
checked against reference values, so a run tells you both how fast it went
and whether the work was done right.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Command line

```
coremark
```

With no arguments it runs the performance configuration: seeds `0, 0, 0x66`,
2000 bytes of data shared between the three algorithms, and an iteration
count chosen automatically so the timed run lasts around ten seconds. It
prints a short banner, then a report with the size, ticks, seconds,
iterations per second, iteration count, the seed CRC and the per-algorithm
CRCs, followed by whether correct operation was validated.

Seeds can be given on the command line, up to five values in this order:
seed1, seed2, seed3, iterations and an algorithm mask. Each is decimal or
lower-case `0x` hex, may start with `-`, and may end in `K` (times 1024) or
`M` (times 1024 * 1024). Missing values count as `0`.

```
coremark 0x3415 0x3415 0x66 2000
coremark --size 1200
```

`--size` sets the total data size shared by the algorithms. Without seed
arguments it also picks the seed defaults: 1200 gives the profile seeds
(`8, 8, 8`), 2000 the performance seeds, and any other size the validation
seeds (`0x3415, 0x3415, 0x66`).

Seeds `0 0 0` are treated as `0 0 0x66`, and `1 0 0` as
`0x3415 0x3415 0x66`. An iteration count of `0` is chosen automatically and
a mask of `0` selects all algorithms (1 = list, 2 = matrix, 4 = state).

## Library use

```python
from coremark.runner import run_benchmark, format_report

report = run_benchmark(
    seed1=0x3415, seed2=0x3415, seed3=0x66,
    iterations=10, execs=0, total_data_size=2000,
)
print(format_report(report))
```

The returned `BenchmarkReport` holds the `CoreResults` (seeds, size,
iterations and CRCs), the measured ticks, the seed CRC, which known run
was recognised (if any) and the error count. Its `total_seconds`,
`total_iterations` and `iterations_per_sec` properties give the derived
figures.

The building blocks can be used on their own:

```python
from coremark.common import crcu16, crc16, parseval
from coremark.state import init_state, bench_state
from coremark.matrix import init_matrix, bench_matrix
from coremark.listbench import list_init
from coremark.printf import sprintf

crc = crcu16(0x1234, 0)
size = parseval("2K")                # 2048
data = init_state(666, 0)            # state machine input as a bytearray
params = init_matrix(666, 1)         # MatrixParams with n, a, b and c
head = list_init(666, 0)             # head ListNode; iterating yields the nodes
text = sprintf("crc: 0x%04x\n", crc)
```

`coremark.platform` provides the seed defaults for each `RunMode`, a
microsecond `Timer` and `time_in_secs`; `coremark.cvt` provides `ecvt` and
`fcvt`, which return a digit string, the decimal point position and a sign
flag for a floating-point number.

## Valid results

The benchmark rules ask for a timed run of at least ten seconds. A shorter
run still prints its results, but reports an error saying so. Seed and size
combinations that are not among the known runs cannot be validated; the
report says so instead of checking the CRCs.

## Limits

The benchmark always runs in a single context: there is no option to run
several copies in parallel threads or processes. It runs only on the
current Python interpreter, and the "Compiler version" line of the report
names that interpreter's version.