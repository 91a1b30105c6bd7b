"""The CoreMark benchmark: list, matrix and state machine workloads with CRC checks."""

__version__ = "1.1.0"