"""
schedsim package.

Simulates FCFS and Round-Robin CPU scheduling on a discrete time axis and
reports per-process timings and aggregate performance metrics.
"""

__all__ = ["cli"]
