"""CPU-consuming waits used to simulate task workloads."""

import time


def busy_wait(millisec):
    """Spin on the CPU until ``millisec`` milliseconds have elapsed."""
    if millisec < 0:
        raise ValueError("millisec must not be negative")
    stop = time.perf_counter() + millisec / 1000.0
    while time.perf_counter() < stop:
        pass