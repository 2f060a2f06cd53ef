"""CPU affinity of threads, limited to the first 32 processors."""

from __future__ import annotations

import os

AFFINITY_SIZE = 32


def _pid(native_id: int | None) -> int:
    return 0 if native_id is None else native_id


def get_affinity(native_id=None) -> frozenset[int]:
    """CPUs the thread ``native_id`` (the calling thread by default) may run on."""
    getter = getattr(os, "sched_getaffinity", None)
    if getter is None:
        return frozenset(range(AFFINITY_SIZE))
    return frozenset(cpu for cpu in getter(_pid(native_id)) if cpu < AFFINITY_SIZE)


def set_affinity(cpus, native_id=None) -> None:
    """Restrict the thread ``native_id`` (the calling thread by default) to ``cpus``."""
    wanted = frozenset(cpus)
    invalid = sorted(cpu for cpu in wanted if not 0 <= cpu < AFFINITY_SIZE)
    if invalid:
        raise ValueError(f"CPU indices out of range: {invalid}")
    setter = getattr(os, "sched_setaffinity", None)
    if setter is None:
        return
    setter(_pid(native_id), wanted)