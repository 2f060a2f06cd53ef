"""Real-time thread priorities on top of the FIFO scheduling policy."""

from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

_DEFAULT_FIFO_BOUNDS = (1, 99)


class PriorityPermissionError(RuntimeError):
    """Raised when the scheduling policy of a thread cannot be changed."""


def _fifo_policy() -> int:
    return getattr(os, "SCHED_FIFO", 1)


def _other_policy() -> int:
    return getattr(os, "SCHED_OTHER", 0)


def _fifo_bounds() -> tuple[int, int]:
    try:
        policy = os.SCHED_FIFO
        return os.sched_get_priority_min(policy), os.sched_get_priority_max(policy)
    except (AttributeError, OSError):
        return _DEFAULT_FIFO_BOUNDS


def _max_value() -> int:
    low, high = _fifo_bounds()
    return high - low + 1


@dataclass(frozen=True, order=True)
class Priority:
    """A thread priority: 0 is not real-time, 1..rt_max are FIFO levels."""

    value: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.value <= _max_value():
            raise ValueError(f"priority {self.value} out of range")

    def is_rt(self) -> bool:
        return self.value > 0

    def next(self) -> Priority:
        """The next higher priority, saturating at rt_max."""
        return self + 1

    def prev(self) -> Priority:
        """The next lower priority, saturating at not_rt."""
        return self - 1

    def __add__(self, n: int) -> Priority:
        if not isinstance(n, int) or isinstance(n, bool):
            return NotImplemented
        if n < 0:
            return self - (-n)
        return Priority(min(self.value + n, _max_value()))

    def __radd__(self, n: int) -> Priority:
        return self.__add__(n)

    def __sub__(self, other):
        """Priority minus Priority is their distance; minus an int lowers it."""
        if isinstance(other, Priority):
            return self.value - other.value
        if not isinstance(other, int) or isinstance(other, bool):
            return NotImplemented
        if other < 0:
            return self + (-other)
        return Priority(max(self.value - other, 0))

    def __rsub__(self, n: int) -> Priority:
        """``n - p`` lowers ``p`` by ``n``, the same as ``p - n``."""
        if not isinstance(n, int) or isinstance(n, bool):
            return NotImplemented
        return self - n

    def __str__(self) -> str:
        return str(self.value)


def rt_max() -> Priority:
    """Highest real-time priority available on this system."""
    return Priority(_max_value())


def rt_min() -> Priority:
    """Lowest real-time priority."""
    return Priority(1)


def not_rt() -> Priority:
    """The priority of a thread under the ordinary time-sharing policy."""
    return Priority(0)


def _pid(native_id: int | None) -> int:
    return 0 if native_id is None else native_id


def get_priority(native_id=None) -> Priority:
    """Priority of the thread ``native_id`` (the calling thread by default)."""
    pid = _pid(native_id)
    try:
        policy = os.sched_getscheduler(pid)
        if policy != _fifo_policy():
            return not_rt()
        param = os.sched_getparam(pid)
    except (AttributeError, OSError):
        return not_rt()
    low, _ = _fifo_bounds()
    return rt_min() + (param.sched_priority - low)


def set_priority(priority, native_id=None) -> None:
    """Give the thread ``native_id`` (the calling thread by default) ``priority``."""
    pid = _pid(native_id)
    try:
        if priority.is_rt():
            low, _ = _fifo_bounds()
            level = (priority - rt_min()) + low
            os.sched_setscheduler(pid, _fifo_policy(), os.sched_param(level))
        else:
            os.sched_setscheduler(pid, _other_policy(), os.sched_param(0))
    except AttributeError as exc:
        raise PriorityPermissionError(
            "thread scheduling control is not supported on this platform"
        ) from exc
    except OSError as exc:
        message = os.strerror(exc.errno) if exc.errno else str(exc)
        raise PriorityPermissionError(message) from exc


@contextmanager
def scoped_priority(priority) -> Iterator[Priority]:
    """Run the block at ``priority``, restoring the previous one afterwards."""
    previous = get_priority()
    set_priority(priority)
    try:
        yield previous
    finally:
        set_priority(previous)