"""A clock-driven cyclic executive running periodic tasks frame by frame."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable


class _State(Enum):
    IDLE = auto()
    RELEASED = auto()
    RUNNING = auto()


@dataclass
class _Task:
    function: Callable[[], None] | None = None
    wcet: int = 0
    thread: threading.Thread | None = None
    state: _State = _State.IDLE


class Executive:
    """Runs a static cyclic schedule of periodic tasks.

    Each frame lasts ``frame_length`` time units of ``unit_duration``
    milliseconds. At the start of a frame its tasks are released in order;
    a task still running when the frame ends is a deadline miss.
    """

    def __init__(self, num_tasks, frame_length, unit_duration=10):
        if num_tasks < 0:
            raise ValueError("num_tasks must not be negative")
        if frame_length <= 0 or unit_duration <= 0:
            raise ValueError("frame_length and unit_duration must be positive")
        self.frame_length = frame_length
        self.unit_duration = unit_duration
        self.verbose = True
        self._tasks = [_Task() for _ in range(num_tasks)]
        self._frames: list[tuple[int, ...]] = []
        self._cond = threading.Condition()
        self._stopping = False
        self._exec_thread: threading.Thread | None = None
        self._misses: list[tuple[int, int]] = []

    @property
    def num_tasks(self) -> int:
        return len(self._tasks)

    @property
    def frames(self) -> tuple[tuple[int, ...], ...]:
        return tuple(self._frames)

    @property
    def deadline_misses(self) -> list[tuple[int, int]]:
        """(frame index, task id) of every deadline missed so far."""
        with self._cond:
            return list(self._misses)

    def _check_id(self, task_id: int) -> None:
        if not 0 <= task_id < len(self._tasks):
            raise IndexError(f"task id {task_id} out of range")

    def set_periodic_task(self, task_id, periodic_task, wcet):
        """Bind ``periodic_task`` to ``task_id``; ``wcet`` is in time units."""
        self._check_id(task_id)
        task = self._tasks[task_id]
        task.function = periodic_task
        task.wcet = wcet

    def add_frame(self, frame):
        """Append a frame: the ids of the tasks it runs, in sequence."""
        ids = tuple(frame)
        for task_id in ids:
            self._check_id(task_id)
        self._frames.append(ids)

    def start(self):
        """Start the task threads and the executive thread."""
        if self._exec_thread is not None:
            raise RuntimeError("executive already started")
        for task_id, task in enumerate(self._tasks):
            if task.function is None:
                raise RuntimeError(f"no function set for task {task_id}")
        if not self._frames:
            raise RuntimeError("schedule has no frames")
        for task_id, task in enumerate(self._tasks):
            task.thread = threading.Thread(
                target=self._task_loop, args=(task,), name=f"task-{task_id}", daemon=True
            )
            task.thread.start()
        self._exec_thread = threading.Thread(target=self._run, name="executive", daemon=True)
        self._exec_thread.start()

    def wait(self):
        """Block until the executive and all task threads have finished."""
        if self._exec_thread is None:
            raise RuntimeError("executive not started")
        self._exec_thread.join()
        for task in self._tasks:
            if task.thread is not None:
                task.thread.join()

    def stop(self):
        """Ask the executive and its tasks to finish."""
        with self._cond:
            self._stopping = True
            self._cond.notify_all()

    def _task_loop(self, task: _Task) -> None:
        while True:
            with self._cond:
                self._cond.wait_for(lambda: task.state is _State.RELEASED or self._stopping)
                if self._stopping:
                    task.state = _State.IDLE
                    self._cond.notify_all()
                    return
                task.state = _State.RUNNING
            try:
                assert task.function is not None
                task.function()
            finally:
                with self._cond:
                    task.state = _State.IDLE
                    self._cond.notify_all()

    def _remaining(self, deadline: float) -> float:
        return max(0.0, deadline - time.monotonic())

    def _release_frame(self, frame_id: int, frame_end: float) -> list[int]:
        released = []
        for task_id in self._frames[frame_id]:
            if self._stopping or time.monotonic() >= frame_end:
                break
            task = self._tasks[task_id]
            if task.state is not _State.IDLE:
                continue
            task.state = _State.RELEASED
            released.append(task_id)
            self._cond.notify_all()
            self._cond.wait_for(
                lambda t=task: t.state is _State.IDLE or self._stopping,
                timeout=self._remaining(frame_end),
            )
        return released

    def _run(self) -> None:
        frame_span = self.frame_length * self.unit_duration / 1000.0
        frame_start = time.monotonic()
        frame_id = 0
        while True:
            frame_end = frame_start + frame_span
            if self.verbose:
                suffix = " ******" if frame_id == 0 else ""
                print(f"*** Frame n.{frame_id}{suffix}", flush=True)
            with self._cond:
                released = self._release_frame(frame_id, frame_end)
                self._cond.wait_for(lambda: self._stopping, timeout=self._remaining(frame_end))
                if self._stopping:
                    return
                for task_id in released:
                    if self._tasks[task_id].state is not _State.IDLE:
                        self._misses.append((frame_id, task_id))
                        if self.verbose:
                            print(f"*** Deadline miss: task n.{task_id} in frame n.{frame_id}", flush=True)
            frame_start = frame_end
            frame_id = (frame_id + 1) % len(self._frames)