# cyclicexec

A clock-driven (cyclic) executive for periodic tasks. You describe a schedule
as a sequence of frames. Each frame holds the ids of the tasks to run in it.
The executive releases the tasks frame after frame and goes back to the first
frame after the last one, for as long as it runs.

The package also has small helpers for real-time work on Linux:

- a `Priority` value type that maps onto `SCHED_FIFO` priorities;
- functions to read and set a thread's priority and CPU affinity;
- a `busy_wait` that burns CPU time for a given number of milliseconds.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Building a schedule

```python
from cyclicexec.executive import Executive
from cyclicexec.busywait import busy_wait

def sample():
    print("sampling")
    busy_wait(5)

def control():
    print("control step")
    busy_wait(12)

# two tasks, frames of 4 time units, each unit lasting 10 ms
executive = Executive(2, 4, 10)
executive.set_periodic_task(0, sample, 1)
executive.set_periodic_task(1, control, 2)

executive.add_frame([0, 1])
executive.add_frame([0])

executive.start()
# ... later, from another thread or after a timeout:
executive.stop()
executive.wait()
```

`Executive(num_tasks, frame_length, unit_duration=10)`

- `frame_length` is given in time units.
- `unit_duration` is given in milliseconds.
- Both must be positive, and `num_tasks` must not be negative. Otherwise a `ValueError` is raised.

`set_periodic_task(task_id, periodic_task, wcet)` binds a function to a task id in the range `0 .. num_tasks - 1`. `wcet`, the worst-case execution time in time units, is stored with the task.

`add_frame(frame)` appends a frame, given as a list of task ids in the order they run. An id out of range raises `IndexError`.

`start()` starts one thread per task and one executive thread. It raises `RuntimeError` in these cases:

- a task has no function;
- there are no frames;
- the executive was already started.

At the start of each frame the executive releases that frame's tasks one after another. Each task runs on its own thread, and the executive waits for it to finish before releasing the next. A task that is still running when its frame ends counts as a deadline miss. Misses are recorded as `(frame index, task id)` pairs in `deadline_misses`.

While `verbose` is true, which is the default, the executive prints these lines to standard output:

- `*** Frame n.<i>` at the start of every frame, with a trailing ` ******` on frame 0;
- a line for every deadline miss.

`stop()` asks the executive and its task threads to finish. `wait()` blocks until they have.

The read-only properties `num_tasks` and `frames` give back the schedule.

## Priorities and affinity

```python
from cyclicexec.priority import Priority, rt_max, rt_min, not_rt, scoped_priority

p = rt_min() + 3
print(p.is_rt(), p - rt_min())    # True 3
print(not_rt().is_rt())           # False

with scoped_priority(rt_max()) as previous:
    ...  # runs at the highest real-time priority; `previous` is restored on exit
```

`Priority(0)` is the ordinary time-sharing priority (`not_rt()`). Values `1 .. rt_max()` are real-time levels. A value outside that range raises `ValueError`.

Arithmetic on priorities saturates:

- adding past `rt_max()` stays at `rt_max()`;
- subtracting below zero gives `not_rt()`;
- `next()` and `prev()` step by one level in the same way.

The difference of two priorities is a plain integer. Priorities compare by value.

`get_priority(native_id=None)` and `set_priority(priority, native_id=None)` read and set a thread's priority. They act on the calling thread by default. Setting a real-time priority usually needs privileges. If the change is refused, or the platform has no scheduling control, `PriorityPermissionError` is raised.

`cyclicexec.affinity` works with the first 32 CPUs (`AFFINITY_SIZE`), represented as a set of CPU indices:

- `get_affinity(native_id=None)` returns the set of CPUs a thread may run on, limited to those 32. Where the platform cannot report affinity, it returns all 32.
- `set_affinity(cpus, native_id=None)` restricts a thread to the given CPUs. It raises `ValueError` for an index outside `0 .. 31`, and does nothing where the platform has no affinity control.

## Sample applications

Two sample schedules come with the package:

- `build_application_1()`: five tasks, frames of 4 units of 100 ms.
- `build_application_2()`: six tasks, frames of 5 units of 10 ms.

Both are in `cyclicexec.applications`. Each returns a ready `Executive`. An optional `out` stream receives the tasks' lines instead of standard output.

To run one from the command line:

```
cyclicexec 1
cyclicexec 2 --duration 5
```

Each run prints a line at the start of every frame and a line `Sono il task n.<i>` for every task it runs. Without `--duration` it runs until interrupted with Ctrl-C. With `--duration` it stops after that many seconds.

## What it does not do

The executive does not set priorities or CPU affinity on its own threads. Use the helpers above for that. The stored `wcet` values are not checked against the frame length or the schedule. Deadlines are only observed at frame ends, and a late task is not stopped.