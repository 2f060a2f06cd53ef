"""The two sample schedules and a command to run them."""

from __future__ import annotations

import argparse
import itertools
import sys
import time

from .busywait import busy_wait
from .executive import Executive


def _task(out, task_id, millisec):
    def run():
        stream = sys.stdout if out is None else out
        stream.write(f"Sono il task n.{task_id}\n")
        stream.flush()
        busy_wait(millisec)

    return run


def build_application_1(out=None) -> Executive:
    """Five tasks, frames of 4 units of 100 ms."""
    executive = Executive(5, 4, 100)
    for task_id, (millisec, wcet) in enumerate([(90, 1), (185, 2), (88, 1), (270, 3), (80, 1)]):
        executive.set_periodic_task(task_id, _task(out, task_id, millisec), wcet)
    for frame in ([0, 1, 2], [0, 3], [0, 1], [0, 1], [0, 1, 4]):
        executive.add_frame(frame)
    return executive


def build_application_2(out=None) -> Executive:
    """Six tasks, frames of 5 units of 10 ms; task 4 runs longer every fifth time."""
    executive = Executive(6, 5)
    workloads = [(15, 2), (6, 1), (18, 2), (17, 2), None, (8, 1)]
    for task_id, workload in enumerate(workloads):
        if workload is not None:
            millisec, wcet = workload
            executive.set_periodic_task(task_id, _task(out, task_id, millisec), wcet)

    counter = itertools.count(1)

    def task4():
        stream = sys.stdout if out is None else out
        stream.write("Sono il task n.4\n")
        stream.flush()
        busy_wait(31 if next(counter) % 5 == 0 else 28)

    executive.set_periodic_task(4, task4, 3)
    for frame in ([0, 1, 2], [3, 4], [0, 3], [1, 4, 5], [0, 2], [1, 5, 2]):
        executive.add_frame(frame)
    return executive


def main(argv=None) -> int:
    """Run one of the sample schedules until interrupted or for a set time."""
    parser = argparse.ArgumentParser(prog="cyclicexec", description="Run a sample cyclic schedule.")
    parser.add_argument("application", choices=["1", "2"], help="which schedule to run")
    parser.add_argument("--duration", type=float, default=None, help="seconds to run (default: forever)")
    args = parser.parse_args(argv)

    builders = {"1": build_application_1, "2": build_application_2}
    executive = builders[args.application]()
    executive.start()
    try:
        if args.duration is None:
            executive.wait()
        else:
            time.sleep(args.duration)
    except KeyboardInterrupt:
        pass
    finally:
        executive.stop()
        executive.wait()
    return 0


if __name__ == "__main__":
    sys.exit(main())