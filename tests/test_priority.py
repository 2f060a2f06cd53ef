import errno
import os
from types import SimpleNamespace

import pytest

from cyclicexec.priority import (
    Priority,
    PriorityPermissionError,
    get_priority,
    not_rt,
    rt_max,
    rt_min,
    scoped_priority,
    set_priority,
)

FIFO = 1
OTHER = 0


@pytest.fixture(autouse=True)
def fake_sched(monkeypatch):
    monkeypatch.setattr(os, "SCHED_FIFO", FIFO, raising=False)
    monkeypatch.setattr(os, "SCHED_OTHER", OTHER, raising=False)
    monkeypatch.setattr(os, "sched_get_priority_min", lambda policy: 1, raising=False)
    monkeypatch.setattr(os, "sched_get_priority_max", lambda policy: 99, raising=False)
    monkeypatch.setattr(
        os, "sched_param", lambda level: SimpleNamespace(sched_priority=level), raising=False
    )
    state = {"policy": OTHER, "level": 0}

    def getscheduler(pid):
        return state["policy"]

    def getparam(pid):
        return SimpleNamespace(sched_priority=state["level"])

    def setscheduler(pid, policy, param):
        state["policy"] = policy
        state["level"] = param.sched_priority

    monkeypatch.setattr(os, "sched_getscheduler", getscheduler, raising=False)
    monkeypatch.setattr(os, "sched_getparam", getparam, raising=False)
    monkeypatch.setattr(os, "sched_setscheduler", setscheduler, raising=False)
    return state


def test_rt_max_follows_fifo_range():
    assert rt_max().value == 99


def test_rt_bounds_ordering():
    assert not_rt() < rt_min() <= rt_max()
    assert not not_rt().is_rt()
    assert rt_min().is_rt()


def test_addition_saturates_at_rt_max():
    assert rt_max() + 1 == rt_max()
    assert rt_max().next() == rt_max()
    assert 5 + rt_max() == rt_max()


def test_subtraction_saturates_at_not_rt():
    assert not_rt() - 1 == not_rt()
    assert not_rt().prev() == not_rt()
    assert rt_min() - 10 == not_rt()


def test_distance_between_priorities():
    p = Priority(5)
    assert (p + 3) - p == 3
    assert p - (p + 3) == -3


def test_next_and_prev_are_inverse_inside_range():
    p = Priority(7)
    assert p.next().prev() == p
    assert p.next() > p
    assert p.prev() < p


def test_reverse_subtraction_lowers_priority():
    p = Priority(7)
    assert 2 - p == p - 2


def test_str_is_value():
    assert str(Priority(7)) == "7"


def test_out_of_range_rejected():
    with pytest.raises(ValueError):
        Priority(-1)
    with pytest.raises(ValueError):
        Priority(rt_max().value + 1)


def test_get_priority_not_fifo_is_not_rt(fake_sched):
    fake_sched["policy"] = OTHER
    assert get_priority() == not_rt()


def test_get_priority_fifo_maps_level(fake_sched):
    fake_sched["policy"] = FIFO
    fake_sched["level"] = 10
    assert get_priority() == Priority(10)


def test_set_then_get_round_trip(fake_sched):
    p = Priority(42)
    set_priority(p)
    assert fake_sched["policy"] == FIFO
    assert get_priority() == p


def test_set_not_rt_uses_other_policy(fake_sched):
    set_priority(Priority(3))
    set_priority(not_rt())
    assert fake_sched["policy"] == OTHER
    assert get_priority() == not_rt()


def test_set_priority_permission_error(monkeypatch):
    def refuse(pid, policy, param):
        raise PermissionError(errno.EPERM, "denied")

    monkeypatch.setattr(os, "sched_setscheduler", refuse, raising=False)
    with pytest.raises(PriorityPermissionError) as info:
        set_priority(rt_min())
    assert str(info.value) == os.strerror(errno.EPERM)


def test_scoped_priority_restores(fake_sched):
    with scoped_priority(Priority(20)) as previous:
        assert get_priority() == Priority(20)
        assert previous == not_rt()
    assert get_priority() == not_rt()


def test_scoped_priority_restores_on_error(fake_sched):
    set_priority(Priority(4))
    with pytest.raises(KeyError):
        with scoped_priority(Priority(30)):
            raise KeyError("boom")
    assert get_priority() == Priority(4)