import pytest

from cpu_dispatch.algorithms import (
    FCFSEngine,
    run_algorithm,
    schedule_fcfs,
    schedule_rr,
    schedule_sjf,
)
from cpu_dispatch.errors import InvalidInput, InvalidQuantum, SchedulingFault
from cpu_dispatch.models import Process, ScheduledSlice


def _procs():
    return [
        Process(0, arrival_time=0, burst_time=5, priority=2),
        Process(1, arrival_time=1, burst_time=3, priority=1),
        Process(2, arrival_time=2, burst_time=8, priority=3),
    ]


def test_fcfs_order():
    res = schedule_fcfs(_procs())
    assert res.completion_order == [0, 1, 2]
    assert [p.waiting_time for p in res.processes] == [0, 4, 6]
    assert [p.turnaround_time for p in res.processes] == [5, 7, 14]
    assert [p.response_time for p in res.processes] == [0, 4, 6]
    assert res.averages.avg_turnaround == pytest.approx(26 / 3)
    assert res.averages.avg_waiting == pytest.approx(10 / 3)
    assert round(res.averages.avg_turnaround, 2) == 8.67
    assert round(res.averages.avg_waiting, 2) == 3.33


def test_fcfs_timeline():
    res = schedule_fcfs(_procs())
    assert res.timeline == [
        ScheduledSlice(0, 0, 5),
        ScheduledSlice(1, 5, 8),
        ScheduledSlice(2, 8, 16),
    ]


def test_fcfs_simultaneous_arrivals_follow_input_order():
    procs = [
        Process(5, arrival_time=0, burst_time=3),
        Process(2, arrival_time=0, burst_time=1),
        Process(9, arrival_time=0, burst_time=2),
    ]
    res = schedule_fcfs(procs)
    assert res.completion_order == [5, 2, 9]
    assert [p.waiting_time for p in res.processes] == [0, 3, 4]


def test_fcfs_unsorted_input_is_served_by_arrival():
    procs = [
        Process(0, arrival_time=4, burst_time=1),
        Process(1, arrival_time=0, burst_time=2),
        Process(2, arrival_time=1, burst_time=1),
    ]
    res = schedule_fcfs(procs)
    assert res.completion_order == [1, 2, 0]


def test_sjf_order():
    res = schedule_sjf(_procs())
    # P0 runs alone from t=0; at t=5 P1 (3) beats P2 (8).
    assert res.completion_order == [0, 1, 2]
    assert [p.waiting_time for p in res.processes] == [0, 4, 6]


def test_sjf_picks_shortest_ready_job():
    procs = [
        Process(0, arrival_time=0, burst_time=6),
        Process(1, arrival_time=1, burst_time=8),
        Process(2, arrival_time=2, burst_time=3),
        Process(3, arrival_time=3, burst_time=2),
    ]
    res = schedule_sjf(procs)
    assert res.completion_order == [0, 3, 2, 1]
    assert [p.waiting_time for p in res.processes] == [0, 3, 6, 10]
    assert [p.completion_time for p in res.processes] == [6, 8, 11, 19]

    fcfs = schedule_fcfs(procs)
    assert fcfs.completion_order == [0, 1, 2, 3]
    assert res.averages.avg_waiting < fcfs.averages.avg_waiting


def test_sjf_is_non_preemptive():
    procs = [
        Process(0, arrival_time=0, burst_time=10),
        Process(1, arrival_time=1, burst_time=1),
    ]
    res = schedule_sjf(procs)
    assert res.completion_order == [0, 1]
    assert res.by_pid(1).waiting_time == 9


def test_sjf_ties_keep_admission_order():
    procs = [
        Process(0, arrival_time=0, burst_time=4),
        Process(2, arrival_time=1, burst_time=2),
        Process(1, arrival_time=1, burst_time=2),
        Process(3, arrival_time=2, burst_time=2),
    ]
    res = schedule_sjf(procs)
    assert res.completion_order == [0, 2, 1, 3]


def test_rr_quantum_2():
    res = schedule_rr(_procs(), quantum=2)
    assert res.completion_order == [1, 0, 2]
    assert res.by_pid(0).waiting_time == 5
    assert res.by_pid(1).waiting_time == 5
    assert res.by_pid(2).waiting_time == 6
    assert [p.turnaround_time for p in res.processes] == [8, 10, 14]
    assert [p.completion_time for p in res.processes] == [9, 10, 16]
    assert [p.response_time for p in res.processes] == [1, 0, 4]
    assert res.averages.avg_turnaround == pytest.approx(32 / 3)
    assert res.averages.avg_waiting == pytest.approx(16 / 3)
    assert res.averages.avg_response == pytest.approx(5 / 3)


def test_rr_timeline_has_one_slice_per_dispatch():
    res = schedule_rr(_procs(), quantum=2)
    assert [(s.pid, s.start_time, s.end_time) for s in res.timeline] == [
        (0, 0, 2),
        (1, 2, 4),
        (0, 4, 6),
        (2, 6, 8),
        (1, 8, 9),
        (0, 9, 10),
        (2, 10, 12),
        (2, 12, 14),
        (2, 14, 16),
    ]
    assert res.system.cpu_busy_time == sum(p.burst_time for p in _procs())


def test_rr_large_quantum_matches_fcfs():
    rr = schedule_rr(_procs(), quantum=100)
    fcfs = schedule_fcfs(_procs())
    assert rr.completion_order == fcfs.completion_order
    assert [p.waiting_time for p in rr.processes] == [p.waiting_time for p in fcfs.processes]


def test_idle_cpu_until_first_arrival():
    res = schedule_fcfs([Process(0, arrival_time=2, burst_time=3)])
    p = res.processes[0]
    assert (p.start_time, p.completion_time, p.waiting_time) == (2, 5, 0)
    assert res.system.makespan == 5
    assert res.system.idle_time == 2
    assert res.system.cpu_utilization == pytest.approx(0.6)


def test_idle_gap_between_processes():
    procs = [
        Process(0, arrival_time=0, burst_time=2),
        Process(1, arrival_time=5, burst_time=1),
    ]
    for name in ("fcfs", "sjf", "rr"):
        res = run_algorithm(name, procs, quantum=2)
        assert res.by_pid(1).start_time == 5
        assert res.by_pid(1).waiting_time == 0
        assert res.system.idle_time == 3


def test_input_processes_are_not_mutated():
    procs = _procs()
    first = schedule_rr(procs, quantum=2)
    second = schedule_rr(procs, quantum=2)
    assert procs == _procs()
    assert first.processes == second.processes


def test_engine_can_be_reused():
    engine = FCFSEngine()
    assert engine.run(_procs()).processes == engine.run(_procs()).processes


@pytest.mark.parametrize(
    "procs",
    [
        [],
        [Process(0, arrival_time=0, burst_time=0)],
        [Process(0, arrival_time=-1, burst_time=3)],
        [Process(0, arrival_time=0, burst_time=2), Process(0, arrival_time=1, burst_time=2)],
        [Process(0, arrival_time=0.5, burst_time=2)],
    ],
)
def test_invalid_input_fails_before_running(procs):
    for name in ("fcfs", "sjf", "rr"):
        with pytest.raises(InvalidInput):
            run_algorithm(name, procs, quantum=2)


@pytest.mark.parametrize("quantum", [None, 0, -3])
def test_rr_rejects_bad_quantum(quantum):
    with pytest.raises(InvalidQuantum):
        schedule_rr(_procs(), quantum=quantum)


def test_unknown_algorithm():
    with pytest.raises(ValueError):
        run_algorithm("mlfq", _procs())


def test_queue_misuse_aborts_with_state_dump():
    class DoublePopEngine(FCFSEngine):
        def select_next(self):
            self._ready.pop_front()
            return self._ready.pop_front()

    with pytest.raises(SchedulingFault) as excinfo:
        DoublePopEngine().run([Process(0, arrival_time=0, burst_time=1)])
    message = str(excinfo.value)
    assert "tick=0" in message
    assert "finished=0/1" in message
