"""
CPU dispatch simulator.

Tick-by-tick simulation of FCFS, SJF and Round Robin scheduling over a
fixed batch of processes, with per-process and average metrics.
"""

from .algorithms import (
    ALGORITHMS,
    DispatchEngine,
    FCFSEngine,
    RoundRobinEngine,
    SJFEngine,
    create_engine,
    run_algorithm,
    schedule_fcfs,
    schedule_rr,
    schedule_sjf,
)
from .errors import EmptyQueue, InvalidInput, InvalidQuantum, NoData, SchedulerError, SchedulingFault
from .models import Process, ScheduleResult

__all__ = [
    "ALGORITHMS",
    "DispatchEngine",
    "EmptyQueue",
    "FCFSEngine",
    "InvalidInput",
    "InvalidQuantum",
    "NoData",
    "Process",
    "RoundRobinEngine",
    "SJFEngine",
    "ScheduleResult",
    "SchedulerError",
    "SchedulingFault",
    "create_engine",
    "run_algorithm",
    "schedule_fcfs",
    "schedule_rr",
    "schedule_sjf",
]
