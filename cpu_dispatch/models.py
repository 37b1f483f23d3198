from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Process:
    """
    A caller-supplied process definition. Never mutated by the engines.
    """

    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0

    @property
    def label(self) -> str:
        return f"P{self.pid}"


@dataclass
class ProcessRecord:
    """
    Mutable simulation state for one process during a single run.

    A record is owned by exactly one of: the pending queue, the ready queue,
    the CPU slot, or the result collector.
    """

    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0
    remaining_time: int = 0
    waiting_time: int = 0
    last_ready_time: int = 0  # tick of the latest move into the ready queue
    executed_since_dispatch: int = 0
    start_time: Optional[int] = None  # tick of the first dispatch
    dispatch_count: int = 0

    @classmethod
    def from_process(cls, process: Process) -> "ProcessRecord":
        return cls(
            pid=process.pid,
            arrival_time=process.arrival_time,
            burst_time=process.burst_time,
            priority=process.priority,
            remaining_time=process.burst_time,
            last_ready_time=process.arrival_time,
        )

    @property
    def label(self) -> str:
        return f"P{self.pid}"

    @property
    def response_time(self) -> Optional[int]:
        if self.start_time is None:
            return None
        return self.start_time - self.arrival_time


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: int
    start_time: int
    end_time: int

    @property
    def length(self) -> int:
        return self.end_time - self.start_time


@dataclass(frozen=True)
class ProcessMetrics:
    pid: int
    arrival_time: int
    burst_time: int
    start_time: int
    completion_time: int
    waiting_time: int
    turnaround_time: int
    response_time: int
    priority: int = 0

    @property
    def label(self) -> str:
        return f"P{self.pid}"


@dataclass(frozen=True)
class Averages:
    avg_turnaround: float
    avg_waiting: float
    avg_response: float


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    idle_time: int
    makespan: int
    throughput: float
    cpu_utilization: float


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[ProcessMetrics] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    averages: Optional[Averages] = None
    system: Optional[SystemMetrics] = None

    @property
    def completion_order(self) -> List[int]:
        return [p.pid for p in self.processes]

    def by_pid(self, pid: int) -> ProcessMetrics:
        for p in self.processes:
            if p.pid == pid:
                return p
        raise KeyError(pid)
