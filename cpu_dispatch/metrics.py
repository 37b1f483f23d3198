from __future__ import annotations

from typing import List

from .errors import NoData, SchedulingFault
from .models import Averages, ProcessMetrics, ProcessRecord, ScheduleResult, SystemMetrics


class ResultCollector:
    """
    Finished processes in completion order, plus running sums for averages.
    """

    def __init__(self) -> None:
        self._finished: List[ProcessMetrics] = []
        self._turnaround_sum = 0
        self._waiting_sum = 0
        self._response_sum = 0

    def record(self, record: ProcessRecord, completion_time: int) -> ProcessMetrics:
        """
        Snapshot a terminated record and fold it into the sums.
        """
        if record.remaining_time != 0 or record.start_time is None:
            raise SchedulingFault(f"P{record.pid} recorded before it finished: {record!r}")

        turnaround_time = completion_time - record.arrival_time
        response_time = record.start_time - record.arrival_time
        snapshot = ProcessMetrics(
            pid=record.pid,
            arrival_time=record.arrival_time,
            burst_time=record.burst_time,
            start_time=record.start_time,
            completion_time=completion_time,
            waiting_time=record.waiting_time,
            turnaround_time=turnaround_time,
            response_time=response_time,
            priority=record.priority,
        )
        self._finished.append(snapshot)
        self._turnaround_sum += turnaround_time
        self._waiting_sum += record.waiting_time
        self._response_sum += response_time
        return snapshot

    def count(self) -> int:
        return len(self._finished)

    def finished(self) -> List[ProcessMetrics]:
        return list(self._finished)

    def averages(self) -> Averages:
        n = self.count()
        if n == 0:
            raise NoData("no process has completed yet")
        return Averages(
            avg_turnaround=self._turnaround_sum / n,
            avg_waiting=self._waiting_sum / n,
            avg_response=self._response_sum / n,
        )


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Compute throughput and CPU utilization given populated per-process metrics
    and timeline slices.
    """
    if not result.processes:
        return SystemMetrics(cpu_busy_time=0, idle_time=0, makespan=0, throughput=0.0, cpu_utilization=0.0)

    makespan = max(p.completion_time for p in result.processes)
    cpu_busy_time = sum(slice_.length for slice_ in result.timeline)

    throughput = len(result.processes) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    system = SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        idle_time=makespan - cpu_busy_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
    )
    result.system = system
    return system
