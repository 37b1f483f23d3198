from __future__ import annotations

import logging
from abc import ABC
from typing import Dict, List, Optional, Sequence, Type

from .admission import admit
from .errors import EmptyQueue, InvalidInput, InvalidQuantum, SchedulingFault
from .events import EngineEvent, EventHook, EventKind
from .metrics import ResultCollector, compute_system_metrics
from .models import Process, ProcessRecord, ScheduleResult, ScheduledSlice
from .queues import OrderedQueue, by_arrival, by_remaining, fifo

logger = logging.getLogger(__name__)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_processes(processes: Sequence[Process]) -> None:
    """
    Reject a batch that cannot be simulated. Runs before the first tick.
    """
    if not processes:
        raise InvalidInput("at least one process is required")

    seen: set[int] = set()
    for p in processes:
        if not (_is_int(p.arrival_time) and _is_int(p.burst_time)):
            raise InvalidInput(f"P{p.pid}: arrival and burst times must be integers")
        if p.arrival_time < 0:
            raise InvalidInput(f"P{p.pid}: arrival time must be >= 0 (got {p.arrival_time})")
        if p.burst_time <= 0:
            raise InvalidInput(f"P{p.pid}: burst time must be > 0 (got {p.burst_time})")
        if p.pid in seen:
            raise InvalidInput(f"duplicate process id {p.pid}")
        seen.add(p.pid)


def validate_quantum(quantum: Optional[int]) -> int:
    if quantum is None or not _is_int(quantum) or quantum <= 0:
        raise InvalidQuantum(f"Round Robin requires a positive integer quantum (got {quantum!r})")
    return quantum


class DispatchEngine(ABC):
    """
    Tick-driven single-CPU dispatcher shared by every policy.

    Each tick: admit arrivals, dispatch if the CPU is idle, advance the clock
    by one unit, then run the current process for that unit and check for
    completion. Subclasses change how the ready queue is ordered and what
    happens after a unit of execution.

    An engine may be reused; every call to run() starts from fresh records.
    """

    name: str = ""
    display_name: str = ""
    ready_order = staticmethod(fifo)

    def __init__(self, on_event: Optional[EventHook] = None) -> None:
        self.on_event = on_event
        self.quantum: Optional[int] = None

    def run(self, processes: Sequence[Process]) -> ScheduleResult:
        validate_processes(processes)
        self._reset(processes)

        try:
            while self._collector.count() < self._n:
                self.admit_arrivals()
                if self._running is None:
                    if not self._ready.is_empty():
                        self._dispatch(self.select_next())
                    elif self._pending.is_empty():
                        raise SchedulingFault("no runnable process left before all finished")
                self._tick += 1
                if self._running is not None:
                    self.advance_and_check()
        except (EmptyQueue, SchedulingFault) as exc:
            state = self._diagnostics()
            logger.error(f"{self.display_name} aborted: {exc} [{state}]")
            raise SchedulingFault(f"{exc} [{state}]") from exc

        result = ScheduleResult(
            algorithm=self.display_name,
            quantum=self.quantum,
            processes=self._collector.finished(),
            timeline=self._timeline,
            averages=self._collector.averages(),
        )
        compute_system_metrics(result)
        logger.info(f"{self.display_name}: {self._n} processes finished at t={self._tick}")
        return result

    # -- capabilities overridden per policy --------------------------------

    def admit_arrivals(self) -> List[ProcessRecord]:
        admitted = admit(self._pending, self._ready, self._tick)
        for record in admitted:
            self._emit(EventKind.ADMIT, record)
        return admitted

    def select_next(self) -> ProcessRecord:
        return self._ready.pop_front()

    def advance_and_check(self) -> bool:
        """
        Run the current process for the unit that just elapsed.

        Returns True if it finished on this tick.
        """
        record = self._running
        record.remaining_time -= 1
        record.executed_since_dispatch += 1
        self._timeline[-1].end_time = self._tick

        if record.remaining_time == 0:
            self._terminate(record)
            return True
        return False

    # -- transitions -------------------------------------------------------

    def _reset(self, processes: Sequence[Process]) -> None:
        self._n = len(processes)
        self._tick = 0
        self._running: Optional[ProcessRecord] = None
        self._timeline: List[ScheduledSlice] = []
        self._collector = ResultCollector()
        self._ready = OrderedQueue(self.ready_order, name="ready")
        self._pending = OrderedQueue(by_arrival, name="pending")
        for p in processes:
            self._pending.push(ProcessRecord.from_process(p))
        self._pending.reorder()

    def _dispatch(self, record: ProcessRecord) -> None:
        record.waiting_time += self._tick - record.last_ready_time
        record.executed_since_dispatch = 0
        record.dispatch_count += 1
        if record.start_time is None:
            record.start_time = self._tick
        self._running = record
        self._timeline.append(ScheduledSlice(pid=record.pid, start_time=self._tick, end_time=self._tick))
        self._emit(EventKind.DISPATCH, record)

    def _preempt(self, record: ProcessRecord) -> None:
        record.last_ready_time = self._tick
        self._running = None
        self._ready.push(record)
        self._emit(EventKind.PREEMPT, record)

    def _terminate(self, record: ProcessRecord) -> None:
        self._running = None
        self._collector.record(record, completion_time=self._tick)
        self._emit(EventKind.TERMINATE, record)

    def _emit(self, kind: EventKind, record: ProcessRecord) -> None:
        if self.on_event is not None:
            self.on_event(EngineEvent.of(kind, self._tick, record))

    def _diagnostics(self) -> str:
        return (
            f"tick={self._tick} running={self._running!r} "
            f"ready={self._ready.pids()} pending={self._pending.pids()} "
            f"finished={self._collector.count()}/{self._n}"
        )


class FCFSEngine(DispatchEngine):
    """
    First-Come First-Serve (non-preemptive). The ready queue is plain FIFO.
    """

    name = "fcfs"
    display_name = "FCFS"


class SJFEngine(DispatchEngine):
    """
    Shortest Job First (non-preemptive, greedy).

    The ready queue is re-sorted by remaining time whenever something is
    admitted. Only processes that have already arrived are candidates, and a
    dispatched process always runs to completion.
    """

    name = "sjf"
    display_name = "SJF (non-preemptive)"
    ready_order = staticmethod(by_remaining)

    def admit_arrivals(self) -> List[ProcessRecord]:
        admitted = super().admit_arrivals()
        if admitted:
            self._ready.reorder()
        return admitted


class RoundRobinEngine(DispatchEngine):
    """
    Round Robin with a fixed time quantum.

    A process that finishes on the tick its quantum runs out is terminated,
    not requeued: completion is checked first.
    """

    name = "rr"
    display_name = "Round Robin"

    def __init__(self, quantum: Optional[int], on_event: Optional[EventHook] = None) -> None:
        super().__init__(on_event=on_event)
        self.quantum = validate_quantum(quantum)

    def advance_and_check(self) -> bool:
        if super().advance_and_check():
            return True
        record = self._running
        if record.executed_since_dispatch == self.quantum:
            self._preempt(record)
        return False


ALGORITHMS: Dict[str, Type[DispatchEngine]] = {
    "fcfs": FCFSEngine,
    "sjf": SJFEngine,
    "rr": RoundRobinEngine,
}


def create_engine(name: str, quantum: Optional[int] = None, on_event: Optional[EventHook] = None) -> DispatchEngine:
    name = name.lower()
    cls = ALGORITHMS.get(name)
    if cls is None:
        raise InvalidInput(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")
    if cls is RoundRobinEngine:
        return cls(quantum, on_event=on_event)
    return cls(on_event=on_event)


def schedule_fcfs(processes: Sequence[Process], quantum: Optional[int] = None, on_event: Optional[EventHook] = None) -> ScheduleResult:
    return FCFSEngine(on_event=on_event).run(processes)


def schedule_sjf(processes: Sequence[Process], quantum: Optional[int] = None, on_event: Optional[EventHook] = None) -> ScheduleResult:
    return SJFEngine(on_event=on_event).run(processes)


def schedule_rr(processes: Sequence[Process], quantum: Optional[int] = None, on_event: Optional[EventHook] = None) -> ScheduleResult:
    return RoundRobinEngine(quantum, on_event=on_event).run(processes)


def run_algorithm(
    name: str,
    processes: Sequence[Process],
    quantum: Optional[int] = None,
    on_event: Optional[EventHook] = None,
) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. Quantum is only used by round-robin.
    """
    return create_engine(name, quantum=quantum, on_event=on_event).run(processes)
