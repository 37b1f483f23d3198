"""
Engine events and ready-made hooks.

Engines call an optional hook on every admission, dispatch, preemption and
termination. Nothing in the engines depends on whether a hook is attached.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, List

from .models import ProcessRecord


class EventKind(str, enum.Enum):
    ADMIT = "admit"
    DISPATCH = "dispatch"
    PREEMPT = "preempt"
    TERMINATE = "terminate"


@dataclass(frozen=True)
class EngineEvent:
    kind: EventKind
    tick: int
    pid: int
    remaining_time: int
    waiting_time: int

    @classmethod
    def of(cls, kind: EventKind, tick: int, record: ProcessRecord) -> "EngineEvent":
        return cls(
            kind=kind,
            tick=tick,
            pid=record.pid,
            remaining_time=record.remaining_time,
            waiting_time=record.waiting_time,
        )


EventHook = Callable[[EngineEvent], None]


def log_events(logger: logging.Logger, level: int = logging.DEBUG) -> EventHook:
    """Build a hook that writes each event to `logger`."""

    def hook(event: EngineEvent) -> None:
        logger.log(
            level,
            f"{event.kind.value:<9} t={event.tick:>3} P{event.pid} "
            f"remain={event.remaining_time} wait={event.waiting_time}",
        )

    return hook


class EventRecorder:
    """
    Hook that keeps every event it sees.

    Use it as a context manager to scope the buffer to one run; the events
    are dropped on exit, whether or not the run raised.
    """

    def __init__(self) -> None:
        self.events: List[EngineEvent] = []

    def __call__(self, event: EngineEvent) -> None:
        self.events.append(event)

    def __enter__(self) -> "EventRecorder":
        self.events = []
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.events = []

    def of_kind(self, kind: EventKind) -> List[EngineEvent]:
        return [e for e in self.events if e.kind is kind]

    def for_pid(self, pid: int) -> List[EngineEvent]:
        return [e for e in self.events if e.pid == pid]
