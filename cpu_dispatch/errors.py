from __future__ import annotations


class SchedulerError(Exception):
    """Base class for every error raised by the simulator."""


class InvalidInput(SchedulerError, ValueError):
    """The process batch cannot be simulated (empty, bad times, duplicate pid)."""


class InvalidQuantum(SchedulerError, ValueError):
    """Round Robin was asked to run with a missing or non-positive quantum."""


class EmptyQueue(SchedulerError, IndexError):
    """pop_front/peek_front on an empty OrderedQueue."""


class SchedulingFault(SchedulerError, RuntimeError):
    """
    An engine broke one of its own loop invariants.

    The message carries a dump of the run state at the failing tick. This is
    a bug in the engine, never a property of the input, so it is not retried.
    """


class NoData(SchedulerError, LookupError):
    """Averages were requested before any process completed."""
