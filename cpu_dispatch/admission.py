from __future__ import annotations

from typing import List

from .models import ProcessRecord
from .queues import OrderedQueue


def admit(pending: OrderedQueue, ready: OrderedQueue, tick: int) -> List[ProcessRecord]:
    """
    Move every record due at `tick` from the pending queue to the ready queue.

    `pending` must already be sorted by arrival, so records that arrive on the
    same tick are admitted in input order. Returns the admitted records (empty
    when nothing arrives). The clock is not touched.
    """
    admitted: List[ProcessRecord] = []
    while not pending.is_empty() and pending.peek_front().arrival_time <= tick:
        record = pending.pop_front()
        record.last_ready_time = tick
        ready.push(record)
        admitted.append(record)
    return admitted
