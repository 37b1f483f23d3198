from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import List

from .errors import InvalidInput
from .models import Process


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise InvalidInput(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise InvalidInput(f"{path}: not valid JSON ({exc})") from exc

    if not isinstance(raw, list):
        raise InvalidInput("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row))
    return processes


def _parse_pid(value) -> int:
    # Accept both 3 and "P3".
    text = str(value).strip()
    if text[:1] in {"P", "p"}:
        text = text[1:]
    return int(text)


def _process_from_mapping(mapping) -> Process:
    try:
        pid = _parse_pid(mapping["pid"])
        arrival_time = int(mapping["arrival_time"])
        burst_time = int(mapping["burst_time"])
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidInput(f"Invalid process entry: {mapping!r}") from exc

    priority_val = mapping.get("priority")
    try:
        priority = int(priority_val) if priority_val not in (None, "") else 0
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"Invalid priority in entry: {mapping!r}") from exc

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )
