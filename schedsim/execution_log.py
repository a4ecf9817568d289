from __future__ import annotations

import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True, slots=True)
class ExecutionRecord:
    """One contiguous slice of CPU time given to a task."""

    task_name: str
    start_time: int
    end_time: int

    def __post_init__(self) -> None:
        if self.task_name is None:
            msg = "task_name must not be None"
            raise ValueError(msg)
        if self.start_time < 0 or self.end_time < 0:
            msg = "times must be non-negative"
            raise ValueError(msg)
        if self.end_time < self.start_time:
            msg = "end_time must be >= start_time"
            raise ValueError(msg)

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time

    def __str__(self) -> str:
        return f"{self.task_name}[{self.start_time}-{self.end_time}]"


class ExecutionLog:
    """Append-only, insertion-ordered record of execution slices."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: list[ExecutionRecord] = []

    def append(self, task_name: str, start_time: int, end_time: int) -> ExecutionRecord:
        record = ExecutionRecord(task_name, start_time, end_time)
        with self._lock:
            self._records.append(record)
        return record

    @property
    def records(self) -> tuple[ExecutionRecord, ...]:
        with self._lock:
            return tuple(self._records)

    def sequence(self) -> list[str]:
        """Task names in execution order, e.g. ``["P1", "P2", "P1"]``."""

        return [record.task_name for record in self.records]

    def format_sequence(self) -> str:
        """Compact trace such as ``P1[0-3] -> P2[3-5]``."""

        return " -> ".join(str(record) for record in self.records)

    def busy_time(self) -> int:
        return sum(record.duration for record in self.records)

    def time_by_task(self) -> dict[str, int]:
        totals: dict[str, int] = defaultdict(int)
        for record in self.records:
            totals[record.task_name] += record.duration
        return dict(totals)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __iter__(self) -> Iterator[ExecutionRecord]:
        return iter(self.records)
