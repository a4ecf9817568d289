from __future__ import annotations

from collections.abc import Iterable, Sequence
from random import Random

from .task import TaskSpec

TaskRow = Sequence[int | str]


def periodic_workload(
    period: int,
    burst_time: int,
    count: int,
    *,
    priority: int = 1,
    quantum: int = 0,
) -> list[TaskSpec]:
    if period < 0:
        msg = "period cannot be negative"
        raise ValueError(msg)
    return [
        TaskSpec(name=f"P{i + 1}", arrival_time=i * period, burst_time=burst_time, priority=priority, quantum=quantum)
        for i in range(count)
    ]


def random_workload(
    count: int,
    *,
    seed: int | None = None,
    max_gap: int = 3,
    burst_range: tuple[int, int] = (1, 10),
    priority_range: tuple[int, int] = (1, 5),
    quantum_range: tuple[int, int] = (2, 6),
) -> list[TaskSpec]:
    """Seeded synthetic task set; the first task always arrives at 0."""

    if count < 0:
        msg = "count cannot be negative"
        raise ValueError(msg)
    if max_gap < 0:
        msg = "max_gap cannot be negative"
        raise ValueError(msg)
    for label, bounds in (("burst_range", burst_range), ("priority_range", priority_range), ("quantum_range", quantum_range)):
        _check_range(label, bounds)

    rng = Random(seed)
    tasks: list[TaskSpec] = []
    arrival = 0
    for i in range(count):
        if i:
            arrival += rng.randint(0, max_gap)
        tasks.append(
            TaskSpec(
                name=f"P{i + 1}",
                arrival_time=arrival,
                burst_time=rng.randint(*burst_range),
                priority=rng.randint(*priority_range),
                quantum=rng.randint(*quantum_range),
            ),
        )
    return tasks


def from_rows(rows: Iterable[TaskRow]) -> list[TaskSpec]:
    """Build specs from ``(name, arrival, burst[, priority[, quantum]])`` rows."""

    specs: list[TaskSpec] = []
    for row in rows:
        if not 3 <= len(row) <= 5:
            msg = f"expected 3 to 5 fields per row, got {len(row)}"
            raise ValueError(msg)
        name, *numbers = row
        specs.append(TaskSpec(str(name), *(int(value) for value in numbers)))
    return specs


def _check_range(label: str, bounds: tuple[int, int]) -> None:
    low, high = bounds
    if low < 0 or high < low:
        msg = f"{label} must satisfy 0 <= min <= max"
        raise ValueError(msg)
