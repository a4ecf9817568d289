from __future__ import annotations

from dataclasses import dataclass
from statistics import mean
from typing import Iterable, Sequence

from .task import Task


@dataclass(slots=True)
class TaskMetrics:
    name: str
    arrival_time: int
    burst_time: int
    priority: int
    completion_time: int
    waiting_time: int
    turnaround_time: int
    quantum_history: tuple[int, ...]


@dataclass(slots=True)
class AggregateMetrics:
    count: int
    average_waiting_time: float
    average_turnaround_time: float
    p50_wait: float
    p90_wait: float
    max_wait: int
    p50_turnaround: float
    p90_turnaround: float
    makespan: int
    throughput: float


def build_task_metrics(tasks: Iterable[Task]) -> list[TaskMetrics]:
    """Per-task rows, ordered by arrival then name; unfinished tasks are skipped."""

    metrics: list[TaskMetrics] = []
    for task in sorted(tasks, key=lambda t: (t.arrival_time, t.name)):
        if task.completion_time is None or task.waiting_time is None or task.turnaround_time is None:
            continue
        metrics.append(
            TaskMetrics(
                name=task.name,
                arrival_time=task.arrival_time,
                burst_time=task.burst_time,
                priority=task.spec.priority,
                completion_time=task.completion_time,
                waiting_time=task.waiting_time,
                turnaround_time=task.turnaround_time,
                quantum_history=tuple(task.quantum_history),
            ),
        )
    return metrics


def summarise(metrics: Sequence[TaskMetrics], total_time: int) -> AggregateMetrics:
    if not metrics:
        return AggregateMetrics(
            count=0,
            average_waiting_time=0.0,
            average_turnaround_time=0.0,
            p50_wait=0.0,
            p90_wait=0.0,
            max_wait=0,
            p50_turnaround=0.0,
            p90_turnaround=0.0,
            makespan=total_time,
            throughput=0.0,
        )
    wait_values = [m.waiting_time for m in metrics]
    turnaround_values = [m.turnaround_time for m in metrics]
    return AggregateMetrics(
        count=len(metrics),
        average_waiting_time=mean(wait_values),
        average_turnaround_time=mean(turnaround_values),
        p50_wait=_percentile(wait_values, 50),
        p90_wait=_percentile(wait_values, 90),
        max_wait=max(wait_values),
        p50_turnaround=_percentile(turnaround_values, 50),
        p90_turnaround=_percentile(turnaround_values, 90),
        makespan=total_time,
        throughput=len(metrics) / total_time if total_time else 0.0,
    )


def _percentile(values: Sequence[int], percentile: float) -> float:
    if not values:
        return 0.0
    sorted_values = sorted(values)
    k = (len(sorted_values) - 1) * percentile / 100
    f = int(k)
    c = min(f + 1, len(sorted_values) - 1)
    if f == c:
        return float(sorted_values[f])
    d0 = sorted_values[f] * (c - k)
    d1 = sorted_values[c] * (k - f)
    return d0 + d1
