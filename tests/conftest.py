from __future__ import annotations

from collections.abc import Callable, Sequence

import pytest

from schedsim import ContextSwitchManager, Scheduler, SimulationClock, Task

RunPolicy = Callable[..., tuple[Scheduler, dict[str, Task]]]


@pytest.fixture
def run_policy() -> RunPolicy:
    """Run a scheduler over ``(name, arrival, burst[, priority[, quantum]])`` rows."""

    def _run(
        scheduler_type: type[Scheduler],
        rows: Sequence[tuple[int | str, ...]],
        *,
        context_switch: int = 0,
        **options: int,
    ) -> tuple[Scheduler, dict[str, Task]]:
        tasks = [Task.create(*row) for row in rows]
        scheduler = scheduler_type(SimulationClock(), ContextSwitchManager(context_switch), **options)
        scheduler.run(tasks)
        return scheduler, {task.name: task for task in tasks}

    return _run


def slices(scheduler: Scheduler) -> list[tuple[str, int, int]]:
    return [(r.task_name, r.start_time, r.end_time) for r in scheduler.execution_log]


def order(scheduler: Scheduler) -> list[str]:
    return [r.task_name for r in scheduler.execution_log]
