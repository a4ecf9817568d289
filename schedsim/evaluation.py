from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from . import metrics
from .ag_scheduler import AGScheduler
from .scheduler import Scheduler
from .schedulers import AgingPriorityScheduler, RoundRobinScheduler, ShortestRemainingTimeScheduler
from .simulator import SimulationConfig, SimulationEngine, SimulationResult
from .task import Task, TaskSpec

POLICIES: dict[str, type[Scheduler]] = {
    RoundRobinScheduler.name: RoundRobinScheduler,
    ShortestRemainingTimeScheduler.name: ShortestRemainingTimeScheduler,
    AgingPriorityScheduler.name: AgingPriorityScheduler,
    AGScheduler.name: AGScheduler,
}


@dataclass(slots=True)
class EvaluationOutcome:
    name: str
    simulation: SimulationResult
    per_task: list[metrics.TaskMetrics]
    aggregate: metrics.AggregateMetrics

    @property
    def execution_order(self) -> list[str]:
        return [record.task_name for record in self.simulation.records]


def evaluate_scheduler(
    name: str,
    scheduler_type: type[Scheduler],
    specs: Sequence[TaskSpec],
    *,
    config: SimulationConfig | None = None,
) -> EvaluationOutcome:
    tasks = [Task.from_spec(spec) for spec in specs]
    engine = SimulationEngine(tasks, config)
    result = engine.run(engine.build(scheduler_type))
    per_task = metrics.build_task_metrics(result.tasks)
    aggregate = metrics.summarise(per_task, result.total_time)
    return EvaluationOutcome(name=name, simulation=result, per_task=per_task, aggregate=aggregate)


def evaluate_suite(
    policies: Sequence[tuple[str, type[Scheduler]]],
    specs: Sequence[TaskSpec],
    *,
    config: SimulationConfig | None = None,
) -> list[EvaluationOutcome]:
    return [evaluate_scheduler(name, scheduler_type, specs, config=config) for name, scheduler_type in policies]
