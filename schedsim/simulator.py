from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from .clock import SimulationClock
from .context_switch import ContextSwitchManager
from .execution_log import ExecutionRecord
from .scheduler import Scheduler
from .task import Task

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SimulationResult:
    tasks: list[Task]
    records: tuple[ExecutionRecord, ...]
    total_time: int
    busy_time: int
    idle_time: int
    context_switches: int
    context_switch_time: int

    @property
    def utilization(self) -> float:
        if self.total_time == 0:
            return 0.0
        return self.busy_time / self.total_time


@dataclass(slots=True)
class SimulationConfig:
    context_switch_time: int = 0
    time_quantum: int = 2
    aging_interval: int = 5

    def __post_init__(self) -> None:
        if self.context_switch_time < 0:
            msg = "context_switch_time cannot be negative"
            raise ValueError(msg)
        if self.time_quantum <= 0:
            msg = "time_quantum must be strictly positive"
            raise ValueError(msg)
        if self.aging_interval <= 0:
            msg = "aging_interval must be strictly positive"
            raise ValueError(msg)


class SimulationEngine:
    """Owns a task list, a clock and a context-switch manager for one policy run.

    The engine keeps its own reference to the tasks, so metrics are read from
    the same objects the scheduler mutated.
    """

    def __init__(self, tasks: Sequence[Task], config: SimulationConfig | None = None) -> None:
        if tasks is None:
            msg = "tasks must not be None"
            raise ValueError(msg)
        self.config = config or SimulationConfig()
        self._tasks = list(tasks)
        self.clock = SimulationClock()
        self.context_switch = ContextSwitchManager(self.config.context_switch_time)

    def build(self, scheduler_type: type[Scheduler]) -> Scheduler:
        """Construct a scheduler wired to this engine's clock and switch manager."""

        return scheduler_type.from_config(self.clock, self.context_switch, self.config)

    def run(self, scheduler: Scheduler) -> SimulationResult:
        if scheduler is None:
            msg = "scheduler must not be None"
            raise ValueError(msg)
        if scheduler.clock is not self.clock or scheduler.context_switch is not self.context_switch:
            msg = "scheduler must share the engine's clock and context switch manager"
            raise ValueError(msg)

        self.clock.reset()
        self.context_switch.reset_counters()
        scheduler.log.clear()
        for task in self._tasks:
            task.reset()

        logger.info("Running %s over %d tasks", scheduler.name, len(self._tasks))
        scheduler.run(self._tasks)
        unfinished = [task.name for task in self._tasks if not task.is_finished()]
        if unfinished:
            logger.warning("%s left %d tasks unfinished: %s", scheduler.name, len(unfinished), ", ".join(unfinished))
        logger.info("%s finished at t=%d after %d context switches", scheduler.name, self.clock.now, self.context_switch.switch_count)

        return SimulationResult(
            tasks=list(self._tasks),
            records=scheduler.execution_log,
            total_time=self.clock.now,
            busy_time=self.clock.execution_time,
            idle_time=self.clock.idle_time,
            context_switches=self.context_switch.switch_count,
            context_switch_time=self.context_switch.total_delay,
        )

    @property
    def tasks(self) -> Iterable[Task]:
        return list(self._tasks)


def simulate(
    scheduler_type: type[Scheduler],
    tasks: Sequence[Task],
    config: Optional[SimulationConfig] = None,
) -> SimulationResult:
    """Run ``tasks`` under one policy with a freshly wired engine."""

    engine = SimulationEngine(tasks, config)
    return engine.run(engine.build(scheduler_type))
