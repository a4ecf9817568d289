from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Optional, Sequence

from .clock import SimulationClock
from .context_switch import ContextSwitchManager
from .execution_log import ExecutionLog, ExecutionRecord
from .task import Task

if TYPE_CHECKING:
    from .simulator import SimulationConfig

logger = logging.getLogger(__name__)


class Scheduler(ABC):
    """Base class for a scheduling policy driving one run loop to completion."""

    name: ClassVar[str] = "scheduler"

    def __init__(
        self,
        clock: SimulationClock,
        context_switch: ContextSwitchManager,
        execution_log: Optional[ExecutionLog] = None,
    ) -> None:
        if clock is None:
            msg = "clock must not be None"
            raise ValueError(msg)
        if context_switch is None:
            msg = "context_switch must not be None"
            raise ValueError(msg)
        self.clock = clock
        self.context_switch = context_switch
        self.log = execution_log if execution_log is not None else ExecutionLog()

    @classmethod
    def from_config(
        cls,
        clock: SimulationClock,
        context_switch: ContextSwitchManager,
        config: SimulationConfig,
    ) -> Scheduler:
        """Build the scheduler from the shared simulation settings."""

        return cls(clock, context_switch)

    @property
    def execution_log(self) -> tuple[ExecutionRecord, ...]:
        return self.log.records

    def get_execution_log(self) -> tuple[ExecutionRecord, ...]:
        return self.execution_log

    def run(self, tasks: Sequence[Task]) -> None:
        """Schedule ``tasks`` to completion, mutating them in place."""

        if tasks is None:
            msg = "tasks must not be None"
            raise ValueError(msg)
        names = [task.name for task in tasks]
        if len(set(names)) != len(names):
            msg = "task names must be unique within a run"
            raise ValueError(msg)
        logger.debug("%s: scheduling %d tasks from t=%d", self.name, len(tasks), self.clock.now)
        self._run(list(tasks))
        logger.debug("%s: run complete at t=%d", self.name, self.clock.now)

    @abstractmethod
    def _run(self, pending: list[Task]) -> None:
        """Policy loop; ``pending`` holds the tasks that have not arrived yet."""

    def _execute(self, task: Task, units: int) -> int:
        task.run_for(units)
        self.clock.advance(units)
        return units

    def _record(self, task: Task, start_time: int) -> None:
        self.log.append(task.name, start_time, self.clock.now)

    def _finish(self, task: Task) -> None:
        task.finish(self.clock.now)
        logger.debug(
            "%s: %s finished at t=%d (waiting=%d, turnaround=%d)",
            self.name,
            task.name,
            task.completion_time,
            task.waiting_time,
            task.turnaround_time,
        )

    def _switch(self) -> None:
        delay = self.context_switch.apply(self.clock)
        logger.debug("%s: context switch of %d at t=%d", self.name, delay, self.clock.now)

    def _idle_until_next_arrival(self, pending: list[Task]) -> bool:
        """Fast-forward an idle CPU; returns False when nothing will ever arrive."""

        if not pending:
            return False
        next_arrival = min(task.arrival_time for task in pending)
        if next_arrival > self.clock.now:
            skipped = self.clock.idle_until(next_arrival)
            logger.debug("%s: CPU idle for %d until t=%d", self.name, skipped, next_arrival)
        return True
