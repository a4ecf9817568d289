from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from .clock import SimulationClock
from .context_switch import ContextSwitchManager
from .execution_log import ExecutionLog
from .ready_queue import ReadyQueue, highest_priority_key
from .scheduler import Scheduler
from .task import Task

if TYPE_CHECKING:
    from .simulator import SimulationConfig

logger = logging.getLogger(__name__)

MIN_PRIORITY = 1


class RoundRobinScheduler(Scheduler):
    """Round-Robin with a fixed, simulation-wide time quantum."""

    name = "RR"

    def __init__(
        self,
        clock: SimulationClock,
        context_switch: ContextSwitchManager,
        execution_log: Optional[ExecutionLog] = None,
        *,
        time_quantum: int,
    ) -> None:
        super().__init__(clock, context_switch, execution_log)
        if time_quantum <= 0:
            msg = "time_quantum must be strictly positive"
            raise ValueError(msg)
        self.time_quantum = time_quantum

    @classmethod
    def from_config(
        cls,
        clock: SimulationClock,
        context_switch: ContextSwitchManager,
        config: SimulationConfig,
    ) -> RoundRobinScheduler:
        return cls(clock, context_switch, time_quantum=config.time_quantum)

    def _run(self, pending: list[Task]) -> None:
        ready = ReadyQueue()
        slice_start: Optional[int] = None

        while ready or pending:
            ready.admit_arrived(pending, self.clock.now)
            if not ready:
                if not self._idle_until_next_arrival(pending):
                    break
                continue

            task = ready.poll()
            if slice_start is None:
                slice_start = self.clock.now
                logger.debug("%s: dispatch %s at t=%d", self.name, task.name, slice_start)
            self._execute(task, min(self.time_quantum, task.remaining_time))
            ready.admit_arrived(pending, self.clock.now)

            if task.is_finished():
                self._finish(task)
            else:
                ready.add_if_arrived(task, self.clock.now)

            # The sole ready task keeps the CPU: no switch, one merged slice.
            if ready.peek() is task:
                continue
            self._record(task, slice_start)
            slice_start = None
            if ready or pending:
                self._switch()


class ShortestRemainingTimeScheduler(Scheduler):
    """Preemptive SJF: the ready task with the least remaining work runs.

    Ticks one time unit at a time. Ties on remaining time go to the earliest
    arrival, then the lowest priority number.
    """

    name = "SJF"

    def _run(self, pending: list[Task]) -> None:
        ready = ReadyQueue()
        active: Optional[Task] = None
        previous: Optional[Task] = None
        slice_start = 0

        while ready or pending or active is not None:
            ready.admit_arrived(pending, self.clock.now)

            if active is None:
                if not ready:
                    if not self._idle_until_next_arrival(pending):
                        break
                    continue
                active = ready.poll_shortest_remaining()
                if previous is not None and active is not previous:
                    self._switch()
                    ready.admit_arrived(pending, self.clock.now)
                slice_start = self.clock.now
                logger.debug("%s: dispatch %s at t=%d", self.name, active.name, slice_start)
            else:
                candidate = ready.peek_shortest_remaining()
                if candidate is not None and candidate.remaining_time < active.remaining_time:
                    logger.debug(
                        "%s: %s (remaining %d) preempts %s (remaining %d) at t=%d",
                        self.name,
                        candidate.name,
                        candidate.remaining_time,
                        active.name,
                        active.remaining_time,
                        self.clock.now,
                    )
                    self._record(active, slice_start)
                    ready.add_if_arrived(active, self.clock.now)
                    active = ready.extract(candidate)
                    self._switch()
                    ready.admit_arrived(pending, self.clock.now)
                    slice_start = self.clock.now

            if active.remaining_time > 0:
                self._execute(active, 1)
            previous = active
            ready.admit_arrived(pending, self.clock.now)

            if active.is_finished():
                self._record(active, slice_start)
                self._finish(active)
                active = None


class AgingPriorityScheduler(Scheduler):
    """Preemptive priority scheduling where waiting tasks age towards priority 1.

    Lower numbers win; ties go to the earlier arrival, then the smaller name.
    A queued task above the minimum gains one level for every
    ``aging_interval`` ticks spent without service.
    """

    name = "Priority"

    def __init__(
        self,
        clock: SimulationClock,
        context_switch: ContextSwitchManager,
        execution_log: Optional[ExecutionLog] = None,
        *,
        aging_interval: int,
    ) -> None:
        super().__init__(clock, context_switch, execution_log)
        self.aging_interval = max(1, aging_interval)

    @classmethod
    def from_config(
        cls,
        clock: SimulationClock,
        context_switch: ContextSwitchManager,
        config: SimulationConfig,
    ) -> AgingPriorityScheduler:
        return cls(clock, context_switch, aging_interval=config.aging_interval)

    def _run(self, pending: list[Task]) -> None:
        ready = ReadyQueue()
        active: Optional[Task] = None
        executed = False
        slice_start = 0

        for task in pending:
            task.last_service_time = task.arrival_time

        while ready or pending or active is not None:
            ready.admit_arrived(pending, self.clock.now)
            if active is None and not ready:
                if not self._idle_until_next_arrival(pending):
                    break
                continue

            self._age(ready)
            while True:
                candidate = ready.peek_highest_priority()
                if candidate is None:
                    break
                if active is None:
                    active = self._activate(ready, candidate)
                    executed = False
                    slice_start = self.clock.now
                    continue
                if highest_priority_key(candidate) >= highest_priority_key(active):
                    break

                logger.debug(
                    "%s: %s (priority %d) preempts %s (priority %d) at t=%d",
                    self.name,
                    candidate.name,
                    candidate.priority,
                    active.name,
                    active.priority,
                    self.clock.now,
                )
                if self.clock.now > slice_start:
                    self._record(active, slice_start)
                if executed:
                    active.last_service_time = self.clock.now
                ready.add_if_arrived(active, self.clock.now)
                self._switch()
                ready.admit_arrived(pending, self.clock.now)
                self._age(ready)
                active = self._activate(ready, candidate)
                executed = False
                slice_start = self.clock.now

            if active.remaining_time > 0:
                self._execute(active, 1)
            executed = True
            ready.admit_arrived(pending, self.clock.now)
            self._age(ready)

            if active.is_finished():
                self._record(active, slice_start)
                active.last_service_time = self.clock.now
                self._finish(active)
                active = None
                if ready or pending:
                    self._switch()

    def _activate(self, ready: ReadyQueue, task: Task) -> Task:
        ready.extract(task)
        task.last_service_time = self.clock.now
        logger.debug("%s: dispatch %s at t=%d", self.name, task.name, self.clock.now)
        return task

    def _age(self, ready: ReadyQueue) -> None:
        now = self.clock.now
        for task in ready:
            if task.priority <= MIN_PRIORITY:
                continue
            increments = (now - task.last_service_time) // self.aging_interval
            if increments > 0:
                aged = max(MIN_PRIORITY, task.priority - increments)
                logger.debug("%s: %s aged from %d to %d at t=%d", self.name, task.name, task.priority, aged, now)
                task.priority = aged
                task.last_service_time = now
