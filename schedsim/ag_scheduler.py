from __future__ import annotations

import logging
import math
from typing import Optional

from .ready_queue import ReadyQueue
from .scheduler import Scheduler
from .task import Task

logger = logging.getLogger(__name__)

EXHAUSTED_QUANTUM_BONUS = 2


class AGScheduler(Scheduler):
    """
    Adaptive hybrid scheduler with per-task, self-adjusting quanta.

    Each dispatch splits the task's quantum Q into three phases:

        1. FCFS:      run ceil(Q/4) units unconditionally (at least one).
        2. Priority:  if a ready task has a strictly better priority, it takes
                      over and the quantum grows by ceil(unused / 2); otherwise
                      run another ceil(Q/4) units, never past the quantum.
        3. SJF:       if a ready task has strictly less remaining work, it takes
                      over and the quantum grows by the unused amount; otherwise
                      run out the rest of the quantum.

    A task that survives all three phases gets Q + 2. A finished task records
    a final quantum of 0.
    """

    name = "AG"

    def _run(self, pending: list[Task]) -> None:
        ready = ReadyQueue()
        active: Optional[Task] = None

        while ready or pending or active is not None:
            ready.admit_arrived(pending, self.clock.now)

            if active is None:
                if not ready:
                    if not self._idle_until_next_arrival(pending):
                        break
                    continue
                active = ready.poll()

            active = self._dispatch(active, ready, pending)

    def _dispatch(self, task: Task, ready: ReadyQueue, pending: list[Task]) -> Optional[Task]:
        """Run one quantum of ``task``; returns the task that preempted it, if any."""

        start = self.clock.now
        quantum = task.quantum
        if not task.quantum_history:
            task.quantum_history.append(quantum)
        # Every dispatch makes progress, even with a quantum of 0.
        phase_share = max(1, math.ceil(quantum / 4))
        logger.debug("%s: dispatch %s at t=%d with quantum %d", self.name, task.name, start, quantum)

        # FCFS phase
        unused = max(0, quantum - self._execute(task, min(phase_share, task.remaining_time)))
        if task.is_finished():
            return self._complete(task, start)

        # Priority phase
        ready.admit_arrived(pending, self.clock.now)
        challenger = ready.first_match(
            lambda other: other.priority < task.priority,
            key=lambda other: other.priority,
        )
        if challenger is not None:
            return self._preempt(task, start, quantum + math.ceil(unused / 2), challenger, ready)
        unused -= self._execute(task, min(phase_share, unused, task.remaining_time))
        if task.is_finished():
            return self._complete(task, start)

        # SJF phase
        ready.admit_arrived(pending, self.clock.now)
        challenger = ready.first_match(
            lambda other: other.remaining_time < task.remaining_time,
            key=lambda other: other.remaining_time,
        )
        if challenger is not None:
            return self._preempt(task, start, quantum + unused, challenger, ready)
        unused -= self._execute(task, min(unused, task.remaining_time))
        ready.admit_arrived(pending, self.clock.now)
        if task.is_finished():
            return self._complete(task, start)

        task.assign_quantum(quantum + EXHAUSTED_QUANTUM_BONUS)
        logger.debug("%s: %s exhausted its quantum, next quantum %d", self.name, task.name, task.quantum)
        self._record(task, start)
        self._switch()
        ready.add_if_arrived(task, self.clock.now)
        return None

    def _preempt(
        self,
        task: Task,
        start: int,
        new_quantum: int,
        challenger: Task,
        ready: ReadyQueue,
    ) -> Task:
        task.assign_quantum(new_quantum)
        logger.debug(
            "%s: %s preempts %s at t=%d, next quantum %d",
            self.name,
            challenger.name,
            task.name,
            self.clock.now,
            new_quantum,
        )
        self._record(task, start)
        self._switch()
        ready.add_if_arrived(task, self.clock.now)
        return ready.extract(challenger)

    def _complete(self, task: Task, start: int) -> None:
        self._finish(task)
        task.assign_quantum(0)
        self._record(task, start)
        return None
