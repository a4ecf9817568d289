from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True, slots=True)
class TaskSpec:
    """Immutable task definition handed to a simulation."""

    name: str
    arrival_time: int
    burst_time: int
    priority: int = 0
    quantum: int = 0

    def __post_init__(self) -> None:
        if not self.name:
            msg = "name must not be empty"
            raise ValueError(msg)
        if self.arrival_time < 0:
            msg = "arrival_time cannot be negative"
            raise ValueError(msg)
        if self.burst_time < 0:
            msg = "burst_time cannot be negative"
            raise ValueError(msg)
        if self.priority < 0:
            msg = "priority cannot be negative"
            raise ValueError(msg)
        if self.quantum < 0:
            msg = "quantum cannot be negative"
            raise ValueError(msg)


@dataclass(slots=True, eq=False)
class Task:
    """Mutable runtime state for a task.

    Schedulers mutate tasks in place: remaining time, the working priority
    (aging lowers it), the working quantum and its history, and the metrics
    stamped on completion. Equality is identity, so two tasks with identical
    state are still distinct queue entries.
    """

    spec: TaskSpec
    remaining_time: int = field(init=False, default=0)
    priority: int = field(init=False, default=0)
    quantum: int = field(init=False, default=0)
    quantum_history: list[int] = field(init=False, default_factory=list)
    last_service_time: int = field(init=False, default=0)
    completion_time: Optional[int] = field(init=False, default=None)
    turnaround_time: Optional[int] = field(init=False, default=None)
    waiting_time: Optional[int] = field(init=False, default=None)

    def __post_init__(self) -> None:
        self.reset()

    @classmethod
    def from_spec(cls, spec: TaskSpec) -> Task:
        return cls(spec=spec)

    @classmethod
    def create(
        cls,
        name: str,
        arrival_time: int,
        burst_time: int,
        priority: int = 0,
        quantum: int = 0,
    ) -> Task:
        return cls(spec=TaskSpec(name, arrival_time, burst_time, priority, quantum))

    def reset(self) -> None:
        """Restore the state the task had before any simulation touched it."""

        self.remaining_time = self.spec.burst_time
        self.priority = self.spec.priority
        self.quantum = self.spec.quantum
        self.quantum_history = []
        self.last_service_time = self.spec.arrival_time
        self.completion_time = None
        self.turnaround_time = None
        self.waiting_time = None

    def run_for(self, units: int) -> None:
        if units < 0:
            msg = "units cannot be negative"
            raise ValueError(msg)
        if units > self.remaining_time:
            msg = f"cannot run {self.name} for {units} units, only {self.remaining_time} remain"
            raise ValueError(msg)
        self.remaining_time -= units

    def is_finished(self) -> bool:
        return self.remaining_time == 0

    def finish(self, now: int) -> None:
        """Stamp completion metrics; only valid once the burst is exhausted."""

        if not self.is_finished():
            msg = f"{self.name} still has {self.remaining_time} units to run"
            raise ValueError(msg)
        self.completion_time = now
        self.turnaround_time = now - self.arrival_time
        self.waiting_time = self.turnaround_time - self.burst_time

    def assign_quantum(self, quantum: int) -> None:
        self.quantum = quantum
        self.quantum_history.append(quantum)

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def arrival_time(self) -> int:
        return self.spec.arrival_time

    @property
    def burst_time(self) -> int:
        return self.spec.burst_time

    def __repr__(self) -> str:
        return (
            f"Task(name={self.name!r}, arrival={self.arrival_time}, burst={self.burst_time}, "
            f"remaining={self.remaining_time}, priority={self.priority}, quantum={self.quantum})"
        )
