from __future__ import annotations

import threading


class SimulationClock:
    """Integer virtual clock advanced explicitly by the running scheduler.

    Time only moves forward. Each advance is attributed to execution, a
    context switch, or an idle fast-forward so a run can be audited after the
    fact: ``now == execution_time + context_switch_time + idle_time``.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._now = 0
        self._execution_time = 0
        self._context_switch_time = 0
        self._idle_time = 0

    @property
    def now(self) -> int:
        with self._lock:
            return self._now

    @property
    def execution_time(self) -> int:
        with self._lock:
            return self._execution_time

    @property
    def context_switch_time(self) -> int:
        with self._lock:
            return self._context_switch_time

    @property
    def idle_time(self) -> int:
        with self._lock:
            return self._idle_time

    def advance(self, duration: int) -> None:
        """Advance by ``duration`` units of task execution."""

        _check_delta(duration, "duration")
        with self._lock:
            self._now += duration
            self._execution_time += duration

    def advance_context_switch(self, duration: int) -> None:
        _check_delta(duration, "context switch duration")
        with self._lock:
            self._now += duration
            self._context_switch_time += duration

    def idle_until(self, target: int) -> int:
        """Fast-forward an idle CPU to ``target`` and return the skipped time."""

        with self._lock:
            if target < self._now:
                msg = f"cannot idle back to {target}, clock is already at {self._now}"
                raise ValueError(msg)
            skipped = target - self._now
            self._now = target
            self._idle_time += skipped
            return skipped

    def reset(self) -> None:
        with self._lock:
            self._now = 0
            self._execution_time = 0
            self._context_switch_time = 0
            self._idle_time = 0

    def __repr__(self) -> str:
        return f"SimulationClock(now={self.now})"


def _check_delta(value: int, label: str) -> None:
    if value < 0:
        msg = f"{label} must be non-negative"
        raise ValueError(msg)
