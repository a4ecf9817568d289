from __future__ import annotations

import threading
from typing import Optional

from .clock import SimulationClock


class ContextSwitchManager:
    """Charges the context-switch delay to a clock and keeps a tally."""

    def __init__(self, switch_time: int = 0) -> None:
        if switch_time < 0:
            msg = "switch_time must be non-negative"
            raise ValueError(msg)
        self._lock = threading.Lock()
        self._switch_time = switch_time
        self._switch_count = 0
        self._total_delay = 0

    @property
    def switch_time(self) -> int:
        with self._lock:
            return self._switch_time

    @switch_time.setter
    def switch_time(self, value: int) -> None:
        if value < 0:
            msg = "switch_time must be non-negative"
            raise ValueError(msg)
        with self._lock:
            self._switch_time = value

    @property
    def switch_count(self) -> int:
        with self._lock:
            return self._switch_count

    @property
    def total_delay(self) -> int:
        with self._lock:
            return self._total_delay

    def apply(self, clock: SimulationClock, override: Optional[int] = None) -> int:
        """Advance ``clock`` by the configured delay (or ``override``) and return it."""

        if clock is None:
            msg = "clock must not be None"
            raise ValueError(msg)
        if override is not None and override < 0:
            msg = "override must be non-negative"
            raise ValueError(msg)
        with self._lock:
            delay = self._switch_time if override is None else override
            self._switch_count += 1
            self._total_delay += delay
        clock.advance_context_switch(delay)
        return delay

    def reset_counters(self) -> None:
        with self._lock:
            self._switch_count = 0
            self._total_delay = 0
