from __future__ import annotations

import threading
from collections import deque
from collections.abc import Callable
from typing import Any, Iterator, Optional

from .task import Task

RankKey = Callable[[Task], Any]


def earliest_arrival_key(task: Task) -> tuple[int, int]:
    return (task.arrival_time, task.priority)


def highest_priority_key(task: Task) -> tuple[int, int, str]:
    return (task.priority, task.arrival_time, task.name)


def shortest_remaining_key(task: Task) -> tuple[int, int, int]:
    return (task.remaining_time, task.arrival_time, task.priority)


class ReadyQueue:
    """FIFO of arrived, unfinished tasks with several selection policies.

    Every selection scans in insertion order, so when a ranking key ties the
    task admitted first wins. Selections return ``None`` on an empty queue.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tasks: deque[Task] = deque()

    def add_if_arrived(self, task: Task, now: int) -> bool:
        if task is None:
            msg = "task must not be None"
            raise ValueError(msg)
        if task.arrival_time > now:
            return False
        with self._lock:
            self._tasks.append(task)
        return True

    def admit_arrived(self, candidates: list[Task], now: int) -> int:
        """Move every candidate that has arrived by ``now`` into the queue.

        Admitted tasks are removed from ``candidates`` and enqueued by
        arrival time; tasks arriving together keep their order in
        ``candidates``.
        """

        if candidates is None:
            msg = "candidates must not be None"
            raise ValueError(msg)
        arrived = [task for task in candidates if task is not None and task.arrival_time <= now]
        if not arrived:
            return 0
        arrived.sort(key=lambda task: task.arrival_time)
        admitted = {id(task) for task in arrived}
        candidates[:] = [task for task in candidates if id(task) not in admitted]
        with self._lock:
            self._tasks.extend(arrived)
        return len(arrived)

    def peek(self) -> Optional[Task]:
        with self._lock:
            return self._tasks[0] if self._tasks else None

    def poll(self) -> Optional[Task]:
        with self._lock:
            return self._tasks.popleft() if self._tasks else None

    def peek_earliest_arrival(self) -> Optional[Task]:
        return self.peek_best(earliest_arrival_key)

    def poll_earliest_arrival(self) -> Optional[Task]:
        return self.poll_best(earliest_arrival_key)

    def peek_highest_priority(self) -> Optional[Task]:
        return self.peek_best(highest_priority_key)

    def poll_highest_priority(self) -> Optional[Task]:
        return self.poll_best(highest_priority_key)

    def peek_shortest_remaining(self) -> Optional[Task]:
        return self.peek_best(shortest_remaining_key)

    def poll_shortest_remaining(self) -> Optional[Task]:
        return self.poll_best(shortest_remaining_key)

    def peek_best(self, key: RankKey) -> Optional[Task]:
        with self._lock:
            return self._best(key)

    def poll_best(self, key: RankKey) -> Optional[Task]:
        with self._lock:
            best = self._best(key)
            if best is not None:
                self._remove(best)
            return best

    def first_match(self, predicate: Callable[[Task], bool], key: Optional[RankKey] = None) -> Optional[Task]:
        """Best task satisfying ``predicate`` without removing it.

        Without ``key`` this is the first eligible task in insertion order.
        """

        with self._lock:
            eligible = [task for task in self._tasks if predicate(task)]
        if not eligible:
            return None
        if key is None:
            return eligible[0]
        return min(eligible, key=key)

    def extract(self, task: Task) -> Task:
        """Remove ``task`` (matched by identity) and return it."""

        with self._lock:
            self._remove(task)
        return task

    def snapshot(self) -> tuple[Task, ...]:
        with self._lock:
            return tuple(self._tasks)

    def clear(self) -> None:
        with self._lock:
            self._tasks.clear()

    def _best(self, key: RankKey) -> Optional[Task]:
        if not self._tasks:
            return None
        return min(self._tasks, key=key)

    def _remove(self, task: Task) -> None:
        for index, queued in enumerate(self._tasks):
            if queued is task:
                del self._tasks[index]
                return
        msg = f"{task.name} is not in the ready queue"
        raise ValueError(msg)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def __bool__(self) -> bool:
        return len(self) > 0

    def __contains__(self, task: object) -> bool:
        with self._lock:
            return any(queued is task for queued in self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.snapshot())
