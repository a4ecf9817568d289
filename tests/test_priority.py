"""Preemptive priority scheduling with aging."""

import pytest

from conftest import order, slices
from schedsim import AgingPriorityScheduler


class TestPriorityPreemption:
    """Lower numbers win; strictly better candidates preempt."""

    def test_higher_priority_arrival_preempts(self, run_policy) -> None:
        scheduler, tasks = run_policy(
            AgingPriorityScheduler,
            [("P1", 0, 5, 3), ("P2", 1, 2, 1), ("P3", 2, 3, 2)],
            aging_interval=10,
        )
        assert slices(scheduler) == [
            ("P1", 0, 1),
            ("P2", 1, 3),
            ("P3", 3, 6),
            ("P1", 6, 10),
        ]
        assert (tasks["P1"].waiting_time, tasks["P1"].turnaround_time) == (5, 10)
        assert (tasks["P2"].waiting_time, tasks["P2"].turnaround_time) == (0, 2)
        assert (tasks["P3"].waiting_time, tasks["P3"].turnaround_time) == (1, 4)

    def test_context_switch_charged_on_preemption_and_completion(self, run_policy) -> None:
        scheduler, tasks = run_policy(
            AgingPriorityScheduler,
            [("P1", 0, 3, 2), ("P2", 1, 1, 1)],
            context_switch=1,
            aging_interval=10,
        )
        assert slices(scheduler) == [("P1", 0, 1), ("P2", 2, 3), ("P1", 4, 6)]
        assert scheduler.context_switch.switch_count == 2
        assert scheduler.clock.now == 6
        assert tasks["P1"].waiting_time == 3

    def test_equal_priority_does_not_preempt(self, run_policy) -> None:
        scheduler, _ = run_policy(
            AgingPriorityScheduler,
            [("P1", 0, 3, 2), ("P2", 1, 1, 2)],
            aging_interval=10,
        )
        assert order(scheduler) == ["P1", "P2"]

    def test_simultaneous_arrivals_break_ties_by_name(self, run_policy) -> None:
        scheduler, _ = run_policy(
            AgingPriorityScheduler,
            [("B", 0, 1, 2), ("A", 0, 1, 2)],
            aging_interval=10,
        )
        assert order(scheduler) == ["A", "B"]


class TestAging:
    """Waiting tasks gain priority, never past the minimum of 1."""

    def test_waiting_task_ages_while_another_runs(self, run_policy) -> None:
        scheduler, tasks = run_policy(
            AgingPriorityScheduler,
            [("P1", 0, 6, 1), ("P2", 0, 2, 5)],
            aging_interval=2,
        )
        assert slices(scheduler) == [("P1", 0, 6), ("P2", 6, 8)]
        assert tasks["P2"].priority == 2
        assert tasks["P1"].priority == 1

    def test_aged_task_eventually_preempts(self, run_policy) -> None:
        scheduler, tasks = run_policy(
            AgingPriorityScheduler,
            [("P1", 0, 10, 3), ("P2", 1, 2, 5)],
            aging_interval=2,
        )
        assert slices(scheduler) == [("P1", 0, 7), ("P2", 7, 9), ("P1", 9, 12)]
        assert (tasks["P2"].waiting_time, tasks["P2"].turnaround_time) == (6, 8)
        assert tasks["P1"].priority == 2

    def test_priority_never_drops_below_minimum(self, run_policy) -> None:
        _, tasks = run_policy(
            AgingPriorityScheduler,
            [("P1", 0, 10, 1), ("P2", 0, 1, 4)],
            aging_interval=1,
        )
        assert tasks["P2"].priority == 1

    @pytest.mark.parametrize("interval", [0, -3])
    def test_non_positive_interval_treated_as_one(self, run_policy, interval: int) -> None:
        scheduler, _ = run_policy(AgingPriorityScheduler, [("P1", 0, 1)], aging_interval=interval)
        assert scheduler.aging_interval == 1
