"""Preemptive shortest-remaining-time-first scheduling."""

from conftest import order, slices
from schedsim import ShortestRemainingTimeScheduler


class TestShortestRemainingTime:
    """Preemption on strictly shorter work, tick by tick."""

    def test_shorter_arrivals_preempt(self, run_policy) -> None:
        scheduler, tasks = run_policy(
            ShortestRemainingTimeScheduler,
            [("P1", 0, 8, 1), ("P2", 1, 4, 1), ("P3", 2, 2, 1)],
        )
        assert slices(scheduler) == [
            ("P1", 0, 1),
            ("P2", 1, 2),
            ("P3", 2, 4),
            ("P2", 4, 7),
            ("P1", 7, 14),
        ]
        assert (tasks["P1"].waiting_time, tasks["P1"].turnaround_time) == (6, 14)
        assert (tasks["P2"].waiting_time, tasks["P2"].turnaround_time) == (2, 6)
        assert (tasks["P3"].waiting_time, tasks["P3"].turnaround_time) == (0, 2)

    def test_context_switch_charged_on_task_change(self, run_policy) -> None:
        scheduler, tasks = run_policy(
            ShortestRemainingTimeScheduler,
            [("P1", 0, 8, 1), ("P2", 1, 4, 1), ("P3", 2, 2, 1)],
            context_switch=1,
        )
        assert slices(scheduler) == [
            ("P1", 0, 1),
            ("P2", 2, 3),
            ("P3", 4, 6),
            ("P2", 7, 10),
            ("P1", 11, 18),
        ]
        assert scheduler.context_switch.switch_count == 4
        assert scheduler.clock.now == 18
        assert tasks["P1"].waiting_time == 10

    def test_equal_remaining_does_not_preempt(self, run_policy) -> None:
        scheduler, _ = run_policy(ShortestRemainingTimeScheduler, [("P1", 0, 4), ("P2", 1, 3)])
        assert order(scheduler) == ["P1", "P2"]
        assert slices(scheduler)[0] == ("P1", 0, 4)

    def test_ties_break_on_arrival_then_priority(self, run_policy) -> None:
        scheduler, _ = run_policy(
            ShortestRemainingTimeScheduler,
            [("P1", 0, 3, 5), ("P2", 0, 3, 2), ("P3", 1, 3, 1)],
        )
        assert order(scheduler) == ["P2", "P1", "P3"]

    def test_continuing_task_is_never_charged(self, run_policy) -> None:
        scheduler, tasks = run_policy(ShortestRemainingTimeScheduler, [("P1", 0, 5)], context_switch=4)
        assert slices(scheduler) == [("P1", 0, 5)]
        assert scheduler.context_switch.switch_count == 0
        assert tasks["P1"].waiting_time == 0

    def test_idle_gap_fast_forwards(self, run_policy) -> None:
        scheduler, tasks = run_policy(ShortestRemainingTimeScheduler, [("P1", 4, 2)])
        assert slices(scheduler) == [("P1", 4, 6)]
        assert scheduler.clock.idle_time == 4
        assert tasks["P1"].completion_time == 6

    def test_zero_burst_task_completes_immediately(self, run_policy) -> None:
        scheduler, tasks = run_policy(ShortestRemainingTimeScheduler, [("P1", 0, 0), ("P2", 0, 2)])
        assert slices(scheduler) == [("P1", 0, 0), ("P2", 0, 2)]
        assert tasks["P1"].turnaround_time == 0
