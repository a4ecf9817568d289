from __future__ import annotations

import argparse
import logging
from typing import Sequence

from . import evaluation, workload
from .simulator import SimulationConfig


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compare CPU scheduling policies on a synthetic workload.")
    parser.add_argument("--tasks", type=int, default=6, help="Number of tasks to simulate.")
    parser.add_argument("--seed", type=int, default=42, help="Random seed for workload generation.")
    parser.add_argument("--max-gap", type=int, default=3, help="Largest gap between consecutive arrivals.")
    parser.add_argument("--burst-range", type=str, default="1,10", help="Burst time range as min,max.")
    parser.add_argument("--priority-range", type=str, default="1,5", help="Priority range as min,max.")
    parser.add_argument("--quantum-range", type=str, default="2,6", help="Per-task AG quantum range as min,max.")
    parser.add_argument("--quantum", type=int, default=2, help="Round-Robin time quantum.")
    parser.add_argument("--context-switch", type=int, default=1, help="Context switch delay (time units).")
    parser.add_argument("--aging-interval", type=int, default=5, help="Ticks of waiting per priority level gained.")
    parser.add_argument(
        "--policy",
        action="append",
        choices=sorted(evaluation.POLICIES),
        help="Policy to run; repeat to select several. Defaults to all.",
    )
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level (DEBUG, INFO, ...).")
    return parser.parse_args(argv)


def parse_int_range(raw: str, label: str) -> tuple[int, int]:
    parts = [int(item.strip()) for item in raw.split(",") if item.strip()]
    if len(parts) != 2:
        msg = f"{label} must be provided as min,max"
        raise ValueError(msg)
    low, high = parts
    if low < 0 or high < low:
        msg = f"{label} values must satisfy 0 <= min <= max"
        raise ValueError(msg)
    return (low, high)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_arguments(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    if args.tasks <= 0:
        msg = "tasks must be strictly positive"
        raise ValueError(msg)

    specs = workload.random_workload(
        args.tasks,
        seed=args.seed,
        max_gap=args.max_gap,
        burst_range=parse_int_range(args.burst_range, "burst-range"),
        priority_range=parse_int_range(args.priority_range, "priority-range"),
        quantum_range=parse_int_range(args.quantum_range, "quantum-range"),
    )
    config = SimulationConfig(
        context_switch_time=args.context_switch,
        time_quantum=args.quantum,
        aging_interval=args.aging_interval,
    )
    names = args.policy or list(evaluation.POLICIES)
    outcomes = evaluation.evaluate_suite([(name, evaluation.POLICIES[name]) for name in names], specs, config=config)

    print(f"Simulated {len(specs)} tasks (seed {args.seed}) with context switch {args.context_switch}\n")
    print("{:<6} {:>8} {:>6} {:>9} {:>8}".format("Task", "Arrival", "Burst", "Priority", "Quantum"))
    for spec in specs:
        print(f"{spec.name:<6} {spec.arrival_time:>8} {spec.burst_time:>6} {spec.priority:>9} {spec.quantum:>8}")

    task_fmt = "{:<6} {:>8} {:>6} {:>11} {:>8} {:>11}"
    for outcome in outcomes:
        print(f"\n=== {outcome.name} ===")
        print("Execution order: " + " -> ".join(str(record) for record in outcome.simulation.records))
        print(task_fmt.format("Task", "Arrival", "Burst", "Completion", "Waiting", "Turnaround"))
        for row in outcome.per_task:
            print(
                task_fmt.format(
                    row.name,
                    row.arrival_time,
                    row.burst_time,
                    row.completion_time,
                    row.waiting_time,
                    row.turnaround_time,
                ),
            )
            if outcome.name == "AG":
                print(f"       quantum history: {list(row.quantum_history)}")

    print()
    header_fmt = "{:<10} {:>9} {:>9} {:>8} {:>9} {:>9} {:>10}"
    row_fmt = "{:<10} {:>9.2f} {:>9.2f} {:>8d} {:>9d} {:>9d} {:>10.3f}"
    print(header_fmt.format("Scheduler", "AvgWait", "AvgTurn", "MaxWait", "Makespan", "Switches", "Throughput"))
    for outcome in outcomes:
        m = outcome.aggregate
        print(
            row_fmt.format(
                outcome.name,
                m.average_waiting_time,
                m.average_turnaround_time,
                m.max_wait,
                m.makespan,
                outcome.simulation.context_switches,
                m.throughput,
            ),
        )


if __name__ == "__main__":
    main()
