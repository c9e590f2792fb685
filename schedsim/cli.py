from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .algorithms import ALGORITHMS, Algorithm, run_simulation
from .errors import SchedulerError
from .gantt import build_rich_gantt
from .models import ScheduleResult
from .workload_io import load_workload

logger = logging.getLogger(__name__)

DEFAULT_COMPARE_QUANTUM = 4

ALGORITHM_NAMES = [a.value for a in ALGORITHMS]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, SJF, SRTF, Priority, Round Robin).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log scheduling decisions.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        choices=ALGORITHM_NAMES,
        type=str.lower,
        help="Algorithm to use.",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Time quantum for round-robin (required by rr, ignored by the others).",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        choices=ALGORITHM_NAMES,
        type=str.lower,
        default=ALGORITHM_NAMES,
        help=f"Algorithms to compare (default: {' '.join(ALGORITHM_NAMES)}).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_COMPARE_QUANTUM,
        help=f"Time quantum used for rr when included (default: {DEFAULT_COMPARE_QUANTUM}).",
    )

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
    )


def _print_result(result: ScheduleResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    console.print()

    panel, time_marks = build_rich_gantt(result.timeline)
    console.print(panel)
    if time_marks:
        console.print(time_marks)

    console.print()

    headers = ["PID", "Arrive", "Burst", "Priority", "Complete", "Turnaround", "Wait", "Response"]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        proc_table.add_row(
            p.pid,
            str(p.arrival_time),
            str(p.burst_time),
            str(p.priority),
            str(p.completion_time),
            str(p.turnaround_time),
            str(p.waiting_time),
            str(p.response_time),
        )

    console.print(proc_table)
    console.print()

    sys_table = Table(title="Averages and system metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg turnaround", f"{result.avg_turnaround:.2f}")
    sys_table.add_row("Avg waiting", f"{result.avg_waiting:.2f}")
    sys_table.add_row("Avg response", f"{result.avg_response:.2f}")
    if result.system:
        sys = result.system
        sys_table.add_row("Throughput (proc/time)", f"{sys.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")
        sys_table.add_row("Starvation count", str(sys.starvation_count))

    console.print(sys_table)


def _print_comparison(workload_path: Path, algorithms: list[str], quantum: int, console: Console) -> None:
    registry = load_workload(workload_path)

    summary_table = Table(title=f"Algorithm comparison: {workload_path}", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg response", justify="right")

    for alg in algorithms:
        q = quantum if Algorithm.parse(alg) is Algorithm.RR else None
        result = run_simulation(alg, registry, quantum=q)
        summary_table.add_row(
            result.algorithm,
            f"{result.avg_turnaround:.2f}",
            f"{result.avg_waiting:.2f}",
            f"{result.avg_response:.2f}",
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console()

    try:
        if args.command == "run":
            registry = load_workload(Path(args.workload))
            result = run_simulation(args.algorithm, registry, quantum=args.quantum)
            _print_result(result, console)
            return 0

        if args.command == "compare":
            _print_comparison(Path(args.workload), args.algorithms, args.quantum, console)
            return 0
    except (SchedulerError, OSError) as exc:
        logger.debug("Simulation failed", exc_info=True)
        console.print(f"[red]Error: {exc}[/red]")
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
