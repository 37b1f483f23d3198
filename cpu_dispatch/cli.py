from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, run_algorithm
from .errors import SchedulerError
from .events import log_events
from .gantt import build_rich_gantt
from .models import ScheduleResult
from .workload_io import load_workload

DEFAULT_QUANTUM = 2
DEFAULT_COMPARE = ["fcfs", "sjf", "rr"]

logger = logging.getLogger("cpu_dispatch")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cpu-dispatch",
        description="CPU scheduling simulator (FCFS, SJF, RR).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every admission, dispatch, preemption and termination.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        choices=sorted(ALGORITHMS),
        help="Algorithm to use (fcfs, sjf, rr).",
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
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for round-robin, ignored by FCFS and SJF (default: {DEFAULT_QUANTUM}).",
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
        choices=sorted(ALGORITHMS),
        default=DEFAULT_COMPARE,
        help="Algorithms to compare (default: fcfs sjf rr).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for RR when included (default: {DEFAULT_QUANTUM}).",
    )

    return parser


def configure_logging(verbose: bool, console: Console) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _print_result(result: ScheduleResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    panel, time_marks = build_rich_gantt(result.timeline)
    console.print(panel)
    if time_marks:
        console.print(" " + time_marks)

    console.print()

    headers = [
        "Order",
        "PID",
        "Arrive",
        "Burst",
        "Priority",
        "Start",
        "Complete",
        "Wait",
        "Turnaround",
        "Response",
    ]

    proc_table = Table(title="Per-process metrics (completion order)", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for index, p in enumerate(result.processes):
        proc_table.add_row(
            str(index),
            p.label,
            str(p.arrival_time),
            str(p.burst_time),
            str(p.priority),
            str(p.start_time),
            str(p.completion_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            str(p.response_time),
        )

    console.print(proc_table)
    console.print()

    avg = result.averages
    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg turnaround", f"{avg.avg_turnaround:.2f}")
    sys_table.add_row("Avg waiting", f"{avg.avg_waiting:.2f}")
    sys_table.add_row("Avg response", f"{avg.avg_response:.2f}")
    if result.system:
        sys = result.system
        sys_table.add_row("Makespan", str(sys.makespan))
        sys_table.add_row("Idle time", str(sys.idle_time))
        sys_table.add_row("Throughput (proc/time)", f"{sys.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")

    console.print(sys_table)


def _print_comparison(results: List[ScheduleResult], console: Console) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")

    for result in results:
        avg = result.averages
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{avg.avg_waiting:.2f}",
            f"{avg.avg_turnaround:.2f}",
            f"{avg.avg_response:.2f}",
        )

    console.print(summary_table)


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    console = console or Console()
    configure_logging(args.verbose, console)
    hook = log_events(logging.getLogger("cpu_dispatch.events")) if args.verbose else None

    try:
        processes = load_workload(Path(args.workload))

        if args.command == "run":
            q = args.quantum if args.algorithm == "rr" else None
            result = run_algorithm(args.algorithm, processes, quantum=q, on_event=hook)
            _print_result(result, console)
            return 0

        if args.command == "compare":
            results = []
            for alg in args.algorithms:
                q = args.quantum if alg == "rr" else None
                results.append(run_algorithm(alg, processes, quantum=q, on_event=hook))
            _print_comparison(results, console)
            return 0
    except (SchedulerError, ValueError, OSError) as exc:
        logger.debug("run failed", exc_info=True)
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
