from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .algorithms import ALGORITHMS
from .config import DEFAULT_QUANTUM, SimulationConfig, run_policies
from .errors import SchedulerError
from .gantt import build_rich_gantt, render_gantt
from .metrics import summarize
from .models import DEFAULT_CAPACITY, ProcessTable, ScheduleResult
from .workload_io import load_workload

logger = logging.getLogger(__name__)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to the workload file (.txt table, .json or .csv).",
    )
    parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for round-robin (default: {DEFAULT_QUANTUM}).",
    )
    parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(ALGORITHMS),
        help=f"Policies to run, in order (default: {' '.join(ALGORITHMS)}).",
    )
    parser.add_argument(
        "--max-processes",
        type=int,
        default=DEFAULT_CAPACITY,
        help=f"Maximum number of processes accepted, 0 for no limit (default: {DEFAULT_CAPACITY}).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every dispatch decision.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, Round Robin).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run the scheduling policies on a workload file.")
    _add_common_arguments(run_parser)
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Draw the Gantt chart as plain text.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run the policies on the same workload and compare average metrics.",
    )
    _add_common_arguments(compare_parser)

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )


def _print_processes(table: ProcessTable, console: Console) -> None:
    proc_table = Table(title="Loaded processes", box=box.SIMPLE_HEAVY)
    for h in ("ID", "Arrive", "Burst"):
        proc_table.add_column(h, justify="center" if h == "ID" else "right")
    for p in table:
        proc_table.add_row(str(p.id), str(p.arrival), str(p.burst))
    console.print(proc_table)


def _print_result(result: ScheduleResult, console: Console, plain: bool = False) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    if plain:
        console.print(render_gantt(result.timeline), markup=False, highlight=False)
    else:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks)

    console.print()

    headers = [
        "ID",
        "Arrive",
        "Burst",
        "Start",
        "Finish",
        "Wait",
        "Turnaround",
        "Response",
    ]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        proc_table.add_column(h, justify="center" if h == "ID" else "right")

    for p in result.processes:
        proc_table.add_row(
            str(p.id),
            str(p.arrival),
            str(p.burst),
            str(p.start),
            str(p.finish),
            str(p.waiting),
            str(p.turnaround),
            str(p.response),
        )

    console.print(proc_table)
    console.print()

    if result.metrics:
        m = result.metrics
        sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
        sys_table.add_column("Metric")
        sys_table.add_column("Value", justify="right")

        sys_table.add_row("Avg turnaround", f"{m.avg_turnaround:.2f}")
        sys_table.add_row("Avg response", f"{m.avg_response:.2f}")
        sys_table.add_row("Avg waiting", f"{m.avg_waiting:.2f}")
        sys_table.add_row("Throughput (proc/time)", f"{m.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{m.cpu_utilization*100:.1f}%")

        console.print(sys_table)


def _print_comparison(results: List[ScheduleResult], title: str, console: Console) -> None:
    summary_table = Table(title=title, box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Throughput", justify="right")

    for row in summarize(results):
        summary_table.add_row(
            row["algorithm"],
            "" if row["quantum"] is None else str(row["quantum"]),
            f"{row['avg_turnaround']:.2f}",
            f"{row['avg_response']:.2f}",
            f"{row['avg_waiting']:.2f}",
            f"{row['throughput']:.3f}",
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console()

    try:
        config = SimulationConfig.from_args(args)
        workload_path = Path(args.workload)
        table = load_workload(workload_path, capacity=config.max_processes)
        if not len(table):
            console.print(f"[red]Error: no processes in {workload_path}[/red]")
            return 1
        results = run_policies(table, config)
    except (SchedulerError, OSError) as exc:
        logger.debug("simulation aborted", exc_info=True)
        console.print(f"[red]Error: {exc}[/red]")
        return 1

    if args.command == "run":
        _print_processes(table, console)
        for result in results:
            console.print()
            _print_result(result, console, plain=args.plain)
        return 0

    if args.command == "compare":
        _print_comparison(results, f"Algorithm comparison: {workload_path}", console)
        return 0

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
