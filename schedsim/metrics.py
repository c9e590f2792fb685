from __future__ import annotations

from typing import List

from .models import ProcessMetrics, ScheduleResult, SystemMetrics


def finalize_process_metrics(processes: List[ProcessMetrics]) -> None:
    """
    Fill turnaround, waiting and response time for every completed process.

    Response time is always taken from the recorded first dispatch. For
    non-preemptive schedules that instant is the start of the only slice, so
    it comes out equal to the waiting time without special handling.
    """
    for p in processes:
        if p.completion_time is None or p.start_time is None:
            raise RuntimeError(f"Process {p.pid} was never completed by the scheduler")

        p.turnaround_time = p.completion_time - p.arrival_time
        p.waiting_time = p.turnaround_time - p.burst_time
        p.response_time = p.start_time - p.arrival_time


def summarize_process_metrics(processes: List[ProcessMetrics]) -> dict:
    """Mean turnaround, waiting and response time of a run (zeros when empty)."""
    totals = {"avg_turnaround": 0, "avg_waiting": 0, "avg_response": 0}
    for p in processes:
        totals["avg_turnaround"] += p.turnaround_time
        totals["avg_waiting"] += p.waiting_time
        totals["avg_response"] += p.response_time

    n = len(processes)
    return {name: total / n if n else 0.0 for name, total in totals.items()}


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Derive CPU-level figures from a finished run and attach them to ``result``.

    Expects ``result.avg_waiting`` to be filled in already; a process whose
    wait exceeds twice that average counts as starved.
    """
    system = SystemMetrics(cpu_busy_time=0, makespan=0, throughput=0.0, cpu_utilization=0.0)
    if result.processes:
        system.makespan = max(p.completion_time for p in result.processes)
        system.cpu_busy_time = sum(s.duration for s in result.timeline)
        if system.makespan:
            system.throughput = len(result.processes) / system.makespan
            system.cpu_utilization = system.cpu_busy_time / system.makespan
        system.starvation_count = sum(1 for p in result.processes if p.waiting_time > 2 * result.avg_waiting)

    result.system = system
    return system
