from __future__ import annotations

import logging
from collections import deque
from enum import Enum
from typing import Callable, Deque, Iterable, List, Optional, Union

from .errors import ConfigurationError, EmptyInputError
from .metrics import compute_system_metrics, finalize_process_metrics, summarize_process_metrics
from .models import Process, ProcessMetrics, ScheduleResult, ScheduledSlice
from .registry import ProcessRegistry

logger = logging.getLogger(__name__)


class Algorithm(str, Enum):
    FCFS = "fcfs"
    SJF = "sjf"
    SRTF = "srtf"
    PRIORITY = "priority"
    RR = "rr"

    @classmethod
    def parse(cls, value: Union["Algorithm", str]) -> "Algorithm":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(a.value for a in cls)
            raise ConfigurationError(f"Unknown algorithm '{value}' (choose from {choices})") from None


def _prepare(processes: Iterable[Process]) -> List[ProcessMetrics]:
    """
    Build the per-run working copy, validating raw input on the way.
    """
    registry = processes if isinstance(processes, ProcessRegistry) else ProcessRegistry(processes)
    if not len(registry):
        raise EmptyInputError("Add at least one process before running a simulation")
    return registry.working_copy()


def _finish(
    algorithm: str,
    quantum: Optional[int],
    runs: List[ProcessMetrics],
    timeline: List[ScheduledSlice],
) -> ScheduleResult:
    finalize_process_metrics(runs)
    summary = summarize_process_metrics(runs)

    result = ScheduleResult(
        algorithm=algorithm,
        quantum=quantum,
        processes=sorted(runs, key=lambda p: p.order),
        timeline=timeline,
        avg_turnaround=summary["avg_turnaround"],
        avg_waiting=summary["avg_waiting"],
        avg_response=summary["avg_response"],
    )
    compute_system_metrics(result)
    logger.debug(
        f"{algorithm}: {len(timeline)} slices, avg waiting {result.avg_waiting:.2f}, "
        f"avg turnaround {result.avg_turnaround:.2f}, avg response {result.avg_response:.2f}"
    )
    return result


def schedule_fcfs(processes: Iterable[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Ties on arrival time go to the process registered first.
    """
    runs = _prepare(processes)

    time = 0
    timeline: List[ScheduledSlice] = []

    for p in sorted(runs, key=lambda x: (x.arrival_time, x.order)):
        if time < p.arrival_time:
            time = p.arrival_time

        timeline.append(ScheduledSlice(pid=p.pid, start_time=time, duration=p.burst_time))
        p.start_time = time
        time += p.burst_time
        p.completion_time = time
        p.remaining = 0

    return _finish("First Come First Served (FCFS)", None, runs, timeline)


def _schedule_non_preemptive(runs: List[ProcessMetrics], key: Callable[[ProcessMetrics], tuple]) -> List[ScheduledSlice]:
    """
    Shared loop for SJF and static Priority.

    At each decision point, among processes that have arrived and are not yet
    completed, run the one with the smallest ``key`` to completion.
    """
    time = 0
    timeline: List[ScheduledSlice] = []
    pending = list(runs)

    while pending:
        ready = [p for p in pending if p.arrival_time <= time]

        if not ready:
            # Nothing is ready: jump straight to the next arrival.
            time = min(p.arrival_time for p in pending)
            continue

        p = min(ready, key=key)
        logger.debug(f"t={time}: dispatch {p.pid} from ready set {[r.pid for r in ready]}")

        timeline.append(ScheduledSlice(pid=p.pid, start_time=time, duration=p.remaining))
        p.start_time = time
        time += p.remaining
        p.remaining = 0
        p.completion_time = time
        pending.remove(p)

    return timeline


def schedule_sjf(processes: Iterable[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive).

    Tie-breaker: earlier arrival, then registration order.
    """
    runs = _prepare(processes)
    timeline = _schedule_non_preemptive(runs, key=lambda x: (x.remaining, x.arrival_time, x.order))
    return _finish("Shortest Job First (non-preemptive)", None, runs, timeline)


def schedule_priority(processes: Iterable[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value means higher priority. Among ready
    processes, choose the one with the smallest priority; break ties
    by earlier arrival time, then registration order.
    """
    runs = _prepare(processes)
    timeline = _schedule_non_preemptive(runs, key=lambda x: (x.priority, x.arrival_time, x.order))
    return _finish("Priority Scheduling (non-preemptive)", None, runs, timeline)


def _append_or_extend(timeline: List[ScheduledSlice], pid: str, start_time: int, duration: int) -> None:
    last = timeline[-1] if timeline else None
    if last is not None and last.pid == pid and last.end_time == start_time:
        last.duration += duration
    else:
        timeline.append(ScheduledSlice(pid=pid, start_time=start_time, duration=duration))


def schedule_srtf(processes: Iterable[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Remaining Time First (preemptive SJF).

    Instead of stepping one time unit at a time, the clock moves to the next
    point where the choice can change: the running process finishing or a new
    arrival. A slice is only split when a different process takes the CPU.
    """
    runs = _prepare(processes)

    time = 0
    timeline: List[ScheduledSlice] = []
    unfinished = list(runs)

    while unfinished:
        ready = [p for p in unfinished if p.arrival_time <= time]
        if not ready:
            time = min(p.arrival_time for p in unfinished)
            continue

        # Smallest remaining time (tie: earlier arrival, then registration order).
        current = min(ready, key=lambda p: (p.remaining, p.arrival_time, p.order))

        if current.start_time is None:
            current.start_time = time
            logger.debug(f"t={time}: first dispatch of {current.pid}")

        future = [p.arrival_time for p in unfinished if p.arrival_time > time]
        run_time = current.remaining if not future else min(current.remaining, min(future) - time)

        _append_or_extend(timeline, current.pid, time, run_time)
        time += run_time
        current.remaining -= run_time

        if current.remaining == 0:
            current.completion_time = time
            unfinished.remove(current)

    return _finish("Shortest Remaining Time First (SRTF)", None, runs, timeline)


def _require_quantum(quantum: Optional[int]) -> int:
    if isinstance(quantum, bool) or not isinstance(quantum, int) or quantum <= 0:
        raise ConfigurationError(f"Round Robin requires a positive integer quantum, got {quantum!r}")
    return quantum


def schedule_rr(processes: Iterable[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes that arrive while a slice is running join the queue ahead of
    the process that was just preempted.
    """
    quantum = _require_quantum(quantum)
    runs = _prepare(processes)

    arrivals = sorted(runs, key=lambda p: (p.arrival_time, p.order))
    next_arrival = 0

    time = 0
    timeline: List[ScheduledSlice] = []
    ready: Deque[ProcessMetrics] = deque()

    def enqueue_new_arrivals(current_time: int) -> None:
        nonlocal next_arrival
        while next_arrival < len(arrivals) and arrivals[next_arrival].arrival_time <= current_time:
            ready.append(arrivals[next_arrival])
            next_arrival += 1

    enqueue_new_arrivals(time)

    while ready or next_arrival < len(arrivals):
        if not ready:
            # Jump to next arrival if CPU is idle
            time = arrivals[next_arrival].arrival_time
            enqueue_new_arrivals(time)
            continue

        p = ready.popleft()
        if p.start_time is None:
            p.start_time = time
            logger.debug(f"t={time}: first dispatch of {p.pid}")

        run_time = min(quantum, p.remaining)
        timeline.append(ScheduledSlice(pid=p.pid, start_time=time, duration=run_time))

        time += run_time
        p.remaining -= run_time

        enqueue_new_arrivals(time)

        if p.remaining > 0:
            ready.append(p)
        else:
            p.completion_time = time

    return _finish(f"Round Robin (q = {quantum})", quantum, runs, timeline)


ALGORITHMS = {
    Algorithm.FCFS: schedule_fcfs,
    Algorithm.SJF: schedule_sjf,
    Algorithm.SRTF: schedule_srtf,
    Algorithm.PRIORITY: schedule_priority,
    Algorithm.RR: schedule_rr,
}


def run_simulation(
    algorithm: Union[Algorithm, str],
    processes: Iterable[Process],
    quantum: Optional[int] = None,
) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. Quantum is only used (and required)
    by Round Robin.
    """
    algo = Algorithm.parse(algorithm)
    logger.debug(f"Running {algo.name} (quantum={quantum})")
    return ALGORITHMS[algo](processes, quantum=quantum)
