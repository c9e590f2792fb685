from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Process:
    pid: str
    arrival_time: int
    burst_time: int
    priority: int = 1


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: str
    start_time: int
    duration: int

    @property
    def end_time(self) -> int:
        return self.start_time + self.duration


@dataclass
class ProcessMetrics:
    """
    Run-scoped copy of a process.

    Holds the bookkeeping a scheduler needs (remaining work, first dispatch)
    and the metrics derived once the process completes. A fresh list of these
    is built for every run so that runs never see each other's state.
    """

    pid: str
    arrival_time: int
    burst_time: int
    priority: int
    order: int
    remaining: int = 0
    start_time: Optional[int] = None
    completion_time: Optional[int] = None
    turnaround_time: int = 0
    waiting_time: int = 0
    response_time: int = 0

    @classmethod
    def from_process(cls, process: Process, order: int) -> "ProcessMetrics":
        return cls(
            pid=process.pid,
            arrival_time=process.arrival_time,
            burst_time=process.burst_time,
            priority=process.priority,
            order=order,
            remaining=process.burst_time,
        )


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    makespan: int
    throughput: float
    cpu_utilization: float
    starvation_count: int = 0


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[ProcessMetrics] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    avg_turnaround: float = 0.0
    avg_waiting: float = 0.0
    avg_response: float = 0.0
    system: Optional[SystemMetrics] = None
