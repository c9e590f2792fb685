"""
CPU scheduling simulator.

Runs FCFS, SJF, SRTF, Priority and Round Robin over a set of processes and
reports the execution timeline together with turnaround, waiting and
response times.
"""

from .algorithms import Algorithm, run_simulation
from .errors import ConfigurationError, EmptyInputError, SchedulerError, ValidationError
from .models import Process, ProcessMetrics, ScheduledSlice, ScheduleResult
from .registry import ProcessRegistry

__all__ = [
    "Algorithm",
    "ConfigurationError",
    "EmptyInputError",
    "Process",
    "ProcessMetrics",
    "ProcessRegistry",
    "ScheduleResult",
    "ScheduledSlice",
    "SchedulerError",
    "ValidationError",
    "run_simulation",
]
