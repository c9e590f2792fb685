from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional

from .errors import ValidationError
from .models import Process, ProcessMetrics

logger = logging.getLogger(__name__)


def _require_int(name: str, value) -> None:
    # bool is an int subclass but never a meaningful time or priority
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer, got {value!r}")


def validate_process(process: Process) -> None:
    """
    Reject processes the schedulers cannot simulate.
    """
    if not isinstance(process.pid, str) or not process.pid.strip():
        raise ValidationError(f"Process id must be a non-empty string, got {process.pid!r}")
    _require_int("arrival_time", process.arrival_time)
    _require_int("burst_time", process.burst_time)
    _require_int("priority", process.priority)

    if process.burst_time <= 0:
        raise ValidationError(f"Burst time must be positive ({process.pid}: {process.burst_time})")
    if process.arrival_time < 0:
        raise ValidationError(f"Arrival time cannot be negative ({process.pid}: {process.arrival_time})")


class ProcessRegistry:
    """
    Ordered collection of the processes a user registered.

    Processes themselves are immutable; schedulers work on the per-run copies
    returned by :meth:`working_copy`.
    """

    def __init__(self, processes: Optional[Iterable[Process]] = None) -> None:
        self._processes: List[Process] = []
        for process in processes or ():
            self.add_process(process)

    def add(
        self,
        pid: Optional[str] = None,
        arrival_time: int = 0,
        burst_time: int = 1,
        priority: int = 1,
    ) -> Process:
        if pid is None or not str(pid).strip():
            pid = self._next_default_pid()
        process = Process(pid=str(pid).strip(), arrival_time=arrival_time, burst_time=burst_time, priority=priority)
        return self.add_process(process)

    def _next_default_pid(self) -> str:
        taken = {p.pid for p in self._processes}
        n = len(self._processes) + 1
        while f"P{n}" in taken:
            n += 1
        return f"P{n}"

    def add_process(self, process: Process) -> Process:
        validate_process(process)
        if any(p.pid == process.pid for p in self._processes):
            raise ValidationError(f"Duplicate process id '{process.pid}'")

        self._processes.append(process)
        logger.debug(f"Registered {process}")
        return process

    def remove(self, index: int) -> Process:
        process = self._processes.pop(index)
        logger.debug(f"Removed {process.pid}")
        return process

    def list(self) -> List[Process]:
        return list(self._processes)

    def working_copy(self) -> List[ProcessMetrics]:
        return [ProcessMetrics.from_process(p, order) for order, p in enumerate(self._processes)]

    def __len__(self) -> int:
        return len(self._processes)

    def __iter__(self) -> Iterator[Process]:
        return iter(list(self._processes))

    def __getitem__(self, index: int) -> Process:
        return self._processes[index]
