import pytest

from schedsim.metrics import compute_system_metrics, finalize_process_metrics, summarize_process_metrics
from schedsim.models import Process, ProcessMetrics, ScheduleResult, ScheduledSlice


def _run(pid, arrival, burst, start, completion, order=0):
    run = ProcessMetrics.from_process(Process(pid, arrival, burst), order)
    run.start_time = start
    run.completion_time = completion
    run.remaining = 0
    return run


def test_finalize_uses_first_dispatch_for_response():
    # Preempted process: ran at 1, finished at 12.
    run = _run("A", arrival=1, burst=4, start=1, completion=12)
    finalize_process_metrics([run])

    assert run.turnaround_time == 11
    assert run.waiting_time == 7
    assert run.response_time == 0


def test_finalize_requires_completed_processes():
    run = ProcessMetrics.from_process(Process("A", 0, 2), 0)
    with pytest.raises(RuntimeError):
        finalize_process_metrics([run])


def test_summarize_averages():
    runs = [_run("A", 0, 5, 0, 5), _run("B", 1, 3, 5, 8, 1), _run("C", 2, 1, 8, 9, 2)]
    finalize_process_metrics(runs)
    summary = summarize_process_metrics(runs)

    assert summary["avg_waiting"] == pytest.approx(10 / 3)
    assert summary["avg_turnaround"] == pytest.approx(19 / 3)
    assert summary["avg_response"] == pytest.approx(10 / 3)


def test_summarize_empty():
    assert summarize_process_metrics([]) == {"avg_waiting": 0.0, "avg_turnaround": 0.0, "avg_response": 0.0}


def test_system_metrics_count_starved_processes():
    runs = [_run("A", 0, 1, 0, 1), _run("B", 0, 1, 1, 2, 1), _run("C", 0, 1, 2, 3, 2), _run("D", 0, 1, 9, 10, 3)]
    finalize_process_metrics(runs)
    timeline = [ScheduledSlice(r.pid, r.start_time, 1) for r in runs]
    result = ScheduleResult(algorithm="test", quantum=None, processes=runs, timeline=timeline, avg_waiting=3.0)

    system = compute_system_metrics(result)

    assert result.system is system
    assert system.makespan == 10
    assert system.cpu_busy_time == 4
    assert system.cpu_utilization == pytest.approx(0.4)
    # waits 0, 1, 2, 9 -> average 3, only D exceeds twice that
    assert system.starvation_count == 1
