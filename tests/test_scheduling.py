import pytest

from errors import InvalidQuantum, InvalidWorkload, UnsupportedAlgorithm
from process import DONE, Process
from report import average_waiting_time
from scheduling import (
    ALGORITHMS,
    fcfs,
    resolve_algorithm,
    round_robin,
    run_algorithm,
    run_all,
    select_fcfs,
    select_rr,
    select_sjf,
    select_srtf,
    sjf,
    srtf,
)

MIXED_WORKLOADS = [
    [(1, 0, 5), (2, 1, 3), (3, 2, 8)],
    [(1, 0, 7), (2, 1, 4), (3, 2, 1), (4, 3, 4)],
    [(1, 0, 8), (2, 1, 4), (3, 2, 9), (4, 3, 5)],
    [(1, 3, 2), (2, 3, 2), (3, 0, 1), (4, 12, 6), (5, 13, 1)],
    [(10, 4, 3), (20, 0, 9), (30, 4, 3), (40, 6, 1)],
]


def _runs(workload):
    return [run_algorithm(key, workload, 2) for key in ALGORITHMS] + [round_robin(workload, 3)]


def _by_pid(processes):
    return {p.pid: p for p in processes}


def _timeline_by_pid(processes):
    return [(p.pid, t.start, t.end) for p in processes for t in p.exec_times]


# Properties shared by every discipline

@pytest.mark.parametrize("workload", MIXED_WORKLOADS)
def test_work_is_conserved(workload):
    for name, finished, _ in _runs(workload):
        for p in finished:
            assert sum(t.duration for t in p.exec_times) == p.burst_time, name
            assert p.remaining_time == 0
            assert p.state == DONE


@pytest.mark.parametrize("workload", MIXED_WORKLOADS)
def test_intervals_do_not_overlap_and_respect_arrival(workload):
    for name, finished, _ in _runs(workload):
        for p in finished:
            assert p.exec_times[0].start >= p.arrival_time, name
            for earlier, later in zip(p.exec_times, p.exec_times[1:]):
                assert earlier.end <= later.start, name


@pytest.mark.parametrize("workload", MIXED_WORKLOADS)
def test_single_cpu_runs_one_process_at_a_time(workload):
    for name, _, timeline in _runs(workload):
        busy = set()
        for _, start, end in timeline:
            units = set(range(start, end))
            assert not busy & units, name
            busy |= units


@pytest.mark.parametrize("workload", MIXED_WORKLOADS)
def test_waiting_time_identity(workload):
    for name, finished, _ in _runs(workload):
        for p in finished:
            assert p.waiting_time >= 0
            assert p.waiting_time == p.completion_time - p.arrival_time - p.burst_time, name


@pytest.mark.parametrize("workload", MIXED_WORKLOADS)
def test_runs_are_deterministic(workload):
    for first, second in zip(_runs(workload), _runs(workload)):
        assert first[2] == second[2]
        assert [p.waiting_time for p in first[1]] == [p.waiting_time for p in second[1]]
        assert _timeline_by_pid(first[1]) == _timeline_by_pid(second[1])


def test_timeline_matches_ledgers(srtf_workload):
    for _, finished, timeline in _runs(srtf_workload):
        assert sorted(timeline) == sorted(_timeline_by_pid(finished))


def test_callers_processes_are_not_mutated():
    source = [Process(1, 0, 5), Process(2, 1, 3)]
    run_all(source, 2)
    for p in source:
        assert p.remaining_time == p.burst_time
        assert p.exec_times == []
        assert p.waiting_time == 0


def test_results_keep_input_order():
    workload = [(3, 2, 1), (1, 0, 4), (2, 1, 2)]
    for _, finished, _ in _runs(workload):
        assert [p.pid for p in finished] == [3, 1, 2]


@pytest.mark.parametrize("key", list(ALGORITHMS))
def test_idle_cpu_until_first_arrival(key):
    name, finished, timeline = run_algorithm(key, [(1, 5, 3)], 2)
    p = finished[0]
    assert p.exec_times[0].start == 5
    assert p.waiting_time == 0
    assert p.completion_time == 8
    assert all(start >= 5 for _, start, _ in timeline)


# Scenarios

def test_fcfs_scenario(fcfs_workload):
    name, finished, timeline = fcfs(fcfs_workload)
    assert name == "FCFS"
    assert timeline == [(1, 0, 5), (2, 5, 8), (3, 8, 16)]
    assert [p.waiting_time for p in finished] == [0, 4, 6]
    assert round(average_waiting_time(finished), 2) == 3.33


def test_fcfs_breaks_arrival_ties_by_input_order():
    _, _, timeline = fcfs([(5, 2, 1), (3, 0, 2), (4, 0, 2)])
    assert [pid for pid, _, _ in timeline] == [3, 4, 5]


def test_fcfs_idles_between_arrivals():
    _, finished, timeline = fcfs([(1, 0, 2), (2, 6, 1)])
    assert timeline == [(1, 0, 2), (2, 6, 7)]
    assert [p.waiting_time for p in finished] == [0, 0]


def test_sjf_scenario(sjf_workload):
    name, finished, timeline = sjf(sjf_workload)
    assert name == "SJF"
    assert [pid for pid, _, _ in timeline] == [1, 3, 2, 4]
    assert timeline == [(1, 0, 7), (3, 7, 8), (2, 8, 12), (4, 12, 16)]
    by_pid = _by_pid(finished)
    assert [by_pid[pid].waiting_time for pid in (1, 2, 3, 4)] == [0, 7, 5, 9]
    assert all(len(p.exec_times) == 1 for p in finished)


def test_sjf_breaks_burst_ties_by_arrival():
    _, _, timeline = sjf([(1, 0, 3), (2, 2, 2), (3, 1, 2)])
    assert [pid for pid, _, _ in timeline] == [1, 3, 2]


def test_srtf_scenario(srtf_workload):
    name, finished, timeline = srtf(srtf_workload)
    assert name == "SRTF"
    assert timeline == [(1, 0, 1), (2, 1, 5), (4, 5, 10), (1, 10, 17), (3, 17, 26)]
    by_pid = _by_pid(finished)
    assert [by_pid[pid].waiting_time for pid in (1, 2, 3, 4)] == [9, 0, 15, 2]
    assert [(t.start, t.end) for t in by_pid[1].exec_times] == [(0, 1), (10, 17)]
    assert average_waiting_time(finished) == 6.5


def test_srtf_does_not_preempt_on_equal_remaining_time():
    # P2 arrives with exactly P1's remaining time; P1 keeps the CPU
    _, _, timeline = srtf([(1, 0, 4), (2, 1, 3)])
    assert timeline == [(1, 0, 4), (2, 4, 7)]


def test_srtf_ties_prefer_earlier_arrival_then_input_order():
    _, _, timeline = srtf([(1, 1, 2), (2, 0, 3), (3, 1, 2)])
    # at t=1 P2 has 2 left, P1 and P3 have 2; P2 arrived first and keeps running
    assert timeline == [(2, 0, 3), (1, 3, 5), (3, 5, 7)]


def test_srtf_counts_waiting_from_each_preemption():
    # P1 is preempted twice; each gap counts from the moment it left the CPU
    _, finished, timeline = srtf([(1, 0, 6), (2, 1, 2), (3, 4, 1)])
    assert timeline == [(1, 0, 1), (2, 1, 3), (1, 3, 4), (3, 4, 5), (1, 5, 9)]
    by_pid = _by_pid(finished)
    assert [by_pid[pid].waiting_time for pid in (1, 2, 3)] == [3, 0, 0]
    assert not any(hasattr(p, 'ready_since') for p in finished)


def test_rr_scenario(rr_workload):
    name, finished, timeline = round_robin(rr_workload, 2)
    assert name == "Round Robin"
    assert timeline == [(1, 0, 2), (2, 2, 4), (3, 4, 5), (1, 5, 7), (2, 7, 8), (1, 8, 9)]
    by_pid = _by_pid(finished)
    assert [by_pid[pid].waiting_time for pid in (1, 2, 3)] == [4, 4, 2]
    assert by_pid[3].exec_times[0].duration == 1


def test_rr_only_counts_waiting_after_arrival():
    # P2 arrives in the middle of P1's 4-unit slice
    _, finished, timeline = round_robin([(1, 0, 4), (2, 3, 2)], 4)
    assert timeline == [(1, 0, 4), (2, 4, 6)]
    assert _by_pid(finished)[2].waiting_time == 1


def test_rr_restarts_cycle_after_idle_gap():
    _, _, timeline = round_robin([(1, 3, 1), (2, 0, 1), (3, 3, 1)], 2)
    assert timeline == [(2, 0, 1), (1, 3, 4), (3, 4, 5)]


def test_rr_repeated_slices_are_separate_dispatches():
    _, finished, _ = round_robin([(1, 0, 5)], 2)
    assert [(t.start, t.end) for t in finished[0].exec_times] == [(0, 2), (2, 4), (4, 5)]


def test_rr_uses_default_quantum(monkeypatch, rr_workload):
    from config import Config
    monkeypatch.setattr(Config, "DEFAULT_QUANTUM", 5)
    _, _, timeline = round_robin(rr_workload)
    assert timeline == [(1, 0, 5), (2, 5, 8), (3, 8, 9)]


@pytest.mark.parametrize("quantum", [0, -1, 1.5, "2", True])
def test_rr_rejects_bad_quantum(quantum, rr_workload):
    with pytest.raises(InvalidQuantum):
        round_robin(rr_workload, quantum)


# Selection policies

def test_selection_returns_none_when_nothing_ready():
    procs = [Process(1, 4, 2)]
    assert select_fcfs(procs, 0) is None
    assert select_sjf(procs, 0) is None
    assert select_srtf(procs, 0) is None
    assert select_rr(procs, 0, 0) is None


def test_select_rr_wraps_around():
    procs = [Process(1, 0, 2), Process(2, 9, 2), Process(3, 0, 2)]
    assert select_rr(procs, 0, 1) == 2
    procs[2].record_run(0, 2)
    assert select_rr(procs, 2, 1) == 0


def test_select_srtf_uses_remaining_time():
    procs = [Process(1, 0, 8), Process(2, 0, 4)]
    procs[0].record_run(0, 6)
    assert select_srtf(procs, 6).pid == 1
    assert select_sjf(procs, 6).pid == 2


# Dispatcher

@pytest.mark.parametrize("selector,expected", [
    ("FCFS", "FCFS"),
    ("sjf", "SJF"),
    (" srtf ", "SRTF"),
    ("Round Robin", "RR"),
    ("round_robin", "RR"),
    (0, "FCFS"),
    (1, "SJF"),
    (2, "SRTF"),
    (3, "RR"),
    ("3", "RR"),
])
def test_resolve_algorithm(selector, expected):
    assert resolve_algorithm(selector) == expected


@pytest.mark.parametrize("selector", ["PRIORITY", "", 4, -1, None, True, 2.0])
def test_unsupported_algorithm(selector):
    with pytest.raises(UnsupportedAlgorithm):
        run_algorithm(selector, [(1, 0, 1)])


def test_run_algorithm_rejects_duplicate_ids():
    with pytest.raises(InvalidWorkload):
        run_algorithm("RR", [(1, 0, 3), (1, 1, 2)], 2)


def test_run_all_covers_every_algorithm(fcfs_workload):
    names = [name for name, _, _ in run_all(fcfs_workload, 2)]
    assert names == ["FCFS", "SJF", "SRTF", "Round Robin"]
