import logging

from config import Config
from errors import InvalidQuantum, UnsupportedAlgorithm
from process import NEW, READY, RUNNING, make_processes
from report import average_waiting_time

logger = logging.getLogger(__name__)

# Algorithm codes used in the header of workload files
ALGORITHM_CODES = {0: "FCFS", 1: "SJF", 2: "SRTF", 3: "RR"}
ALGORITHM_ALIASES = {
    "ROUND ROBIN": "RR",
    "ROUND_ROBIN": "RR",
    "ROUND-ROBIN": "RR",
}


# Selection policies

def _eligible(processes, current_time):
    return [p for p in processes if not p.is_done() and p.has_arrived(current_time)]

def select_fcfs(processes, current_time):
    ready = _eligible(processes, current_time)
    if not ready:
        return None
    # min() keeps the first of equal keys, so ties fall back to input order
    return min(ready, key=lambda p: p.arrival_time)

def select_sjf(processes, current_time):
    ready = _eligible(processes, current_time)
    if not ready:
        return None
    return min(ready, key=lambda p: (p.burst_time, p.arrival_time))

def select_srtf(processes, current_time):
    ready = _eligible(processes, current_time)
    if not ready:
        return None
    return min(ready, key=lambda p: (p.remaining_time, p.arrival_time))

def select_rr(processes, current_time, cursor):
    """
    Index of the first runnable process at or after ``cursor`` in cyclic
    order, or None when a full sweep finds nothing runnable.
    """
    count = len(processes)
    for offset in range(count):
        index = (cursor + offset) % count
        p = processes[index]
        if not p.is_done() and p.has_arrived(current_time):
            return index
    return None


# Simulation loops

def _admit(processes, current_time):
    for p in processes:
        if p.state == NEW and p.has_arrived(current_time):
            p.state = READY

def _record(process, start, end, timeline):
    process.record_run(start, end)
    timeline.append((process.pid, start, end))
    logger.debug(f"P[{process.pid}] ran {start}-{end}, {process.remaining_time} left")

def _run_non_preemptive(name, processes, select):
    processes = make_processes(processes)
    current_time = 0
    timeline = []
    pending = len(processes)
    while pending:
        _admit(processes, current_time)
        current = select(processes, current_time)
        if current is None:
            current_time += 1
            continue
        current.state = RUNNING
        current.waiting_time = current_time - current.arrival_time
        _record(current, current_time, current_time + current.remaining_time, timeline)
        current_time = current.completion_time
        pending -= 1
    return name, processes, timeline

def fcfs(processes):
    return _run_non_preemptive("FCFS", processes, select_fcfs)

def sjf(processes):
    return _run_non_preemptive("SJF", processes, select_sjf)

def _has_shorter(processes, current, remaining, current_time):
    return any(
        p is not current and not p.is_done() and p.has_arrived(current_time) and p.remaining_time < remaining
        for p in processes
    )

def srtf(processes):
    processes = make_processes(processes)
    current_time = 0
    timeline = []
    pending = len(processes)
    # time each process last became ready; waiting is counted from here
    ready_since = {p.pid: p.arrival_time for p in processes}
    while pending:
        _admit(processes, current_time)
        current = select_srtf(processes, current_time)
        if current is None:
            current_time += 1
            continue
        start = current_time
        current.state = RUNNING
        current.waiting_time += start - ready_since[current.pid]
        left = current.remaining_time
        while left > 0:
            left -= 1
            current_time += 1
            if left and _has_shorter(processes, current, left, current_time):
                logger.debug(f"P[{current.pid}] preempted at {current_time}")
                break
        _record(current, start, current_time, timeline)
        ready_since[current.pid] = current_time
        if current.is_done():
            pending -= 1
    return "SRTF", processes, timeline

def _check_quantum(quantum):
    if quantum is None:
        quantum = Config.DEFAULT_QUANTUM
    if not isinstance(quantum, int) or isinstance(quantum, bool) or quantum <= 0:
        raise InvalidQuantum(f"Time quantum must be a positive integer, got {quantum!r}")
    return quantum

def round_robin(processes, quantum=None):
    quantum = _check_quantum(quantum)
    processes = make_processes(processes)
    current_time = 0
    timeline = []
    pending = len(processes)
    cursor = 0
    while pending:
        _admit(processes, current_time)
        index = select_rr(processes, current_time, cursor)
        if index is None:
            # CPU idle: nothing has arrived yet, start the next cycle from the top
            current_time += 1
            cursor = 0
            continue
        current = processes[index]
        current.state = RUNNING
        end = current_time + min(current.remaining_time, quantum)
        for other in processes:
            if other is current or other.is_done() or other.arrival_time >= end:
                continue
            # only the part of the slice after the other process arrived counts
            other.waiting_time += end - max(current_time, other.arrival_time)
        _record(current, current_time, end, timeline)
        current_time = end
        if current.is_done():
            pending -= 1
        cursor = (index + 1) % len(processes)
    return "Round Robin", processes, timeline


ALGORITHMS = {
    "FCFS": fcfs,
    "SJF": sjf,
    "SRTF": srtf,
    "RR": round_robin,
}

def resolve_algorithm(algorithm):
    """Map a name, alias or workload-file code onto a key of ALGORITHMS."""
    key = None
    if isinstance(algorithm, int) and not isinstance(algorithm, bool):
        key = ALGORITHM_CODES.get(algorithm)
    elif isinstance(algorithm, str):
        text = algorithm.strip().upper()
        if text.isdigit():
            key = ALGORITHM_CODES.get(int(text))
        else:
            key = ALGORITHM_ALIASES.get(text, text)
    if key not in ALGORITHMS:
        raise UnsupportedAlgorithm(f"Unsupported scheduling algorithm: {algorithm!r}")
    return key

def run_algorithm(algorithm, processes, quantum=None):
    key = resolve_algorithm(algorithm)
    if key == "RR":
        name, finished, timeline = round_robin(processes, quantum)
    else:
        name, finished, timeline = ALGORITHMS[key](processes)
    logger.info(f"{name}: {len(finished)} processes done at t={timeline[-1][2]}, "
                f"average waiting time {average_waiting_time(finished):.2f}")
    return name, finished, timeline

def run_all(processes, quantum=None):
    return [run_algorithm(key, processes, quantum) for key in ALGORITHMS]
