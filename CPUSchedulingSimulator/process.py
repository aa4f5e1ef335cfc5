from collections import namedtuple
from collections.abc import Mapping

from errors import InvalidWorkload

# Lifecycle states
NEW = "NEW"          # not arrived yet
READY = "READY"
RUNNING = "RUNNING"
DONE = "DONE"


class ExecTime(namedtuple("ExecTime", "start end")):
    """One [start, end) span during which a process held the CPU."""
    __slots__ = ()

    @property
    def duration(self):
        return self.end - self.start


class Process:
    """
    Simulation record for a single job.
    Arrival and burst are the inputs; everything else is bookkeeping owned
    by the scheduling loop that is running it.
    """
    def __init__(self, pid, arrival_time, burst_time):
        self.pid = pid
        self.arrival_time = arrival_time
        self.burst_time = burst_time
        self.remaining_time = burst_time
        self.waiting_time = 0
        self.state = NEW
        self.exec_times = []
        self.completion_time = None

    def copy(self):
        return Process(self.pid, self.arrival_time, self.burst_time)

    @property
    def turnaround_time(self):
        if self.completion_time is None:
            return None
        return self.completion_time - self.arrival_time

    def has_arrived(self, current_time):
        return self.arrival_time <= current_time

    def is_done(self):
        return self.state == DONE

    def record_run(self, start, end):
        self.exec_times.append(ExecTime(start, end))
        self.remaining_time -= end - start
        if self.remaining_time == 0:
            self.state = DONE
            self.completion_time = end
        else:
            self.state = READY

    def __repr__(self):
        return (f"<Process pid={self.pid} arrival={self.arrival_time} burst={self.burst_time} "
                f"remaining={self.remaining_time} state={self.state}>")


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def _from_descriptor(item):
    if isinstance(item, Process):
        return item.copy()
    if isinstance(item, Mapping):
        pid = item.get('pid', item.get('id'))
        return Process(pid, item.get('arrival_time'), item.get('burst_time'))
    if isinstance(item, (tuple, list)) and len(item) == 3:
        return Process(*item)
    raise InvalidWorkload(f"Unrecognised process descriptor: {item!r}")


def validate_workload(processes):
    if not processes:
        raise InvalidWorkload("Workload must contain at least one process")
    seen = set()
    for p in processes:
        if not _is_int(p.pid):
            raise InvalidWorkload(f"Process id must be an integer, got {p.pid!r}")
        if p.pid in seen:
            raise InvalidWorkload(f"Duplicate process id {p.pid}")
        seen.add(p.pid)
        if not _is_int(p.arrival_time) or p.arrival_time < 0:
            raise InvalidWorkload(f"P[{p.pid}]: arrival time must be a non-negative integer, got {p.arrival_time!r}")
        if not _is_int(p.burst_time) or p.burst_time <= 0:
            raise InvalidWorkload(f"P[{p.pid}]: burst time must be a positive integer, got {p.burst_time!r}")


def make_processes(descriptors):
    """
    Build fresh Process records for one run.

    Accepts Process objects, mappings with pid (or id), arrival_time and
    burst_time keys, or (id, arrival, burst) tuples. The result never shares
    state with the input, so every algorithm run owns its own copy.
    """
    processes = [_from_descriptor(item) for item in descriptors or []]
    validate_workload(processes)
    return processes
