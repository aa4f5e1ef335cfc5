class SchedulingError(Exception):
    """Base class for every error the simulator reports to its caller."""


class InvalidWorkload(SchedulingError, ValueError):
    pass


class InvalidQuantum(SchedulingError, ValueError):
    pass


class UnsupportedAlgorithm(SchedulingError, ValueError):
    pass


class WorkloadFormatError(SchedulingError, ValueError):
    """Workload text could not be parsed (raised by the file reader only)."""
