import matplotlib
matplotlib.use("Agg")

import pytest


@pytest.fixture
def fcfs_workload():
    return [(1, 0, 5), (2, 1, 3), (3, 2, 8)]


@pytest.fixture
def sjf_workload():
    return [(1, 0, 7), (2, 1, 4), (3, 2, 1), (4, 3, 4)]


@pytest.fixture
def srtf_workload():
    return [(1, 0, 8), (2, 1, 4), (3, 2, 9), (4, 3, 5)]


@pytest.fixture
def rr_workload():
    return [(1, 0, 5), (2, 1, 3), (3, 2, 1)]


@pytest.fixture
def workload_file(tmp_path):
    path = tmp_path / "workload.txt"
    path.write_text("3 3 2\n1 0 5\n2 1 3\n3 2 1\n")
    return path
