import csv
import datetime
import json
import logging
import os

from config import Config
from errors import WorkloadFormatError

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s %(levelname)s: %(message)s'

def setup_logging(log_file=None, level=None):
    logging.basicConfig(filename=log_file or Config.LOG_FILE,
                        level=(level or Config.LOG_LEVEL).upper(),
                        format=LOG_FORMAT)

def log_action(action):
    logger.info(action)

def _to_int(token, what):
    try:
        return int(token)
    except ValueError:
        raise WorkloadFormatError(f"Invalid {what}: {token!r} is not an integer") from None

def parse_workload(text):
    """
    Parse a workload description.

    The first three integers are the header: algorithm code (0 FCFS, 1 SJF,
    2 SRTF, 3 RR), number of processes and time quantum. Each process then
    takes three integers: id, arrival time and burst time.
    Returns (algorithm_code, quantum, processes) with processes as dicts.
    """
    tokens = text.split()
    if len(tokens) < 3:
        raise WorkloadFormatError("Missing header: expected '<algorithm> <count> <quantum>'")
    algorithm = _to_int(tokens[0], "algorithm code")
    count = _to_int(tokens[1], "process count")
    quantum = _to_int(tokens[2], "time quantum")
    if count < 0:
        raise WorkloadFormatError(f"Process count must not be negative, got {count}")

    body = tokens[3:]
    if len(body) < count * 3:
        raise WorkloadFormatError(f"Expected {count} processes, found only {len(body) // 3}")
    if len(body) > count * 3:
        logger.warning(f"Ignoring {len(body) - count * 3} extra token(s) after {count} processes")

    processes = []
    for i in range(count):
        pid, arrival, burst = body[i * 3:i * 3 + 3]
        processes.append({
            'pid': _to_int(pid, f"id of process {i + 1}"),
            'arrival_time': _to_int(arrival, f"arrival time of process {i + 1}"),
            'burst_time': _to_int(burst, f"burst time of process {i + 1}"),
        })
    return algorithm, quantum, processes

def load_workload(path):
    with open(path, encoding="utf-8") as f:
        try:
            text = f.read()
        except UnicodeDecodeError as e:
            raise WorkloadFormatError(f"{path} is not a text workload file ({e.reason})") from None
    workload = parse_workload(text)
    log_action(f"Loaded workload {path} ({len(workload[2])} processes)")
    return workload

def export_report(report, base_filename=None, directory="."):
    base_filename = base_filename or Config.EXPORT_BASENAME
    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    algorithm = report['algorithm'].replace(" ", "_").lower()
    stem = os.path.join(directory, f"{base_filename}_{algorithm}_{timestamp}")
    json_path = f"{stem}.json"
    csv_path = f"{stem}.csv"
    with open(json_path, "w", encoding="utf-8") as jf:
        json.dump(report, jf, indent=2)
    with open(csv_path, "w", newline='', encoding="utf-8") as cf:
        writer = csv.DictWriter(cf, fieldnames=['pid', 'arrival_time', 'burst_time', 'exec_times',
                                                'waiting_time', 'completion_time', 'turnaround_time'])
        writer.writeheader()
        for row in report['processes']:
            row = dict(row)
            row['exec_times'] = ";".join(f"{start}-{end}" for start, end in row['exec_times'])
            writer.writerow(row)
    log_action(f"Exported {report['algorithm']} report to {json_path}, {csv_path}")
    return json_path, csv_path
