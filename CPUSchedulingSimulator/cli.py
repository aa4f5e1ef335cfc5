import argparse
import logging
import os
import sys

import matplotlib.pyplot as plt

from backend import export_report, load_workload, log_action, setup_logging
from chart import plot_gantt
from config import Config
from errors import SchedulingError
from report import build_report, format_comparison, format_report, format_timeline
from scheduling import ALGORITHM_CODES, run_algorithm, run_all

logger = logging.getLogger(__name__)

MENU = [
    ("1", "FCFS"),
    ("2", "SJF"),
    ("3", "SRTF"),
    ("4", "Round Robin"),
    ("5", "Compare all"),
    ("6", "Exit"),
]

def build_parser():
    parser = argparse.ArgumentParser(
        prog="cpu-scheduler",
        description="Simulate FCFS, SJF, SRTF and Round Robin CPU scheduling over a workload file.")
    parser.add_argument('workload', nargs='?',
                        help="workload file; prompted for when omitted")
    parser.add_argument('--algorithm', '-a',
                        help="FCFS, SJF, SRTF or RR (overrides the code in the file header)")
    parser.add_argument('--quantum', '-q', type=int,
                        help="Round Robin time quantum (overrides the file header)")
    parser.add_argument('--all', action='store_true', help="run every algorithm and compare them")
    parser.add_argument('--chart', help="save a Gantt chart PNG to this path")
    parser.add_argument('--export', metavar='DIR', help="export JSON and CSV reports into DIR")
    parser.add_argument('--interactive', action='store_true', help="enter processes by hand")
    parser.add_argument('--log-file', default=Config.LOG_FILE)
    parser.add_argument('--log-level', default=Config.LOG_LEVEL,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], type=str.upper)
    return parser

def prompt_filename():
    return input("Input filename (w/o .txt): ").strip() + ".txt"

def _chart_path(path, name, many):
    if not many:
        return path
    root, ext = os.path.splitext(path)
    return f"{root}_{name.replace(' ', '_').lower()}{ext or '.png'}"

def print_results(reports, chart=None, export_dir=None):
    for report in reports:
        print(format_report(report))
        print()
        if chart:
            fig = plot_gantt(report, path=_chart_path(chart, report['algorithm'], len(reports) > 1))
            plt.close(fig)
        if export_dir:
            json_path, csv_path = export_report(report, directory=export_dir)
            print(f"Report saved to:\n  JSON: {json_path}\n  CSV: {csv_path}\n")
    if len(reports) > 1:
        print(format_comparison(reports))

def run_workload(path, algorithm=None, quantum=None, compare=False):
    code, file_quantum, processes = load_workload(path)
    if compare:
        if quantum is None:
            quantum = file_quantum if file_quantum > 0 else Config.DEFAULT_QUANTUM
        results = run_all(processes, quantum)
    else:
        if quantum is None:
            quantum = file_quantum
        results = [run_algorithm(algorithm if algorithm is not None else code, processes, quantum)]
    return [build_report(name, finished, timeline, quantum) for name, finished, timeline in results]

def _ask_int(prompt):
    while True:
        try:
            return int(input(prompt))
        except ValueError:
            print("Please enter an integer.")

def get_processes_from_user():
    processes = []
    n = _ask_int("Enter the number of processes: ")
    for i in range(n):
        processes.append({
            'pid': _ask_int(f"PID of process {i+1}: "),
            'arrival_time': _ask_int("Arrival time: "),
            'burst_time': _ask_int("Burst time: "),
        })
    return processes

def interactive_session():
    print("CPU Scheduling Simulator")
    processes = get_processes_from_user()
    while True:
        print("\nSelect Algorithm:")
        for key, label in MENU:
            print(f"{key}. {label}")
        choice = input("Choice: ").strip()
        try:
            if choice in ("1", "2", "3"):
                name, finished, timeline = run_algorithm(ALGORITHM_CODES[int(choice) - 1], processes)
                report = build_report(name, finished, timeline)
                print(format_report(report))
                print("\nExecution Timeline:")
                print(format_timeline(report))
            elif choice == "4":
                q = _ask_int("Time Quantum: ")
                report = build_report(*run_algorithm("RR", processes, q), quantum=q)
                print(format_report(report))
                print("\nExecution Timeline:")
                print(format_timeline(report))
            elif choice == "5":
                q = _ask_int("Time Quantum: ")
                print(format_comparison([build_report(*result, quantum=q) for result in run_all(processes, q)]))
            elif choice == "6":
                print("Exiting.")
                break
            else:
                print("Invalid choice.")
        except SchedulingError as e:
            print(f"Error: {e}")

def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.log_file, args.log_level)

    if args.interactive:
        interactive_session()
        return 0

    path = args.workload or prompt_filename()
    try:
        reports = run_workload(path, args.algorithm, args.quantum, args.all)
    except FileNotFoundError:
        logger.error(f"Workload file not found: {path}")
        print(f"{path} is not found!", file=sys.stderr)
        return 1
    except OSError as e:
        logger.error(f"Could not read {path}: {e}")
        print(f"Could not read {path}: {e}", file=sys.stderr)
        return 1
    except SchedulingError as e:
        logger.error(f"{path}: {e}")
        print(f"Invalid inputs, check contents of {path}: {e}", file=sys.stderr)
        return 1

    log_action(f"Ran {', '.join(r['algorithm'] for r in reports)} on {path}")
    try:
        print_results(reports, chart=args.chart, export_dir=args.export)
    except OSError as e:
        logger.error(f"Could not write output: {e}")
        print(f"Could not write output: {e}", file=sys.stderr)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
