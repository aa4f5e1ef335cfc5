def average_waiting_time(processes):
    if not processes:
        return 0.0
    return sum(p.waiting_time for p in processes) / len(processes)

def average_turnaround_time(processes):
    if not processes:
        return 0.0
    return sum(p.turnaround_time for p in processes) / len(processes)

def build_report(name, processes, timeline, quantum=None):
    """
    Collect the outcome of one scheduling run into a plain dict.

    ``processes`` are the finished records returned by the algorithm (input
    order is kept); ``timeline`` is the (pid, start, end) dispatch list.
    """
    rows = []
    for p in processes:
        rows.append({
            'pid': p.pid,
            'arrival_time': p.arrival_time,
            'burst_time': p.burst_time,
            'exec_times': [[t.start, t.end] for t in p.exec_times],
            'waiting_time': p.waiting_time,
            'completion_time': p.completion_time,
            'turnaround_time': p.turnaround_time,
        })
    completion_order = [p.pid for p in sorted(processes, key=lambda p: p.completion_time)]
    return {
        'algorithm': name,
        'quantum': quantum if name == "Round Robin" else None,
        'processes': rows,
        'completion_order': completion_order,
        'timeline': [list(entry) for entry in timeline],
        'average_waiting_time': average_waiting_time(processes),
        'average_turnaround_time': average_turnaround_time(processes),
    }

def format_report(report):
    lines = []
    title = f"{report['algorithm']} Scheduling Results"
    if report.get('quantum'):
        title += f" (quantum = {report['quantum']})"
    lines.append(title + ":")
    for row in report['processes']:
        times = "".join(f"Start Time: {start} End Time: {end} | " for start, end in row['exec_times'])
        lines.append(f"P[{row['pid']}] {times}Waiting time: {row['waiting_time']}")
    lines.append(f"Average waiting time: {report['average_waiting_time']:.2f}")
    return "\n".join(lines)

def format_timeline(report):
    return "\n".join(f"Process {pid} runs from {start} to {end}" for pid, start, end in report['timeline'])

def format_comparison(reports):
    lines = ["Algorithm       Avg Wait    Avg Turnaround", "-" * 42]
    for report in reports:
        lines.append(f"{report['algorithm']:<16}{report['average_waiting_time']:<12.2f}"
                     f"{report['average_turnaround_time']:.2f}")
    return "\n".join(lines)
