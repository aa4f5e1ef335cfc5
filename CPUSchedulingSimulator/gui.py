import tkinter as tk
from tkinter import ttk, messagebox, simpledialog, filedialog
from tkinter.scrolledtext import ScrolledText
import datetime

from backend import export_report, load_workload, log_action
from chart import plot_gantt
from config import Config
from errors import SchedulingError
from report import build_report, format_comparison, format_report, format_timeline
from scheduling import ALGORITHM_CODES, run_algorithm, run_all

ALGORITHM_BUTTONS = [
    ("First-Come, First-Served (FCFS)", "FCFS"),
    ("Shortest Job First (SJF)", "SJF"),
    ("Shortest Remaining Time First (SRTF)", "SRTF"),
    ("Round Robin", "RR"),
]

BACKGROUND = "#eef1f4"
FONT = ("Helvetica", 10)

# Only the styles SchedulerGUI refers to
BUTTON_STYLES = {
    'Accent.TButton': ("#2f5d8c", "#244a70"),
    'Warning.TButton': ("#b03a2e", "#8e2f25"),
}

def configure_styles():
    style = ttk.Style()
    style.theme_use('clam')
    style.configure('.', font=FONT, background=BACKGROUND)
    for name, (color, pressed) in BUTTON_STYLES.items():
        style.configure(name, foreground='white', background=color, padding=5)
        style.map(name, background=[('active', pressed)])
    style.configure('Treeview', rowheight=24)

class SchedulerGUI:
    def __init__(self, root):
        self.root = root
        self.root.title("CPU Scheduling Simulator")
        self.root.geometry("900x620")
        self.root.minsize(760, 520)
        self.root.configure(bg=BACKGROUND)

        self.processes = []
        self.quantum = Config.DEFAULT_QUANTUM
        self.recent_actions = []

        configure_styles()
        self.setup_ui()

    def setup_ui(self):
        main_container = ttk.Frame(self.root)
        main_container.pack(fill='both', expand=True, padx=10, pady=10)

        form = ttk.LabelFrame(main_container, text=" Add Process ", padding=10)
        form.pack(fill='x', pady=(0, 10))

        ttk.Label(form, text="Process ID:").grid(row=0, column=0, sticky='w')
        self.pid_entry = ttk.Entry(form, width=10)
        self.pid_entry.grid(row=0, column=1, padx=5)

        ttk.Label(form, text="Arrival Time:").grid(row=0, column=2, sticky='w')
        self.arrival_entry = ttk.Entry(form, width=10)
        self.arrival_entry.grid(row=0, column=3, padx=5)

        ttk.Label(form, text="Burst Time:").grid(row=0, column=4, sticky='w')
        self.burst_entry = ttk.Entry(form, width=10)
        self.burst_entry.grid(row=0, column=5, padx=5)

        ttk.Button(form, text="Add Process", command=self.add_process, style='Accent.TButton').grid(row=0, column=6, padx=10)
        ttk.Button(form, text="Load Workload", command=self.load_file).grid(row=0, column=7)

        content_frame = ttk.Frame(main_container)
        content_frame.pack(fill='both', expand=True)

        tree_frame = ttk.Frame(content_frame)
        tree_frame.pack(fill='both', expand=True, side='left')

        columns = ('PID', 'Arrival', 'Burst')
        self.tree = ttk.Treeview(tree_frame, columns=columns, show='headings', selectmode="extended")
        for col in columns:
            self.tree.heading(col, text=col)
            self.tree.column(col, width=120, anchor='center')
        self.tree.pack(side='left', fill='both', expand=True)

        scrollbar = ttk.Scrollbar(tree_frame, orient='vertical', command=self.tree.yview)
        self.tree.configure(yscrollcommand=scrollbar.set)
        scrollbar.pack(side='right', fill='y')

        btn_frame = ttk.Frame(content_frame)
        btn_frame.pack(fill='y', side='right', padx=(10, 0))
        for text, key in ALGORITHM_BUTTONS:
            ttk.Button(btn_frame, text=text, command=lambda key=key: self.run_scheduling(key),
                       style='Accent.TButton', width=34).pack(fill='x', pady=3)
        ttk.Button(btn_frame, text="Compare All", command=self.compare_all, width=34).pack(fill='x', pady=3)
        ttk.Button(btn_frame, text="Remove Selected", command=self.remove_selected, style='Warning.TButton', width=34).pack(fill='x', pady=(20, 3))
        ttk.Button(btn_frame, text="Clear", command=self.clear_processes, width=34).pack(fill='x', pady=3)

        actions_frame = ttk.LabelFrame(main_container, text=" Recent Actions ", padding=10)
        actions_frame.pack(fill='x', pady=(10, 0))
        self.actions_text = tk.Text(actions_frame, height=4, state='disabled', font=("Segoe UI", 9), bg='white', padx=10, pady=10, wrap='word')
        self.actions_text.pack(fill='x')

    def refresh_processes(self):
        self.tree.delete(*self.tree.get_children())
        for p in self.processes:
            self.tree.insert('', 'end', values=(p['pid'], p['arrival_time'], p['burst_time']))

    def add_process(self):
        try:
            process = {
                'pid': int(self.pid_entry.get().strip()),
                'arrival_time': int(self.arrival_entry.get().strip()),
                'burst_time': int(self.burst_entry.get().strip()),
            }
        except ValueError:
            messagebox.showwarning("Input Error", "Process ID, Arrival Time and Burst Time must be integers.")
            return
        self.processes.append(process)
        self.refresh_processes()
        for entry in (self.pid_entry, self.arrival_entry, self.burst_entry):
            entry.delete(0, tk.END)
        self.pid_entry.focus_set()
        self.show_action(f"Added process {process['pid']}")

    def remove_selected(self):
        selected = [self.tree.index(item) for item in self.tree.selection()]
        if not selected:
            return
        self.processes = [p for i, p in enumerate(self.processes) if i not in selected]
        self.refresh_processes()
        self.show_action(f"Removed {len(selected)} process(es)")

    def clear_processes(self):
        self.processes = []
        self.refresh_processes()
        self.show_action("Cleared workload")

    def load_file(self):
        path = filedialog.askopenfilename(title="Open Workload",
                                          filetypes=[("Workload files", "*.txt"), ("All files", "*.*")])
        if not path:
            return
        try:
            code, quantum, processes = load_workload(path)
        except (OSError, SchedulingError) as e:
            messagebox.showerror("Load Error", f"Could not load {path}:\n{e}")
            return
        self.processes = processes
        if quantum > 0:
            self.quantum = quantum
        self.refresh_processes()
        self.show_action(f"Loaded {len(processes)} processes from {path} (header selects {ALGORITHM_CODES.get(code, '?')})")

    def ask_quantum(self):
        return simpledialog.askinteger("Time Quantum", "Enter time quantum for Round Robin:",
                                       minvalue=1, initialvalue=self.quantum, parent=self.root)

    def run_scheduling(self, key):
        quantum = None
        if key == "RR":
            quantum = self.ask_quantum()
            if quantum is None:
                return
            self.quantum = quantum
        try:
            name, finished, timeline = run_algorithm(key, self.processes, quantum)
        except SchedulingError as e:
            messagebox.showwarning("Input Error", str(e))
            self.show_action(f"Error: {e}")
            return
        report = build_report(name, finished, timeline, quantum)
        log_action(f"Ran {name} on {len(finished)} processes")
        self.show_action(f"{name}: average waiting time {report['average_waiting_time']:.2f}")
        self.show_results(report)

    def compare_all(self):
        quantum = self.ask_quantum()
        if quantum is None:
            return
        self.quantum = quantum
        try:
            reports = [build_report(*result, quantum=quantum) for result in run_all(self.processes, quantum)]
        except SchedulingError as e:
            messagebox.showwarning("Input Error", str(e))
            return
        result_window = tk.Toplevel(self.root)
        result_window.title("Algorithm Comparison")
        result_window.geometry("420x220")
        result_text = ScrolledText(result_window, wrap='none', font=("Consolas", 10))
        result_text.pack(expand=True, fill='both')
        result_text.insert(tk.END, format_comparison(reports))
        result_text.config(state='disabled')
        self.show_action("Compared all algorithms")

    def show_results(self, report):
        result_window = tk.Toplevel(self.root)
        result_window.title(f"{report['algorithm']} Scheduling Results")
        result_window.geometry("640x420")

        result_text = ScrolledText(result_window, wrap='word', font=("Consolas", 10))
        result_text.pack(expand=True, fill='both')
        result_text.insert(tk.END, format_report(report) + "\n")
        result_text.insert(tk.END, f"Average turnaround time: {report['average_turnaround_time']:.2f}\n\n")
        result_text.insert(tk.END, "Execution Timeline (Gantt Chart Data):\n")
        result_text.insert(tk.END, format_timeline(report) + "\n")
        result_text.config(state='disabled')

        def export():
            directory = filedialog.askdirectory(title="Export Report To", parent=result_window)
            if not directory:
                return
            try:
                json_path, csv_path = export_report(report, directory=directory)
            except OSError as e:
                messagebox.showerror("Export Error", str(e), parent=result_window)
                return
            self.show_action(f"Report saved to {json_path}, {csv_path}")

        btn_frame = ttk.Frame(result_window)
        btn_frame.pack(pady=5)
        ttk.Button(btn_frame, text="Show Gantt Chart", command=lambda: plot_gantt(report, show=True)).pack(side='left', padx=5)
        ttk.Button(btn_frame, text="Export Report", command=export).pack(side='left', padx=5)

    def show_action(self, msg):
        timestamp = datetime.datetime.now().strftime('%H:%M:%S')
        action = f"{timestamp} - {msg}"
        self.recent_actions.append(action)
        if len(self.recent_actions) > 5:
            self.recent_actions = self.recent_actions[-5:]
        self.actions_text.config(state='normal')
        self.actions_text.delete('1.0', tk.END)
        self.actions_text.insert('end', '\n'.join(self.recent_actions))
        self.actions_text.config(state='disabled')
