import matplotlib.pyplot as plt

def plot_gantt(report, path=None, show=False):
    """Draw one row per process and one bar per execution interval."""
    rows = report['processes']
    fig, ax = plt.subplots(figsize=(10, 2 + 0.5 * len(rows)))
    colors = plt.cm.tab20.colors
    for i, row in enumerate(rows):
        bars = [(start, end - start) for start, end in row['exec_times']]
        ax.broken_barh(bars, (i * 10, 9), facecolors=colors[i % len(colors)], edgecolors='black')
        for start, width in bars:
            ax.text(start + width / 2, i * 10 + 4.5, f"P{row['pid']}", ha='center', va='center', color='black', fontsize=9)
    ax.set_ylim(0, len(rows) * 10)
    ax.set_xlabel("Time")
    ax.set_yticks([i * 10 + 4.5 for i in range(len(rows))])
    ax.set_yticklabels([f"P{row['pid']}" for row in rows])
    title = f"Gantt Chart - {report['algorithm']} Scheduling"
    ax.set_title(f"{title} (avg wait {report['average_waiting_time']:.2f})")
    plt.tight_layout()
    if path:
        try:
            fig.savefig(path)
        except OSError:
            plt.close(fig)
            raise
    if show:
        plt.show()
    return fig
