import tkinter as tk

from backend import setup_logging
from gui import SchedulerGUI

def main():
    setup_logging()
    root = tk.Tk()
    SchedulerGUI(root)
    root.mainloop()

if __name__ == "__main__":
    main()
