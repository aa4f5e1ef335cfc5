import os

class Config:
    LOG_FILE = os.environ.get('CPU_SCHEDULER_LOG_FILE') or 'scheduler_simulator.log'
    LOG_LEVEL = os.environ.get('CPU_SCHEDULER_LOG_LEVEL') or 'INFO'
    DEFAULT_QUANTUM = int(os.environ.get('CPU_SCHEDULER_QUANTUM') or 2)
    EXPORT_BASENAME = os.environ.get('CPU_SCHEDULER_EXPORT_BASENAME') or 'schedule_report'
