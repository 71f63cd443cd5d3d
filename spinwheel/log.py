"""
Tiered log module (log.py)

Every category writes to its own daily file:
    log_files/<CATEGORY>/YYYYMMDD.log
The public helpers below only pick the category and whether a traceback is
attached; the file handling lives in one core function.
"""
from datetime import datetime
import traceback
import os
import sys
from typing import Optional

# --- Log folder (always an external, writable location) ---
if os.environ.get("SPINWHEEL_LOG_DIR"):
    BASE_DIR = os.environ["SPINWHEEL_LOG_DIR"]
elif getattr(sys, 'frozen', False):
    # EXE mode: next to the executable
    BASE_DIR = os.path.dirname(sys.executable)
else:
    # Source mode: project root (one level above the spinwheel package)
    BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

LOG_DIR = os.path.join(BASE_DIR, "log_files")


# --- Core writer (private) ---

def _write_log_core(
    sub_folder: str,
    message: str,
    trace_info: Optional[str] = None
):
    """
    Core writer: builds the path, formats the entry and appends it.

    Args:
        sub_folder (str): category folder name ("ERROR", "INFO", ...).
        message (str): caller supplied message.
        trace_info (str): optional traceback text.
    """
    category_dir = os.path.join(LOG_DIR, sub_folder)
    try:
        os.makedirs(category_dir, exist_ok=True)
    except OSError as e:
        print(f"Cannot create log directory {category_dir}: {e}")
        return

    today = datetime.now()
    file_name = today.strftime("%Y%m%d") + '.log'
    full_path = os.path.join(category_dir, file_name)

    happen_time = today.strftime("%H:%M:%S.%f")[:-3]

    log_entry = f"[{happen_time}] [{sub_folder}]: {message}\n"

    # format_exc() returns "NoneType: None" outside of an except block
    if trace_info and trace_info.strip() and trace_info.strip() != "NoneType: None":
        log_entry += f"--- TRACEBACK ---\n{trace_info}\n"

    try:
        with open(full_path, 'a', encoding='utf-8') as fobj:
            fobj.write(log_entry)
    except OSError as write_e:
        print(f"Fatal: cannot write log file {full_path}: {write_e}")


# --- Public API ---

def log_error_app(message: str):
    """Application logic errors (log_files/ERROR/). Traceback is captured automatically."""
    trace_info = traceback.format_exc()
    _write_log_core("ERROR", message, trace_info)


def log_storage(message: str):
    """Wheel/result file I/O problems (log_files/STORAGE/). Traceback is captured automatically."""
    trace_info = traceback.format_exc()
    _write_log_core("STORAGE", message, trace_info)


def log_anomaly(message: str):
    """Numeric-precision anomalies seen by the engine (log_files/ANOMALY/)."""
    _write_log_core("ANOMALY", message)


def log_transaction(message: str, include_trace: bool = False):
    """
    Normal flow: spins started, winners, wheels saved (log_files/INFO/).
    :param message: text to record.
    :param include_trace: attach the current exception traceback (default False).
    """
    trace_info = None
    if include_trace:
        trace_info = traceback.format_exc()
    _write_log_core("INFO", message, trace_info)
