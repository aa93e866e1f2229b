"""
StickFigure Logging Utility

Provides timestamped console logging for the skeleton, view and export
components.
"""

from datetime import datetime
from typing import Optional


LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}

_min_level = LEVELS["INFO"]


def set_log_level(level: str) -> None:
    """
    Set the minimum level that is printed.

    Args:
        level: One of DEBUG, INFO, WARN, ERROR
    """
    global _min_level
    key = level.upper()
    if key not in LEVELS:
        raise ValueError(f"Unknown log level: {level}. Expected one of {list(LEVELS)}")
    _min_level = LEVELS[key]


def log(message: str, level: str = "INFO", component: Optional[str] = None) -> None:
    """
    Print a timestamped log message.
    
    Args:
        message: The message to log
        level: Log level (INFO, WARN, ERROR, DEBUG)
        component: Optional component name (e.g., "Skeleton", "View")
    """
    if LEVELS.get(level, LEVELS["INFO"]) < _min_level:
        return

    timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]  # HH:MM:SS.mmm
    
    if component:
        prefix = f"[{timestamp}] [{level}] [{component}]"
    else:
        prefix = f"[{timestamp}] [{level}]"
    
    print(f"{prefix} {message}")


def log_info(message: str, component: Optional[str] = None) -> None:
    """Log an info message."""
    log(message, "INFO", component)


def log_warn(message: str, component: Optional[str] = None) -> None:
    """Log a warning message."""
    log(message, "WARN", component)


def log_error(message: str, component: Optional[str] = None) -> None:
    """Log an error message."""
    log(message, "ERROR", component)


def log_debug(message: str, component: Optional[str] = None) -> None:
    """Log a debug message."""
    log(message, "DEBUG", component)


class ComponentLogger:
    """Logger bound to a specific component."""
    
    def __init__(self, component: str):
        self.component = component
    
    def info(self, message: str) -> None:
        log_info(message, self.component)
    
    def warn(self, message: str) -> None:
        log_warn(message, self.component)
    
    def error(self, message: str) -> None:
        log_error(message, self.component)
    
    def debug(self, message: str) -> None:
        log_debug(message, self.component)


skeleton_log = ComponentLogger("Skeleton")
view_log = ComponentLogger("View")
export_log = ComponentLogger("Export")
gui_log = ComponentLogger("GUI")
