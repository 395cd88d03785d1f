"""
Logging and progress reporting
"""

from .log_manager import LogManager
from .progress_reporter import ProgressReporter

__all__ = [
    'LogManager',
    'ProgressReporter'
]
