"""
URL checking pipeline - scheduler, builder and result types
"""

from .base import URLChecker
from .builder import CheckerBuilder
from .check_config import CheckConfig
from ..result import URLTask, ProbeOutcome, CaptureOutcome, CheckResult, UNREACHABLE
from .summary import Summary, summarize

__all__ = [
    'URLChecker',
    'CheckerBuilder',
    'CheckConfig',
    'URLTask',
    'ProbeOutcome',
    'CaptureOutcome',
    'CheckResult',
    'UNREACHABLE',
    'Summary',
    'summarize'
]
