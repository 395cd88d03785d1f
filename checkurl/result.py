"""
Check Result - Data structures passed through the probing pipeline
"""

from dataclasses import dataclass
from typing import Optional

# Status code recorded when no HTTP response was obtained
UNREACHABLE = -1


@dataclass(frozen=True)
class URLTask:
    """A single URL as read from the input file"""
    original_url: str


@dataclass(frozen=True)
class ProbeOutcome:
    """Result of one reachability probe"""
    resolved_url: str
    status_code: int = UNREACHABLE
    was_redirected: bool = False
    error: Optional[str] = None
    response_time: float = 0.0

    @property
    def reachable(self) -> bool:
        return self.status_code != UNREACHABLE


@dataclass(frozen=True)
class CaptureOutcome:
    """Result of one rendering attempt"""
    title: str = ""
    screenshot: bytes = b""
    final_url: str = ""
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return len(self.screenshot) > 0


@dataclass(frozen=True)
class CheckResult:
    """Terminal result of checking a single URL"""
    original_url: str
    final_url: str
    title: str = ""
    status_code: int = UNREACHABLE
    screenshot: bytes = b""
    was_redirected: bool = False
    attempts: int = 0

    @property
    def accessible(self) -> bool:
        return self.status_code != UNREACHABLE

    @classmethod
    def unreachable(cls, original_url: str, final_url: str, attempts: int = 0) -> 'CheckResult':
        """Build the result for a URL that never produced an HTTP response"""
        return cls(original_url=original_url, final_url=final_url, attempts=attempts)
