from dataclasses import dataclass
from typing import Optional
from ..error_handler import RetryConfig
from ..utils.probe import DEFAULT_USER_AGENT


@dataclass
class CheckConfig:
    """Configuration for a batch URL check"""
    concurrency: int = 4
    retry: RetryConfig = None
    headless: bool = True
    viewport_width: int = 1280
    viewport_height: int = 1024
    load_timeout: float = 30.0
    stability_polls: int = 6
    stability_interval: float = 0.5
    user_agent: str = DEFAULT_USER_AGENT
    progress_interval: Optional[float] = 30.0

    def __post_init__(self):
        if self.retry is None:
            self.retry = RetryConfig()
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {self.concurrency}")
