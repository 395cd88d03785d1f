import logging
from pathlib import Path
from datetime import datetime
from typing import Optional


class LogManager:
    """Console logging with optional per-day log files"""

    def __init__(self, log_dir: Optional[str] = None, log_level: str = "INFO"):
        self.log_dir = Path(log_dir) if log_dir else None
        if self.log_dir:
            self.log_dir.mkdir(parents=True, exist_ok=True)

        self.setup_logging(log_level)

    def setup_logging(self, log_level: str):
        """Set up console and file handlers on the root logger"""
        level = getattr(logging, log_level.upper(), logging.INFO)

        detailed_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
        )
        simple_formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s'
        )

        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG if self.log_dir else level)
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(simple_formatter)
        root_logger.addHandler(console_handler)

        if self.log_dir:
            day = datetime.now().strftime('%Y%m%d')

            # All logs, detailed format
            file_handler = logging.FileHandler(self.log_dir / f"checkurl_{day}.log", encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(detailed_formatter)
            root_logger.addHandler(file_handler)

            error_handler = logging.FileHandler(self.log_dir / f"errors_{day}.log", encoding='utf-8')
            error_handler.setLevel(logging.WARNING)
            error_handler.setFormatter(detailed_formatter)
            root_logger.addHandler(error_handler)

        for name in ('asyncio', 'aiohttp'):
            logging.getLogger(name).setLevel(logging.WARNING)
