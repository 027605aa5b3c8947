"""
Logging setup for the AI backend.

Console output carries an ISO timestamp, level and logger name so upstream
failures (classifier, LLM, proxies) can be grepped out of service logs.
"""
import logging
import sys
from datetime import datetime, timezone
from typing import Optional


class ServiceFormatter(logging.Formatter):
    """Single-line formatter: ``[timestamp] LEVEL [logger] message``."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        line = f"[{timestamp}] {record.levelname:8} [{record.name}] {record.getMessage()}"
        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure the root logger.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file that receives a plain copy of every record
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(ServiceFormatter())
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
        ))
        root_logger.addHandler(file_handler)
