"""
Structured logging system for SkillMatch.

Provides centralized logging with console and file outputs, log levels,
and metrics tracking for monitoring matching runs.
"""

import logging
import sys
import threading
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks metrics for monitoring candidate scoring.
    """

    def __init__(
        self,
        name: str = "skillmatch",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()

        # Counters are shared by every caller of get_logger()
        self._metrics_lock = threading.Lock()
        self.metrics = {
            "candidates_scored": 0,
            "candidates_skipped": 0,
            "candidates_matched": 0,
            "scoring_errors": 0,
            "errors_by_type": {},
            "matches_by_category": {},
        }

        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"skillmatch_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs):
        """Log critical message with optional context."""
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_candidate_scored(self):
        """Increment scored-candidate counter."""
        with self._metrics_lock:
            self.metrics["candidates_scored"] += 1

    def record_candidate_skipped(self):
        """Count a candidate dropped for a malformed skill list."""
        with self._metrics_lock:
            self.metrics["candidates_skipped"] += 1

    def record_candidate_matched(self):
        with self._metrics_lock:
            self.metrics["candidates_matched"] += 1

    def record_skill_match(self, category: str):
        """Record the category of a winning skill-pair match."""
        with self._metrics_lock:
            counts = self.metrics["matches_by_category"]
            counts[category] = counts.get(category, 0) + 1

    def record_scoring_error(self, error_type: str):
        """Record a scoring failure that degraded to an empty result."""
        with self._metrics_lock:
            self.metrics["scoring_errors"] += 1

            if error_type not in self.metrics["errors_by_type"]:
                self.metrics["errors_by_type"][error_type] = 0
            self.metrics["errors_by_type"][error_type] += 1

    def get_metrics(self) -> dict:
        """Return current metrics."""
        with self._metrics_lock:
            metrics_copy = dict(self.metrics)
            metrics_copy["errors_by_type"] = dict(self.metrics["errors_by_type"])
            metrics_copy["matches_by_category"] = dict(self.metrics["matches_by_category"])
        scored = metrics_copy["candidates_scored"]
        metrics_copy["match_rate"] = (
            round(metrics_copy["candidates_matched"] / scored, 3) if scored else 0.0
        )
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Matching Session Metrics ===")
        self.info(
            f"Candidates: {metrics['candidates_matched']}/{metrics['candidates_scored']} matched "
            f"({metrics['match_rate'] * 100:.1f}%), {metrics['candidates_skipped']} skipped"
        )

        if metrics["matches_by_category"]:
            self.info("Skill matches by category:")
            for category, count in sorted(metrics["matches_by_category"].items()):
                self.info(f"  {category}: {count}")

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None
_global_logger_lock = threading.Lock()


def get_logger(
    name: str = "skillmatch",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    The library never writes log files on its own; file output is enabled
    by the CLI (or any caller) passing enable_file=True on first use.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    with _global_logger_lock:
        if _global_logger is None:
            kwargs.setdefault("enable_file", False)
            _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
