"""
Logging utilities for ToneSight
Provides structured logging and batch progress statistics
"""

import logging
import sys
from typing import Optional, Dict, Any, List
from datetime import datetime
import json

import colorlog

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
CONSOLE_HANDLER_NAME = 'tonesight-console'


class StructuredLogger:
    """Provides structured logging with metadata"""

    def __init__(self, name: str, metadata: Optional[Dict[str, Any]] = None):
        """
        Initialize structured logger

        Args:
            name: Logger name
            metadata: Default metadata to include in all logs
        """
        self.logger = logging.getLogger(name)
        self.metadata = metadata or {}

    def _format_message(self, message: str, **kwargs) -> str:
        """Format message with metadata"""
        data = {**self.metadata, **kwargs}
        if data:
            return f"{message} | {json.dumps(data, default=str)}"
        return message

    def debug(self, message: str, **kwargs):
        self.logger.debug(self._format_message(message, **kwargs))

    def info(self, message: str, **kwargs):
        self.logger.info(self._format_message(message, **kwargs))

    def warning(self, message: str, **kwargs):
        self.logger.warning(self._format_message(message, **kwargs))

    def error(self, message: str, **kwargs):
        self.logger.error(self._format_message(message, **kwargs))


class ProcessingStats:
    """Tracks batch correction statistics"""

    def __init__(self):
        self.start_time = datetime.now()
        self.total_images = 0
        self.processed_images = 0
        self.failed_images = 0
        self.errors: List[Dict[str, Any]] = []
        self.processing_times: List[float] = []

    def set_total(self, total: int):
        """Set total number of images to process"""
        self.total_images = total

    def add_result(self, processing_time: Optional[float] = None):
        """
        Record a successfully corrected image

        Args:
            processing_time: Seconds spent on the image
        """
        self.processed_images += 1
        if processing_time:
            self.processing_times.append(processing_time)

    def add_error(self, file_path: str, error: str):
        """Record an image that could not be corrected"""
        self.failed_images += 1
        self.errors.append({
            'file': file_path,
            'error': error,
            'time': datetime.now()
        })

    def get_elapsed_time(self) -> float:
        """Get elapsed time in seconds"""
        return (datetime.now() - self.start_time).total_seconds()

    def get_average_processing_time(self) -> float:
        """Get average processing time per image"""
        if not self.processing_times:
            return 0.0
        return sum(self.processing_times) / len(self.processing_times)

    def get_summary(self) -> Dict[str, Any]:
        """Get processing summary"""
        elapsed = self.get_elapsed_time()
        attempted = self.processed_images + self.failed_images

        return {
            'total_images': self.total_images,
            'processed_images': self.processed_images,
            'failed_images': self.failed_images,
            'success_rate': (self.processed_images / attempted * 100) if attempted > 0 else 0,
            'errors': len(self.errors),
            'elapsed_time': elapsed,
            'average_time_per_image': self.get_average_processing_time(),
        }

    def format_summary(self) -> str:
        """Render the summary as a console block"""
        summary = self.get_summary()

        lines = [
            "=" * 60,
            "CORRECTION SUMMARY",
            "=" * 60,
            f"Total images:     {summary['total_images']}",
            f"Corrected:        {summary['processed_images']} ({summary['success_rate']:.1f}%)",
            f"Failed:           {summary['failed_images']}",
            f"Elapsed time:     {summary['elapsed_time']:.1f}s",
            f"Avg time/image:   {summary['average_time_per_image']:.2f}s",
            "=" * 60,
        ]

        if self.errors:
            lines.append("ERRORS:")
            for error in self.errors[:10]:  # Show first 10 errors
                lines.append(f"  - {error['file']}: {error['error']}")
            if len(self.errors) > 10:
                lines.append(f"  ... and {len(self.errors) - 10} more errors")

        return "\n".join(lines)


def setup_console_logging(level: str = "INFO", color: bool = True):
    """
    Setup console logging with optional color support

    Args:
        level: Logging level name
        color: Whether to use colored output when attached to a terminal
    """
    console_handler = logging.StreamHandler(sys.stderr)

    if color and sys.stderr.isatty():
        formatter = colorlog.ColoredFormatter(
            '%(log_color)s%(asctime)s - %(name)s - %(levelname)s%(reset)s - %(message)s',
            log_colors={
                'DEBUG': 'cyan',
                'INFO': 'green',
                'WARNING': 'yellow',
                'ERROR': 'red',
                'CRITICAL': 'red,bg_white',
            }
        )
    else:
        formatter = logging.Formatter(LOG_FORMAT)

    console_handler.setFormatter(formatter)
    console_handler.set_name(CONSOLE_HANDLER_NAME)

    root_logger = logging.getLogger()
    # Replace the handler from a previous call rather than stacking another one
    for handler in list(root_logger.handlers):
        if handler.get_name() == CONSOLE_HANDLER_NAME:
            root_logger.removeHandler(handler)
    root_logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    root_logger.addHandler(console_handler)
