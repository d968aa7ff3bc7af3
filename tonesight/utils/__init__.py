"""
ToneSight utilities module.

Provides logging setup and batch processing statistics.
"""

from .logging import StructuredLogger, ProcessingStats, setup_console_logging

__all__ = [
    'StructuredLogger',
    'ProcessingStats',
    'setup_console_logging'
]
