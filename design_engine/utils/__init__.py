"""
Utility modules for the converter.
"""

from design_engine.utils.config import Config
from design_engine.utils.logging import setup_logging, log_exception, PerformanceLogger

__all__ = [
    'Config',
    'setup_logging',
    'log_exception',
    'PerformanceLogger',
]
