"""
Utility modules.
"""

from .config import BenchmarkConfig, load_config
from .logging import setup_logging, BenchmarkLogger
from .seed import set_seed

__all__ = [
    'BenchmarkConfig',
    'load_config',
    'setup_logging',
    'BenchmarkLogger',
    'set_seed',
]
