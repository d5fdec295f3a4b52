"""
Utility modules.
"""

from .audio import AudioProcessor
from .logging import setup_logging, get_logger, AnalysisLogger
from .seed import set_seed

__all__ = [
    'AudioProcessor',
    'setup_logging',
    'get_logger',
    'AnalysisLogger',
    'set_seed',
]
