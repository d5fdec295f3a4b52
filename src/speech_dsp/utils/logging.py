"""
Logging utilities for analysis runs.

Library modules only call get_logger(__name__); handlers are attached by
the command line driver through setup_logging / AnalysisLogger.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime

# Package logger that every speech_dsp module logs under
PACKAGE_LOGGER = 'speech_dsp'

DEFAULT_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'


def _reset_handlers(logger: logging.Logger) -> None:
    """Detach and close the handlers a previous setup left behind."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(
    log_file: Optional[str] = None,
    level: int = logging.INFO,
    format_string: str = None,
    name: str = PACKAGE_LOGGER,
    console_level: int = logging.WARNING
) -> logging.Logger:
    """
    Attach a console handler and, optionally, a file handler to a logger.

    Calling this again on the same logger replaces (and closes) the
    handlers from the earlier call, so repeated runs in one process
    neither duplicate lines nor leak file descriptors.

    Args:
        log_file: Path to log file (if None, only console output)
        level: Level of the logger and of the file handler
        format_string: Custom format string
        name: Logger name, the speech_dsp package logger by default
        console_level: Level of the stdout handler; rich handles the main display

    Returns:
        Configured logger
    """
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    logger = logging.getLogger(name)
    logger.setLevel(level)
    _reset_handlers(logger)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = None) -> logging.Logger:
    return logging.getLogger(name)


class AnalysisLogger:
    """
    Per-run log file for scripts/run_analysis.py.

    Library warnings (e.g. LPC order fallbacks) and k-means debug lines are
    emitted under the speech_dsp logger and therefore land in the same
    file as the configuration and result sections written here.
    """

    def __init__(
        self,
        run_name: str,
        log_dir: str = 'logs',
        console_level: int = logging.WARNING
    ):
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        self.log_file = Path(log_dir) / f'{run_name}_{timestamp}.log'
        self.logger = setup_logging(
            log_file=str(self.log_file),
            level=logging.DEBUG,
            console_level=console_level
        )

    def info(self, msg: str):
        self.logger.info(msg)

    def log_config(self, config: dict):
        self._section("ANALYSIS CONFIGURATION", config)

    def log_results(self, results: dict, title: str = "RESULTS"):
        self._section(title, results)

    def log_stage_start(self, stage: str):
        self.logger.info("-" * 40)
        self.logger.info(f"Starting stage: {stage}")

    def log_stage_end(self, stage: str, metrics: dict):
        self.logger.info(f"Completed: {stage}")
        self._log_dict(metrics, indent=2)

    def close(self):
        _reset_handlers(self.logger)

    def _section(self, title: str, d: dict):
        self.logger.info("=" * 60)
        self.logger.info(title)
        self.logger.info("=" * 60)
        self._log_dict(d, indent=2)
        self.logger.info("=" * 60)

    def _log_dict(self, d: dict, indent: int = 0):
        """Recursively log dictionary contents, floats to 4 decimals."""
        prefix = " " * indent
        for key, value in d.items():
            if isinstance(value, dict):
                self.logger.info(f"{prefix}{key}:")
                self._log_dict(value, indent + 2)
            elif isinstance(value, float):
                self.logger.info(f"{prefix}{key}: {value:.4f}")
            else:
                self.logger.info(f"{prefix}{key}: {value}")
