"""
Logging for the analyzer: module loggers whose output never shows raw API keys.

The active LoggingContext decides how chatty sub-modules are. The CLI scripts
switch to ORCHESTRATED after import, so set_logging_mode re-levels every
logger that already exists.
"""

import logging
import re
import os
from typing import Dict
from enum import Enum
from config.settings import settings


class LoggingContext(Enum):
    STANDALONE = "standalone"      # Library use or tests: requested levels apply
    ORCHESTRATED = "orchestrated"  # run_analysis.py / run_search.py: sub-modules only report errors
    SILENT = "silent"              # Critical only


def _mode_from_env() -> LoggingContext:
    try:
        return LoggingContext(os.getenv('LOG_MODE', 'standalone').lower())
    except ValueError:
        return LoggingContext.STANDALONE


_CURRENT_MODE = _mode_from_env()

# Script loggers keep their requested level in orchestrated mode
CONSOLE_LOGGERS = {'run_analysis', 'run_search'}

# name -> level requested in setup_logger
_REQUESTED_LEVELS: Dict[str, int] = {}

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class SecureFormatter(logging.Formatter):
    """
    Masks API-key-like tokens (16+ alphanumerics) in the final message.
    Covers keys that end up inside request URLs or exception text.
    """

    KEY_PATTERN = re.compile(r'\b[A-Za-z0-9]{16,}\b')

    def format(self, record):
        message = super().format(record)
        return self.KEY_PATTERN.sub(lambda m: settings.mask_api_key(m.group(0)), message)


def get_logging_mode() -> LoggingContext:
    return _CURRENT_MODE


def _effective_level(name: str, requested: int) -> int:
    if _CURRENT_MODE == LoggingContext.SILENT:
        return logging.CRITICAL
    if _CURRENT_MODE == LoggingContext.ORCHESTRATED and name not in CONSOLE_LOGGERS:
        return max(requested, logging.ERROR)
    return requested


def _apply_level(logger: logging.Logger, level: int) -> None:
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


def set_logging_mode(mode: LoggingContext):
    """Switch mode and re-level loggers created so far."""
    global _CURRENT_MODE
    _CURRENT_MODE = mode
    for name, requested in _REQUESTED_LEVELS.items():
        _apply_level(logging.getLogger(name), _effective_level(name, requested))


def _make_handler(handler: logging.Handler) -> logging.Handler:
    handler.setFormatter(SecureFormatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    Create (or reconfigure) a module logger.

    Args:
        name: Logger name, usually the module's short name
        level: Requested level; the current LoggingContext may raise it

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    logger.handlers.clear()

    logger.addHandler(_make_handler(logging.StreamHandler()))

    _REQUESTED_LEVELS[name] = level
    _apply_level(logger, _effective_level(name, level))
    return logger
