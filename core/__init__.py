"""
==========================================
Core infrastructure package for sqlfrag.
==========================================

This package provides centralized configuration management and logging
infrastructure used by the fragment builders and the CLI.

Modules:
    config: Configuration management from environment variables
    logger: Centralized logging configuration and utilities

Example:
    >>> from core.config import config
    >>> from core.logger import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info(f"Keyword case: {config.keyword_case}")
"""

__version__ = "0.1.0"
__all__ = ['get_logger', 'setup_logging', 'get_module_logger', 'config', 'Config', 'FormatterConfig']

from core.config import Config, FormatterConfig, config
from core.logger import get_logger, get_module_logger, setup_logging
