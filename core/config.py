"""
=====================================
Configuration management for sqlfrag.
=====================================

Loads settings from environment variables (.env file) and provides a
centralized Config singleton for application-wide access.

The fragment builders themselves are configuration-free pure functions; the
settings here only drive the SQL pretty-printer defaults and the CLI log
level.

Environment variables:
    SQLFRAG_KEYWORD_CASE: Keyword case for the pretty-printer (upper/lower/capitalize)
    SQLFRAG_IDENTIFIER_CASE: Identifier case for the pretty-printer (unset keeps input)
    SQLFRAG_REINDENT: Re-indent statements when pretty-printing (true/false)
    SQLFRAG_INDENT_WIDTH: Indentation width used when re-indenting
    SQLFRAG_LOG_LEVEL: Default log level for the CLI

Example:
    >>> from core.config import config
    >>>
    >>> config.formatter.keyword_case
    'upper'
    >>> config.formatter.as_options()
    {'keyword_case': 'upper', 'reindent': True, 'indent_width': 2}
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path)

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == '':
        return default
    return value.strip().lower() in _TRUE_VALUES


def _env_optional(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    if value is None or value.strip() == '':
        return default
    return value.strip()


@dataclass
class FormatterConfig:
    """Pretty-printer defaults.

    Attributes:
        keyword_case: Case applied to SQL keywords, None keeps input
        identifier_case: Case applied to identifiers, None keeps input
        reindent: Re-indent the statement across lines
        indent_width: Spaces per indentation level
    """

    keyword_case: Optional[str]
    identifier_case: Optional[str]
    reindent: bool
    indent_width: int

    def as_options(self) -> Dict[str, Any]:
        """Get the settings as keyword options, omitting unset values.

        Returns:
            Dictionary suitable for passing to sqlparse.format
        """
        options = {
            'keyword_case': self.keyword_case,
            'identifier_case': self.identifier_case,
            'reindent': self.reindent,
            'indent_width': self.indent_width,
        }
        return {key: value for key, value in options.items() if value is not None}


class Config:
    """Centralized configuration manager.

    Attributes:
        formatter: FormatterConfig with pretty-printer defaults
        log_level: Default log level name for the CLI
        project_root: Absolute path to the project root directory

    Example:
        >>> config = Config()
        >>> config.formatter.indent_width
        2
    """

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.formatter = FormatterConfig(
            keyword_case=_env_optional('SQLFRAG_KEYWORD_CASE', 'upper'),
            identifier_case=_env_optional('SQLFRAG_IDENTIFIER_CASE'),
            reindent=_env_flag('SQLFRAG_REINDENT', True),
            indent_width=int(os.getenv('SQLFRAG_INDENT_WIDTH', '2')),
        )
        self.log_level = os.getenv('SQLFRAG_LOG_LEVEL', 'INFO').upper()
        self.project_root = Path(__file__).parent.parent

    @property
    def keyword_case(self) -> Optional[str]:
        """Get default keyword case."""
        return self.formatter.keyword_case

    @property
    def identifier_case(self) -> Optional[str]:
        """Get default identifier case."""
        return self.formatter.identifier_case


# Global configuration instance
config = Config()
