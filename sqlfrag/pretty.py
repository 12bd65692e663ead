"""
=======================
SQL pretty-printer.
=======================

Cosmetic reformatting of assembled SQL through sqlparse. Fragment builders
produce single-line SQL; sqlformat() re-indents it and normalizes keyword and
identifier case for display or logging. Unspecified options fall back to the
defaults in core.config (SQLFRAG_* environment variables).

Example:
    >>> from sqlfrag.pretty import sqlformat
    >>> print(sqlformat('select a, b from t where a = 1', reindent=False))
    SELECT a, b FROM t WHERE a = 1
"""

from typing import Optional

import sqlparse
from sqlparse.exceptions import SQLParseError

from core.config import config
from core.logger import get_logger

from .exceptions import SqlFormatError

logger = get_logger(__name__)


def sqlformat(
    sql: str,
    keyword_case: Optional[str] = None,
    identifier_case: Optional[str] = None,
    reindent: Optional[bool] = None,
    indent_width: Optional[int] = None,
    **options
) -> str:
    """
    Reformat an SQL string.

    Args:
        sql: SQL text to format
        keyword_case: 'upper', 'lower' or 'capitalize'
        identifier_case: 'upper', 'lower' or 'capitalize'
        reindent: Re-indent the statement across lines
        indent_width: Spaces per indentation level
        **options: Further sqlparse.format options (e.g. strip_comments=True)

    Returns:
        Formatted SQL text

    Raises:
        SqlFormatError: If sqlparse rejects the options
    """
    settings = config.formatter.as_options()
    overrides = {
        'keyword_case': keyword_case,
        'identifier_case': identifier_case,
        'reindent': reindent,
        'indent_width': indent_width,
    }
    settings.update({key: value for key, value in overrides.items() if value is not None})
    settings.update(options)

    logger.debug("Formatting SQL with options %s", settings)
    try:
        return sqlparse.format(sql, **settings)
    except SQLParseError as e:
        raise SqlFormatError(f"Could not format SQL: {e}") from e
