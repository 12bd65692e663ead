"""
==================================================
Comprehensive pytest suite for sqlfrag/pretty.py
==================================================

Sections:
---------
1. Unit tests - option handling and config fallback
2. Integration tests - formatting real builder output with sqlparse
3. Edge case tests - invalid options

Available markers:
------------------
unit, integration, edge_case

How to Execute:
---------------
All tests:          pytest tests/tests_sqlfrag/test_pretty.py -v
"""

from types import SimpleNamespace
from unittest.mock import patch

import pytest

from core.config import FormatterConfig
from sqlfrag.clauses import FROM, SELECT, WHERE, eq
from sqlfrag.exceptions import SqlFormatError
from sqlfrag.pretty import sqlformat
from sqlfrag.values import concat


@pytest.fixture
def fake_config():
    """Provide formatter defaults independent of the environment."""
    fake = SimpleNamespace(
        formatter=FormatterConfig(
            keyword_case='lower',
            identifier_case=None,
            reindent=False,
            indent_width=4
        )
    )
    with patch('sqlfrag.pretty.config', fake):
        yield fake


# ===============
# 1. UNIT TESTS
# ===============

@pytest.mark.unit
def test_sqlformat_uses_config_defaults(fake_config):
    """Unspecified options come from core.config."""
    with patch('sqlfrag.pretty.sqlparse.format', return_value='formatted') as mock_format:
        result = sqlformat('SELECT a FROM t')

    assert result == 'formatted'
    mock_format.assert_called_once_with(
        'SELECT a FROM t', keyword_case='lower', reindent=False, indent_width=4
    )


@pytest.mark.unit
def test_sqlformat_arguments_override_config(fake_config):
    """Explicit arguments and extra options win over defaults."""
    with patch('sqlfrag.pretty.sqlparse.format', return_value='x') as mock_format:
        sqlformat('SELECT a FROM t', keyword_case='upper', identifier_case='lower', strip_comments=True)

    mock_format.assert_called_once_with(
        'SELECT a FROM t',
        keyword_case='upper',
        identifier_case='lower',
        reindent=False,
        indent_width=4,
        strip_comments=True
    )


# ======================
# 2. INTEGRATION TESTS
# ======================

@pytest.mark.integration
def test_sqlformat_keyword_case(fake_config):
    """Keywords are re-cased by sqlparse."""
    assert sqlformat('select a, b from t where a = 1', keyword_case='upper') == 'SELECT a, b FROM t WHERE a = 1'
    assert sqlformat('SELECT a FROM t') == 'select a from t'


@pytest.mark.integration
def test_sqlformat_identifier_case(fake_config):
    """Identifiers are re-cased when requested."""
    assert sqlformat('select a from t', keyword_case='upper', identifier_case='upper') == 'SELECT A FROM T'


@pytest.mark.integration
def test_sqlformat_reindents_builder_output(fake_config):
    """Single-line builder output is spread across lines."""
    query = concat(SELECT('a', 'b'), FROM('t'), WHERE(eq(a=1)))

    result = sqlformat(query, keyword_case='upper', reindent=True)

    assert result.startswith('SELECT a')
    assert '\nFROM t' in result
    assert '\nWHERE a=1' in result


# ====================
# 3. EDGE CASE TESTS
# ====================

@pytest.mark.edge_case
def test_sqlformat_invalid_option_raises(fake_config):
    """sqlparse option errors surface as SqlFormatError."""
    with pytest.raises(SqlFormatError):
        sqlformat('SELECT 1', keyword_case='shout')
