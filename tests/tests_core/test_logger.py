"""
===============================================
Comprehensive pytest suite for core/logger.py
===============================================

Sections:
---------
1. Unit tests - formatter and logger helpers
2. Integration tests - handler setup

Available markers:
------------------
unit, integration

How to Execute:
---------------
All tests:          pytest tests/tests_core/test_logger.py -v
"""

import io
import logging

import pytest

from core.logger import ColoredFormatter, get_logger, get_module_logger, setup_logging


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(level=logging.WARNING, msg='careful'):
    return logging.LogRecord('sqlfrag.test', level, __file__, 1, msg, None, None)


# ===============
# 1. UNIT TESTS
# ===============

@pytest.mark.unit
def test_colored_formatter_adds_color_and_emoji():
    """Console records get ANSI colors and an emoji."""
    formatter = ColoredFormatter('%(emoji)s %(levelname)s %(message)s')

    output = formatter.format(_record())

    assert '\033[33mWARNING\033[0m' in output
    assert output.startswith('⚠️')
    assert output.endswith('careful')


@pytest.mark.unit
def test_colored_formatter_restores_levelname():
    """The shared record keeps its plain level name afterwards."""
    record = _record(logging.ERROR)

    ColoredFormatter('%(levelname)s').format(record)

    assert record.levelname == 'ERROR'


@pytest.mark.unit
def test_get_logger_level_override():
    """An explicit level is applied to the named logger."""
    logger = get_logger('sqlfrag.test.level', level='debug')

    assert logger.level == logging.DEBUG
    assert get_module_logger('sqlfrag.test.level') is logger


# ======================
# 2. INTEGRATION TESTS
# ======================

@pytest.mark.integration
def test_setup_logging_console_stream(restore_root_logger):
    """Console output goes to the given stream at the requested level."""
    stream = io.StringIO()

    setup_logging(log_level='WARNING', use_colors=False, stream=stream)
    logging.getLogger('sqlfrag.test').info('hidden')
    logging.getLogger('sqlfrag.test').warning('shown')

    output = stream.getvalue()
    assert 'shown' in output
    assert 'hidden' not in output
    assert restore_root_logger.level == logging.WARNING


@pytest.mark.integration
def test_setup_logging_file_handler(restore_root_logger, tmp_path):
    """A log file is created inside the given directory."""
    setup_logging(log_level='INFO', log_file='sqlfrag.log', log_dir=str(tmp_path), console_output=False)
    logging.getLogger('sqlfrag.test').info('to file')
    for handler in restore_root_logger.handlers:
        handler.flush()

    assert 'to file' in (tmp_path / 'sqlfrag.log').read_text(encoding='utf-8')
