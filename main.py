"""
=====================================
Command-line SQL pretty-printer.
=====================================

Thin CLI wrapper around sqlfrag.pretty.sqlformat. Reads SQL from a file (or
stdin when no file is given), formats it and writes the result to stdout.
Logging goes to stderr.

Usage:
    # Format a file with project defaults
    python main.py query.sql

    # Format from stdin with lowercase keywords
    echo "SELECT a FROM t" | python main.py --keyword-case lower

Exit Codes:
    0: Success
    1: Error
    130: User interrupt (Ctrl+C)
"""

import argparse
import sys
from typing import List, Optional

from core.config import config
from core.logger import get_logger, setup_logging
from sqlfrag.exceptions import SqlFormatError
from sqlfrag.pretty import sqlformat

logger = get_logger(__name__)

CASE_CHOICES = ['upper', 'lower', 'capitalize']


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        description="sqlfrag - SQL pretty-printer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Format a file
  python main.py query.sql

  # Format stdin, keep line layout
  cat query.sql | python main.py --no-reindent

Defaults come from SQLFRAG_* environment variables (.env supported).
        """
    )
    parser.add_argument(
        'file',
        nargs='?',
        help='SQL file to format (reads stdin when omitted)'
    )
    parser.add_argument(
        '--keyword-case',
        choices=CASE_CHOICES,
        help='Case for SQL keywords'
    )
    parser.add_argument(
        '--identifier-case',
        choices=CASE_CHOICES,
        help='Case for identifiers'
    )
    parser.add_argument(
        '--indent-width',
        type=int,
        help='Spaces per indentation level'
    )
    parser.add_argument(
        '--no-reindent',
        action='store_true',
        help='Do not re-indent statements'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging (DEBUG level)'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the pretty-printer CLI.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    setup_logging(log_level='DEBUG' if args.verbose else config.log_level)

    try:
        if args.file:
            with open(args.file, encoding='utf-8') as handle:
                sql = handle.read()
        else:
            sql = sys.stdin.read()

        formatted = sqlformat(
            sql,
            keyword_case=args.keyword_case,
            identifier_case=args.identifier_case,
            reindent=False if args.no_reindent else None,
            indent_width=args.indent_width
        )
        sys.stdout.write(formatted.rstrip('\n') + '\n')
        return 0

    except (OSError, SqlFormatError) as e:
        logger.error(f"❌ Formatting failed: {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("⚠️  Operation interrupted by user")
        return 130


if __name__ == '__main__':
    sys.exit(main())
