"""
==========================================
Value, identifier and formatting helpers.
==========================================

Low-level primitives shared by every fragment builder:

- Literal / RawExpression: the two kinds of right-hand values. A Literal is
  quoted according to its Python type; a RawExpression is written verbatim,
  which is how other columns or SQL expressions are referenced
  (e.g. ``raw('col2 * 1.25')``).
- quote_value: render a Python value as an SQL literal
- escape_col: quote identifiers that are not plain SQL names
- commas, parens, concat: joiners used to glue fragments together
- named_pairs, table_refs: normalize named arguments and table/alias lists

Example:
    >>> from sqlfrag.values import concat, quote_value, raw
    >>> quote_value("O'Brien")
    "'O''Brien'"
    >>> quote_value(raw('price * 1.25'))
    'price * 1.25'
    >>> concat('SELECT *', 'FROM t', '')
    'SELECT * FROM t'
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, Iterator, List, Optional, Tuple

import pandas as pd
from pandas.api import types as pdt

from .exceptions import UnnamedArgumentError

_PLAIN_IDENTIFIER = re.compile(r'^[A-Za-z_][A-Za-z0-9_$]*$')


@dataclass(frozen=True)
class Literal:
    """A value that is always quoted according to its Python type."""

    value: Any


@dataclass(frozen=True)
class RawExpression:
    """SQL text emitted verbatim, never quoted.

    Attributes:
        text: SQL expression, column reference or subquery
    """

    text: str

    def __str__(self) -> str:
        return self.text


def raw(text: Any) -> RawExpression:
    """Shorthand for ``RawExpression(str(text))``."""
    return RawExpression(str(text))


def is_sequence(value: Any) -> bool:
    """Check whether a value holds several SQL values.

    Strings, mappings and the Literal/RawExpression wrappers count as single
    values; lists, tuples, sets, pandas Series and NumPy arrays do not.
    """
    if isinstance(value, (str, bytes, Literal, RawExpression, Mapping)):
        return False
    return pdt.is_list_like(value)


def _quote_text(text: str) -> str:
    return "'" + text.replace("'", "''") + "'"


def quote_value(value: Any) -> str:
    """
    Render a Python value as an SQL literal.

    Args:
        value: Scalar value, Literal or RawExpression

    Returns:
        SQL text: NULL for missing values, TRUE/FALSE for booleans, bare
        numbers, quoted ISO text for dates and quoted strings otherwise
    """
    if isinstance(value, RawExpression):
        return value.text
    if isinstance(value, Literal):
        value = value.value

    if value is None:
        return 'NULL'
    if pdt.is_scalar(value) and pd.isna(value):
        return 'NULL'
    if pdt.is_bool(value):
        return 'TRUE' if value else 'FALSE'
    if pdt.is_number(value):
        return str(value)
    if isinstance(value, datetime):
        return _quote_text(value.isoformat(sep=' '))
    if isinstance(value, date):
        return _quote_text(value.isoformat())
    return _quote_text(str(value))


def _is_safe_identifier(name: str) -> bool:
    return (
        name == '*'
        or bool(_PLAIN_IDENTIFIER.match(name))
        or (len(name) > 1 and name.startswith('"') and name.endswith('"'))
        or '(' in name
    )


def _quote_identifier(name: str) -> str:
    if _is_safe_identifier(name):
        return name
    return '"' + name.replace('"', '""') + '"'


def escape_col(name: Any, ignore_dot: bool = True) -> str:
    """
    Quote a column name unless it is already safe to emit as-is.

    Plain names, the ``*`` wildcard, already quoted names and expressions
    such as ``COUNT(*)`` are left untouched.

    Args:
        name: Column name (RawExpression values are emitted verbatim)
        ignore_dot: Treat ``.`` as a qualifier separator and check each part
            on its own, so ``t.col`` and ``t.*`` pass through

    Returns:
        Identifier text safe to place in a statement
    """
    if isinstance(name, RawExpression):
        return name.text
    name = str(name)
    if _is_safe_identifier(name):
        return name
    if ignore_dot and '.' in name:
        return '.'.join(_quote_identifier(part) for part in name.split('.'))
    return _quote_identifier(name)


def _flatten(items: Iterable[Any]) -> Iterator[str]:
    for item in items:
        if item is None:
            continue
        if is_sequence(item):
            yield from _flatten(item)
        else:
            text = str(item)
            if text:
                yield text


def flatten(*items: Any) -> List[str]:
    """Flatten nested sequences into a list of non-empty strings."""
    return list(_flatten(items))


def commas(*items: Any) -> str:
    """Join items with ``, `` after flattening nested sequences."""
    return ', '.join(_flatten(items))


def parens(text: Any) -> str:
    """Wrap text in parentheses."""
    return f'({text})'


def concat(*parts: Any) -> str:
    """
    Join fragments with single spaces, dropping empty parts.

    Example:
        >>> concat('UPDATE t', 'SET a=1', None, '')
        'UPDATE t SET a=1'
    """
    return ' '.join(str(part) for part in parts if part is not None and str(part) != '')


def named_pairs(args: Iterable[Any], kwargs: Mapping, arg: str = 'arguments') -> List[Tuple[str, Any]]:
    """
    Collect ``(name, value)`` pairs from mappings, 2-tuples and keywords.

    Positional arguments are read first, in order, followed by keywords.
    Positional pairs allow names that are not Python identifiers
    (``'items.id'``) and repeated names.

    Raises:
        UnnamedArgumentError: If an argument carries no name
    """
    pairs: List[Tuple[str, Any]] = []
    for item in args:
        if isinstance(item, Mapping):
            pairs.extend(item.items())
        elif isinstance(item, tuple) and len(item) == 2:
            pairs.append(item)
        else:
            raise UnnamedArgumentError(f"All {arg} must have a name, got {item!r}")
    pairs.extend(kwargs.items())

    for name, _ in pairs:
        if name is None or str(name) == '':
            raise UnnamedArgumentError(f"All {arg} must have a name")
    return [(str(name), value) for name, value in pairs]


def table_refs(tables: Any) -> List[Tuple[str, Optional[str]]]:
    """
    Normalize table arguments into ``(table, alias)`` pairs.

    Args:
        tables: Table name, sequence of names, or ``{alias: table}`` mapping

    Returns:
        Pairs in argument order; alias is None when not given
    """
    if tables is None:
        return []
    if isinstance(tables, Mapping):
        refs = []
        for alias, table in tables.items():
            refs.extend((name, alias or None) for name, _ in table_refs(table))
        return refs
    if is_sequence(tables):
        refs = []
        for table in tables:
            refs.extend(table_refs(table))
        return refs
    return [(str(tables), None)]


def table_names(tables: Any) -> List[str]:
    """Render tables as ``table alias`` (or bare ``table``) strings."""
    return [concat(table, alias) for table, alias in table_refs(tables)]
