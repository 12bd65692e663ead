"""
===========================================
Data Manipulation Language (DML) builders.
===========================================

Functions:
- INSERT_INTO_VALUES: INSERT INTO ... VALUES from a row, records or a DataFrame
- SET / SET_: SET clause from named column values
- UPDATE / UPDATE_: UPDATE statement for one or more tables
- resolve_set_values: validate SET arguments, collecting diagnostics

Values are quoted according to their type; wrap a value in RawExpression
(``raw('col2 * 1.25')``) to emit it verbatim, for example to reference
another column.

Usage:
    from sqlfrag.dml import INSERT_INTO_VALUES, UPDATE
    from sqlfrag.values import raw

    INSERT_INTO_VALUES('t', {'a': 1, 'b': 'x'})
    # INSERT INTO t (a, b) VALUES (1, 'x')

    UPDATE('t1', col1=raw('col2 * 1.25'), _where="id IN (1, 2)")
    # UPDATE t1 SET col1=col2 * 1.25 WHERE id IN (1, 2)
"""

import warnings
from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from core.logger import get_logger

from .clauses import WHERE
from .exceptions import (
    ColumnCountMismatch,
    DuplicateColumnError,
    MultiValuedArgumentError,
    MultiValuedArgumentWarning,
)
from .values import (
    commas,
    concat,
    escape_col,
    flatten,
    is_sequence,
    named_pairs,
    parens,
    quote_value,
    table_names,
)

logger = get_logger(__name__)


# ===================
# INSERT INTO VALUES
# ===================

def _records_frame(records: List[Mapping]) -> pd.DataFrame:
    """Build an object-dtype frame so every value keeps its Python type.

    Columns are the union of record keys in first-seen order; missing keys
    become None.
    """
    columns = list(dict.fromkeys(key for record in records for key in record))
    rows = [[record.get(col) for col in columns] for record in records]
    return pd.DataFrame(rows, columns=columns, dtype=object)


def _value_source(vals: Any) -> Any:
    """Normalize insert values into a DataFrame, a dict (one row) or a list."""
    if isinstance(vals, pd.DataFrame):
        return vals
    if isinstance(vals, pd.Series):
        if all(isinstance(label, str) for label in vals.index):
            return dict(vals.items())
        return list(vals)
    if isinstance(vals, Mapping):
        return dict(vals)
    if is_sequence(vals):
        vals = list(vals)
        if vals and all(isinstance(row, Mapping) for row in vals):
            return _records_frame(vals)
        return vals
    return [vals]


def _source_width(source: Any) -> int:
    if isinstance(source, pd.DataFrame):
        return len(source.columns)
    return len(source)


def _is_empty(source: Any) -> bool:
    if isinstance(source, pd.DataFrame):
        return source.empty
    return len(source) == 0


def _missing_columns(source: Any, cols: List[str]) -> List[str]:
    if isinstance(source, pd.DataFrame):
        available = set(source.columns)
    elif isinstance(source, dict):
        available = set(source)
    else:
        return []
    return [col for col in cols if col not in available]


def INSERT_INTO_VALUES(tbl: str, vals: Any, cols: Optional[Sequence[str]] = None) -> str:
    """
    Build an INSERT INTO ... VALUES statement.

    Args:
        tbl: Table name to insert into
        vals: One row as a mapping (or string-labelled Series), several rows
            as a DataFrame or list of mappings, or a bare sequence of values
        cols: Columns to take from the values, in output order. Inferred
            from DataFrame columns or mapping keys when omitted.

    Returns:
        INSERT statement, or an empty fragment when there are no values

    Raises:
        ColumnCountMismatch: If the values have fewer fields than ``cols``
            or lack a field that ``cols`` names

    Example:
        >>> INSERT_INTO_VALUES('table', [1, 2, 3])
        'INSERT INTO table VALUES (1, 2, 3)'
        >>> INSERT_INTO_VALUES('table', {'a': 1, 'b': 2, 'c': 3}, ['c', 'a'])
        'INSERT INTO table (c, a) VALUES (3, 1)'
    """
    if vals is None:
        return ''
    source = _value_source(vals)
    if _is_empty(source):
        logger.debug("No values to insert into %s", tbl)
        return ''

    if cols is not None:
        cols = flatten(cols)
        if _source_width(source) < len(cols):
            raise ColumnCountMismatch(
                f"Number of value columns/entries ({_source_width(source)}) was less than "
                f"the number of columns specified ({len(cols)})"
            )
        missing = _missing_columns(source, cols)
        if missing:
            raise ColumnCountMismatch(f"Columns not found in the values: {', '.join(missing)}")
        if isinstance(source, pd.DataFrame):
            source = source[cols]
        elif isinstance(source, dict):
            source = {col: source[col] for col in cols}
        else:
            source = source[:len(cols)]
    elif isinstance(source, pd.DataFrame):
        cols = list(source.columns)
    elif isinstance(source, dict):
        cols = list(source.keys())

    if isinstance(source, pd.DataFrame):
        rows = list(source.itertuples(index=False, name=None))
    elif isinstance(source, dict):
        rows = [tuple(source.values())]
    else:
        rows = [tuple(source)]

    column_list = parens(commas([escape_col(col, ignore_dot=False) for col in cols])) if cols else ''
    values = ', '.join(parens(', '.join(quote_value(value) for value in row)) for row in rows)
    return concat('INSERT INTO', tbl, column_list, 'VALUES', values)


# ====
# SET
# ====

@dataclass
class SetResolution:
    """Validated SET values together with non-fatal diagnostics.

    Attributes:
        values: Column names mapped to single values, in argument order
        diagnostics: Messages about arguments that had to be adjusted
    """

    values: Dict[str, Any]
    diagnostics: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when no argument needed adjusting."""
        return not self.diagnostics


def resolve_set_values(pairs: Iterable[Tuple[str, Any]], arg: str = 'set_vars') -> SetResolution:
    """
    Validate SET arguments.

    Multi-valued arguments are reduced to their first value and reported
    in the diagnostics instead of failing.

    Args:
        pairs: ``(column, value)`` pairs
        arg: Argument name used in error messages

    Returns:
        SetResolution with one value per column

    Raises:
        DuplicateColumnError: If a column name appears more than once
    """
    pairs = list(pairs)
    duplicates = [name for name, count in Counter(name for name, _ in pairs).items() if count > 1]
    if duplicates:
        raise DuplicateColumnError(
            f"All arguments in {arg} must have a unique name, duplicated: {', '.join(duplicates)}"
        )

    resolution = SetResolution(values={})
    for name, value in pairs:
        if is_sequence(value):
            value = list(value)
            resolution.diagnostics.append(
                f"All arguments in {arg} must be single-valued. Taking first value for `{name}`"
            )
            value = value[0] if value else None
        resolution.values[name] = value
    return resolution


# warnings.warn -> _report -> _set_clause -> public builder -> caller
_CALLER_STACKLEVEL = 4


def _report(resolution: SetResolution, strict: bool) -> None:
    for message in resolution.diagnostics:
        if strict:
            raise MultiValuedArgumentError(message)
        logger.debug(message)
        warnings.warn(message, MultiValuedArgumentWarning, stacklevel=_CALLER_STACKLEVEL)


def _render_set(values: Mapping) -> str:
    assignments = [f'{name}={quote_value(value)}' for name, value in values.items()]
    return concat('SET', ', '.join(assignments))


def _set_clause(pairs: List[Tuple[str, Any]], arg: str, strict: bool) -> str:
    resolution = resolve_set_values(pairs, arg=arg)
    _report(resolution, strict)
    return _render_set(resolution.values)


def _set_vars_pairs(set_vars: Any) -> List[Tuple[str, Any]]:
    if isinstance(set_vars, Mapping):
        set_vars = [set_vars]
    return named_pairs(set_vars, {}, arg='set_vars')


def SET_(set_vars: Any, strict: bool = False) -> str:
    """
    Build a SET clause from a mapping or a list of ``(column, value)`` pairs.

    Args:
        set_vars: Column names and values
        strict: Raise MultiValuedArgumentError instead of warning when an
            argument holds several values

    Raises:
        UnnamedArgumentError: If an entry has no column name
        DuplicateColumnError: If a column name repeats
    """
    return _set_clause(_set_vars_pairs(set_vars), 'set_vars', strict)


def SET(*pairs: Any, _strict: bool = False, **columns: Any) -> str:
    """
    Build a SET clause from named arguments.

    Example:
        >>> SET(col1='a', col2=42)
        "SET col1='a', col2=42"
        >>> SET({'items.price': raw('month.price')})
        'SET items.price=month.price'
    """
    return _set_clause(named_pairs(pairs, columns, arg='SET arguments'), 'SET arguments', _strict)


# =======
# UPDATE
# =======

def _where_clause(where: Any) -> str:
    return WHERE(where, cond=bool(flatten(where)))


def UPDATE(
    _tables: Any,
    *pairs: Any,
    _where: Any = None,
    _ignore: bool = False,
    _strict: bool = False,
    **columns: Any
) -> str:
    """
    Build an UPDATE statement.

    Args:
        _tables: Table name(s); a ``{alias: table}`` mapping sets aliases
        *pairs: ``{column: value}`` mappings or ``(column, value)`` tuples,
            for dotted column names such as ``items.price``
        _where: Optional condition(s) for an inline WHERE clause
        _ignore: Use ``UPDATE IGNORE``
        _strict: Raise instead of warning on multi-valued arguments
        **columns: Column names and values

    Returns:
        UPDATE statement without trailing whitespace

    Example:
        >>> UPDATE('t1', col1='a', col2=42)
        "UPDATE t1 SET col1='a', col2=42"
        >>> UPDATE(['items', 'month'], ('items.price', raw('month.price')),
        ...        _where=eq(('items.id', raw('month.id'))))
        'UPDATE items, month SET items.price=month.price WHERE items.id=month.id'
    """
    update = concat(
        'UPDATE IGNORE' if _ignore else 'UPDATE',
        commas(table_names(_tables)),
        _set_clause(named_pairs(pairs, columns, arg='SET arguments'), 'SET arguments', _strict),
        _where_clause(_where)
    )
    return update.rstrip()


def UPDATE_(
    tables: Any,
    set_vars: Any,
    where: Any = None,
    ignore: bool = False,
    strict: bool = False
) -> str:
    """Build an UPDATE statement from an explicit ``set_vars`` mapping."""
    update = concat(
        'UPDATE IGNORE' if ignore else 'UPDATE',
        commas(table_names(tables)),
        _set_clause(_set_vars_pairs(set_vars), 'set_vars', strict),
        _where_clause(where)
    )
    return update.rstrip()
