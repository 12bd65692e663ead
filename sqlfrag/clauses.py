"""
==========================
SQL clause builders.
==========================

Each builder returns a plain string fragment; fragments are combined by
concatenation so the program text reads like the final statement.

Clause Builders:
- SELECT / SELECT_ / SELECT_DISTINCT: column list with table qualifiers and aliases
- FROM: table list with optional aliases
- WHERE: AND-joined conditions, emitted only when ``cond`` is true
- GROUP_BY / ORDER_BY (with DESC / ASC): comma-separated column lists
- LIMIT: row limit, omitted for non-positive or non-numeric input

Operators:
- AND / OR: join condition fragments (no automatic parentheses)
- eq, neq, lt, leq, gt, geq: ``name<op>value`` comparisons
- IN / LIKE: membership and pattern matching

Usage:
    from sqlfrag.clauses import SELECT, FROM, WHERE, eq, geq, AND, LIMIT
    from sqlfrag.values import concat

    query = concat(
        SELECT('id', t1={'nm': 'name'}),
        FROM(t1='customers'),
        WHERE(AND(eq(status='active'), geq(created='2017-06-14'))),
        LIMIT(10)
    )
    # SELECT id, t1.name AS nm FROM customers t1
    #   WHERE status='active' AND created>='2017-06-14' LIMIT 10
"""

import math
from collections.abc import Mapping
from typing import Any, Sequence, Union

from pandas.api import types as pdt

from core.logger import get_logger

from .columns import ColumnSpec, column_specs, resolve_columns
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


# ==============
# SELECT / FROM
# ==============

def SELECT_(
    table_cols: Union[Sequence[ColumnSpec], Mapping, None] = None,
    distinct: bool = False
) -> str:
    """
    Build a SELECT clause from explicit column specs.

    Args:
        table_cols: Column specs, or ``{table_or_alias: columns}`` mapping
            where every named entry is a table group
        distinct: Use SELECT DISTINCT

    Returns:
        SELECT clause; ``SELECT *`` when no columns are given

    Example:
        >>> SELECT_({'t1': ['a', {'z': 'b'}], 't2': 'c'})
        'SELECT t1.a, t1.b AS z, t2.c'
    """
    select = 'SELECT DISTINCT' if distinct else 'SELECT'
    columns = resolve_columns(table_cols) if table_cols else []
    if not columns:
        return concat(select, '*')
    return concat(select, commas(columns))


def SELECT(*cols: Any, _distinct: bool = False, **named_cols: Any) -> str:
    """
    Build a SELECT clause from loosely shaped column arguments.

    Positional arguments are column names (or sequences of names). A keyword
    argument whose value is a single column renames that column; one whose
    value has several columns, or columns with their own aliases
    (``{alias: column}``), names a table and qualifies each column with it.

    Args:
        *cols: Unqualified column names
        _distinct: Use SELECT DISTINCT
        **named_cols: Aliased columns or table groups

    Returns:
        SELECT clause

    Example:
        >>> SELECT('a', 'b', t2=['d', 'e'])
        'SELECT a, b, t2.d, t2.e'
        >>> SELECT(t1={'a': 'apple', 'b': 'banana'}, c='cherry')
        'SELECT t1.apple AS a, t1.banana AS b, cherry AS c'
    """
    return SELECT_(column_specs(*cols, **named_cols), distinct=_distinct)


def SELECT_DISTINCT(*cols: Any, **named_cols: Any) -> str:
    """Alias for ``SELECT(..., _distinct=True)``."""
    return SELECT(*cols, _distinct=True, **named_cols)


def FROM(*tables: Any, **aliased_tables: Any) -> str:
    """
    Build a FROM clause with optional table aliases.

    Example:
        >>> FROM('table1', 'table2')
        'FROM table1, table2'
        >>> FROM(t1='table1', t2='table2')
        'FROM table1 t1, table2 t2'
    """
    return concat('FROM', commas(table_names(list(tables)), table_names(aliased_tables)))


# ========================
# Conditions and ordering
# ========================

def AND(*conditions: Any) -> str:
    """Join condition fragments with `` AND ``, skipping empty ones."""
    return ' AND '.join(flatten(*conditions))


def OR(*conditions: Any) -> str:
    """Join condition fragments with `` OR ``, skipping empty ones."""
    return ' OR '.join(flatten(*conditions))


def WHERE(*conditions: Any, cond: Any = True) -> str:
    """
    Build a WHERE clause when ``cond`` is true.

    Conditions are joined with AND. With ``cond`` false an empty fragment is
    returned; with no conditions the bare keyword ``WHERE`` is returned.

    Example:
        >>> WHERE('col1 = 2', 'col2 >= 10')
        'WHERE col1 = 2 AND col2 >= 10'
        >>> WHERE('col1 = 2', cond=False)
        ''
    """
    if not cond:
        return ''
    return concat('WHERE', AND(*conditions))


def GROUP_BY(*cols: Any) -> str:
    """Build a GROUP BY clause from column names."""
    return concat('GROUP BY', commas(*cols))


def ORDER_BY(*cols: Any) -> str:
    """
    Build an ORDER BY clause from column names.

    Example:
        >>> ORDER_BY(DESC('col1'), 'col2', ASC('col3'))
        'ORDER BY col1 DESC, col2, col3 ASC'
    """
    return concat('ORDER BY', commas(*cols))


def DESC(col: Any) -> str:
    """Add ``DESC`` after a column name."""
    return concat(col, 'DESC')


def ASC(col: Any) -> str:
    """Add ``ASC`` after a column name."""
    return concat(col, 'ASC')


def LIMIT(n: Any = 1) -> str:
    """
    Build a LIMIT clause for a positive number.

    Non-numeric, boolean, missing, infinite or non-positive values produce
    an empty fragment instead of an error.
    """
    if (
        pdt.is_bool(n)
        or not pdt.is_number(n)
        or pdt.is_complex(n)
        or not math.isfinite(n)
        or n <= 0
    ):
        logger.debug("Omitting LIMIT for value %r", n)
        return ''
    return f'LIMIT {int(n)}'


# ====================
# Comparison operators
# ====================

def compare(op: str, *pairs: Any, **columns: Any) -> str:
    """
    Render ``name<op>value`` terms joined with AND.

    Args:
        op: SQL comparison operator
        *pairs: ``{name: value}`` mappings or ``(name, value)`` tuples, for
            dotted or repeated names
        **columns: Column names and values

    Returns:
        Condition fragment; values are quoted unless wrapped in RawExpression
    """
    terms = []
    for name, value in named_pairs(pairs, columns):
        if is_sequence(value):
            raise TypeError(f"Comparison value for `{name}` must be a single value, use IN for lists")
        terms.append(f'{name}{op}{quote_value(value)}')
    return AND(*terms)


def eq(*pairs: Any, **columns: Any) -> str:
    """
    Equality conditions.

    Example:
        >>> eq(id=3, cls='text_value')
        "id=3 AND cls='text_value'"
        >>> OR(eq(('id', 9)), eq(('id', 12)), leq(id=5))
        'id=9 OR id=12 OR id<=5'
    """
    return compare('=', *pairs, **columns)


def neq(*pairs: Any, **columns: Any) -> str:
    """
    Inequality conditions (``!=``).

    None renders as ``NULL``, so ``neq(x=None)`` gives ``x!=NULL``, which SQL
    never evaluates as true. Write ``'x IS NOT NULL'`` (or ``'x IS NULL'``)
    as a plain condition string instead.

    Example:
        >>> AND(neq(status='closed'), 'deleted_at IS NULL')
        "status!='closed' AND deleted_at IS NULL"
    """
    return compare('!=', *pairs, **columns)


def lt(*pairs: Any, **columns: Any) -> str:
    """Less-than conditions."""
    return compare('<', *pairs, **columns)


def leq(*pairs: Any, **columns: Any) -> str:
    """Less-than-or-equal conditions."""
    return compare('<=', *pairs, **columns)


def gt(*pairs: Any, **columns: Any) -> str:
    """Greater-than conditions."""
    return compare('>', *pairs, **columns)


def geq(*pairs: Any, **columns: Any) -> str:
    """Greater-than-or-equal conditions."""
    return compare('>=', *pairs, **columns)


def IN(column: Any, values: Any) -> str:
    """
    Membership condition.

    A sequence of values renders a parenthesized list and the column is
    escaped as an identifier. A single item is emitted after the column
    unchanged, which allows subqueries passed as RawExpression.

    Example:
        >>> IN('id', [1, 2, 3])
        'id IN (1, 2, 3)'
        >>> IN('id', raw('SELECT id FROM t2'))
        'id IN (SELECT id FROM t2)'
    """
    if is_sequence(values):
        return concat(escape_col(column), 'IN', parens(commas([quote_value(value) for value in values])))
    return concat(column, 'IN', parens(quote_value(values)))


def LIKE(column: Any, pattern: Any) -> str:
    """
    Pattern-matching condition.

    Example:
        >>> LIKE('name', 'Jo%')
        "name LIKE 'Jo%'"
    """
    return concat(escape_col(column), 'LIKE', quote_value(pattern))
