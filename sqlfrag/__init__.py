"""
===================================================
sqlfrag: compose SQL from small fragment builders.
===================================================

Each builder takes column names, table names, mappings or conditions and
returns a string fragment of SQL. Fragments compose by concatenation, so the
program text mirrors the final statement.

The package is organized by concern:
    - values.py: Literal/RawExpression values, quoting and joiners
    - columns.py: column identifier resolution (Bare, Aliased, TableGroup)
    - clauses.py: SELECT, FROM, WHERE, GROUP BY, ORDER BY, LIMIT and operators
    - joins.py: JOIN builder and its typed variants
    - dml.py: INSERT INTO ... VALUES, SET and UPDATE
    - pretty.py: sqlparse-based pretty-printer
    - exceptions.py: error and warning types

Example:
    >>> from sqlfrag import SELECT, FROM, LEFT_JOIN, WHERE, eq, concat
    >>>
    >>> concat(
    ...     SELECT('id', o={'total': 'amount'}),
    ...     FROM(c='customers'),
    ...     LEFT_JOIN('c', {'o': 'orders'}, {'id': 'customer_id'}),
    ...     WHERE(eq(('c.status', 'active')))
    ... )
    "SELECT id, o.amount AS total FROM customers c LEFT JOIN orders o ON c.id=o.customer_id WHERE c.status='active'"
"""

__version__ = "0.1.0"
__all__ = [
    # Values and formatting
    'Literal', 'RawExpression', 'raw', 'quote_value', 'escape_col',
    'commas', 'parens', 'concat',
    # Column resolution
    'Bare', 'Aliased', 'TableGroup', 'column_specs', 'resolve_columns',
    # Clauses and operators
    'SELECT', 'SELECT_', 'SELECT_DISTINCT', 'FROM', 'WHERE', 'AND', 'OR',
    'GROUP_BY', 'ORDER_BY', 'DESC', 'ASC', 'LIMIT',
    'eq', 'neq', 'lt', 'leq', 'gt', 'geq', 'IN', 'LIKE',
    # Joins
    'JOIN', 'LEFT_JOIN', 'RIGHT_JOIN', 'INNER_JOIN', 'OUTER_JOIN', 'PerTable',
    # DML
    'INSERT_INTO_VALUES', 'SET', 'SET_', 'UPDATE', 'UPDATE_',
    'SetResolution', 'resolve_set_values',
    # Pretty-printer
    'sqlformat',
    # Errors
    'SqlFragmentError', 'ConditionCountMismatch', 'ColumnCountMismatch',
    'UnnamedArgumentError', 'DuplicateColumnError', 'MultiValuedArgumentError',
    'SqlFormatError', 'MultiValuedArgumentWarning',
]

from .clauses import (
    AND,
    ASC,
    DESC,
    FROM,
    GROUP_BY,
    IN,
    LIKE,
    LIMIT,
    OR,
    ORDER_BY,
    SELECT,
    SELECT_,
    SELECT_DISTINCT,
    WHERE,
    eq,
    geq,
    gt,
    leq,
    lt,
    neq,
)
from .columns import Aliased, Bare, TableGroup, column_specs, resolve_columns
from .dml import (
    INSERT_INTO_VALUES,
    SET,
    SET_,
    UPDATE,
    UPDATE_,
    SetResolution,
    resolve_set_values,
)
from .exceptions import (
    ColumnCountMismatch,
    ConditionCountMismatch,
    DuplicateColumnError,
    MultiValuedArgumentError,
    MultiValuedArgumentWarning,
    SqlFormatError,
    SqlFragmentError,
    UnnamedArgumentError,
)
from .joins import INNER_JOIN, JOIN, LEFT_JOIN, OUTER_JOIN, RIGHT_JOIN, PerTable
from .pretty import sqlformat
from .values import Literal, RawExpression, commas, concat, escape_col, parens, quote_value, raw
