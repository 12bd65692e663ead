"""
=============
JOIN builder.
=============

Builds ``[TYPE] JOIN <right tables> <USING|ON ...>`` fragments for one or
more right-hand tables.

Right-hand tables may be a name, a list of names, or an ``{alias: table}``
mapping; aliases become the qualifiers used in ON terms. Nested groupings
are unwrapped to their first element.

Join conditions (``on``) come in two shapes:

- A single condition set, applied to every right table (broadcast). A set
  is a column name, a ``(left_col, right_col)`` tuple, a
  ``{left_col: right_col}`` mapping, or a flat list of names and tuples.
- A per-table list: one condition set per right table, matched by
  position. Any list or tuple containing lists or mappings is read this
  way, as is an explicit ``PerTable(...)``.

Example:
    >>> JOIN('left_tbl', 'right_tbl', 'id')
    'JOIN right_tbl USING (id)'
    >>> LEFT_JOIN('l', {'r': 'right_tbl'}, 'id', prefer_using=False)
    'LEFT JOIN right_tbl r ON l.id=r.id'
    >>> INNER_JOIN('l', ['r1', 'r2'], 'id')
    'INNER JOIN (r1, r2) ON (l.id=r1.id AND l.id=r2.id)'
    >>> OUTER_JOIN('l', {'a': 'right_1', 'b': 'right_2'}, [['col1'], ['col2']])
    'OUTER JOIN (right_1 a, right_2 b) ON (l.col1=a.col1 AND l.col2=b.col2)'
"""

from collections.abc import Mapping
from typing import Any, List, Optional, Tuple

from core.logger import get_logger

from .clauses import AND
from .exceptions import ConditionCountMismatch
from .values import commas, concat, escape_col, is_sequence, parens, table_refs

logger = get_logger(__name__)

ConditionPair = Tuple[Optional[str], Any]


class PerTable(tuple):
    """Condition sets matched by position to the right-hand tables.

    Example:
        >>> JOIN('l', ['r1', 'r2'], PerTable('id', ('l_code', 'code')), prefer_using=False)
        'JOIN (r1, r2) ON (l.id=r1.id AND l.l_code=r2.code)'
    """

    def __new__(cls, *condition_sets: Any):
        return super().__new__(cls, condition_sets)


def _first(value: Any) -> Any:
    if is_sequence(value):
        return next(iter(value))
    return value


def _unwrap_tables(right_tbls: Any) -> Any:
    if isinstance(right_tbls, Mapping):
        return {alias: _first(table) for alias, table in right_tbls.items()}
    if is_sequence(right_tbls):
        return [_first(table) for table in right_tbls]
    return right_tbls


def condition_pairs(on: Any) -> List[ConditionPair]:
    """
    Normalize one condition set into ``(left_col, right_col)`` pairs.

    The left column is None when the condition is unnamed, meaning the same
    column name is used on both sides.
    """
    if on is None:
        return []
    if isinstance(on, Mapping):
        return [(left or None, right) for left, right in on.items()]
    if isinstance(on, tuple) and not isinstance(on, PerTable) and len(on) == 2:
        left, right = on
        if any(is_sequence(col) or isinstance(col, Mapping) for col in on):
            raise TypeError(f"Join condition pair must hold two column names, got {on!r}")
        return [(left or None, right)]
    if is_sequence(on):
        pairs: List[ConditionPair] = []
        for condition in on:
            pairs.extend(condition_pairs(condition))
        return pairs
    return [(None, on)]


def _per_table_sets(on: Any) -> Optional[List[List[ConditionPair]]]:
    if isinstance(on, PerTable):
        return [condition_pairs(condition_set) for condition_set in on]
    if isinstance(on, (list, tuple)) and any(isinstance(item, (list, Mapping)) for item in on):
        return [condition_pairs(condition_set) for condition_set in on]
    return None


def _match_on_tables(left_ref: str, right_ref: str, pairs: List[ConditionPair]) -> List[str]:
    terms = []
    for left_col, right_col in pairs:
        left_id = escape_col(left_col if left_col is not None else right_col, ignore_dot=False)
        right_id = escape_col(right_col, ignore_dot=False)
        terms.append(f'{left_ref}.{left_id}={right_ref}.{right_id}')
    return terms


def JOIN(
    left_ref: str,
    right_tbls: Any,
    on: Any,
    cond: Optional[str] = None,
    prefer_using: bool = True,
    type: str = ''
) -> str:
    """
    Build a JOIN fragment.

    Args:
        left_ref: Left table name or alias used to qualify left columns
        right_tbls: Right table name(s); mapping keys are table aliases
        on: Single condition set (broadcast) or per-table condition list
        cond: Optional extra condition appended with AND
        prefer_using: Emit ``USING (...)`` when there is one right table
            and the conditions are unnamed
        type: Join type (LEFT, RIGHT, INNER, OUTER, CROSS, NATURAL ...),
            case-insensitive

    Returns:
        JOIN fragment

    Raises:
        ConditionCountMismatch: If a per-table condition list does not hold
            exactly one set per right table
    """
    refs = table_refs(_unwrap_tables(right_tbls))
    right_tbl_names = [concat(table, alias) for table, alias in refs]
    right_tbl_refs = [alias or table for table, alias in refs]

    condition_sets = _per_table_sets(on)
    if condition_sets is not None and len(condition_sets) != 1:
        if len(condition_sets) != len(right_tbl_refs):
            logger.debug("JOIN conditions %r do not match tables %r", on, right_tbl_refs)
            raise ConditionCountMismatch(
                f"List of ON conditions must be same length as list of right-hand tables "
                f"({len(condition_sets)} != {len(right_tbl_refs)})"
            )
        terms = []
        for right_ref, pairs in zip(right_tbl_refs, condition_sets):
            terms.extend(_match_on_tables(left_ref, right_ref, pairs))
        join_conditions = concat('ON', parens(AND(*terms))) if terms else ''
    else:
        pairs = condition_sets[0] if condition_sets is not None else condition_pairs(on)
        named = any(left_col is not None for left_col, _ in pairs)
        if not pairs:
            join_conditions = ''
        elif prefer_using and len(right_tbl_refs) == 1 and not named:
            columns = [escape_col(right_col, ignore_dot=False) for _, right_col in pairs]
            join_conditions = concat('USING', parens(commas(columns)))
        else:
            terms = []
            for right_ref in right_tbl_refs:
                terms.extend(_match_on_tables(left_ref, right_ref, pairs))
            if len(terms) > 1:
                join_conditions = concat('ON', parens(AND(*terms)))
            else:
                join_conditions = concat('ON', AND(*terms))

    if len(right_tbl_names) > 1:
        tables = parens(commas(right_tbl_names))
    else:
        tables = commas(right_tbl_names)

    return AND(concat(type.upper(), 'JOIN', tables, join_conditions), cond)


def LEFT_JOIN(left_ref: str, right_tbls: Any, on: Any, cond: Optional[str] = None, prefer_using: bool = True) -> str:
    """LEFT JOIN; see JOIN."""
    return JOIN(left_ref, right_tbls, on, cond, prefer_using, type='left')


def RIGHT_JOIN(left_ref: str, right_tbls: Any, on: Any, cond: Optional[str] = None, prefer_using: bool = True) -> str:
    """RIGHT JOIN; see JOIN."""
    return JOIN(left_ref, right_tbls, on, cond, prefer_using, type='right')


def INNER_JOIN(left_ref: str, right_tbls: Any, on: Any, cond: Optional[str] = None, prefer_using: bool = True) -> str:
    """INNER JOIN; see JOIN."""
    return JOIN(left_ref, right_tbls, on, cond, prefer_using, type='inner')


def OUTER_JOIN(left_ref: str, right_tbls: Any, on: Any, cond: Optional[str] = None, prefer_using: bool = True) -> str:
    """OUTER JOIN; see JOIN."""
    return JOIN(left_ref, right_tbls, on, cond, prefer_using, type='outer')
