"""
===============================
Column identifier resolution.
===============================

Turns loosely shaped column arguments into qualified, aliased SQL column
expressions. Every argument is classified into one of three variants:

- Bare: a plain column (``a``)
- Aliased: a renamed column (``apple AS a``)
- TableGroup: columns qualified by a table or alias (``t1.apple AS a, t1.b``)

Classification of a named argument depends only on its shape: a value with
more than one entry, or whose entries carry their own aliases, is a table
group named after the argument; anything else is a single column whose
argument name becomes the alias.

Example:
    >>> from sqlfrag.columns import column_specs, resolve_columns
    >>> specs = column_specs('x', t1={'a': 'apple', 'b': 'banana'}, c='cherry')
    >>> resolve_columns(specs)
    ['x', 't1.apple AS a', 't1.banana AS b', 'cherry AS c']
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple, Union

from .values import escape_col, is_sequence


@dataclass(frozen=True)
class Bare:
    """A column selected under its own name."""

    column: Any


@dataclass(frozen=True)
class Aliased:
    """A column selected under an output alias."""

    column: Any
    alias: str


@dataclass(frozen=True)
class TableGroup:
    """Columns qualified with a table name or table alias.

    Attributes:
        table: Table name or alias used as qualifier
        columns: Column names, Bare or Aliased entries, in output order
    """

    table: str
    columns: Tuple[Any, ...]


ColumnSpec = Union[Bare, Aliased, TableGroup]


def _group_entries(value: Any) -> List[Union[Bare, Aliased]]:
    """Expand a column value into Bare/Aliased entries.

    Mappings are read as ``{alias: column}``; falsy keys mean no alias.
    """
    if isinstance(value, (Bare, Aliased)):
        return [value]
    if isinstance(value, Mapping):
        return [Aliased(column, alias) if alias else Bare(column) for alias, column in value.items()]
    if is_sequence(value):
        entries = []
        for item in value:
            entries.extend(_group_entries(item))
        return entries
    return [Bare(value)]


def column_spec(name: Optional[str], value: Any) -> List[ColumnSpec]:
    """
    Classify one SELECT argument.

    Args:
        name: Argument name (table/alias or output alias), None when unnamed
        value: Column name, sequence of names, or ``{alias: column}`` mapping

    Returns:
        Column specs for the argument; unnamed sequences expand to one spec
        per element
    """
    if isinstance(value, (Bare, Aliased, TableGroup)) and not name:
        return [value]

    entries = _group_entries(value)
    if not entries:
        return []
    if not name:
        return list(entries)

    if len(entries) > 1 or any(isinstance(entry, Aliased) for entry in entries):
        return [TableGroup(name, tuple(entries))]
    return [Aliased(entries[0].column, name)]


def column_specs(*args: Any, **kwargs: Any) -> List[ColumnSpec]:
    """Classify positional (unnamed) then keyword (named) arguments in order."""
    specs: List[ColumnSpec] = []
    for value in args:
        if value is None:
            continue
        specs.extend(column_spec(None, value))
    for name, value in kwargs.items():
        if value is None:
            continue
        specs.extend(column_spec(name, value))
    return specs


def _render(column: Any, alias: Optional[str], table: Optional[str] = None) -> str:
    text = escape_col(column)
    if table and '.' not in str(column):
        text = f'{escape_col(table)}.{text}'
    if alias:
        text = f'{text} AS {escape_col(alias, ignore_dot=False)}'
    return text


def resolve_column(spec: ColumnSpec) -> List[str]:
    """Render a single column spec into one or more column expressions."""
    if isinstance(spec, Bare):
        return [_render(spec.column, None)]
    if isinstance(spec, Aliased):
        return [_render(spec.column, spec.alias)]
    if isinstance(spec, TableGroup):
        rendered = []
        for entry in spec.columns:
            if not isinstance(entry, (Bare, Aliased)):
                entry = Bare(entry)
            rendered.append(_render(entry.column, getattr(entry, 'alias', None), spec.table))
        return rendered
    raise TypeError(f"Unsupported column spec: {spec!r}")


def resolve_columns(specs: Union[Sequence[ColumnSpec], Mapping]) -> List[str]:
    """
    Render column specs into a flat, ordered list of column expressions.

    Args:
        specs: Sequence of column specs, or a mapping of
            ``{table_or_alias: columns}``. Every named mapping entry is a
            table group, even with a single column; a falsy key means the
            columns are unqualified.

    Returns:
        Column expressions in argument order, then within-group order
    """
    if isinstance(specs, Mapping):
        table_cols = specs
        specs = []
        for name, value in table_cols.items():
            if name:
                specs.append(TableGroup(name, tuple(_group_entries(value))))
            else:
                specs.extend(column_spec(None, value))

    columns: List[str] = []
    for spec in specs:
        columns.extend(resolve_column(spec))
    return columns
