"""
===============================================
Comprehensive pytest suite for sqlfrag/dml.py
===============================================

Sections:
---------
1. Unit tests - INSERT_INTO_VALUES, SET, UPDATE
2. Integration tests - DataFrame/records inserts, UPDATE with clauses
3. Edge case tests - empty values, mismatches, malformed SET arguments

Available markers:
------------------
unit, integration, edge_case

How to Execute:
---------------
All tests:          pytest tests/tests_sqlfrag/test_dml.py -v
"""

import warnings

import pandas as pd
import pytest

from sqlfrag.clauses import DESC, IN, ORDER_BY, WHERE, eq
from sqlfrag.dml import (
    INSERT_INTO_VALUES,
    SET,
    SET_,
    UPDATE,
    UPDATE_,
    resolve_set_values,
)
from sqlfrag.exceptions import (
    ColumnCountMismatch,
    DuplicateColumnError,
    MultiValuedArgumentError,
    MultiValuedArgumentWarning,
    UnnamedArgumentError,
)
from sqlfrag.values import concat, raw

# ===============
# 1. UNIT TESTS
# ===============

@pytest.mark.unit
def test_insert_mapping_keys_become_columns():
    """A mapping inserts one row with its keys as the column list."""
    assert INSERT_INTO_VALUES('t', {'a': 1, 'b': 2}) == 'INSERT INTO t (a, b) VALUES (1, 2)'


@pytest.mark.unit
def test_insert_bare_vector_has_no_column_list():
    """A plain sequence inserts values in order without columns."""
    assert INSERT_INTO_VALUES('table', [1, 2, 3]) == 'INSERT INTO table VALUES (1, 2, 3)'


@pytest.mark.unit
def test_insert_quotes_values_by_type():
    """Strings are quoted, numbers are not, None is NULL."""
    result = INSERT_INTO_VALUES('t', {'name': "O'Neil", 'n': 2.5, 'flag': True, 'x': None})

    assert result == "INSERT INTO t (name, n, flag, x) VALUES ('O''Neil', 2.5, TRUE, NULL)"


@pytest.mark.unit
def test_insert_raw_expression_is_verbatim():
    """RawExpression values skip quoting."""
    result = INSERT_INTO_VALUES('t', {'id': 1, 'created': raw('NOW()')})

    assert result == 'INSERT INTO t (id, created) VALUES (1, NOW())'


@pytest.mark.unit
def test_insert_column_subset_reorders_mapping():
    """Explicit columns restrict and reorder mapping fields."""
    result = INSERT_INTO_VALUES('table', {'a': 1, 'b': 2, 'c': 3}, ['c', 'a'])

    assert result == 'INSERT INTO table (c, a) VALUES (3, 1)'


@pytest.mark.unit
def test_insert_columns_for_bare_vector():
    """Explicit columns name the leading values of a bare sequence."""
    assert INSERT_INTO_VALUES('t', [1, 2, 3], ['a', 'b']) == 'INSERT INTO t (a, b) VALUES (1, 2)'


@pytest.mark.unit
def test_set_renders_assignments():
    """SET quotes strings and leaves numbers bare."""
    assert SET(col1='a', col2=42) == "SET col1='a', col2=42"


@pytest.mark.unit
def test_set_standard_eval_mapping():
    """SET_ takes a mapping, allowing dotted names."""
    assert SET_({'items.price': raw('month.price')}) == 'SET items.price=month.price'
    assert SET_([('a', 1), ('b', 'x')]) == "SET a=1, b='x'"


@pytest.mark.unit
def test_update_without_where():
    """UPDATE with no WHERE has no trailing whitespace."""
    assert UPDATE('t1', col1='a', col2=42) == "UPDATE t1 SET col1='a', col2=42"


@pytest.mark.unit
def test_update_with_raw_expression():
    """RawExpression references other columns."""
    assert UPDATE('t1', col1=raw('col2 * 1.25')) == 'UPDATE t1 SET col1=col2 * 1.25'


@pytest.mark.unit
def test_update_inline_where():
    """_where adds a WHERE clause inline."""
    result = UPDATE('t1', col1='a', col2=42, _where=IN('id', range(1, 6)))

    assert result == "UPDATE t1 SET col1='a', col2=42 WHERE id IN (1, 2, 3, 4, 5)"


@pytest.mark.unit
def test_update_ignore():
    """_ignore switches to UPDATE IGNORE."""
    assert UPDATE('t', _ignore=True, a=1) == 'UPDATE IGNORE t SET a=1'


@pytest.mark.unit
def test_update_standard_eval():
    """UPDATE_ takes an explicit mapping and keyword options."""
    result = UPDATE_({'i': 'items'}, {'price': 10}, where=['i.id = 3', 'i.qty > 0'], ignore=True)

    assert result == 'UPDATE IGNORE items i SET price=10 WHERE i.id = 3 AND i.qty > 0'


@pytest.mark.unit
def test_resolve_set_values_reports_diagnostics():
    """Multi-valued arguments keep their first value and are reported."""
    resolution = resolve_set_values([('a', [1, 2]), ('b', 'x')])

    assert resolution.values == {'a': 1, 'b': 'x'}
    assert not resolution.ok
    assert len(resolution.diagnostics) == 1
    assert '`a`' in resolution.diagnostics[0]


# ======================
# 2. INTEGRATION TESTS
# ======================

@pytest.mark.integration
def test_insert_dataframe_rows(people_frame):
    """A DataFrame inserts one VALUES tuple per row; NaN becomes NULL."""
    result = INSERT_INTO_VALUES('people', people_frame)

    assert result == (
        "INSERT INTO people (id, name, score) "
        "VALUES (1, 'Ada', 9.5), (2, 'O''Neil', NULL)"
    )


@pytest.mark.integration
def test_insert_dataframe_column_subset(people_frame):
    """Explicit columns select and order DataFrame columns."""
    result = INSERT_INTO_VALUES('people', people_frame, ['name', 'id'])

    assert result == "INSERT INTO people (name, id) VALUES ('Ada', 1), ('O''Neil', 2)"


@pytest.mark.integration
def test_insert_records_match_dataframe(people_records, people_frame):
    """A list of mappings behaves like the equivalent DataFrame."""
    assert INSERT_INTO_VALUES('people', people_records) == INSERT_INTO_VALUES('people', people_frame)


@pytest.mark.integration
def test_insert_labelled_series_is_one_row():
    """A string-labelled Series is treated like a mapping."""
    series = pd.Series({'a': 1, 'b': 'two'})

    assert INSERT_INTO_VALUES('t', series) == "INSERT INTO t (a, b) VALUES (1, 'two')"


@pytest.mark.integration
def test_update_multiple_tables():
    """Several tables are comma-separated; dotted names use pairs."""
    result = UPDATE(
        ['items', 'month'],
        ('items.price', raw('month.price')),
        _where=eq(('items.id', raw('month.id')))
    )

    assert result == 'UPDATE items, month SET items.price=month.price WHERE items.id=month.id'


@pytest.mark.integration
def test_update_composes_with_clauses():
    """UPDATE output composes with WHERE and ORDER BY fragments."""
    statement = concat(UPDATE('t', id=raw('id + 1')), WHERE(eq(another_col=2)), ORDER_BY(DESC('id')))

    assert statement == 'UPDATE t SET id=id + 1 WHERE another_col=2 ORDER BY id DESC'


# ====================
# 3. EDGE CASE TESTS
# ====================

@pytest.mark.edge_case
@pytest.mark.parametrize("vals", [None, [], {}, pd.DataFrame()])
def test_insert_empty_values_is_empty_fragment(vals):
    """Nothing to insert produces an empty fragment."""
    assert INSERT_INTO_VALUES('t', vals) == ''


@pytest.mark.edge_case
def test_insert_fewer_values_than_columns_raises():
    """Requesting more columns than the source has fails."""
    with pytest.raises(ColumnCountMismatch):
        INSERT_INTO_VALUES('t', [1, 2], ['a', 'b', 'c'])
    with pytest.raises(ColumnCountMismatch):
        INSERT_INTO_VALUES('t', {'a': 1}, ['a', 'b'])


@pytest.mark.edge_case
def test_insert_fewer_dataframe_columns_raises(people_frame):
    """DataFrames are checked by column count."""
    with pytest.raises(ColumnCountMismatch):
        INSERT_INTO_VALUES('people', people_frame, ['id', 'name', 'score', 'extra'])


@pytest.mark.edge_case
def test_insert_quotes_odd_column_names():
    """Column names are escaped as whole identifiers."""
    result = INSERT_INTO_VALUES('t', {'first name': 'Ada'})

    assert result == "INSERT INTO t (\"first name\") VALUES ('Ada')"


@pytest.mark.edge_case
def test_set_unnamed_argument_raises():
    """Every SET argument needs a column name."""
    with pytest.raises(UnnamedArgumentError):
        SET('value')
    with pytest.raises(UnnamedArgumentError):
        SET_({'': 1})


@pytest.mark.edge_case
def test_set_duplicate_column_raises():
    """A column may be assigned only once."""
    with pytest.raises(DuplicateColumnError):
        SET(('a', 1), a=2)
    with pytest.raises(DuplicateColumnError):
        UPDATE('t', ('a', 1), ('a', 2))


@pytest.mark.edge_case
def test_set_multi_valued_argument_warns_and_takes_first():
    """Multi-valued arguments degrade to their first value with a warning."""
    with pytest.warns(MultiValuedArgumentWarning, match='Taking first value for `a`'):
        result = SET(a=[1, 2, 3], b='x')

    assert result == "SET a=1, b='x'"


@pytest.mark.edge_case
def test_update_multi_valued_argument_warns():
    """UPDATE surfaces the same warning without failing."""
    with pytest.warns(MultiValuedArgumentWarning):
        result = UPDATE('t', a=('x', 'y'))

    assert result == "UPDATE t SET a='x'"


@pytest.mark.edge_case
def test_set_strict_mode_raises():
    """strict turns the diagnostic into an error."""
    with pytest.raises(MultiValuedArgumentError):
        SET(a=[1, 2], _strict=True)
    with pytest.raises(MultiValuedArgumentError):
        UPDATE_('t', {'a': [1, 2]}, strict=True)


@pytest.mark.edge_case
def test_warning_filter_can_promote_diagnostics():
    """Callers may turn the warning into an exception with a filter."""
    with warnings.catch_warnings():
        warnings.simplefilter('error', MultiValuedArgumentWarning)
        with pytest.raises(MultiValuedArgumentWarning):
            SET(a=[1, 2])


@pytest.mark.edge_case
def test_update_empty_where_is_dropped():
    """Empty _where values do not add a WHERE keyword."""
    assert UPDATE('t', a=1, _where='') == 'UPDATE t SET a=1'
    assert UPDATE('t', a=1, _where=[]) == 'UPDATE t SET a=1'


@pytest.mark.edge_case
def test_insert_records_keep_integer_values():
    """Records with gaps keep ints as ints, including ids above 2**53."""
    result = INSERT_INTO_VALUES('t', [{'id': 1, 'x': 'a'}, {'id': None, 'x': 'b'}])
    assert result == "INSERT INTO t (id, x) VALUES (1, 'a'), (NULL, 'b')"

    big_id = 2 ** 53 + 1
    result = INSERT_INTO_VALUES('t', [{'id': big_id}, {'id': None}])
    assert result == f'INSERT INTO t (id) VALUES ({big_id}), (NULL)'


@pytest.mark.edge_case
def test_insert_records_union_of_keys():
    """Keys missing from some records become NULL, in first-seen column order."""
    result = INSERT_INTO_VALUES('t', [{'a': 1}, {'b': 'x', 'a': 2}])

    assert result == "INSERT INTO t (a, b) VALUES (1, NULL), (2, 'x')"


@pytest.mark.edge_case
def test_insert_unknown_column_raises(people_frame):
    """Requested columns must exist in the values."""
    with pytest.raises(ColumnCountMismatch, match='zz'):
        INSERT_INTO_VALUES('t', {'a': 1, 'b': 2}, ['a', 'zz'])
    with pytest.raises(ColumnCountMismatch, match='extra'):
        INSERT_INTO_VALUES('people', people_frame, ['id', 'extra'])


@pytest.mark.edge_case
@pytest.mark.parametrize("build", [
    lambda: SET(a=[1, 2]),
    lambda: SET_({'a': [1, 2]}),
    lambda: UPDATE('t', a=[1, 2]),
    lambda: UPDATE_('t', {'a': [1, 2]}),
])
def test_multi_valued_warning_points_at_caller(build):
    """The warning is attributed to the calling code, not sqlfrag internals."""
    with pytest.warns(MultiValuedArgumentWarning) as record:
        build()

    assert record[0].filename == __file__
