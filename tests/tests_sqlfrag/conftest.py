"""
Shared fixtures for sqlfrag builder tests.

Key fixtures:
- people_frame: small DataFrame used by INSERT tests
- people_records: the same rows as a list of mappings
"""

import pandas as pd
import pytest


@pytest.fixture
def people_records():
    """Rows as a list of mappings."""
    return [
        {'id': 1, 'name': 'Ada', 'score': 9.5},
        {'id': 2, 'name': "O'Neil", 'score': None},
    ]


@pytest.fixture
def people_frame(people_records):
    """Rows as a pandas DataFrame."""
    return pd.DataFrame.from_records(people_records)
