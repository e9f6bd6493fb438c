"""Shared fixtures: a small summary-table builder and a recording render object."""

import pandas as pd
import pytest

from gtstyle import StyledTable, Theme, modify_table_styling


def summarize(df, digits=1):
    """
    Minimal summary table: mean for numeric columns, counts per level otherwise.

    Body columns: variable, row_type ('label' / 'level'), label, stat_0.
    """
    records = []
    for col in df.columns:
        s = df[col]
        if pd.api.types.is_numeric_dtype(s):
            records.append({'variable': col, 'row_type': 'label', 'label': col,
                            'stat_0': f"{s.mean():.{digits}f}"})
        else:
            records.append({'variable': col, 'row_type': 'label', 'label': col, 'stat_0': None})
            for level, n in s.value_counts().sort_index().items():
                records.append({'variable': col, 'row_type': 'level', 'label': str(level),
                                'stat_0': f"{n} ({n / len(s):.0%})"})
    body = pd.DataFrame(records, columns=['variable', 'row_type', 'label', 'stat_0'])

    tbl = StyledTable.from_dataframe(body, label_col='label')
    tbl = modify_table_styling(tbl, ['variable', 'row_type'], hide=True)
    tbl = modify_table_styling(tbl, 'label', label='**Characteristic**')
    tbl = modify_table_styling(tbl, 'stat_0', label=f"**N = {len(df)}**")
    tbl = modify_table_styling(tbl, 'label', rows="row_type == 'level'", text_format='indent')
    return tbl


class FakeGT:
    """Stands in for great_tables.GT: records every method call and returns itself."""

    def __init__(self, **kwargs):
        self.init_kwargs = kwargs
        self.calls = []

    def __getattr__(self, name):
        if name.startswith('_'):
            raise AttributeError(name)

        def _record(**kwargs):
            self.calls.append((name, kwargs))
            return self

        return _record

    @property
    def methods(self):
        return [name for name, _ in self.calls]


@pytest.fixture
def trial():
    """10 rows, two strata of 5 ('A', 'B')."""
    return pd.DataFrame({
        'grp': ['A'] * 5 + ['B'] * 5,
        'age': [1, 2, 3, 4, 5, 6, 7, 8, 9, 10],
        'sex': ['F', 'F', 'M', 'M', 'M', 'F', 'F', 'F', 'M', 'M'],
    })


@pytest.fixture
def summary_tbl(trial):
    return summarize(trial.drop(columns='grp'))


@pytest.fixture
def fake_theme():
    return Theme(gt_factory=FakeGT)


@pytest.fixture
def simple_tbl():
    """Three visible columns plus a hidden one."""
    df = pd.DataFrame({
        'label': ['Age', 'Grade I', 'Grade II'],
        'estimate': [1.234, None, 5.678],
        'p_value': [0.04, 0.5, None],
        'row_type': ['label', 'level', 'level'],
    })
    tbl = StyledTable.from_dataframe(df)
    return modify_table_styling(tbl, 'row_type', hide=True)
