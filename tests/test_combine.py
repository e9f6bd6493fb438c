import pandas as pd
import pytest

from gtstyle import (
    StyledTable,
    as_gt,
    clean_table_styling,
    modify_table_styling,
    tbl_merge,
    tbl_stack,
)
from gtstyle.calls import BodyCells

from conftest import summarize


@pytest.fixture
def tbl_a(trial):
    return summarize(trial[trial['grp'] == 'A'].drop(columns='grp'))


@pytest.fixture
def tbl_b(trial):
    return summarize(trial[trial['grp'] == 'B'].drop(columns='grp'))


class TestStack:
    def test_bodies_concatenated_with_group_column(self, tbl_a, tbl_b):
        stacked = tbl_stack([tbl_a, tbl_b], group_header=['A', 'B'])
        body = stacked.table_body
        assert body.columns[0] == 'groupname_col'
        assert body['groupname_col'].tolist() == ['A'] * 4 + ['B'] * 4
        assert body['stat_0'].tolist()[0] == '3.0'
        assert body['stat_0'].tolist()[4] == '8.0'

    def test_group_column_header(self, tbl_a, tbl_b):
        stacked = tbl_stack([tbl_a, tbl_b], group_header=['A', 'B'])
        header = stacked.table_styling.header
        assert header['column'].tolist() == ['groupname_col', 'variable', 'row_type', 'label', 'stat_0']
        assert not header.iloc[0]['hide']

    def test_rule_rows_are_offset(self, tbl_a, tbl_b):
        stacked = tbl_stack([tbl_a, tbl_b])
        calls = as_gt(stacked, include='tab_style_indent', return_calls=True)
        (indent,) = calls['tab_style_indent']
        assert indent.kwargs['locations'] == BodyCells(('label',), (2, 3, 6, 7))

    def test_without_group_header(self, tbl_a, tbl_b):
        stacked = tbl_stack([tbl_a, tbl_b])
        assert 'groupname_col' not in stacked.table_body.columns
        assert len(stacked.table_body) == 8

    def test_new_columns_appended(self, tbl_a):
        extra = StyledTable.from_dataframe(pd.DataFrame({'label': ['x'], 'p_value': [0.1]}))
        stacked = tbl_stack([tbl_a, extra])
        assert stacked.table_styling.header['column'].tolist() == ['variable', 'row_type', 'label', 'stat_0', 'p_value']
        assert stacked.table_body['p_value'].isna().sum() == 4

    def test_regrouping_rejected(self, tbl_a, tbl_b):
        stacked = tbl_stack([tbl_a, tbl_b], group_header=['A', 'B'])
        with pytest.raises(ValueError, match='groupname_col'):
            tbl_stack([stacked, tbl_a], group_header=['x', 'y'])

    def test_length_mismatch(self, tbl_a, tbl_b):
        with pytest.raises(ValueError, match='group_header'):
            tbl_stack([tbl_a, tbl_b], group_header=['A'])

    def test_empty(self):
        with pytest.raises(ValueError):
            tbl_stack([])


class TestMerge:
    def test_columns_suffixed_and_rows_aligned(self, tbl_a, tbl_b):
        merged = tbl_merge([tbl_a, tbl_b], tab_spanner=['**A**', '**B**'])
        body = merged.table_body
        assert body.columns.tolist() == ['variable', 'row_type', 'label', 'stat_0_1', 'stat_0_2']
        assert body['label'].tolist() == ['age', 'sex', 'F', 'M']
        assert body['stat_0_1'].tolist()[0] == '3.0'
        assert body['stat_0_2'].tolist()[0] == '8.0'

    def test_spanners(self, tbl_a, tbl_b):
        merged = tbl_merge([tbl_a, tbl_b], tab_spanner=['**A**', '**B**'])
        header = merged.table_styling.header.set_index('column')
        assert header.loc['stat_0_1', 'spanning_header'] == '**A**'
        assert header.loc['stat_0_2', 'spanning_header'] == '**B**'
        assert pd.isna(header.loc['label', 'spanning_header'])
        assert header.loc['stat_0_1', 'label'] == '**N = 5**'

    def test_default_spanners(self, tbl_a, tbl_b):
        merged = tbl_merge([tbl_a, tbl_b])
        header = merged.table_styling.header.set_index('column')
        assert header.loc['stat_0_2', 'spanning_header'] == '**Table 2**'

    def test_rows_only_in_later_tables_follow(self):
        first = StyledTable.from_dataframe(pd.DataFrame({'label': ['a', 'b'], 'n': [1, 2]}), label_col='label')
        second = StyledTable.from_dataframe(pd.DataFrame({'label': ['c', 'a'], 'n': [3, 4]}), label_col='label')
        second = modify_table_styling(second, 'n', rows=[0], text_format='bold')
        merged = tbl_merge([first, second])
        assert merged.table_body['label'].tolist() == ['a', 'b', 'c']
        assert merged.table_body['n_2'].tolist()[0] == 4
        text_format = clean_table_styling(merged).table_styling.text_format
        assert text_format[['column', 'format_type']].values.tolist() == [['n_2', 'bold']]
        assert text_format['row_numbers'].tolist() == [[2]]

    def test_no_shared_keys(self):
        first = StyledTable.from_dataframe(pd.DataFrame({'a': [1]}))
        second = StyledTable.from_dataframe(pd.DataFrame({'b': [1]}))
        with pytest.raises(ValueError, match='key columns'):
            tbl_merge([first, second])

    def test_rejects_non_tables(self, tbl_a):
        with pytest.raises(TypeError):
            tbl_merge([tbl_a, pd.DataFrame({'label': ['x']})])
