import pandas as pd
import pytest

from gtstyle import CallList, Markup, RenderCall, Theme
from gtstyle.calls import BodyCells, ColumnLabels

from conftest import FakeGT


@pytest.fixture
def theme():
    return Theme(gt_factory=FakeGT)


def test_values_are_normalised_to_lists():
    calls = CallList({'a': RenderCall('cols_hide', {'columns': []}), 'b': None, 'c': [RenderCall('x')]})
    assert calls['a'] == [RenderCall('cols_hide', {'columns': []})]
    assert calls['b'] == []
    assert len(calls) == 3


def test_add_after_inserts_and_copies():
    calls = CallList({'gt': [], 'cols_label': [], 'cols_hide': []})
    new = calls.add_after('cols_label', RenderCall('tab_options'), 'user_added1')
    assert new.names() == ['gt', 'cols_label', 'user_added1', 'cols_hide']
    assert calls.names() == ['gt', 'cols_label', 'cols_hide']


def test_add_after_unknown_anchor():
    with pytest.raises(ValueError):
        CallList({'gt': []}).add_after('cols_label', RenderCall('tab_options'), 'user_added1')


def test_subset_keeps_list_order():
    calls = CallList({'gt': [], 'fmt': [], 'cols_label': []})
    assert calls.subset(['cols_label', 'gt']).names() == ['gt', 'cols_label']


def test_flatten_drops_empty_entries():
    calls = CallList({'gt': [RenderCall('GT', factory=True)], 'tab_footnote': [], 'cols_hide': RenderCall('cols_hide')})
    assert [c.method for c in calls.flatten()] == ['GT', 'cols_hide']


def test_execute_threads_result_through_calls(theme):
    data = pd.DataFrame({'a': [1]})
    calls = CallList({
        'gt': RenderCall('GT', {'data': data}, factory=True),
        'cols_align': RenderCall('cols_align', {'align': 'left', 'columns': ['a']}),
        'cols_hide': RenderCall('cols_hide', {'columns': []}),
    })
    gt = calls.execute(theme, extra=[RenderCall('opt_stylize', {'style': 1}), None])
    assert gt.init_kwargs['data'] is data
    assert gt.calls == [
        ('cols_align', {'align': 'left', 'columns': ['a']}),
        ('cols_hide', {'columns': []}),
        ('opt_stylize', {'style': 1}),
    ]


def test_render_call_is_a_function_of_the_receiver():
    call = RenderCall('cols_hide', {'columns': ['x']})
    gt = FakeGT()
    assert call(gt) is gt
    assert gt.calls == [('cols_hide', {'columns': ['x']})]


def test_repr_is_inspectable():
    call = RenderCall('tab_spanner', {'label': Markup('**A**'), 'columns': ['stat_1']})
    assert repr(call) == "tab_spanner(label=md('**A**'), columns=['stat_1'])"
    base = RenderCall('GT', {'data': pd.DataFrame({'a': [1, 2]})}, factory=True)
    assert repr(base) == "GT(data=<DataFrame 2x1>)"



def test_footnote_call_resolves_locations(theme):
    pytest.importorskip('great_tables')
    from great_tables import loc

    call = RenderCall('tab_footnote', {'footnote': Markup('n (%)'), 'locations': ColumnLabels(('stat_0',))})
    gt = call(FakeGT(), theme)
    ((method, kwargs),) = gt.calls
    assert method == 'tab_footnote'
    assert isinstance(kwargs['locations'], type(loc.column_labels(columns=['stat_0'])))

    call = RenderCall('tab_footnote', {'footnote': Markup('n (%)'), 'locations': BodyCells(('stat_0',), (1,))})
    gt = call(FakeGT(), theme)
    assert isinstance(gt.calls[0][1]['locations'], type(loc.body(columns=['stat_0'], rows=[1])))
