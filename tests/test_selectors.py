import pytest

from gtstyle import (
    all_of,
    any_of,
    contains,
    ends_with,
    everything,
    matches,
    select_names,
    starts_with,
)

NAMES = ['gt', 'fmt_missing', 'cols_align', 'tab_style_bold', 'cols_label', 'tab_spanner', 'cols_hide']


def test_everything_keeps_order():
    assert select_names(everything(), NAMES) == NAMES


def test_none_selects_nothing():
    assert select_names(None, NAMES) == []
    assert select_names([], NAMES) == []


def test_strings_are_strict():
    assert select_names('cols_label', NAMES) == ['cols_label']
    with pytest.raises(KeyError, match='missing_call'):
        select_names(['cols_label', 'missing_call'], NAMES)


def test_error_names_argument():
    with pytest.raises(KeyError, match='include'):
        select_names('missing_call', NAMES, arg_name='include')


def test_any_of_is_lenient():
    assert select_names(any_of(['cols_hide', 'missing_call']), NAMES) == ['cols_hide']


def test_result_follows_candidate_order():
    assert select_names(['cols_hide', 'gt', 'cols_align'], NAMES) == ['gt', 'cols_align', 'cols_hide']


def test_pattern_helpers():
    assert select_names(starts_with('cols_'), NAMES) == ['cols_align', 'cols_label', 'cols_hide']
    assert select_names(ends_with('_bold'), NAMES) == ['tab_style_bold']
    assert select_names(contains('span'), NAMES) == ['tab_spanner']
    assert select_names(matches(r'^tab_(style|spanner)'), NAMES) == ['tab_style_bold', 'tab_spanner']


def test_negation_alone_starts_from_everything():
    assert select_names(-all_of('tab_spanner'), NAMES) == [n for n in NAMES if n != 'tab_spanner']
    assert select_names(~starts_with('cols_'), NAMES) == ['gt', 'fmt_missing', 'tab_style_bold', 'tab_spanner']


def test_list_mixing_positive_and_negative():
    selected = select_names([starts_with('cols_'), -all_of('cols_hide')], NAMES)
    assert selected == ['cols_align', 'cols_label']


def test_operators():
    assert select_names(starts_with('cols_') | all_of('gt'), NAMES) == ['gt', 'cols_align', 'cols_label', 'cols_hide']
    assert select_names(starts_with('cols_') & ends_with('label'), NAMES) == ['cols_label']
    assert select_names(everything() - starts_with('tab_'), NAMES) == [
        'gt', 'fmt_missing', 'cols_align', 'cols_label', 'cols_hide'
    ]


def test_non_string_names():
    assert select_names(all_of([2020]), [2019, 2020]) == [2020]
    assert select_names(starts_with('20'), [2019, 'x']) == [2019]
