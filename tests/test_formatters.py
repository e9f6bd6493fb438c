import numpy as np
import pytest

from gtstyle import style_number, style_percent, style_pvalue, style_sigfig


@pytest.mark.parametrize('x, kwargs, expected', [
    (1234.567, {}, '1,235'),
    (1234.567, {'digits': 1}, '1,234.6'),
    (1234.5, {'digits': 1, 'big_mark': ' ', 'decimal_mark': ','}, '1 234,5'),
    (-3, {'digits': 2}, '-3.00'),
])
def test_style_number(x, kwargs, expected):
    assert style_number(x, **kwargs) == expected


@pytest.mark.parametrize('x, expected', [
    (0.456, '46'),
    (0.0456, '4.6'),
    (0.0001, '<0.1'),
    (0, '0'),
])
def test_style_percent(x, expected):
    assert style_percent(x) == expected


def test_style_percent_symbol():
    assert style_percent(0.5, symbol=True) == '50%'


@pytest.mark.parametrize('p, digits, expected', [
    (0.95, 1, '>0.9'),
    (0.46, 1, '0.5'),
    (0.153, 1, '0.15'),
    (0.0123, 1, '0.012'),
    (0.0004, 1, '<0.001'),
    (0.995, 2, '>0.99'),
    (0.456, 2, '0.46'),
    (0.0456, 3, '0.046'),
    (1.5, 1, ''),
])
def test_style_pvalue(p, digits, expected):
    assert style_pvalue(p, digits=digits) == expected


def test_style_pvalue_prepend():
    assert style_pvalue(0.0001, prepend_p=True) == 'p<0.001'
    assert style_pvalue(0.3, prepend_p=True) == 'p=0.3'


def test_style_pvalue_digits_checked():
    with pytest.raises(ValueError):
        style_pvalue(0.5, digits=4)


@pytest.mark.parametrize('x, expected', [
    (0.1234, '0.12'),
    (1.234, '1.2'),
    (12.34, '12'),
    (1234.4, '1,234'),
])
def test_style_sigfig(x, expected):
    assert style_sigfig(x) == expected


@pytest.mark.parametrize('formatter', [style_number, style_percent, style_pvalue, style_sigfig])
def test_missing_values_are_blank(formatter):
    assert formatter(None) == ''
    assert formatter(np.nan) == ''
