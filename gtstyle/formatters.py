"""
Cell formatters for ``fmt_fun`` styling rules.

Each formatter maps one cell value to its display string and returns ""
for missing values, so it can be passed straight to
``modify_table_styling(fmt_fun=...)``:
- numbers with a thousands separator and fixed decimals
- proportions shown as percentages, small values as "<0.1"
- p-values with precision that grows as p shrinks ("<0.001" floor)
- significant-figure rounding for estimates
"""

import math

import pandas as pd


def _is_missing(x) -> bool:
    return x is None or bool(pd.isna(x))


def style_number(x, digits: int = 0, big_mark: str = ",", decimal_mark: str = ".") -> str:
    """Format a number with fixed decimals and a thousands separator."""
    if _is_missing(x):
        return ""
    out = f"{float(x):,.{digits}f}"
    return out.replace(",", "\0").replace(".", decimal_mark).replace("\0", big_mark)


def style_percent(x, digits: int = 0, symbol: bool = False) -> str:
    """
    Format a proportion (0-1) as a percentage.

    Values of 10% and above use ``digits`` decimals, smaller values one more;
    values too small to show become "<0.1" (for digits=0).
    """
    if _is_missing(x):
        return ""
    pct = float(x) * 100
    threshold = 10 ** -(digits + 1)
    if pct >= 10:
        out = style_number(pct, digits=digits)
    elif pct >= threshold:
        out = style_number(pct, digits=digits + 1)
    elif pct > 0:
        out = f"<{style_number(threshold, digits=digits + 1)}"
    elif pct == 0:
        out = "0"
    else:
        return ""
    return f"{out}%" if symbol else out


def style_pvalue(x, digits: int = 1, prepend_p: bool = False) -> str:
    """
    Format a p-value.

    ``digits`` sets the precision for large p-values (1, 2 or 3); precision
    increases for smaller values and p < 0.001 is shown as "<0.001".
    Values outside [0, 1] are treated as missing.
    """
    if digits not in (1, 2, 3):
        raise ValueError(f"`digits=` must be 1, 2 or 3, not {digits!r}")
    if _is_missing(x):
        return ""
    p = float(x)
    if p < 0 or p > 1:
        return ""

    ceiling = 1 - 10 ** -digits
    if p > ceiling:
        out = f">{style_number(ceiling, digits=digits)}"
    elif digits == 1 and p >= 0.2:
        out = style_number(p, digits=1)
    elif digits <= 2 and p >= 0.1:
        out = style_number(p, digits=2)
    elif p >= 0.001:
        out = style_number(p, digits=3)
    else:
        out = "<0.001"

    if prepend_p:
        return f"p{out}" if out[0] in "<>" else f"p={out}"
    return out


def style_sigfig(x, digits: int = 2) -> str:
    """Round to ``digits`` significant figures (at least ``digits`` decimals below 1)."""
    if _is_missing(x):
        return ""
    value = float(x)
    magnitude = abs(value)
    if magnitude < 1:
        decimals = digits
    else:
        decimals = max(0, digits - 1 - int(math.floor(math.log10(magnitude))))
    return style_number(value, digits=decimals)
