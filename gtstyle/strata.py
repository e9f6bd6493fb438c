"""
Stratified tables.

Split a DataFrame by one or more stratifying columns, build one table per
stratum with any table-building function, and combine the results either side
by side (``tbl_merge``) or stacked (``tbl_stack``).

Tips
----
- Rounding decided inside ``tbl_fun`` is decided per stratum; fix the number
  of digits in ``tbl_fun`` to keep strata consistent.
- Levels of a categorical column that are unobserved within a stratum are
  dropped by most summaries; convert the column to ``pd.Categorical`` with
  all levels so every stratum lists them.

Example
-------
>>> tbl = tbl_strata(df, strata='grade', tbl_fun=summarize, combine_with='tbl_stack')  # doctest: +SKIP
>>> tbl.df_strata                                                                        # doctest: +SKIP
  strata_1   header
0        A        A
1        B        B
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Sequence, Tuple

import pandas as pd

from .combine import tbl_merge, tbl_stack
from .constants import CONFIG
from .selectors import select_names
from .styling import StyledTable
from .theme import DEFAULT_THEME, Theme

logger = logging.getLogger(__name__)


@dataclass
class StratifiedTable(StyledTable):
    """
    A combined table built by ``tbl_strata``.

    Attributes
    ----------
    df_strata : pd.DataFrame
        One row per stratum: ``strata_1`` .. ``strata_n`` key values and the
        synthesized ``header`` label.
    combine_with : str
        'tbl_merge' or 'tbl_stack'.
    """

    df_strata: pd.DataFrame = field(default_factory=pd.DataFrame)
    combine_with: str = CONFIG['COMBINE_WITH'][0]

    @property
    def classes(self) -> Tuple[str, ...]:
        return ('tbl_strata', self.combine_with, 'gtsummary')


def match_arg(arg, choices: Sequence[str], arg_name: str) -> str:
    """
    Match ``arg`` against ``choices``: exact match or unique prefix.

    Passing the full ``choices`` sequence selects its first element.
    """
    choices = list(choices)
    if isinstance(arg, (list, tuple)) and list(arg) == choices:
        return choices[0]
    if isinstance(arg, str) and arg:
        if arg in choices:
            return arg
        partial = [c for c in choices if c.startswith(arg)]
        if len(partial) == 1:
            return partial[0]
    raise ValueError(f"`{arg_name}=` must be one of {choices}, not {arg!r}")


def _level_label(value: Any) -> str:
    if not isinstance(value, (list, tuple)) and pd.isna(value):
        return CONFIG['MISSING_LEVEL']
    return str(value)


def tbl_strata(
    data: pd.DataFrame,
    strata,
    tbl_fun: Callable[..., StyledTable],
    *args,
    sep: str = CONFIG['DEFAULT_SEP'],
    combine_with: str = 'tbl_merge',
    theme: Theme = DEFAULT_THEME,
    **kwargs,
) -> StratifiedTable:
    """
    Build a stratified table.

    Parameters
    ----------
    data : pd.DataFrame
        Data to stratify.
    strata : str, Selector, or list
        Stratifying columns, selected against ``data.columns``.
    tbl_fun : callable
        Called as ``tbl_fun(stratum_data, *args, **kwargs)`` for each stratum
        and must return a StyledTable. ``stratum_data`` excludes the
        stratifying columns.
    *args, **kwargs
        Passed on to ``tbl_fun``.
    sep : str, default ", "
        Separator between levels when more than one stratifying column is used.
    combine_with : {'tbl_merge', 'tbl_stack'}
        How the per-stratum tables are combined. Unique prefixes are accepted.
    theme : Theme
        Configuration forwarded to the combination step.

    Returns
    -------
    StratifiedTable
    """
    if not isinstance(data, pd.DataFrame):
        raise TypeError("`data=` must be a pandas.DataFrame.")
    combine_with = match_arg(combine_with, CONFIG['COMBINE_WITH'], 'combine_with')
    if not callable(tbl_fun):
        raise TypeError("`tbl_fun=` must be callable.")

    strata = select_names(strata, list(data.columns), arg_name='strata')
    if not strata:
        raise ValueError("`strata=` must select at least one column of `data=`.")

    keys: List[Tuple[Any, ...]] = []
    tbls: List[StyledTable] = []
    for key, part in data.groupby(strata, sort=True, dropna=False, observed=True):
        key = key if isinstance(key, tuple) else (key,)
        tbl = tbl_fun(part.drop(columns=strata).reset_index(drop=True), *args, **kwargs)
        if not isinstance(tbl, StyledTable):
            raise TypeError(
                f"`tbl_fun=` must return a StyledTable; got {type(tbl).__name__} "
                f"for stratum {key!r}"
            )
        keys.append(key)
        tbls.append(tbl)
    logger.info(f"Built {len(tbls)} strata on {strata} (combine_with={combine_with})")

    headers = [sep.join(_level_label(v) for v in key) for key in keys]
    if combine_with == 'tbl_merge':
        headers = [f"**{h}**" for h in headers]

    df_strata = pd.DataFrame(
        {f"{CONFIG['STRATA_PREFIX']}{i}": [key[i - 1] for key in keys] for i in range(1, len(strata) + 1)}
    )
    df_strata['header'] = headers

    if combine_with == 'tbl_merge':
        combined = tbl_merge(tbls, tab_spanner=headers, theme=theme)
    else:
        combined = tbl_stack(tbls, group_header=headers)

    return StratifiedTable(
        table_body=combined.table_body,
        table_styling=combined.table_styling,
        caption=combined.caption,
        source_note=combined.source_note,
        df_strata=df_strata,
        combine_with=combine_with,
    )
