"""
Convert a StyledTable into great_tables render calls.

``table_styling_to_gt_calls`` translates the styling manifest into a CallList
in a fixed order (construction, missing values, alignment, indentation,
formatting functions, emphasis, labels, footnotes, spanners, hidden columns,
source note). ``as_gt`` splices in theme calls, applies the caller's
selection and either returns the calls or executes them.

Example
-------
>>> tbl = StyledTable.from_dataframe(df)
>>> gt = as_gt(tbl)                                    # doctest: +SKIP
>>> as_gt(tbl, include=['cols_align', 'cols_label'], return_calls=True)  # doctest: +SKIP
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Dict, List, Tuple

import pandas as pd

from .calls import BodyCells, CallList, CellCss, CellText, ColumnLabels, Markup, RenderCall
from .constants import CONFIG
from .lifecycle import deprecate_stop, deprecate_warn
from .logging_utils import log_call_list
from .selectors import everything, select_names
from .styling import StyledTable, check_styled_table, clean_table_styling, cols_to_show
from .theme import DEFAULT_THEME, Theme

logger = logging.getLogger(__name__)

_INCLUDE_DETAILS = (
    "The `include` argument accepts names and selectors.\n"
    "To exclude commands, negate a selector.\n"
    "For example, `include=-all_of('tab_spanner')`"
)


def _rows(row_numbers) -> List[int]:
    return [int(r) for r in row_numbers]


def _group_first_seen(records: List[Dict[str, Any]], keys: Tuple[str, ...]) -> Dict[tuple, List[Dict[str, Any]]]:
    groups: Dict[tuple, List[Dict[str, Any]]] = {}
    for rec in records:
        groups.setdefault(tuple(rec[k] for k in keys), []).append(rec)
    return groups


def _unique(values) -> List[Any]:
    out: List[Any] = []
    for v in values:
        if v not in out:
            out.append(v)
    return out


def table_styling_to_gt_calls(x: StyledTable, theme: Theme = DEFAULT_THEME, **gt_kwargs) -> CallList:
    """
    Build the ordered list of render calls for a cleaned StyledTable.

    Parameters
    ----------
    x : StyledTable
        Table whose styling has been through ``clean_table_styling``.
    theme : Theme
        Supplies the indentation width.
    **gt_kwargs
        Passed on to the base construction call.

    Returns
    -------
    CallList
    """
    styling = x.table_styling
    header = styling.header
    header_records = header.to_dict('records')
    gt_calls = CallList()

    # gt ---------------------------------------------------------------------
    gt_args: Dict[str, Any] = {'data': x.table_body}
    if CONFIG['GROUPNAME_COL'] in header['column'].tolist():
        gt_args['groupname_col'] = CONFIG['GROUPNAME_COL']
    gt_args.update(gt_kwargs)
    base = [RenderCall('GT', gt_args, factory=True)]
    if x.caption is not None:
        base.append(RenderCall('tab_header', {'title': Markup(x.caption)}))
    gt_calls['gt'] = base

    # fmt_missing ------------------------------------------------------------
    gt_calls['fmt_missing'] = [
        RenderCall('sub_missing', {'missing_text': CONFIG['DEFAULT_MISSING_TEXT']})
    ] + [
        RenderCall('sub_missing', {
            'columns': [rule['column']],
            'rows': _rows(rule['row_numbers']),
            'missing_text': rule['symbol'],
        })
        for rule in styling.fmt_missing.to_dict('records')
    ]

    # cols_align -------------------------------------------------------------
    gt_calls['cols_align'] = [
        RenderCall('cols_align', {'align': align, 'columns': [rec['column'] for rec in recs]})
        for (align,), recs in _group_first_seen(header_records, ('align',)).items()
    ]

    # indent -----------------------------------------------------------------
    text_format = styling.text_format.to_dict('records')
    gt_calls['tab_style_indent'] = [
        RenderCall('tab_style', {
            'style': [CellCss(f"padding-left: {theme.indent_px}px;"), CellText(align='left')],
            'locations': BodyCells((rule['column'],), tuple(_rows(rule['row_numbers']))),
        })
        for rule in text_format if rule['format_type'] == 'indent'
    ]

    # fmt --------------------------------------------------------------------
    gt_calls['fmt'] = [
        RenderCall('fmt', {
            'fns': rule['fmt_fun'],
            'columns': [rule['column']],
            'rows': _rows(rule['row_numbers']),
        })
        for rule in styling.fmt_fun.to_dict('records')
    ]

    # tab_style_bold / tab_style_italic --------------------------------------
    for name, cell_text, format_type in (
        ('tab_style_bold', CellText(weight='bold'), 'bold'),
        ('tab_style_italic', CellText(style='italic'), 'italic'),
    ):
        gt_calls[name] = [
            RenderCall('tab_style', {
                'style': cell_text,
                'locations': BodyCells((rule['column'],), tuple(_rows(rule['row_numbers']))),
            })
            for rule in text_format if rule['format_type'] == format_type
        ]

    # cols_label -------------------------------------------------------------
    labels = {rec['column']: Markup(str(rec['label']), rec['interpret_label']) for rec in header_records}
    gt_calls['cols_label'] = RenderCall('cols_label', {str(col): label for col, label in labels.items()})

    # tab_footnote -----------------------------------------------------------
    footnotes = styling.footnote.to_dict('records') + styling.footnote_abbrev.to_dict('records')
    grouped = _group_first_seen(footnotes, ('tab_location', 'text_interpret', 'footnote'))
    footnote_calls = []
    for (tab_location, text_interpret, text), recs in grouped.items():
        columns = tuple(_unique(rec['column'] for rec in recs))
        if tab_location == 'header':
            locations = ColumnLabels(columns)
        elif tab_location == 'body':
            locations = BodyCells(columns, tuple(_unique(r for rec in recs for r in _rows(rec['row_numbers']))))
        else:
            raise ValueError(f"Unknown footnote location {tab_location!r}; expected one of {CONFIG['TAB_LOCATIONS']}")
        footnote_calls.append(RenderCall('tab_footnote', {
            'footnote': Markup(text, text_interpret),
            'locations': locations,
        }))
    gt_calls['tab_footnote'] = footnote_calls

    # tab_spanner ------------------------------------------------------------
    spanned = [rec for rec in header_records if pd.notna(rec['spanning_header'])]
    gt_calls['tab_spanner'] = [
        RenderCall('tab_spanner', {
            'label': Markup(str(text), interpret),
            'columns': [rec['column'] for rec in recs],
        })
        for (interpret, text), recs in _group_first_seen(
            spanned, ('interpret_spanning_header', 'spanning_header')
        ).items()
    ]

    # cols_hide --------------------------------------------------------------
    shown = set(cols_to_show(x))
    gt_calls['cols_hide'] = RenderCall(
        'cols_hide', {'columns': [col for col in x.table_body.columns if col not in shown]}
    )

    # tab_source_note --------------------------------------------------------
    if x.source_note is not None:
        gt_calls['tab_source_note'] = RenderCall('tab_source_note', {'source_note': Markup(x.source_note)})

    return gt_calls


def add_theme_calls(gt_calls: CallList, addl_calls) -> CallList:
    """Splice each theme-registered call in after its anchor as ``user_added<i>``."""
    return functools.reduce(
        lambda calls, item: calls.add_after(
            anchor=item[1][0],
            calls=item[1][1],
            new_name=f"{CONFIG['USER_CALL_PREFIX']}{item[0]}",
        ),
        enumerate(addl_calls.items(), start=1),
        gt_calls,
    )


def as_gt(
    x: StyledTable,
    include=everything(),
    return_calls: bool = False,
    *,
    exclude=None,
    omit=None,
    theme: Theme = DEFAULT_THEME,
    **gt_kwargs,
):
    """
    Convert a StyledTable to a great_tables ``GT`` object.

    Parameters
    ----------
    x : StyledTable
        Table to convert.
    include : str, Selector, or list, default everything()
        Calls to run. The base 'gt' call is always included and always first.
    return_calls : bool, default False
        If True, return the selected CallList without executing it.
    exclude : str, Selector, or list, optional
        DEPRECATED: negate a selector in ``include`` instead.
    omit : optional
        DEFUNCT: supplying it raises DefunctArgumentError.
    theme : Theme
        Hooks and defaults (pre-conversion, spliced calls, trailing commands,
        render-object factory).
    **gt_kwargs
        Passed on to the base construction call (``great_tables.GT``).

    Returns
    -------
    great_tables.GT or CallList
    """
    if exclude is not None:
        deprecate_warn("1.2.5", "as_gt(exclude=)", "as_gt(include=)", details=_INCLUDE_DETAILS)
    if omit is not None:
        deprecate_stop("1.2.0", "as_gt(omit=)", "as_gt(include=)", details=_INCLUDE_DETAILS)
    check_styled_table(x)

    x = theme.pre_conversion(x)
    x = clean_table_styling(x)

    gt_calls = table_styling_to_gt_calls(x, theme=theme, **gt_kwargs)
    gt_calls = add_theme_calls(gt_calls, theme.addl_calls)
    logger.debug(f"Generated {len(gt_calls)} call entries ({len(gt_calls.flatten())} calls)")

    names = gt_calls.names()
    include = select_names(include, names, arg_name='include')
    exclude = select_names(exclude, names, arg_name='exclude')
    include = [name for name in names if name in include and name not in exclude]

    base_call = CONFIG['BASE_CALL']
    include = [base_call] + [name for name in include if name != base_call]
    selected = gt_calls.subset(include)
    log_call_list(logger, selected)

    if return_calls:
        return selected
    return selected.execute(theme, extra=theme.addl_cmds)
