"""
Styled summary tables rendered with great_tables.

This package provides:
- styling: StyledTable data model (table body + styling manifest)
- render: translation of a StyledTable into ordered great_tables calls (as_gt)
- calls: deferred render-call command objects and the CallList
- selectors: typed name selectors (everything, all_of, starts_with, ...)
- combine: tbl_merge / tbl_stack
- strata: stratified tables (tbl_strata)
- theme: explicit configuration threaded into as_gt / tbl_strata
- formatters: ready-made fmt_fun cell formatters
- logging_utils: package logging setup

Example Usage
-------------
>>> from gtstyle import StyledTable, as_gt, tbl_strata
>>> tbl = StyledTable.from_dataframe(df)            # doctest: +SKIP
>>> gt = as_gt(tbl)                                 # doctest: +SKIP
"""

__version__ = "0.1.0"

# Configuration
from .constants import CONFIG
from .theme import DEFAULT_THEME, Theme

# Data model
from .styling import (
    StyledTable,
    TableStyling,
    clean_table_styling,
    cols_to_show,
    modify_caption,
    modify_source_note,
    modify_table_styling,
)

# Selectors
from .selectors import (
    Selector,
    all_of,
    any_of,
    contains,
    ends_with,
    everything,
    matches,
    select_names,
    starts_with,
)

# Render calls and translation
from .calls import BodyCells, CallList, CellCss, CellText, ColumnLabels, Markup, RenderCall
from .render import as_gt, table_styling_to_gt_calls

# Combination and stratification
from .combine import tbl_merge, tbl_stack
from .strata import StratifiedTable, match_arg, tbl_strata

# Formatters, outputs, logging, lifecycle
from .formatters import style_number, style_percent, style_pvalue, style_sigfig
from .table_utils import save_table_outputs
from .logging_utils import setup_logging
from .lifecycle import DefunctArgumentError

__all__ = [
    # Configuration
    'CONFIG',
    'DEFAULT_THEME',
    'Theme',
    # Data model
    'StyledTable',
    'TableStyling',
    'clean_table_styling',
    'cols_to_show',
    'modify_caption',
    'modify_source_note',
    'modify_table_styling',
    # Selectors
    'Selector',
    'all_of',
    'any_of',
    'contains',
    'ends_with',
    'everything',
    'matches',
    'select_names',
    'starts_with',
    # Render calls
    'BodyCells',
    'CallList',
    'CellCss',
    'CellText',
    'ColumnLabels',
    'Markup',
    'RenderCall',
    'as_gt',
    'table_styling_to_gt_calls',
    # Combination / stratification
    'tbl_merge',
    'tbl_stack',
    'StratifiedTable',
    'match_arg',
    'tbl_strata',
    # Formatters
    'style_number',
    'style_percent',
    'style_pvalue',
    'style_sigfig',
    # Outputs, logging, lifecycle
    'save_table_outputs',
    'setup_logging',
    'DefunctArgumentError',
]
