"""
Central repository for package-wide defaults.

All constants are exported via the CONFIG dictionary, which is the single source
of truth for the default values used by the translator and the stratified
builder. Runtime overrides go through ``gtstyle.theme.Theme``, never through
mutation of this dictionary.

Usage
-----
>>> from gtstyle import CONFIG
>>> CONFIG['DEFAULT_SEP']
', '
>>> print(CONFIG['CALL_ORDER'][0])
gt
"""

# ============================================================================
# Render call names (order is significant: it is the execution order)
# ============================================================================
_CALL_ORDER = (
    'gt',
    'fmt_missing',
    'cols_align',
    'tab_style_indent',
    'fmt',
    'tab_style_bold',
    'tab_style_italic',
    'cols_label',
    'tab_footnote',
    'tab_spanner',
    'cols_hide',
    'tab_source_note',
)

CONFIG = {
    # ========================================================================
    # Translator
    # ========================================================================
    'CALL_ORDER': _CALL_ORDER,
    'BASE_CALL': _CALL_ORDER[0],          # always executed, always first
    'USER_CALL_PREFIX': 'user_added',     # names of theme-spliced calls
    'DEFAULT_MISSING_TEXT': '',
    'INDENT_PX': 10,
    'TEXT_FORMAT_TYPES': ('bold', 'italic', 'indent'),
    'TAB_LOCATIONS': ('header', 'body'),
    'INTERPRETERS': ('md', 'html'),
    'ALIGNMENTS': ('left', 'center', 'right'),

    # ========================================================================
    # Table combination / stratification
    # ========================================================================
    'GROUPNAME_COL': 'groupname_col',
    'MERGE_KEYS': ('variable', 'row_type', 'var_label', 'label'),
    'COMBINE_WITH': ('tbl_merge', 'tbl_stack'),
    'DEFAULT_SEP': ', ',
    'MISSING_LEVEL': 'NA',
    'STRATA_PREFIX': 'strata_',
    'GROUP_LABEL': '**Group**',

    # ========================================================================
    # Logging
    # ========================================================================
    'LOG_LEVEL_ENV': 'GTSTYLE_LOG_LEVEL',
    'LOGGER_NAME': 'gtstyle',
}
