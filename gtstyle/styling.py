"""
Styled table data model.

A StyledTable couples a table body (``pandas.DataFrame``) with a styling
manifest (``TableStyling``): one DataFrame per kind of rule, each rule keyed
by column name and a row spec.

Row specs
---------
Every row-scoped rule carries a ``rows`` entry, which may be:
- None: all rows (header footnotes: the column label itself)
- a sequence of 0-based row positions, or a boolean mask
- a string evaluated with ``DataFrame.eval`` against the table body
  (e.g. ``"row_type == 'label'"``)
- a callable taking the table body and returning a boolean mask

``clean_table_styling`` resolves row specs into explicit ``row_numbers``
lists and drops rules superseded by later ones.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from .constants import CONFIG
from .selectors import Selector, select_names

HEADER_COLUMNS = [
    'column', 'hide', 'align', 'interpret_label', 'label',
    'interpret_spanning_header', 'spanning_header',
]
FMT_MISSING_COLUMNS = ['column', 'rows', 'symbol']
FMT_FUN_COLUMNS = ['column', 'rows', 'fmt_fun']
TEXT_FORMAT_COLUMNS = ['column', 'rows', 'format_type']
FOOTNOTE_COLUMNS = ['column', 'rows', 'tab_location', 'text_interpret', 'footnote']

RULE_COLUMNS = {
    'fmt_missing': FMT_MISSING_COLUMNS,
    'fmt_fun': FMT_FUN_COLUMNS,
    'text_format': TEXT_FORMAT_COLUMNS,
    'footnote': FOOTNOTE_COLUMNS,
    'footnote_abbrev': FOOTNOTE_COLUMNS,
}

RowSpec = Union[None, str, Sequence[int], Callable[[pd.DataFrame], Any]]


def empty_frame(columns: Sequence[str]) -> pd.DataFrame:
    return pd.DataFrame({c: pd.Series(dtype=object) for c in columns})


def append_records(df: pd.DataFrame, records: List[Dict[str, Any]]) -> pd.DataFrame:
    """Append dict records to a rule table, keeping python objects intact."""
    if not records:
        return df
    return pd.DataFrame(df.to_dict('records') + list(records), columns=df.columns)


@dataclass
class TableStyling:
    """Styling manifest: one DataFrame per rule kind."""

    header: pd.DataFrame
    fmt_missing: pd.DataFrame = field(default_factory=lambda: empty_frame(FMT_MISSING_COLUMNS))
    fmt_fun: pd.DataFrame = field(default_factory=lambda: empty_frame(FMT_FUN_COLUMNS))
    text_format: pd.DataFrame = field(default_factory=lambda: empty_frame(TEXT_FORMAT_COLUMNS))
    footnote: pd.DataFrame = field(default_factory=lambda: empty_frame(FOOTNOTE_COLUMNS))
    footnote_abbrev: pd.DataFrame = field(default_factory=lambda: empty_frame(FOOTNOTE_COLUMNS))

    def copy(self) -> "TableStyling":
        return TableStyling(**{f.name: getattr(self, f.name).copy() for f in dataclasses.fields(self)})


def default_header(df: pd.DataFrame, label_col: Optional[str] = None) -> pd.DataFrame:
    """
    Build a default header manifest for ``df``.

    The label column (``label_col``, or the first column) is left-aligned,
    every other column centered; labels equal column names; nothing hidden.
    """
    cols = list(df.columns)
    if label_col is None and cols:
        label_col = cols[0]
    records = [
        {
            'column': col,
            'hide': False,
            'align': 'left' if col == label_col else 'center',
            'interpret_label': 'md',
            'label': str(col),
            'interpret_spanning_header': 'md',
            'spanning_header': None,
        }
        for col in cols
    ]
    return pd.DataFrame(records, columns=HEADER_COLUMNS)


@dataclass
class StyledTable:
    """
    A table body plus its styling manifest.

    Attributes
    ----------
    table_body : pd.DataFrame
        Cell values, one row per table row.
    table_styling : TableStyling
        Formatting, labeling and footnote rules.
    caption : str, optional
        Caption (markdown) rendered as the table title.
    source_note : str, optional
        Note rendered below the table.
    """

    table_body: pd.DataFrame
    table_styling: TableStyling
    caption: Optional[str] = None
    source_note: Optional[str] = None

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame, label_col: Optional[str] = None,
                       caption: Optional[str] = None) -> "StyledTable":
        """Wrap a DataFrame with a default styling manifest."""
        if not isinstance(df, pd.DataFrame):
            raise TypeError("`df=` must be a pandas.DataFrame")
        body = df.reset_index(drop=True)
        return cls(
            table_body=body,
            table_styling=TableStyling(header=default_header(body, label_col)),
            caption=caption,
        )

    def copy(self) -> "StyledTable":
        return dataclasses.replace(
            self,
            table_body=self.table_body.copy(),
            table_styling=self.table_styling.copy(),
        )


def check_styled_table(x, arg_name: str = 'x') -> None:
    if not isinstance(x, StyledTable):
        raise TypeError(f"`{arg_name}=` must be a StyledTable, not {type(x).__name__}")


# ============================================================================
# Building the manifest
# ============================================================================

def _check_choice(value: str, choices: Sequence[str], arg_name: str) -> None:
    if value not in choices:
        raise ValueError(f"`{arg_name}=` must be one of {list(choices)}, not {value!r}")


def _per_column(value, columns: List[str], arg_name: str) -> List[Any]:
    """Broadcast a scalar to every selected column, or check a per-column list."""
    if isinstance(value, (list, tuple)):
        if len(value) != len(columns):
            raise ValueError(
                f"`{arg_name}=` must be a single value or one per column "
                f"({len(columns)}), got {len(value)}"
            )
        return list(value)
    return [value] * len(columns)


def modify_table_styling(
    x: StyledTable,
    columns,
    rows: RowSpec = None,
    label=None,
    spanning_header=None,
    hide: Optional[bool] = None,
    footnote=None,
    footnote_abbrev=None,
    align: Optional[str] = None,
    missing_symbol: Optional[str] = None,
    fmt_fun: Optional[Callable[[Any], str]] = None,
    text_format=None,
    text_interpret: str = 'md',
) -> StyledTable:
    """
    Return a copy of ``x`` with styling updated for the selected columns.

    Header properties (label, spanning_header, hide, align) are overwritten;
    row-scoped rules (footnotes, missing symbols, formatting functions, text
    formats) are appended and the most recent rule wins when cleaned.

    Parameters
    ----------
    x : StyledTable
    columns : str, Selector, or list
        Columns to update, selected against the header columns.
    rows : row spec, optional
        Rows the row-scoped rules apply to. Footnotes with ``rows=None``
        attach to the column header; with rows they attach to body cells.
    label, spanning_header : str or list of str, optional
        One value for all columns or one per column.
    hide : bool, optional
    footnote, footnote_abbrev : str, optional
        Footnote text. An empty string removes earlier footnotes on the same cells.
    align : {'left', 'center', 'right'}, optional
    missing_symbol : str, optional
        Text shown for missing values.
    fmt_fun : callable, optional
        Function mapping a cell value to its display string.
    text_format : str or list of str, optional
        Any of 'bold', 'italic', 'indent'.
    text_interpret : {'md', 'html'}
        How label, spanning_header and footnote text are interpreted.
    """
    check_styled_table(x)
    _check_choice(text_interpret, CONFIG['INTERPRETERS'], 'text_interpret')
    if align is not None:
        _check_choice(align, CONFIG['ALIGNMENTS'], 'align')
    if isinstance(text_format, str):
        text_format = [text_format]
    for fmt in text_format or []:
        _check_choice(fmt, CONFIG['TEXT_FORMAT_TYPES'], 'text_format')
    if fmt_fun is not None and not callable(fmt_fun):
        raise TypeError("`fmt_fun=` must be callable")

    x = x.copy()
    styling = x.table_styling
    header = styling.header
    selected = select_names(columns, header['column'].tolist(), arg_name='columns')
    if isinstance(columns, (list, tuple)) and not any(isinstance(c, Selector) for c in columns):
        selected = list(dict.fromkeys(columns))
    columns = selected
    if not columns:
        return x

    # header rows in the order of `columns`, so per-column lists line up
    idx = [header.index[header['column'] == col][0] for col in columns]

    if label is not None:
        header.loc[idx, 'label'] = _per_column(label, columns, 'label')
        header.loc[idx, 'interpret_label'] = text_interpret
    if spanning_header is not None:
        header.loc[idx, 'spanning_header'] = pd.Series(
            _per_column(spanning_header, columns, 'spanning_header'), index=idx, dtype=object
        )
        header.loc[idx, 'interpret_spanning_header'] = text_interpret
    if hide is not None:
        header.loc[idx, 'hide'] = bool(hide)
    if align is not None:
        header.loc[idx, 'align'] = align

    if footnote is not None:
        styling.footnote = append_records(
            styling.footnote, _footnote_records(columns, rows, footnote, text_interpret)
        )
    if footnote_abbrev is not None:
        styling.footnote_abbrev = append_records(
            styling.footnote_abbrev, _footnote_records(columns, rows, footnote_abbrev, text_interpret)
        )
    if missing_symbol is not None:
        styling.fmt_missing = append_records(
            styling.fmt_missing,
            [{'column': col, 'rows': rows, 'symbol': missing_symbol} for col in columns],
        )
    if fmt_fun is not None:
        styling.fmt_fun = append_records(
            styling.fmt_fun,
            [{'column': col, 'rows': rows, 'fmt_fun': fmt_fun} for col in columns],
        )
    if text_format:
        styling.text_format = append_records(
            styling.text_format,
            [{'column': col, 'rows': rows, 'format_type': fmt}
             for fmt in text_format for col in columns],
        )
    return x


def _footnote_records(columns, rows, text, text_interpret):
    location = 'header' if rows is None else 'body'
    return [
        {'column': col, 'rows': rows, 'tab_location': location,
         'text_interpret': text_interpret, 'footnote': text}
        for col in columns
    ]


def modify_caption(x: StyledTable, caption: Optional[str]) -> StyledTable:
    check_styled_table(x)
    return dataclasses.replace(x.copy(), caption=caption)


def modify_source_note(x: StyledTable, source_note: Optional[str]) -> StyledTable:
    check_styled_table(x)
    return dataclasses.replace(x.copy(), source_note=source_note)


def cols_to_show(x: StyledTable) -> List[str]:
    """Columns of the header manifest that are not hidden."""
    header = x.table_styling.header
    return header.loc[~header['hide'].astype(bool), 'column'].tolist()


# ============================================================================
# Cleaning: row specs -> row numbers, superseded rules removed
# ============================================================================

def resolve_rows(rows: RowSpec, table_body: pd.DataFrame) -> List[int]:
    """Resolve a row spec into a list of 0-based row positions."""
    n = len(table_body)
    if rows is None:
        return list(range(n))
    if isinstance(rows, str):
        mask = table_body.eval(rows)
    elif callable(rows):
        mask = rows(table_body)
    else:
        arr = np.asarray(list(rows))
        if arr.dtype == bool:
            mask = arr
        else:
            positions = [int(i) for i in arr]
            out_of_range = [i for i in positions if not 0 <= i < n]
            if out_of_range:
                raise IndexError(f"Row positions {out_of_range} outside table body of {n} rows")
            return positions
    mask = np.asarray(mask, dtype=bool)
    if mask.shape != (n,):
        raise ValueError(f"Row mask has shape {mask.shape}, expected ({n},)")
    return np.flatnonzero(mask).tolist()


def _explode(df: pd.DataFrame, table_body: pd.DataFrame, header_aware: bool = False) -> List[Dict[str, Any]]:
    records = []
    for rec in df.to_dict('records'):
        rows = rec.pop('rows')
        if header_aware and rec.get('tab_location') == 'header':
            records.append({**rec, 'row_number': None})
            continue
        for r in resolve_rows(rows, table_body):
            records.append({**rec, 'row_number': r})
    return records


def _keep_last(records: List[Dict[str, Any]], keys: Sequence[str]) -> List[Dict[str, Any]]:
    """Keep the most recent record per key, at the position it was last seen."""
    latest: Dict[tuple, Dict[str, Any]] = {}
    for rec in records:
        key = tuple(rec[k] for k in keys)
        latest.pop(key, None)
        latest[key] = rec
    return list(latest.values())


def _regroup(records: List[Dict[str, Any]], keys: Sequence[str]) -> pd.DataFrame:
    """Collapse per-row records back into one rule per key with a row_numbers list."""
    groups: Dict[tuple, List[Any]] = {}
    for rec in records:
        key = tuple(rec[k] for k in keys)
        rows = groups.setdefault(key, [])
        if rec['row_number'] is not None and rec['row_number'] not in rows:
            rows.append(rec['row_number'])
    out = []
    for key, rows in groups.items():
        rec = dict(zip(keys, key))
        rec['row_numbers'] = rows if rows else None
        out.append(rec)
    return pd.DataFrame(out, columns=list(keys) + ['row_numbers'])


def clean_table_styling(x: StyledTable) -> StyledTable:
    """
    Resolve row specs to row numbers and drop superseded rules.

    Each rule table in the returned copy has a ``row_numbers`` column (list of
    ints; None for header footnotes) in place of ``rows``:
    - footnote: most recent per (column, location, row); empty text removes
    - footnote_abbrev: unique texts for the same cell joined with ", "
    - fmt_fun, fmt_missing: most recent per (column, row)
    - text_format: duplicates removed
    """
    check_styled_table(x)
    x = x.copy()
    body = x.table_body
    styling = x.table_styling

    footnotes = _keep_last(
        _explode(styling.footnote, body, header_aware=True),
        ['column', 'tab_location', 'row_number'],
    )
    footnotes = [rec for rec in footnotes if rec['footnote']]
    styling.footnote = _regroup(footnotes, ['column', 'tab_location', 'text_interpret', 'footnote'])

    abbrevs: Dict[tuple, Dict[str, Any]] = {}
    for rec in _explode(styling.footnote_abbrev, body, header_aware=True):
        if not rec['footnote']:
            continue
        key = (rec['column'], rec['tab_location'], rec['row_number'])
        if key not in abbrevs:
            abbrevs[key] = {**rec, 'texts': []}
        if rec['footnote'] not in abbrevs[key]['texts']:
            abbrevs[key]['texts'].append(rec['footnote'])
    abbrev_records = [
        {**{k: v for k, v in rec.items() if k != 'texts'}, 'footnote': ', '.join(rec['texts'])}
        for rec in abbrevs.values()
    ]
    styling.footnote_abbrev = _regroup(
        abbrev_records, ['column', 'tab_location', 'text_interpret', 'footnote']
    )

    styling.fmt_fun = _regroup(
        _keep_last(_explode(styling.fmt_fun, body), ['column', 'row_number']),
        ['column', 'fmt_fun'],
    )
    styling.fmt_missing = _regroup(
        _keep_last(_explode(styling.fmt_missing, body), ['column', 'row_number']),
        ['column', 'symbol'],
    )
    styling.text_format = _regroup(
        _explode(styling.text_format, body),
        ['column', 'format_type'],
    )
    return x
