"""
Combine several StyledTables into one.

- ``tbl_merge``: side by side, joined on shared key columns, each table's
  columns grouped under its own spanning header.
- ``tbl_stack``: top to bottom, optionally with a row-group header per table.

Styling rules travel with their columns: rule row numbers are remapped to
positions in the combined body and column names follow any renaming.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from .constants import CONFIG
from .styling import (
    HEADER_COLUMNS,
    RULE_COLUMNS,
    StyledTable,
    TableStyling,
    check_styled_table,
    clean_table_styling,
    empty_frame,
)
from .theme import DEFAULT_THEME, Theme

logger = logging.getLogger(__name__)


def _check_tbls(tbls, labels, arg_name: str) -> List[StyledTable]:
    tbls = list(tbls)
    if not tbls:
        raise ValueError("`tbls=` must contain at least one table")
    for t in tbls:
        check_styled_table(t, 'tbls')
    if labels is not None and len(labels) != len(tbls):
        raise ValueError(
            f"`{arg_name}=` must have one entry per table ({len(tbls)}), got {len(labels)}"
        )
    return tbls


def _carry_rules(
    tables: Sequence[StyledTable],
    renames: Sequence[Dict[Any, Any]],
    row_maps: Sequence[Callable[[int], Optional[int]]],
) -> Dict[str, pd.DataFrame]:
    """
    Collect the cleaned rules of every table into row-spec form for the
    combined body, renaming columns and remapping row numbers.
    """
    out: Dict[str, List[Dict[str, Any]]] = {kind: [] for kind in RULE_COLUMNS}
    for t, rename, row_map in zip(tables, renames, row_maps):
        for kind in RULE_COLUMNS:
            for rec in getattr(t.table_styling, kind).to_dict('records'):
                row_numbers = rec.pop('row_numbers')
                rec['column'] = rename.get(rec['column'], rec['column'])
                if row_numbers is None:
                    rec['rows'] = None
                else:
                    rows = [row_map(int(r)) for r in row_numbers]
                    rows = [r for r in rows if r is not None]
                    if not rows:
                        continue
                    rec['rows'] = rows
                out[kind].append(rec)
    return {
        kind: pd.DataFrame(records, columns=RULE_COLUMNS[kind]) if records else empty_frame(RULE_COLUMNS[kind])
        for kind, records in out.items()
    }


def tbl_merge(
    tbls: Sequence[StyledTable],
    tab_spanner: Optional[Sequence[str]] = None,
    theme: Theme = DEFAULT_THEME,
) -> StyledTable:
    """
    Merge tables side by side.

    Parameters
    ----------
    tbls : sequence of StyledTable
        Tables to merge. Rows are matched on the ``theme.merge_keys`` columns
        present in every table body.
    tab_spanner : sequence of str, optional
        Spanning header for each table's columns. Defaults to
        ``"**Table 1**"``, ``"**Table 2**"``, ...
    theme : Theme

    Returns
    -------
    StyledTable
        Non-key columns of table *i* are suffixed ``_i``. Rows keep the order
        of the first table; rows found only in later tables follow.
    """
    tbls = _check_tbls(tbls, tab_spanner, 'tab_spanner')
    if tab_spanner is None:
        tab_spanner = [f"**Table {i}**" for i in range(1, len(tbls) + 1)]

    keys = [k for k in theme.merge_keys if all(k in t.table_body.columns for t in tbls)]
    if not keys:
        raise ValueError(
            f"Tables cannot be merged: none of the key columns {list(theme.merge_keys)} "
            f"is present in every table body"
        )

    cleaned = [clean_table_styling(t) for t in tbls]
    renames: List[Dict[Any, Any]] = []
    bodies = []
    for i, t in enumerate(cleaned, start=1):
        rename = {c: f"{c}_{i}" for c in t.table_body.columns if c not in keys}
        body = t.table_body.rename(columns=rename)
        body[f"__row_{i}"] = np.arange(len(body))
        renames.append(rename)
        bodies.append(body)

    merged = functools.reduce(
        lambda left, right: left.merge(right, on=keys, how='outer', sort=False),
        bodies,
    )

    # first table's rows first, then rows only found in later tables
    tracking = [f"__row_{i}" for i in range(1, len(cleaned) + 1)]

    def _origin(positions) -> tuple:
        for i, pos in enumerate(positions):
            if not np.isnan(pos):
                return (i, pos)
        return (len(positions), 0)

    origins = [_origin(row) for row in merged[tracking].to_numpy(dtype=float)]
    order = sorted(range(len(merged)), key=origins.__getitem__)
    merged = merged.iloc[order].reset_index(drop=True)

    row_maps = []
    for col in tracking:
        positions = {int(r): new for new, r in enumerate(merged[col]) if pd.notna(r)}
        row_maps.append(positions.get)
    merged = merged.drop(columns=tracking)

    header_records: Dict[Any, Dict[str, Any]] = {}
    for i, (t, rename) in enumerate(zip(cleaned, renames)):
        for rec in t.table_styling.header.to_dict('records'):
            col = rec['column']
            if col in keys:
                if i == 0:
                    header_records[col] = rec
                continue
            rec = {**rec, 'column': rename.get(col, col)}
            if not rec['hide']:
                rec['spanning_header'] = tab_spanner[i]
                rec['interpret_spanning_header'] = 'md'
            header_records[rec['column']] = rec
    header = pd.DataFrame(
        [header_records[c] for c in merged.columns if c in header_records],
        columns=HEADER_COLUMNS,
    )

    rules = _carry_rules(cleaned, renames, row_maps)
    logger.debug(f"Merged {len(tbls)} tables on {keys}: {merged.shape[0]} rows x {merged.shape[1]} columns")
    return StyledTable(table_body=merged, table_styling=TableStyling(header=header, **rules))


def tbl_stack(
    tbls: Sequence[StyledTable],
    group_header: Optional[Sequence[str]] = None,
) -> StyledTable:
    """
    Stack tables vertically.

    Parameters
    ----------
    tbls : sequence of StyledTable
        Tables to stack. The header manifest of the first table is used;
        columns that first appear in later tables are appended.
    group_header : sequence of str, optional
        Row-group label for each table. When given, the combined body gets a
        leading ``groupname_col`` column, rendered as row groups.

    Returns
    -------
    StyledTable
    """
    tbls = _check_tbls(tbls, group_header, 'group_header')
    groupname_col = CONFIG['GROUPNAME_COL']
    if group_header is not None and any(groupname_col in t.table_body.columns for t in tbls):
        raise ValueError(f"Tables already contain a '{groupname_col}' column and cannot be regrouped")

    cleaned = [clean_table_styling(t) for t in tbls]
    offsets = np.cumsum([0] + [len(t.table_body) for t in cleaned[:-1]]).tolist()

    body = pd.concat([t.table_body for t in cleaned], ignore_index=True, sort=False)

    header_records: Dict[Any, Dict[str, Any]] = {}
    for t in cleaned:
        for rec in t.table_styling.header.to_dict('records'):
            header_records.setdefault(rec['column'], rec)
    records = list(header_records.values())

    if group_header is not None:
        body.insert(0, groupname_col, np.repeat(
            np.asarray(list(group_header), dtype=object),
            [len(t.table_body) for t in cleaned],
        ))
        records.insert(0, {
            'column': groupname_col,
            'hide': False,
            'align': 'left',
            'interpret_label': 'md',
            'label': CONFIG['GROUP_LABEL'],
            'interpret_spanning_header': 'md',
            'spanning_header': None,
        })
    header = pd.DataFrame(records, columns=HEADER_COLUMNS)

    row_maps = [functools.partial(lambda r, offset: r + offset, offset=int(off)) for off in offsets]
    rules = _carry_rules(cleaned, [{} for _ in cleaned], row_maps)
    logger.debug(f"Stacked {len(tbls)} tables: {body.shape[0]} rows x {body.shape[1]} columns")
    return StyledTable(table_body=body, table_styling=TableStyling(header=header, **rules))
