#!/usr/bin/env python3
"""
Table output utilities.

Render a StyledTable and write it next to a CSV of its visible body, so
the HTML and the plain data always come from the same call.

Strict behavior: explicit errors on invalid inputs. No silent fallbacks.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

from .render import as_gt
from .selectors import everything
from .styling import StyledTable, check_styled_table, cols_to_show
from .theme import DEFAULT_THEME, Theme


def save_table_outputs(
    x: StyledTable,
    output_dir: Path,
    table_name: str,
    *,
    include=everything(),
    theme: Theme = DEFAULT_THEME,
    save_csv: bool = True,
    logger: Optional[logging.Logger] = None,
) -> Tuple[Path, Optional[Path]]:
    """
    Render ``x`` to HTML and optionally save its visible body as CSV.

    Parameters
    ----------
    x : StyledTable
        Table to render.
    output_dir : Path
        Directory for the outputs (created if missing).
    table_name : str
        Base filename, without extension.
    include : selection, default everything()
        Render calls to run, as in ``as_gt``.
    theme : Theme
    save_csv : bool, default True
        Also write ``<table_name>.csv`` with the non-hidden body columns.
    logger : logging.Logger, optional

    Returns
    -------
    html_path : Path
    csv_path : Optional[Path]
        None if save_csv=False
    """
    check_styled_table(x)
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    gt = as_gt(x, include=include, theme=theme)
    html_path = out_dir / f"{table_name}.html"
    html_path.write_text(gt.as_raw_html(), encoding='utf-8')
    if logger:
        logger.info(f"HTML saved: {html_path}")

    csv_path: Optional[Path] = None
    if save_csv:
        shown = [c for c in cols_to_show(x) if c in x.table_body.columns]
        csv_path = out_dir / f"{table_name}.csv"
        x.table_body[shown].to_csv(csv_path, index=False)
        if logger:
            logger.info(f"CSV saved: {csv_path}")

    return html_path, csv_path


__all__ = [
    'save_table_outputs',
]
