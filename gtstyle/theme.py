"""
Explicit theme configuration threaded into ``as_gt`` and ``tbl_strata``.

A ``Theme`` bundles the optional hooks and rendering defaults that customise
conversion: a pre-conversion hook, extra render calls spliced after named
anchors, trailing commands appended at execution, and the factory that builds
the base render object. ``DEFAULT_THEME`` is used when none is passed.

Example
-------
>>> from gtstyle import Theme, RenderCall, as_gt
>>> theme = Theme(addl_calls={'cols_label': RenderCall('tab_options', {'table_font_size': '12px'})})
>>> as_gt(tbl, theme=theme)  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Sequence, Tuple

from .constants import CONFIG


def _identity(x):
    return x


def _default_gt_factory(**kwargs):
    from great_tables import GT

    return GT(**kwargs)


@dataclass(frozen=True)
class Theme:
    """
    Rendering configuration.

    Attributes
    ----------
    pre_conversion : callable
        Applied to the StyledTable before the call list is built.
    addl_calls : mapping
        Anchor call name -> RenderCall (or sequence of them). Each entry is
        inserted right after its anchor as ``user_added<i>``.
    addl_cmds : sequence
        RenderCalls appended after the selected calls at execution time.
    gt_factory : callable, optional
        Builds the base render object from the ``gt`` call's arguments.
        Defaults to ``great_tables.GT``.
    indent_px : int
        Left padding used by indentation rules.
    merge_keys : tuple of str
        Columns ``tbl_merge`` joins on, when present in every table body.
    """

    pre_conversion: Callable[[Any], Any] = _identity
    addl_calls: Mapping[str, Any] = field(default_factory=dict)
    addl_cmds: Sequence[Any] = ()
    gt_factory: Optional[Callable[..., Any]] = None
    indent_px: int = CONFIG['INDENT_PX']
    merge_keys: Tuple[str, ...] = CONFIG['MERGE_KEYS']

    def build(self, **kwargs):
        """Construct the base render object."""
        factory = self.gt_factory or _default_gt_factory
        return factory(**kwargs)

    def replace(self, **changes) -> "Theme":
        """Return a copy of the theme with the given fields replaced."""
        return dataclasses.replace(self, **changes)


DEFAULT_THEME = Theme()
