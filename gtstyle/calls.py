"""
Deferred render calls and the ordered call list.

Each render call is a small command object: calling it with the current
render object returns the next render object. Arguments that stand for
``great_tables`` helpers (markdown text, cell styles, cell locations) are
kept as plain dataclasses until execution, so a call list can be built,
inspected and compared without the rendering library being imported.

Executing a CallList is a left fold over its calls, starting from the base
construction call.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from .theme import DEFAULT_THEME

logger = logging.getLogger(__name__)


# ============================================================================
# Deferred arguments
# ============================================================================

@dataclass(frozen=True)
class Markup:
    """Text interpreted as markdown ('md') or raw HTML ('html')."""

    text: str
    interpret: str = 'md'

    def resolve(self):
        from great_tables import html, md

        if self.interpret == 'html':
            return html(self.text)
        return md(self.text)

    def __repr__(self) -> str:
        return f"{self.interpret}({self.text!r})"


@dataclass(frozen=True)
class CellText:
    """Text properties of a cell (``style.text``)."""

    weight: Optional[str] = None
    style: Optional[str] = None
    align: Optional[str] = None

    def resolve(self):
        from great_tables import style

        props = {k: v for k, v in (('weight', self.weight), ('style', self.style), ('align', self.align))
                 if v is not None}
        return style.text(**props)


@dataclass(frozen=True)
class CellCss:
    """Raw CSS rule applied to a cell (``style.css``)."""

    rule: str

    def resolve(self):
        from great_tables import style

        return style.css(rule=self.rule)


@dataclass(frozen=True)
class BodyCells:
    """Body cell location (``loc.body``); ``rows=None`` targets every row."""

    columns: Tuple[str, ...]
    rows: Optional[Tuple[int, ...]] = None

    def resolve(self):
        from great_tables import loc

        return loc.body(columns=list(self.columns),
                        rows=None if self.rows is None else list(self.rows))


@dataclass(frozen=True)
class ColumnLabels:
    """Column label location (``loc.column_labels``)."""

    columns: Tuple[str, ...]

    def resolve(self):
        from great_tables import loc

        return loc.column_labels(columns=list(self.columns))


def _resolve(value):
    if hasattr(value, 'resolve'):
        return value.resolve()
    if isinstance(value, (list, tuple)):
        return [_resolve(v) for v in value]
    return value


def _describe(value) -> str:
    if isinstance(value, pd.DataFrame):
        return f"<DataFrame {value.shape[0]}x{value.shape[1]}>"
    if callable(value) and not hasattr(value, 'resolve'):
        return getattr(value, '__name__', repr(value))
    return repr(value)


# ============================================================================
# Commands
# ============================================================================

@dataclass(frozen=True)
class RenderCall:
    """
    One deferred invocation against the render object.

    Parameters
    ----------
    method : str
        Render-object method to invoke (e.g. 'cols_align').
    kwargs : mapping
        Keyword arguments; deferred argument objects are resolved at call time.
    factory : bool
        True for the base construction call: the receiver is ignored and the
        render object is built with ``theme.build(**kwargs)``.
    """

    method: str
    kwargs: Mapping[str, Any] = field(default_factory=dict)
    factory: bool = False

    def __call__(self, obj, theme=DEFAULT_THEME):
        kwargs = {k: _resolve(v) for k, v in self.kwargs.items()}
        if self.factory:
            return theme.build(**kwargs)
        return getattr(obj, self.method)(**kwargs)

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={_describe(v)}" for k, v in self.kwargs.items())
        return f"{self.method}({args})"


# ============================================================================
# Call list
# ============================================================================

class CallList(MutableMapping):
    """
    Ordered mapping from a call name to its list of commands.

    Names keep insertion order, which is the execution order. A name may map
    to an empty list (e.g. no footnotes); empty entries are dropped when the
    list is flattened for execution.
    """

    def __init__(self, calls: Optional[Mapping[str, Any]] = None):
        self._calls: Dict[str, List[Any]] = {}
        for name, value in (calls or {}).items():
            self[name] = value

    def __getitem__(self, name: str) -> List[Any]:
        return self._calls[name]

    def __setitem__(self, name: str, value) -> None:
        if value is None:
            value = []
        elif not isinstance(value, (list, tuple)):
            value = [value]
        self._calls[name] = list(value)

    def __delitem__(self, name: str) -> None:
        del self._calls[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._calls)

    def __len__(self) -> int:
        return len(self._calls)

    def __repr__(self) -> str:
        lines = [f"CallList({len(self)} entries)"]
        for name, calls in self._calls.items():
            lines.append(f"  {name}:")
            lines.extend(f"    {call!r}" for call in calls)
        return "\n".join(lines)

    def names(self) -> List[str]:
        return list(self._calls)

    def add_after(self, anchor: str, calls, new_name: str) -> "CallList":
        """Return a copy with ``calls`` inserted as ``new_name`` right after ``anchor``."""
        if anchor not in self._calls:
            raise ValueError(f"`add_after=` must be one of {self.names()}, not {anchor!r}")
        out = CallList()
        for name, value in self._calls.items():
            out[name] = value
            if name == anchor:
                out[new_name] = calls
        return out

    def subset(self, names: Sequence[str]) -> "CallList":
        """Return a copy restricted to ``names``, kept in this list's order."""
        wanted = set(names)
        return CallList({name: value for name, value in self._calls.items() if name in wanted})

    def flatten(self) -> List[Any]:
        return [call for calls in self._calls.values() for call in calls if call is not None]

    def execute(self, theme=DEFAULT_THEME, extra: Sequence[Any] = ()):
        """Run every command in order, feeding each result into the next."""
        commands = self.flatten() + [cmd for cmd in extra if cmd is not None]
        logger.debug(f"Executing {len(commands)} render call(s)")

        def _step(obj, cmd):
            logger.debug(f"  {cmd!r}")
            return cmd(obj, theme)

        return functools.reduce(_step, commands, None)
