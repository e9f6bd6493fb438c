"""
Typed name selectors.

A Selector is a pure function from an ordered sequence of names (table
columns, render-call names) to the chosen subset. Selectors compose with
``|`` (union), ``&`` (intersection), ``-`` (difference) and unary ``-`` / ``~``
(complement), and are always evaluated eagerly through ``select_names``.

Examples
--------
>>> select_names(everything(), ['gt', 'cols_align', 'tab_spanner'])
['gt', 'cols_align', 'tab_spanner']
>>> select_names(-all_of('tab_spanner'), ['gt', 'cols_align', 'tab_spanner'])
['gt', 'cols_align']
>>> select_names(['cols_label', starts_with('cols_a')], ['gt', 'cols_align', 'cols_label'])
['cols_align', 'cols_label']
"""

from __future__ import annotations

import re
from typing import Callable, Iterable, List, Optional, Sequence, Union


class Selector:
    """
    Deferred selection over a sequence of names.

    Parameters
    ----------
    fn : callable
        Maps the candidate names to the selected names (any order).
    description : str
        Human-readable form, used in reprs and error messages.
    negated : bool
        True for complement selectors; a selection made only of complements
        starts from every name.
    """

    def __init__(self, fn: Callable[[Sequence[str]], Iterable[str]], description: str, negated: bool = False):
        self._fn = fn
        self.description = description
        self.negated = negated

    def __call__(self, names: Sequence[str]) -> List[str]:
        chosen = set(self._fn(list(names)))
        return [n for n in names if n in chosen]

    def __repr__(self) -> str:
        return f"Selector({self.description})"

    def __or__(self, other) -> "Selector":
        other = as_selector(other)
        return Selector(lambda names: set(self(names)) | set(other(names)),
                        f"{self.description} | {other.description}")

    def __and__(self, other) -> "Selector":
        other = as_selector(other)
        return Selector(lambda names: set(self(names)) & set(other(names)),
                        f"{self.description} & {other.description}")

    def __sub__(self, other) -> "Selector":
        other = as_selector(other)
        return Selector(lambda names: set(self(names)) - set(other(names)),
                        f"{self.description} - {other.description}")

    def __neg__(self) -> "Selector":
        return Selector(lambda names: set(names) - set(self(names)),
                        f"-{self.description}", negated=True)

    __invert__ = __neg__


def everything() -> Selector:
    """Select every name."""
    return Selector(lambda names: names, "everything()")


def all_of(names: Union[str, Sequence[str]]) -> Selector:
    """Select exactly ``names``; any name not present raises KeyError."""
    wanted = [names] if isinstance(names, str) else list(names)

    def _select(candidates):
        missing = [n for n in wanted if n not in candidates]
        if missing:
            raise KeyError(
                f"Can't select names that don't exist: {missing}. "
                f"Choose from {list(candidates)}"
            )
        return wanted

    return Selector(_select, f"all_of({wanted!r})")


def any_of(names: Union[str, Sequence[str]]) -> Selector:
    """Select the names in ``names`` that are present, ignoring the rest."""
    wanted = [names] if isinstance(names, str) else list(names)
    return Selector(lambda candidates: [n for n in wanted if n in candidates], f"any_of({wanted!r})")


def starts_with(prefix: str) -> Selector:
    return Selector(lambda names: [n for n in names if str(n).startswith(prefix)], f"starts_with({prefix!r})")


def ends_with(suffix: str) -> Selector:
    return Selector(lambda names: [n for n in names if str(n).endswith(suffix)], f"ends_with({suffix!r})")


def contains(text: str) -> Selector:
    return Selector(lambda names: [n for n in names if text in str(n)], f"contains({text!r})")


def matches(pattern: str) -> Selector:
    regex = re.compile(pattern)
    return Selector(lambda names: [n for n in names if regex.search(str(n))], f"matches({pattern!r})")


def as_selector(select) -> Selector:
    """Coerce a string, Selector or list of either into a single Selector."""
    if isinstance(select, Selector):
        return select
    if isinstance(select, str):
        return all_of(select)
    items = [as_selector(s) for s in select]
    positives = [s for s in items if not s.negated]
    negatives = [s for s in items if s.negated]

    def _select(names):
        # A selection made only of complements starts from every name
        chosen = set(names) if negatives and not positives else set()
        for s in positives:
            chosen |= set(s(names))
        for s in negatives:
            chosen &= set(s(names))
        return chosen

    return Selector(_select, "[" + ", ".join(s.description for s in items) + "]")


def select_names(select, names: Sequence[str], arg_name: Optional[str] = None) -> List[str]:
    """
    Evaluate a selection against ``names``.

    Parameters
    ----------
    select : None, str, Selector, or list of str/Selector
        The selection. None selects nothing.
    names : sequence of str
        Candidate names, in their canonical order.
    arg_name : str, optional
        Argument name reported in error messages.

    Returns
    -------
    list of str
        Selected names in the order they appear in ``names``.
    """
    names = list(names)
    if select is None:
        return []
    try:
        return as_selector(select)(names)
    except KeyError as e:
        if arg_name is None:
            raise
        raise KeyError(f"Error in `{arg_name}=` argument: {e.args[0]}") from e
