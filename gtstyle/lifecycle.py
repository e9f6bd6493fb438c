"""
Deprecation helpers for user-facing arguments.

Two stages are supported: a soft deprecation that warns and keeps working,
and a hard removal that raises. Both messages name the version, the retired
argument and its replacement.
"""

from __future__ import annotations

import warnings
from typing import Optional


class DefunctArgumentError(TypeError):
    """Raised when a caller supplies an argument that has been removed."""


def _lifecycle_message(kind: str, when: str, what: str, with_: str, details: Optional[str]) -> str:
    msg = f"`{what}` {kind} in version {when}.\nPlease use `{with_}` instead."
    if details:
        msg = f"{msg}\n{details}"
    return msg


def deprecate_warn(when: str, what: str, with_: str, details: Optional[str] = None) -> None:
    """Emit a FutureWarning for a deprecated (but still honoured) argument."""
    warnings.warn(
        _lifecycle_message("is deprecated", when, what, with_, details),
        FutureWarning,
        stacklevel=3,
    )


def deprecate_stop(when: str, what: str, with_: str, details: Optional[str] = None) -> None:
    """Raise DefunctArgumentError for an argument that no longer exists."""
    raise DefunctArgumentError(
        _lifecycle_message("was deprecated and removed", when, what, with_, details)
    )
