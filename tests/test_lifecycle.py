import pytest

from gtstyle.lifecycle import DefunctArgumentError, deprecate_stop, deprecate_warn


def test_deprecate_warn_names_replacement():
    with pytest.warns(FutureWarning, match=r"as_gt\(include=\)"):
        deprecate_warn("1.2.5", "as_gt(exclude=)", "as_gt(include=)")


def test_deprecate_stop_raises():
    with pytest.raises(DefunctArgumentError, match="removed in version 1.2.0"):
        deprecate_stop("1.2.0", "as_gt(omit=)", "as_gt(include=)", details="Use a negated selector.")


def test_defunct_is_type_error():
    assert issubclass(DefunctArgumentError, TypeError)
