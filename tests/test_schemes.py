"""Unit tests for finitediffkit.schemes."""

import pytest

from finitediffkit.exceptions import ConfigurationError
from finitediffkit.schemes import (
    FunctionKind,
    Scheme,
    available_schemes,
    resolve_function_kind,
    resolve_scheme,
)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("forward", Scheme.FORWARD),
        ("FWD", Scheme.FORWARD),
        ("central", Scheme.CENTRAL),
        ("Central Difference", Scheme.CENTRAL),
        ("complex", Scheme.COMPLEX),
        ("complex_step", Scheme.COMPLEX),
        ("Complex-Step", Scheme.COMPLEX),
        ("cs", Scheme.COMPLEX),
    ],
)
def test_resolve_scheme_accepts_names_and_aliases(name, expected):
    """Tests that scheme names are matched case/punctuation insensitively."""
    assert resolve_scheme(name) is expected


def test_resolve_scheme_passes_members_through():
    """Tests that Scheme members are returned unchanged."""
    for scheme in Scheme:
        assert resolve_scheme(scheme) is scheme


@pytest.mark.parametrize("bad", ["backward", "", "richardson", 3, None])
def test_resolve_scheme_rejects_unknown(bad):
    """Tests that unknown schemes raise ConfigurationError instead of falling back."""
    with pytest.raises(ConfigurationError, match="Unknown finite-difference scheme"):
        resolve_scheme(bad)


def test_configuration_error_is_value_error():
    """Tests that ConfigurationError can be caught as a ValueError."""
    with pytest.raises(ValueError):
        resolve_scheme("nope")


def test_resolve_function_kind():
    """Tests function kind resolution and its aliases."""
    assert resolve_function_kind("pure") is FunctionKind.PURE
    assert resolve_function_kind("default") is FunctionKind.PURE
    assert resolve_function_kind("in-place") is FunctionKind.BUFFERED
    assert resolve_function_kind(FunctionKind.BUFFERED) is FunctionKind.BUFFERED
    with pytest.raises(ConfigurationError, match="Unknown function kind"):
        resolve_function_kind("sparse")


def test_available_schemes():
    """Tests that canonical scheme names are listed."""
    assert available_schemes() == ["forward", "central", "complex"]
