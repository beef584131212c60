"""Tests for the top-level finitediffkit namespace."""

import finitediffkit


def test_all_names_importable():
    """Tests that every exported name exists."""
    for name in finitediffkit.__all__:
        assert hasattr(finitediffkit, name), name


def test_kit_module_is_package():
    """Tests that the kit reports the package as its module."""
    assert finitediffkit.FiniteDiffKit.__module__ == "finitediffkit"


def test_errors_are_value_errors():
    """Tests that library errors can be caught as ValueError."""
    assert issubclass(finitediffkit.ConfigurationError, ValueError)
    assert issubclass(finitediffkit.DimensionError, ValueError)
