"""Tests for finitediffkit.utils.validate."""

import numpy as np
import pytest

from finitediffkit.exceptions import DimensionError
from finitediffkit.utils.validate import (
    check_jacobian_shape,
    check_same_length,
    check_square,
    float_dtype,
    warn_if_nonfinite,
)


@pytest.mark.parametrize(
    "x, expected",
    [
        (np.zeros(2, dtype=np.float32), np.float32),
        (np.zeros(2), np.float64),
        (np.arange(3), np.float64),
        ([1, 2], np.float64),
        (2.5, np.float64),
        (np.float32(1.0), np.float32),
    ],
)
def test_float_dtype(x, expected):
    """Tests that floating inputs keep their precision and the rest use float64."""
    assert float_dtype(x) == np.dtype(expected)


def test_check_same_length_accepts_mixed_containers():
    """Tests that arrays and sequences of equal size pass."""
    check_same_length("a", np.zeros(3), "b", [1.0, 2.0, 3.0])


def test_check_same_length_names_both_sides():
    """Tests that the message names both containers."""
    with pytest.raises(DimensionError, match="fx has 2 entries but x has 3"):
        check_same_length("fx", [1.0, 2.0], "x", np.zeros(3))


def test_check_jacobian_shape():
    """Tests array and row-list matrices against the expected shape."""
    check_jacobian_shape(np.zeros((2, 3)), 2, 3)
    check_jacobian_shape([[0.0] * 3, [0.0] * 3], 2, 3)
    with pytest.raises(DimensionError, match=r"\(3, 2\)"):
        check_jacobian_shape(np.zeros((2, 3)), 3, 2)
    with pytest.raises(DimensionError):
        check_jacobian_shape([[0.0, 0.0], [0.0]], 2, 2)


def test_check_square():
    """Tests the square-shape check used by diagonal assembly."""
    check_square(np.zeros((4, 4)), 4)
    with pytest.raises(DimensionError, match="square"):
        check_square(np.zeros((4, 3)), 4)


def test_warn_if_nonfinite(caplog):
    """Tests that only non-finite values produce a warning."""
    with caplog.at_level("WARNING", logger="finitediffkit"):
        assert warn_if_nonfinite(np.ones(3), "Derivative")
        assert caplog.text == ""
        assert not warn_if_nonfinite(np.array([1.0, np.inf, np.nan]), "Derivative")
    assert "Derivative contains 2 non-finite entries out of 3." in caplog.text


def test_warn_if_nonfinite_singular(caplog):
    """Tests the singular wording of the warning."""
    with caplog.at_level("WARNING", logger="finitediffkit"):
        warn_if_nonfinite([[1.0, np.nan]], "Jacobian")
    assert "1 non-finite entry out of 2" in caplog.text
