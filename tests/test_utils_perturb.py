"""Tests for finitediffkit.utils.perturb."""

import array

import numpy as np
import pytest

from finitediffkit.utils.perturb import perturbed


def test_perturbed_shifts_inside_and_restores_after():
    """Tests that the shift is visible in the block and undone afterwards."""
    x = np.array([0.1, 0.2, 0.3])
    with perturbed(x, 1, 1e-3) as shifted:
        assert shifted is x
        assert x[1] == 0.2 + 1e-3
        assert x[0] == 0.1 and x[2] == 0.3
    assert x.tolist() == [0.1, 0.2, 0.3]


def test_restore_is_bit_exact():
    """Tests that restoring does not go through x + h - h."""
    value = 0.1
    step = 1e16
    assert value + step - step != value
    x = [value]
    with perturbed(x, 0, step):
        pass
    assert x[0] == value


def test_restored_when_body_raises():
    """Tests that an exception in the body still restores the coordinate."""
    x = array.array("d", [1.0, 2.0])
    with pytest.raises(RuntimeError):
        with perturbed(x, 0, 0.5):
            raise RuntimeError("boom")
    assert list(x) == [1.0, 2.0]


def test_complex_step_on_complex_array():
    """Tests an imaginary shift on a complex array."""
    x = np.array([1.0, 2.0], dtype=complex)
    with perturbed(x, 1, 1e-20j):
        assert x[1].imag == 1e-20
    assert x[1] == 2.0 and x[1].imag == 0.0


def test_nested_shifts_on_two_vectors():
    """Tests the pairing used by central differences."""
    plus = [1.0, 1.0]
    minus = [1.0, 1.0]
    with perturbed(plus, 0, 0.25), perturbed(minus, 0, -0.25):
        assert plus == [1.25, 1.0]
        assert minus == [0.75, 1.0]
    assert plus == minus == [1.0, 1.0]
