"""Tests for FiniteDiffKit."""

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from finitediffkit import (
    BufferedFunctionAdapter,
    ConfigurationError,
    FiniteDiffConfig,
    FiniteDiffKit,
)


def rotate(x):
    """Rotation by -90 degrees in the plane."""
    return np.array([x[1], -x[0]])


def test_derivative_scalar_point():
    """Tests the derivative of sin at zero."""
    kit = FiniteDiffKit(np.sin, x0=0.0)
    assert isinstance(kit.derivative(), float)
    assert kit.derivative() == pytest.approx(1.0, abs=1e-10)
    assert kit.derivative(scheme="complex") == pytest.approx(1.0, abs=1e-15)


def test_derivative_elementwise():
    """Tests the element-wise derivative over an array of points."""
    x0 = [0.0, 1.0, 2.0]
    kit = FiniteDiffKit(np.exp, x0=x0)
    assert_allclose(kit.derivative(), np.exp(x0), rtol=1e-9)


def test_jacobian_uses_config_default(counted):
    """Tests that the config scheme applies when the call names none."""
    f = counted(rotate)
    kit = FiniteDiffKit(f, x0=[1.0, 2.0], config=FiniteDiffConfig(scheme="forward"))
    jac = kit.jacobian()
    assert f.calls == 3
    assert_allclose(jac, [[0.0, 1.0], [-1.0, 0.0]], atol=1e-7)


def test_call_keyword_overrides_config(counted):
    """Tests that a per-call scheme beats the config."""
    f = counted(rotate)
    kit = FiniteDiffKit(f, x0=[1.0, 2.0], config=FiniteDiffConfig(scheme="forward"))
    kit.jacobian(scheme="central")
    assert f.calls == 1 + 4


def test_jacobian_scalar_point_is_one_by_one():
    """Tests that a scalar x0 is treated as a length-one vector."""
    kit = FiniteDiffKit(lambda x: x ** 2, x0=3.0)
    assert_allclose(kit.jacobian(), [[6.0]], atol=1e-8)


def test_buffered_jacobian_through_config():
    """Tests the buffered function kind taken from the config."""

    def rotate_inplace(out, x):
        out[0] = x[1]
        out[1] = -x[0]

    fn = BufferedFunctionAdapter.allocate(rotate_inplace, n=2, m=2)
    kit = FiniteDiffKit(fn, x0=[1.0, 2.0], config=FiniteDiffConfig(function_kind="buffered"))
    assert_allclose(kit.jacobian(), [[0.0, 1.0], [-1.0, 0.0]], atol=1e-9)
    with pytest.raises(ConfigurationError):
        kit.jacobian(scheme="complex")


def test_jacobian_diagonal():
    """Tests the diagonal Jacobian of an elementwise cube."""
    kit = FiniteDiffKit(lambda t: t ** 3, x0=np.array([1.0, 2.0]))
    jac = kit.jacobian_diagonal(scheme="complex")
    assert_allclose(np.diag(jac), [3.0, 12.0], rtol=1e-14)
    assert jac[0, 1] == 0.0 and jac[1, 0] == 0.0


def test_x0_converted_to_float_array():
    """Tests that integer sequence inputs become float64 arrays."""
    x0 = [1, 2]
    kit = FiniteDiffKit(rotate, x0=x0)
    assert kit.x0.dtype == np.float64
    kit.jacobian()
    assert x0 == [1, 2]
    assert_array_equal(kit.x0, [1.0, 2.0])


def test_available_schemes():
    """Tests the scheme listing on the class."""
    assert FiniteDiffKit.available_schemes() == ["forward", "central", "complex"]


def test_x0_keeps_float32_precision():
    """Tests that a float32 point is not upcast by the kit."""
    x0 = np.array([1.0, 2.0], dtype=np.float32)
    kit = FiniteDiffKit(rotate, x0=x0)
    assert kit.x0.dtype == np.float32
    assert kit.jacobian().dtype == np.float32
