"""First derivatives of functions of one real variable.

Three entry points are provided:

* :func:`finite_difference` for a scalar point, or element-wise over an
  array of points;
* :func:`finite_difference_into`, the element-wise form writing into a
  preallocated output;
* :func:`finite_difference_buffered` for vector-valued in-place functions
  of a scalar, wrapped in a
  :class:`~finitediffkit.finite.buffered.BufferedFunction`.

Examples:
--------
>>> import numpy as np
>>> from finitediffkit.finite.derivative import finite_difference
>>> bool(abs(finite_difference(lambda x: x * x, 3.0, "forward") - 6.0) < 1e-4)
True
>>> bool(abs(finite_difference(np.exp, 1.0, "complex") - np.e) < 1e-13)
True
>>> finite_difference(np.sin, np.zeros(3), "central")
array([1., 1., 1.])
"""

from __future__ import annotations

from typing import Any, MutableSequence, Sequence

import numpy as np
from numpy.typing import NDArray

from finitediffkit.exceptions import ConfigurationError
from finitediffkit.finite.buffered import require_buffered
from finitediffkit.finite.epsilon import compute_epsilon, compute_epsilon_factor
from finitediffkit.schemes import Scheme, resolve_scheme
from finitediffkit.utils.types import ScalarFunction
from finitediffkit.utils.validate import (
    check_same_length,
    float_dtype,
    note_unused_fx,
    warn_if_nonfinite,
)

__all__ = [
    "finite_difference",
    "finite_difference_into",
    "finite_difference_buffered",
    "finite_difference_kernel",
]


def finite_difference_kernel(
    function: ScalarFunction,
    x: Any,
    scheme: Scheme,
    epsilon: float,
    fx: Any = None,
) -> Any:
    """Applies one scheme's difference formula at a scalar point.

    Args:
        function: Function of one real variable.
        x: Scalar evaluation point.
        scheme: Resolved finite-difference scheme.
        epsilon: Step size from :func:`compute_epsilon`.
        fx: Optional ``function(x)``; only the forward scheme uses it.

    Returns:
        The derivative estimate, a scalar or an array for vector outputs.
    """
    if scheme is Scheme.FORWARD:
        f0 = function(x) if fx is None else fx
        return (function(x + epsilon) - f0) / epsilon
    if scheme is Scheme.CENTRAL:
        return (function(x + epsilon) - function(x - epsilon)) / (2 * epsilon)
    return np.imag(function(x + 1j * epsilon)) / epsilon


def finite_difference(
    function: ScalarFunction,
    x: float | Sequence[float] | NDArray[np.floating],
    scheme: Scheme | str = Scheme.CENTRAL,
    fx: Any = None,
) -> float | NDArray[np.floating]:
    """Estimates ``df/dx`` at one point or element-wise over many points.

    For a scalar ``x`` the result is a float (or an array if ``function`` is
    vector-valued). For an array ``x`` the function is assumed to act on one
    scalar at a time and the result has the shape of ``x``.

    Args:
        function: Function of one real variable. For the complex scheme it
            must also accept a complex argument.
        x: Evaluation point(s).
        scheme: ``"forward"``, ``"central"`` or ``"complex"``. Default is
            central.
        fx: Optional precomputed ``function(x)`` (same shape as ``x``). Saves
            one evaluation per point for the forward scheme; ignored by the
            other schemes.

    Returns:
        The derivative estimate(s).

    Raises:
        ConfigurationError: If ``scheme`` is not recognized.
        DimensionError: If ``fx`` does not match ``x``.
    """
    scheme = resolve_scheme(scheme)

    if np.ndim(x) != 0:
        n = x.size if isinstance(x, np.ndarray) else len(x)
        shape = x.shape if isinstance(x, np.ndarray) else (n,)
        df = np.zeros(shape, dtype=float_dtype(x))
        return finite_difference_into(df, function, x, scheme, fx)

    if fx is not None and scheme is not Scheme.FORWARD:
        note_unused_fx(scheme)
    epsilon = compute_epsilon(scheme, x)
    value = finite_difference_kernel(function, x, scheme, epsilon, fx)
    warn_if_nonfinite(value, "Derivative")
    if np.ndim(value) == 0:
        return float(value)
    return np.asarray(value)


def finite_difference_into(
    df: MutableSequence[float] | NDArray[np.floating],
    function: ScalarFunction,
    x: Sequence[float] | NDArray[np.floating],
    scheme: Scheme | str = Scheme.CENTRAL,
    fx: Sequence[float] | NDArray[np.floating] | None = None,
) -> MutableSequence[float] | NDArray[np.floating]:
    """Writes the element-wise derivative of ``function`` at ``x`` into ``df``.

    A fresh step is computed for every element. NumPy arrays take the
    strided path, iterating over flat indices; any other container with
    ``len`` and item get/set (``list``, ``array.array``, ...) takes the
    generic path. Both perform identical arithmetic.

    Args:
        df: Preallocated output with as many entries as ``x``.
        function: Function of one real variable.
        x: Evaluation points.
        scheme: Finite-difference scheme. Default is central.
        fx: Optional precomputed ``function(x)`` values, used by the forward
            scheme only.

    Returns:
        ``df``, filled in.

    Raises:
        ConfigurationError: If ``scheme`` is not recognized.
        DimensionError: If ``df``, ``x`` and ``fx`` differ in size.
    """
    scheme = resolve_scheme(scheme)
    check_same_length("df", df, "x", x)
    if fx is not None:
        check_same_length("fx", fx, "x", x)
        if scheme is not Scheme.FORWARD:
            note_unused_fx(scheme)
            fx = None

    epsilon_factor = compute_epsilon_factor(scheme, float_dtype(x))
    strided = (
        isinstance(df, np.ndarray)
        and isinstance(x, np.ndarray)
        and (fx is None or isinstance(fx, np.ndarray))
    )
    if strided:
        _into_strided(df, function, x, scheme, fx, epsilon_factor)
    else:
        _into_generic(df, function, x, scheme, fx, epsilon_factor)

    warn_if_nonfinite(df, "Derivative")
    return df


def _into_strided(
    df: NDArray[np.floating],
    function: ScalarFunction,
    x: NDArray[np.floating],
    scheme: Scheme,
    fx: NDArray[np.floating] | None,
    epsilon_factor: float,
) -> None:
    """Element-wise loop over NumPy arrays of any layout via flat indexing."""
    x_flat = x.flat
    df_flat = df.flat
    fx_flat = None if fx is None else fx.flat
    for i in range(x.size):
        xi = x_flat[i]
        epsilon = compute_epsilon(scheme, xi, epsilon_factor)
        fxi = None if fx_flat is None else fx_flat[i]
        df_flat[i] = finite_difference_kernel(function, xi, scheme, epsilon, fxi)


def _into_generic(
    df: MutableSequence[float],
    function: ScalarFunction,
    x: Sequence[float],
    scheme: Scheme,
    fx: Sequence[float] | None,
    epsilon_factor: float,
) -> None:
    """Element-wise loop through item get/set only."""
    for i in range(len(x)):
        xi = x[i]
        epsilon = compute_epsilon(scheme, xi, epsilon_factor)
        fxi = None if fx is None else fx[i]
        df[i] = finite_difference_kernel(function, xi, scheme, epsilon, fxi)


def finite_difference_buffered(
    df: NDArray[np.floating],
    function: Any,
    x: float,
    scheme: Scheme | str = Scheme.CENTRAL,
    fx: NDArray[np.floating] | None = None,
) -> NDArray[np.floating]:
    """Derivative of a vector-valued in-place function of a scalar.

    ``function`` is a :class:`~finitediffkit.finite.buffered.BufferedFunction`
    whose wrapped callable fills ``out`` with ``f(x)``. The result is written
    into ``df`` and ``function.fx1`` serves as the second output buffer, so
    nothing is allocated.

    Args:
        df: Output vector, same length as the function's output.
        function: Buffered function; ``function.fx1`` must match ``df``.
        x: Scalar evaluation point.
        scheme: ``"forward"`` or ``"central"``. Default is central.
        fx: Optional precomputed ``f(x)``. With the forward scheme this saves
            one evaluation; it is never written to.

    Returns:
        ``df``, filled in.

    Raises:
        ConfigurationError: If ``scheme`` is not recognized or is complex.
        DimensionError: If ``df``, ``fx`` or the scratch buffer differ in size.
        TypeError: If ``function`` is not a buffered function.
    """
    scheme = resolve_scheme(scheme)
    function = require_buffered(function)
    if scheme is Scheme.COMPLEX:
        raise ConfigurationError(
            "The complex-step scheme is not available for buffered functions; "
            "their scratch buffers are real."
        )
    function.check_dimensions(None, df.size)
    if fx is not None:
        check_same_length("fx", fx, "df", df)

    fx1 = function.fx1
    epsilon = compute_epsilon(scheme, x)
    if scheme is Scheme.FORWARD:
        if fx is None:
            fx = function.evaluate(df, x)
        function.evaluate(fx1, x + epsilon)
        np.subtract(fx1, fx, out=df)
        np.divide(df, epsilon, out=df)
    else:
        if fx is not None:
            note_unused_fx(scheme)
        function.evaluate(df, x - epsilon)
        function.evaluate(fx1, x + epsilon)
        np.subtract(fx1, df, out=df)
        np.divide(df, 2 * epsilon, out=df)

    warn_if_nonfinite(df, "Derivative")
    return df

