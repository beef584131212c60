"""Contains functions used to construct the Jacobian matrix by finite differences.

Each column ``i`` of the Jacobian of ``f: R^n -> R^m`` is estimated by
shifting coordinate ``i`` of the input by a step ``epsilon_i`` (see
:mod:`finitediffkit.finite.epsilon`), evaluating ``f`` and differencing.
Every shift is undone by restoring the saved coordinate before the next
column is processed, also when ``f`` raises.

Three families of entry points exist:

* :func:`finite_difference_jacobian` / :func:`finite_difference_jacobian_into`
  for the general dense Jacobian of a pure or buffered function;
* :func:`finite_difference_jacobian_diagonal` /
  :func:`finite_difference_jacobian_diagonal_into` for strictly elementwise
  scalar functions, where only the diagonal is evaluated.

Examples:
--------
>>> import numpy as np
>>> from finitediffkit.finite.jacobian import finite_difference_jacobian
>>> def f(x):
...     return np.array([x[0] ** 2, x[0] * x[1]])
>>> jac = finite_difference_jacobian(f, np.array([2.0, 3.0]), "central")
>>> np.allclose(jac, [[4.0, 0.0], [3.0, 2.0]], atol=1e-4)
True
"""

from __future__ import annotations

import array
import copy
from collections.abc import MutableSequence
from typing import Any

import numpy as np
from numpy.typing import NDArray

from finitediffkit.exceptions import ConfigurationError, DimensionError
from finitediffkit.finite.buffered import BufferedFunction, require_buffered
from finitediffkit.finite.derivative import finite_difference_kernel
from finitediffkit.finite.epsilon import compute_epsilon, compute_epsilon_factor
from finitediffkit.logger import finitediffkit_logger
from finitediffkit.schemes import (
    FunctionKind,
    Scheme,
    resolve_function_kind,
    resolve_scheme,
)
from finitediffkit.utils.perturb import perturbed
from finitediffkit.utils.types import Matrix, ScalarFunction, Vector
from finitediffkit.utils.validate import (
    check_jacobian_shape,
    check_same_length,
    check_square,
    float_dtype,
    note_unused_fx,
    warn_if_nonfinite,
)

__all__ = [
    "finite_difference_jacobian",
    "finite_difference_jacobian_into",
    "finite_difference_jacobian_diagonal",
    "finite_difference_jacobian_diagonal_into",
]


def finite_difference_jacobian(
    function: ScalarFunction | BufferedFunction,
    x: Vector,
    scheme: Scheme | str = Scheme.CENTRAL,
    fx: Vector | None = None,
    function_kind: FunctionKind | str = FunctionKind.PURE,
) -> NDArray[np.floating]:
    """Computes the dense Jacobian of a vector-valued function.

    Args:
        function: For ``function_kind="pure"`` a callable ``y = f(x)``
            returning a 1D array of length ``m``. For
            ``function_kind="buffered"`` a
            :class:`~finitediffkit.finite.buffered.BufferedFunction` whose
            scratch buffers fit the problem.
        x: Input vector of length ``n``. NumPy arrays take the strided path;
            other sequences (e.g. ``list``) take the generic fallback and are
            passed to ``function`` in their own container type.
        scheme: ``"forward"``, ``"central"`` or ``"complex"``. Default is
            central.
        fx: Optional precomputed ``f(x)``. Evaluated once when missing, which
            also fixes the output dimension ``m``.
        function_kind: ``"pure"`` (default) or ``"buffered"``.

    Returns:
        Array of shape ``(m, n)``; column ``i`` is the derivative with
        respect to ``x[i]``.

    Raises:
        ConfigurationError: If ``scheme`` or ``function_kind`` is unknown.
        DimensionError: If ``f(x)`` is not a vector, or sizes disagree.
        TypeError: If a buffered call does not get a buffered function.
    """
    scheme = resolve_scheme(scheme)
    function_kind = resolve_function_kind(function_kind)
    dtype = float_dtype(x)

    if function_kind is FunctionKind.BUFFERED:
        function = require_buffered(function)
        m = int(function.fx1.size)
        function.check_dimensions(_length(x), m)
        if fx is None and scheme is Scheme.FORWARD:
            fx = function.evaluate(np.empty(m, dtype=function.fx1.dtype), x)
    else:
        if fx is None:
            fx = _as_output_vector(function(x))
        m = _length(fx)

    jac = np.zeros((m, _length(x)), dtype=dtype)
    return finite_difference_jacobian_into(jac, function, x, scheme, fx, function_kind)


def finite_difference_jacobian_into(
    jac: Matrix,
    function: ScalarFunction | BufferedFunction,
    x: Vector,
    scheme: Scheme | str = Scheme.CENTRAL,
    fx: Vector | None = None,
    function_kind: FunctionKind | str = FunctionKind.PURE,
) -> Matrix:
    """Fills a preallocated ``m x n`` matrix with the Jacobian of ``function``.

    Sizes are checked before ``function`` is called: ``jac`` fixes ``m``,
    ``x`` fixes ``n`` and a supplied ``fx`` must have ``m`` entries. The
    forward scheme needs ``f(x)``; when ``fx`` is missing it is evaluated
    once and shared by all columns.

    Buffered functions are evaluated on their scratch input ``x1`` (a copy of
    ``x`` made once) and into their scratch output ``fx1``; columns are
    written in place, so no array is allocated per column and neither ``x``
    nor ``fx`` is written to.

    Args:
        jac: Output matrix. Must be a NumPy array for buffered functions; the
            generic fallback also accepts a list of row lists.
        function: Pure callable or buffered function, see
            :func:`finite_difference_jacobian`.
        x: Input vector of length ``n``; left unchanged.
        scheme: Finite-difference scheme. Default is central.
        fx: Optional precomputed ``f(x)`` of length ``m``.
        function_kind: ``"pure"`` (default) or ``"buffered"``.

    Returns:
        ``jac``, filled in.

    Raises:
        ConfigurationError: If ``scheme`` or ``function_kind`` is unknown, or
            the complex scheme is requested for a buffered function.
        DimensionError: If ``jac``, ``x``, ``fx`` or the scratch buffers have
            inconsistent sizes.
        TypeError: If a buffered call does not get a buffered function.
    """
    scheme = resolve_scheme(scheme)
    function_kind = resolve_function_kind(function_kind)

    n = _length(x)
    m = _rows(jac)
    check_jacobian_shape(jac, m, n)
    if fx is not None and _length(fx) != m:
        raise DimensionError(
            f"fx has {_length(fx)} entries but the Jacobian has {m} rows."
        )
    if fx is not None and scheme is not Scheme.FORWARD:
        note_unused_fx(scheme)

    epsilon_factor = compute_epsilon_factor(scheme, float_dtype(x))
    finitediffkit_logger.debug(
        "Assembling %d x %d Jacobian with the %s scheme (%s function).",
        m,
        n,
        scheme.value,
        function_kind.value,
    )

    if function_kind is FunctionKind.BUFFERED:
        function = require_buffered(function)
        if scheme is Scheme.COMPLEX:
            raise ConfigurationError(
                "The complex-step scheme is not available for buffered "
                "functions; their scratch buffers are real."
            )
        if not isinstance(jac, np.ndarray):
            raise TypeError("Buffered Jacobian assembly needs a NumPy output matrix.")
        function.check_dimensions(n, m)
        _jacobian_buffered(jac, function, x, scheme, fx, epsilon_factor)
    else:
        if fx is None and scheme is Scheme.FORWARD:
            fx = _as_column(function(x), m, "f(x)")
        if isinstance(x, np.ndarray) and isinstance(jac, np.ndarray):
            _jacobian_strided(jac, function, x, scheme, fx, epsilon_factor)
        else:
            _jacobian_generic(jac, function, x, scheme, fx, epsilon_factor)

    warn_if_nonfinite(jac, "Jacobian")
    return jac


def _jacobian_strided(
    jac: NDArray[np.floating],
    function: ScalarFunction,
    x: NDArray[np.floating],
    scheme: Scheme,
    fx: Any,
    epsilon_factor: float,
) -> None:
    """Dense assembly for NumPy inputs; works on private copies of ``x``."""
    m, n = jac.shape
    x_flat = np.asarray(x, dtype=float_dtype(x)).reshape(-1)

    if scheme is Scheme.FORWARD:
        fx = np.asarray(fx)
        shifted = x_flat.copy()
        for i in range(n):
            epsilon = compute_epsilon(scheme, x_flat[i], epsilon_factor)
            with perturbed(shifted, i, epsilon):
                f_plus = _as_column(function(shifted), m, f"f(x + e_{i})")
            jac[:, i] = (f_plus - fx) / epsilon

    elif scheme is Scheme.CENTRAL:
        shifted_plus = x_flat.copy()
        shifted_minus = x_flat.copy()
        for i in range(n):
            epsilon = compute_epsilon(scheme, x_flat[i], epsilon_factor)
            with perturbed(shifted_plus, i, epsilon), perturbed(shifted_minus, i, -epsilon):
                f_plus = _as_column(function(shifted_plus), m, f"f(x + e_{i})")
                f_minus = _as_column(function(shifted_minus), m, f"f(x - e_{i})")
            jac[:, i] = (f_plus - f_minus) / (2 * epsilon)

    else:
        shifted = x_flat.astype(np.result_type(x_flat.dtype, np.complex64))
        epsilon = epsilon_factor
        for i in range(n):
            with perturbed(shifted, i, 1j * epsilon):
                f_step = _as_column(function(shifted), m, f"f(x + i*e_{i})")
            jac[:, i] = np.imag(f_step) / epsilon


def _jacobian_generic(
    jac: Any,
    function: ScalarFunction,
    x: Vector,
    scheme: Scheme,
    fx: Any,
    epsilon_factor: float,
) -> None:
    """Dense assembly through item get/set only.

    Used when ``x`` or ``jac`` is not a NumPy array. ``function`` receives
    copies of ``x`` in the same container type (a ``list`` of complex values
    for the complex scheme). Immutable sequences such as ``tuple`` are
    copied into a ``list``.
    """
    if isinstance(x, np.ndarray):
        x = x.astype(float_dtype(x)).reshape(-1)
    elif not isinstance(x, (MutableSequence, array.array)):
        x = list(x)
    m = _rows(jac)
    n = len(x)

    if scheme is Scheme.FORWARD:
        fx = np.asarray(fx)
        shifted = copy.copy(x)
        for i in range(n):
            epsilon = compute_epsilon(scheme, x[i], epsilon_factor)
            with perturbed(shifted, i, epsilon):
                f_plus = _as_column(function(shifted), m, f"f(x + e_{i})")
            _set_column(jac, i, (f_plus - fx) / epsilon)

    elif scheme is Scheme.CENTRAL:
        shifted_plus = copy.copy(x)
        shifted_minus = copy.copy(x)
        for i in range(n):
            epsilon = compute_epsilon(scheme, x[i], epsilon_factor)
            with perturbed(shifted_plus, i, epsilon), perturbed(shifted_minus, i, -epsilon):
                f_plus = _as_column(function(shifted_plus), m, f"f(x + e_{i})")
                f_minus = _as_column(function(shifted_minus), m, f"f(x - e_{i})")
            _set_column(jac, i, (f_plus - f_minus) / (2 * epsilon))

    else:
        shifted = [complex(v) for v in x]
        epsilon = epsilon_factor
        for i in range(n):
            with perturbed(shifted, i, 1j * epsilon):
                f_step = _as_column(function(shifted), m, f"f(x + i*e_{i})")
            _set_column(jac, i, np.imag(f_step) / epsilon)


def _jacobian_buffered(
    jac: NDArray[np.floating],
    function: BufferedFunction,
    x: Any,
    scheme: Scheme,
    fx: Any,
    epsilon_factor: float,
) -> None:
    """Dense assembly on the buffered function's scratch storage."""
    m, n = jac.shape
    x1, fx1 = function.x1, function.fx1
    x_flat = np.asarray(x).reshape(-1)
    np.copyto(x1, x_flat)

    if scheme is Scheme.FORWARD:
        if fx is None:
            fx = function.evaluate(np.empty(m, dtype=fx1.dtype), x1)
        for i in range(n):
            epsilon = compute_epsilon(scheme, x_flat[i], epsilon_factor)
            column = jac[:, i]
            with perturbed(x1, i, epsilon):
                function.evaluate(fx1, x1)
            np.subtract(fx1, fx, out=column)
            np.divide(column, epsilon, out=column)

    else:
        for i in range(n):
            epsilon = compute_epsilon(scheme, x_flat[i], epsilon_factor)
            column = jac[:, i]
            with perturbed(x1, i, epsilon):
                function.evaluate(fx1, x1)
            np.copyto(column, fx1)
            with perturbed(x1, i, -epsilon):
                function.evaluate(fx1, x1)
            np.subtract(column, fx1, out=column)
            np.divide(column, 2 * epsilon, out=column)


def finite_difference_jacobian_diagonal(
    function: ScalarFunction,
    x: Vector,
    scheme: Scheme | str = Scheme.CENTRAL,
    fx: Vector | None = None,
) -> NDArray[np.floating]:
    """Computes the Jacobian of a strictly elementwise scalar function.

    ``function`` maps one real number to one real number and is understood
    to be applied to each coordinate independently, so the Jacobian is
    diagonal. Only the diagonal is evaluated; every off-diagonal entry is set
    to exactly zero.

    Warning:
        The elementwise property is not checked. For a function with
        cross-coordinate coupling the off-diagonal entries come out as zero,
        which is wrong. Use :func:`finite_difference_jacobian` in that case.

    Args:
        function: Scalar function of one real variable.
        x: Input vector of length ``n``.
        scheme: Finite-difference scheme. Default is central.
        fx: Optional precomputed ``[function(x_i) for x_i in x]``, used by
            the forward scheme.

    Returns:
        Array of shape ``(n, n)``.

    Raises:
        ConfigurationError: If ``scheme`` is unknown.
        DimensionError: If ``fx`` does not have ``n`` entries.
    """
    n = _length(x)
    jac = np.empty((n, n), dtype=float_dtype(x))
    return finite_difference_jacobian_diagonal_into(jac, function, x, scheme, fx)


def finite_difference_jacobian_diagonal_into(
    jac: Matrix,
    function: ScalarFunction,
    x: Vector,
    scheme: Scheme | str = Scheme.CENTRAL,
    fx: Vector | None = None,
) -> Matrix:
    """Fills an ``n x n`` matrix with the diagonal Jacobian of an elementwise function.

    See :func:`finite_difference_jacobian_diagonal` for the precondition on
    ``function``.

    Args:
        jac: Square output matrix (NumPy array or list of row lists).
        function: Scalar function of one real variable.
        x: Input vector of length ``n``; left unchanged.
        scheme: Finite-difference scheme. Default is central.
        fx: Optional precomputed elementwise ``function(x)``.

    Returns:
        ``jac``, filled in.

    Raises:
        ConfigurationError: If ``scheme`` is unknown.
        DimensionError: If ``jac`` is not ``n x n`` or ``fx`` has the wrong size.
    """
    scheme = resolve_scheme(scheme)
    n = _length(x)
    check_square(jac, n)
    if fx is not None:
        check_same_length("fx", fx, "x", x)
        if scheme is not Scheme.FORWARD:
            note_unused_fx(scheme)
            fx = None

    x_flat = np.asarray(x).reshape(-1)
    fx_flat = None if fx is None else np.asarray(fx).reshape(-1)
    epsilon_factor = compute_epsilon_factor(scheme, float_dtype(x))

    if isinstance(jac, np.ndarray):
        jac.fill(0)
    else:
        for row in jac:
            row[:] = [0.0] * n

    for i in range(n):
        xi = x_flat[i]
        epsilon = compute_epsilon(scheme, xi, epsilon_factor)
        fxi = None if fx_flat is None else fx_flat[i]
        _set_entry(jac, i, i, finite_difference_kernel(function, xi, scheme, epsilon, fxi))

    warn_if_nonfinite(jac, "Diagonal Jacobian")
    return jac


def _length(x: Any) -> int:
    """Number of entries of a vector given as a NumPy array or a sequence."""
    if isinstance(x, np.ndarray):
        return int(x.size)
    return len(x)


def _rows(jac: Any) -> int:
    """Number of rows of a matrix given as a NumPy array or list of rows."""
    if isinstance(jac, np.ndarray):
        if jac.ndim != 2:
            raise DimensionError(f"Jacobian must be 2D; got shape {jac.shape}.")
        return int(jac.shape[0])
    return len(jac)


def _as_output_vector(values: Any) -> NDArray[Any]:
    """Converts ``f(x)`` to an array and checks it is a 1D vector."""
    arr = np.asarray(values)
    if arr.ndim != 1:
        raise DimensionError(
            "Jacobian expects f: R^n -> R^m with 1D vector output; "
            f"got shape {arr.shape}."
        )
    return arr


def _as_column(values: Any, m: int, label: str) -> NDArray[Any]:
    """Converts one function evaluation to a length-``m`` column."""
    arr = np.asarray(values)
    if arr.shape != (m,):
        raise DimensionError(
            f"{label} returned shape {arr.shape}; expected ({m},) to match the Jacobian."
        )
    return arr


def _set_column(jac: Any, i: int, column: NDArray[Any]) -> None:
    """Writes ``column`` into column ``i`` of an array or a list of rows."""
    if isinstance(jac, np.ndarray):
        jac[:, i] = column
        return
    for j, value in enumerate(column):
        jac[j][i] = float(value)


def _set_entry(jac: Any, j: int, i: int, value: Any) -> None:
    """Writes one entry of an array or a list of rows."""
    if isinstance(jac, np.ndarray):
        jac[j, i] = value
    else:
        jac[j][i] = float(value)
