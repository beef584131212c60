"""Validation utilities for finite-difference engines."""

from __future__ import annotations

from typing import Any

import numpy as np

from finitediffkit.exceptions import DimensionError
from finitediffkit.logger import finitediffkit_logger
from finitediffkit.schemes import Scheme

__all__ = [
    "float_dtype",
    "check_same_length",
    "check_jacobian_shape",
    "check_square",
    "note_unused_fx",
    "warn_if_nonfinite",
]


def warn_if_nonfinite(values: Any, what: str) -> bool:
    """Logs a warning when ``values`` holds NaN or infinite entries.

    Non-finite results usually mean the function misbehaves near the
    evaluation point. They are reported, not raised, so the caller still
    receives the result.

    Args:
        values: Array-like result to inspect.
        what: Short description used in the log message.

    Returns:
        True if all entries are finite.
    """
    arr = np.asarray(values)
    n_bad = int(arr.size - np.count_nonzero(np.isfinite(arr)))
    if n_bad:
        finitediffkit_logger.warning(
            "%s contains %d non-finite entr%s out of %d.",
            what,
            n_bad,
            "y" if n_bad == 1 else "ies",
            arr.size,
        )
        return False
    return True


def float_dtype(x: Any) -> np.dtype:
    """Returns the real floating dtype used for arithmetic on ``x``.

    Floating inputs keep their own precision (so ``float32`` data gets a
    ``float32`` machine epsilon); anything else is promoted to ``float64``.

    Args:
        x: Scalar, array or sequence of reals.

    Returns:
        A NumPy floating dtype.
    """
    dt = getattr(x, "dtype", None)
    if dt is None:
        dt = np.asarray(x).dtype
    if np.issubdtype(dt, np.floating):
        return np.dtype(dt)
    return np.dtype(np.float64)


def check_same_length(name_a: str, a: Any, name_b: str, b: Any) -> None:
    """Checks that two containers hold the same number of entries.

    Args:
        name_a: Name of the first container, used in error messages.
        a: First container.
        name_b: Name of the second container, used in error messages.
        b: Second container.

    Raises:
        DimensionError: If the sizes differ.
    """
    size_a = _size(a)
    size_b = _size(b)
    if size_a != size_b:
        raise DimensionError(
            f"{name_a} has {size_a} entries but {name_b} has {size_b}."
        )


def check_jacobian_shape(jac: Any, m: int, n: int) -> None:
    """Checks that ``jac`` is an ``m x n`` matrix.

    Args:
        jac: Output matrix, a 2D array or a sequence of rows.
        m: Expected number of rows (output dimension).
        n: Expected number of columns (input dimension).

    Raises:
        DimensionError: If ``jac`` does not have shape ``(m, n)``.
    """
    shape = _shape2d(jac)
    if shape != (m, n):
        raise DimensionError(
            f"Jacobian must have shape ({m}, {n}) for {m} outputs and "
            f"{n} inputs; got {shape}."
        )


def check_square(jac: Any, n: int) -> None:
    """Checks that ``jac`` is ``n x n`` (diagonal Jacobian assembly)."""
    shape = _shape2d(jac)
    if shape != (n, n):
        raise DimensionError(
            f"Diagonal Jacobian must be square with shape ({n}, {n}); got {shape}."
        )


def _size(a: Any) -> int:
    """Number of entries in an array or a flat sequence."""
    if isinstance(a, np.ndarray):
        return int(a.size)
    return len(a)


def _shape2d(jac: Any) -> tuple[int, ...]:
    """Shape of a 2D array or of a list of equal-length rows."""
    if isinstance(jac, np.ndarray):
        return tuple(int(s) for s in jac.shape)
    rows = len(jac)
    cols = {len(r) for r in jac}
    if rows == 0:
        return (0, 0)
    if len(cols) != 1:
        raise DimensionError("Jacobian rows must all have the same length.")
    return (rows, cols.pop())


def note_unused_fx(scheme: Scheme) -> None:
    """Logs that a supplied ``fx`` is not needed by ``scheme``."""
    finitediffkit_logger.debug(
        "Ignoring precomputed fx: the %s scheme does not use f(x).", scheme.value
    )
