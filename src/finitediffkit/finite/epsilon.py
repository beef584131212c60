"""Step-size selection for finite-difference schemes.

The step follows the usual rule of thumb (Numerical Recipes, ch. 5.7): a
scheme-dependent power of machine epsilon, scaled by ``max(1, |x|)`` so the
step neither underflows near zero nor becomes relatively meaningless at large
magnitude.

* forward: ``sqrt(eps) * max(1, |x|)``
* central: ``cbrt(eps) * max(1, |x|)``
* complex: ``eps`` (no scaling; complex-step has no subtractive cancellation)
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import DTypeLike

from finitediffkit.schemes import Scheme, resolve_scheme
from finitediffkit.utils.validate import float_dtype

__all__ = [
    "machine_epsilon",
    "compute_epsilon_factor",
    "compute_epsilon",
]


def machine_epsilon(dtype: DTypeLike = float) -> float:
    """Returns machine epsilon for a floating dtype.

    Non-floating dtypes (integers, booleans) fall back to ``float64``.

    Args:
        dtype: NumPy dtype or anything ``np.dtype`` accepts.

    Returns:
        Machine epsilon of the dtype.
    """
    dt = np.dtype(dtype)
    if not np.issubdtype(dt, np.floating):
        dt = np.dtype(np.float64)
    return float(np.finfo(dt).eps)


def compute_epsilon_factor(scheme: Scheme | str, dtype: DTypeLike = float) -> float:
    """Returns the scheme's base step, before magnitude scaling.

    Computing this once per batch and passing it to :func:`compute_epsilon`
    avoids recomputing the root for every element.

    Args:
        scheme: Finite-difference scheme.
        dtype: Floating dtype of the evaluation points.

    Returns:
        ``sqrt(eps)`` for forward, ``cbrt(eps)`` for central and ``eps`` for
        complex-step.

    Raises:
        ConfigurationError: If ``scheme`` is not recognized.
    """
    scheme = resolve_scheme(scheme)
    eps = machine_epsilon(dtype)
    if scheme is Scheme.FORWARD:
        return float(np.sqrt(eps))
    if scheme is Scheme.CENTRAL:
        return float(np.cbrt(eps))
    return eps


def compute_epsilon(
    scheme: Scheme | str,
    x: Any,
    epsilon_factor: float | None = None,
) -> float:
    """Computes the perturbation size for one evaluation point.

    Args:
        scheme: Finite-difference scheme.
        x: Real scalar evaluation point.
        epsilon_factor: Optional precomputed result of
            :func:`compute_epsilon_factor` for the same scheme and dtype.

    Returns:
        Strictly positive step size.

    Raises:
        ConfigurationError: If ``scheme`` is not recognized.
    """
    scheme = resolve_scheme(scheme)
    if epsilon_factor is None:
        epsilon_factor = compute_epsilon_factor(scheme, float_dtype(x))
    if scheme is Scheme.COMPLEX:
        return epsilon_factor
    return epsilon_factor * max(1.0, abs(float(x)))
