"""Provides the FiniteDiffKit class.

A light wrapper around the finite-difference engines that binds a function
and an evaluation point, and fills in the scheme and function kind from a
:class:`~finitediffkit.config.FiniteDiffConfig` when a call leaves them out.

Typical usage examples:

>>> import numpy as np
>>> from finitediffkit.finite_diff_kit import FiniteDiffKit
>>>
>>> kit = FiniteDiffKit(np.sin, x0=0.0)
>>> round(kit.derivative(), 6)
1.0
>>>
>>> def rotate(x):
...     return np.array([x[1], -x[0]])
>>> FiniteDiffKit(rotate, x0=[1.0, 2.0]).jacobian(scheme="forward").shape
(2, 2)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Sequence

import numpy as np
from numpy.typing import NDArray

from finitediffkit.config import FiniteDiffConfig
from finitediffkit.finite.derivative import finite_difference
from finitediffkit.finite.jacobian import (
    finite_difference_jacobian,
    finite_difference_jacobian_diagonal,
)
from finitediffkit.schemes import FunctionKind, Scheme, available_schemes
from finitediffkit.utils.validate import float_dtype


class FiniteDiffKit:
    """Provides access to derivatives and Jacobians of one function at one point.

    Attributes:
        function: The callable to differentiate (or a buffered function for
            ``function_kind="buffered"`` Jacobians).
        x0: The point at which derivatives are evaluated.
        config: Defaults used when a method call does not specify them.
    """

    def __init__(
        self,
        function: Callable[[Any], Any],
        x0: float | Sequence[float] | NDArray[np.floating],
        config: FiniteDiffConfig | None = None,
    ):
        """Initialise with function and evaluation point.

        Args:
            function: Function to differentiate. Scalar functions for
                :meth:`derivative` and :meth:`jacobian_diagonal`;
                vector-valued functions of a vector for :meth:`jacobian`.
            x0: Evaluation point, scalar or 1D. Floating arrays keep their
                precision; integer input is promoted to ``float64``.
            config: Optional defaults; a central-difference, pure-function
                config is used when omitted.
        """
        self.function = function
        self.x0 = x0 if np.ndim(x0) == 0 else np.asarray(x0, dtype=float_dtype(x0))
        self.config = config if config is not None else FiniteDiffConfig()

    def derivative(
        self,
        *,
        scheme: Scheme | str | None = None,
        fx: Any = None,
    ) -> float | NDArray[np.floating]:
        """Returns the derivative at ``x0`` (element-wise for an array ``x0``)."""
        return finite_difference(
            self.function,
            self.x0,
            scheme or self.config.scheme,
            fx,
        )

    def jacobian(
        self,
        *,
        scheme: Scheme | str | None = None,
        fx: Any = None,
        function_kind: FunctionKind | str | None = None,
    ) -> NDArray[np.floating]:
        """Returns the dense Jacobian of a vector-valued function at ``x0``."""
        return finite_difference_jacobian(
            self.function,
            np.atleast_1d(self.x0),
            scheme or self.config.scheme,
            fx,
            function_kind or self.config.function_kind,
        )

    def jacobian_diagonal(
        self,
        *,
        scheme: Scheme | str | None = None,
        fx: Any = None,
    ) -> NDArray[np.floating]:
        """Returns the diagonal Jacobian of an elementwise scalar function.

        The function must act on each coordinate independently; this is not
        checked. See
        :func:`~finitediffkit.finite.jacobian.finite_difference_jacobian_diagonal`.
        """
        return finite_difference_jacobian_diagonal(
            self.function,
            np.atleast_1d(self.x0),
            scheme or self.config.scheme,
            fx,
        )

    @staticmethod
    def available_schemes() -> list[str]:
        """Lists canonical scheme names."""
        return available_schemes()
