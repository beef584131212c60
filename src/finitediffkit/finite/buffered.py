"""Provides the BufferedFunction protocol and its default adapter.

An in-place user function ``f(out, x)`` writes its result into ``out``
instead of returning a fresh array. Pairing it with preallocated scratch
storage lets the derivative and Jacobian engines run without allocating per
column, which matters when they sit inside a solver's inner loop.

Examples:
--------
>>> import numpy as np
>>> from finitediffkit.finite.buffered import BufferedFunctionAdapter
>>> def rhs(out, x):
...     out[0] = x[0] * x[1]
...     out[1] = x[0] ** 2
>>> fn = BufferedFunctionAdapter.allocate(rhs, n=2, m=2)
>>> fn.evaluate(np.empty(2), np.array([2.0, 3.0]))
array([6., 4.])
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import numpy as np
from numpy.typing import DTypeLike, NDArray

from finitediffkit.exceptions import DimensionError
from finitediffkit.utils.types import InPlaceFunction

__all__ = [
    "BufferedFunction",
    "BufferedFunctionAdapter",
    "require_buffered",
]


@runtime_checkable
class BufferedFunction(Protocol):
    """Capability expected by the buffered derivative and Jacobian paths.

    Implementations own a scratch input vector ``x1`` and a scratch output
    vector ``fx1``. Engines borrow both for the duration of one call and may
    overwrite them; their contents are not meaningful between calls.
    """

    x1: NDArray[Any]
    fx1: NDArray[Any]

    def evaluate(self, out: NDArray[Any], x: Any) -> NDArray[Any]:
        """Evaluates the wrapped function at ``x`` into ``out``."""
        ...

    def check_dimensions(self, n: int | None, m: int) -> None:
        """Raises DimensionError unless the scratch buffers fit an n -> m map."""
        ...


class BufferedFunctionAdapter:
    """Wraps an in-place function together with its scratch buffers.

    The adapter is a thin capability: it forwards calls and reports buffer
    sizes but does not check that the wrapped function is correct.

    Attributes:
        function: The in-place callable, invoked as ``function(out, x)``.
        x1: Scratch input vector (length ``n``).
        fx1: Scratch output vector (length ``m``).
    """

    def __init__(
        self,
        function: InPlaceFunction,
        x1: NDArray[Any],
        fx1: NDArray[Any],
    ) -> None:
        """Initialises the adapter.

        Args:
            function: In-place callable ``function(out, x) -> None``.
            x1: Preallocated scratch input vector, sized like the input.
                Only used by the Jacobian path; scalar-input derivatives
                may pass an empty array.
            fx1: Preallocated scratch output vector, sized like the output.
        """
        self.function = function
        self.x1 = x1
        self.fx1 = fx1

    @classmethod
    def allocate(
        cls,
        function: InPlaceFunction,
        n: int,
        m: int,
        dtype: DTypeLike = float,
    ) -> BufferedFunctionAdapter:
        """Builds an adapter with zero-filled scratch buffers of the right size.

        Args:
            function: In-place callable ``function(out, x) -> None``.
            n: Input dimension.
            m: Output dimension.
            dtype: Floating dtype of both buffers.

        Returns:
            A new adapter.
        """
        return cls(function, np.zeros(n, dtype=dtype), np.zeros(m, dtype=dtype))

    def evaluate(self, out: NDArray[Any], x: Any) -> NDArray[Any]:
        """Evaluates the wrapped function at ``x`` into ``out`` and returns ``out``."""
        self.function(out, x)
        return out

    __call__ = evaluate

    def check_dimensions(self, n: int | None, m: int) -> None:
        """Checks the scratch buffers against the problem size.

        Args:
            n: Input dimension, or ``None`` for a scalar input (``x1`` unused).
            m: Output dimension.

        Raises:
            DimensionError: If ``x1`` or ``fx1`` has the wrong size.
        """
        if n is not None and self.x1.size != n:
            raise DimensionError(
                f"Scratch input buffer x1 has {self.x1.size} entries; expected {n}."
            )
        if self.fx1.size != m:
            raise DimensionError(
                f"Scratch output buffer fx1 has {self.fx1.size} entries; expected {m}."
            )

    def __repr__(self) -> str:
        name = getattr(self.function, "__name__", type(self.function).__name__)
        return (
            f"{type(self).__name__}({name}, n={self.x1.size}, m={self.fx1.size})"
        )


def require_buffered(function: Any) -> BufferedFunction:
    """Returns ``function`` if it implements :class:`BufferedFunction`.

    Args:
        function: Object passed as the user function of a buffered call.

    Returns:
        The same object.

    Raises:
        TypeError: If ``function`` lacks the buffered capability.
    """
    if not isinstance(function, BufferedFunction):
        raise TypeError(
            "Buffered evaluation needs a BufferedFunction (e.g. a "
            f"BufferedFunctionAdapter); got {type(function).__name__}."
        )
    return function
