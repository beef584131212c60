"""Finite-difference engines.

Provides step-size selection, derivatives and Jacobians, and the buffered
function adapter used by the allocation-free paths.
"""

from .buffered import BufferedFunction, BufferedFunctionAdapter
from .derivative import (
    finite_difference,
    finite_difference_buffered,
    finite_difference_into,
)
from .epsilon import compute_epsilon, compute_epsilon_factor, machine_epsilon
from .jacobian import (
    finite_difference_jacobian,
    finite_difference_jacobian_diagonal,
    finite_difference_jacobian_diagonal_into,
    finite_difference_jacobian_into,
)

__all__ = [
    "BufferedFunction",
    "BufferedFunctionAdapter",
    "compute_epsilon",
    "compute_epsilon_factor",
    "machine_epsilon",
    "finite_difference",
    "finite_difference_into",
    "finite_difference_buffered",
    "finite_difference_jacobian",
    "finite_difference_jacobian_into",
    "finite_difference_jacobian_diagonal",
    "finite_difference_jacobian_diagonal_into",
]
