"""Provides all finitediffkit methods."""

from importlib.metadata import PackageNotFoundError, version

from finitediffkit.config import FiniteDiffConfig
from finitediffkit.exceptions import ConfigurationError, DimensionError
from finitediffkit.finite.buffered import BufferedFunction, BufferedFunctionAdapter
from finitediffkit.finite.derivative import (
    finite_difference,
    finite_difference_buffered,
    finite_difference_into,
)
from finitediffkit.finite.epsilon import compute_epsilon, compute_epsilon_factor
from finitediffkit.finite.jacobian import (
    finite_difference_jacobian,
    finite_difference_jacobian_diagonal,
    finite_difference_jacobian_diagonal_into,
    finite_difference_jacobian_into,
)
from finitediffkit.finite_diff_kit import FiniteDiffKit
from finitediffkit.schemes import FunctionKind, Scheme

try:
    __version__ = version("finitediffkit")
except PackageNotFoundError:
    pass

FiniteDiffKit.__module__ = "finitediffkit"

__all__ = [
    "BufferedFunction",
    "BufferedFunctionAdapter",
    "ConfigurationError",
    "DimensionError",
    "FiniteDiffConfig",
    "FiniteDiffKit",
    "FunctionKind",
    "Scheme",
    "compute_epsilon",
    "compute_epsilon_factor",
    "finite_difference",
    "finite_difference_buffered",
    "finite_difference_into",
    "finite_difference_jacobian",
    "finite_difference_jacobian_diagonal",
    "finite_difference_jacobian_diagonal_into",
    "finite_difference_jacobian_into",
]
