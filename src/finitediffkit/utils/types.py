"""Typing aliases shared by the finite-difference engines."""

from __future__ import annotations

from typing import Any, Callable, Sequence, TypeAlias

import numpy as np
from numpy.typing import NDArray

Vector: TypeAlias = Sequence[float] | NDArray[np.floating]
"""A 1D input or output vector: a NumPy array or a plain sequence."""

Matrix: TypeAlias = NDArray[np.floating] | list[list[float]]
"""A Jacobian output: a 2D array or a list of row lists."""

ScalarFunction: TypeAlias = Callable[[Any], Any]
InPlaceFunction: TypeAlias = Callable[[NDArray[Any], Any], None]
