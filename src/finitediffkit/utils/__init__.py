"""Utility functions for finitediffkit package."""

from .perturb import perturbed
from .validate import (
    check_jacobian_shape,
    check_same_length,
    check_square,
    float_dtype,
    note_unused_fx,
    warn_if_nonfinite,
)

__all__ = [
    "perturbed",
    "check_jacobian_shape",
    "check_same_length",
    "check_square",
    "note_unused_fx",
    "float_dtype",
    "warn_if_nonfinite",
]
