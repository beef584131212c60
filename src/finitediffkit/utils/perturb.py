"""Scoped perturbation of a single coordinate."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, MutableSequence

__all__ = ["perturbed"]


@contextmanager
def perturbed(
    vec: MutableSequence[Any],
    index: int,
    step: Any,
) -> Iterator[MutableSequence[Any]]:
    """Temporarily shifts ``vec[index]`` by ``step``.

    The original entry is saved before the shift and assigned back on exit,
    so the restored value is bit-identical to the original (no ``x + h - h``
    round-off) and is restored even when the body raises.

    Args:
        vec: Mutable container supporting item get/set, e.g. a NumPy array
            or a ``list``.
        index: Position of the coordinate to shift.
        step: Amount added to the coordinate. May be complex when ``vec`` has
            a complex dtype.

    Yields:
        The perturbed container itself.
    """
    original = vec[index]
    vec[index] = original + step
    try:
        yield vec
    finally:
        vec[index] = original
