"""Pytest configuration file with fixtures for counting function evaluations."""

import pytest

__all__ = ["counted"]


class CallCounter:
    """Wraps a function and counts how often it is called."""

    def __init__(self, function):
        self.function = function
        self.calls = 0
        self.args = []

    def __call__(self, *args):
        self.calls += 1
        self.args.append(tuple(_snapshot(a) for a in args))
        return self.function(*args)


def _snapshot(a):
    """Copies mutable arguments so later perturbations do not alter the record."""
    copier = getattr(a, "copy", None)
    if callable(copier):
        return copier()
    if isinstance(a, list):
        return list(a)
    return a


@pytest.fixture
def counted():
    """Return a factory wrapping a function in a call counter.

    The wrapper exposes ``calls`` (number of evaluations) and ``args`` (a
    copy of the positional arguments of every evaluation).
    """
    return CallCounter
