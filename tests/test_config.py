"""Tests for finitediffkit.config."""

import pytest

from finitediffkit.config import FiniteDiffConfig
from finitediffkit.exceptions import ConfigurationError
from finitediffkit.schemes import FunctionKind, Scheme


def test_defaults():
    """Tests the default scheme and function kind."""
    cfg = FiniteDiffConfig()
    assert cfg.scheme is Scheme.CENTRAL
    assert cfg.function_kind is FunctionKind.PURE


def test_aliases_resolved_eagerly():
    """Tests that string aliases are normalized at construction."""
    cfg = FiniteDiffConfig(scheme="Complex-Step", function_kind="in-place")
    assert cfg.scheme is Scheme.COMPLEX
    assert cfg.function_kind is FunctionKind.BUFFERED


@pytest.mark.parametrize("kwargs", [{"scheme": "richardson"}, {"function_kind": "lazy"}])
def test_invalid_tags_raise(kwargs):
    """Tests that a typo fails at construction."""
    with pytest.raises(ConfigurationError):
        FiniteDiffConfig(**kwargs)


def test_repr():
    """Tests the readable representation."""
    assert repr(FiniteDiffConfig("fd")) == (
        "FiniteDiffConfig(scheme='forward', function_kind='pure')"
    )
