"""Scheme and function-kind tags.

A :class:`Scheme` selects the finite-difference formula and a
:class:`FunctionKind` tells the engines how the user function delivers its
output. Both are closed sets. Plain strings are accepted wherever a tag is
expected and are resolved through :func:`resolve_scheme` and
:func:`resolve_function_kind`.

Examples:
    >>> from finitediffkit.schemes import Scheme, resolve_scheme
    >>> resolve_scheme("Complex-Step") is Scheme.COMPLEX
    True
    >>> resolve_scheme(Scheme.FORWARD) is Scheme.FORWARD
    True

Notes:
    - Names are case/spacing/punctuation insensitive, so ``"complex_step"``,
      ``"complex-step"`` and ``"ComplexStep"`` are all the same tag.
    - Unknown names raise :class:`~finitediffkit.exceptions.ConfigurationError`;
      there is no fallback to a default scheme.
"""

from __future__ import annotations

import re
from enum import Enum
from functools import lru_cache
from typing import Mapping

from finitediffkit.exceptions import ConfigurationError

__all__ = [
    "Scheme",
    "FunctionKind",
    "resolve_scheme",
    "resolve_function_kind",
    "available_schemes",
]


class Scheme(str, Enum):
    """Finite-difference formula family."""

    FORWARD = "forward"
    CENTRAL = "central"
    COMPLEX = "complex"


class FunctionKind(str, Enum):
    """How the user function returns its output.

    ``PURE`` functions are called as ``y = f(x)``. ``BUFFERED`` functions are
    :class:`~finitediffkit.finite.buffered.BufferedFunction` objects called as
    ``f(out, x)`` that write into a caller-owned buffer.
    """

    PURE = "pure"
    BUFFERED = "buffered"


# Canonical tag and accepted aliases for each.
_SCHEME_SPECS: list[tuple[Scheme, list[str]]] = [
    (Scheme.FORWARD, ["fd", "fwd", "forward-difference"]),
    (Scheme.CENTRAL, ["cd", "central-difference"]),
    (Scheme.COMPLEX, ["complex-step", "complex_step", "cs"]),
]

_KIND_SPECS: list[tuple[FunctionKind, list[str]]] = [
    (FunctionKind.PURE, ["default"]),
    (FunctionKind.BUFFERED, ["in-place", "inplace", "wrapper"]),
]


def _norm(s: str) -> str:
    """Normalize a tag string for robust matching (case/spacing/punct insensitive).

    Args:
        s: Input string.

    Returns:
        Normalized string.
    """
    return re.sub(r"[^a-z0-9]+", "", s.lower())


@lru_cache(maxsize=1)
def _scheme_map() -> Mapping[str, Scheme]:
    """Builds and caches the lookup table from normalized names to schemes."""
    table: dict[str, Scheme] = {}
    for scheme, aliases in _SCHEME_SPECS:
        table[_norm(scheme.value)] = scheme
        for a in aliases:
            table[_norm(a)] = scheme
    return table


@lru_cache(maxsize=1)
def _kind_map() -> Mapping[str, FunctionKind]:
    """Builds and caches the lookup table from normalized names to function kinds."""
    table: dict[str, FunctionKind] = {}
    for kind, aliases in _KIND_SPECS:
        table[_norm(kind.value)] = kind
        for a in aliases:
            table[_norm(a)] = kind
    return table


def resolve_scheme(scheme: Scheme | str) -> Scheme:
    """Resolves a scheme tag or name to a :class:`Scheme`.

    Args:
        scheme: A :class:`Scheme` member or one of its names/aliases.

    Returns:
        The matching :class:`Scheme`.

    Raises:
        ConfigurationError: If ``scheme`` is not a recognized scheme.
    """
    if isinstance(scheme, Scheme):
        return scheme
    if isinstance(scheme, str):
        found = _scheme_map().get(_norm(scheme))
        if found is not None:
            return found
    opts = ", ".join(available_schemes())
    raise ConfigurationError(
        f"Unknown finite-difference scheme {scheme!r}. Choose one of {{{opts}}}."
    )


def resolve_function_kind(function_kind: FunctionKind | str) -> FunctionKind:
    """Resolves a function-kind tag or name to a :class:`FunctionKind`.

    Args:
        function_kind: A :class:`FunctionKind` member or one of its names/aliases.

    Returns:
        The matching :class:`FunctionKind`.

    Raises:
        ConfigurationError: If ``function_kind`` is not recognized.
    """
    if isinstance(function_kind, FunctionKind):
        return function_kind
    if isinstance(function_kind, str):
        found = _kind_map().get(_norm(function_kind))
        if found is not None:
            return found
    opts = ", ".join(k.value for k in FunctionKind)
    raise ConfigurationError(
        f"Unknown function kind {function_kind!r}. Choose one of {{{opts}}}."
    )


def available_schemes() -> list[str]:
    """Lists canonical scheme names.

    Returns:
        List of scheme names.
    """
    return [s.value for s in Scheme]
