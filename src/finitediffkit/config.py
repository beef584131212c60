"""Configuration for :class:`~finitediffkit.finite_diff_kit.FiniteDiffKit`.

The config holds the defaults a kit falls back to when a call does not name
a scheme or function kind. Keyword arguments passed to a kit method always
take precedence.
"""

from __future__ import annotations

from finitediffkit.schemes import (
    FunctionKind,
    Scheme,
    resolve_function_kind,
    resolve_scheme,
)


class FiniteDiffConfig:
    """Default scheme and function kind for finite-difference calls."""

    def __init__(
        self,
        scheme: Scheme | str = Scheme.CENTRAL,
        function_kind: FunctionKind | str = FunctionKind.PURE,
    ):
        """Initialize configuration.

        Args:
            scheme:
                Default finite-difference scheme: ``"forward"``,
                ``"central"`` or ``"complex"`` (aliases accepted). Central
                differencing is the default since it is second-order accurate
                and does not need a complex-capable function.

            function_kind:
                Default Jacobian function kind, ``"pure"`` or
                ``"buffered"``.

        Raises:
            ConfigurationError: If either tag is not recognized.
        """
        # Resolve eagerly so a typo fails here, not on the first call.
        self.scheme = resolve_scheme(scheme)
        self.function_kind = resolve_function_kind(function_kind)

    def __repr__(self) -> str:
        return (
            f"FiniteDiffConfig(scheme={self.scheme.value!r}, "
            f"function_kind={self.function_kind.value!r})"
        )
