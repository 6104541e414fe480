from __future__ import annotations


class AxisConfigError(ValueError):
    """Raised when an axis layout description cannot be used."""


class AxisScaleError(ArithmeticError):
    """Raised when an axis domain/range pair yields a non-finite scale."""
