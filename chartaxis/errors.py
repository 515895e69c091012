from __future__ import annotations


class AxisConfigError(ValueError):
    """Raised when axis, viewport or decoration configuration is invalid."""
