from __future__ import annotations


class ProviderError(RuntimeError):
    """Raised when an upstream data provider fails or returns unusable data."""


__all__ = ["ProviderError"]
