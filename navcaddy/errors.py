from __future__ import annotations


class NavCaddyError(Exception):
    """Base class for navcaddy errors."""


class InvalidArgument(NavCaddyError, ValueError):
    """Raised when a call receives an out-of-range argument."""


__all__ = ["NavCaddyError", "InvalidArgument"]
