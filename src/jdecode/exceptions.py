"""Host exceptions raised by jdecode.

Decoding itself never raises: failures travel as `Err` values. These
exceptions cover the host-side edges around the engine.
"""

from __future__ import annotations


class JDecodeError(Exception):
    """Base class for all exceptions raised by jdecode."""


class UnwrapError(JDecodeError, ValueError):
    """Raised when `unwrap()` is called on an `Err`."""

    def __init__(self, error: object):
        super().__init__(f"called unwrap() on Err: {error}")
        self.error = error


class LazyCycleError(JDecodeError, RecursionError):
    """Raised when a lazy decoder is forced while it is still being built.

    This happens when a factory passed to `Lazy` forces its own handle
    instead of deferring through `lazy(...)`.
    """


class ConfigError(JDecodeError):
    """Raised when decode settings fail validation."""
