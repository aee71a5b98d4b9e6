"""Waymark exception hierarchy."""

from __future__ import annotations


class WaymarkError(Exception):
    """Base for all waymark-specific errors."""


class InvalidRoute(WaymarkError, ValueError):  # noqa: N818
    """Raised when a route or router scope cannot be registered.

    Covers malformed paths, ``on("/")``, registrations with no controller
    to fall back on, and ``use()`` without an active base path.
    """

    def __init__(self, message: str, *, path: str | None = None, verb: str | None = None) -> None:
        super().__init__(message)
        self.path = path
        self.verb = verb
