"""Exception hierarchy for level construction."""

from __future__ import annotations


class DelveError(Exception):
    """Base class for all errors raised by delve."""


class InvalidConfiguration(DelveError, ValueError):
    """Raised when level or index parameters cannot produce a valid level.

    Always raised before any grid is built, so a caller never receives a
    partially constructed level.
    """


class InvalidPosition(DelveError, ValueError):
    """Raised when an entity is placed on a wall or an occupied tile."""
