"""biver exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Typed non-error outcomes live in core.types and are never raised.
"""

from __future__ import annotations


class BiverError(Exception):
    """Base exception for all biver failures."""


class BiverConfigError(BiverError):
    """Raised for invalid runtime configuration."""


class BiverStoreError(BiverError):
    """Raised for state document and blob I/O failures."""


class BiverDecodeError(BiverStoreError):
    """Raised when a persisted state document exists but is malformed."""


class BiverInvariantError(BiverError):
    """Raised when repository data breaks referential invariants before a write."""
