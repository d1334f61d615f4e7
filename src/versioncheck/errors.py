"""Errors raised while parsing versions and constraints."""

from __future__ import annotations


class VersionError(ValueError):
    """Base error for malformed version or constraint input."""


class MalformedVersion(VersionError):
    """Raised when a string does not match the version grammar."""


class MalformedConstraint(VersionError):
    """Raised when a constraint operator or its version literal is invalid."""
