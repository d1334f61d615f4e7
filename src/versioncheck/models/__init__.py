"""Data models for versions, constraints and constraint sets."""

from __future__ import annotations

from .builder import VersionBuilder
from .collection import VersionCollection, sort_versions
from .constraint import (
    Constraint,
    ConstraintSet,
    Operator,
    parse_constraint,
    parse_constraints,
)
from .version import Version, compare, parse_version

__all__ = [
    "Constraint",
    "ConstraintSet",
    "Operator",
    "Version",
    "VersionBuilder",
    "VersionCollection",
    "compare",
    "parse_constraint",
    "parse_constraints",
    "parse_version",
    "sort_versions",
]
