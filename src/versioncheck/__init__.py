"""versioncheck core package.

Parses, orders and matches version identifiers against constraint
expressions such as ``>= 1.2, < 2.0`` or ``~> 1.2.3``. The library API is
re-exported here; the lockfile policy scan and CLI build on top of it.
"""

from .errors import MalformedConstraint, MalformedVersion, VersionError
from .models import (
    Constraint,
    ConstraintSet,
    Operator,
    Version,
    VersionBuilder,
    VersionCollection,
    compare,
    parse_constraint,
    parse_constraints,
    parse_version,
    sort_versions,
)

__version__ = "0.1.0"

__all__ = [
    "Constraint",
    "ConstraintSet",
    "MalformedConstraint",
    "MalformedVersion",
    "Operator",
    "Version",
    "VersionBuilder",
    "VersionCollection",
    "VersionError",
    "compare",
    "parse_constraint",
    "parse_constraints",
    "parse_version",
    "sort_versions",
]
