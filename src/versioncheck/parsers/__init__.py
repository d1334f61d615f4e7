"""Lockfile parsers returning resolved ``(package, version)`` pairs."""

from __future__ import annotations

from pathlib import Path
from collections.abc import Callable

from .package_lock import parse as parse_package_lock
from .pnpm_lock import parse as parse_pnpm_lock
from .yarn_lock import parse as parse_yarn_lock

LockfileParser = Callable[[Path], list[tuple[str, str]]]

PARSERS: dict[str, LockfileParser] = {
    "package-lock.json": parse_package_lock,
    "pnpm-lock.yaml": parse_pnpm_lock,
    "yarn.lock": parse_yarn_lock,
}


def get_parser(path: Path) -> LockfileParser:
    """Return the parser registered for the lockfile's file name."""
    parser = PARSERS.get(path.name)
    if parser is None:
        known = ", ".join(sorted(PARSERS))
        raise ValueError(f"Unsupported lockfile '{path.name}'. Known lockfiles: {known}")
    return parser


__all__ = [
    "LockfileParser",
    "PARSERS",
    "get_parser",
    "parse_package_lock",
    "parse_pnpm_lock",
    "parse_yarn_lock",
]
