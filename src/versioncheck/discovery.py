"""Lockfile discovery utilities."""

from __future__ import annotations

from pathlib import Path


EXCLUDES = {"node_modules", ".git", ".venv"}
LOCKFILES = {
    "package-lock.json",
    "pnpm-lock.yaml",
    "yarn.lock",
}


def discover_lockfiles(root: Path) -> list[Path]:
    """Find lockfiles recursively under root, skipping vendored directories.

    Results are sorted so that scans report projects in a stable order.
    """
    root = root.resolve()
    found: list[Path] = []

    for path in root.rglob("*"):
        if path.name not in LOCKFILES or not path.is_file():
            continue
        if EXCLUDES.intersection(path.relative_to(root).parts):
            continue
        found.append(path)

    return sorted(found)
