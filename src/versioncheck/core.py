"""Core scanning entrypoints.

Checks every resolved dependency found in a repository's lockfiles against a
:class:`~versioncheck.config.Policy`. This module performs no network access
and is shared by the CLI and library callers.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .config import Policy
from .discovery import discover_lockfiles
from .errors import MalformedVersion
from .models.version import parse_version
from .parsers import get_parser
from .report import aggregate

logger = logging.getLogger(__name__)


def _check_project(
    installed: dict[str, set[str]], policy: Policy
) -> tuple[list[dict[str, Any]], list[dict[str, str]]]:
    findings: list[dict[str, Any]] = []
    skipped: list[dict[str, str]] = []

    for name in sorted(installed):
        package_policy = policy.get(name)
        if package_policy is None:
            continue
        for raw in sorted(installed[name]):
            try:
                version = parse_version(raw)
            except MalformedVersion:
                logger.warning("Skipping %s: unparseable version %r", name, raw)
                skipped.append({"package": name, "installed": raw})
                continue
            if not package_policy.constraints.check(version):
                findings.append(
                    {
                        "package": name,
                        "installed": raw,
                        "constraints": str(package_policy.constraints),
                    }
                )

    return findings, skipped


def scan_repository(root: Path, policy: Policy) -> dict[str, Any]:
    """Scan a repository for dependencies that violate ``policy``.

    Params:
        root: repository root to scan
        policy: package policies to enforce

    Returns: dict report (see :func:`versioncheck.report.aggregate`)
    """
    root = root.resolve()

    # Group resolved versions by project (lockfile parent directory)
    by_project: dict[Path, dict[str, set[str]]] = {}
    for lockfile in discover_lockfiles(root):
        logger.debug("Parsing %s", lockfile)
        installed = by_project.setdefault(lockfile.parent, {})
        for name, version in get_parser(lockfile)(lockfile):
            installed.setdefault(name, set()).add(version)

    projects: list[dict[str, Any]] = []
    for proj, installed in sorted(by_project.items(), key=lambda kv: str(kv[0])):
        findings, skipped = _check_project(installed, policy)
        projects.append(
            {
                "path": str(proj.relative_to(root)),
                "findings": findings,
                "skipped": skipped,
            }
        )

    return aggregate(projects)
