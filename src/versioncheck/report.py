"""Report aggregation."""

from __future__ import annotations

from typing import Any

REPORT_FORMAT_VERSION = "1"


def aggregate(projects: list[dict[str, Any]]) -> dict[str, Any]:
    """Aggregate per-project results into a single report.

    Each entry in ``projects`` has ``path``, ``findings`` and ``skipped``
    keys. A finding holds ``package``, ``installed`` and the ``constraints``
    it violated; a skipped entry holds ``package`` and the unparseable
    ``installed`` string.
    """

    total_findings = sum(len(p.get("findings", [])) for p in projects)
    total_skipped = sum(len(p.get("skipped", [])) for p in projects)

    return {
        "version": REPORT_FORMAT_VERSION,
        "hasFindings": total_findings > 0,
        "projects": projects,
        "totals": {
            "projects": len(projects),
            "findings": total_findings,
            "skipped": total_skipped,
        },
    }
