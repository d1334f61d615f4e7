"""Human-readable Markdown summary of a scan report."""

from __future__ import annotations

from typing import Any


def render_summary(report: dict[str, Any]) -> str:
    """Return a Markdown string with totals and a table of policy violations."""
    totals = report.get("totals", {})
    projects = report.get("projects", [])

    lines = [
        "# versioncheck Summary",
        "",
        f"Total projects: {totals.get('projects', 0)} | "
        f"Violations: {totals.get('findings', 0)} | "
        f"Skipped: {totals.get('skipped', 0)}",
        "",
        "| Project | Package | Installed | Constraints |",
        "| --- | --- | --- | --- |",
    ]

    if not projects:
        lines.append("| (no projects scanned) | n/a | n/a | n/a |")

    for proj in projects:
        path = proj.get("path") or "."
        findings = proj.get("findings") or []
        if not findings:
            lines.append(f"| {path} | No policy violations | n/a | n/a |")
            continue
        for finding in findings:
            constraints = str(finding.get("constraints", "")).replace("|", "\\|")
            lines.append(
                f"| {path} | {finding.get('package', '')} | "
                f"{finding.get('installed', '')} | `{constraints}` |"
            )

    return "\n".join(lines) + "\n"
