"""Parse npm package-lock.json to capture resolved transitive dependencies."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

_NODE_MODULES = "node_modules/"


def _walk_v1(deps: dict[str, Any], pairs: list[tuple[str, str]]) -> None:
    for name, meta in deps.items():
        if not isinstance(meta, dict):
            continue
        if "version" in meta:
            pairs.append((name, str(meta["version"])))
        nested = meta.get("dependencies")
        if isinstance(nested, dict):
            _walk_v1(nested, pairs)


def parse(path: Path) -> list[tuple[str, str]]:
    """Return unique (package, version) pairs from the lockfile.

    Supports npm v2+ ("packages" map keyed by install path) and falls back to
    the nested v1 "dependencies" tree. Lockfile v2 carries both; the pairs are
    de-duplicated.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    pairs: list[tuple[str, str]] = []

    packages = data.get("packages")
    if isinstance(packages, dict):
        for key, meta in packages.items():
            if not isinstance(meta, dict) or _NODE_MODULES not in key:
                continue
            # "node_modules/a/node_modules/@scope/b" installs "@scope/b"
            name = key.rsplit(_NODE_MODULES, 1)[1]
            version = meta.get("version")
            if version:
                pairs.append((name, str(version)))

    deps = data.get("dependencies")
    if isinstance(deps, dict):
        _walk_v1(deps, pairs)

    return list(dict.fromkeys(pairs))
