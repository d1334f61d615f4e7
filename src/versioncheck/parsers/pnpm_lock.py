"""Parse pnpm-lock.yaml to capture resolved dependencies."""

from __future__ import annotations

from pathlib import Path

import yaml


def _split_key(key: str) -> tuple[str, str] | None:
    # Keys look like "/name@1.2.3", "/@scope/name@1.2.3(peer@2.0.0)" (v6),
    # "name@1.2.3" (v9) or "/name/1.2.3" (v5).
    ref = key.lstrip("/").split("(", 1)[0]
    if not ref:
        return None
    at = ref.rfind("@")
    if at > 0:
        return ref[:at], ref[at + 1 :]
    if "/" in ref:
        name, version = ref.rsplit("/", 1)
        return name, version
    return None


def parse(path: Path) -> list[tuple[str, str]]:
    """Return unique (package, version) pairs from a pnpm lock file."""
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    pkgs = data.get("packages") or {}

    pairs: list[tuple[str, str]] = []
    for key in pkgs:
        if not isinstance(key, str):
            continue
        split = _split_key(key)
        if split is not None:
            pairs.append(split)

    return list(dict.fromkeys(pairs))
