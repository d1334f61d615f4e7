"""Parse yarn.lock (classic and berry) to capture resolved dependencies."""

from __future__ import annotations

from pathlib import Path


def _package_name(header: str) -> str:
    first = header.split(",", 1)[0].strip().strip('"')
    # Scoped packages start with "@", so the separator is the second "@".
    idx = first.find("@", 1)
    return first[:idx] if idx > 0 else first


def parse(path: Path) -> list[tuple[str, str]]:
    """Return unique (package, version) pairs from a yarn lock file."""
    lines = path.read_text(encoding="utf-8").splitlines()
    pairs: list[tuple[str, str]] = []

    current_name: str | None = None
    for raw in lines:
        line = raw.rstrip()
        if not line or line.startswith("#"):
            current_name = None
            continue
        if not line.startswith(" ") and line.endswith(":"):
            name = _package_name(line[:-1])
            # berry lockfiles open with a "__metadata:" block
            current_name = None if name.startswith("__") else name
            continue

        stripped = line.strip()
        if current_name and (stripped.startswith("version ") or stripped.startswith("version:")):
            version = stripped[len("version") :].lstrip(": ").strip().strip('"')
            if version:
                pairs.append((current_name, version))
            current_name = None

    return list(dict.fromkeys(pairs))
