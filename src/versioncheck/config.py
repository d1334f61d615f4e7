"""Policy configuration loader for lockfile scans.

Reads package policies from a JSON file (default: ``versioncheck.json`` in the
working directory). Each policy entry must have a ``package`` and a
``constraints`` expression; optional fields are ``enabled`` (default True) and
``description``.

The document structure is checked against ``POLICY_SCHEMA`` with jsonschema;
constraint expressions are then parsed so that a bad policy fails at load time
rather than halfway through a scan.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from collections.abc import Iterable

from jsonschema import Draft202012Validator

from .errors import VersionError
from .models.constraint import ConstraintSet, parse_constraints

logger = logging.getLogger(__name__)

DEFAULT_POLICY_FILENAME = "versioncheck.json"
POLICY_PATH_ENV_VAR = "VERSIONCHECK_POLICY"
WARN_ONLY_ENV_VAR = "VERSIONCHECK_WARN_ONLY"

_TRUTHY = {"1", "true", "yes", "y"}

POLICY_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["policies"],
    "properties": {
        "policies": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "required": ["package", "constraints"],
                "properties": {
                    "package": {"type": "string", "minLength": 1},
                    "constraints": {"type": "string", "minLength": 1},
                    "enabled": {"type": "boolean"},
                    "description": {"type": "string"},
                },
                "additionalProperties": False,
            },
        },
    },
}


class PolicyError(RuntimeError):
    """Raised when the policy file cannot be loaded or is invalid."""


@dataclass(slots=True, frozen=True)
class PackagePolicy:
    """Constraints a single package's resolved version must satisfy."""

    package: str
    constraints: ConstraintSet
    enabled: bool = True
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PackagePolicy:
        """Create a PackagePolicy from a schema-valid dictionary."""
        package = data["package"]
        try:
            constraints = parse_constraints(data["constraints"])
        except VersionError as exc:
            raise PolicyError(f"Policy for '{package}' has invalid constraints: {exc}") from exc

        return cls(
            package=package,
            constraints=constraints,
            enabled=data.get("enabled", True),
            description=data.get("description", ""),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "package": self.package,
            "constraints": str(self.constraints),
            "enabled": self.enabled,
            "description": self.description,
        }


@dataclass(slots=True, frozen=True)
class Policy:
    """Top-level policy container."""

    packages: tuple[PackagePolicy, ...]

    def get_enabled(self) -> list[PackagePolicy]:
        """Return only the policies that are enabled."""
        return [policy for policy in self.packages if policy.enabled]

    def get(self, package: str) -> PackagePolicy | None:
        """Return the enabled policy for ``package``, or None."""
        for policy in self.packages:
            if policy.package == package and policy.enabled:
                return policy
        return None

    @classmethod
    def from_policies(cls, policies: Iterable[PackagePolicy]) -> Policy:
        packages: list[PackagePolicy] = []
        seen: set[str] = set()
        for policy in policies:
            if policy.package in seen:
                raise PolicyError(f"Duplicate policy for package: '{policy.package}'")
            seen.add(policy.package)
            packages.append(policy)
        return cls(packages=tuple(packages))


def _format_errors(errors: Iterable[Any]) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def _resolve_policy_path(path: Path | str | None = None) -> Path:
    """Resolve the policy file path.

    Priority:
    1. Explicit path argument
    2. VERSIONCHECK_POLICY environment variable
    3. versioncheck.json in the current working directory
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(POLICY_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    return Path.cwd() / DEFAULT_POLICY_FILENAME


def parse_policy(data: Any) -> Policy:
    """Validate a decoded policy document and build a :class:`Policy`.

    Raises:
        PolicyError: If the document does not match ``POLICY_SCHEMA``, a
            constraint expression is malformed, or a package is listed twice.
    """
    validator = Draft202012Validator(POLICY_SCHEMA)
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    if errors:
        raise PolicyError("Policy failed validation:\n" + _format_errors(errors))

    return Policy.from_policies(PackagePolicy.from_dict(entry) for entry in data["policies"])


def load_policy(path: Path | str | None = None) -> Policy:
    """Load and validate a policy from a JSON file.

    Args:
        path: Optional path to the policy file. If not provided, uses the
            VERSIONCHECK_POLICY env var or falls back to versioncheck.json.

    Raises:
        PolicyError: If the file cannot be read or contains invalid data.
    """
    policy_path = _resolve_policy_path(path)
    logger.debug("Loading policy from %s", policy_path)

    if not policy_path.exists():
        raise PolicyError(f"Policy file not found: {policy_path}")

    try:
        content = policy_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PolicyError(f"Failed to read policy file: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise PolicyError(f"Invalid JSON in policy file: {exc}") from exc

    policy = parse_policy(data)
    logger.debug("Loaded %d package policies", len(policy.packages))
    return policy


def warn_only_from_env() -> bool:
    return os.getenv(WARN_ONLY_ENV_VAR, "").strip().lower() in _TRUTHY
