"""Command line interface.

Usage:
  versioncheck parse 1.2-rc.1
  versioncheck compare 1.2.0 1.2.0-beta
  versioncheck sort 1.0 0.7.1 2 1.2.0-beta
  versioncheck check -c ">= 1.0, < 2.0" 1.4.2 2.0.0
  versioncheck bump minor 1.2.3
  versioncheck equals ">0.1,>0.2" ">0.2" --logical
  versioncheck scan --root . --policy versioncheck.json [--warn-only]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml

from .config import PolicyError, load_policy, warn_only_from_env
from .core import scan_repository
from .errors import VersionError
from .models import (
    VersionBuilder,
    compare,
    parse_constraints,
    parse_version,
    sort_versions,
)
from .summary import render_summary

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_UNSATISFIED = 3
EXIT_FINDINGS = 10


def _cmd_parse(args: argparse.Namespace) -> int:
    print(json.dumps(parse_version(args.version).to_dict(), indent=2))
    return EXIT_OK


def _cmd_compare(args: argparse.Namespace) -> int:
    print(compare(parse_version(args.left), parse_version(args.right)))
    return EXIT_OK


def _cmd_sort(args: argparse.Namespace) -> int:
    versions = [parse_version(raw) for raw in args.versions]
    for version in sort_versions(versions, reverse=args.reverse):
        print(version)
    return EXIT_OK


def _cmd_check(args: argparse.Namespace) -> int:
    constraints = parse_constraints(args.constraints)
    ok = True
    for raw in args.versions:
        satisfied = constraints.check(parse_version(raw))
        ok = ok and satisfied
        print(f"{raw}\t{'ok' if satisfied else 'unsatisfied'}")
    return EXIT_OK if ok else EXIT_UNSATISFIED


def _cmd_bump(args: argparse.Namespace) -> int:
    builder = VersionBuilder(parse_version(args.version))
    if args.part == "major":
        builder.next_major()
    elif args.part == "minor":
        builder.next_minor()
    else:
        builder.next_patch()
    if args.prerelease:
        builder.set_prerelease(args.prerelease)
    if args.metadata:
        builder.set_metadata(args.metadata)
    print(builder.build())
    return EXIT_OK


def _cmd_equals(args: argparse.Namespace) -> int:
    left = parse_constraints(args.left)
    right = parse_constraints(args.right)
    equal = left.equals_logical(right) if args.logical else left.equals(right)
    print("equal" if equal else "not equal")
    return EXIT_OK if equal else EXIT_UNSATISFIED


def _cmd_scan(args: argparse.Namespace) -> int:
    policy = load_policy(args.policy)
    report = scan_repository(args.root, policy)
    print(json.dumps(report, indent=2))

    if args.summary is not None:
        args.summary.write_text(render_summary(report), encoding="utf-8")

    # Default behavior: fail on findings unless --warn-only or env override
    if report.get("hasFindings") and not (args.warn_only or warn_only_from_env()):
        return EXIT_FINDINGS
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="versioncheck",
        description="Parse, order and match versions against constraints.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("parse", help="Show the parsed form of a version")
    p.add_argument("version")
    p.set_defaults(func=_cmd_parse)

    p = sub.add_parser("compare", help="Print -1, 0 or 1 comparing two versions")
    p.add_argument("left")
    p.add_argument("right")
    p.set_defaults(func=_cmd_compare)

    p = sub.add_parser("sort", help="Print versions in ascending order")
    p.add_argument("versions", nargs="+")
    p.add_argument("--reverse", action="store_true", help="Sort in descending order")
    p.set_defaults(func=_cmd_sort)

    p = sub.add_parser("check", help="Check versions against a constraint set")
    p.add_argument("-c", "--constraints", required=True, help='e.g. ">= 1.0, < 2.0"')
    p.add_argument("versions", nargs="+")
    p.set_defaults(func=_cmd_check)

    p = sub.add_parser("bump", help="Print the next major, minor or patch version")
    p.add_argument("part", choices=("major", "minor", "patch"))
    p.add_argument("version")
    p.add_argument("--prerelease", default="", help="Pre-release tag for the new version")
    p.add_argument("--metadata", default="", help="Metadata for the new version")
    p.set_defaults(func=_cmd_bump)

    p = sub.add_parser("equals", help="Compare two constraint sets")
    p.add_argument("left")
    p.add_argument("right")
    p.add_argument(
        "--logical",
        action="store_true",
        help="Compare logical equivalence instead of structure",
    )
    p.set_defaults(func=_cmd_equals)

    p = sub.add_parser("scan", help="Check lockfile versions against a policy file")
    p.add_argument("--root", type=Path, default=Path("."))
    p.add_argument("--policy", type=Path, default=None, help="Path to the policy JSON file")
    p.add_argument("--warn-only", action="store_true", help="Do not fail on violations")
    p.add_argument("--summary", type=Path, default=None, help="Write a Markdown summary here")
    p.set_defaults(func=_cmd_scan)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except VersionError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
    except PolicyError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
    except FileNotFoundError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
    except json.JSONDecodeError as exc:
        print(f"ERROR: Failed to read JSON: {exc}", file=sys.stderr)
    except yaml.YAMLError as exc:
        print(f"ERROR: Failed to read YAML: {exc}", file=sys.stderr)
    return EXIT_ERROR


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
