"""Version model, parser and comparator.

A version is a dotted run of numeric segments, optionally followed by a
``-prerelease`` and a ``+metadata`` suffix:

- ``1``, ``1.2``, ``1.2.3`` and ``1.2.3.4`` are all accepted; anything shorter
  than three segments is padded with zeros (``1.2`` -> ``1.2.0``)
- ``1.2.3-rc.1`` carries pre-release ``rc.1`` and sorts below ``1.2.3``
- ``1.2.3+build.7`` carries metadata ``build.7``, which never takes part in
  ordering or equality
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any
from collections.abc import Sequence

from ..errors import MalformedVersion

logger = logging.getLogger(__name__)

MIN_SEGMENTS = 3
MAX_SEGMENT = 2**31 - 1
_MAX_SEGMENT_DIGITS = len(str(MAX_SEGMENT))

_IDENTIFIERS = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"

VERSION_PATTERN = re.compile(
    r"(?P<segments>[0-9]+(?:\.[0-9]+)*)"
    rf"(?:-(?P<prerelease>{_IDENTIFIERS}))?"
    rf"(?:\+(?P<metadata>{_IDENTIFIERS}))?"
)
IDENTIFIERS_PATTERN = re.compile(_IDENTIFIERS)
_NUMERIC_PATTERN = re.compile(r"[0-9]+")


def _cmp(left: Any, right: Any) -> int:
    return (left > right) - (left < right)


def _padded(segments: Sequence[int], width: int) -> tuple[int, ...]:
    return tuple(segments) + (0,) * (width - len(segments))


def _numeric_key(ident: str) -> tuple[int, str]:
    # Digit strings of any length order by (length, digits) once leading
    # zeros are gone, without going through int().
    digits = ident.lstrip("0") or "0"
    return len(digits), digits


def _prerelease_key(prerelease: str) -> tuple[tuple[int, str] | str, ...]:
    if not prerelease:
        return ()
    return tuple(
        _numeric_key(ident) if _NUMERIC_PATTERN.fullmatch(ident) else ident
        for ident in prerelease.split(".")
    )


@dataclass(frozen=True, slots=True, eq=False)
class Version:
    """Immutable parsed version.

    ``original`` keeps the text the version was parsed from and ``specified``
    the number of segments it spelled out; neither affects equality.
    """

    segments: tuple[int, ...]
    prerelease: str = ""
    metadata: str = ""
    original: str = field(default="", repr=False)
    specified: int = field(default=0, repr=False)

    def __post_init__(self) -> None:
        segments = tuple(self.segments)
        if not segments:
            raise MalformedVersion("malformed version: at least one segment is required")
        for segment in segments:
            if isinstance(segment, bool) or not isinstance(segment, int):
                raise MalformedVersion(f"malformed version: segment {segment!r} is not an integer")
            if segment < 0 or segment > MAX_SEGMENT:
                raise MalformedVersion(f"malformed version: segment {segment} is out of range")
        for label, value in (("prerelease", self.prerelease), ("metadata", self.metadata)):
            if value and not IDENTIFIERS_PATTERN.fullmatch(value):
                raise MalformedVersion(f"malformed version: invalid {label} {value!r}")

        specified = self.specified
        if isinstance(specified, bool) or not isinstance(specified, int) or specified < 0:
            raise MalformedVersion(
                f"malformed version: specified segment count {specified!r} is invalid"
            )
        specified = specified or len(segments)
        if len(segments) < MIN_SEGMENTS:
            segments = _padded(segments, MIN_SEGMENTS)
        object.__setattr__(self, "segments", segments)
        object.__setattr__(self, "specified", min(specified, len(segments)))

    def __str__(self) -> str:
        text = ".".join(str(segment) for segment in self.segments)
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.metadata:
            text += f"+{self.metadata}"
        return text

    def __hash__(self) -> int:
        segments = list(self.segments)
        while segments and segments[-1] == 0:
            segments.pop()
        return hash((tuple(segments), _prerelease_key(self.prerelease)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare(self, other) == 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare(self, other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare(self, other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare(self, other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare(self, other) >= 0

    @property
    def major(self) -> int:
        return self.segments[0]

    @property
    def minor(self) -> int:
        return self.segments[1]

    @property
    def patch(self) -> int:
        return self.segments[2]

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def compare(self, other: Version) -> int:
        """Return -1, 0 or 1 as this version sorts before, with or after ``other``."""
        return compare(self, other)

    def equal(self, other: Version) -> bool:
        return compare(self, other) == 0

    def less_than(self, other: Version) -> bool:
        return compare(self, other) < 0

    def less_or_equal(self, other: Version) -> bool:
        return compare(self, other) <= 0

    def greater_than(self, other: Version) -> bool:
        return compare(self, other) > 0

    def greater_or_equal(self, other: Version) -> bool:
        return compare(self, other) >= 0

    def release_equal(self, other: Version) -> bool:
        """True when the numeric segments match, ignoring trailing zeros."""
        width = max(len(self.segments), len(other.segments))
        return _padded(self.segments, width) == _padded(other.segments, width)

    def to_dict(self) -> dict[str, object]:
        return {
            "version": str(self),
            "segments": list(self.segments),
            "prerelease": self.prerelease,
            "metadata": self.metadata,
        }


def _compare_prerelease(left: str, right: str) -> int:
    if left == right:
        return 0
    # A release sorts above every one of its pre-releases.
    if not left:
        return 1
    if not right:
        return -1

    left_ids = left.split(".")
    right_ids = right.split(".")
    for lhs, rhs in zip(left_ids, right_ids):
        lhs_numeric = _NUMERIC_PATTERN.fullmatch(lhs) is not None
        rhs_numeric = _NUMERIC_PATTERN.fullmatch(rhs) is not None
        if lhs_numeric and rhs_numeric:
            result = _cmp(_numeric_key(lhs), _numeric_key(rhs))
        elif lhs_numeric:
            result = -1
        elif rhs_numeric:
            result = 1
        else:
            result = _cmp(lhs, rhs)
        if result:
            return result

    return _cmp(len(left_ids), len(right_ids))


def compare(left: Version, right: Version) -> int:
    """Order two versions, returning -1, 0 or 1.

    Segments are compared first, with the shorter sequence padded by zeros so
    that ``1.2.0`` and ``1.2.0.0`` are equal. Pre-release identifiers break
    ties using SemVer precedence. Metadata is ignored.
    """
    width = max(len(left.segments), len(right.segments))
    result = _cmp(_padded(left.segments, width), _padded(right.segments, width))
    if result:
        return result
    return _compare_prerelease(left.prerelease, right.prerelease)


def parse_version(text: str) -> Version:
    """Parse ``text`` into a :class:`Version`.

    Raises:
        MalformedVersion: If ``text`` does not match the version grammar or a
            segment does not fit in a signed 32-bit integer.
    """
    if not isinstance(text, str):
        raise TypeError(f"version must be a string, not {type(text).__name__}")

    match = VERSION_PATTERN.fullmatch(text)
    if match is None:
        logger.debug("Rejected version %r", text)
        raise MalformedVersion(f"malformed version: {text}")

    parts = match.group("segments").split(".")
    # Over-long digit runs are rejected before int().
    if any(len(part.lstrip("0")) > _MAX_SEGMENT_DIGITS for part in parts):
        logger.debug("Rejected version %r: segment out of range", text)
        raise MalformedVersion(f"malformed version: {text}")
    segments = tuple(int(part) for part in parts)
    if any(segment > MAX_SEGMENT for segment in segments):
        logger.debug("Rejected version %r: segment out of range", text)
        raise MalformedVersion(f"malformed version: {text}")

    return Version(
        segments=segments,
        prerelease=match.group("prerelease") or "",
        metadata=match.group("metadata") or "",
        original=text,
        specified=len(segments),
    )
