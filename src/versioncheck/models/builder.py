"""Mutable helper for deriving the next version from an existing one."""

from __future__ import annotations

from dataclasses import replace

from .version import Version


class VersionBuilder:
    """Accumulate changes to a version and produce a new :class:`Version`.

    The source version is never modified. Bumping a pre-release only drops
    the pre-release tag, so ``1.3.0-rc.1`` bumps to ``1.3.0`` whichever
    component is requested.
    """

    def __init__(self, version: Version) -> None:
        self._segments = list(version.segments)
        self._prerelease = version.prerelease
        self._metadata = version.metadata
        self._source = version

    def set_prerelease(self, prerelease: str) -> VersionBuilder:
        self._validate(prerelease=prerelease)
        self._prerelease = prerelease
        return self

    def reset_prerelease(self) -> VersionBuilder:
        self._prerelease = ""
        return self

    def set_metadata(self, metadata: str) -> VersionBuilder:
        self._validate(metadata=metadata)
        self._metadata = metadata
        return self

    def reset_metadata(self) -> VersionBuilder:
        self._metadata = ""
        return self

    def next_major(self) -> VersionBuilder:
        return self._bump(0)

    def next_minor(self) -> VersionBuilder:
        return self._bump(1)

    def next_patch(self) -> VersionBuilder:
        return self._bump(2)

    def build(self) -> Version:
        return Version(
            segments=tuple(self._segments),
            prerelease=self._prerelease,
            metadata=self._metadata,
        )

    def _bump(self, index: int) -> VersionBuilder:
        if self._prerelease:
            self._prerelease = ""
            return self
        self._segments[index] += 1
        for lower in range(index + 1, len(self._segments)):
            self._segments[lower] = 0
        return self

    def _validate(self, **changes: str) -> None:
        # Version.__post_init__ owns the identifier grammar.
        replace(self._source, **changes)
