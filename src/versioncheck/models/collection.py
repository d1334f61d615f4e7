"""Sort adapter over a list of versions."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .version import Version


class VersionCollection:
    """Index-addressable list of versions exposing ``less``/``swap``.

    Ordering is delegated entirely to :func:`versioncheck.models.version.compare`.
    """

    def __init__(self, versions: Iterable[Version] = ()) -> None:
        self._versions = list(versions)

    def __len__(self) -> int:
        return len(self._versions)

    def __iter__(self) -> Iterator[Version]:
        return iter(self._versions)

    def __getitem__(self, index: int) -> Version:
        return self._versions[index]

    def less(self, i: int, j: int) -> bool:
        return self._versions[i].less_than(self._versions[j])

    def swap(self, i: int, j: int) -> None:
        self._versions[i], self._versions[j] = self._versions[j], self._versions[i]

    def sort(self, *, reverse: bool = False) -> None:
        self._versions.sort(reverse=reverse)

    def to_list(self) -> list[Version]:
        return list(self._versions)


def sort_versions(versions: Iterable[Version], *, reverse: bool = False) -> list[Version]:
    """Return a new list of ``versions`` in ascending (or descending) order."""
    collection = VersionCollection(versions)
    collection.sort(reverse=reverse)
    return collection.to_list()
