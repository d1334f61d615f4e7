from __future__ import annotations

from versioncheck import VersionCollection, parse_version, sort_versions


def test_sort_scenario() -> None:
    raw = ["1.0", "0.7.1", "1.2.3", "2", "1.2.0-beta"]
    result = sort_versions(parse_version(v) for v in raw)
    assert [str(v) for v in result] == ["0.7.1", "1.0.0", "1.2.0-beta", "1.2.3", "2.0.0"]


def test_sort_mixed_segment_counts_and_prereleases() -> None:
    raw = [
        "1.2.3.4",
        "1.2.3",
        "1.2.3-rc1-with-hypen",
        "1.2.0.4-x.Y.0+metadata",
        "1.2.0",
        "1.2-beta.5",
        "1.2-beta",
        "1.2-5",
    ]
    result = sort_versions(parse_version(v) for v in raw)
    assert [str(v) for v in result] == [
        "1.2.0-5",
        "1.2.0-beta",
        "1.2.0-beta.5",
        "1.2.0",
        "1.2.0.4-x.Y.0+metadata",
        "1.2.3-rc1-with-hypen",
        "1.2.3",
        "1.2.3.4",
    ]


def test_sort_descending() -> None:
    result = sort_versions([parse_version("1"), parse_version("3"), parse_version("2")], reverse=True)
    assert [v.major for v in result] == [3, 2, 1]


def test_less_and_swap() -> None:
    collection = VersionCollection([parse_version("2.0"), parse_version("1.0")])
    assert len(collection) == 2
    assert collection.less(1, 0)
    assert not collection.less(0, 1)

    collection.swap(0, 1)
    assert [str(v) for v in collection] == ["1.0.0", "2.0.0"]
    assert collection[0] == parse_version("1")


def test_sort_in_place_is_stable_for_equal_versions() -> None:
    first = parse_version("1.0.0+first")
    second = parse_version("1.0+second")
    collection = VersionCollection([parse_version("2"), first, second])
    collection.sort()
    assert [v.metadata for v in collection.to_list()[:2]] == ["first", "second"]
