from __future__ import annotations

import pytest

from versioncheck import (
    MalformedConstraint,
    MalformedVersion,
    Operator,
    parse_constraint,
    parse_constraints,
    parse_version,
)


@pytest.mark.parametrize(
    "text, count",
    [
        (">= 1.2", 1),
        (">= 1.2, < 1.0", 2),
        ("1.2.3", 1),
        ("~> 1.2.3, != 1.2.5, <= 1.4", 3),
    ],
)
def test_parse_constraints_counts(text: str, count: int) -> None:
    assert len(parse_constraints(text)) == count


@pytest.mark.parametrize(
    "text, operator",
    [
        ("1.0", Operator.EQUAL),
        ("= 1.0", Operator.EQUAL),
        ("!=1.0", Operator.NOT_EQUAL),
        ("> 1.0", Operator.GREATER_THAN),
        ("< 1.0", Operator.LESS_THAN),
        (">=1.0", Operator.GREATER_OR_EQUAL),
        ("  <= 1.0  ", Operator.LESS_OR_EQUAL),
        ("~> 1.0", Operator.PESSIMISTIC),
    ],
)
def test_parse_constraint_operators(text: str, operator: Operator) -> None:
    constraint = parse_constraint(text)
    assert constraint.operator is operator
    assert constraint.version == parse_version("1.0")
    assert str(constraint) == text


@pytest.mark.parametrize(
    "text",
    [
        ">= 1.x",
        "=> 1.0",
        "~ 1.0",
        "== 1.0",
        ">=",
        "",
        "1.0 1.1",
        ">= 1.2, < foo",
        ">= 1.2,",
        ">= " + "9" * 5000,
    ],
)
def test_malformed_constraints_fail_whole_parse(text: str) -> None:
    with pytest.raises(MalformedConstraint, match="malformed constraint"):
        parse_constraints(text)


def test_malformed_version_is_chained() -> None:
    with pytest.raises(MalformedConstraint) as excinfo:
        parse_constraint(">= 1.x")
    assert isinstance(excinfo.value.__cause__, MalformedVersion)


@pytest.mark.parametrize(
    "constraint, version, expected",
    [
        ("= 1.0", "1.0.0", True),
        ("= 1.0", "1.0.0+build", True),
        ("= 1.0", "1.0.1", False),
        ("1.0.0-beta", "1.0.0-beta", True),
        ("!= 1.0", "1.0.1", True),
        ("!= 1.0", "1.0.0", False),
        ("> 1.0", "1.1", True),
        ("> 1.0", "1.0", False),
        ("< 2.0", "1.9.9", True),
        ("< 2.0", "2.0.0", False),
        (">= 1.0", "1.0", True),
        (">= 1.0", "0.9", False),
        ("<= 1.0", "1.0", True),
        ("<= 1.0", "1.0.1", False),
        ("> 1.0.0.3", "1.0.0.4", True),
    ],
)
def test_check(constraint: str, version: str, expected: bool) -> None:
    assert parse_constraint(constraint).check(parse_version(version)) is expected


@pytest.mark.parametrize(
    "constraint, version, expected",
    [
        ("> 1.0.0", "1.1.0-alpha", False),
        ("< 2.0.0", "1.1.0-alpha", False),
        ("> 1.0.0-alpha.1", "1.0.0-alpha.2", True),
        ("> 1.0.0-alpha.1", "1.1.0-alpha.1", False),
        ("> 1.0.0-alpha.1", "1.0.0", True),
        (">= 1.0.0-beta", "1.0.0-beta", True),
        ("< 1.0.0-beta", "1.0.0-alpha", True),
        ("<= 1.0-rc.1", "1.0.0.0-rc.0", True),
    ],
)
def test_prerelease_gating(constraint: str, version: str, expected: bool) -> None:
    assert parse_constraint(constraint).check(parse_version(version)) is expected


@pytest.mark.parametrize(
    "constraint, version, expected",
    [
        ("~> 1.2.3", "1.2.3", True),
        ("~> 1.2.3", "1.2.9", True),
        ("~> 1.2.3", "1.3.0", False),
        ("~> 1.2.3", "1.2.2", False),
        ("~> 1.2", "1.2.0", True),
        ("~> 1.2", "1.5.0", True),
        ("~> 1.2", "1.1.9", False),
        ("~> 1.2", "2.0.0", False),
        ("~> 1", "1.9.0", True),
        ("~> 1", "2.0.0", True),
        ("~> 1", "0.9.0", False),
        ("~> 1.2.3.4", "1.2.3.9", True),
        ("~> 1.2.3.4", "1.2.4.0", False),
        ("~> 1.2.3.4", "1.2.4", False),
        ("~> 1.2.3", "1.2.4-beta", False),
        ("~> 1.2.3-beta", "1.2.3-rc.1", True),
        ("~> 1.2.3-beta", "1.2.3", False),
        ("~> 1.2.3-beta", "1.2.4-beta", False),
        ("~> 1.2.3-beta", "1.2.3-alpha", False),
    ],
)
def test_pessimistic(constraint: str, version: str, expected: bool) -> None:
    assert parse_constraint(constraint).check(parse_version(version)) is expected


def test_constraint_prerelease_flag() -> None:
    assert parse_constraint(">= 1.0-rc.1").prerelease
    assert not parse_constraint(">= 1.0").prerelease


def test_constraint_equality_ignores_original_text() -> None:
    assert parse_constraint(">=1.0") == parse_constraint(" >= 1.0.0 ")
    assert parse_constraint(">=1.0") != parse_constraint(">1.0")
    assert len({parse_constraint(">=1.0"), parse_constraint(">= 1.0.0")}) == 1
