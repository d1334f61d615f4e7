"""Version constraints and constraint sets.

Supported expressions:
- exact versions, with or without ``=`` (e.g., "1.2.3", "= 1.2.3")
- exclusions (e.g., "!= 1.2.3")
- ordering comparators (e.g., ">= 1.0", "< 2.0")
- pessimistic ranges ~> x.y.z → >=x.y.z,<x.y+1.0 and ~> x.y → >=x.y,<x+1.0
- comma separated sets that must all hold, e.g., ">= 1.0, < 2.0"
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass, field
from collections.abc import Iterable, Iterator

from ..errors import MalformedConstraint, MalformedVersion
from .version import Version, parse_version

logger = logging.getLogger(__name__)


class Operator(str, enum.Enum):
    """Constraint operators, declared in structural sort order."""

    EQUAL = "="
    NOT_EQUAL = "!="
    GREATER_THAN = ">"
    LESS_THAN = "<"
    GREATER_OR_EQUAL = ">="
    LESS_OR_EQUAL = "<="
    PESSIMISTIC = "~>"

    @property
    def rank(self) -> int:
        return _OPERATOR_RANK[self]


_OPERATOR_RANK = {op: index for index, op in enumerate(Operator)}
_GREATER = {Operator.GREATER_THAN, Operator.GREATER_OR_EQUAL}
_LESS = {Operator.LESS_THAN, Operator.LESS_OR_EQUAL}

CONSTRAINT_PATTERN = re.compile(r"\s*(?P<operator>~>|!=|>=|<=|=|>|<)?\s*(?P<version>.*?)\s*")


def _prerelease_allowed(version: Version, reference: Version) -> bool:
    """Whether a pre-release ``version`` may be matched against ``reference`` at all.

    A release version is always eligible. A pre-release is eligible only when
    the reference is itself a pre-release on the same release line. The line
    check ignores trailing zero segments, as the comparator does, so
    ``1.0-rc.1`` and ``1.0.0.0-rc.0`` share a line even though their segment
    lists differ.
    """
    if version.is_prerelease and reference.is_prerelease:
        # A pre-release reference only opens up its own release line.
        return version.release_equal(reference)
    if version.is_prerelease:
        return False
    return True


@dataclass(frozen=True, slots=True)
class Constraint:
    """A single operator applied to a reference version."""

    operator: Operator
    version: Version
    original: str = field(default="", compare=False, repr=False)

    def __str__(self) -> str:
        return self.original or f"{self.operator.value} {self.version}"

    @property
    def prerelease(self) -> bool:
        """True when the reference version carries a pre-release."""
        return self.version.is_prerelease

    def check(self, version: Version) -> bool:
        """Return True when ``version`` satisfies this constraint."""
        op = self.operator
        reference = self.version

        if op is Operator.EQUAL:
            return version == reference
        if op is Operator.NOT_EQUAL:
            return version != reference
        if op is Operator.PESSIMISTIC:
            return self._check_pessimistic(version)

        if not _prerelease_allowed(version, reference):
            return False
        if op is Operator.GREATER_THAN:
            return version > reference
        if op is Operator.LESS_THAN:
            return version < reference
        if op is Operator.GREATER_OR_EQUAL:
            return version >= reference
        if op is Operator.LESS_OR_EQUAL:
            return version <= reference

        raise AssertionError(f"unhandled operator {op!r}")

    def _check_pessimistic(self, version: Version) -> bool:
        reference = self.version
        if not _prerelease_allowed(version, reference):
            return False
        if reference.is_prerelease and not version.is_prerelease:
            return False
        if version < reference:
            return False
        if len(version.segments) < len(reference.segments):
            return False

        # Everything before the last written segment is pinned; that segment
        # acts as the floor.
        last = reference.specified - 1
        if version.segments[:last] != reference.segments[:last]:
            return False
        return version.segments[last] >= reference.segments[last]

    def sort_key(self) -> tuple[int, Version]:
        return self.operator.rank, self.version


def _logically_compatible(c1: Constraint, c2: Constraint) -> bool:
    op1, op2 = c1.operator, c2.operator

    if op1 is Operator.EQUAL:
        return op2 is Operator.EQUAL and c1.version == c2.version

    if op1 is Operator.NOT_EQUAL:
        return op2 is Operator.NOT_EQUAL and c1.version == c2.version

    if op1 is Operator.PESSIMISTIC:
        if op2 is Operator.EQUAL:
            return c1.check(c2.version)
        if op2 is Operator.PESSIMISTIC:
            seg1 = c1.version.segments
            seg2 = c2.version.segments
            return seg1[0] == seg2[0] and seg1[1] == seg2[1] and seg2[2] >= seg1[2]
        return False

    # op1 is an ordering operator from here on.
    if op2 is Operator.EQUAL:
        return c1.check(c2.version)
    if op1 in _GREATER and op2 in _GREATER:
        return c1.version <= c2.version
    if op1 in _LESS and op2 in _LESS:
        return c1.version >= c2.version
    return False


@dataclass(frozen=True, slots=True, eq=False)
class ConstraintSet:
    """Constraints combined with logical AND, kept in the order written."""

    constraints: tuple[Constraint, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "constraints", tuple(self.constraints))

    def __len__(self) -> int:
        return len(self.constraints)

    def __iter__(self) -> Iterator[Constraint]:
        return iter(self.constraints)

    def __getitem__(self, index: int) -> Constraint:
        return self.constraints[index]

    def __str__(self) -> str:
        return ",".join(str(constraint) for constraint in self.constraints)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConstraintSet):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(tuple(self.normalized()))

    def normalized(self) -> list[Constraint]:
        """Return the constraints ordered by operator, then reference version."""
        return sorted(self.constraints, key=Constraint.sort_key)

    def check(self, version: Version) -> bool:
        """Return True when ``version`` satisfies every constraint."""
        return all(constraint.check(version) for constraint in self.constraints)

    def equals(self, other: ConstraintSet) -> bool:
        """Structural equality, ignoring the order the constraints were written in.

        ``>0.1,>0.2`` and ``>0.2`` accept the same versions but are *not*
        equal here; see :meth:`equals_logical`.
        """
        if len(self) != len(other):
            return False
        return all(
            left.operator is right.operator and left.version == right.version
            for left, right in zip(self.normalized(), other.normalized())
        )

    def equals_logical(self, other: ConstraintSet) -> bool:
        """Approximate logical equivalence, e.g. ``>0.1,>0.2`` against ``>0.2``.

        Every constraint here is paired with every constraint in ``other`` and
        each pair must be compatible:

        - ``=`` only pairs with an ``=`` on the same version
        - ``~>`` pairs with an ``=`` it accepts, or with a ``~>`` sharing
          major and minor whose patch floor is not lower
        - ordering operators pair with an ``=`` they accept, or with a
          same-direction operator whose reference is not looser than theirs
        - ``!=`` only pairs with an identical ``!=``

        This is a pairwise heuristic rather than an interval solver, and it is
        directional: ``a.equals_logical(b)`` need not match
        ``b.equals_logical(a)``.
        """
        for c1 in self.constraints:
            for c2 in other.constraints:
                if not _logically_compatible(c1, c2):
                    return False
        return True

    @classmethod
    def from_iterable(cls, constraints: Iterable[Constraint]) -> ConstraintSet:
        return cls(constraints=tuple(constraints))


def parse_constraint(text: str) -> Constraint:
    """Parse a single constraint such as ``">= 1.2"`` or ``"~> 1.2.3"``.

    Raises:
        MalformedConstraint: If the operator is unknown or the version literal
            is malformed.
    """
    if not isinstance(text, str):
        raise TypeError(f"constraint must be a string, not {type(text).__name__}")

    match = CONSTRAINT_PATTERN.fullmatch(text)
    if match is None:
        logger.debug("Rejected constraint %r", text)
        raise MalformedConstraint(f"malformed constraint: {text}")

    try:
        version = parse_version(match.group("version"))
    except MalformedVersion as exc:
        logger.debug("Rejected constraint %r: %s", text, exc)
        raise MalformedConstraint(f"malformed constraint: {text}") from exc

    operator = Operator(match.group("operator") or "=")
    return Constraint(operator=operator, version=version, original=text)


def parse_constraints(text: str) -> ConstraintSet:
    """Parse a comma separated list of constraints.

    Each element is parsed in order and the first malformed element aborts
    the whole parse.
    """
    if not isinstance(text, str):
        raise TypeError(f"constraints must be a string, not {type(text).__name__}")
    return ConstraintSet.from_iterable(parse_constraint(part) for part in text.split(","))
