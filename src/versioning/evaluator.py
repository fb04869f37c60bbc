"""Evaluate version requirements against a candidate (latest) version.

Supports the PEP 440 operator family (https://peps.python.org/pep-0440):

- ``===`` arbitrary equality, compared as raw text
- ``~`` / ``!~`` wildcard match / non-match (rewritten from ``==1.*`` / ``!=1.*``)
- ``<=``, ``<``, ``!=``, ``==``, ``>=``, ``>`` ordered comparison
- ``~=`` compatible release: same major, at or above the bound
- ``*`` no constraint at all
"""

from __future__ import annotations

import logging
from typing import Iterable

import semantic_version

from .errors import InvalidVersion, InvalidVersionMatching, MissingRequirement
from .models import Constraint, MatchResult, Operator, Requirement, UpdateLevel
from .normalize import compare, compile_matching, format_version, normalize

logger = logging.getLogger(__name__)

_ORDERING_TESTS = {
    Operator.LESS_EQUAL: lambda c: c <= 0,
    Operator.LESS: lambda c: c < 0,
    Operator.NOT_EQUAL: lambda c: c != 0,
    Operator.EQUAL: lambda c: c == 0,
    Operator.GREATER_EQUAL: lambda c: c >= 0,
    Operator.GREATER: lambda c: c > 0,
}

_UPPER_OPERATORS = frozenset({
    Operator.LESS_EQUAL,
    Operator.LESS,
    Operator.NOT_EQUAL,
    Operator.WILDCARD_NOT_MATCH,
})


def _result(flag: bool) -> MatchResult:
    return MatchResult.MATCHED if flag else MatchResult.NOT_MATCHED


def _match_pattern(latest: str, constraint: Constraint) -> MatchResult:
    try:
        pattern = compile_matching(constraint.version)
    except InvalidVersionMatching:
        return MatchResult.INVALID

    try:
        subject = format_version(normalize(latest))
    except InvalidVersion:
        subject = latest

    found = pattern.match(subject) is not None
    if constraint.operator is Operator.WILDCARD_MATCH:
        return _result(found)
    return _result(not found)


def evaluate(latest: str, constraint: Constraint) -> MatchResult:
    """Evaluate one constraint against a candidate version.

    Never raises: a constraint that cannot be evaluated (uncompilable pattern,
    version that cannot be ordered) yields ``MatchResult.INVALID`` so callers
    can tell it apart from a plain mismatch.
    """
    op = constraint.operator

    if op is Operator.ANY:
        return MatchResult.MATCHED

    if op is Operator.ARBITRARY_EQUAL:
        return _result(constraint.version == latest)

    if op in (Operator.WILDCARD_MATCH, Operator.WILDCARD_NOT_MATCH):
        return _match_pattern(latest, constraint)

    try:
        candidate = normalize(latest)
        bound = normalize(constraint.version)
    except InvalidVersion:
        return MatchResult.INVALID

    c = compare(candidate, bound)

    if op is Operator.COMPATIBLE_RELEASE:
        # See https://peps.python.org/pep-0440/#compatible-release
        return _result(candidate.major == bound.major and c >= 0)

    test = _ORDERING_TESTS.get(op)
    if test is None:
        return MatchResult.NOT_MATCHED
    return _result(test(c))


def matches(latest: str, constraint: Constraint) -> bool:
    """Return True only when the constraint is positively satisfied."""
    return evaluate(latest, constraint) is MatchResult.MATCHED


def needs_update(requirement: Iterable[Constraint], latest: str) -> bool:
    """Decide whether the latest version falls outside the requirement.

    A requirement holding the ``*`` placeholder anywhere is intentionally
    unconstrained and never needs updating, whatever its other constraints.
    """
    requirement = Requirement(tuple(requirement))

    if requirement.is_unconstrained:
        return False

    for constraint in requirement:
        result = evaluate(latest, constraint)
        if result is MatchResult.INVALID:
            logger.warning("Invalid version matching: %s against %s", constraint, latest)
        if result is not MatchResult.MATCHED:
            return True

    return False


def _highest_bound(constraints: Iterable[Constraint]) -> semantic_version.Version:
    highest = semantic_version.Version(major=0, minor=0, patch=0)
    for constraint in constraints:
        bound = normalize(constraint.version)
        if compare(highest, bound) < 0:
            highest = bound
    return highest


def classify_severity(requirement: Iterable[Constraint], latest: str) -> UpdateLevel:
    """Classify how far ``latest`` is from the tightest lower bound of the requirement.

    The highest lower bound (``>=``, ``>``, ``~=``, ``==``, ``===`` and
    wildcard matches) is used; a requirement made only of upper bounds or
    exclusions (``<``, ``<=``, ``!=``, ``!~``) falls back to the highest of
    those. Wildcard segments are read as ``0``.

    Raises:
        MissingRequirement: If the requirement has no constraints.
        InvalidVersion: If a bound or ``latest`` cannot be ordered.
    """
    constraints = tuple(requirement)
    if not constraints:
        raise MissingRequirement()

    bounded = [c for c in constraints if c.operator is not Operator.ANY]
    lower = [c for c in bounded if c.operator not in _UPPER_OPERATORS]

    floor = semantic_version.Version(major=0, minor=0, patch=0)
    highest = _highest_bound(lower or bounded)

    if compare(highest, floor) == 0:
        return UpdateLevel.NONE

    candidate = normalize(latest)

    if candidate.major != highest.major:
        return UpdateLevel.MAJOR
    if candidate.minor != highest.minor:
        return UpdateLevel.MINOR
    if compare(candidate, highest) != 0:
        return UpdateLevel.PATCH
    return UpdateLevel.NONE


def are_compatible(a: Iterable[Constraint], b: Iterable[Constraint]) -> bool:
    """Check whether two requirements can plausibly hold together.

    This is a pairwise approximation, not an interval intersection: each
    bound is tested as a candidate against every constraint on the other
    side. Compound ranges split over several constraints can fool it.
    """
    right = tuple(b)

    for ac in a:
        if ac.operator is Operator.ANY:
            continue

        for bc in right:
            if bc.operator is Operator.ANY:
                continue

            if bc.operator is Operator.EQUAL and matches(bc.version, ac):
                continue

            if ac.operator is Operator.EQUAL and matches(ac.version, bc):
                continue

            if not matches(bc.version, ac) or not matches(ac.version, bc):
                return False

    return True
