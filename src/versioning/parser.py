"""Specifier parsing utilities for version requirements."""

from typing import Optional, Tuple

from .errors import InvalidVersion, InvalidVersionMatching, MissingVersion
from .models import Constraint, Operator, Requirement
from .normalize import WILDCARD, is_valid_version, is_wildcard, with_marker

# Operators that may appear in specifier text, longest first so that "==="
# wins over "==" and "<=" over "<".
_TEXT_OPERATORS = sorted(
    (
        op for op in Operator
        if op not in (Operator.ANY, Operator.WILDCARD_MATCH, Operator.WILDCARD_NOT_MATCH)
    ),
    key=lambda op: -len(op.value),
)

_WILDCARD_REWRITES = {
    Operator.EQUAL: Operator.WILDCARD_MATCH,
    Operator.NOT_EQUAL: Operator.WILDCARD_NOT_MATCH,
}


def _split_operator(spec: str) -> Tuple[Optional[Operator], str]:
    """Return (operator or None, remaining operand text)."""
    for op in _TEXT_OPERATORS:
        if spec.startswith(op.value):
            return op, spec[len(op.value):].strip()
    return None, spec


def parse_constraint(spec: str) -> Constraint:
    """Parse one constraint expression such as ``>=1.2.0`` or ``==1.*``.

    A bare version is read as an implicit ``==``.

    Raises:
        MissingVersion: Operator without an operand.
        InvalidVersion: Operand is not a version.
        InvalidVersionMatching: Wildcard operand on an operator other than ``==``/``!=``.
    """
    spec = spec.strip()
    if spec == WILDCARD:
        return Constraint(Operator.ANY, WILDCARD)

    operator, operand = _split_operator(spec)
    if operator is None:
        if not operand:
            raise InvalidVersion(spec)
        operator = Operator.EQUAL
    elif not operand:
        raise MissingVersion(spec)

    version = with_marker(operand)

    if is_wildcard(version):
        if not is_valid_version(version.replace(WILDCARD, "0")):
            raise InvalidVersion(spec)
        rewritten = _WILDCARD_REWRITES.get(operator)
        if rewritten is None:
            raise InvalidVersionMatching(spec)
        return Constraint(rewritten, version)

    if not is_valid_version(version):
        raise InvalidVersion(operand)

    return Constraint(operator, version)


def parse_requirement(spec: str) -> Requirement:
    """Parse a comma-separated specifier into a Requirement.

    The first failing piece aborts parsing; no partial requirement is returned.

    Args:
        spec: Specifier text, e.g. ``">=1.21.0, <1.22.0"`` or ``"*"``.

    Returns:
        Requirement with constraints in declaration order.
    """
    return Requirement(tuple(parse_constraint(piece) for piece in spec.split(",")))
