"""Version requirement parsing, evaluation and update classification."""

from .errors import (
    InvalidVersion,
    InvalidVersionMatching,
    MissingRequirement,
    MissingVersion,
    VersionError,
)
from .evaluator import are_compatible, classify_severity, evaluate, matches, needs_update
from .models import (
    Constraint,
    DependencyKind,
    MatchResult,
    Operator,
    Requirement,
    UpdateLevel,
)
from .normalize import format_version, is_valid_version, normalize
from .parser import parse_constraint, parse_requirement

__all__ = [
    "Constraint",
    "DependencyKind",
    "MatchResult",
    "Operator",
    "Requirement",
    "UpdateLevel",
    "VersionError",
    "InvalidVersion",
    "InvalidVersionMatching",
    "MissingRequirement",
    "MissingVersion",
    "normalize",
    "format_version",
    "is_valid_version",
    "parse_constraint",
    "parse_requirement",
    "evaluate",
    "matches",
    "needs_update",
    "classify_severity",
    "are_compatible",
]
