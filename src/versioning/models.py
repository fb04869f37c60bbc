"""Data models for version requirements and update classification."""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterator, Tuple


class Operator(str, Enum):
    """Closed set of constraint operators."""
    ARBITRARY_EQUAL = "==="
    WILDCARD_MATCH = "~"
    WILDCARD_NOT_MATCH = "!~"
    LESS_EQUAL = "<="
    LESS = "<"
    NOT_EQUAL = "!="
    COMPATIBLE_RELEASE = "~="
    EQUAL = "=="
    GREATER_EQUAL = ">="
    GREATER = ">"
    ANY = "*"


class UpdateLevel(IntEnum):
    """Severity of an available update, also used as a reporting threshold."""
    NONE = 0
    PATCH = 1
    MINOR = 2
    MAJOR = 3

    def __str__(self) -> str:
        if self is UpdateLevel.NONE:
            return "<none>"
        return self.name.lower()

    @classmethod
    def parse(cls, text: str) -> "UpdateLevel":
        """Parse a configured level name ("patch", "minor" or "major")."""
        for level in (cls.PATCH, cls.MINOR, cls.MAJOR):
            if text == str(level):
                return level
        raise ValueError(f"invalid UpdateLevel: {text}")


class DependencyKind(Enum):
    """Section a dependency was declared in."""
    DEV = "dev"
    RUNTIME = "runtime"

    def __str__(self) -> str:
        return self.value


class MatchResult(Enum):
    """Outcome of evaluating one constraint against one version."""
    MATCHED = "matched"
    NOT_MATCHED = "not_matched"
    INVALID = "invalid"


@dataclass(frozen=True)
class Constraint:
    """A single (operator, version token) pair."""
    operator: Operator
    version: str

    def __str__(self) -> str:
        if self.operator is Operator.ANY:
            return Operator.ANY.value
        return f"{self.operator.value}{self.version}"


@dataclass(frozen=True)
class Requirement:
    """Ordered constraints that must all hold."""
    constraints: Tuple[Constraint, ...] = ()

    def __iter__(self) -> Iterator[Constraint]:
        return iter(self.constraints)

    def __len__(self) -> int:
        return len(self.constraints)

    def __str__(self) -> str:
        return ", ".join(str(c) for c in self.constraints)

    @property
    def is_unconstrained(self) -> bool:
        """True when the ANY placeholder appears anywhere in the requirement."""
        return any(c.operator is Operator.ANY for c in self.constraints)
