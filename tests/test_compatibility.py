"""Tests for the pairwise requirement compatibility check."""

from versioning.evaluator import are_compatible
from versioning.models import Constraint, Operator, Requirement
from versioning.parser import parse_requirement


def req(*constraints):
    return Requirement(tuple(Constraint(op, v) for op, v in constraints))


class TestAreCompatible:
    """Test are_compatible()."""

    def test_minor_line_excludes_lower_bound(self):
        assert not are_compatible(
            req((Operator.GREATER_EQUAL, "1.0.0")),
            req((Operator.COMPATIBLE_RELEASE, "1.3.0")),
        )

    def test_cross_check_is_symmetric(self):
        """A ~= bound above the other lower bound fails the reverse check."""
        assert not are_compatible(
            req((Operator.GREATER_EQUAL, "1.0.0")),
            req((Operator.COMPATIBLE_RELEASE, "1.2.0")),
        )

    def test_equal_lower_bounds(self):
        assert are_compatible(
            req((Operator.GREATER_EQUAL, "1.0.0")),
            req((Operator.GREATER_EQUAL, "1.0.0")),
        )

    def test_pinned_python_in_range(self):
        """An == side only has to satisfy the other side."""
        assert are_compatible(parse_requirement("==3.8"), parse_requirement(">=3.6"))
        assert are_compatible(parse_requirement(">=3.6"), parse_requirement("==3.8"))

    def test_pinned_python_out_of_range(self):
        assert not are_compatible(parse_requirement("==3.6"), parse_requirement(">=3.8"))
        assert not are_compatible(parse_requirement(">=3.8"), parse_requirement("==3.6"))

    def test_any_is_skipped(self):
        assert are_compatible(parse_requirement("*"), parse_requirement(">=3.9"))
        assert are_compatible(parse_requirement("==3.6"), parse_requirement("*"))

    def test_empty_requirements(self):
        assert are_compatible(Requirement(), parse_requirement(">=3.9"))
        assert are_compatible(parse_requirement(">=3.9"), Requirement())

    def test_pairwise_approximation_of_disjoint_ranges(self):
        """Compound ranges are checked pair by pair, not as intervals."""
        assert not are_compatible(parse_requirement(">1.0, <1.1"), parse_requirement(">2.0"))
        assert not are_compatible(parse_requirement(">=1.0, <3.0"), parse_requirement(">=2.0"))
