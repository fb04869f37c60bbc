"""Tests for specifier parsing."""

import pytest

from versioning.errors import InvalidVersion, InvalidVersionMatching, MissingVersion
from versioning.models import Constraint, Operator, Requirement
from versioning.parser import parse_constraint, parse_requirement


class TestParseConstraint:
    """Test parse_constraint()."""

    @pytest.mark.parametrize(
        "spec,operator",
        [
            ("==1.2.3", Operator.EQUAL),
            ("!=1.2.3", Operator.NOT_EQUAL),
            ("<1.2.3", Operator.LESS),
            ("<=1.2.3", Operator.LESS_EQUAL),
            (">1.2.3", Operator.GREATER),
            (">=1.2.3", Operator.GREATER_EQUAL),
            ("~=1.2.3", Operator.COMPATIBLE_RELEASE),
            ("===1.2.3", Operator.ARBITRARY_EQUAL),
        ],
    )
    def test_operators(self, spec, operator):
        """Each operator is recognised and the operand gets the v marker."""
        assert parse_constraint(spec) == Constraint(operator, "v1.2.3")

    def test_any_placeholder(self):
        assert parse_constraint("*") == Constraint(Operator.ANY, "*")
        assert parse_constraint("  *  ") == Constraint(Operator.ANY, "*")

    def test_bare_version_is_implicit_equal(self):
        assert parse_constraint("1.2.3") == Constraint(Operator.EQUAL, "v1.2.3")

    def test_whitespace_after_operator(self):
        assert parse_constraint(">= 1.2.3") == Constraint(Operator.GREATER_EQUAL, "v1.2.3")

    def test_non_standard_operand_is_kept_verbatim(self):
        assert parse_constraint("==1.5.5.1") == Constraint(Operator.EQUAL, "v1.5.5.1")

    def test_wildcard_equal_is_rewritten(self):
        """==1.* becomes a wildcard match."""
        assert parse_constraint("==1.*") == Constraint(Operator.WILDCARD_MATCH, "v1.*")

    def test_wildcard_not_equal_is_rewritten(self):
        assert parse_constraint("!=1.2.*") == Constraint(Operator.WILDCARD_NOT_MATCH, "v1.2.*")

    def test_bare_wildcard_is_rewritten(self):
        assert parse_constraint("1.2.*") == Constraint(Operator.WILDCARD_MATCH, "v1.2.*")

    def test_wildcard_with_bad_prefix_is_invalid(self):
        with pytest.raises(InvalidVersion):
            parse_constraint("==a.b.*")

    @pytest.mark.parametrize("spec", [">=1.2.*", "<1.*", "~=1.2.*", "===1.*"])
    def test_wildcard_on_ordering_operator_fails(self, spec):
        with pytest.raises(InvalidVersionMatching):
            parse_constraint(spec)

    @pytest.mark.parametrize("spec", ["==", ">=", "~=", "===", "<  "])
    def test_missing_version(self, spec):
        with pytest.raises(MissingVersion):
            parse_constraint(spec)

    @pytest.mark.parametrize("spec", ["==abc", ">=1.2.3.4-rc1", "latest", "==a.*"])
    def test_invalid_version(self, spec):
        with pytest.raises(InvalidVersion):
            parse_constraint(spec)

    def test_empty_piece_is_invalid(self):
        with pytest.raises(InvalidVersion):
            parse_constraint("   ")


class TestParseRequirement:
    """Test parse_requirement()."""

    def test_range(self):
        """A comma-separated range keeps its declaration order."""
        requirement = parse_requirement(">=1.21.0, <1.22.0")
        assert requirement == Requirement((
            Constraint(Operator.GREATER_EQUAL, "v1.21.0"),
            Constraint(Operator.LESS, "v1.22.0"),
        ))
        assert len(requirement) == 2

    def test_any(self):
        requirement = parse_requirement("*")
        assert list(requirement) == [Constraint(Operator.ANY, "*")]
        assert requirement.is_unconstrained

    def test_first_failure_aborts(self):
        """No partial requirement is returned."""
        with pytest.raises(MissingVersion):
            parse_requirement(">=1.0.0, <")

    def test_trailing_comma_fails(self):
        with pytest.raises(InvalidVersion):
            parse_requirement(">=1.0.0,")

    def test_str(self):
        assert str(parse_requirement(">=1.0, !=1.3.*")) == ">=v1.0, !~v1.3.*"
        assert str(parse_requirement("*")) == "*"
