"""Tests for update severity classification and UpdateLevel."""

import pytest

from versioning.errors import InvalidVersion, MissingRequirement
from versioning.evaluator import classify_severity, needs_update
from versioning.models import Constraint, Operator, Requirement, UpdateLevel
from versioning.parser import parse_requirement


class TestUpdateLevel:
    """Test UpdateLevel ordering, display and parsing."""

    def test_ordering(self):
        assert UpdateLevel.NONE < UpdateLevel.PATCH < UpdateLevel.MINOR < UpdateLevel.MAJOR

    def test_str(self):
        assert str(UpdateLevel.NONE) == "<none>"
        assert str(UpdateLevel.PATCH) == "patch"
        assert str(UpdateLevel.MINOR) == "minor"
        assert str(UpdateLevel.MAJOR) == "major"

    @pytest.mark.parametrize("text,level", [("patch", UpdateLevel.PATCH), ("minor", UpdateLevel.MINOR), ("major", UpdateLevel.MAJOR)])
    def test_parse(self, text, level):
        assert UpdateLevel.parse(text) is level

    @pytest.mark.parametrize("text", ["", "none", "Major", "huge"])
    def test_parse_invalid(self, text):
        with pytest.raises(ValueError, match="invalid UpdateLevel"):
            UpdateLevel.parse(text)


class TestClassifySeverity:
    """Test classify_severity()."""

    @pytest.mark.parametrize(
        "latest,level",
        [
            ("v2.0.0", UpdateLevel.MAJOR),
            ("v1.5.0", UpdateLevel.MINOR),
            ("v1.0.1", UpdateLevel.PATCH),
            ("v1.0.0", UpdateLevel.NONE),
        ],
    )
    def test_distance_from_lower_bound(self, latest, level):
        requirement = Requirement((Constraint(Operator.GREATER_EQUAL, "1.0.0"),))
        assert classify_severity(requirement, latest) is level

    def test_empty_requirement(self):
        with pytest.raises(MissingRequirement, match="missing requirement"):
            classify_severity(Requirement(), "v1.0.0")

    def test_only_any_is_none(self):
        assert classify_severity(parse_requirement("*"), "v9.0.0") is UpdateLevel.NONE

    def test_highest_lower_bound_wins(self):
        requirement = parse_requirement(">=1.0.0, >=1.4.0")
        assert classify_severity(requirement, "v1.4.2") is UpdateLevel.PATCH

    def test_upper_bounds_are_ignored_when_a_lower_bound_exists(self):
        requirement = parse_requirement(">=1.21.0, <1.22.0")
        assert classify_severity(requirement, "v1.22.0") is UpdateLevel.MINOR

    def test_upper_bound_only(self):
        """Without a lower bound the upper bound is the reference."""
        requirement = parse_requirement("<2.0.0")
        assert classify_severity(requirement, "v2.0.0") is UpdateLevel.NONE
        assert classify_severity(requirement, "v3.1.0") is UpdateLevel.MAJOR

    def test_wildcard_bound_reads_as_zero(self):
        requirement = parse_requirement("==1.2.*")
        assert classify_severity(requirement, "v1.3.0") is UpdateLevel.MINOR
        assert classify_severity(requirement, "v1.2.4") is UpdateLevel.PATCH

    def test_non_standard_latest(self):
        requirement = parse_requirement("==1.5.5")
        assert classify_severity(requirement, "v1.5.6.1") is UpdateLevel.PATCH

    def test_post_release_latest(self):
        assert classify_severity(parse_requirement(">=2.8.0"), "v2.9.0.post0") is UpdateLevel.MINOR
        assert classify_severity(parse_requirement("==2.9.0"), "v2.9.0.post0") is UpdateLevel.NONE

    def test_unorderable_latest_raises(self):
        with pytest.raises(InvalidVersion):
            classify_severity(parse_requirement(">=1.0.0"), "garbage")


class TestEndToEnd:
    """Parse, decide and classify in sequence."""

    def test_range_scenario(self):
        requirement = parse_requirement(">=1.21.0, <1.22.0")
        assert len(requirement) == 2

        assert not needs_update(requirement, "v1.21.5")
        assert classify_severity(requirement, "v1.21.0") is UpdateLevel.NONE

        assert needs_update(requirement, "v1.22.0")
        assert classify_severity(requirement, "v1.22.0") is UpdateLevel.MINOR

    def test_pinned_version(self):
        requirement = parse_requirement("==2.28.1")
        assert needs_update(requirement, "v2.31.0")
        assert classify_severity(requirement, "v2.31.0") is UpdateLevel.MINOR
