"""Errors raised while parsing and classifying version requirements."""


class VersionError(ValueError):
    """Base class for version requirement errors."""


class InvalidVersion(VersionError):
    """A version token cannot be parsed as an ordered version."""

    def __init__(self, token: str):
        super().__init__(f"invalid version: {token}")
        self.token = token


class MissingVersion(VersionError):
    """An operator is not followed by a version."""

    def __init__(self, spec: str):
        super().__init__(f"missing version: {spec}")
        self.spec = spec


class InvalidVersionMatching(VersionError):
    """A wildcard operand is paired with an operator that cannot carry it."""

    def __init__(self, spec: str):
        super().__init__(f"invalid version matching: {spec}")
        self.spec = spec


class MissingRequirement(VersionError):
    """Severity was requested for a requirement with no constraints."""

    def __init__(self):
        super().__init__("missing requirement")
