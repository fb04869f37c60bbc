"""Registry-backed update checkers.

A checker looks a package up in a registry and turns the published latest
version into an update decision for the declared requirement.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence

from cli_config import Config
from registry import ProjectInfo
from registry.gitlab.client import GitLabRegistryClient, GitlabRegistryConfig
from registry.pypi.client import get_project_info
from versioning.errors import VersionError
from versioning.evaluator import are_compatible, classify_severity, needs_update
from versioning.models import Requirement, UpdateLevel
from versioning.parser import parse_requirement

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateCheck:
    """Result of checking one package: latest version, severity and home page."""
    latest_version: str = ""
    level: UpdateLevel = UpdateLevel.NONE
    home_url: str = ""


NOT_FOUND = UpdateCheck()


def _check(info: ProjectInfo, requirement: Requirement) -> UpdateCheck:
    if not needs_update(requirement, info.version):
        return UpdateCheck(info.version, UpdateLevel.NONE, info.home_url)
    level = classify_severity(requirement, info.version)
    return UpdateCheck(info.version, level, info.home_url)


class Checker(ABC):
    """Decides whether a declared requirement lags behind a registry."""

    @abstractmethod
    def required_update(self, package: str, requirement: Requirement) -> UpdateCheck:
        """Check one package.

        Returns:
            UpdateCheck; ``NOT_FOUND`` when the registry does not know the package.

        Raises:
            RegistryError: If the registry lookup fails.
            VersionError: If a version cannot be interpreted.
        """


class PypiChecker(Checker):
    """Checks packages against PyPI, honouring the project's Python requirement."""

    def __init__(self, python_requirement: Optional[Requirement] = None):
        self.python_requirement = python_requirement or Requirement()

    def required_update(self, package: str, requirement: Requirement) -> UpdateCheck:
        info = get_project_info(package)
        if info is None:
            return NOT_FOUND

        if info.requires_python and len(self.python_requirement) > 0:
            try:
                package_python = parse_requirement(info.requires_python)
            except VersionError as e:
                logger.warning("Ignoring requires_python of %s (%s): %s", package, info.requires_python, e)
                package_python = Requirement()
            if not are_compatible(self.python_requirement, package_python):
                # The latest release cannot run on the project's Python
                logger.debug(
                    "%s %s requires Python %s, project requires %s",
                    package, info.version, package_python, self.python_requirement,
                )
                return UpdateCheck(info.version, UpdateLevel.NONE, info.home_url)

        return _check(info, requirement)


class GitlabChecker(Checker):
    """Checks packages against a GitLab project package registry."""

    def __init__(self, config: GitlabRegistryConfig):
        self.client = GitLabRegistryClient(config)

    def required_update(self, package: str, requirement: Requirement) -> UpdateCheck:
        info = self.client.get_project_info(package)
        if info is None:
            return NOT_FOUND
        return _check(info, requirement)


class CompositeChecker(Checker):
    """Asks each checker in turn; the first one reporting an update wins."""

    def __init__(self, checkers: Sequence[Checker]):
        self.checkers: List[Checker] = list(checkers)

    def required_update(self, package: str, requirement: Requirement) -> UpdateCheck:
        for checker in self.checkers:
            result = checker.required_update(package, requirement)
            if result.level > UpdateLevel.NONE:
                return result
        return NOT_FOUND


def create_composite_checker(
    config: Optional[Config],
    python_requirement: Optional[Requirement] = None,
) -> CompositeChecker:
    """Build the checker chain: PyPI first, then the GitLab registry when configured."""
    checkers: List[Checker] = [PypiChecker(python_requirement)]
    if config is not None and config.gitlab is not None:
        checkers.append(GitlabChecker(config.gitlab))
    return CompositeChecker(checkers)
