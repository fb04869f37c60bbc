"""Run a checker over declared dependencies and feed the results to a reporter."""

from __future__ import annotations

import logging
from typing import Mapping, Sequence, TextIO

from common.logging_utils import extra_context, is_debug_enabled, Timer
from reporting.base import PackageUpdate, UpdateReporter
from versioning.models import DependencyKind, Requirement, UpdateLevel

from .checkers import Checker

logger = logging.getLogger(__name__)


def report_updates(
    dependencies: Mapping[str, Requirement],
    kind: DependencyKind,
    min_level: UpdateLevel,
    excluded_packages: Sequence[str],
    checker: Checker,
    reporter: UpdateReporter,
    out: TextIO,
) -> bool:
    """Check every dependency and report the ones with an update.

    Args:
        dependencies: Package name to declared requirement, in manifest order.
        kind: Whether these are runtime or dev dependencies.
        min_level: Smallest update level that counts as required.
        excluded_packages: Packages reported but never counted as required.
        checker: Registry checker.
        reporter: Receives every detected update.
        out: Reporter output stream.

    Returns:
        True if at least one non-excluded package needs an update of at least ``min_level``.

    Raises:
        RegistryError: If a registry lookup fails.
        VersionError: If a version cannot be interpreted.
    """
    excluded = tuple(excluded_packages)
    update_required = False

    for package, requirement in dependencies.items():
        with Timer() as timer:
            result = checker.required_update(package, requirement)

        if is_debug_enabled(logger):
            logger.debug(
                "Checked %s",
                package,
                extra=extra_context(
                    event="check",
                    component="updates",
                    package=package,
                    kind=str(kind),
                    level=str(result.level),
                    duration_ms=timer.duration_ms(),
                ),
            )

        if result.level == UpdateLevel.NONE:
            logger.debug("%s: no update needed for %s", package, requirement)
            continue

        fatal = result.level >= min_level
        if fatal and package not in excluded:
            update_required = True

        reporter.report(
            PackageUpdate(
                package=package,
                requirement=requirement,
                latest_version=result.latest_version,
                level=result.level,
                kind=kind,
                home_url=result.home_url,
                fatal=fatal,
                excluded_packages=excluded,
                elapsed=timer.duration(),
            ),
            out,
        )

    return update_required
