"""Reporter interface and the plain text table reporter."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TextIO, Tuple

from constants import Constants
from versioning.models import DependencyKind, Requirement, UpdateLevel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackageUpdate:
    """An update detected for one declared dependency."""
    package: str
    requirement: Requirement
    latest_version: str
    level: UpdateLevel
    kind: DependencyKind
    home_url: str
    fatal: bool
    excluded_packages: Tuple[str, ...] = ()
    elapsed: float = 0.0

    @property
    def excluded(self) -> bool:
        return self.package in self.excluded_packages


class UpdateReporter(ABC):
    """Renders detected updates to an output stream."""

    def before(self, out: TextIO) -> None:
        """Called once before any report."""

    @abstractmethod
    def report(self, update: PackageUpdate, out: TextIO) -> None:
        """Report an update for a package."""

    def after(self, out: TextIO) -> None:
        """Called once after the last report."""


class TextReporter(UpdateReporter):
    """Formats each update with a ``str.format`` pattern.

    Pattern fields: 0 package, 1 wanted, 2 latest, 3 level, 4 kind,
    5 elapsed seconds, 6 home URL.
    """

    def __init__(self, message_before: str = "", pattern: str = "", message_after: str = ""):
        self.message_before = message_before
        self.pattern = pattern
        self.message_after = message_after

    def before(self, out: TextIO) -> None:
        out.write(self.message_before)

    def report(self, update: PackageUpdate, out: TextIO) -> None:
        if update.excluded:
            logger.debug("skipping package %s", update.package)
            return

        out.write(
            self.pattern.format(
                update.package,
                str(update.requirement),
                update.latest_version,
                str(update.level),
                str(update.kind),
                update.elapsed,
                update.home_url,
            )
        )

    def after(self, out: TextIO) -> None:
        out.write(self.message_after)


def monochrome_table_reporter(version: str = Constants.VERSION) -> TextReporter:
    """TextReporter laid out as a fixed-width table without colours."""
    return TextReporter(
        message_before=(
            f"-- {Constants.PROG} v{version} --\n"
            "Package         Wanted          Latest      Package type  Details\n"
        ),
        pattern="{0:<14.14}\t{1:<12.12}\t{2:<12.12}{4:<12.12}  {3} for {0}; {6}\n",
    )
