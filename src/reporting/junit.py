"""JUnit XML reporter, so CI servers can display outdated packages as failed tests."""

from __future__ import annotations

import time
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, TextIO

from constants import Constants
from versioning.models import DependencyKind

from .base import PackageUpdate, UpdateReporter

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


@dataclass
class _TestCase:
    name: str
    time: float
    timestamp: str
    failure: Optional[str] = None
    skipped: Optional[str] = None
    skipped_text: str = ""


@dataclass
class _TestSuite:
    name: str
    started: float = field(default_factory=time.monotonic)
    timestamp: str = field(default_factory=lambda: datetime.now().strftime(TIMESTAMP_FORMAT))
    cases: List[_TestCase] = field(default_factory=list)

    @property
    def failures(self) -> int:
        return sum(1 for c in self.cases if c.failure is not None)

    @property
    def skipped(self) -> int:
        return sum(1 for c in self.cases if c.skipped is not None)

    def to_element(self) -> ET.Element:
        suite = ET.Element(
            "testsuite",
            name=self.name,
            timestamp=self.timestamp,
            tests=str(len(self.cases)),
            failures=str(self.failures),
            errors="0",
            skipped=str(self.skipped),
            time=f"{time.monotonic() - self.started:.6f}",
        )
        for case in self.cases:
            element = ET.SubElement(
                suite, "testcase", name=case.name, time=f"{case.time:.6f}", timestamp=case.timestamp
            )
            if case.failure is not None:
                failure = ET.SubElement(element, "failure", message=case.failure, type="error")
                failure.text = case.failure
            if case.skipped is not None:
                skipped = ET.SubElement(element, "skipped", message=case.skipped)
                skipped.text = case.skipped_text
        return suite


class JUnitReporter(UpdateReporter):
    """Collects updates into ``dev`` and ``run`` test suites and writes them on ``after``.

    A fatal update becomes a failed test case, an excluded package a skipped one.
    """

    def __init__(self, version: str = Constants.VERSION):
        self.version = version
        self._started = time.monotonic()
        self.dev_suite = _TestSuite("dev")
        self.run_suite = _TestSuite("run")

    def before(self, out: TextIO) -> None:
        self._started = time.monotonic()
        self.dev_suite = _TestSuite("dev")
        self.run_suite = _TestSuite("run")

    def report(self, update: PackageUpdate, out: TextIO) -> None:
        suite = self.dev_suite if update.kind is DependencyKind.DEV else self.run_suite

        case = _TestCase(
            name=f"{update.package} {update.level}",
            time=update.elapsed,
            timestamp=datetime.now().strftime(TIMESTAMP_FORMAT),
        )

        if update.excluded:
            case.skipped = f"package '{update.package}' is excluded"
            case.skipped_text = (
                f"Package '{update.package}' is excluded by configuration: "
                f"[{', '.join(update.excluded_packages)}]"
            )
        elif update.fatal:
            case.failure = (
                f"{update.package} {update.level} is outdated. "
                f"Latest version is {update.latest_version}"
            )

        suite.cases.append(case)

    def after(self, out: TextIO) -> None:
        suites = (self.dev_suite, self.run_suite)
        root = ET.Element(
            "testsuites",
            name=f"{Constants.PROG} v{self.version}",
            tests=str(sum(len(s.cases) for s in suites)),
            failures=str(sum(s.failures for s in suites)),
            errors="0",
            skipped=str(sum(s.skipped for s in suites)),
            time=f"{time.monotonic() - self._started:.6f}",
        )
        for suite in suites:
            root.append(suite.to_element())

        ET.indent(root, space="  ")
        out.write('<?xml version="1.0" encoding="UTF-8"?>\n')
        out.write(ET.tostring(root, encoding="unicode"))
        out.write("\n")
