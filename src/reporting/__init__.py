"""Update reporters and the factory selecting them by name."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import TextIO

from constants import Constants, Reporters

from .base import PackageUpdate, TextReporter, UpdateReporter, monochrome_table_reporter
from .color import ColorizedTableReporter
from .junit import JUnitReporter

__all__ = [
    "ColorizedTableReporter",
    "JUnitReporter",
    "PackageUpdate",
    "Reporting",
    "TextReporter",
    "UpdateReporter",
    "create_reporter",
    "monochrome_table_reporter",
]


@dataclass
class Reporting:
    """A reporter bound to the stream it writes to."""
    reporter: UpdateReporter
    output: TextIO

    def close(self) -> None:
        if self.output not in (sys.stdout, sys.stderr):
            self.output.close()


def create_reporter(name: str, version: str = Constants.VERSION) -> Reporting:
    """Build a reporter from its command-line name.

    ``junit:<path>`` writes the JUnit report to ``path`` instead of stdout.

    Raises:
        ValueError: If the name is unknown.
        OSError: If the JUnit output file cannot be opened.
    """
    if name == Reporters.MONOCHROME_TABLE.value:
        return Reporting(monochrome_table_reporter(version), sys.stdout)
    if name == Reporters.COLORIZED_TABLE.value:
        return Reporting(ColorizedTableReporter(version), sys.stdout)
    if name == Reporters.JUNIT.value:
        return Reporting(JUnitReporter(version), sys.stdout)
    if name.startswith(Constants.JUNIT_FILE_PREFIX):
        path = name[len(Constants.JUNIT_FILE_PREFIX):]
        if not path:
            raise ValueError(f"missing file name in reporter: {name}")
        return Reporting(JUnitReporter(version), open(path, "w", encoding="utf-8"))  # pylint: disable=consider-using-with
    raise ValueError(f"unsupported reporter: {name}")
