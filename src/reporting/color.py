"""Colorized table reporter rendered with rich."""

from __future__ import annotations

import logging
from typing import TextIO

from rich.console import Console
from rich.text import Text

from constants import Constants
from versioning.models import UpdateLevel

from .base import PackageUpdate, UpdateReporter

logger = logging.getLogger(__name__)

LEVEL_STYLES = {
    UpdateLevel.MAJOR: "red",
    UpdateLevel.MINOR: "yellow",
    UpdateLevel.PATCH: "green",
}
DEFAULT_STYLE = "bold bright_black"

_COLUMNS = (("Package", 9), ("Wanted", 10), ("Latest", 6), ("Package type", 2), ("Details", 0))


def _console(out: TextIO) -> Console:
    return Console(file=out, highlight=False, soft_wrap=True, emoji=False)


class ColorizedTableReporter(UpdateReporter):
    """Table reporter colouring each row by update severity."""

    def __init__(self, version: str = Constants.VERSION):
        self.version = version

    def before(self, out: TextIO) -> None:
        console = _console(out)

        header = Text("-- ")
        header.append(f"{Constants.PROG} v{self.version}", style="bold")
        header.append(" --\n")
        console.print(header)

        console.print(Text.assemble(("info", "blue"), " Color legend:"))
        console.print(Text.assemble(" ", ("<red>", "red"), "    : Major Update backward-incompatible updates"))
        console.print(Text.assemble(" ", ("<yellow>", "yellow"), " : Minor Update backward-compatible features"))
        console.print(Text.assemble(" ", ("<green>", "green"), "  : Patch Update backward-compatible bug fixes"))
        console.print()

        columns = Text()
        for title, gap in _COLUMNS:
            columns.append(title, style="underline")
            columns.append(" " * gap)
        console.print(columns)
        console.print()

    def report(self, update: PackageUpdate, out: TextIO) -> None:
        if update.excluded:
            logger.debug("skipping package %s", update.package)
            return

        style = LEVEL_STYLES.get(update.level, DEFAULT_STYLE)

        row = Text()
        row.append(f"{update.package:<14.14}", style=style)
        row.append("\t")
        row.append(f"{str(update.requirement):<12.12}")
        row.append("\t")
        row.append(f"{update.latest_version:<10.10}", style=f"{style} bold")
        row.append("  ")
        row.append(f"{str(update.kind):<12.12}")
        row.append("  ")
        row.append(f"{update.package}; {update.home_url}")
        _console(out).print(row)

    def after(self, out: TextIO) -> None:
        out.write("\n")
