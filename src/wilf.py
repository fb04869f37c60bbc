"""wilf: check the packages of a Pipfile for available updates."""

from __future__ import annotations

import logging
import sys
from typing import List, Optional, Sequence

from args import parse_args
from analysis.checkers import Checker, create_composite_checker
from analysis.updates import report_updates
from cli_config import Config, ConfigError, Settings, load_config
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import Constants, ExitCodes
from registry import RegistryError
from registry.pypi.pipfile_parser import Dependencies, PipfileError, load_pipfile
from reporting import Reporting, create_reporter
from versioning.errors import VersionError
from versioning.models import DependencyKind

logger = logging.getLogger(__name__)


def _report_all(
    reportings: Sequence[Reporting],
    dependencies: Dependencies,
    kind: DependencyKind,
    settings: Settings,
    checker: Checker,
) -> bool:
    """Run the update loop for every reporter; True if any found a required update."""
    required = False
    for reporting in reportings:
        if report_updates(
            dependencies,
            kind,
            settings.update_level,
            settings.excluded_packages,
            checker,
            reporting.reporter,
            reporting.output,
        ):
            required = True
    return required


def run(argv: Optional[Sequence[str]] = None) -> ExitCodes:
    """Run the checker and return the exit code."""
    args = parse_args(argv)

    level = "DEBUG" if args.VERBOSE else args.LOG_LEVEL
    configure_logging(level, args.LOG_FILE)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(
                event="function_entry",
                component="cli",
                action="main",
                pipfile=args.pipfile,
                config=args.CONFIG,
                reporters=",".join(args.REPORTERS) or None,
            ),
        )

    config: Optional[Config] = None
    settings = Settings.default()
    if args.CONFIG:
        try:
            config = load_config(args.CONFIG)
        except (OSError, ConfigError) as e:
            logger.error("Failed to load configuration '%s': %s", args.CONFIG, e)
            return ExitCodes.CONFIG_ERROR
        settings = config.settings

    try:
        pipfile = load_pipfile(args.pipfile)
    except OSError as e:
        logger.error("Failed to open Pipfile '%s': %s", args.pipfile, e)
        return ExitCodes.FILE_ERROR
    except PipfileError as e:
        logger.error("Invalid Pipfile '%s': %s", args.pipfile, e)
        return ExitCodes.PIPFILE_ERROR

    reportings: List[Reporting] = []
    try:
        for name in args.REPORTERS or [Constants.DEFAULT_REPORTER]:
            reportings.append(create_reporter(name, Constants.VERSION))
    except (ValueError, OSError) as e:
        logger.error("Invalid reporter: %s", e)
        for reporting in reportings:
            reporting.close()
        return ExitCodes.USAGE_ERROR

    checker = create_composite_checker(config, pipfile.requires_python)

    try:
        for reporting in reportings:
            reporting.reporter.before(reporting.output)

        logger.debug("Checking runtime dependencies ...")
        try:
            requires_updates = _report_all(
                reportings, pipfile.runtime_dependencies, DependencyKind.RUNTIME, settings, checker
            )
        except (RegistryError, VersionError) as e:
            logger.error("Failed to check runtime dependencies: %s", e)
            return ExitCodes.RUNTIME_CHECK_ERROR

        if settings.check_dev_packages:
            logger.debug("Checking dev dependencies ...")
            try:
                if _report_all(
                    reportings, pipfile.dev_dependencies, DependencyKind.DEV, settings, checker
                ):
                    requires_updates = True
            except (RegistryError, VersionError) as e:
                logger.error("Failed to check dev dependencies: %s", e)
                return ExitCodes.DEV_CHECK_ERROR

        for reporting in reportings:
            reporting.reporter.after(reporting.output)
    finally:
        for reporting in reportings:
            reporting.close()

    if requires_updates:
        logger.debug("updates required")
        return ExitCodes.UPDATES_REQUIRED

    logger.debug("no updates required")
    return ExitCodes.SUCCESS


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main function of the program."""
    sys.exit(run(argv).value)


if __name__ == "__main__":
    main()
