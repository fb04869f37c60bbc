"""Pipfile parser for the PyPI ecosystem.

Extracts runtime ``[packages]``, ``[dev-packages]`` and the
``[requires]`` Python version from a Pipfile (TOML).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

try:
    import tomllib as toml  # type: ignore
except ImportError:  # Python < 3.11
    import tomli as toml  # type: ignore

from versioning.errors import VersionError
from versioning.models import DependencyKind, Requirement
from versioning.parser import parse_requirement

logger = logging.getLogger(__name__)

Dependencies = Dict[str, Requirement]

_SECTIONS = {
    "packages": DependencyKind.RUNTIME,
    "dev-packages": DependencyKind.DEV,
}
# Entries installed from these sources have no registry version to compare.
_NON_REGISTRY_KEYS = ("path", "file", "git", "hg", "svn", "bzr")


class PipfileError(ValueError):
    """The Pipfile is not valid TOML or declares an unusable dependency."""


@dataclass
class Pipfile:
    """Dependencies declared by a Pipfile."""
    runtime_dependencies: Dependencies = field(default_factory=dict)
    dev_dependencies: Dependencies = field(default_factory=dict)
    requires_python: Requirement = field(default_factory=Requirement)

    def dependencies(self, kind: DependencyKind) -> Dependencies:
        if kind is DependencyKind.DEV:
            return self.dev_dependencies
        return self.runtime_dependencies


def _parse(spec: str, context: str) -> Requirement:
    try:
        return parse_requirement(spec)
    except VersionError as e:
        raise PipfileError(f"{context}: {e}") from e


def _entry_spec(name: str, value: Any) -> Optional[str]:
    """Return the specifier text of a dependency entry, or None to skip it."""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        if "version" in value:
            return str(value["version"])
        if any(key in value for key in _NON_REGISTRY_KEYS):
            logger.debug("Skipping %s: not installed from a registry", name)
            return None
        raise PipfileError(f"Field 'version' not found in specification: {name}")
    raise PipfileError(f"Invalid specification for {name}: {value!r}")


def parse_pipfile(text: str) -> Pipfile:
    """Parse Pipfile content.

    Args:
        text: Pipfile TOML content.

    Returns:
        Pipfile with dependencies kept in declaration order.

    Raises:
        PipfileError: If the content is invalid.
    """
    try:
        data = toml.loads(text)
    except toml.TOMLDecodeError as e:
        raise PipfileError(f"Invalid Pipfile: {e}") from e

    pipfile = Pipfile()

    for section, content in data.items():
        section_name = section.lower()

        if section_name in ("requires", *_SECTIONS) and not isinstance(content, dict):
            raise PipfileError(f"Invalid section [{section}]")

        if section_name == "requires":
            python = content.get("python_full_version") or content.get("python_version")
            if python:
                pipfile.requires_python = _parse(str(python), "python_version")
            continue

        kind = _SECTIONS.get(section_name)
        if kind is None:
            logger.debug("Ignoring unknown section '%s'", section)
            continue

        target = pipfile.dependencies(kind)
        for name, value in content.items():
            spec = _entry_spec(name, value)
            if spec is None:
                continue
            target[name] = _parse(spec, name)

    return pipfile


def load_pipfile(path: str) -> Pipfile:
    """Read and parse a Pipfile from disk.

    Raises:
        OSError: If the file cannot be read.
        PipfileError: If the content is invalid.
    """
    with open(path, encoding="utf-8") as f:
        return parse_pipfile(f.read())
