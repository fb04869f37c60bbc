"""Package registry lookups (PyPI, GitLab PyPI package registry)."""

from dataclasses import dataclass
from typing import Optional


class RegistryError(Exception):
    """A registry could not be queried or answered unexpectedly."""


@dataclass
class ProjectInfo:
    """Latest release of a package as published by a registry.

    ``version`` carries the canonical ``v`` marker, e.g. ``v2.31.0``.
    """
    name: str
    version: str
    summary: str = ""
    home_url: str = ""
    requires_python: Optional[str] = None
