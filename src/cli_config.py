"""Configuration file loading.

The configuration file may be written in TOML, YAML or JSON; the format is
chosen from the file extension (``.yml``/``.yaml``, ``.json``, anything else
is TOML). Example (TOML)::

    check_dev_packages = true
    excluded_packages = ["django"]
    update_level = "major"

    [gitlab]
    project_api_packages_url = "https://gitlab.example.com/api/v4/projects/42/packages"
    private_token = "..."
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

try:
    import tomllib as toml  # type: ignore
except ImportError:  # Python < 3.11
    import tomli as toml  # type: ignore

from constants import Constants
from registry.gitlab.client import GitlabRegistryConfig
from versioning.models import UpdateLevel

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """The configuration file is malformed or holds an invalid value."""


@dataclass
class Settings:
    """Checker behaviour settings."""
    check_dev_packages: bool = False
    excluded_packages: List[str] = field(default_factory=list)
    update_level: UpdateLevel = UpdateLevel.MINOR

    @classmethod
    def default(cls) -> "Settings":
        return cls(update_level=UpdateLevel.parse(Constants.DEFAULT_UPDATE_LEVEL))


@dataclass
class Config:
    """Loaded configuration: settings plus the optional GitLab registry."""
    settings: Settings = field(default_factory=Settings.default)
    gitlab: Optional[GitlabRegistryConfig] = None


def _read(path: str) -> Dict[str, Any]:
    """Read the raw mapping from a configuration file.

    Raises:
        OSError: If the file cannot be read.
        ConfigError: If the content cannot be decoded.
    """
    lower = path.lower()
    with open(path, "r", encoding="utf-8") as fh:
        text = fh.read()

    try:
        if lower.endswith((".yml", ".yaml")):
            data = yaml.safe_load(text)
        elif lower.endswith(".json"):
            data = json.loads(text)
        else:
            data = toml.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError, toml.TOMLDecodeError) as e:
        raise ConfigError(f"cannot decode {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top-level value must be a mapping")
    return data


def load_settings(data: Dict[str, Any]) -> Settings:
    """Build Settings from a decoded configuration mapping.

    Raises:
        ConfigError: If a value has the wrong type or the update level is unknown.
    """
    settings = Settings.default()

    check_dev = data.get("check_dev_packages", settings.check_dev_packages)
    if not isinstance(check_dev, bool):
        raise ConfigError(f"check_dev_packages must be a boolean, got {check_dev!r}")
    settings.check_dev_packages = check_dev

    excluded = data.get("excluded_packages", [])
    if not isinstance(excluded, list) or not all(isinstance(p, str) for p in excluded):
        raise ConfigError(f"excluded_packages must be a list of strings, got {excluded!r}")
    settings.excluded_packages = list(excluded)

    level = data.get("update_level")
    if level:
        try:
            settings.update_level = UpdateLevel.parse(str(level))
        except ValueError as e:
            raise ConfigError(str(e)) from e

    return settings


def load_gitlab_config(data: Dict[str, Any]) -> Optional[GitlabRegistryConfig]:
    """Build the GitLab registry configuration, or None when no URL is configured."""
    section = data.get("gitlab") or {}
    if not isinstance(section, dict):
        raise ConfigError("[gitlab] must be a table")

    url = str(section.get("project_api_packages_url") or "")
    if not url:
        return None
    return GitlabRegistryConfig(
        project_api_packages_url=url,
        private_token=str(section.get("private_token") or ""),
    )


def load_config(path: str) -> Config:
    """Load a configuration file.

    Raises:
        OSError: If the file cannot be read.
        ConfigError: If the file is invalid.
    """
    data = _read(path)
    config = Config(settings=load_settings(data), gitlab=load_gitlab_config(data))
    logger.debug(
        "Loaded configuration from %s: update_level=%s, check_dev_packages=%s, gitlab=%s",
        path,
        config.settings.update_level,
        config.settings.check_dev_packages,
        config.gitlab is not None,
    )
    return config
