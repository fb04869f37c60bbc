"""GitLab API client for the project-level PyPI package registry.

Looks up the packages published to a GitLab project through
``GET /projects/:id/packages?package_type=pypi&package_name=...``.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import urlencode, urlsplit

from constants import Constants
from common.http_client import get_json
from common.logging_utils import redact, safe_url
from registry import ProjectInfo, RegistryError
from versioning.normalize import with_marker

logger = logging.getLogger(__name__)


@dataclass
class GitlabRegistryConfig:
    """Location of a GitLab project package registry and its credentials."""
    project_api_packages_url: str
    private_token: str = ""


class GitLabRegistryClient:
    """Lightweight REST client for a GitLab project package registry.

    Supports optional authentication via the configured private token, or the
    GITLAB_TOKEN environment variable when none is configured.
    """

    def __init__(self, config: GitlabRegistryConfig):
        self.config = config
        self.token = config.private_token or os.environ.get(Constants.ENV_GITLAB_TOKEN, "")
        logger.debug(
            "GitLab registry %s (token: %s)",
            safe_url(config.project_api_packages_url),
            redact(self.token) or "none",
        )

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers including authorization if token is available."""
        headers = {}
        if self.token:
            headers['PRIVATE-TOKEN'] = self.token
        return headers

    def _home_url(self, links: Dict[str, Any]) -> str:
        """Build the package web page from the registry host and ``_links.web_path``."""
        parts = urlsplit(self.config.project_api_packages_url)
        web_path = str(links.get("web_path") or "").lstrip("/")
        return f"{parts.scheme}://{parts.netloc}/{web_path}"

    def get_project_info(self, package: str) -> Optional[ProjectInfo]:
        """Fetch the package published under ``package``.

        Args:
            package: Package name

        Returns:
            ProjectInfo, or None when the registry holds no such package.

        Raises:
            RegistryError: On transport errors, error answers, or when more than
                one package carries the name.
        """
        query = urlencode({"package_type": "pypi", "package_name": package})
        url = f"{self.config.project_api_packages_url}?{query}"

        status, _, data = get_json(url, headers=self._get_headers())

        if status == 0:
            raise RegistryError(f"GitLab lookup failed for {package} ({safe_url(url)})")

        if not isinstance(data, list):
            message = data.get("message") if isinstance(data, dict) else None
            if message == "Not Found" or (status == 404 and message is None):
                return None
            raise RegistryError(
                f"Project information not found in the JSON response: {message or f'HTTP {status}'}"
            )

        if not data:
            return None

        if len(data) > 1:
            raise RegistryError("The Gitlab API indicates more than one project with the same name")

        entry = data[0]
        return ProjectInfo(
            name=entry.get("name", package),
            version=with_marker(str(entry.get("version", ""))),
            home_url=self._home_url(entry.get("_links") or {}),
        )
