"""PyPI registry client: fetch the latest release information of a package."""
from __future__ import annotations

import logging
from typing import Optional

from packaging.utils import canonicalize_name

from constants import Constants
from common.http_client import get_json
from common.logging_utils import extra_context, is_debug_enabled, Timer, safe_url
from registry import ProjectInfo, RegistryError
from versioning.normalize import with_marker

logger = logging.getLogger(__name__)

HEADERS_JSON = {"Accept": "application/json"}


def get_project_info(package: str, url: str = Constants.REGISTRY_URL_PYPI) -> Optional[ProjectInfo]:
    """Look up the latest release of a package on PyPI.

    Args:
        package (str): Package name as declared in the manifest.
        url (str, optional): Url for PyPI. Defaults to Constants.REGISTRY_URL_PYPI.

    Returns:
        ProjectInfo, or None when PyPI does not know the package.

    Raises:
        RegistryError: If PyPI cannot be reached or answers unexpectedly.
    """
    fullurl = f"{url}{canonicalize_name(package)}/json"

    with Timer() as timer:
        status_code, _, data = get_json(fullurl, headers=HEADERS_JSON)

    if is_debug_enabled(logger):
        logger.debug(
            "PyPI response",
            extra=extra_context(
                event="http_response",
                component="client",
                status_code=status_code,
                duration_ms=timer.duration_ms(),
                target=safe_url(fullurl),
                package_manager="pypi"
            )
        )

    if status_code == 404:
        logger.debug("Package %s not found on PyPI", package)
        return None

    if status_code == 0:
        raise RegistryError(f"PyPI lookup failed for {package}")

    info = data.get("info") if isinstance(data, dict) else None
    if status_code == 200 and info and info.get("name"):
        project_urls = info.get("project_urls") or {}
        return ProjectInfo(
            name=info["name"],
            version=with_marker(str(info.get("version", ""))),
            summary=info.get("summary") or "",
            home_url=info.get("home_page") or project_urls.get("Homepage") or "",
            requires_python=info.get("requires_python") or None,
        )

    message = data.get("message") if isinstance(data, dict) else None
    if message == "Not Found":
        return None

    raise RegistryError(
        f"Project information not found in the JSON response: {message or f'HTTP {status_code}'}"
    )
