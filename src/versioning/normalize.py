"""Canonical version normalization on top of semantic_version.

Registry and manifest versions follow PEP 440 loosely, while ordering is
delegated to ``semantic_version.Version``. This module bridges the two:
it accepts the ``v`` display marker, Go-style shorthand versions (``3.8``),
and overlong "non-standard" versions (``1.5.5.1``) by truncating them to
three segments.
"""

import re
from typing import Pattern

import semantic_version

from .errors import InvalidVersion, InvalidVersionMatching

MARKER = "v"
WILDCARD = "*"

# Three numeric segments followed by at least one more, e.g. zstd 1.5.5.1
_NON_STANDARD_RE = re.compile(r"^(\d+)\.(\d+)\.(\d+)(?:\.\d+)+$")
_SHORTHAND_RE = re.compile(r"^(0|[1-9]\d*)(?:\.(0|[1-9]\d*))?$")


def with_marker(token: str) -> str:
    """Return the token prefixed with the canonical ``v`` marker."""
    return token if token.startswith(MARKER) else f"{MARKER}{token}"


def _strip_marker(token: str) -> str:
    token = token.strip()
    return token[len(MARKER):] if token.startswith(MARKER) else token


def _parse(text: str) -> semantic_version.Version:
    m = _NON_STANDARD_RE.match(text)
    if m:
        major, minor, patch = (int(g) for g in m.groups())
        return semantic_version.Version(major=major, minor=minor, patch=patch)

    m = _SHORTHAND_RE.match(text)
    if m:
        return semantic_version.Version(
            major=int(m.group(1)),
            minor=int(m.group(2) or 0),
            patch=0,
        )

    try:
        return semantic_version.Version(text)
    except ValueError as exc:
        raise InvalidVersion(text) from exc


def normalize(token: str) -> semantic_version.Version:
    """Turn a version token into a comparable canonical version.

    Wildcard segments are read as ``0`` so that a bound such as ``1.2.*``
    orders as ``1.2.0``. Registry releases whose fourth segment is not
    numeric (``2.9.0.post0``) compare as their first three segments.

    Args:
        token: Version text, with or without the ``v`` marker.

    Returns:
        semantic_version.Version: major.minor.patch (plus any pre-release/build).

    Raises:
        InvalidVersion: If the token cannot be ordered.
    """
    text = _strip_marker(token).replace(WILDCARD, "0")
    try:
        return _parse(text)
    except InvalidVersion:
        segments = text.split(".")
        if len(segments) > 3 and all(s.isdigit() for s in segments[:3]):
            major, minor, patch = (int(s) for s in segments[:3])
            return semantic_version.Version(major=major, minor=minor, patch=patch)
        raise


def is_valid_version(token: str) -> bool:
    """Check whether a (non-wildcard) token is a standard or non-standard version."""
    if WILDCARD in token:
        return False
    try:
        _parse(_strip_marker(token))
    except InvalidVersion:
        return False
    return True


def format_version(version: semantic_version.Version) -> str:
    """Display a canonical version with its marker, e.g. ``v1.2.3``."""
    return f"{MARKER}{version}"


def compare(a: semantic_version.Version, b: semantic_version.Version) -> int:
    """Three-way comparison; build metadata does not take part."""
    return (a > b) - (a < b)


def is_wildcard(token: str) -> bool:
    return WILDCARD in token


def compile_matching(pattern: str) -> Pattern[str]:
    """Compile a wildcard version pattern into an anchored regular expression.

    Every ``*`` matches any sequence of characters; everything else is literal.

    Raises:
        InvalidVersionMatching: If the pattern is not a version once its
            wildcards are read as ``0``.
    """
    pattern = with_marker(pattern.strip())
    if not is_valid_version(pattern.replace(WILDCARD, "0")):
        raise InvalidVersionMatching(pattern)

    body = "".join(
        ".*" if part == WILDCARD else re.escape(part)
        for part in re.split(r"(\*)", pattern)
        if part
    )
    return re.compile(rf"\A{body}\Z")
