"""Shared HTTP helpers used by the registry clients.

GET requests go through ``robust_get``: a per-request timeout, retries with
exponential backoff on transport errors and 5xx answers, and a small TTL
cache keyed on URL and headers so that checking the same package for several
reporters hits the registry once. Failures are reported through the returned
status code (0 when no response was received).
"""
from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, Optional, Tuple

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)

Response = Tuple[int, Dict[str, str], str]

# url+headers -> (response, stored at)
_http_cache: Dict[str, Tuple[Response, float]] = {}


def _cache_key(url: str, headers: Optional[Dict[str, str]]) -> str:
    return f"GET:{url}:{sorted(headers.items()) if headers else ''}"


def _cached(key: str) -> Optional[Response]:
    entry = _http_cache.get(key)
    if entry is None:
        return None
    response, stored_at = entry
    if time.time() - stored_at >= Constants.HTTP_CACHE_TTL_SEC:
        del _http_cache[key]
        return None
    return response


def clear_cache() -> None:
    _http_cache.clear()


def _trace(message: str, target: str, **fields: Any) -> None:
    if is_debug_enabled(logger):
        logger.debug(
            message,
            extra=extra_context(component="http_client", action="GET", target=target, **fields),
        )


def robust_get(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Response:
    """Perform a GET request with timeout, retries and caching.

    Returns:
        Tuple of (status_code, headers_dict, body_text). The status code is 0
        and the text describes the last error when every attempt failed.
    """
    key = _cache_key(url, headers)
    target = safe_url(url)

    cached = _cached(key)
    if cached is not None:
        _trace("HTTP cache hit", target, event="cache_hit")
        return cached

    last_error = None

    for attempt in range(1, Constants.HTTP_RETRY_MAX + 1):
        if attempt > 1:
            time.sleep(Constants.HTTP_RETRY_BASE_DELAY_SEC * (2 ** (attempt - 2)))

        _trace("HTTP request", target, event="http_request", attempt=attempt)
        try:
            with Timer() as timer:
                response = requests.get(url, timeout=Constants.REQUEST_TIMEOUT, headers=headers, **kwargs)
        except requests.Timeout:
            last_error = "timeout"
            _trace("HTTP timeout", target, event="http_exception", outcome="timeout", attempt=attempt)
            continue
        except requests.RequestException as exc:
            last_error = str(exc)
            _trace("HTTP request exception", target, event="http_exception", outcome="request_exception", attempt=attempt)
            continue

        if response.status_code >= 500:
            last_error = f"HTTP {response.status_code}"
            _trace("HTTP server error", target, event="http_response", outcome="retry",
                   status_code=response.status_code, attempt=attempt)
            continue

        result: Response = (response.status_code, dict(response.headers), response.text)
        _http_cache[key] = (result, time.time())
        _trace("HTTP response", target, event="http_response", outcome="success",
               status_code=response.status_code, duration_ms=timer.duration_ms())
        return result

    logger.warning("GET %s failed after %s attempts: %s", target, Constants.HTTP_RETRY_MAX, last_error)
    return 0, {}, f"Request failed after {Constants.HTTP_RETRY_MAX} attempts: {last_error}"


def get_json(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], Optional[Any]]:
    """Perform a GET request and decode its JSON body.

    The body is decoded whatever the status code, since registries explain
    errors in JSON (e.g. ``{"message": "Not Found"}``).

    Returns:
        Tuple of (status_code, headers_dict, parsed_json_or_none)
    """
    status_code, response_headers, text = robust_get(url, headers=headers, **kwargs)
    if not status_code or not text:
        return status_code, response_headers, None

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        _trace("JSON decode error", safe_url(url), event="parse", outcome="json_decode_error",
               status_code=status_code)
        return status_code, response_headers, None
    return status_code, response_headers, parsed
