"""Pooled HTTP sessions for YouTube Data API calls."""

from typing import Any

import requests
from requests.adapters import HTTPAdapter

from channel_shop.core.constants import APP_NAME, APP_VERSION

DEFAULT_TIMEOUT = 30

# name -> session
_sessions: dict[str, requests.Session] = {}


def get_session(name: str = "default", pool_maxsize: int = 10) -> requests.Session:
    """
    Get or create a named, cached session.

    Adapters are mounted with ``max_retries=0``: a failed call fails the
    pass and the host retries on its next run.

    Args:
        name: Cache key (one per API)
        pool_maxsize: Connection pool size per host

    Returns:
        Shared requests.Session
    """
    session = _sessions.get(name)
    if session is not None:
        return session

    session = requests.Session()
    adapter = HTTPAdapter(pool_maxsize=pool_maxsize, max_retries=0)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers.update(
        {
            "Accept": "application/json",
            "User-Agent": f"{APP_NAME}/{APP_VERSION}",
        }
    )

    _sessions[name] = session
    return session


def close_all_sessions() -> None:
    """Close every cached session."""
    for session in _sessions.values():
        session.close()
    _sessions.clear()


def get(
    url: str,
    session_name: str = "default",
    params: dict[str, Any] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Response:
    """GET ``url`` through the named session."""
    return get_session(session_name).get(url, params=params, timeout=timeout)
