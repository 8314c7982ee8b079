"""Shared HTTP plumbing for result sources.

Sessions carry no urllib3 retry adapter: a failed request fails the source,
and the fallback chain moves on to the next one.
"""

from __future__ import annotations

from typing import Any

import requests

from app.errors import SourceUnavailable

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


def build_http_session(user_agent: str = "Mozilla/5.0") -> requests.Session:
    session = requests.Session()
    session.headers.update({"User-Agent": user_agent})
    return session


def fetch_response(
    http: requests.Session,
    url: str,
    *,
    timeout_seconds: float,
    headers: dict[str, str] | None = None,
) -> requests.Response:
    """GET ``url`` and return the response, or raise ``SourceUnavailable``."""

    try:
        resp = http.get(url, timeout=timeout_seconds, headers=headers)
    except requests.Timeout as exc:
        raise SourceUnavailable(f"Timed out after {timeout_seconds}s", details={"url": url}) from exc
    except requests.RequestException as exc:
        raise SourceUnavailable(f"Request failed: {exc}", details={"url": url}) from exc

    if resp.status_code != 200:
        raise SourceUnavailable(
            f"Unexpected status {resp.status_code}",
            details={"url": url, "status": resp.status_code},
        )
    return resp


def get_json(
    http: requests.Session,
    url: str,
    *,
    timeout_seconds: float,
) -> Any:
    resp = fetch_response(http, url, timeout_seconds=timeout_seconds, headers={"Accept": "application/json"})
    try:
        return resp.json()
    except ValueError as exc:
        raise SourceUnavailable("Response body is not JSON", details={"url": url}) from exc


def get_text(
    http: requests.Session,
    url: str,
    *,
    timeout_seconds: float,
    headers: dict[str, str] | None = None,
) -> str:
    resp = fetch_response(http, url, timeout_seconds=timeout_seconds, headers=headers)
    return resp.text
