"""Check PyPI for a newer release."""

from __future__ import annotations

import logging

import httpx

logger = logging.getLogger("dft.update")

PYPI_URL = "https://pypi.org/pypi/depth-first-thinking/json"


def fetch_latest_version(url: str = PYPI_URL, timeout: float = 5.0) -> str | None:
    """Latest published version, or None if the index can't be reached."""
    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
        return response.json()["info"]["version"]
    except (httpx.HTTPError, KeyError, ValueError) as e:
        logger.debug("Version check failed: %s", e)
        return None


def _split(version: str) -> tuple[list[int], str | None]:
    release, _, pre = version.strip().lstrip("v").partition("-")
    parts = []
    for piece in release.split("."):
        digits = "".join(c for c in piece if c.isdigit())
        parts.append(int(digits) if digits else 0)
    return parts, pre or None


def compare_versions(current: str, latest: str) -> int:
    """-1 if ``current`` is older than ``latest``, 1 if newer, 0 if equal.

    Dotted numeric parts compare numerically (missing parts count as 0); a
    pre-release (``2.1.5-beta.1``) sorts before its release.
    """
    cur_parts, cur_pre = _split(current)
    new_parts, new_pre = _split(latest)
    length = max(len(cur_parts), len(new_parts))
    cur_parts += [0] * (length - len(cur_parts))
    new_parts += [0] * (length - len(new_parts))

    if cur_parts != new_parts:
        return -1 if cur_parts < new_parts else 1
    if cur_pre == new_pre:
        return 0
    if cur_pre is None:
        return 1
    if new_pre is None:
        return -1
    return -1 if cur_pre < new_pre else 1
