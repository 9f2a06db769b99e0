"""Shared URL utilities — normalize URLs and derive stable page slugs."""

from __future__ import annotations

import hashlib
import re
from urllib.parse import urlparse

_SLUG_RE = re.compile(r"^[0-9a-f]{32}$")


def normalize_url(url: str) -> str:
    """Normalize a URL so equivalent page addresses share one identity."""
    parsed = urlparse(url)
    path = parsed.path.rstrip("/") or "/"
    query = ""
    if parsed.query:
        params = sorted(parsed.query.split("&"))
        query = "?" + "&".join(params)
    return f"{parsed.scheme}://{parsed.netloc.lower()}{path}{query}"


def slug_from_url(url: str) -> str:
    """Generate the stable page slug (MD5 hex) from the normalized URL."""
    return hashlib.md5(normalize_url(url).encode()).hexdigest()


def is_slug(value: str) -> bool:
    return bool(_SLUG_RE.match(value))
