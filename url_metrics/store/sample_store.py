"""Sample store — read-only access to stored URL Metrics per page."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Protocol

from url_metrics.models.url_metric import PageRecord

logger = logging.getLogger(__name__)


class SampleStore(Protocol):
    def get_page(self, slug: str) -> Optional[PageRecord]: ...

    def list_pages(self) -> list[PageRecord]: ...


class JsonSampleStore:
    """Reads one ``<slug>.json`` page document per page from a directory."""

    def __init__(self, root_dir: Path):
        self.root_dir = Path(root_dir)

    def _page_path(self, slug: str) -> Path:
        return self.root_dir / f"{slug}.json"

    def _read(self, path: Path) -> Optional[PageRecord]:
        try:
            with open(path) as f:
                data = json.load(f)
            data.setdefault("slug", path.stem)
            if not data.get("modified"):
                data["modified"] = path.stat().st_mtime
            return PageRecord(**data)
        except Exception as e:
            logger.warning("Failed to load URL Metrics from %s: %s", path, e)
            return None

    def get_page(self, slug: str) -> Optional[PageRecord]:
        path = self._page_path(slug)
        if not path.exists():
            logger.debug("No URL Metrics stored for %s", slug)
            return None
        return self._read(path)

    def list_pages(self) -> list[PageRecord]:
        """Return all readable pages, most recently modified first."""
        if not self.root_dir.is_dir():
            return []
        pages = [
            page
            for page in (self._read(path) for path in sorted(self.root_dir.glob("*.json")))
            if page is not None
        ]
        pages.sort(key=lambda p: p.modified, reverse=True)
        return pages
