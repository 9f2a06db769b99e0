"""Inspector — loads a page's URL Metrics, groups them and summarizes their status."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Protocol

from url_metrics.grouping.collection import GroupCollection, build_group_collection
from url_metrics.models.config import InspectorConfig
from url_metrics.models.status import CollectionStatus
from url_metrics.models.url_metric import PageRecord, URLMetric
from url_metrics.reporter.status_summary import summarize
from url_metrics.store.sample_store import SampleStore
from url_metrics.url_utils import is_slug, slug_from_url

logger = logging.getLogger(__name__)


class Fingerprinter(Protocol):
    def current_fingerprint(self, page: PageRecord) -> str: ...


class StaticFingerprinter:
    """Uses an ETag supplied by the caller."""

    def __init__(self, etag: str):
        self.etag = etag

    def current_fingerprint(self, page: PageRecord) -> str:
        return self.etag


class LatestSampleFingerprinter:
    """Assumes the newest URL Metric was captured with the current ETag."""

    def current_fingerprint(self, page: PageRecord) -> str:
        if not page.url_metrics:
            return ""
        return max(page.url_metrics, key=lambda m: m.timestamp).fingerprint


def inspect_command(slug: str) -> str:
    """Command that opens the detail view for a page."""
    return f"url-metrics inspect {slug}"


@dataclass
class PageInspection:
    page: PageRecord
    url_metrics: list[URLMetric]  # newest first
    collection: GroupCollection
    status: CollectionStatus


class Inspector:
    """Builds group collections for stored pages."""

    def __init__(
        self,
        config: InspectorConfig,
        store: SampleStore,
        fingerprinter: Fingerprinter | None = None,
    ):
        self.config = config
        self.store = store
        self.fingerprinter = fingerprinter or LatestSampleFingerprinter()

    def build_collection(self, page: PageRecord, now: float | None = None) -> GroupCollection:
        bp = self.config.breakpoint
        return build_group_collection(
            page.url_metrics,
            breakpoints=bp.breakpoints,
            sample_size=bp.sample_size,
            freshness_ttl=bp.freshness_ttl_seconds,
            current_fingerprint=self.fingerprinter.current_fingerprint(page),
            now=now,
        )

    def _inspect_page(self, page: PageRecord, now: float) -> PageInspection:
        collection = self.build_collection(page, now=now)
        return PageInspection(
            page=page,
            url_metrics=sorted(page.url_metrics, key=lambda m: m.timestamp, reverse=True),
            collection=collection,
            status=summarize(collection, now=now, edit_link=inspect_command(page.slug)),
        )

    def inspect(self, slug_or_url: str, now: float | None = None) -> PageInspection:
        """Inspect one page by slug or URL. Raises LookupError for unknown pages."""
        slug = slug_or_url if is_slug(slug_or_url) else slug_from_url(slug_or_url)
        page = self.store.get_page(slug)
        if page is None:
            raise LookupError(f"No URL Metrics stored for {slug_or_url}")

        now = time.time() if now is None else now
        inspection = self._inspect_page(page, now)
        logger.info(
            "Inspected %s: %d URL Metrics, %s",
            page.url or slug, len(page.url_metrics), inspection.status.message,
        )
        return inspection

    def inspect_all(self, now: float | None = None) -> list[PageInspection]:
        now = time.time() if now is None else now
        return [self._inspect_page(page, now) for page in self.store.list_pages()]
