"""Viewport group — the URL Metrics whose viewport width falls in one range."""

from __future__ import annotations

import time
from typing import Iterator, Optional

from url_metrics.models.url_metric import URLMetric

from .device import device_classification


class ViewportGroup:
    """Bucket of URL Metrics for ``min_width <= width < max_width``.

    ``max_width`` is ``None`` for the last group, which has no upper bound.
    Samples keep the order in which they were added.
    """

    def __init__(
        self,
        min_width: int,
        max_width: Optional[int],
        sample_size: int,
        freshness_ttl: float,
        current_fingerprint: str,
        now: float | None = None,
    ):
        if max_width is not None and min_width >= max_width:
            raise ValueError(
                f"min_width ({min_width}) must be less than max_width ({max_width})"
            )
        self.min_width = min_width
        self.max_width = max_width
        self.sample_size = sample_size
        self.freshness_ttl = freshness_ttl
        self.current_fingerprint = current_fingerprint
        self.now = now
        self._samples: list[URLMetric] = []

    def __repr__(self) -> str:
        upper = "inf" if self.max_width is None else self.max_width
        return f"ViewportGroup({self.min_width}-{upper}, count={self.count()})"

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[URLMetric]:
        return iter(self._samples)

    @property
    def is_unbounded(self) -> bool:
        return self.max_width is None

    @property
    def samples(self) -> tuple[URLMetric, ...]:
        return tuple(self._samples)

    def contains_width(self, width: int) -> bool:
        return self.min_width <= width and (self.max_width is None or width < self.max_width)

    def add(self, sample: URLMetric) -> None:
        if not self.contains_width(sample.width):
            raise ValueError(f"Width {sample.width} is outside {self!r}")
        self._samples.append(sample)

    def count(self) -> int:
        return len(self._samples)

    def is_populated(self) -> bool:
        return self.count() > 0

    def is_fresh(self, sample: URLMetric, now: float) -> bool:
        # A TTL of zero disables the age check entirely.
        return self.freshness_ttl == 0 or now - sample.timestamp <= self.freshness_ttl

    def is_complete(self, now: float | None = None) -> bool:
        """Whether enough fresh samples match the current fingerprint.

        ``now`` is the reference instant for the freshness check. It falls
        back to the group's build instant, then to the wall clock.
        """
        if now is None:
            now = self.now if self.now is not None else time.time()
        usable = sum(
            1
            for s in self._samples
            if s.fingerprint == self.current_fingerprint and self.is_fresh(s, now)
        )
        return usable >= self.sample_size

    def get_latest_sample(self) -> Optional[URLMetric]:
        if not self._samples:
            return None
        return max(self._samples, key=lambda s: s.timestamp)

    def get_dominant_element(self) -> Optional[str]:
        """Return the most common LCP element XPath in this group.

        Ties go to the element seen most recently. ``None`` when no sample
        reported an element.
        """
        counts: dict[str, int] = {}
        last_seen: dict[str, float] = {}
        for s in self._samples:
            if s.element_ref is None:
                continue
            counts[s.element_ref] = counts.get(s.element_ref, 0) + 1
            last_seen[s.element_ref] = max(last_seen.get(s.element_ref, s.timestamp), s.timestamp)

        if not counts:
            return None
        return max(counts, key=lambda ref: (counts[ref], last_seen[ref]))

    def device_classification(self) -> str:
        return device_classification(self.min_width, self.max_width)
