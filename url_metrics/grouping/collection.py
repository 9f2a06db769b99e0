"""Group collection — partitions URL Metrics into viewport groups by breakpoint."""

from __future__ import annotations

import logging
import time
from bisect import bisect_right
from typing import Iterable, Iterator, Optional, Sequence

from url_metrics.errors import InvalidConfiguration
from url_metrics.models.url_metric import URLMetric

from .group import ViewportGroup

logger = logging.getLogger(__name__)


def validate_breakpoints(breakpoints: Iterable[int]) -> tuple[int, ...]:
    """Return the breakpoints as a tuple, or raise if they cannot partition widths."""
    table = tuple(breakpoints)
    for bp in table:
        if isinstance(bp, bool) or not isinstance(bp, int):
            raise InvalidConfiguration(f"Breakpoint {bp!r} is not an integer")
        if bp <= 0:
            raise InvalidConfiguration(f"Breakpoint {bp} must be positive")
    for prev, curr in zip(table, table[1:]):
        if curr <= prev:
            raise InvalidConfiguration(
                f"Breakpoints must be strictly increasing, got {prev} then {curr}"
            )
    return table


class GroupCollection:
    """All viewport groups for one page, built from a single sample snapshot."""

    def __init__(
        self,
        breakpoints: Sequence[int],
        sample_size: int,
        freshness_ttl: float,
        current_fingerprint: str,
        now: float | None = None,
    ):
        self.breakpoints = validate_breakpoints(breakpoints)
        if sample_size < 0:
            raise InvalidConfiguration(f"Sample size must not be negative, got {sample_size}")
        if freshness_ttl < 0:
            raise InvalidConfiguration(f"Freshness TTL must not be negative, got {freshness_ttl}")

        self.sample_size = sample_size
        self.freshness_ttl = freshness_ttl
        self.current_fingerprint = current_fingerprint
        self.now = time.time() if now is None else now

        bounds = (0,) + self.breakpoints
        uppers: tuple[Optional[int], ...] = self.breakpoints + (None,)
        self._groups = tuple(
            ViewportGroup(
                min_width=lower,
                max_width=upper,
                sample_size=sample_size,
                freshness_ttl=freshness_ttl,
                current_fingerprint=current_fingerprint,
                now=self.now,
            )
            for lower, upper in zip(bounds, uppers)
        )

    @classmethod
    def build(
        cls,
        samples: Iterable[URLMetric],
        breakpoints: Sequence[int],
        sample_size: int,
        freshness_ttl: float,
        current_fingerprint: str,
        now: float | None = None,
    ) -> "GroupCollection":
        """Create the groups and route every sample to its group in one pass."""
        collection = cls(breakpoints, sample_size, freshness_ttl, current_fingerprint, now=now)
        for sample in samples:
            collection.group_for_width(sample.width).add(sample)
        logger.debug(
            "Built %d viewport groups from %d URL Metrics",
            len(collection), collection.count(),
        )
        return collection

    def __iter__(self) -> Iterator[ViewportGroup]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def groups(self) -> tuple[ViewportGroup, ...]:
        return self._groups

    def group_for_width(self, width: int) -> ViewportGroup:
        """Return the one group whose range contains ``width``."""
        if width < 0:
            raise ValueError(f"Viewport width must not be negative, got {width}")
        return self._groups[bisect_right(self.breakpoints, width)]

    def count(self) -> int:
        return sum(group.count() for group in self._groups)

    def is_every_group_complete(self, now: float | None = None) -> bool:
        ref = self.now if now is None else now
        return all(group.is_complete(ref) for group in self._groups)

    def is_every_group_populated(self) -> bool:
        return all(group.is_populated() for group in self._groups)

    def is_any_group_populated(self) -> bool:
        return any(group.is_populated() for group in self._groups)

    def get_common_dominant_element(self) -> Optional[str]:
        """Return the LCP element dominant in the most groups.

        Ties go to the element that is dominant in the narrowest-width group.
        With more than one group, an element has to be dominant in at least
        two of them to count as common. A single-group collection returns
        that group's dominant element, since it is dominant in every group.
        """
        votes: dict[str, int] = {}
        first_group: dict[str, int] = {}
        for index, group in enumerate(self._groups):
            element = group.get_dominant_element()
            if element is None:
                continue
            votes[element] = votes.get(element, 0) + 1
            first_group.setdefault(element, index)

        if not votes:
            return None
        best = max(votes, key=lambda el: (votes[el], -first_group[el]))
        if votes[best] < 2 and len(self._groups) > 1:
            return None
        return best


def build_group_collection(
    samples: Iterable[URLMetric],
    breakpoints: Sequence[int],
    sample_size: int,
    freshness_ttl: float,
    current_fingerprint: str,
    now: float | None = None,
) -> GroupCollection:
    return GroupCollection.build(
        samples, breakpoints, sample_size, freshness_ttl, current_fingerprint, now=now,
    )
