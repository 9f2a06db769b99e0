"""Pytest configuration and shared fixtures."""

import json
import uuid
from pathlib import Path
from typing import Callable, Optional

import pytest

from url_metrics.models.config import BreakpointConfig, InspectorConfig
from url_metrics.models.url_metric import PageRecord, URLMetric

NOW = 1_700_000_000.0
BREAKPOINTS = [480, 600, 1200]


def make_metric(
    width: int,
    timestamp: float = NOW - 60,
    fingerprint: str = "abc",
    element_ref: Optional[str] = None,
    url: str = "https://example.com/",
) -> URLMetric:
    return URLMetric(
        id=str(uuid.uuid4()),
        url=url,
        width=width,
        timestamp=timestamp,
        fingerprint=fingerprint,
        element_ref=element_ref,
    )


# ============================================================================
# Sample Fixtures
# ============================================================================


@pytest.fixture
def now() -> float:
    return NOW


@pytest.fixture
def metric_factory() -> Callable[..., URLMetric]:
    """Factory for URL Metrics captured one minute before NOW by default."""
    return make_metric


@pytest.fixture
def page_record() -> PageRecord:
    """A page with URL Metrics in the mobile and desktop groups."""
    return PageRecord(
        slug="0123456789abcdef0123456789abcdef",
        url="https://example.com/",
        modified=NOW - 30,
        url_metrics=[
            make_metric(360, timestamp=NOW - 300, element_ref="/HTML/BODY/IMG[1]"),
            make_metric(375, timestamp=NOW - 200, element_ref="/HTML/BODY/IMG[1]"),
            make_metric(1400, timestamp=NOW - 100, element_ref="/HTML/BODY/IMG[1]"),
        ],
    )


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def breakpoint_config() -> BreakpointConfig:
    return BreakpointConfig(breakpoints=BREAKPOINTS, sample_size=2, freshness_ttl_seconds=3600)


@pytest.fixture
def inspector_config(tmp_path: Path, breakpoint_config: BreakpointConfig) -> InspectorConfig:
    return InspectorConfig(
        store_dir=str(tmp_path / "store"),
        breakpoint=breakpoint_config,
        report_output_dir=str(tmp_path / "reports"),
    )


@pytest.fixture
def store_dir(inspector_config: InspectorConfig, page_record: PageRecord) -> Path:
    """A store directory holding ``page_record`` as its only page."""
    path = Path(inspector_config.store_dir)
    path.mkdir(parents=True, exist_ok=True)
    with open(path / f"{page_record.slug}.json", "w") as f:
        json.dump(page_record.model_dump(), f)
    return path
