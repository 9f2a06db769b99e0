"""URL Metric data structures as returned by the sample store."""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class URLMetric(BaseModel):
    """One visit's viewport observation."""

    model_config = ConfigDict(frozen=True)

    id: str
    url: str = ""
    width: int = Field(ge=0)
    height: Optional[int] = None
    timestamp: float  # epoch seconds
    fingerprint: str  # ETag active when captured
    element_ref: Optional[str] = None  # XPath of the LCP element

    def captured_at(self, tz: tzinfo | None = None) -> datetime:
        """Return the capture instant as an aware datetime (UTC by default)."""
        return datetime.fromtimestamp(self.timestamp, tz=tz or timezone.utc)


class PageRecord(BaseModel):
    slug: str
    url: str = ""
    modified: float = 0.0
    url_metrics: list[URLMetric] = Field(default_factory=list)
