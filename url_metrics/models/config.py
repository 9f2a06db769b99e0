"""Configuration models for the URL Metrics inspector."""

from __future__ import annotations

import json
import logging
from datetime import timezone, tzinfo
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator

from url_metrics.grouping.collection import validate_breakpoints

logger = logging.getLogger(__name__)


class BreakpointConfig(BaseModel):
    # Viewport widths separating the groups; N breakpoints make N+1 groups
    breakpoints: list[int] = Field(default_factory=lambda: [480, 600, 782])

    # URL Metrics needed per group before it counts as complete
    sample_size: int = Field(default=3, ge=0)

    # Seconds before a URL Metric is stale; 0 disables the age check
    freshness_ttl_seconds: float = Field(default=86400, ge=0)

    @field_validator("breakpoints")
    @classmethod
    def check_breakpoints(cls, v: list[int]) -> list[int]:
        return list(validate_breakpoints(v))


class InspectorConfig(BaseModel):
    # Directory holding one JSON document per page
    store_dir: str = "./url-metrics"

    breakpoint: BreakpointConfig = Field(default_factory=BreakpointConfig)

    # IANA time zone for displaying capture times
    timezone: Optional[str] = None

    # Reporting
    report_output_dir: str = "./url-metrics-reports"

    def display_timezone(self) -> tzinfo:
        """Resolve the display time zone, falling back to UTC."""
        if not self.timezone:
            return timezone.utc
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("Unknown time zone %r, using UTC", self.timezone)
            return timezone.utc

    @classmethod
    def load(cls, path: str | Path) -> "InspectorConfig":
        """Load config from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = json.load(f)
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Save config to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)
