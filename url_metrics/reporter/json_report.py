"""JSON report output."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from url_metrics.inspector import PageInspection

logger = logging.getLogger(__name__)


def generate_json_report(inspection: PageInspection, output_path: Path) -> None:
    """Write the status payload and the page's URL Metrics as JSON."""
    report = inspection.status.model_dump(mode="json")
    report["slug"] = inspection.page.slug
    report["url"] = inspection.page.url
    report["url_metrics"] = [m.model_dump(mode="json") for m in inspection.url_metrics]

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(report, f, indent=2, default=str)
    logger.info("JSON report: %s", output_path)
