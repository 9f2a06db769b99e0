"""Device classification for viewport groups.

Every surface that labels a group (tables, tooltips, indicator classes) goes
through ``device_classification`` so the labels cannot drift apart.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .group import ViewportGroup

TABLET_MIN_WIDTH = 600

MOBILE = "mobile"
PHABLET = "phablet"
TABLET = "tablet"
DESKTOP = "desktop"

_LABELS = {
    MOBILE: "Mobile",
    PHABLET: "Phablet",
    TABLET: "Tablet",
    DESKTOP: "Desktop",
}


def device_classification(min_width: int, max_width: Optional[int]) -> str:
    """Classify a width range as mobile, phablet, tablet or desktop."""
    if min_width == 0:
        return MOBILE
    if max_width is None:
        return DESKTOP
    if min_width >= TABLET_MIN_WIDTH:
        return TABLET
    return PHABLET


def device_label(group: ViewportGroup) -> str:
    return _LABELS[group.device_classification()]


def device_emoji(group: ViewportGroup) -> str:
    if group.is_unbounded:
        return "\U0001F4BB"  # laptop
    return "\U0001F4F1"  # mobile phone


def width_range_label(group: ViewportGroup) -> str:
    """Format the group's width range, e.g. ``≤480px`` or ``600px – 782px``."""
    if group.min_width == 0 and group.is_unbounded:
        return "any width"
    if group.min_width == 0:
        return f"≤{group.max_width}px"
    if group.is_unbounded:
        return f"≥{group.min_width}px"
    return f"{group.min_width}px – {group.max_width}px"
