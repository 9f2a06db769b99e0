"""Status summary — indicator states, tooltips and the aggregate message.

The list view, the inspect view and the JSON report all render from the
same ``CollectionStatus`` so they never disagree about a page.
"""

from __future__ import annotations

import logging
from typing import Optional

from url_metrics.grouping.collection import GroupCollection
from url_metrics.grouping.device import device_label
from url_metrics.grouping.group import ViewportGroup
from url_metrics.models.status import CollectionStatus, IndicatorState, ViewportStatus

from .time_diff import human_time_diff

logger = logging.getLogger(__name__)

MESSAGE_COMPLETE = "fully populated, no stale data"
MESSAGE_POPULATED = "populated but some data is stale or under target"
MESSAGE_PARTIAL = "partially populated"
MESSAGE_EMPTY = "no data collected yet"


def _reference_time(group: ViewportGroup, now: float | None) -> float | None:
    return group.now if now is None else now


def is_complete_ignoring_staleness(group: ViewportGroup) -> bool:
    """Treat a full group as complete when freshness checks are disabled.

    Only applies with a freshness TTL of 0: the group must hold exactly the
    target number of samples and its newest sample must match the current
    fingerprint.
    """
    if group.freshness_ttl != 0 or group.count() != group.sample_size:
        return False
    latest = group.get_latest_sample()
    return latest is not None and latest.fingerprint == group.current_fingerprint


def indicator_state(group: ViewportGroup, now: float | None = None) -> IndicatorState:
    if group.is_complete(_reference_time(group, now)) or is_complete_ignoring_staleness(group):
        return IndicatorState.COMPLETE
    if group.count() > 0:
        return IndicatorState.POPULATED
    return IndicatorState.EMPTY


def aggregate_message(collection: GroupCollection, now: float | None = None) -> str:
    states = [indicator_state(group, now) for group in collection]
    if all(state == IndicatorState.COMPLETE for state in states):
        return MESSAGE_COMPLETE
    elif collection.is_every_group_populated():
        return MESSAGE_POPULATED
    elif collection.is_any_group_populated():
        return MESSAGE_PARTIAL
    else:
        return MESSAGE_EMPTY


def _last_modified(group: ViewportGroup, now: float | None) -> Optional[str]:
    latest = group.get_latest_sample()
    if latest is None:
        return None
    return f"{human_time_diff(latest.timestamp, _reference_time(group, now))} ago"


def group_tooltip(group: ViewportGroup, now: float | None = None) -> str:
    """Format e.g. ``mobile: 2/3`` or ``desktop: 3/3, complete, 5 mins ago``."""
    text = f"{group.device_classification()}: {group.count()}/{group.sample_size}"
    if indicator_state(group, now) == IndicatorState.COMPLETE:
        text += ", complete"
    last_modified = _last_modified(group, now)
    if last_modified:
        text += f", {last_modified}"
    return text


def viewport_status(group: ViewportGroup, now: float | None = None) -> ViewportStatus:
    state = indicator_state(group, now)
    return ViewportStatus(
        min_width=group.min_width,
        max_width=group.max_width,
        device_label=device_label(group),
        state=state,
        complete=state == IndicatorState.COMPLETE,
        count=group.count(),
        sample_size=group.sample_size,
        last_modified=_last_modified(group, now),
        tooltip=group_tooltip(group, now),
        css_classes=[
            "od-viewport-group-indicator",
            f"od-viewport-min-width-{group.min_width}",
            f"od-{state.value}",
        ],
    )


def summarize(
    collection: GroupCollection,
    now: float | None = None,
    edit_link: str | None = None,
) -> CollectionStatus:
    """Build the status payload for a group collection.

    ``every_group_complete`` follows the indicator states, so it agrees with
    the message when the staleness override applies.
    """
    message = aggregate_message(collection, now)
    viewport_statuses = [viewport_status(group, now) for group in collection]
    status = CollectionStatus(
        message=message,
        tooltip=f"URL Metrics: {message}",
        edit_link=edit_link,
        every_group_complete=all(vs.complete for vs in viewport_statuses),
        every_group_populated=collection.is_every_group_populated(),
        any_group_populated=collection.is_any_group_populated(),
        common_element=collection.get_common_dominant_element(),
        viewport_statuses=viewport_statuses,
    )
    logger.debug("Status summary: %s", message)
    return status
