"""Tests for the status summary: indicator states, tooltips, aggregate message."""

from url_metrics.grouping.collection import build_group_collection
from url_metrics.models.status import IndicatorState
from url_metrics.reporter.status_summary import (
    MESSAGE_COMPLETE,
    MESSAGE_EMPTY,
    MESSAGE_PARTIAL,
    MESSAGE_POPULATED,
    aggregate_message,
    group_tooltip,
    indicator_state,
    is_complete_ignoring_staleness,
    summarize,
)

from conftest import NOW, make_metric

BREAKPOINTS = [480, 600, 1200]


def _build(samples, sample_size=1, ttl=3600, fingerprint="abc", breakpoints=BREAKPOINTS):
    return build_group_collection(samples, breakpoints, sample_size, ttl, fingerprint, now=NOW)


class TestIndicatorState:
    def test_empty(self):
        group = _build([]).groups()[0]
        assert indicator_state(group) == IndicatorState.EMPTY

    def test_populated(self):
        group = _build([make_metric(300)], sample_size=2).groups()[0]
        assert indicator_state(group) == IndicatorState.POPULATED

    def test_complete(self):
        group = _build([make_metric(300)], sample_size=1).groups()[0]
        assert indicator_state(group) == IndicatorState.COMPLETE

    def test_stale_group_is_only_populated(self):
        group = _build([make_metric(300, timestamp=NOW - 7200)], ttl=3600).groups()[0]
        assert indicator_state(group) == IndicatorState.POPULATED

    def test_explicit_now_overrides_build_instant(self):
        group = _build([make_metric(300, timestamp=NOW)], ttl=60).groups()[0]
        assert indicator_state(group) == IndicatorState.COMPLETE
        assert indicator_state(group, now=NOW + 120) == IndicatorState.POPULATED


class TestStalenessOverride:
    def test_applies_when_ttl_disabled_and_latest_matches(self):
        samples = [
            make_metric(300, fingerprint="old", timestamp=NOW - 100),
            make_metric(300, fingerprint="abc", timestamp=NOW - 10),
        ]
        group = _build(samples, sample_size=2, ttl=0).groups()[0]
        assert not group.is_complete()
        assert is_complete_ignoring_staleness(group)
        assert indicator_state(group) == IndicatorState.COMPLETE

    def test_not_applied_when_latest_mismatches(self):
        samples = [
            make_metric(300, fingerprint="abc", timestamp=NOW - 100),
            make_metric(300, fingerprint="old", timestamp=NOW - 10),
        ]
        group = _build(samples, sample_size=2, ttl=0).groups()[0]
        assert not is_complete_ignoring_staleness(group)
        assert indicator_state(group) == IndicatorState.POPULATED

    def test_not_applied_with_ttl(self):
        samples = [
            make_metric(300, fingerprint="old", timestamp=NOW - 100),
            make_metric(300, fingerprint="abc", timestamp=NOW - 10),
        ]
        group = _build(samples, sample_size=2, ttl=3600).groups()[0]
        assert not is_complete_ignoring_staleness(group)
        assert indicator_state(group) == IndicatorState.POPULATED

    def test_summary_agrees_with_message(self):
        samples = [
            make_metric(300, fingerprint="old", timestamp=NOW - 100),
            make_metric(300, fingerprint="abc", timestamp=NOW - 10),
        ]
        collection = build_group_collection(samples, [], 2, 0, "abc", now=NOW)
        status = summarize(collection)

        assert not collection.is_every_group_complete()
        assert status.message == MESSAGE_COMPLETE
        assert status.viewport_statuses[0].complete
        assert status.every_group_complete

    def test_requires_count_equal_to_target(self):
        samples = [make_metric(300, fingerprint="old"), make_metric(300, fingerprint="abc")]
        group = _build(samples, sample_size=3, ttl=0).groups()[0]
        assert not is_complete_ignoring_staleness(group)


class TestAggregateMessage:
    def test_fully_populated(self):
        samples = [make_metric(w) for w in (300, 500, 700, 1300)]
        assert aggregate_message(_build(samples)) == MESSAGE_COMPLETE

    def test_populated_but_under_target(self):
        samples = [make_metric(w) for w in (300, 500, 700, 1300)]
        assert aggregate_message(_build(samples, sample_size=2)) == MESSAGE_POPULATED

    def test_populated_but_stale(self):
        samples = [make_metric(w, timestamp=NOW - 7200) for w in (300, 500, 700, 1300)]
        assert aggregate_message(_build(samples, ttl=3600)) == MESSAGE_POPULATED

    def test_partially_populated(self):
        assert aggregate_message(_build([make_metric(300)])) == MESSAGE_PARTIAL

    def test_no_data(self):
        assert aggregate_message(_build([])) == MESSAGE_EMPTY

    def test_zero_target_counts_as_complete_even_when_empty(self):
        assert aggregate_message(_build([], sample_size=0)) == MESSAGE_COMPLETE


class TestGroupTooltip:
    def test_empty_group(self):
        group = _build([], sample_size=3).groups()[0]
        assert group_tooltip(group) == "mobile: 0/3"

    def test_populated_group_includes_age(self):
        group = _build([make_metric(1300, timestamp=NOW - 300)], sample_size=3).groups()[-1]
        assert group_tooltip(group) == "desktop: 1/3, 5 mins ago"

    def test_complete_group(self):
        samples = [make_metric(700, timestamp=NOW - 7200), make_metric(700, timestamp=NOW - 2 * 3600)]
        group = _build(samples, sample_size=2, ttl=86400).groups()[2]
        assert group_tooltip(group) == "tablet: 2/2, complete, 2 hours ago"


class TestSummarize:
    def test_payload(self):
        samples = [
            make_metric(300, element_ref="/HTML/BODY/IMG[1]", timestamp=NOW - 60),
            make_metric(1300, element_ref="/HTML/BODY/IMG[1]", timestamp=NOW - 60),
        ]
        status = summarize(_build(samples), edit_link="https://example.com/edit")

        assert status.message == MESSAGE_PARTIAL
        assert status.tooltip == f"URL Metrics: {MESSAGE_PARTIAL}"
        assert status.edit_link == "https://example.com/edit"
        assert status.any_group_populated
        assert not status.every_group_populated
        assert not status.every_group_complete
        assert status.common_element == "/HTML/BODY/IMG[1]"
        assert [vs.state for vs in status.viewport_statuses] == [
            IndicatorState.COMPLETE,
            IndicatorState.EMPTY,
            IndicatorState.EMPTY,
            IndicatorState.COMPLETE,
        ]

    def test_viewport_status_fields(self):
        status = summarize(_build([make_metric(300, timestamp=NOW - 60)], sample_size=2))
        mobile = status.viewport_statuses[0]
        assert mobile.min_width == 0
        assert mobile.max_width == 480
        assert mobile.device_label == "Mobile"
        assert mobile.count == 1
        assert mobile.sample_size == 2
        assert not mobile.complete
        assert mobile.last_modified == "1 min ago"
        assert mobile.tooltip == "mobile: 1/2, 1 min ago"
        assert mobile.css_classes == [
            "od-viewport-group-indicator",
            "od-viewport-min-width-0",
            "od-populated",
        ]

        desktop = status.viewport_statuses[-1]
        assert desktop.max_width is None
        assert desktop.last_modified is None
        assert "od-empty" in desktop.css_classes

    def test_serializes_state_as_string(self):
        data = summarize(_build([])).model_dump(mode="json")
        assert data["viewport_statuses"][0]["state"] == "empty"
        assert data["message"] == MESSAGE_EMPTY
