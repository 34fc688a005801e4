"""
Testes para TimelineBuilder.
"""

import pytest
from datetime import timedelta

from tobe_analytics.analysis import build_timelines
from tobe_analytics.errors import MalformedTimestamp
from tobe_analytics.models import UsageEvent


class TestTimelineBuilder:
    """Testes de construção de timelines."""

    def test_segments_follow_events(self, chain, base_time):
        events = chain([("EBOM", 0), ("CATIA", 5), ("REVIEW", 20)])

        segments = build_timelines(events)["kim@example.com"]

        assert [s.step for s in segments] == ["EBOM", "CATIA", "REVIEW"]
        assert [s.phase for s in segments] == ["Preparation", "Design", "Verification"]
        assert segments[0].start == base_time
        assert segments[0].end == base_time + timedelta(minutes=5)
        assert segments[1].duration_min == pytest.approx(15.0)

    def test_last_event_is_zero_length(self, chain):
        segments = build_timelines(chain([("EBOM", 0), ("CATIA", 5)]))["kim@example.com"]

        last = segments[-1]
        assert last.end == last.start
        assert last.duration_min == 0

    def test_groups_by_user_and_sorts(self, make_event):
        events = [
            make_event(user="b@example.com", step="CATIA", minute=3),
            make_event(user=None, step="LOGIN", minute=1),
            make_event(user="b@example.com", step="EBOM", minute=1, next_minute=3),
        ]

        timelines = build_timelines(events)

        assert list(timelines) == ["b@example.com", "unknown"]
        assert [s.step for s in timelines["b@example.com"]] == ["EBOM", "CATIA"]
        assert timelines["unknown"][0].email == "unknown"

    def test_duration_from_timestamps_when_missing(self, base_time):
        event = UsageEvent(
            user_email="kim@example.com",
            created_at=base_time,
            next_created_at=base_time + timedelta(minutes=4),
        )

        segment = build_timelines([event])["kim@example.com"][0]

        assert segment.duration_min == pytest.approx(4.0)

    def test_next_before_start_is_malformed(self, base_time):
        event = UsageEvent(
            user_email="kim@example.com",
            created_at=base_time,
            next_created_at=base_time - timedelta(minutes=1),
        )

        with pytest.raises(MalformedTimestamp):
            build_timelines([event])

    def test_detail_and_color_carried(self, make_event):
        event = make_event(step="CATIA", detail={"model": "door"})

        segment = build_timelines([event])["kim@example.com"][0]

        assert segment.detail == {"model": "door"}
        assert segment.color == "#F59E0B"
        assert segment.to_dict()["at"] == segment.to_dict()["nextAt"]

    def test_empty(self):
        assert build_timelines([]) == {}
