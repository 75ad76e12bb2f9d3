"""Tests for share line formatting."""

from datetime import datetime
from zoneinfo import ZoneInfo

from eventshare.services.share_content.formatter import (
    format_and_sort_lines,
    format_date,
    format_line,
)


class TestFormatDate:
    """Tests for format_date."""

    def test_zero_pads_month_and_day(self):
        """Should format as MM/DD with zero padding."""
        assert format_date(datetime(2024, 1, 5, 10, 0)) == "01/05"
        assert format_date(datetime(2024, 12, 25, 10, 0)) == "12/25"


class TestFormatLine:
    """Tests for format_line."""

    def test_date_then_title(self, event_factory):
        """Should format as 'MM/DD title'."""
        event = event_factory("1", "React勉強会", datetime(2024, 1, 25, 10, 0))

        assert format_line(event) == "01/25 React勉強会"

    def test_title_used_verbatim(self, event_factory):
        """Should not escape special characters."""
        event = event_factory("1", "React & Vue.js勉強会 #1 <b>", datetime(2024, 1, 20, 10, 0))

        assert format_line(event) == "01/20 React & Vue.js勉強会 #1 <b>"

    def test_empty_title(self, event_factory):
        """Should keep the trailing space for an empty title."""
        event = event_factory("1", "", datetime(2024, 1, 20, 10, 0))

        assert format_line(event) == "01/20 "

    def test_formats_in_given_timezone(self, event_factory):
        """Should show the calendar date in the requested timezone."""
        event = event_factory("1", "夜", datetime(2024, 1, 19, 20, 0, tzinfo=ZoneInfo("UTC")))

        assert format_line(event, ZoneInfo("Asia/Tokyo")) == "01/20 夜"


class TestFormatAndSortLines:
    """Tests for format_and_sort_lines."""

    def test_sorts_by_start_date(self, event_factory):
        """Should order lines earliest first."""
        events = [
            event_factory("2", "イベント2", datetime(2024, 1, 25, 10, 0)),
            event_factory("1", "イベント1", datetime(2024, 1, 20, 10, 0)),
            event_factory("3", "イベント3", datetime(2024, 1, 30, 10, 0)),
        ]

        assert format_and_sort_lines(events) == [
            "01/20 イベント1",
            "01/25 イベント2",
            "01/30 イベント3",
        ]

    def test_ties_keep_input_order(self, event_factory):
        """Should be a stable sort for identical start times."""
        start = datetime(2024, 1, 20, 10, 0)
        events = [
            event_factory("b", "B", start),
            event_factory("a", "A", start),
            event_factory("c", "C", start),
        ]

        assert format_and_sort_lines(events) == ["01/20 B", "01/20 A", "01/20 C"]

    def test_sorts_by_time_within_a_day(self, event_factory):
        """Should order same-day events by start time."""
        events = [
            event_factory("3", "夜", datetime(2024, 1, 20, 18, 0)),
            event_factory("1", "朝", datetime(2024, 1, 20, 10, 0)),
            event_factory("2", "昼", datetime(2024, 1, 20, 14, 0)),
        ]

        assert format_and_sort_lines(events) == ["01/20 朝", "01/20 昼", "01/20 夜"]
