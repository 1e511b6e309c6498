"""Tests for the summary engine."""

from datetime import UTC, datetime

import pytest

from worktime.dates import BabelDateRenderer, FixedDateRenderer, get_date_renderer
from worktime.errors import CorruptionError, EmptyLogError, InvalidConfigurationError
from worktime.events import EventKind, WorkEvent
from worktime.summary import Interval, SummaryOptions, pair_events, render_summary


def lines(content: str) -> list[str]:
    return content.splitlines()


class TestRenderSummary:
    """Tests for render_summary with the default cs-CZ renderer."""

    def test_floor_scenario(self) -> None:
        content = "start 2024-01-01T08:00:00.000Z\nend 2024-01-01T09:05:00.000Z"
        options = SummaryOptions(rounding_mode="floor", separator=" | ")

        assert render_summary(lines(content), options) == (
            "01. 01. 2024 08:00 | 09:05 | (1 hour 5 minutes)"
        )

    def test_multiple_intervals(self) -> None:
        content = (
            "start 2024-09-23T08:00:00.000Z\n"
            "end   2024-09-23T12:00:00.000Z\n"
            "start 2024-09-23T12:30:00.000Z\n"
            "end   2024-09-23T16:45:00.000Z\n"
        )

        assert render_summary(lines(content), SummaryOptions()) == (
            "23. 09. 2024 08:00 | 12:00 | (4 hours)\n"
            "23. 09. 2024 12:30 | 16:45 | (4 hours 15 minutes)"
        )

    def test_interval_over_midnight_shows_both_dates(self) -> None:
        content = "start 2024-09-23T22:00:00.000Z\nend   2024-09-25T01:30:00.000Z\n"

        assert render_summary(lines(content), SummaryOptions()) == (
            "23. 09. 2024 22:00 | 25. 09. 2024 01:30 | (1 day 3 hours 30 minutes)"
        )

    def test_custom_separator(self) -> None:
        content = "start 2024-09-23T08:00:00.000Z\nend   2024-09-23T08:01:00.000Z\n"

        assert render_summary(lines(content), SummaryOptions(separator=";")) == (
            "23. 09. 2024 08:00;08:01;(1 minute)"
        )

    def test_expand_rounding(self) -> None:
        content = "start 2024-09-23T08:02:10.000Z\nend   2024-09-23T08:41:00.000Z\n"

        assert render_summary(lines(content), SummaryOptions(rounding_mode="expand")) == (
            "23. 09. 2024 08:00 | 08:45 | (45 minutes)"
        )

    def test_collapsed_interval_shows_zero(self) -> None:
        content = "start 2024-09-23T08:01:00.000Z\nend   2024-09-23T08:03:00.000Z\n"

        assert render_summary(lines(content), SummaryOptions(rounding_mode="closest")) == (
            "23. 09. 2024 08:00 | 08:05 | (5 minutes)"
        )
        assert render_summary(lines(content), SummaryOptions(rounding_mode="ceil")) == (
            "23. 09. 2024 08:05 | 08:05 | (0 minutes)"
        )

    def test_running_work_note(self) -> None:
        content = (
            "start 2024-09-23T08:00:00.000Z\n"
            "end   2024-09-23T12:00:00.000Z\n"
            "start 2024-09-23T13:00:00.000Z\n"
        )

        assert render_summary(lines(content), SummaryOptions()) == (
            "23. 09. 2024 08:00 | 12:00 | (4 hours)\n"
            "\n"
            "Work running, started at 23. 09. 2024 13:00"
        )

    def test_single_start_is_empty_log_with_running_note(self) -> None:
        with pytest.raises(EmptyLogError) as exc_info:
            render_summary(["start 2024-09-23T13:00:00.000Z"], SummaryOptions())

        assert "Empty workfile" in str(exc_info.value)
        assert exc_info.value.running_note == "Work running, started at 23. 09. 2024 13:00"

    def test_empty_workfile_is_empty_log(self) -> None:
        with pytest.raises(EmptyLogError) as exc_info:
            render_summary([], SummaryOptions())
        assert exc_info.value.running_note is None

    def test_garbage_line_is_corruption(self) -> None:
        content = "start 2024-09-23T08:00:00.000Z\ngarbage\n"

        with pytest.raises(CorruptionError) as exc_info:
            render_summary(lines(content), SummaryOptions())
        assert "garbage" in exc_info.value.content

    def test_unknown_rounding_mode(self) -> None:
        content = "start 2024-09-23T08:00:00.000Z\nend   2024-09-23T09:00:00.000Z\n"

        with pytest.raises(InvalidConfigurationError):
            render_summary(lines(content), SummaryOptions(rounding_mode="sometimes"))


class TestLocales:
    """Tests for locale-dependent rendering."""

    content = "start 2024-01-01T08:00:00.000Z\nend   2024-01-01T09:05:00.000Z\n"

    def test_default_locale_uses_fixed_renderer(self) -> None:
        assert isinstance(get_date_renderer("cs-CZ"), FixedDateRenderer)

    def test_other_locales_use_babel(self) -> None:
        assert isinstance(get_date_renderer("en-US"), BabelDateRenderer)

    def test_english_summary(self) -> None:
        summary = render_summary(lines(self.content), SummaryOptions(locale="en-US"))

        assert summary.startswith("Jan 1, 2024")
        assert "9:05:00" in summary
        assert summary.endswith("(1 hour 5 minutes)")
        # Same day, so the date is not repeated
        assert summary.count("2024") == 1

    def test_unknown_locale(self) -> None:
        with pytest.raises(InvalidConfigurationError, match="Unknown locale"):
            render_summary(lines(self.content), SummaryOptions(locale="xx-YY"))


class TestPairEvents:
    """Tests for pairing events into intervals."""

    t1 = datetime(2024, 9, 23, 8, 0, tzinfo=UTC)
    t2 = datetime(2024, 9, 23, 9, 0, tzinfo=UTC)
    t3 = datetime(2024, 9, 23, 10, 0, tzinfo=UTC)

    def test_pairs_and_running(self) -> None:
        events = [
            WorkEvent(EventKind.START, self.t1),
            WorkEvent(EventKind.END, self.t2),
            WorkEvent(EventKind.START, self.t3),
        ]

        intervals, running_since = pair_events(events)

        assert intervals == [Interval(self.t1, self.t2)]
        assert running_since == self.t3

    def test_odd_remainder_is_rejected(self) -> None:
        events = [
            WorkEvent(EventKind.START, self.t1),
            WorkEvent(EventKind.END, self.t2),
            WorkEvent(EventKind.END, self.t3),
        ]

        with pytest.raises(CorruptionError, match="Unmatched"):
            pair_events(events)

    def test_out_of_order_pair_is_rejected(self) -> None:
        events = [
            WorkEvent(EventKind.END, self.t1),
            WorkEvent(EventKind.START, self.t2),
            WorkEvent(EventKind.END, self.t3),
            WorkEvent(EventKind.END, self.t3),
        ]

        with pytest.raises(CorruptionError, match="Expected a start"):
            pair_events(events)
