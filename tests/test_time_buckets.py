"""Tests for snapshot time buckets and the upstream date format."""

from datetime import datetime, timedelta, timezone

from advisories.time_buckets import compute_time_buckets, format_upstream_date


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


class TestComputeTimeBuckets:

    def test_airmet_buckets_at_five_utc(self):
        buckets = compute_time_buckets(utc(2024, 3, 7, 5, 0))

        assert buckets.airmets == [
            utc(2024, 3, 7, 3),
            utc(2024, 3, 7, 6),
            utc(2024, 3, 7, 9),
            utc(2024, 3, 7, 12)
        ]

    def test_current_is_next_top_of_hour(self):
        buckets = compute_time_buckets(utc(2024, 3, 7, 5, 42, 17, 123))

        assert buckets.current == utc(2024, 3, 7, 6)

    def test_outlook_is_hour_start_plus_three(self):
        buckets = compute_time_buckets(utc(2024, 3, 7, 5, 42))

        assert buckets.outlook == utc(2024, 3, 7, 8)

    def test_on_three_hour_boundary(self):
        buckets = compute_time_buckets(utc(2024, 3, 7, 6, 0))

        assert buckets.airmets[0] == utc(2024, 3, 7, 6)
        assert buckets.current == utc(2024, 3, 7, 7)

    def test_rolls_over_day_and_year(self):
        buckets = compute_time_buckets(utc(2024, 12, 31, 23, 30))

        assert buckets.current == utc(2025, 1, 1, 0)
        assert buckets.outlook == utc(2025, 1, 1, 2)
        assert buckets.airmets == [
            utc(2024, 12, 31, 21),
            utc(2025, 1, 1, 0),
            utc(2025, 1, 1, 3),
            utc(2025, 1, 1, 6)
        ]

    def test_naive_datetime_treated_as_utc(self):
        naive = compute_time_buckets(datetime(2024, 3, 7, 5, 42))
        aware = compute_time_buckets(utc(2024, 3, 7, 5, 42))

        assert naive == aware

    def test_other_timezones_converted_to_utc(self):
        eastern = timezone(timedelta(hours=-5))
        buckets = compute_time_buckets(datetime(2024, 3, 7, 1, 15, tzinfo=eastern))

        assert buckets.current == utc(2024, 3, 7, 7)
        assert buckets.airmets[0] == utc(2024, 3, 7, 6)

    def test_window_count(self):
        buckets = compute_time_buckets(utc(2024, 3, 7, 5), airmet_windows=2)

        assert buckets.airmets == [utc(2024, 3, 7, 3), utc(2024, 3, 7, 6)]


class TestFormatUpstreamDate:

    def test_zero_padded(self):
        assert format_upstream_date(utc(2024, 3, 7, 5, 42)) == "202403070500"

    def test_two_digit_fields(self):
        assert format_upstream_date(utc(2023, 11, 28, 23, 59)) == "202311282300"

    def test_converts_to_utc(self):
        plus_two = timezone(timedelta(hours=2))

        assert format_upstream_date(datetime(2024, 1, 1, 1, 0, tzinfo=plus_two)) == "202312312300"
