from datetime import datetime, timezone

from timestamp_utils import DisplayTimestamp, raw_to_display_timestamp, to_display_timestamp, to_true_utc


def test_to_true_utc_subtracts_server_offset():
    assert to_true_utc("2025.06.25 16:09:01") == datetime(2025, 6, 25, 13, 9, 1, tzinfo=timezone.utc)


def test_to_true_utc_crosses_midnight_backwards():
    assert to_true_utc("2025.01.01 01:30:00") == datetime(2024, 12, 31, 22, 30, tzinfo=timezone.utc)


def test_to_display_timestamp_applies_net_four_hour_shift():
    true_utc = datetime(2025, 6, 25, 13, 9, 1, tzinfo=timezone.utc)
    assert to_display_timestamp(true_utc) == DisplayTimestamp(2025, 6, 25, 9, 9)


def test_to_display_timestamp_month_is_one_based_and_rolls_back():
    # 2025-03-01 02:00 UTC shows on the chart as 2025-02-28 22:00
    display = to_display_timestamp(datetime(2025, 3, 1, 2, 0, tzinfo=timezone.utc))
    assert display == DisplayTimestamp(2025, 2, 28, 22, 0)


def test_to_display_timestamp_treats_naive_as_utc():
    assert to_display_timestamp(datetime(2025, 6, 25, 13, 9)) == DisplayTimestamp(2025, 6, 25, 9, 9)


def test_raw_to_display_timestamp_round_trip():
    assert raw_to_display_timestamp("2025.06.25 16:09:01") == DisplayTimestamp(2025, 6, 25, 9, 9)
    # no daylight saving adjustment in winter either
    assert raw_to_display_timestamp("2025.12.15 16:09:59") == DisplayTimestamp(2025, 12, 15, 9, 9)
