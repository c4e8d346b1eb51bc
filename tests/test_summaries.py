import pandas as pd

from agile_dashboard.summaries import (
    chart_domain,
    current_rate,
    future_highest_rate,
    future_lowest_rate,
    important_time_marks,
    recent_and_upcoming_rates,
    upcoming_rate,
)
from rate_windows.config import PRICE_INC_VAT


def ts(value):
    return pd.Timestamp(value, tz="UTC")


def test_current_and_upcoming_rate(make_rates):
    rates = make_rates([10, 20, 30])
    now = ts("2024-01-01 00:40")

    assert current_rate(rates, now)[PRICE_INC_VAT] == 20
    assert upcoming_rate(rates, now)[PRICE_INC_VAT] == 30


def test_no_current_rate_outside_series(make_rates):
    rates = make_rates([10, 20])
    assert current_rate(rates, ts("2024-01-02 00:00")) is None
    assert upcoming_rate(rates, ts("2024-01-02 00:00")) is None


def test_future_extremes_ignore_past_rates(make_rates):
    rates = make_rates([1, 50, 8, 3, 40, 3])
    now = ts("2024-01-01 00:45")

    lowest = future_lowest_rate(rates, now)
    highest = future_highest_rate(rates, now)

    assert lowest[PRICE_INC_VAT] == 3
    assert lowest.name == ts("2024-01-01 01:30")
    assert highest[PRICE_INC_VAT] == 40
    assert future_lowest_rate(rates, ts("2024-01-02 00:00")) is None
    assert future_highest_rate(rates, ts("2024-01-02 00:00")) is None


def test_chart_domain_ends_at_midnight_or_last_rate(make_rates):
    rates = make_rates([1] * 96, start="2024-01-10 00:00")
    start, end = chart_domain(rates, ts("2024-01-10 09:00"))

    assert start == ts("2024-01-10 07:00")
    # rates run to 2024-01-12 00:00, past the local midnight
    assert end == ts("2024-01-12 00:00")

    short = make_rates([1] * 4, start="2024-01-10 09:00")
    assert chart_domain(short, ts("2024-01-10 09:00"))[1] == ts("2024-01-11 00:00")


def test_chart_domain_late_evening_shows_tomorrow(make_rates):
    rates = make_rates([1] * 4, start="2024-01-10 22:00")
    _, end = chart_domain(rates, ts("2024-01-10 22:00"))
    assert end == ts("2024-01-12 00:00")


def test_chart_domain_uses_london_midnight(make_rates):
    # BST: local midnight is 23:00 UTC
    rates = make_rates([1] * 2, start="2024-07-01 09:00")
    _, end = chart_domain(rates, ts("2024-07-01 09:00"))
    assert end == ts("2024-07-01 23:00")


def test_recent_and_upcoming_rates(make_rates):
    rates = make_rates([1, 2, 3, 4, 5, 6])
    domain = (ts("2024-01-01 00:30"), ts("2024-01-01 02:00"))
    assert recent_and_upcoming_rates(rates, domain)[PRICE_INC_VAT].tolist() == [2, 3, 4]


def test_important_time_marks(make_windows):
    zones = make_windows([
        ("2024-01-01 03:00", "2024-01-01 05:00", 4.0),
        ("2024-01-01 01:00", "2024-01-01 02:00", 2.0),
    ])
    marks = important_time_marks(ts("2024-01-01 01:00"), zones)
    assert marks == [
        ts("2024-01-01 01:00"),
        ts("2024-01-01 02:00"),
        ts("2024-01-01 03:00"),
        ts("2024-01-01 05:00"),
    ]
