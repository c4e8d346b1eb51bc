import pandas as pd
import pytest

from rate_windows.config import AVG_PRICE
from rate_windows.rolling_averages import lowest_average_rates, rolling_averages


def ts(value):
    return pd.Timestamp(value, tz="UTC")


def test_alternating_prices_give_equal_windows(make_rates):
    rates = make_rates([10, 30, 10, 30])
    windows = rolling_averages(rates, 2)

    assert list(windows.itertuples(index=False, name=None)) == [
        (ts("2024-01-01 00:00"), ts("2024-01-01 01:00"), 20.0),
        (ts("2024-01-01 00:30"), ts("2024-01-01 01:30"), 20.0),
        (ts("2024-01-01 01:00"), ts("2024-01-01 02:00"), 20.0),
    ]


def test_ties_ranked_by_earliest_start(make_rates):
    ranked = lowest_average_rates(make_rates([10, 30, 10, 30]), 2)
    assert ranked["start"].tolist() == [ts("2024-01-01 00:00"), ts("2024-01-01 00:30"), ts("2024-01-01 01:00")]


def test_cheapest_window_ranked_first(make_rates):
    ranked = lowest_average_rates(make_rates([5, 5, 5, 50, 50, 50]), 3)

    assert ranked[AVG_PRICE].tolist() == [5.0, 20.0, 35.0, 50.0]
    assert ranked["start"].iloc[0] == ts("2024-01-01 00:00")
    assert ranked["end"].iloc[0] == ts("2024-01-01 01:30")


def test_not_enough_rates_is_absent(make_rates):
    assert rolling_averages(make_rates([12]), 2) is None
    assert lowest_average_rates(make_rates([12]), 2) is None
    assert rolling_averages(make_rates([]), 1) is None


@pytest.mark.parametrize("n, p", [(1, 1), (5, 1), (5, 5), (10, 3), (48, 6), (3, 4)])
def test_one_window_per_start_offset(make_rates, n, p):
    windows = rolling_averages(make_rates(list(range(n))), p)
    expected = max(0, n - p + 1)
    if expected == 0:
        assert windows is None
    else:
        assert len(windows) == expected


def test_window_span_follows_slot_length(make_rates):
    windows = rolling_averages(make_rates([4, 8, 6], freq="15min"), 2)
    assert (windows["end"] - windows["start"]).tolist() == [pd.Timedelta(minutes=30)] * 2
    assert windows[AVG_PRICE].tolist() == [6.0, 7.0]


def test_period_count_must_be_positive(make_rates):
    with pytest.raises(ValueError):
        rolling_averages(make_rates([1, 2]), 0)


def test_input_is_not_modified(make_rates):
    rates = make_rates([3, 1, 2])
    before = rates.copy()
    lowest_average_rates(rates, 2)
    pd.testing.assert_frame_equal(rates, before)
