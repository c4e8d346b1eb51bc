"""Shared test fixtures."""

import pandas as pd
import pytest

from rate_windows.config import WINDOW_COLUMNS
from rate_windows.prepare_data import rates_from_records


def build_rates(prices, start="2024-01-01 00:00", freq="30min"):
    index = pd.date_range(start, periods=len(prices) + 1, freq=freq, tz="UTC")
    return rates_from_records([
        {
            "valid_from": index[i].isoformat(),
            "valid_to": index[i + 1].isoformat(),
            "value_exc_vat": price / 1.05,
            "value_inc_vat": price,
        }
        for i, price in enumerate(prices)
    ])


def build_windows(rows):
    """Windows frame from (start, end, avg) rows given as strings and floats."""
    return pd.DataFrame(
        [(pd.Timestamp(start, tz="UTC"), pd.Timestamp(end, tz="UTC"), avg) for start, end, avg in rows],
        columns=WINDOW_COLUMNS,
    )


@pytest.fixture
def make_rates():
    return build_rates


@pytest.fixture
def make_windows():
    return build_windows
