import pandas as pd
from numpy.lib.stride_tricks import sliding_window_view

from rate_windows.config import AVG_PRICE, PRICE_INC_VAT


def rolling_averages(rates, period_count):
    """
    Average unit rate of every run of `period_count` consecutive slots.

    Windows overlap with a stride of one slot, so the true lowest-average
    window is found wherever it starts.

    Parameters
    ----------
    rates : pd.DataFrame
        Chronologically sorted rates (see `prepare_data.rates_from_records`),
        usually only the future ones. Windows are taken by position, so the
        slots must be contiguous; a gap makes a window span more than
        `period_count` slots of time.
    period_count : int
        Number of consecutive slots in one window.

    Returns
    -------
    pd.DataFrame or None
        Columns start, end, avg_price_p_per_kWh in start order, one row per
        start offset. None when there are fewer rates than `period_count`.
    """
    if period_count < 1:
        raise ValueError("period_count must be at least 1")

    n = len(rates)
    if n < period_count:
        return None

    prices = rates[PRICE_INC_VAT].to_numpy(dtype=float)
    averages = sliding_window_view(prices, period_count).mean(axis=1)

    return pd.DataFrame({
        "start": rates.index.array[:n - period_count + 1],
        "end": rates["valid_to"].array[period_count - 1:],
        AVG_PRICE: averages,
    })


def lowest_average_rates(rates, period_count):
    """
    Rolling-average windows ranked from cheapest to most expensive.

    Ties keep their start order, so the earliest window comes first.
    Returns None when there is not enough data for a single window.
    """
    windows = rolling_averages(rates, period_count)
    if windows is None:
        return None
    return windows.sort_values(AVG_PRICE, kind="stable").reset_index(drop=True)
