import pandas as pd

from agile_dashboard.config import LOCAL_TIMEZONE
from rate_windows.config import PRICE_INC_VAT
from rate_windows.prepare_data import future_rates, to_utc


def current_rate(rates, now):
    """The rate in force at `now`, or None."""
    now = to_utc(now)
    current = rates[(rates.index <= now) & (rates["valid_to"] > now)]
    if current.empty:
        return None
    return current.iloc[0]


def upcoming_rate(rates, now):
    """The next rate to start after `now`, or None."""
    future = future_rates(rates, now)
    if future.empty:
        return None
    return future.iloc[0]


def future_lowest_rate(rates, now):
    future = future_rates(rates, now)
    if future.empty:
        return None
    return future.loc[future[PRICE_INC_VAT].idxmin()]


def future_highest_rate(rates, now):
    future = future_rates(rates, now)
    if future.empty:
        return None
    return future.loc[future[PRICE_INC_VAT].idxmax()]


def chart_domain(rates, now):
    """
    Time range shown on the rate chart.

    Starts two hours before `now`. Ends at the next local midnight, or a day
    later when that midnight is less than three hours away; published rates
    running past midnight extend it further.
    """
    now = to_utc(now)
    start = now - pd.Timedelta(hours=2)
    end_of_today = (now.tz_convert(LOCAL_TIMEZONE).normalize() + pd.DateOffset(days=1)).tz_convert("UTC")

    if end_of_today - now < pd.Timedelta(hours=3):
        end = (end_of_today.tz_convert(LOCAL_TIMEZONE) + pd.DateOffset(days=1)).tz_convert("UTC")
    else:
        last = rates["valid_to"].iloc[-1] if not rates.empty else now
        end = max(end_of_today, last)
    return start, end


def recent_and_upcoming_rates(rates, domain):
    start, end = domain
    return rates[(rates.index >= start) & (rates["valid_to"] <= end)]


def important_time_marks(now, merged_zones):
    """`now` plus every zone boundary, sorted and without repeats."""
    marks = {to_utc(now)}
    marks.update(merged_zones["start"])
    marks.update(merged_zones["end"])
    return sorted(marks)
