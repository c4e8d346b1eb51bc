import pandas as pd

from rate_windows.config import (
    AVG_PRICE,
    CHEAPEST_COLUMNS,
    PERIODS_PER_HOUR,
    PRICE_EXC_VAT,
    PRICE_INC_VAT,
)


# ---------------------------
# EMPTY FRAMES
# ---------------------------

def _empty_timestamps():
    return pd.Series(dtype="datetime64[ns, UTC]")


def empty_rates():
    index = pd.DatetimeIndex([], tz="UTC", name="valid_from")
    return pd.DataFrame({
        "valid_to": pd.Series(dtype="datetime64[ns, UTC]", index=index),
        PRICE_INC_VAT: pd.Series(dtype=float, index=index),
        PRICE_EXC_VAT: pd.Series(dtype=float, index=index),
    })


def empty_windows():
    return pd.DataFrame({
        "start": _empty_timestamps(),
        "end": _empty_timestamps(),
        AVG_PRICE: pd.Series(dtype=float),
    })


def empty_cheapest_hours():
    return pd.DataFrame({
        column: pd.Series(dtype=float) if column == AVG_PRICE else _empty_timestamps()
        for column in CHEAPEST_COLUMNS
    })

# ---------------------------
# UNIT RATE RECORDS
# ---------------------------

def rates_from_records(records):
    """
    Build a DataFrame of unit rates from API-shaped price records.

    Parameters
    ----------
    records : iterable of dict
        Each record has "valid_from", "valid_to" (ISO-8601 timestamps),
        "value_exc_vat" and "value_inc_vat" (p/kWh).

    Returns
    -------
    pd.DataFrame indexed by valid_from (UTC), sorted, with columns:
        - valid_to
        - price_inc_vat_p_per_kWh
        - price_exc_vat_p_per_kWh
    """
    records = list(records)
    if not records:
        return empty_rates()

    df = pd.DataFrame.from_records(records)
    rates = pd.DataFrame({
        "valid_from": pd.to_datetime(df["valid_from"], utc=True),
        "valid_to": pd.to_datetime(df["valid_to"], utc=True),
        PRICE_INC_VAT: df["value_inc_vat"].astype(float),
        PRICE_EXC_VAT: df["value_exc_vat"].astype(float),
    })

    if (rates["valid_from"] >= rates["valid_to"]).any():
        raise ValueError("valid_from must be before valid_to")

    # Later records replace earlier ones for the same slot
    rates = rates.drop_duplicates(subset="valid_from", keep="last")
    return rates.set_index("valid_from").sort_index()


def rates_to_records(rates):
    """Convert a rates DataFrame back to API-shaped records."""
    return [
        {
            "valid_from": valid_from.isoformat(),
            "valid_to": row.valid_to.isoformat(),
            "value_exc_vat": row[PRICE_EXC_VAT],
            "value_inc_vat": row[PRICE_INC_VAT],
        }
        for valid_from, row in rates.iterrows()
    ]

# ---------------------------
# FILTERS AND DURATIONS
# ---------------------------

def to_utc(ts):
    ts = pd.Timestamp(ts)
    if ts.tzinfo is None:
        return ts.tz_localize("UTC")
    return ts.tz_convert("UTC")


def future_rates(rates, now):
    """Rates whose slot starts strictly after `now`."""
    return rates[rates.index > to_utc(now)]


def period_count(duration_hours, periods_per_hour=PERIODS_PER_HOUR):
    """Number of consecutive rates covering `duration_hours`."""
    count = int(round(duration_hours * periods_per_hour))
    if count < 1:
        raise ValueError("Duration is shorter than one period")
    return count


def infer_periods_per_hour(rates, default=PERIODS_PER_HOUR):
    """Derive the cadence of the series from the median slot length."""
    if rates.empty:
        return default
    spans = (rates["valid_to"] - rates.index.to_series()).dt.total_seconds()
    return round(3600 / spans.median())
