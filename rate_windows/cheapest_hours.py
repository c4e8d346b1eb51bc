import pandas as pd

from rate_windows.config import AVG_PRICE, CHEAPEST_COLUMNS
from rate_windows.prepare_data import empty_cheapest_hours
from rate_windows.rolling_averages import rolling_averages


def cheapest_hours_per_zone(merged_zones, rates, period_count):
    """
    Find the cheapest `period_count`-slot window inside each merged zone.

    Parameters
    ----------
    merged_zones : pd.DataFrame
        Output of `zone_merger.merged_average_rate_zones`.
    rates : pd.DataFrame
        The future rates the zones were derived from.
    period_count : int
        Number of consecutive slots in one window.

    Returns
    -------
    pd.DataFrame
        Columns zone_start, zone_end, start, end, avg_price_p_per_kWh, one
        row per zone in zone order. Zones holding fewer than `period_count`
        rates are left out. On ties the earliest window wins.
    """
    rows = []
    for zone_start, zone_end in zip(merged_zones["start"], merged_zones["end"]):
        in_zone = rates[(rates.index >= zone_start) & (rates["valid_to"] <= zone_end)]
        windows = rolling_averages(in_zone, period_count)
        if windows is None:
            continue

        best = windows.iloc[windows[AVG_PRICE].to_numpy().argmin()]
        rows.append((zone_start, zone_end, best["start"], best["end"], best[AVG_PRICE]))

    if not rows:
        return empty_cheapest_hours()
    return pd.DataFrame(rows, columns=CHEAPEST_COLUMNS)
