from dataclasses import dataclass

import pandas as pd

from rate_windows.cheapest_hours import cheapest_hours_per_zone
from rate_windows.config import TOP_ZONE_COUNT
from rate_windows.rolling_averages import lowest_average_rates
from rate_windows.top_zones import top_average_rate_zones
from rate_windows.zone_merger import merged_average_rate_zones


@dataclass(frozen=True)
class RateAnalysis:
    """Every stage of the rate-window analysis for one duration."""
    period_count: int
    lowest_average_rates: pd.DataFrame | None  # None when there is too little data
    top_zones: pd.DataFrame
    merged_zones: pd.DataFrame
    cheapest_hours: pd.DataFrame

    @property
    def available(self) -> bool:
        return self.lowest_average_rates is not None


def analyse_rates(future, period_count, top_zone_count=TOP_ZONE_COUNT):
    """
    Run the full analysis over future rates.

    Parameters
    ----------
    future : pd.DataFrame
        Rates starting after now, sorted by start.
    period_count : int
        Number of consecutive slots in the requested duration.
    top_zone_count : int
        How many of the cheapest windows are merged into zones.

    Returns
    -------
    RateAnalysis
    """
    ranked = lowest_average_rates(future, period_count)
    top_zones = top_average_rate_zones(ranked, top_zone_count)
    merged_zones = merged_average_rate_zones(top_zones)
    cheapest = cheapest_hours_per_zone(merged_zones, future, period_count)
    return RateAnalysis(
        period_count=period_count,
        lowest_average_rates=ranked,
        top_zones=top_zones,
        merged_zones=merged_zones,
        cheapest_hours=cheapest,
    )
