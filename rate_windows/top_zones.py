from rate_windows.config import TOP_ZONE_COUNT
from rate_windows.prepare_data import empty_windows


def top_average_rate_zones(lowest_average_rates, count=TOP_ZONE_COUNT):
    """
    Keep the `count` cheapest windows.

    `lowest_average_rates` is the ranked output of
    `rolling_averages.lowest_average_rates`, or None when no window could be
    formed; in that case an empty frame is returned.
    """
    if count < 0:
        raise ValueError("count must not be negative")
    if lowest_average_rates is None:
        return empty_windows()
    return lowest_average_rates.head(count).reset_index(drop=True)
