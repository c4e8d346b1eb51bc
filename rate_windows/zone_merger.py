import pandas as pd

from rate_windows.config import WINDOW_COLUMNS
from rate_windows.prepare_data import empty_windows


def _overlaps(zone, other):
    # Zones that only touch at an endpoint count as overlapping
    return max(zone[0], other[0]) <= min(zone[1], other[1])


def _duration(zone):
    return (zone[1] - zone[0]).total_seconds()


def _merge(zone, other):
    """Union of two zones with a duration-weighted average price."""
    start = min(zone[0], other[0])
    end = max(zone[1], other[1])
    total = (end - start).total_seconds()
    weighted = zone[2] * _duration(zone) + other[2] * _duration(other)
    return (start, end, weighted / total)


def _fold_zones(zones):
    merged = []
    for zone in zones:
        index = next((i for i, existing in enumerate(merged) if _overlaps(existing, zone)), None)
        if index is None:
            merged.append(zone)
        else:
            merged[index] = _merge(merged[index], zone)
    return merged


def _reconcile_zones(zones):
    """
    Merge every remaining overlapping pair until none is left.

    After each merge the scan restarts just after the grown zone, since it may
    now reach zones it was compared against earlier.
    """
    zones = list(zones)
    changed = True
    while changed:
        changed = False
        i = 0
        while i < len(zones):
            j = i + 1
            while j < len(zones):
                if _overlaps(zones[i], zones[j]):
                    zones[i] = _merge(zones[i], zones[j])
                    del zones[j]
                    changed = True
                    j = i + 1
                else:
                    j += 1
            i += 1
    return zones


def merged_average_rate_zones(top_zones):
    """
    Merge overlapping or touching candidate windows into disjoint zones.

    Parameters
    ----------
    top_zones : pd.DataFrame
        Candidate windows with columns start, end, avg_price_p_per_kWh, in
        any order.

    Returns
    -------
    pd.DataFrame
        Disjoint zones sorted by start. Each merged zone's average is
        weighted by the durations of the windows it absorbed and divided by
        the length of the union, so `avg * duration` summed over the zones
        equals the same sum over the candidates.
    """
    if len(top_zones) < 2:
        return top_zones.sort_values("start").reset_index(drop=True)

    candidates = sorted(top_zones[WINDOW_COLUMNS].itertuples(index=False, name=None),
                        key=lambda zone: zone[0])
    zones = _reconcile_zones(_fold_zones(candidates))
    zones.sort(key=lambda zone: zone[0])

    if not zones:
        return empty_windows()
    return pd.DataFrame(zones, columns=WINDOW_COLUMNS)
