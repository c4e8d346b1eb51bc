import logging
from dataclasses import dataclass
from enum import Enum

import pandas as pd

from agile_dashboard import rate_source, rate_store
from agile_dashboard.config import STORE_PATH
from agile_dashboard.summaries import (
    chart_domain,
    current_rate,
    future_highest_rate,
    future_lowest_rate,
    important_time_marks,
    recent_and_upcoming_rates,
    upcoming_rate,
)
from rate_windows.config import PERIODS_PER_HOUR
from rate_windows.pipeline import analyse_rates
from rate_windows.prepare_data import future_rates, infer_periods_per_hour, period_count

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateChart:
    """Rates on the chart with the cheap zones and time marks to highlight."""
    rates: pd.DataFrame
    merged_zones: pd.DataFrame
    time_marks: list


class CardKind(Enum):
    RATE_CHART = "rate_chart"
    CHEAPEST_HOURS = "cheapest_hours"
    CURRENT_RATE = "current_rate"
    UPCOMING_RATE = "upcoming_rate"
    LOWEST_RATE = "lowest_rate"
    HIGHEST_RATE = "highest_rate"
    LOWEST_AVERAGE_RATES = "lowest_average_rates"


def load_rates(api_key, now, store_path=STORE_PATH):
    """
    Fetch fresh rates, falling back to the cache when the API is unavailable.

    Fetched rates are upserted into the cache and stale cached rates are
    pruned. Returns the rates sorted by valid_from; empty when neither the
    API nor the cache has any.
    """
    try:
        rates = rate_source.fetch_rates(api_key)
    except rate_source.RateSourceError as err:
        logger.warning("Using cached unit rates: %s", err)
        return rate_store.load_rates(store_path)

    rate_store.save_rates(rates, store_path)
    rate_store.prune_rates(now, store_path)
    return rates


def build_dashboard(rates, settings, now):
    """
    Compute the enabled dashboard cards.

    Parameters
    ----------
    rates : pd.DataFrame
        All known rates, sorted by valid_from.
    settings : agile_dashboard.config.Settings
        Duration, cadence, top-zone count and card layout. Without an
        explicit cadence it is inferred from the rates.
    now : datetime-like
        Current instant.

    Returns
    -------
    dict
        CardKind -> result, in `settings.card_order`, hidden cards left out.
        A None result means no data is available for that card. The rate
        chart card is a `RateChart`.
    """
    periods_per_hour = settings.periods_per_hour
    if periods_per_hour is None:
        periods_per_hour = infer_periods_per_hour(rates, default=PERIODS_PER_HOUR)

    future = future_rates(rates, now)
    analysis = analyse_rates(
        future,
        period_count(settings.duration_hours, periods_per_hour),
        settings.top_zone_count,
    )

    def rate_chart():
        return RateChart(
            rates=recent_and_upcoming_rates(rates, chart_domain(rates, now)),
            merged_zones=analysis.merged_zones,
            time_marks=important_time_marks(now, analysis.merged_zones),
        )

    results = {
        CardKind.RATE_CHART: rate_chart,
        CardKind.CHEAPEST_HOURS: lambda: analysis.cheapest_hours if not analysis.cheapest_hours.empty else None,
        CardKind.CURRENT_RATE: lambda: current_rate(rates, now),
        CardKind.UPCOMING_RATE: lambda: upcoming_rate(rates, now),
        CardKind.LOWEST_RATE: lambda: future_lowest_rate(rates, now),
        CardKind.HIGHEST_RATE: lambda: future_highest_rate(rates, now),
        CardKind.LOWEST_AVERAGE_RATES: lambda: analysis.top_zones if analysis.available else None,
    }

    cards = {}
    for name in settings.card_order:
        if name in settings.hidden_cards:
            continue
        kind = CardKind(name)
        cards[kind] = results[kind]()
    return cards
