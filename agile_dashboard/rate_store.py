import logging
from pathlib import Path

import pandas as pd

from agile_dashboard.config import RETENTION_DAYS, STORE_PATH
from rate_windows.prepare_data import rates_from_records, rates_to_records, to_utc

logger = logging.getLogger(__name__)

STORE_COLUMNS = ["valid_from", "valid_to", "value_exc_vat", "value_inc_vat"]


def load_rates(path=STORE_PATH):
    """Read cached rates; an absent cache gives an empty frame."""
    path = Path(path)
    if not path.exists():
        return rates_from_records([])
    df = pd.read_csv(path)
    return rates_from_records(df.to_dict("records"))


def _write_rates(rates, path):
    df = pd.DataFrame(rates_to_records(rates), columns=STORE_COLUMNS)
    df.to_csv(path, index=False)


def save_rates(rates, path=STORE_PATH):
    """
    Upsert rates into the cache, keyed by valid_from.

    Stored slots that appear in `rates` are replaced; saving the same rates
    twice leaves the cache unchanged.
    """
    stored = load_rates(path)
    if stored.empty:
        combined = rates.sort_index()
    else:
        combined = pd.concat([stored, rates])
        combined = combined[~combined.index.duplicated(keep="last")].sort_index()
    _write_rates(combined, path)
    logger.info("Saved %d unit rates to %s", len(combined), path)
    return combined


def prune_rates(now, path=STORE_PATH, days=RETENTION_DAYS):
    """Delete cached rates that ended more than `days` before `now`."""
    stored = load_rates(path)
    if stored.empty:
        return 0
    cutoff = to_utc(now) - pd.Timedelta(days=days)
    kept = stored[stored["valid_to"] >= cutoff]
    removed = len(stored) - len(kept)
    if removed:
        _write_rates(kept, path)
        logger.debug("Pruned %d unit rates older than %s", removed, cutoff)
    return removed


def reset_rates(path=STORE_PATH):
    Path(path).unlink(missing_ok=True)
