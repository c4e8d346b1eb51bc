import logging

import requests
from requests.auth import HTTPBasicAuth

from agile_dashboard.config import (
    API_TIMEZONE,
    PRODUCT_CODE,
    RATES_URL,
    REQUEST_TIMEOUT,
    TARIFF_CODE,
)
from rate_windows.prepare_data import rates_from_records, to_utc

logger = logging.getLogger(__name__)


class RateSourceError(Exception):
    """Unit rates could not be fetched from the Octopus Energy API."""


def _format_period(ts):
    return to_utc(ts).strftime("%Y-%m-%dT%H:%MZ")


def fetch_rates(api_key, product_code=PRODUCT_CODE, tariff_code=TARIFF_CODE,
                period_from=None, period_to=None, timeout=REQUEST_TIMEOUT):
    """
    Fetch standard unit rates for an Agile tariff.

    Parameters
    ----------
    api_key : str
        Octopus Energy API key, sent as the basic-auth user name.
    product_code : str
        Product code, e.g. "AGILE-FLEX-22-11-25".
    tariff_code : str
        Regional tariff code, e.g. "E-1R-AGILE-FLEX-22-11-25-H".
    period_from, period_to : datetime-like, optional
        Limit the results to this time range.
    timeout : float
        Seconds to wait for each page.

    Returns
    -------
    pd.DataFrame of rates sorted by valid_from (see `rates_from_records`).

    Raises
    ------
    RateSourceError
        If the key is missing, the request fails or the payload is malformed.
    """
    if not api_key:
        raise RateSourceError("API key is not set")

    url = RATES_URL.format(product_code=product_code, tariff_code=tariff_code)
    params = {"timezone": API_TIMEZONE}
    if period_from is not None:
        params["period_from"] = _format_period(period_from)
    if period_to is not None:
        params["period_to"] = _format_period(period_to)

    records = []
    while url:
        logger.debug("Requesting %s", url)
        try:
            r = requests.get(url, params=params, auth=HTTPBasicAuth(api_key, ""), timeout=timeout)
            r.raise_for_status()
            data = r.json()
        except requests.RequestException as err:
            raise RateSourceError(f"Request to {url} failed: {err}") from err
        except ValueError as err:
            raise RateSourceError(f"Invalid JSON from {url}") from err

        if "results" not in data:
            raise RateSourceError("Response has no results")
        records.extend(data["results"])

        # "next" already carries the query string
        url = data.get("next")
        params = None

    try:
        rates = rates_from_records(records)
    except (KeyError, ValueError) as err:
        raise RateSourceError(f"Malformed unit rate record: {err}") from err

    logger.info("Fetched %d unit rates for %s", len(rates), tariff_code)
    return rates
