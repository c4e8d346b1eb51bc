import logging
import os
from datetime import datetime, UTC

import pandas as pd

from agile_dashboard.config import API_KEY_ENV, Settings
from agile_dashboard.dashboard import RateChart, build_dashboard, load_rates


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings = Settings.from_env()
    now = datetime.now(UTC)

    rates = load_rates(os.getenv(API_KEY_ENV), now)
    cards = build_dashboard(rates, settings, now)

    pd.set_option('display.max_columns', None)
    for kind, result in cards.items():
        print(f"== {kind.value}")
        if result is None:
            print("No available data")
        elif isinstance(result, RateChart):
            print(result.rates)
            print(result.merged_zones)
        else:
            print(result)


if __name__ == "__main__":
    main()
