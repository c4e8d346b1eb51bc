import os
from dataclasses import dataclass

from rate_windows.config import TOP_ZONE_COUNT

PRODUCT_CODE = "AGILE-FLEX-22-11-25"
TARIFF_CODE = "E-1R-AGILE-FLEX-22-11-25-H"
RATES_URL = ("https://api.octopus.energy/v1/products/{product_code}/"
             "electricity-tariffs/{tariff_code}/standard-unit-rates/")
API_TIMEZONE = "Europe/London"
LOCAL_TIMEZONE = "Europe/London"
REQUEST_TIMEOUT = 30      # seconds

STORE_PATH = "agile_rates.csv"  # CSV cache of fetched unit rates
RETENTION_DAYS = 3              # rates older than this are pruned from the cache

API_KEY_ENV = "OCTOPUS_API_KEY"
DURATION_ENV = "AGILE_DURATION_HOURS"

DEFAULT_DURATION_HOURS = 3.0
MIN_DURATION_HOURS = 0.5
MAX_DURATION_HOURS = 24.0

# Card names, in the default dashboard order
DEFAULT_CARD_ORDER = (
    "rate_chart",
    "cheapest_hours",
    "current_rate",
    "upcoming_rate",
    "lowest_rate",
    "highest_rate",
    "lowest_average_rates",
)


@dataclass(frozen=True)
class Settings:
    """User preferences passed explicitly into the dashboard layer."""
    duration_hours: float = DEFAULT_DURATION_HOURS
    periods_per_hour: int | None = None  # None: infer from the rates
    top_zone_count: int = TOP_ZONE_COUNT
    card_order: tuple = DEFAULT_CARD_ORDER
    hidden_cards: frozenset = frozenset()

    def __post_init__(self):
        if not MIN_DURATION_HOURS <= self.duration_hours <= MAX_DURATION_HOURS:
            raise ValueError(
                f"duration_hours must be between {MIN_DURATION_HOURS} and {MAX_DURATION_HOURS}"
            )
        if (self.duration_hours * 2) % 1 != 0:
            raise ValueError("duration_hours must be a multiple of 0.5")
        if self.periods_per_hour is not None and self.periods_per_hour < 1:
            raise ValueError("periods_per_hour must be at least 1")
        if self.top_zone_count < 1:
            raise ValueError("top_zone_count must be at least 1")
        unknown = (set(self.card_order) | set(self.hidden_cards)) - set(DEFAULT_CARD_ORDER)
        if unknown:
            raise ValueError(f"Unknown dashboard cards: {sorted(unknown)}")

    @classmethod
    def from_env(cls, environ=None):
        environ = os.environ if environ is None else environ
        duration = environ.get(DURATION_ENV)
        if duration is None:
            return cls()
        return cls(duration_hours=float(duration))
