PERIODS_PER_HOUR = 2      # half-hourly unit rates
TOP_ZONE_COUNT = 10       # lowest-average windows kept before merging

PRICE_INC_VAT = "price_inc_vat_p_per_kWh"
PRICE_EXC_VAT = "price_exc_vat_p_per_kWh"
AVG_PRICE = "avg_price_p_per_kWh"

WINDOW_COLUMNS = ["start", "end", AVG_PRICE]
CHEAPEST_COLUMNS = ["zone_start", "zone_end", "start", "end", AVG_PRICE]
