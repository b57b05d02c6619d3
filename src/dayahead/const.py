"""Default values for the day-ahead price generators"""

PRICE_COLUMN = "price"
TIMESTAMP_COLUMN = "timestamp"

HOURS_PER_DAY = 24
DEFAULT_LOOKBACK_DAYS = 7
DEFAULT_HISTORY_LENGTH = 7 * HOURS_PER_DAY
DEFAULT_FORECAST_LENGTH = HOURS_PER_DAY

# Envelope defaults in €/MWh
DEFAULT_NUM_INTERVALS = HOURS_PER_DAY
DEFAULT_MIN_PRICE = 10.0
DEFAULT_MAX_PRICE = 100.0
DEFAULT_PEAK_START_INDEX = 16
DEFAULT_PEAK_END_INDEX = 20
DEFAULT_JITTER = 0.02

DEFAULT_NOISE_LEVEL = 0.05
DEFAULT_SPIKE_PROBABILITY = 0.02
DEFAULT_SPIKE_MULTIPLIER = 3.0

STRATEGY_SIMULATED = "simulated"
STRATEGY_HISTORICAL = "historical"
STRATEGY_FORECAST = "forecast"
STRATEGIES = (STRATEGY_SIMULATED, STRATEGY_HISTORICAL, STRATEGY_FORECAST)

DEFAULT_CONFIG_FILE = ".DB/pricing.json"
