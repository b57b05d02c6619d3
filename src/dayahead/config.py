"""
Pricing configuration stored as JSON
"""
import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Optional

from .const import (
    DEFAULT_CONFIG_FILE,
    DEFAULT_FORECAST_LENGTH,
    DEFAULT_HISTORY_LENGTH,
    DEFAULT_LOOKBACK_DAYS,
    PRICE_COLUMN,
    STRATEGIES,
    STRATEGY_SIMULATED,
)
from .exceptions import ConfigurationError
from .profiles import EnvelopeParameters, NoiseParameters

logger = logging.getLogger(__name__)


@dataclass
class PricingConfig:
    """Selects and parameterizes a price strategy"""
    strategy: str = STRATEGY_SIMULATED
    envelope: Dict[str, Any] = field(default_factory=dict)
    noise: Dict[str, Any] = field(default_factory=dict)
    lookback_days: int = DEFAULT_LOOKBACK_DAYS
    interpolate: bool = False
    history_length: int = DEFAULT_HISTORY_LENGTH
    forecast_length: int = DEFAULT_FORECAST_LENGTH
    price_column: str = PRICE_COLUMN
    timezone: Optional[str] = None
    random_seed: Optional[int] = None
    data_path: Optional[str] = None
    model_path: Optional[str] = None

    def __post_init__(self):
        if self.strategy not in STRATEGIES:
            raise ConfigurationError(
                f"Unknown strategy '{self.strategy}', expected one of {', '.join(STRATEGIES)}")

    @property
    def envelope_params(self) -> EnvelopeParameters:
        try:
            return EnvelopeParameters.from_dict(self.envelope)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid envelope parameters: {str(e)}") from e

    @property
    def noise_params(self) -> NoiseParameters:
        try:
            return NoiseParameters.from_dict(self.noise)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid noise parameters: {str(e)}") from e

    def to_dict(self) -> Dict:
        """Convert configuration to dictionary"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> 'PricingConfig':
        """Create configuration from dictionary, ignoring unknown keys"""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {sorted(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known})


def load_config(path: str = DEFAULT_CONFIG_FILE) -> PricingConfig:
    """Load configuration from a JSON file, defaults when the file is missing"""
    if not os.path.exists(path):
        logger.info(f"No pricing configuration at {path}, using defaults")
        return PricingConfig()
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Error loading configuration from {path}: {str(e)}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration in {path} must be a JSON object")
    return PricingConfig.from_dict(data)


def save_config(config: PricingConfig, path: str = DEFAULT_CONFIG_FILE) -> None:
    """Write configuration to a JSON file"""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)
