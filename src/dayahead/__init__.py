"""
dayahead - Interchangeable day-ahead energy price generators

This library provides components for:
- Simulated prices from a sine envelope with noise and spikes
- Hour-of-day averages over recent historical prices
- Trainable price forecasting with model persistence
- Shared date window handling for historical lookups
- Historical data providers and JSON configuration
"""

from .config import PricingConfig, load_config, save_config
from .envelope import SimulatedPriceEnvelopeGenerator
from .factory import create_price_data
from .features import PriceFeatureEngineer
from .forecast import ForecastModelState, ForecastPriceStrategy
from .historical import HistoricalAveragePriceStrategy
from .interfaces import (
    IForecaster,
    IPriceData,
    IPriceDataHelper,
    IPriceEnvelopeGenerator,
    IPriceNoiseAdder,
)
from .models import SklearnPriceModel
from .noise import PriceNoiseAdder
from .price_data import DateWindow, PriceDataHelper
from .profiles import EnvelopeParameters, NoiseParameters
from .providers import CsvDataProvider, DataFrameDataProvider, SyntheticHistoryProvider
from .simulated import SimulatedPriceStrategy
from .exceptions import (
    ConfigurationError,
    DataUnavailableError,
    MissingColumnError,
    PersistenceError,
    PriceDataException,
    ShapeMismatchError,
    UntrainedModelError,
)

__version__ = "0.1.0"
__all__ = [
    'IPriceData', 'IPriceEnvelopeGenerator', 'IPriceNoiseAdder', 'IPriceDataHelper',
    'IForecaster', 'PriceDataHelper', 'DateWindow', 'EnvelopeParameters',
    'NoiseParameters', 'SimulatedPriceEnvelopeGenerator', 'PriceNoiseAdder',
    'SimulatedPriceStrategy', 'HistoricalAveragePriceStrategy', 'ForecastPriceStrategy',
    'ForecastModelState', 'PriceFeatureEngineer', 'SklearnPriceModel',
    'DataFrameDataProvider', 'CsvDataProvider', 'SyntheticHistoryProvider',
    'PricingConfig', 'load_config', 'save_config', 'create_price_data',
    'PriceDataException', 'MissingColumnError', 'DataUnavailableError',
    'UntrainedModelError', 'ShapeMismatchError', 'PersistenceError', 'ConfigurationError',
]
