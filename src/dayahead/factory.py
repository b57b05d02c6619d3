"""
Build the configured price strategy
"""
import logging
import os
from typing import Optional

from .config import PricingConfig
from .const import STRATEGY_HISTORICAL, STRATEGY_SIMULATED
from .exceptions import ConfigurationError
from .forecast import ForecastPriceStrategy
from .historical import HistoricalAveragePriceStrategy
from .interfaces import DataProvider, FeatureEngineer, IPriceData, TrainableModel
from .price_data import PriceDataHelper
from .providers import CsvDataProvider
from .simulated import SimulatedPriceStrategy

logger = logging.getLogger(__name__)


def create_price_data(
    config: PricingConfig,
    data_provider: Optional[DataProvider] = None,
    feature_engineer: Optional[FeatureEngineer] = None,
    model: Optional[TrainableModel] = None
) -> IPriceData:
    """
    Create the strategy selected in the configuration

    Args:
        config: Pricing configuration
        data_provider: Historical data source, defaults to a CSV file at config.data_path
        feature_engineer: Feature engineering for the forecast strategy
        model: Trainable model for the forecast strategy

    Returns:
        Strategy implementing IPriceData
    """
    if config.strategy == STRATEGY_SIMULATED:
        logger.info("Using simulated prices")
        return SimulatedPriceStrategy(
            config.envelope_params, config.noise_params, random_state=config.random_seed)

    if data_provider is None:
        if not config.data_path:
            raise ConfigurationError(f"Strategy '{config.strategy}' requires a data provider or data_path")
        data_provider = CsvDataProvider(config.data_path, price_column=config.price_column)

    helper = PriceDataHelper(config.timezone)
    if config.strategy == STRATEGY_HISTORICAL:
        logger.info(f"Using {config.lookback_days} day historical average prices")
        return HistoricalAveragePriceStrategy(
            data_provider,
            interpolate=config.interpolate,
            lookback_days=config.lookback_days,
            price_column=config.price_column,
            helper=helper
        )

    strategy = ForecastPriceStrategy(
        data_provider,
        feature_engineer=feature_engineer,
        model=model,
        history_length=config.history_length,
        forecast_length=config.forecast_length,
        interpolate=config.interpolate,
        lookback_days=config.lookback_days,
        price_column=config.price_column,
        helper=helper
    )
    if config.model_path and os.path.exists(config.model_path):
        strategy.load_model(config.model_path)
    else:
        logger.info("Forecast model not trained yet, call train() before get_prices()")
    return strategy
