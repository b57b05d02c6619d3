"""
Day-ahead prices from a trainable forecasting model
"""
import logging
import os
import pickle
import struct
import tempfile
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .const import (
    DEFAULT_FORECAST_LENGTH,
    DEFAULT_HISTORY_LENGTH,
    DEFAULT_LOOKBACK_DAYS,
    PRICE_COLUMN,
)
from .exceptions import (
    DataUnavailableError,
    PersistenceError,
    ShapeMismatchError,
    UntrainedModelError,
)
from .features import PriceFeatureEngineer
from .historical import DatasetPriceStrategy
from .interfaces import (
    DataProvider,
    DateLike,
    FeatureEngineer,
    IForecaster,
    IPriceDataHelper,
    PriceSeries,
    TrainableModel,
)
from .models import SklearnPriceModel

logger = logging.getLogger(__name__)


@dataclass
class ForecastModelState:
    """Trained model artifact and the window sizes it was built for"""
    model: Any
    history_length: int = DEFAULT_HISTORY_LENGTH
    forecast_length: int = DEFAULT_FORECAST_LENGTH
    is_trained: bool = False
    trained_at: Optional[datetime] = None

    def mark_trained(self) -> None:
        self.is_trained = True
        self.trained_at = datetime.now()


class ForecastPriceStrategy(DatasetPriceStrategy, IForecaster):
    """
    Forecasts the next day from the preceding history.

    The model sees the last history_length feature rows flattened into one
    sample and predicts forecast_length prices. Training samples are built by
    sliding that window over the history one row at a time, so the history
    is expected to be regularly sampled. With interpolate enabled missing
    timestamps are added and filled before training.
    """

    def __init__(
        self,
        data_provider: DataProvider,
        feature_engineer: Optional[FeatureEngineer] = None,
        model: Optional[TrainableModel] = None,
        history_length: int = DEFAULT_HISTORY_LENGTH,
        forecast_length: int = DEFAULT_FORECAST_LENGTH,
        interpolate: bool = False,
        lookback_days: int = DEFAULT_LOOKBACK_DAYS,
        price_column: str = PRICE_COLUMN,
        helper: Optional[IPriceDataHelper] = None
    ):
        """
        Initialize the forecaster

        Args:
            data_provider: Source of historical prices
            feature_engineer: Builds model features, defaults to PriceFeatureEngineer
            model: Trainable model, defaults to SklearnPriceModel
            history_length: Number of hourly rows the model looks back
            forecast_length: Number of prices the model predicts
            interpolate: Fill missing historical prices before use
            lookback_days: Days of history used by get_prices
            price_column: Name of the price column
            helper: Date window helper shared with other strategies
        """
        super().__init__(data_provider, interpolate, lookback_days, price_column, helper)
        if history_length <= 0 or forecast_length <= 0:
            raise ValueError("history_length and forecast_length must be positive")
        self.feature_engineer = feature_engineer or PriceFeatureEngineer(price_column)
        self.state = ForecastModelState(
            model=model if model is not None else SklearnPriceModel(),
            history_length=history_length,
            forecast_length=forecast_length
        )

    @property
    def model(self) -> TrainableModel:
        return self.state.model

    @property
    def history_length(self) -> int:
        return self.state.history_length

    @property
    def forecast_length(self) -> int:
        return self.state.forecast_length

    @property
    def is_trained(self) -> bool:
        return self.state.is_trained

    def _require_trained(self) -> None:
        if not self.state.is_trained:
            raise UntrainedModelError("Model must be trained or loaded before forecasting")

    def _build_samples(self, features: pd.DataFrame) -> Tuple[np.ndarray, np.ndarray]:
        """Sliding (history -> next prices) samples over the feature table"""
        h, f = self.history_length, self.forecast_length
        n_samples = len(features) - h - f + 1
        if n_samples < 1:
            raise DataUnavailableError(
                f"Need at least {h + f} rows to train, got {len(features)}")

        values = features.to_numpy(dtype=np.float64)
        prices = features[self.price_column].to_numpy(dtype=np.float64)
        X = np.stack([values[i:i + h].ravel() for i in range(n_samples)])
        y = np.stack([prices[i + h:i + h + f] for i in range(n_samples)])
        return X, y

    def train(self, historical_table: pd.DataFrame) -> ForecastModelState:
        """
        Fit the model on a historical price table

        Args:
            historical_table: Raw price history with a DatetimeIndex

        Returns:
            The trained model state
        """
        features = self.feature_engineer.transform(historical_table)
        X, y = self._build_samples(features)
        logger.info(f"Training {type(self.model).__name__} on {len(X)} samples")
        self.model.fit(X, y)
        self.state.mark_trained()
        return self.state

    def train_from_provider(self) -> ForecastModelState:
        """Fit the model on the full dataset of the data provider"""
        return self.train(self.dataset)

    def forecast(self, feature_table: pd.DataFrame) -> PriceSeries:
        """
        Predict prices from the most recent history_length feature rows

        Args:
            feature_table: Output of the feature engineer

        Returns:
            Array of forecast_length prices
        """
        self._require_trained()
        if len(feature_table) < self.history_length:
            raise DataUnavailableError(
                f"Need {self.history_length} feature rows to forecast, got {len(feature_table)}")

        sample = feature_table.to_numpy(dtype=np.float64)[-self.history_length:].ravel()
        prediction = np.asarray(self.model.predict(sample[np.newaxis, :]), dtype=np.float64).ravel()
        if prediction.size != self.forecast_length:
            raise ShapeMismatchError(
                f"Model returned {prediction.size} values, expected {self.forecast_length}")
        return prediction

    def evaluate(self, actual: Sequence[float], predicted: Sequence[float]) -> float:
        """Mean absolute error between actual and predicted prices"""
        actual = np.asarray(actual, dtype=np.float64)
        predicted = np.asarray(predicted, dtype=np.float64)
        if actual.shape != predicted.shape:
            raise ShapeMismatchError(
                f"Cannot compare {actual.size} actual with {predicted.size} predicted values")
        if actual.size == 0:
            raise ShapeMismatchError("Cannot evaluate empty sequences")
        return float(np.mean(np.abs(actual - predicted)))

    def save_model(self, path: str) -> None:
        """
        Persist the model artifact

        The artifact is written to a temporary file next to path and moved in
        place once complete, so readers never see a partial file.
        """
        self._require_trained()
        directory = os.path.dirname(os.path.abspath(path))
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, suffix='.tmp')
            os.close(fd)
            self.model.serialize(tmp_path)
            os.replace(tmp_path, path)
            tmp_path = None
        except (OSError, pickle.PicklingError, TypeError, AttributeError) as e:
            logger.error(f"Error saving model to {path}: {str(e)}")
            raise PersistenceError(f"Failed to save model to {path}") from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)
        logger.info(f"Saved model to {path}")

    def load_model(self, path: str) -> ForecastModelState:
        """Restore a model artifact written by save_model"""
        try:
            restored = self.model.deserialize(path)
        except (OSError, EOFError, pickle.UnpicklingError, ValueError, KeyError, struct.error) as e:
            logger.error(f"Error loading model from {path}: {str(e)}")
            raise PersistenceError(f"Failed to load model from {path}") from e

        if restored is not None:
            self.state.model = restored
        self.state.mark_trained()
        logger.info(f"Loaded model from {path}")
        return self.state

    def get_prices(self, date: DateLike) -> Tuple[PriceSeries, PriceSeries]:
        self._require_trained()
        # One extra day keeps history_length rows available when the window
        # holds the short daylight saving day
        current, window = self._lookback(date, self.lookback_days + 1)
        features = self.feature_engineer.transform(window)
        forecasted = self.forecast(features)
        actual = self.actual_prices(current)
        return forecasted, actual

    def actual_prices(self, current: pd.Timestamp) -> PriceSeries:
        """Recorded prices for the forecast_length intervals starting at current"""
        following = self.helper.slice_following(current, self.dataset, self.forecast_length)
        actual = self.helper.extract_column(following, self.price_column)
        if len(actual) != self.forecast_length:
            raise DataUnavailableError(
                f"Need {self.forecast_length} recorded prices from {current}, got {len(actual)}")
        return actual
