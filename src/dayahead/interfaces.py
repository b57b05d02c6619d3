"""
Contracts shared by the price generators and their collaborators
"""
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Any, Optional, Protocol, Sequence, Tuple, Union

import numpy as np
import pandas as pd

DateLike = Union[date, datetime, pd.Timestamp, str]
PriceSeries = np.ndarray


class IPriceData(ABC):
    """Produces the reference and realized prices for one day"""

    @abstractmethod
    def get_prices(self, date: DateLike) -> Tuple[PriceSeries, PriceSeries]:
        """
        Get the prices for a calendar date

        Args:
            date: Day to generate prices for

        Returns:
            Tuple of (reference_prices, realized_prices)
        """


class IPriceEnvelopeGenerator(ABC):
    """Builds a baseline price curve for one day"""

    @abstractmethod
    def generate(self, date: DateLike) -> PriceSeries:
        """Baseline prices for one day"""


class IPriceNoiseAdder(ABC):
    """Perturbs an existing price curve"""

    @abstractmethod
    def add(self, prices: Sequence[float]) -> PriceSeries:
        """Perturbed copy of prices with the same length"""


class IPriceDataHelper(ABC):
    """Date and window utilities used by the data driven strategies"""

    @abstractmethod
    def resolve_current(self, date: DateLike) -> pd.Timestamp:
        """Start-of-day timestamp of date"""

    @abstractmethod
    def resolve_prior(self, current: pd.Timestamp, delta_days: int) -> pd.Timestamp:
        """Timestamp delta_days before current"""

    @abstractmethod
    def slice_window(self, current: pd.Timestamp, prior: pd.Timestamp,
                     dataset: pd.DataFrame) -> pd.DataFrame:
        """Rows in [prior, current)"""

    @abstractmethod
    def slice_current(self, current: pd.Timestamp, dataset: pd.DataFrame) -> pd.DataFrame:
        """Rows on the calendar day of current"""

    @abstractmethod
    def slice_following(self, current: pd.Timestamp, dataset: pd.DataFrame, periods: int) -> pd.DataFrame:
        """The first periods rows at or after current"""

    @abstractmethod
    def extract_column(self, dataset_slice: pd.DataFrame, column_name: str) -> PriceSeries:
        """Column values ordered by timestamp"""


class IForecaster(ABC):
    """Model lifecycle of a trainable price generator"""

    @abstractmethod
    def train(self, historical_table: pd.DataFrame) -> Any:
        """Fit the model on raw history"""

    @abstractmethod
    def forecast(self, feature_table: pd.DataFrame) -> PriceSeries:
        """Predict prices from engineered features"""

    @abstractmethod
    def evaluate(self, actual: Sequence[float], predicted: Sequence[float]) -> float:
        """Error metric between two equal length sequences"""

    @abstractmethod
    def save_model(self, path: str) -> None:
        """Persist the model artifact"""

    @abstractmethod
    def load_model(self, path: str) -> Any:
        """Restore a persisted model artifact"""


class DataProvider(Protocol):
    """Read-only source of historical price observations"""

    def get_data(self, start: Optional[DateLike] = None,
                 end: Optional[DateLike] = None) -> pd.DataFrame:
        ...


class FeatureEngineer(Protocol):
    """Turns raw history into model-ready features"""

    def transform(self, dataset: pd.DataFrame) -> pd.DataFrame:
        ...


class TrainableModel(Protocol):
    """Opaque model: fit, predict and (de)serialize"""

    def fit(self, features: np.ndarray, targets: np.ndarray) -> Any:
        ...

    def predict(self, features: np.ndarray) -> np.ndarray:
        ...

    def serialize(self, path: str) -> None:
        ...

    def deserialize(self, path: str) -> Any:
        ...
