"""
Historical price data providers
"""
import logging
from datetime import datetime, timedelta
from typing import Optional

import numpy as np
import pandas as pd

from .const import PRICE_COLUMN, TIMESTAMP_COLUMN
from .exceptions import MissingColumnError
from .interfaces import DateLike

logger = logging.getLogger(__name__)


def _restrict(frame: pd.DataFrame, start: Optional[DateLike], end: Optional[DateLike]) -> pd.DataFrame:
    """Keep rows in [start, end)"""
    if start is not None:
        frame = frame[frame.index >= pd.Timestamp(start)]
    if end is not None:
        frame = frame[frame.index < pd.Timestamp(end)]
    return frame


class DataFrameDataProvider:
    """Serves an in-memory price table"""

    def __init__(self, frame: pd.DataFrame):
        if not isinstance(frame.index, pd.DatetimeIndex):
            raise TypeError("Price table must have a DatetimeIndex")
        self._frame = frame.sort_index()

    def get_data(self, start: Optional[DateLike] = None,
                 end: Optional[DateLike] = None) -> pd.DataFrame:
        """Copy of the table, optionally restricted to [start, end)"""
        return _restrict(self._frame, start, end).copy()


class CsvDataProvider:
    """Reads hourly prices from a CSV file with a timestamp column"""

    def __init__(
        self,
        path: str,
        timestamp_column: str = TIMESTAMP_COLUMN,
        price_column: str = PRICE_COLUMN
    ):
        self.path = path
        self.timestamp_column = timestamp_column
        self.price_column = price_column

    def get_data(self, start: Optional[DateLike] = None,
                 end: Optional[DateLike] = None) -> pd.DataFrame:
        frame = pd.read_csv(self.path)
        for column in (self.timestamp_column, self.price_column):
            if column not in frame.columns:
                raise MissingColumnError(f"Column '{column}' not found in {self.path}")

        frame[self.timestamp_column] = pd.to_datetime(frame[self.timestamp_column])
        frame = frame.set_index(self.timestamp_column).sort_index()
        frame.index.name = TIMESTAMP_COLUMN
        logger.info(f"Loaded {len(frame)} price rows from {self.path}")
        return _restrict(frame, start, end)


class SyntheticHistoryProvider:
    """
    Hourly price history with yearly and daily seasonality.

    Useful for demos and for training a forecaster when no market data is
    at hand. The history is generated once and then served from memory.
    """

    def __init__(
        self,
        days: int = 30,
        end: Optional[DateLike] = None,
        base_price: float = 50.0,
        noise: float = 2.0,
        seed: Optional[int] = None
    ):
        """
        Args:
            days: Number of days of history
            end: Exclusive end of the history, defaults to the start of today
            base_price: Average price level
            noise: Standard deviation of the Gaussian noise
            seed: Random seed for reproducible history
        """
        if end is None:
            end = datetime.now().replace(hour=0, minute=0, second=0, microsecond=0)
        end = pd.Timestamp(end).normalize()
        start = end - timedelta(days=days)
        dates = pd.date_range(start=start, end=end, freq='h', inclusive='left')

        yearly_factor = dates.dayofyear.to_numpy() / 365.0
        hourly_factor = dates.hour.to_numpy() / 24.0

        # Trough at night, peak in the evening
        yearly_seasonality = np.sin(2 * np.pi * yearly_factor) * 0.1 * base_price
        daily_seasonality = -np.cos(2 * np.pi * hourly_factor) * 0.3 * base_price

        rng = np.random.default_rng(seed)
        prices = base_price + yearly_seasonality + daily_seasonality
        prices = prices + rng.normal(0, noise, len(dates))

        self._frame = pd.DataFrame({PRICE_COLUMN: prices}, index=dates)
        self._frame.index.name = TIMESTAMP_COLUMN

    def get_data(self, start: Optional[DateLike] = None,
                 end: Optional[DateLike] = None) -> pd.DataFrame:
        return _restrict(self._frame, start, end).copy()
