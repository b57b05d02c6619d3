"""
Date and window helpers shared by the price strategies
"""
import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd
import pytz
from dateutil import parser as date_parser

from .exceptions import MissingColumnError
from .interfaces import DateLike, IPriceDataHelper, PriceSeries

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DateWindow:
    """Lookback window [prior, current)"""
    current: pd.Timestamp
    prior: pd.Timestamp

    def __post_init__(self):
        if not self.prior < self.current:
            raise ValueError(f"Window start {self.prior} must be before {self.current}")

    @property
    def days(self) -> int:
        return (self.current - self.prior).days


class PriceDataHelper(IPriceDataHelper):
    """
    Resolves dates to timestamps and slices historical datasets.

    Both the historical average and the forecast strategy use this single
    implementation so their lookback windows are identical: the window is
    inclusive of ``prior`` and exclusive of ``current``.
    """

    def __init__(self, timezone: Optional[str] = None):
        """
        Args:
            timezone: Optional timezone name (e.g. 'Europe/Amsterdam') used to
                localize naive dates
        """
        self.timezone = pytz.timezone(timezone) if timezone else None

    def resolve_current(self, date: DateLike) -> pd.Timestamp:
        """Map a calendar date to its start-of-day timestamp"""
        if isinstance(date, str):
            date = date_parser.parse(date)
        current = pd.Timestamp(date)
        if self.timezone is not None:
            if current.tzinfo is None:
                current = current.normalize().tz_localize(self.timezone)
            else:
                current = current.tz_convert(self.timezone)
        return current.normalize()

    def resolve_prior(self, current: pd.Timestamp, delta_days: int) -> pd.Timestamp:
        """Timestamp delta_days calendar days before current, same time of day"""
        if delta_days <= 0:
            raise ValueError(f"delta_days must be positive, got {delta_days}")
        return pd.Timestamp(current) - pd.DateOffset(days=int(delta_days))

    def resolve_window(self, date: DateLike, delta_days: int) -> DateWindow:
        """Resolve the lookback window ending at the start of date"""
        current = self.resolve_current(date)
        return DateWindow(current=current, prior=self.resolve_prior(current, delta_days))

    def slice_window(self, current: pd.Timestamp, prior: pd.Timestamp,
                     dataset: pd.DataFrame) -> pd.DataFrame:
        """Rows with a timestamp in [prior, current), oldest first"""
        dataset = self._sorted(dataset)
        start = self._align(prior, dataset.index)
        end = self._align(current, dataset.index)
        window = dataset[(dataset.index >= start) & (dataset.index < end)]
        logger.debug(f"Window {start} - {end} contains {len(window)} rows")
        return window

    def slice_current(self, current: pd.Timestamp, dataset: pd.DataFrame) -> pd.DataFrame:
        """Rows falling on the calendar day of current, oldest first"""
        dataset = self._sorted(dataset)
        day_start = self._align(current, dataset.index).normalize()
        day_end = day_start + pd.DateOffset(days=1)
        return dataset[(dataset.index >= day_start) & (dataset.index < day_end)]

    def slice_following(self, current: pd.Timestamp, dataset: pd.DataFrame, periods: int) -> pd.DataFrame:
        """The first periods rows at or after current, oldest first"""
        dataset = self._sorted(dataset)
        start = self._align(current, dataset.index)
        return dataset[dataset.index >= start].head(periods)

    def extract_column(self, dataset_slice: pd.DataFrame, column_name: str) -> PriceSeries:
        """Column values ordered by timestamp"""
        if column_name not in dataset_slice.columns:
            raise MissingColumnError(
                f"Column '{column_name}' not found, available: {list(dataset_slice.columns)}")
        return self._sorted(dataset_slice)[column_name].to_numpy(dtype=np.float64)

    @staticmethod
    def _sorted(dataset: pd.DataFrame) -> pd.DataFrame:
        if not isinstance(dataset.index, pd.DatetimeIndex):
            raise TypeError("Dataset must have a DatetimeIndex")
        if dataset.index.is_monotonic_increasing:
            return dataset
        return dataset.sort_index()

    @staticmethod
    def _align(timestamp: pd.Timestamp, index: pd.DatetimeIndex) -> pd.Timestamp:
        """Match the timezone awareness of the dataset index"""
        timestamp = pd.Timestamp(timestamp)
        if index.tz is None:
            return timestamp.tz_localize(None) if timestamp.tzinfo is not None else timestamp
        if timestamp.tzinfo is None:
            return timestamp.tz_localize(index.tz)
        return timestamp.tz_convert(index.tz)

