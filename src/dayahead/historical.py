"""
Day-ahead prices from the hour-of-day average of recent history
"""
import logging
from typing import Optional, Tuple

import numpy as np
import pandas as pd
from pandas.tseries.frequencies import to_offset

from .const import DEFAULT_LOOKBACK_DAYS, HOURS_PER_DAY, PRICE_COLUMN
from .exceptions import DataUnavailableError, MissingColumnError
from .interfaces import DataProvider, DateLike, IPriceData, IPriceDataHelper, PriceSeries
from .price_data import PriceDataHelper

logger = logging.getLogger(__name__)


class DatasetPriceStrategy(IPriceData):
    """Base for strategies that read a cached historical dataset"""

    def __init__(
        self,
        data_provider: DataProvider,
        interpolate: bool = False,
        lookback_days: int = DEFAULT_LOOKBACK_DAYS,
        price_column: str = PRICE_COLUMN,
        helper: Optional[IPriceDataHelper] = None
    ):
        if lookback_days <= 0:
            raise ValueError("lookback_days must be positive")
        self.data_provider = data_provider
        self.interpolate = interpolate
        self.lookback_days = lookback_days
        self.price_column = price_column
        self.helper = helper or PriceDataHelper()
        self._dataset: Optional[pd.DataFrame] = None

    @property
    def dataset(self) -> pd.DataFrame:
        """Full historical dataset, fetched on first use"""
        if self._dataset is None:
            self._dataset = self._load_dataset()
        return self._dataset

    def refresh(self) -> None:
        """Drop the cached dataset so the next call fetches it again"""
        self._dataset = None

    def _load_dataset(self) -> pd.DataFrame:
        dataset = self.data_provider.get_data()
        if self.price_column not in dataset.columns:
            raise MissingColumnError(f"Column '{self.price_column}' not found in historical data")
        dataset = dataset.sort_index()

        if self.interpolate:
            # Fill gaps before any windowing so averages never see them
            dataset = self._regularize(dataset)
            missing = int(dataset[self.price_column].isna().sum())
            if missing:
                dataset[self.price_column] = dataset[self.price_column].interpolate(method='time')
                logger.info(f"Interpolated {missing} missing prices")

        logger.info(f"Fetched {len(dataset)} historical price rows")
        return dataset

    @staticmethod
    def _regularize(dataset: pd.DataFrame) -> pd.DataFrame:
        """Reindex onto the most common sampling step so missing rows become NaN"""
        dataset = dataset[~dataset.index.duplicated(keep='first')]
        if len(dataset) < 2:
            return dataset.copy()
        step = dataset.index.to_series().diff().dropna().mode().iloc[0]
        regular = dataset.asfreq(to_offset(step))
        added = len(regular) - len(dataset)
        if added:
            logger.info(f"Added {added} missing timestamps at {step} spacing")
        return regular

    def _lookback(self, date: DateLike,
                  lookback_days: Optional[int] = None) -> Tuple[pd.Timestamp, pd.DataFrame]:
        """Resolve the current day and the rows in its lookback window"""
        current = self.helper.resolve_current(date)
        prior = self.helper.resolve_prior(current, lookback_days or self.lookback_days)
        if self.dataset.empty:
            raise DataUnavailableError("Historical dataset is empty")
        window = self.helper.slice_window(current, prior, self.dataset)
        if window.empty:
            raise DataUnavailableError(f"No historical prices between {prior} and {current}")
        return current, window


class HistoricalAveragePriceStrategy(DatasetPriceStrategy):
    """
    Reference prices are the mean price per hour of day over the lookback
    window, realized prices are the recorded prices of the day itself, both
    on the same 24 hour slots.

    An hour without observations in the window takes the average of the
    previous hour. Leading empty hours take the first available hour.
    On the short daylight saving day the skipped clock hour repeats the
    previous hour, on the long day the repeated hour is averaged.
    """

    def get_prices(self, date: DateLike) -> Tuple[PriceSeries, PriceSeries]:
        current, window = self._lookback(date)
        average_prices = self.hourly_average(window)
        realized = self.hourly_realized(current)
        return average_prices, realized

    def hourly_average(self, window: pd.DataFrame) -> PriceSeries:
        """Mean price for each hour 0-23"""
        prices = window[self.price_column]
        hourly = prices.groupby(window.index.hour).mean().reindex(range(HOURS_PER_DAY))

        if hourly.isna().all():
            raise DataUnavailableError("No valid prices in the lookback window")
        if hourly.isna().any():
            empty_hours = hourly.index[hourly.isna()].tolist()
            logger.warning(f"No observations for hours {empty_hours}, carrying forward adjacent hour")
            hourly = hourly.ffill().bfill()

        return hourly.to_numpy(dtype=np.float64)

    def hourly_realized(self, current: pd.Timestamp) -> PriceSeries:
        """Recorded price for each hour 0-23 of the current day"""
        current_slice = self.helper.slice_current(current, self.dataset)
        if current_slice.empty:
            raise DataUnavailableError(f"No prices recorded for {current.date()}")

        prices = pd.Series(self.helper.extract_column(current_slice, self.price_column),
                           index=current_slice.index.hour)
        hourly = prices.groupby(level=0).mean().reindex(range(HOURS_PER_DAY))

        day_start = current_slice.index[0].normalize()
        clock = pd.date_range(day_start, day_start + pd.DateOffset(days=1), freq='h', inclusive='left')
        skipped = sorted(set(range(HOURS_PER_DAY)) - set(clock.hour))
        # Clock hours that do not exist on this day repeat the previous hour
        for hour in skipped:
            if hour > 0:
                hourly[hour] = hourly[hour - 1]

        if hourly.isna().any():
            missing_hours = hourly.index[hourly.isna()].tolist()
            raise DataUnavailableError(f"No prices recorded for {current.date()} hours {missing_hours}")
        return hourly.to_numpy(dtype=np.float64)
