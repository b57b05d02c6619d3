import numpy as np
import pandas as pd
import pytest

from dayahead import DataFrameDataProvider, SyntheticHistoryProvider


def make_hourly_frame(start="2024-01-01", days=14, price_fn=None, tz=None):
    """Hourly price table, default price is 10 + hour of day"""
    start = pd.Timestamp(start)
    end = start + pd.DateOffset(days=days)
    index = pd.date_range(start=start, end=end, freq="h", tz=tz, inclusive="left")
    if price_fn is None:
        prices = 10.0 + index.hour.to_numpy()
    else:
        prices = np.array([price_fn(ts) for ts in index], dtype=float)
    frame = pd.DataFrame({"price": prices}, index=index)
    frame.index.name = "timestamp"
    return frame


class CountingProvider:
    """Data provider that records how often it is asked for data"""

    def __init__(self, frame):
        self.frame = frame
        self.calls = 0

    def get_data(self, start=None, end=None):
        self.calls += 1
        return self.frame.copy()


@pytest.fixture
def hourly_frame():
    return make_hourly_frame()


@pytest.fixture
def hourly_provider(hourly_frame):
    return DataFrameDataProvider(hourly_frame)


@pytest.fixture
def synthetic_provider():
    return SyntheticHistoryProvider(days=21, end="2024-02-01", seed=1)
