import numpy as np
import pytest

from dayahead import (
    DataFrameDataProvider,
    DataUnavailableError,
    HistoricalAveragePriceStrategy,
    IPriceData,
    MissingColumnError,
    PriceDataHelper,
)

from conftest import CountingProvider, make_hourly_frame

HOURLY_CONSTANTS = 10.0 + np.arange(24)


def test_constant_hourly_prices_average_exactly(hourly_provider):
    strategy = HistoricalAveragePriceStrategy(hourly_provider)
    average_prices, realized = strategy.get_prices("2024-01-10")

    assert isinstance(strategy, IPriceData)
    np.testing.assert_array_equal(average_prices, HOURLY_CONSTANTS)
    np.testing.assert_array_equal(realized, HOURLY_CONSTANTS)


def test_average_uses_only_lookback_window():
    # Prices rise by 100 per day, so the average reveals which days were used
    frame = make_hourly_frame(days=14, price_fn=lambda ts: 100.0 * ts.day + ts.hour)
    strategy = HistoricalAveragePriceStrategy(DataFrameDataProvider(frame), lookback_days=3)
    average_prices, realized = strategy.get_prices("2024-01-10")

    # Days 7, 8 and 9 average to day 8
    np.testing.assert_allclose(average_prices, 800.0 + np.arange(24))
    np.testing.assert_allclose(realized, 1000.0 + np.arange(24))


def test_dataset_is_fetched_once(hourly_frame):
    provider = CountingProvider(hourly_frame)
    strategy = HistoricalAveragePriceStrategy(provider)
    assert provider.calls == 0

    strategy.get_prices("2024-01-10")
    strategy.get_prices("2024-01-11")
    assert provider.calls == 1

    strategy.refresh()
    strategy.get_prices("2024-01-12")
    assert provider.calls == 2


def test_interpolation_fills_gaps_before_averaging(hourly_frame):
    hourly_frame.loc[hourly_frame.index.hour == 5, "price"] = np.nan

    interpolated = HistoricalAveragePriceStrategy(DataFrameDataProvider(hourly_frame), interpolate=True)
    average_prices, realized = interpolated.get_prices("2024-01-10")
    np.testing.assert_allclose(average_prices, HOURLY_CONSTANTS)
    np.testing.assert_allclose(realized, HOURLY_CONSTANTS)


def test_interpolation_does_not_modify_provider_data(hourly_frame):
    hourly_frame.loc[hourly_frame.index.hour == 5, "price"] = np.nan
    provider = DataFrameDataProvider(hourly_frame)
    HistoricalAveragePriceStrategy(provider, interpolate=True).get_prices("2024-01-10")
    assert provider.get_data()["price"].isna().sum() == 14


def test_empty_hour_carries_previous_hour_forward(hourly_frame):
    history = hourly_frame.index < "2024-01-10"
    hourly_frame.loc[history & (hourly_frame.index.hour == 5), "price"] = np.nan
    strategy = HistoricalAveragePriceStrategy(DataFrameDataProvider(hourly_frame))
    average_prices, _ = strategy.get_prices("2024-01-10")

    assert average_prices[5] == average_prices[4] == 14.0
    assert not np.isnan(average_prices).any()


def test_leading_empty_hours_take_first_available_hour(hourly_frame):
    frame = hourly_frame[(hourly_frame.index.hour >= 2) | (hourly_frame.index >= "2024-01-10")]
    strategy = HistoricalAveragePriceStrategy(DataFrameDataProvider(frame))
    average_prices, realized = strategy.get_prices("2024-01-10")

    assert average_prices[0] == average_prices[1] == 12.0
    assert len(average_prices) == len(realized) == 24
    np.testing.assert_array_equal(realized, HOURLY_CONSTANTS)


def test_partial_missing_values_are_skipped(hourly_frame):
    hourly_frame.loc["2024-01-05 03:00", "price"] = np.nan
    strategy = HistoricalAveragePriceStrategy(DataFrameDataProvider(hourly_frame))
    average_prices, _ = strategy.get_prices("2024-01-10")
    np.testing.assert_array_equal(average_prices, HOURLY_CONSTANTS)


def test_no_history_in_window(hourly_provider):
    strategy = HistoricalAveragePriceStrategy(hourly_provider)
    with pytest.raises(DataUnavailableError):
        strategy.get_prices("2025-01-01")


def test_window_without_valid_prices(hourly_frame):
    hourly_frame["price"] = np.nan
    strategy = HistoricalAveragePriceStrategy(DataFrameDataProvider(hourly_frame))
    with pytest.raises(DataUnavailableError):
        strategy.get_prices("2024-01-10")


def test_missing_current_day(hourly_provider):
    strategy = HistoricalAveragePriceStrategy(hourly_provider)
    with pytest.raises(DataUnavailableError):
        strategy.get_prices("2024-01-15")


def test_empty_dataset():
    empty = make_hourly_frame().iloc[0:0]
    strategy = HistoricalAveragePriceStrategy(DataFrameDataProvider(empty))
    with pytest.raises(DataUnavailableError):
        strategy.get_prices("2024-01-10")


def test_missing_price_column(hourly_provider):
    strategy = HistoricalAveragePriceStrategy(hourly_provider, price_column="eur_mwh")
    with pytest.raises(MissingColumnError):
        strategy.get_prices("2024-01-10")


def test_custom_price_column():
    frame = make_hourly_frame().rename(columns={"price": "eur_mwh"})
    strategy = HistoricalAveragePriceStrategy(DataFrameDataProvider(frame), price_column="eur_mwh")
    average_prices, _ = strategy.get_prices("2024-01-10")
    np.testing.assert_array_equal(average_prices, HOURLY_CONSTANTS)


def test_timezone_aware_history():
    frame = make_hourly_frame().tz_localize("Europe/Amsterdam")
    helper = PriceDataHelper("Europe/Amsterdam")
    strategy = HistoricalAveragePriceStrategy(DataFrameDataProvider(frame), helper=helper)
    average_prices, realized = strategy.get_prices("2024-01-10")
    np.testing.assert_array_equal(average_prices, HOURLY_CONSTANTS)
    assert len(realized) == 24


def test_rejects_non_positive_lookback(hourly_provider):
    with pytest.raises(ValueError):
        HistoricalAveragePriceStrategy(hourly_provider, lookback_days=0)


def test_partially_recorded_current_day(hourly_frame):
    frame = hourly_frame[~((hourly_frame.index >= "2024-01-10 13:00") & (hourly_frame.index < "2024-01-11"))]
    strategy = HistoricalAveragePriceStrategy(DataFrameDataProvider(frame))
    with pytest.raises(DataUnavailableError):
        strategy.get_prices("2024-01-10")


def test_unrecorded_hour_on_current_day(hourly_frame):
    hourly_frame.loc["2024-01-10 07:00", "price"] = np.nan
    strategy = HistoricalAveragePriceStrategy(DataFrameDataProvider(hourly_frame))
    with pytest.raises(DataUnavailableError):
        strategy.get_prices("2024-01-10")


def test_interpolation_restores_missing_rows(hourly_frame):
    gap = (hourly_frame.index >= "2024-01-05 03:00") & (hourly_frame.index <= "2024-01-05 06:00")
    frame = hourly_frame[~gap]

    strategy = HistoricalAveragePriceStrategy(DataFrameDataProvider(frame), interpolate=True)
    average_prices, realized = strategy.get_prices("2024-01-05")
    assert len(strategy.dataset) == len(hourly_frame)
    np.testing.assert_allclose(average_prices, HOURLY_CONSTANTS)
    np.testing.assert_allclose(realized, HOURLY_CONSTANTS)

    raw = HistoricalAveragePriceStrategy(DataFrameDataProvider(frame))
    with pytest.raises(DataUnavailableError):
        raw.get_prices("2024-01-05")


def test_short_daylight_saving_day():
    frame = make_hourly_frame(start="2024-03-20", days=14, tz="Europe/Amsterdam")
    helper = PriceDataHelper("Europe/Amsterdam")
    strategy = HistoricalAveragePriceStrategy(DataFrameDataProvider(frame), helper=helper)
    average_prices, realized = strategy.get_prices("2024-03-31")

    assert len(average_prices) == len(realized) == 24
    np.testing.assert_array_equal(average_prices, HOURLY_CONSTANTS)
    assert realized[2] == realized[1] == 11.0
    assert realized[3] == 13.0


def test_long_daylight_saving_day():
    frame = make_hourly_frame(start="2024-10-20", days=10, tz="Europe/Amsterdam")
    helper = PriceDataHelper("Europe/Amsterdam")
    strategy = HistoricalAveragePriceStrategy(DataFrameDataProvider(frame), helper=helper)
    average_prices, realized = strategy.get_prices("2024-10-27")

    assert len(average_prices) == len(realized) == 24
    np.testing.assert_array_equal(average_prices, HOURLY_CONSTANTS)
    np.testing.assert_array_equal(realized, HOURLY_CONSTANTS)
