import numpy as np
import pytest

from dayahead import EnvelopeParameters, SimulatedPriceEnvelopeGenerator


def test_peak_falls_inside_peak_window():
    generator = SimulatedPriceEnvelopeGenerator(
        num_intervals=24, min_price=10, max_price=100, peak_start=16, peak_end=20, random_state=7)
    prices = generator.generate("2024-01-01")

    assert len(prices) == 24
    assert 16 <= int(np.argmax(prices)) <= 20


def test_shape_without_jitter():
    generator = SimulatedPriceEnvelopeGenerator(
        min_price=10, max_price=100, peak_start=16, peak_end=20, jitter=0)
    prices = generator.generate("2024-01-01")

    assert prices[16] == pytest.approx(10)
    assert prices[18] == pytest.approx(100)
    assert prices[20] == pytest.approx(10, abs=1e-9)
    # Background oscillation reaches half the range at midday
    assert prices[12] == pytest.approx(55)
    assert prices[0] == pytest.approx(10)


def test_shape_is_stable_across_calls():
    generator = SimulatedPriceEnvelopeGenerator(peak_start=16, peak_end=20, jitter=0)
    first = generator.generate("2024-01-01")
    second = generator.generate("2024-01-01")

    np.testing.assert_array_equal(first, second)
    assert (np.diff(first[16:19]) > 0).all()
    assert (np.diff(first[18:21]) < 0).all()


@pytest.mark.parametrize("seed", range(5))
def test_jitter_is_bounded(seed):
    params = EnvelopeParameters(min_price=10, max_price=100, jitter=0.05)
    generator = SimulatedPriceEnvelopeGenerator(params=params, random_state=seed)
    deviation = generator.generate("2024-01-01") - generator.shape()
    assert np.abs(deviation).max() <= params.jitter_bound


def test_same_seed_same_prices():
    first = SimulatedPriceEnvelopeGenerator(random_state=11).generate("2024-01-01")
    second = SimulatedPriceEnvelopeGenerator(random_state=11).generate("2024-01-01")
    np.testing.assert_array_equal(first, second)


def test_arguments_override_params():
    params = EnvelopeParameters(num_intervals=48, peak_start_index=30, peak_end_index=40)
    generator = SimulatedPriceEnvelopeGenerator(max_price=200, params=params)
    assert generator.params.num_intervals == 48
    assert generator.params.max_price == 200
    assert len(generator.generate("2024-01-01")) == 48


@pytest.mark.parametrize("kwargs", [
    {"peak_start_index": 20, "peak_end_index": 16},
    {"peak_start_index": 16, "peak_end_index": 16},
    {"peak_start_index": -1, "peak_end_index": 4},
    {"peak_start_index": 16, "peak_end_index": 25},
    {"min_price": 100, "max_price": 10},
    {"num_intervals": 0},
    {"jitter": -0.1},
])
def test_invalid_parameters(kwargs):
    with pytest.raises(ValueError):
        EnvelopeParameters(**kwargs)


def test_parameters_round_trip_dict():
    params = EnvelopeParameters(min_price=5, max_price=50)
    assert EnvelopeParameters.from_dict(params.to_dict()) == params
