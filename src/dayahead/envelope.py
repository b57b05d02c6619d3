"""
Sine shaped baseline price curve for a single day
"""
import logging
from typing import Optional

import numpy as np

from .interfaces import DateLike, IPriceEnvelopeGenerator, PriceSeries
from .profiles import EnvelopeParameters
from .rng import RandomState, make_rng

logger = logging.getLogger(__name__)


class SimulatedPriceEnvelopeGenerator(IPriceEnvelopeGenerator):
    """
    Generates a day-ahead like price shape without market data.

    Inside the peak window the price follows a half sine from min_price up to
    max_price and back. Outside it a lower background oscillation of half the
    amplitude is used, giving a night trough and a daytime shoulder. Every
    value gets a small uniform jitter.
    """

    def __init__(
        self,
        num_intervals: Optional[int] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        peak_start: Optional[int] = None,
        peak_end: Optional[int] = None,
        jitter: Optional[float] = None,
        params: Optional[EnvelopeParameters] = None,
        random_state: RandomState = None
    ):
        """
        Initialize the generator

        Args:
            num_intervals: Number of price intervals per day
            min_price: Lowest price of the envelope
            max_price: Highest price of the envelope
            peak_start: First interval of the peak window
            peak_end: Last interval of the peak window
            jitter: Jitter half-width as fraction of the price range
            params: Complete parameter set, individual arguments override it
            random_state: Seed or numpy Generator for the jitter
        """
        values = (params or EnvelopeParameters()).to_dict()
        overrides = {
            'num_intervals': num_intervals,
            'min_price': min_price,
            'max_price': max_price,
            'peak_start_index': peak_start,
            'peak_end_index': peak_end,
            'jitter': jitter,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        self.params = EnvelopeParameters.from_dict(values)
        self.rng = make_rng(random_state)

    def shape(self) -> PriceSeries:
        """Envelope values without jitter"""
        p = self.params
        index = np.arange(p.num_intervals)
        in_peak = (index >= p.peak_start_index) & (index <= p.peak_end_index)
        peak = np.sin(np.pi * (index - p.peak_start_index) / (p.peak_end_index - p.peak_start_index))
        background = 0.5 * np.abs(np.sin(np.pi * index / p.num_intervals))
        return p.min_price + p.price_range * np.where(in_peak, peak, background)

    def generate(self, date: DateLike) -> PriceSeries:
        """
        Generate the baseline prices for a day

        Args:
            date: Day to generate prices for

        Returns:
            Array of num_intervals prices
        """
        bound = self.params.jitter_bound
        prices = self.shape() + self.rng.uniform(-bound, bound, size=self.params.num_intervals)
        logger.debug(f"Generated envelope for {date}: min={prices.min():.2f}, max={prices.max():.2f}")
        return prices
