"""
Synthetic day-ahead prices from a sine envelope plus noise
"""
import logging
from typing import Optional, Tuple

from .envelope import SimulatedPriceEnvelopeGenerator
from .interfaces import (
    DateLike,
    IPriceData,
    IPriceEnvelopeGenerator,
    IPriceNoiseAdder,
    PriceSeries,
)
from .noise import PriceNoiseAdder
from .profiles import EnvelopeParameters, NoiseParameters
from .rng import RandomState, make_rng

logger = logging.getLogger(__name__)


class SimulatedPriceStrategy(IPriceData):
    """Reference prices from the envelope, realized prices with noise on top"""

    def __init__(
        self,
        envelope_params: Optional[EnvelopeParameters] = None,
        noise_params: Optional[NoiseParameters] = None,
        random_state: RandomState = None,
        envelope: Optional[IPriceEnvelopeGenerator] = None,
        noise_adder: Optional[IPriceNoiseAdder] = None
    ):
        """
        Initialize the strategy

        Args:
            envelope_params: Shape of the daily envelope
            noise_params: Noise and spike settings
            random_state: Seed or numpy Generator shared by envelope and noise
            envelope: Custom envelope generator, replaces envelope_params
            noise_adder: Custom noise adder, replaces noise_params
        """
        rng = make_rng(random_state)
        self.envelope = envelope or SimulatedPriceEnvelopeGenerator(
            params=envelope_params, random_state=rng)
        self.noise_adder = noise_adder or PriceNoiseAdder(
            params=noise_params, random_state=rng)

    def get_prices(self, date: DateLike) -> Tuple[PriceSeries, PriceSeries]:
        reference = self.envelope.generate(date)
        realized = self.noise_adder.add(reference)
        logger.debug(f"Simulated {len(reference)} prices for {date}")
        return reference, realized
