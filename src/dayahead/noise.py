"""
Random perturbation and price spikes
"""
import logging
from typing import Optional, Sequence

import numpy as np

from .interfaces import IPriceNoiseAdder, PriceSeries
from .profiles import NoiseParameters
from .rng import RandomState, make_rng

logger = logging.getLogger(__name__)


class PriceNoiseAdder(IPriceNoiseAdder):
    """Applies bounded multiplicative noise and rare spikes to prices"""

    def __init__(
        self,
        noise_level: Optional[float] = None,
        spike_probability: Optional[float] = None,
        spike_multiplier: Optional[float] = None,
        params: Optional[NoiseParameters] = None,
        random_state: RandomState = None
    ):
        values = (params or NoiseParameters()).to_dict()
        overrides = {
            'noise_level': noise_level,
            'spike_probability': spike_probability,
            'spike_multiplier': spike_multiplier,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        self.params = NoiseParameters.from_dict(values)
        self.rng = make_rng(random_state)

    def add(self, prices: Sequence[float]) -> PriceSeries:
        """
        Perturb every price independently

        Each price is scaled by a uniform factor in [1 - noise_level, 1 + noise_level]
        and, with spike_probability, by spike_multiplier as well. Spikes are
        allowed to exceed the envelope bounds.

        Args:
            prices: Prices to perturb

        Returns:
            New array with the same length
        """
        prices = np.asarray(prices, dtype=np.float64)
        if prices.ndim != 1:
            raise ValueError(f"Expected a 1-D price sequence, got shape {prices.shape}")

        level = self.params.noise_level
        perturbation = self.rng.uniform(-level, level, size=prices.size)
        spikes = self.rng.random(prices.size) < self.params.spike_probability
        if spikes.any():
            logger.debug(f"Adding {int(spikes.sum())} price spikes")

        return prices * (1.0 + perturbation) * np.where(spikes, self.params.spike_multiplier, 1.0)
