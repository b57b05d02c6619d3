"""
Parameter profiles for the simulated price generator
"""
from dataclasses import asdict, dataclass
from typing import Dict

from .const import (
    DEFAULT_JITTER,
    DEFAULT_MAX_PRICE,
    DEFAULT_MIN_PRICE,
    DEFAULT_NOISE_LEVEL,
    DEFAULT_NUM_INTERVALS,
    DEFAULT_PEAK_END_INDEX,
    DEFAULT_PEAK_START_INDEX,
    DEFAULT_SPIKE_MULTIPLIER,
    DEFAULT_SPIKE_PROBABILITY,
)


@dataclass
class EnvelopeParameters:
    """Shape of the daily sine envelope"""
    num_intervals: int = DEFAULT_NUM_INTERVALS
    min_price: float = DEFAULT_MIN_PRICE
    max_price: float = DEFAULT_MAX_PRICE
    peak_start_index: int = DEFAULT_PEAK_START_INDEX
    peak_end_index: int = DEFAULT_PEAK_END_INDEX
    jitter: float = DEFAULT_JITTER  # Fraction of the price range

    def __post_init__(self):
        if self.num_intervals <= 0:
            raise ValueError("num_intervals must be positive")
        if self.min_price > self.max_price:
            raise ValueError("min_price must not exceed max_price")
        if not 0 <= self.peak_start_index < self.peak_end_index <= self.num_intervals:
            raise ValueError(
                "Peak window must satisfy 0 <= peak_start_index < peak_end_index <= num_intervals, "
                f"got {self.peak_start_index}..{self.peak_end_index} for {self.num_intervals} intervals")
        if self.jitter < 0:
            raise ValueError("jitter must not be negative")

    @property
    def price_range(self) -> float:
        return self.max_price - self.min_price

    @property
    def jitter_bound(self) -> float:
        """Absolute half-width of the uniform jitter"""
        return self.jitter * self.price_range

    def to_dict(self) -> Dict:
        """Convert parameters to dictionary"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> 'EnvelopeParameters':
        """Create parameters from dictionary"""
        return cls(**data)


@dataclass
class NoiseParameters:
    """Random perturbation applied to a price curve"""
    noise_level: float = DEFAULT_NOISE_LEVEL  # Fraction of the price
    spike_probability: float = DEFAULT_SPIKE_PROBABILITY
    spike_multiplier: float = DEFAULT_SPIKE_MULTIPLIER

    def __post_init__(self):
        if self.noise_level < 0:
            raise ValueError("noise_level must not be negative")
        if not 0.0 <= self.spike_probability <= 1.0:
            raise ValueError("spike_probability must be between 0 and 1")
        if self.spike_multiplier <= 1.0:
            raise ValueError("spike_multiplier must be greater than 1")

    def to_dict(self) -> Dict:
        """Convert parameters to dictionary"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> 'NoiseParameters':
        """Create parameters from dictionary"""
        return cls(**data)
