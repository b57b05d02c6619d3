"""Random source handling for the simulated generators"""
from typing import Optional, Union

import numpy as np

RandomState = Optional[Union[int, np.random.Generator]]


def make_rng(random_state: RandomState = None) -> np.random.Generator:
    """Return a Generator, seeding a new one unless one is passed in"""
    if isinstance(random_state, np.random.Generator):
        return random_state
    return np.random.default_rng(random_state)
