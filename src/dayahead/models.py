"""
Trainable model backed by scikit-learn
"""
import logging
from typing import Any, Optional

import joblib
import numpy as np
from sklearn.linear_model import Ridge

logger = logging.getLogger(__name__)


class SklearnPriceModel:
    """Wraps a multi-output scikit-learn regressor"""

    def __init__(self, estimator: Optional[Any] = None):
        """
        Args:
            estimator: Any regressor supporting 2-D targets, defaults to Ridge
        """
        self.estimator = estimator if estimator is not None else Ridge(alpha=1.0)

    def fit(self, features: np.ndarray, targets: np.ndarray) -> 'SklearnPriceModel':
        self.estimator.fit(features, targets)
        return self

    def predict(self, features: np.ndarray) -> np.ndarray:
        return np.asarray(self.estimator.predict(features), dtype=np.float64)

    def serialize(self, path: str) -> None:
        """Write the fitted estimator to path"""
        with open(path, 'wb') as f:
            joblib.dump(self.estimator, f)
        logger.debug(f"Serialized {type(self.estimator).__name__} to {path}")

    def deserialize(self, path: str) -> 'SklearnPriceModel':
        """Replace the estimator with the one stored at path"""
        with open(path, 'rb') as f:
            self.estimator = joblib.load(f)
        logger.debug(f"Deserialized {type(self.estimator).__name__} from {path}")
        return self
