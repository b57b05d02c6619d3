"""
Feature engineering for the price forecaster
"""
import numpy as np
import pandas as pd

from .const import PRICE_COLUMN
from .exceptions import MissingColumnError


class PriceFeatureEngineer:
    """Price plus cyclic calendar features per timestamp"""

    def __init__(self, price_column: str = PRICE_COLUMN):
        self.price_column = price_column

    @property
    def feature_columns(self):
        return [self.price_column, 'hour_sin', 'hour_cos', 'weekday_sin', 'weekday_cos', 'is_weekend']

    def transform(self, dataset: pd.DataFrame) -> pd.DataFrame:
        """
        Build the feature table

        Args:
            dataset: Historical prices with a DatetimeIndex

        Returns:
            DataFrame indexed like the dataset with one row per valid price
        """
        if self.price_column not in dataset.columns:
            raise MissingColumnError(f"Column '{self.price_column}' not found in dataset")

        dataset = dataset.sort_index()
        dataset = dataset[dataset[self.price_column].notna()]
        hour = dataset.index.hour.to_numpy()
        weekday = dataset.index.dayofweek.to_numpy()

        features = pd.DataFrame({
            self.price_column: dataset[self.price_column].to_numpy(dtype=np.float64),
            'hour_sin': np.sin(2 * np.pi * hour / 24),
            'hour_cos': np.cos(2 * np.pi * hour / 24),
            'weekday_sin': np.sin(2 * np.pi * weekday / 7),
            'weekday_cos': np.cos(2 * np.pi * weekday / 7),
            'is_weekend': (weekday >= 5).astype(np.float64),
        }, index=dataset.index)
        return features[self.feature_columns]
