"""Exceptions raised by the day-ahead price generators"""


class PriceDataException(Exception):
    """Base exception for price generation"""


class MissingColumnError(PriceDataException, KeyError):
    """Requested column is not present in a dataset slice"""

    def __str__(self):
        return Exception.__str__(self)


class DataUnavailableError(PriceDataException):
    """No usable rows in the requested window"""


class UntrainedModelError(PriceDataException):
    """Forecast requested before a model was trained or loaded"""


class ShapeMismatchError(PriceDataException, ValueError):
    """Sequences that must be aligned have different lengths"""


class PersistenceError(PriceDataException):
    """Saving or loading a model artifact failed"""


class ConfigurationError(PriceDataException, ValueError):
    """Invalid pricing configuration"""
