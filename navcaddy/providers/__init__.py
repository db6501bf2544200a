from .cache import CacheEntry, ProviderCache
from .errors import ProviderError
from .weather import OpenMeteoWeatherSource

__all__ = ["CacheEntry", "ProviderCache", "ProviderError", "OpenMeteoWeatherSource"]
