from .calculator import ConditionsCalculator
from .models import ConditionsAdjustment, Location, WeatherData, WindComponent

__all__ = [
    "ConditionsAdjustment",
    "ConditionsCalculator",
    "Location",
    "WeatherData",
    "WindComponent",
]
