"""
Dashboard client: geolocation, proxy calls, view state and display model.
"""

from .explorer import WeatherExplorer
from .geolocation import FALLBACK_LOCATION, FixedLocationProvider, DeniedLocationProvider
from .proxy import ProxyClient, ProxyError
from .state import SlotName, Tab, ViewState
from .units import TemperatureUnit

__all__ = [
    "WeatherExplorer",
    "FALLBACK_LOCATION",
    "FixedLocationProvider",
    "DeniedLocationProvider",
    "ProxyClient",
    "ProxyError",
    "SlotName",
    "Tab",
    "ViewState",
    "TemperatureUnit",
]
