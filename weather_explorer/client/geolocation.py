"""
Geolocation acquisition.

The dashboard asks for the user's position once. It never fails hard: if the
position is unavailable we fall back to New York and show an advisory.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple

logger = logging.getLogger(__name__)

Location = Tuple[float, float]

FALLBACK_LOCATION: Location = (40.7128, -74.0060)

DENIED_ADVISORY = "Location access denied. Using default location."
UNSUPPORTED_ADVISORY = "Geolocation is not supported by your browser. Using default location."


class GeolocationUnavailable(RuntimeError):
    """The platform has no location capability."""


class GeolocationDenied(RuntimeError):
    """The user (or platform) refused to share a position."""


# A provider returns (lat, lon) or raises one of the errors above.
LocationProvider = Callable[[], Location]


class FixedLocationProvider:
    """Provider for a position that is already known (e.g. sent by the browser)."""

    def __init__(self, lat: float, lon: float):
        self.location = (lat, lon)

    def __call__(self) -> Location:
        return self.location


class DeniedLocationProvider:
    """Provider standing in for a browser that refused the permission prompt."""

    def __call__(self) -> Location:
        raise GeolocationDenied("User denied Geolocation")


def acquire_location(provider: Optional[LocationProvider]) -> Tuple[Location, Optional[str]]:
    """
    Ask the provider once.

    Returns (location, advisory). The advisory is None when the real position
    was obtained.
    """
    if provider is None:
        logger.info("No geolocation capability, using fallback %s", FALLBACK_LOCATION)
        return FALLBACK_LOCATION, UNSUPPORTED_ADVISORY

    try:
        lat, lon = provider()
    except GeolocationDenied as e:
        logger.info("Geolocation denied (%s), using fallback %s", e, FALLBACK_LOCATION)
        return FALLBACK_LOCATION, DENIED_ADVISORY
    except GeolocationUnavailable as e:
        logger.info("Geolocation unavailable (%s), using fallback %s", e, FALLBACK_LOCATION)
        return FALLBACK_LOCATION, UNSUPPORTED_ADVISORY
    except Exception as e:
        logger.warning("Geolocation provider failed (%r), using fallback %s", e, FALLBACK_LOCATION)
        return FALLBACK_LOCATION, UNSUPPORTED_ADVISORY

    return (float(lat), float(lon)), None
