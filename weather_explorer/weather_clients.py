"""
Upstream weather client.

API logic lives here rather than in the FastAPI endpoints:
- easier to test in isolation (inject an httpx transport)
- main.py stays about routing and response shaping
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


class WeatherError(RuntimeError):
    """Raised for user-facing weather lookup failures."""
    pass


def location_params(city: Optional[str]) -> Dict[str, str]:
    """
    Turn the proxy's `city` query value into OpenWeather location params.

    1) Coordinates: "51.5,-0.12"
       - anything with a comma; split once on the first comma into lat/lon.
         The numbers are passed through as typed, OpenWeather validates them.

    2) Place name: "London"
       - everything else goes to OpenWeather's by-name lookup.
    """
    if city is None or not city.strip():
        raise WeatherError("Missing 'city' query parameter.")

    if "," in city:
        lat, lon = city.split(",", 1)
        return {"lat": lat.strip(), "lon": lon.strip()}

    return {"q": city.strip()}


class OpenWeatherClient:
    """
    OpenWeatherMap wrapper.

    Endpoints used:
    - Current weather:
        /data/2.5/weather?q=...|lat=...&lon=...&units=metric&appid=KEY
    - 5-day forecast (3-hour increments):
        /data/2.5/forecast?q=...|lat=...&lon=...&units=metric&appid=KEY

    Units are always metric; conversion to imperial happens at display time.
    """

    def __init__(
        self,
        api_key: str,
        timeout_s: float = 10.0,
        base: str = "https://api.openweathermap.org",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.timeout_s = timeout_s
        self.base = base.rstrip("/")
        self.transport = transport

    async def current_weather(self, city: Optional[str]) -> Dict[str, Any]:
        """Current conditions for a place name or "lat,lon" pair."""
        return await self._get("/data/2.5/weather", city, "Current weather")

    async def forecast(self, city: Optional[str]) -> Dict[str, Any]:
        """5-day / 3-hour forecast for a place name or "lat,lon" pair."""
        return await self._get("/data/2.5/forecast", city, "Forecast")

    async def _get(self, path: str, city: Optional[str], label: str) -> Dict[str, Any]:
        params = location_params(city)
        params["units"] = "metric"
        params["appid"] = self.api_key

        try:
            async with httpx.AsyncClient(timeout=self.timeout_s, transport=self.transport) as client:
                r = await client.get(f"{self.base}{path}", params=params)
        except httpx.HTTPError as e:
            # str(e) can be empty for timeouts; the class name still says what happened
            raise WeatherError(f"{label} request failed: {str(e) or type(e).__name__}") from e

        if r.status_code != 200:
            raise WeatherError(f"{label} failed ({r.status_code}): {_upstream_message(r)}")

        try:
            return r.json()
        except ValueError as e:
            raise WeatherError(f"{label} returned invalid JSON.") from e


def _upstream_message(r: httpx.Response) -> str:
    """OpenWeather errors look like {"cod": "404", "message": "city not found"}."""
    try:
        body = r.json()
    except ValueError:
        return r.text
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return r.text
