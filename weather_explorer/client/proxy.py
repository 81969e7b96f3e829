"""
Client for the Weather Explorer proxy (/api/weather, /api/forecast).
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional, Tuple

import httpx
from pydantic import ValidationError

from ..schemas import CurrentWeather, Forecast


class ProxyError(RuntimeError):
    """A proxy call failed (transport error, non-200, or unreadable payload)."""
    pass


class ProxyClient:
    """
    Talks to the proxy over HTTP.

    `transport` lets callers route requests in-process (httpx.ASGITransport)
    or to a mock (httpx.MockTransport).
    """

    def __init__(
        self,
        base_url: str,
        timeout_s: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self.transport = transport

    async def fetch_current(self, city: str) -> CurrentWeather:
        data = await self._get("/api/weather", city)
        return _parse(CurrentWeather, data)

    async def fetch_forecast(self, city: str) -> Forecast:
        data = await self._get("/api/forecast", city)
        return _parse(Forecast, data)

    async def fetch_pair(self, lat: float, lon: float) -> Tuple[CurrentWeather, Forecast]:
        """
        Current conditions and forecast for a coordinate, fetched concurrently.

        Both must succeed; if either fails the whole pair fails, so callers
        never see half an update.
        """
        city = f"{lat},{lon}"
        current, forecast = await asyncio.gather(self.fetch_current(city), self.fetch_forecast(city))
        return current, forecast

    async def _get(self, path: str, city: str) -> Dict[str, Any]:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout_s, transport=self.transport
            ) as client:
                r = await client.get(path, params={"city": city})
        except httpx.HTTPError as e:
            raise ProxyError(str(e) or type(e).__name__) from e

        if r.status_code != 200:
            raise ProxyError(_error_message(r))

        try:
            return r.json()
        except ValueError as e:
            raise ProxyError(f"Invalid JSON from {path}") from e


def _parse(model, data: Dict[str, Any]):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ProxyError(f"Unexpected {model.__name__} payload: {e.error_count()} invalid field(s)") from e


def _error_message(r: httpx.Response) -> str:
    """The proxy reports failures as {"error": "..."}."""
    try:
        body = r.json()
    except ValueError:
        return f"Request failed with status code {r.status_code}"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"Request failed with status code {r.status_code}"
