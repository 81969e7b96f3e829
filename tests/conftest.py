import os

# Settings() fails fast without a key; give the test app a dummy one.
os.environ.setdefault("OPENWEATHER_API_KEY", "test-key")

from datetime import datetime, timedelta

import httpx
import pytest
from fastapi.testclient import TestClient

from weather_explorer.main import app, get_weather_client
from weather_explorer.weather_clients import OpenWeatherClient

FORECAST_START = datetime(2025, 1, 6, 0, 0, 0)


def current_payload(name="London", lat=51.5085, lon=-0.1257, temp=12.3, country="GB"):
    return {
        "coord": {"lon": lon, "lat": lat},
        "weather": [{"id": 500, "main": "Rain", "description": "light rain", "icon": "10d"}],
        "main": {"temp": temp, "feels_like": 11.8, "temp_min": 11.0, "temp_max": 13.4, "pressure": 1012, "humidity": 81},
        "wind": {"speed": 4.1, "deg": 240},
        "dt": 1736164800,
        "sys": {"country": country, "sunrise": 1736150520, "sunset": 1736179380},
        "timezone": 0,
        "name": name,
        "cod": 200,
    }


def forecast_payload(name="London", days=5, start=FORECAST_START):
    entries = []
    for i in range(days * 8):
        ts = start + timedelta(hours=3 * i)
        entries.append({
            "dt": int((ts - datetime(1970, 1, 1)).total_seconds()),
            "dt_txt": ts.strftime("%Y-%m-%d %H:%M:%S"),
            "main": {"temp": 5.0 + i * 0.5, "humidity": 70, "pressure": 1010},
            "weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}],
            "wind": {"speed": 3.0},
            "pop": 0.1,
        })
    return {
        "cod": "200",
        "cnt": len(entries),
        "list": entries,
        "city": {"name": name, "country": "GB", "coord": {"lat": 51.5085, "lon": -0.1257}, "timezone": 0},
    }


class FakeOpenWeather:
    """
    Stand-in for api.openweathermap.org behind an httpx.MockTransport.

    - q=London            -> London payloads
    - q=Atlantis          -> 404 city not found
    - lat=fail            -> 500 from upstream
    - lat=down            -> connection error
    - lat=66.6            -> current works, forecast 502
    - any other lat/lon   -> payloads keyed by that coordinate
    """

    def __init__(self):
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        params = request.url.params
        forecast = request.url.path.endswith("/forecast")

        if params.get("q") == "Atlantis":
            return httpx.Response(404, json={"cod": "404", "message": "city not found"})
        if params.get("lat") == "fail":
            return httpx.Response(500, json={"cod": 500, "message": "Internal error"})
        if params.get("lat") == "down":
            raise httpx.ConnectError("All connection attempts failed", request=request)
        if params.get("lat") == "66.6" and forecast:
            return httpx.Response(502, json={"cod": 502, "message": "Bad gateway"})

        if "q" in params:
            name = params["q"]
            return httpx.Response(200, json=forecast_payload(name) if forecast else current_payload(name))

        lat, lon = float(params["lat"]), float(params["lon"])
        name = f"Point {lat},{lon}"
        return httpx.Response(200, json=forecast_payload(name) if forecast else current_payload(name, lat, lon))


@pytest.fixture
def upstream():
    return FakeOpenWeather()


@pytest.fixture
def weather_client(upstream):
    return OpenWeatherClient("test-key", base="https://owm.test", transport=httpx.MockTransport(upstream))


@pytest.fixture
def client(weather_client):
    app.dependency_overrides[get_weather_client] = lambda: weather_client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def proxy(weather_client):
    """ProxyClient wired to the app in-process, upstream faked."""
    from weather_explorer.client import ProxyClient

    app.dependency_overrides[get_weather_client] = lambda: weather_client
    try:
        yield ProxyClient("http://proxy.test", transport=httpx.ASGITransport(app=app))
    finally:
        app.dependency_overrides.clear()
