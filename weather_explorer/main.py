"""
FastAPI entrypoint.

This file focuses on:
- the two proxy routes (/api/weather, /api/forecast)
- the dashboard page, which runs the client against those routes in-process
- wiring together settings + logging + clients + templates
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Dict, Optional

import httpx
from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from .client import ProxyClient, Tab, TemperatureUnit, ViewState, WeatherExplorer
from .client.geolocation import DeniedLocationProvider, FixedLocationProvider, LocationProvider
from .logging_config import setup_logging
from .schemas import ErrorBody
from .settings import settings
from .weather_clients import OpenWeatherClient, WeatherError

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent

app = FastAPI(title=settings.app_name)

# Browsers call the proxy from any origin.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.mount("/static", StaticFiles(directory=BASE_DIR / "static"), name="static")
templates = Jinja2Templates(directory=BASE_DIR / "templates")

# API client (constructed once).
owm = OpenWeatherClient(
    settings.openweather_api_key,
    timeout_s=settings.request_timeout_s,
    base=settings.openweather_base_url,
)


def get_weather_client() -> OpenWeatherClient:
    """Dependency so tests can swap in a client with a mock transport."""
    return owm


@app.exception_handler(WeatherError)
async def weather_error_handler(request: Request, exc: WeatherError):
    """Every proxy failure is a 500 with {"error": message}."""
    logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content=ErrorBody(error=str(exc)).model_dump())


# -------------------------
# Proxy APIs
# -------------------------

@app.get("/api/weather")
async def api_weather(
    city: Optional[str] = Query(None, description='Place name or "lat,lon"'),
    client: OpenWeatherClient = Depends(get_weather_client),
):
    """Current conditions, relayed verbatim from OpenWeather."""
    return JSONResponse(await client.current_weather(city))


@app.get("/api/forecast")
async def api_forecast(
    city: Optional[str] = Query(None, description='Place name or "lat,lon"'),
    client: OpenWeatherClient = Depends(get_weather_client),
):
    """5-day / 3-hour forecast, relayed verbatim from OpenWeather."""
    return JSONResponse(await client.forecast(city))


@app.get("/health")
async def health():
    return {"status": "ok"}


# -------------------------
# Dashboard
# -------------------------

def location_provider(
    lat: Optional[float], lon: Optional[float], denied: bool, nogeo: bool = False
) -> Optional[LocationProvider]:
    """
    Map what the browser sent to a geolocation provider:
    - denied=true      -> the user refused the prompt
    - lat and lon      -> the browser's position
    - nogeo=true       -> the browser has no geolocation support
    """
    if denied:
        return DeniedLocationProvider()
    if lat is not None and lon is not None and not nogeo:
        return FixedLocationProvider(lat, lon)
    return None


def position_params(lat: Optional[float], lon: Optional[float], denied: bool, nogeo: bool) -> Dict[str, str]:
    """What the browser reported about its position, re-sent with a map pick."""
    if denied:
        return {"denied": "true"}
    if nogeo:
        return {"nogeo": "true"}
    if lat is not None and lon is not None:
        return {"lat": str(lat), "lon": str(lon)}
    return {}


@app.get("/", response_class=HTMLResponse)
async def dashboard(
    request: Request,
    lat: Optional[float] = None,
    lon: Optional[float] = None,
    denied: bool = False,
    nogeo: bool = False,
    sel_lat: Optional[float] = None,
    sel_lon: Optional[float] = None,
    unit: TemperatureUnit = TemperatureUnit.CELSIUS,
    tab: Optional[Tab] = None,
):
    """
    Server-rendered dashboard.
    - first visit: a bootstrap page asks the browser for its position once,
      then reloads with lat/lon, denied=true or nogeo=true
    - "my location" from lat/lon (or the fallback)
    - "selected location" from sel_lat/sel_lon (a map click)
    Both go through this app's own /api routes, concurrently. All tabs and both
    units are rendered at once; switching between them stays in the browser.
    """
    position = position_params(lat, lon, denied, nogeo)
    if not position:
        return templates.TemplateResponse(
            request,
            "locating.html",
            {"app_name": settings.app_name, "fallback_url": request.url.include_query_params(nogeo="true")},
        )

    proxy = ProxyClient(
        "http://weather-explorer",
        timeout_s=settings.request_timeout_s,
        transport=httpx.ASGITransport(app=request.app),
    )
    explorer = WeatherExplorer(
        proxy, geolocation=location_provider(lat, lon, denied, nogeo), state=ViewState(unit=unit)
    )

    flows = [explorer.start()]
    if sel_lat is not None and sel_lon is not None:
        flows.append(explorer.select_location(sel_lat, sel_lon))
    await asyncio.gather(*flows)

    if tab is not None:
        explorer.switch_tab(tab)

    return templates.TemplateResponse(
        request,
        "index.html",
        {"app_name": settings.app_name, "view": explorer.render_dashboard(), "position": position},
    )
