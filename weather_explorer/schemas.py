"""
Pydantic schemas.

The proxy relays OpenWeather payloads untouched. These records are how the
client side reads them: every field that OpenWeather may omit is Optional, so
rendering code checks presence explicitly instead of poking into raw dicts.
Unknown fields are kept (extra="allow") so nothing is lost on the way through.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Payload(BaseModel):
    """Base for upstream shapes: tolerant of fields we do not model."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class Coord(Payload):
    lat: float
    lon: float


class Condition(Payload):
    """One entry of OpenWeather's `weather` array."""
    id: Optional[int] = None
    main: str = ""
    description: str = ""
    icon: str = ""


class MainReadings(Payload):
    """Temperatures are Celsius (the proxy always asks for metric)."""
    temp: float
    feels_like: Optional[float] = None
    temp_min: Optional[float] = None
    temp_max: Optional[float] = None
    pressure: Optional[float] = None
    humidity: Optional[float] = None


class Wind(Payload):
    """Speed is m/s."""
    speed: float = 0.0
    deg: Optional[float] = None


class SysInfo(Payload):
    country: Optional[str] = None
    sunrise: Optional[int] = None
    sunset: Optional[int] = None


class CurrentWeather(Payload):
    """Current-conditions snapshot from /data/2.5/weather."""
    name: str = ""
    coord: Optional[Coord] = None
    main: MainReadings
    weather: List[Condition] = Field(default_factory=list)
    wind: Wind = Field(default_factory=Wind)
    sys: Optional[SysInfo] = None
    dt: Optional[int] = None
    timezone: Optional[int] = None

    @property
    def condition(self) -> Condition:
        return self.weather[0] if self.weather else Condition()


class ForecastEntry(Payload):
    """One 3-hour step of the 5-day forecast."""
    dt: int
    dt_txt: str
    main: MainReadings
    weather: List[Condition] = Field(default_factory=list)
    wind: Wind = Field(default_factory=Wind)
    pop: Optional[float] = None

    @property
    def condition(self) -> Condition:
        return self.weather[0] if self.weather else Condition()


class ForecastCity(Payload):
    name: str = ""
    country: Optional[str] = None
    coord: Optional[Coord] = None
    timezone: Optional[int] = None
    sunrise: Optional[int] = None
    sunset: Optional[int] = None


class Forecast(Payload):
    """Forecast list from /data/2.5/forecast (about 40 entries, 8 per day)."""
    entries: List[ForecastEntry] = Field(default_factory=list, alias="list")
    city: Optional[ForecastCity] = None
    cnt: Optional[int] = None


class ErrorBody(BaseModel):
    """Body the proxy returns with status 500."""
    error: str
