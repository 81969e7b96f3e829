"""
Display model.

build_view() turns a ViewState into plain dicts/records the template can print.
All unit conversion happens here, from the canonical metric values, every
time the view is built.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..schemas import Condition, CurrentWeather, Forecast, ForecastEntry, MainReadings, Wind
from .forecast import daily_midday, format_day_label, format_long_date
from .state import Slot, Tab, ViewState
from .units import (
    TemperatureUnit,
    convert_temperature,
    convert_wind_speed,
    format_one_decimal,
    temperature_symbol,
    wind_speed_label,
)

CONDITION_LABELS = {
    "Clear": "Clear Sky",
    "Clouds": "Cloudy",
    "Rain": "Rainy",
    "Snow": "Snowy",
    "Fog": "Foggy",
    "Wind": "Windy",
}
DEFAULT_CONDITION_LABEL = "Clouds"

TAB_LABELS = {
    Tab.CURRENT: "My Location",
    Tab.SELECTED: "Selected Location",
    Tab.MAP: "Map",
}

ICON_URL = "https://openweathermap.org/img/wn/{icon}@2x.png"


@dataclass(frozen=True)
class WeatherCard:
    title: str
    date_label: str
    temp: str
    symbol: str
    band: str
    condition_label: str
    description: str
    icon_url: Optional[str]
    humidity: Optional[str]
    wind: str
    wind_unit: str
    pressure: Optional[str] = None
    feels_like: Optional[str] = None
    sunrise: Optional[str] = None
    sunset: Optional[str] = None


def condition_label(condition: Condition) -> str:
    return CONDITION_LABELS.get(condition.main, DEFAULT_CONDITION_LABEL)


def temperature_band(celsius: float) -> str:
    """Colour band for the card background, always judged on Celsius."""
    if celsius > 30:
        return "hot"
    if celsius > 20:
        return "warm"
    if celsius > 10:
        return "mild"
    return "cold"


def format_clock(timestamp: int, tz_offset: int = 0) -> str:
    """Unix seconds -> "06:42 AM" in the location's local time."""
    return datetime.fromtimestamp(timestamp + tz_offset, tz=timezone.utc).strftime("%I:%M %p")


def location_title(name: str, country: Optional[str]) -> str:
    return f"{name}, {country}" if country else name


def share_message(weather: CurrentWeather) -> str:
    """Text for the social share buttons. Always Celsius."""
    return (
        f"Weather Update: {weather.name} is currently "
        f"{format_one_decimal(weather.main.temp)}°C with {weather.condition.description}."
    )


def _card(
    title: str,
    date_label: str,
    main: MainReadings,
    wind: Wind,
    condition: Condition,
    unit: TemperatureUnit,
    sunrise: Optional[str] = None,
    sunset: Optional[str] = None,
) -> WeatherCard:
    symbol = temperature_symbol(unit)
    return WeatherCard(
        title=title,
        date_label=date_label,
        temp=format_one_decimal(convert_temperature(main.temp, unit)),
        symbol=symbol,
        band=temperature_band(main.temp),
        condition_label=condition_label(condition),
        description=condition.description,
        icon_url=ICON_URL.format(icon=condition.icon) if condition.icon else None,
        humidity=f"{main.humidity:g}%" if main.humidity is not None else None,
        wind=format_one_decimal(convert_wind_speed(wind.speed, unit)),
        wind_unit=wind_speed_label(unit),
        pressure=f"{main.pressure:g} hPa" if main.pressure is not None else None,
        feels_like=(
            f"{format_one_decimal(convert_temperature(main.feels_like, unit))}{symbol}"
            if main.feels_like is not None
            else None
        ),
        sunrise=sunrise,
        sunset=sunset,
    )


def snapshot_card(weather: CurrentWeather, unit: TemperatureUnit) -> WeatherCard:
    sys = weather.sys
    tz_offset = weather.timezone or 0
    sunrise = sunset = None
    # sunrise/sunset are shown only as a pair
    if sys is not None and sys.sunrise is not None and sys.sunset is not None:
        sunrise = format_clock(sys.sunrise, tz_offset)
        sunset = format_clock(sys.sunset, tz_offset)
    return _card(
        title=location_title(weather.name, sys.country if sys else None),
        date_label="Today",
        main=weather.main,
        wind=weather.wind,
        condition=weather.condition,
        unit=unit,
        sunrise=sunrise,
        sunset=sunset,
    )


def forecast_card(entry: ForecastEntry, forecast: Forecast, unit: TemperatureUnit) -> WeatherCard:
    city = forecast.city
    title = location_title(city.name, city.country) if city else ""
    return _card(
        title=title,
        date_label=format_long_date(entry.dt_txt),
        main=entry.main,
        wind=entry.wind,
        condition=entry.condition,
        unit=unit,
    )


def forecast_cards(forecast: Forecast, unit: TemperatureUnit) -> List[Dict[str, Any]]:
    """One card per day (the midday entry), oldest first."""
    return [
        {"day_label": format_day_label(entry.dt_txt), "card": forecast_card(entry, forecast, unit)}
        for entry in daily_midday(forecast.entries)
    ]


def slot_content(slot: Slot, heading: str, unit: TemperatureUnit) -> Optional[Dict[str, Any]]:
    if slot.weather is None:
        return None
    return {
        "heading": heading,
        "card": snapshot_card(slot.weather, unit),
        "forecast": forecast_cards(slot.forecast, unit) if slot.forecast is not None else [],
        "share_message": share_message(slot.weather),
    }


def map_markers(state: ViewState) -> List[Dict[str, Any]]:
    markers: List[Dict[str, Any]] = []
    if state.own_location is not None:
        lat, lon = state.own_location
        markers.append({"lat": lat, "lon": lon, "popup": ["Your current location"]})

    selected = state.selected
    if selected.location is not None:
        lat, lon = selected.location
        popup = ["Selected location"]
        weather = selected.weather
        if weather is not None:
            popup.append(location_title(weather.name, weather.sys.country if weather.sys else None))
            # the popup is always metric
            popup.append(f"{weather.main.temp}°C, {weather.condition.description}")
        markers.append({"lat": lat, "lon": lon, "popup": popup})
    return markers


def build_view(state: ViewState) -> Dict[str, Any]:
    """Everything the dashboard template needs for one render."""
    unit = state.unit
    tabs = [
        {
            "id": tab.value,
            "label": label,
            "active": tab is state.active_tab,
            "disabled": tab is Tab.SELECTED and not state.selected.has_data,
        }
        for tab, label in TAB_LABELS.items()
    ]

    messages = [m for m in (state.advisory, state.own.error, state.selected.error) if m]

    view: Dict[str, Any] = {
        "active_tab": state.active_tab.value,
        "tabs": tabs,
        "unit": unit.value,
        "unit_toggle_label": f"Switch to {unit.toggle().label}",
        "messages": messages,
        "loading": state.loading,
        "content": None,
        "map": None,
    }

    # loading suppresses content
    if state.loading:
        return view

    if state.active_tab is Tab.CURRENT:
        view["content"] = slot_content(state.own, "Current Location Weather", unit)
    elif state.active_tab is Tab.SELECTED:
        view["content"] = slot_content(state.selected, "Selected Location Weather", unit)
    elif state.own_location is not None:
        view["map"] = {
            "center": {"lat": state.own_location[0], "lon": state.own_location[1]},
            "markers": map_markers(state),
        }
    return view


def build_dashboard(state: ViewState) -> Dict[str, Any]:
    """
    Every tab in both units, built from the one fetched state.

    The page switches between panes locally, so changing tab or unit never
    goes back to the server.
    """
    view = build_view(state)
    panes = []
    for unit in TemperatureUnit:
        for tab in Tab:
            pane = build_view(replace(state, unit=unit, active_tab=tab))
            panes.append({
                "tab": tab.value,
                "unit": unit.value,
                "visible": tab is state.active_tab and unit is state.unit,
                "content": pane["content"],
                "map": pane["map"],
            })

    view["panes"] = panes
    view["unit_labels"] = {unit.value: f"Switch to {unit.toggle().label}" for unit in TemperatureUnit}
    return view
