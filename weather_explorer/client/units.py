"""
Display-unit conversion.

Celsius and m/s are canonical (what the proxy returns). Everything here is
computed from those values at render time; snapshots are never rewritten.
"""

from __future__ import annotations

from enum import Enum

MPS_TO_MPH = 2.237


class TemperatureUnit(str, Enum):
    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"

    def toggle(self) -> "TemperatureUnit":
        if self is TemperatureUnit.CELSIUS:
            return TemperatureUnit.FAHRENHEIT
        return TemperatureUnit.CELSIUS

    @property
    def label(self) -> str:
        return self.value.capitalize()


def convert_temperature(celsius: float, unit: TemperatureUnit) -> float:
    if unit is TemperatureUnit.FAHRENHEIT:
        return round(celsius * 9 / 5 + 32, 1)
    return round(celsius, 1)


def convert_wind_speed(mps: float, unit: TemperatureUnit) -> float:
    """Wind follows the temperature toggle: mph with Fahrenheit, m/s otherwise."""
    if unit is TemperatureUnit.FAHRENHEIT:
        return round(mps * MPS_TO_MPH, 1)
    return round(mps, 1)


def temperature_symbol(unit: TemperatureUnit) -> str:
    return "°F" if unit is TemperatureUnit.FAHRENHEIT else "°C"


def wind_speed_label(unit: TemperatureUnit) -> str:
    return "mph" if unit is TemperatureUnit.FAHRENHEIT else "m/s"


def format_one_decimal(value: float) -> str:
    return f"{value:.1f}"
