"""Weather Explorer: OpenWeatherMap proxy plus the weather dashboard client."""

__version__ = "1.0.0"
