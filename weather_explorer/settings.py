from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized configuration.

    Loaded from:
    - environment variables (OPENWEATHER_API_KEY, PORT, ...)
    - .env file (if present)

    The API key stays on the server; the browser only ever talks to the proxy.
    """
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Required key (the app should fail fast if missing)
    openweather_api_key: str

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: List[str] = ["*"]

    # Upstream provider
    openweather_base_url: str = "https://api.openweathermap.org"
    request_timeout_s: float = 10.0

    log_level: str = "INFO"
    app_name: str = "Weather Explorer"


settings = Settings()
