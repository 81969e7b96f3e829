"""Run the proxy + dashboard: python -m weather_explorer"""

import logging

import uvicorn

from .logging_config import setup_logging
from .settings import settings

logger = logging.getLogger("weather_explorer")


def main() -> None:
    setup_logging(settings.log_level)
    logger.info("Server is running on http://localhost:%d", settings.port)
    uvicorn.run("weather_explorer.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
