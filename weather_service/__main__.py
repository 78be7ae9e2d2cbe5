"""Run the service with uvicorn: ``python -m weather_service``."""

import uvicorn

from weather_service.config import get_settings
from weather_service.main import configure_logging, create_app


def main() -> None:
    settings = get_settings()
    configure_logging(settings)
    uvicorn.run(
        create_app(),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    main()
