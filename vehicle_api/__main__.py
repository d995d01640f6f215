"""Run the API with uvicorn: ``python -m vehicle_api``."""

import uvicorn

from vehicle_api.config import settings


def main() -> None:
    uvicorn.run("vehicle_api.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
