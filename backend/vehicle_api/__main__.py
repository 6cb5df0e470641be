"""Run the API with uvicorn: python -m vehicle_api"""

import uvicorn

from vehicle_api.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "vehicle_api.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    main()
