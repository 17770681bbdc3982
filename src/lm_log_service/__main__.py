"""Entry point for running the service directly."""

import uvicorn

from lm_log_service.config import settings
from lm_log_service.main import app


def main() -> None:
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
