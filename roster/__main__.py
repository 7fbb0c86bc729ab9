"""Run the roster API server: ``python -m roster``."""

import uvicorn

from roster.app.core.config import settings


def main() -> None:
    uvicorn.run(
        "roster.app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        log_config=None,
    )


if __name__ == "__main__":
    main()
