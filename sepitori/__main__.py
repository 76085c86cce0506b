"""Run the API with ``python -m sepitori``."""

import uvicorn

from sepitori.core.config import settings


def main() -> None:
    uvicorn.run(
        "sepitori.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
