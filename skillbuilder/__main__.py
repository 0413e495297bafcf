"""Run the API server: ``python -m skillbuilder`` or ``skillbuilder``."""

import uvicorn

from skillbuilder.config import settings


def main() -> None:
    uvicorn.run(
        "skillbuilder.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=settings.env == "development",
    )


if __name__ == "__main__":
    main()
