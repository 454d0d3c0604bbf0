"""Application entry point."""

import uvicorn

from barrel_resolver.config import get_settings


def run() -> None:
    """Run the API using uvicorn."""
    settings = get_settings()

    uvicorn.run(
        "barrel_resolver.api.app:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        access_log=settings.debug,
    )


# For direct execution
if __name__ == "__main__":
    run()
