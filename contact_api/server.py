"""Long-running server entry point."""

import uvicorn

from contact_api.config import settings


def main() -> None:
    """Run the API under uvicorn on the configured host and port."""
    uvicorn.run(
        "contact_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_config=None,  # keep the JSON logging configured by the app
    )


if __name__ == "__main__":
    main()
