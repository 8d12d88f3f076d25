"""Main entrypoint for the grading API."""

import uvicorn

from .api import create_app
from .config import Settings

settings = Settings()

app = create_app(settings=settings)


def main():
    """Run the grading API."""
    uvicorn.run(
        "grading_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
