"""
Server entry point.

Run with ``python -m src.main`` or the ``users-todo-api`` console script.
"""

import uvicorn

from src.api.main import app
from src.config.logging_config import configure_logging
from src.config.settings import get_settings


def main() -> None:
    """Configure logging and serve the application with uvicorn."""
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
