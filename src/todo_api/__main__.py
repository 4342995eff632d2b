"""
Run the Todo API with uvicorn.

Usage:
    python -m todo_api

Host and port come from the HOST and PORT environment variables
(defaults 127.0.0.1 and 3000).
"""
import logging

import uvicorn

from .logging_config import setup_logging
from .settings import get_settings

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def main() -> None:
    """Serve todo_api.main:app until interrupted."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)
    logger.info("HTTP API listening on http://%s:%d", settings.host, settings.port)
    uvicorn.run(
        "todo_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
