"""
DocPress entrypoint - runs uvicorn server.
"""

import uvicorn

from docpress.app import build_app
from docpress.config import get_settings
from docpress.shared.logging import get_logger, setup_logging

logger = get_logger(__name__)


def main() -> None:
    """Run the DocPress server on the configured host and port."""
    settings = get_settings()
    setup_logging(settings.log_level)

    app = build_app(settings)
    base_url = f"http://{settings.host}:{settings.port}"
    logger.info(f"Serving DocPress on {base_url} (docs at {base_url}/docs)")

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
