"""Entry: serve the juice tracker API (`juicetracker` console script or `python -m juicetracker.main`)."""
import logging

import uvicorn

from juicetracker.config import API_HOST, API_PORT, API_RELOAD, LOG_LEVEL, ensure_data_dir

logger = logging.getLogger(__name__)


def run() -> None:
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s: %(message)s")
    ensure_data_dir()
    logger.info("Juice tracker API on %s:%s (reload=%s)", API_HOST, API_PORT, API_RELOAD)
    uvicorn.run(
        "juicetracker.api.app:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_RELOAD,
        log_level=LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
